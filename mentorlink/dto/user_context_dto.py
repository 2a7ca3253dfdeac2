from dataclasses import dataclass, field
from mentorlink.common.user_role import UserRole


@dataclass
class UserContextDto:
    """Request-scoped identity decoded from the bearer token."""

    sub: str
    primary_email: str
    roles: list[UserRole] = field(default_factory=list)

    @property
    def user_id(self) -> int:
        return int(self.sub)

    def has_role(self, role: UserRole) -> bool:
        return role in self.roles
