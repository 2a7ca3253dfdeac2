from pydantic import Field
from mentorlink.dto.base_dto import BaseDto
from mentorlink.dto.base_request_dto import BaseRequestDto
from mentorlink.common.user_role import UserRole


class LoginRequestDto(BaseRequestDto):
    email: str = Field(min_length=1)
    password: str = Field(min_length=1)


class TokenDto(BaseDto):
    access_token: str
    token_type: str = "bearer"
    role: UserRole


class CurrentUserDto(BaseDto):
    id: int
    name: str
    primary_email: str
    role: UserRole
    profile_id: int | None = None
