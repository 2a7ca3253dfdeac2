from typing import Annotated, Literal, Union
from pydantic import Field, RootModel, field_validator
from mentorlink.dto.base_request_dto import BaseRequestDto
from mentorlink.common.constants import (
    DEFAULT_REGISTRATION_CAPACITY,
    MIN_PASSWORD_LENGTH,
)

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


def _split_comma_separated(value):
    """Accept either a list or a comma separated string and return a clean list."""
    if value is None:
        return []
    if isinstance(value, str):
        return [item.strip() for item in value.split(",") if item.strip()]
    return value


class BaseRegistrationDto(BaseRequestDto):
    email: str = Field(pattern=EMAIL_PATTERN)
    password: str = Field(min_length=MIN_PASSWORD_LENGTH)
    name: str = Field(min_length=1)

    @field_validator("email")
    @classmethod
    def lower_email(cls, value: str) -> str:
        return value.lower()


class MentorRegistrationDto(BaseRegistrationDto):
    role: Literal["mentor"]
    organization: str | None = None
    job_title: str | None = None
    graduation_year: int | None = Field(default=None, ge=1900, le=2100)
    linkedin: str | None = None
    expectations: str | None = None
    expertise: list[str] = Field(default_factory=list)
    capacity: int = Field(default=DEFAULT_REGISTRATION_CAPACITY, ge=1)

    split_expertise = field_validator("expertise", mode="before")(
        _split_comma_separated
    )


class MenteeRegistrationDto(BaseRegistrationDto):
    role: Literal["mentee"]
    batch: str | None = None
    interests: list[str] = Field(default_factory=list)
    bio: str | None = None
    portfolio: str | None = None
    cv_link: str | None = None
    github: str | None = None
    linkedin: str | None = None
    motivation: str | None = None
    goal: str | None = None

    split_interests = field_validator("interests", mode="before")(
        _split_comma_separated
    )


class RegistrationRequestDto(
    RootModel[
        Annotated[
            Union[MentorRegistrationDto, MenteeRegistrationDto],
            Field(discriminator="role"),
        ]
    ]
):
    """Registration payload; the `role` key selects the profile variant."""
