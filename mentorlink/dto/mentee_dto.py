from pydantic import Field
from mentorlink.dto.base_dto import BaseDto
from mentorlink.common.mentorship_enums import SelectionStatus


class MenteeSummaryDto(BaseDto):
    id: int
    name: str
    email: str | None = None
    batch: str | None = None
    interests: list[str] = Field(default_factory=list)
    bio: str | None = None
    motivation: str | None = None
    goal: str | None = None
    portfolio: str | None = None
    cv_link: str | None = None
    github: str | None = None
    linkedin: str | None = None


class MentorRequestDto(BaseDto):
    selection_id: int
    rank: int
    status: SelectionStatus
    mentee: MenteeSummaryDto
