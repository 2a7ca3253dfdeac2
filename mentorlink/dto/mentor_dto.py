from pydantic import Field
from mentorlink.dto.base_dto import BaseDto
from mentorlink.common.mentorship_enums import Availability, SelectionStatus


class MentorSummaryDto(BaseDto):
    id: int
    user_id: int
    name: str
    organization: str | None = None
    job_title: str | None = None
    graduation_year: int | None = None
    linkedin: str | None = None
    expertise: list[str] = Field(default_factory=list)
    bio: str | None = None


class MentorDirectoryDto(MentorSummaryDto):
    availability: Availability
    available_slots: int
    capacity: int


class MyPreferenceDto(BaseDto):
    selection_id: int
    rank: int
    status: SelectionStatus
    mentor: MentorSummaryDto
