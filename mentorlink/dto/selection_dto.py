from pydantic import field_validator
from mentorlink.dto.base_dto import BaseDto
from mentorlink.dto.base_request_dto import BaseRequestDto
from mentorlink.common.mentorship_enums import SelectionStatus, DecisionAction


class PreferenceRequestDto(BaseRequestDto):
    mentor_id: int
    # Range is checked by the matching service so it can answer INVALID_RANK.
    rank: int


class DecisionRequestDto(BaseRequestDto):
    action: DecisionAction

    @field_validator("action", mode="before")
    @classmethod
    def normalize_action(cls, value):
        if isinstance(value, str):
            return value.strip().lower()
        return value


class SelectionDto(BaseDto):
    id: int
    mentee_id: int
    mentor_id: int
    rank: int
    status: SelectionStatus
