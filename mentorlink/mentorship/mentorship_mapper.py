from mentorlink.dto.mentor_dto import (
    MentorSummaryDto,
    MentorDirectoryDto,
    MyPreferenceDto,
)
from mentorlink.dto.mentee_dto import MenteeSummaryDto, MentorRequestDto
from mentorlink.dto.selection_dto import SelectionDto
from mentorlink.common.mentorship_enums import Availability
from mentorlink.entity.mentor_profile_entity import MentorProfileEntity
from mentorlink.entity.mentee_profile_entity import MenteeProfileEntity
from mentorlink.entity.selection_entity import SelectionEntity
from mentorlink.entity.users_entity import UsersEntity


class MentorshipMapper:
    """
    Mapper for converting mentorship entities to DTOs.
    """

    def map_to_selection_dto(self, selection: SelectionEntity) -> SelectionDto:
        return SelectionDto(
            id=selection.selection_id,
            mentee_id=selection.mentee_id,
            mentor_id=selection.mentor_id,
            rank=selection.rank,
            status=selection.status,
        )

    def map_to_mentor_summary_dto(
        self, mentor: MentorProfileEntity, user: UsersEntity
    ) -> MentorSummaryDto:
        return MentorSummaryDto(
            id=mentor.mentor_id,
            user_id=user.user_id,
            name=user.name,
            organization=mentor.organization,
            job_title=mentor.job_title,
            graduation_year=mentor.graduation_year,
            linkedin=mentor.linkedin_link,
            expertise=mentor.expertise or [],
            bio=mentor.bio,
        )

    def map_to_mentor_directory_dto(
        self,
        mentor: MentorProfileEntity,
        user: UsersEntity,
        availability: Availability,
        available_slots: int,
    ) -> MentorDirectoryDto:
        """Maps a mentor and its computed availability to a directory entry."""
        summary = self.map_to_mentor_summary_dto(mentor, user)
        return MentorDirectoryDto(
            **summary.model_dump(),
            availability=availability,
            available_slots=available_slots,
            capacity=mentor.capacity,
        )

    def map_to_my_preference_dtos(
        self,
        selections: list[SelectionEntity],
        mentors_by_id: dict[int, tuple[MentorProfileEntity, UsersEntity]],
    ) -> list[MyPreferenceDto]:
        """
        Maps a mentee's selections to dashboard entries, keeping rank order.

        Selections whose mentor can no longer be loaded are skipped.
        """
        return [
            MyPreferenceDto(
                selection_id=s.selection_id,
                rank=s.rank,
                status=s.status,
                mentor=self.map_to_mentor_summary_dto(*mentors_by_id[s.mentor_id]),
            )
            for s in selections
            if s.mentor_id in mentors_by_id
        ]

    def map_to_mentee_summary_dto(
        self,
        mentee: MenteeProfileEntity,
        user: UsersEntity,
        include_email: bool = False,
    ) -> MenteeSummaryDto:
        return MenteeSummaryDto(
            id=mentee.mentee_id,
            name=user.name,
            email=user.primary_email if include_email else None,
            batch=mentee.batch,
            interests=mentee.interests or [],
            bio=mentee.bio,
            motivation=mentee.motivation,
            goal=mentee.goal,
            portfolio=mentee.portfolio,
            cv_link=mentee.cv_link,
            github=mentee.github,
            linkedin=mentee.linkedin_link,
        )

    def map_to_mentor_request_dtos(
        self,
        selections: list[SelectionEntity],
        mentees_by_id: dict[int, tuple[MenteeProfileEntity, UsersEntity]],
    ) -> list[MentorRequestDto]:
        """Maps actionable selections to request cards; contact email is withheld."""
        return [
            MentorRequestDto(
                selection_id=s.selection_id,
                rank=s.rank,
                status=s.status,
                mentee=self.map_to_mentee_summary_dto(*mentees_by_id[s.mentee_id]),
            )
            for s in selections
            if s.mentee_id in mentees_by_id
        ]

    def map_to_matched_mentee_dtos(
        self,
        selections: list[SelectionEntity],
        mentees_by_id: dict[int, tuple[MenteeProfileEntity, UsersEntity]],
    ) -> list[MenteeSummaryDto]:
        """Maps accepted selections to mentee summaries including contact email."""
        return [
            self.map_to_mentee_summary_dto(
                *mentees_by_id[s.mentee_id], include_email=True
            )
            for s in selections
            if s.mentee_id in mentees_by_id
        ]
