from collections import defaultdict
from sqlalchemy.ext.asyncio import AsyncSession
from mentorlink.common.mentorship_enums import SelectionStatus
from mentorlink.entity.selection_entity import SelectionEntity


class CascadeResolver:
    """
    Decides which pending requests a mentor may act on.

    A mentee is only "in play" at their highest-priority rank that has not been
    rejected yet: a request at rank N becomes actionable once every selection of
    the same mentee at a rank below N (higher priority) is REJECTED. Rank 1 is
    always actionable. A higher-priority selection that is still PENDING or
    ACCEPTED withholds every lower-ranked request of that mentee.
    """

    def __init__(self, logger, selections_repository):
        """
        Args:
            logger: The logger instance for logging messages.
            selections_repository (SelectionsRepository): Access to selection rows.
        """
        self.logger = logger
        self.selections_repository = selections_repository

    @staticmethod
    def is_actionable(
        selection: SelectionEntity, mentee_selections: list[SelectionEntity]
    ) -> bool:
        """
        Check the cascade rule for one selection.

        Args:
            selection (SelectionEntity): The candidate request.
            mentee_selections (list[SelectionEntity]): Every selection of the same mentee.

        Returns:
            bool: True if the selection is PENDING and all higher-priority
                  selections of the mentee are REJECTED.
        """
        if selection.status != SelectionStatus.PENDING:
            return False

        return all(
            other.status == SelectionStatus.REJECTED
            for other in mentee_selections
            if other.rank < selection.rank
        )

    def filter_actionable(
        self,
        pending_selections: list[SelectionEntity],
        mentee_selections: list[SelectionEntity],
    ) -> list[SelectionEntity]:
        """
        Keep the pending selections that pass the cascade rule, ordered by rank.

        Args:
            pending_selections (list[SelectionEntity]): Pending requests of one mentor.
            mentee_selections (list[SelectionEntity]): All selections of the mentees
                referenced by `pending_selections`.

        Returns:
            list[SelectionEntity]: Actionable selections by ascending rank.
        """
        by_mentee: dict[int, list[SelectionEntity]] = defaultdict(list)
        for s in mentee_selections:
            by_mentee[s.mentee_id].append(s)

        actionable = [
            s for s in pending_selections if self.is_actionable(s, by_mentee[s.mentee_id])
        ]
        return sorted(actionable, key=lambda s: (s.rank, s.selection_id))

    async def list_actionable_requests(
        self, session: AsyncSession, mentor_id: int
    ) -> list[SelectionEntity]:
        """
        Load the mentor's pending requests and apply the cascade rule.

        Args:
            session (AsyncSession): Active database async session.
            mentor_id (int): The mentor whose queue is requested.

        Returns:
            list[SelectionEntity]: Actionable selections by ascending rank.
        """
        pending = await self.selections_repository.get_by_mentor_id_and_status(
            session=session, mentor_id=mentor_id, status=SelectionStatus.PENDING
        )
        if not pending:
            return []

        mentee_ids = sorted({s.mentee_id for s in pending})
        mentee_selections = await self.selections_repository.get_by_mentee_ids(
            session=session, mentee_ids=mentee_ids
        )

        actionable = self.filter_actionable(pending, mentee_selections)
        self.logger.debug(
            "[CascadeResolver] mentor_id=%s pending=%s actionable=%s",
            mentor_id,
            len(pending),
            len(actionable),
        )
        return actionable
