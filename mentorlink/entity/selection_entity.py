from datetime import datetime
from sqlalchemy import (
    Integer,
    ForeignKey,
    Enum,
    CheckConstraint,
    UniqueConstraint,
    DateTime,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column
from mentorlink.common.base import Base
from mentorlink.common.mentorship_enums import SelectionStatus


class SelectionEntity(Base):
    __tablename__ = "selections"

    selection_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    mentee_id: Mapped[int] = mapped_column(
        ForeignKey("mentee_profiles.mentee_id", ondelete="CASCADE"), index=True
    )
    mentor_id: Mapped[int] = mapped_column(
        ForeignKey("mentor_profiles.mentor_id", ondelete="CASCADE"), index=True
    )
    rank: Mapped[int] = mapped_column(Integer)
    status: Mapped[SelectionStatus] = mapped_column(
        Enum(
            SelectionStatus,
            name="selection_status_enum",
            values_callable=lambda obj: [e.value for e in obj],
        ),
        default=SelectionStatus.PENDING,
    )
    updated_timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    __table_args__ = (
        CheckConstraint("rank BETWEEN 1 AND 5", name="check_rank_range"),
        UniqueConstraint("mentee_id", "rank", name="uq_selection_mentee_rank"),
    )
