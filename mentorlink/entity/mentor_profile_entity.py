from sqlalchemy import Integer, String, Text, ForeignKey, JSON, CheckConstraint
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column
from mentorlink.common.base import Base


class MentorProfileEntity(Base):
    __tablename__ = "mentor_profiles"

    mentor_id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True
    )
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.user_id", ondelete="CASCADE"), index=True, unique=True
    )
    organization: Mapped[str | None] = mapped_column(String)
    job_title: Mapped[str | None] = mapped_column(String)
    graduation_year: Mapped[int | None] = mapped_column(Integer)
    linkedin_link: Mapped[str | None] = mapped_column(String)
    expectations: Mapped[str | None] = mapped_column(Text)
    expertise: Mapped[list[str]] = mapped_column(
        JSON().with_variant(JSONB, "postgresql"), default=list
    )
    bio: Mapped[str | None] = mapped_column(Text)

    # 0 marks rows created before capacity became required; migrated on first accept.
    capacity: Mapped[int] = mapped_column(Integer, default=0, server_default="0")

    __table_args__ = (
        CheckConstraint("capacity >= 0", name="check_capacity_non_negative"),
    )
