from sqlalchemy import Integer, String, Text, ForeignKey, JSON
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column
from mentorlink.common.base import Base


class MenteeProfileEntity(Base):
    __tablename__ = "mentee_profiles"

    mentee_id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True
    )
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.user_id", ondelete="CASCADE"), index=True, unique=True
    )
    batch: Mapped[str | None] = mapped_column(String)
    interests: Mapped[list[str]] = mapped_column(
        JSON().with_variant(JSONB, "postgresql"), default=list
    )
    bio: Mapped[str | None] = mapped_column(Text)
    portfolio: Mapped[str | None] = mapped_column(String)
    cv_link: Mapped[str | None] = mapped_column(String)
    github: Mapped[str | None] = mapped_column(String)
    linkedin_link: Mapped[str | None] = mapped_column(String)
    motivation: Mapped[str | None] = mapped_column(Text)
    goal: Mapped[str | None] = mapped_column(Text)
