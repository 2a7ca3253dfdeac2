from datetime import datetime
from sqlalchemy import Boolean, String, DateTime, func, Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column
from mentorlink.common.base import Base
from mentorlink.common.user_role import UserRole


class UsersEntity(Base):
    __tablename__ = "users"

    user_id: Mapped[int] = mapped_column(primary_key=True)

    name: Mapped[str] = mapped_column(String)
    primary_email: Mapped[str] = mapped_column(String, unique=True, index=True)
    password_hash: Mapped[str] = mapped_column(String)

    role: Mapped[UserRole] = mapped_column(
        SAEnum(
            UserRole,
            name="user_role",
            values_callable=lambda obj: [e.value for e in obj],
        )
    )

    is_active: Mapped[bool] = mapped_column(Boolean, default=True)

    created_timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )
