from datetime import datetime

from sqlalchemy import DateTime, Float, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from tradebook.db.database import Base
from tradebook.models.enums import Role


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)

    username: Mapped[str] = mapped_column(String(150), unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)

    email: Mapped[str | None] = mapped_column(String(255), unique=True, nullable=True)
    first_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    last_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    profile_image_url: Mapped[str | None] = mapped_column(Text, nullable=True)

    # super_admin / admin / user
    role: Mapped[str] = mapped_column(String(20), nullable=False, default=Role.USER.value)

    initial_capital: Mapped[float | None] = mapped_column(Float, nullable=True, default=10000)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
    )

    @property
    def is_admin(self) -> bool:
        return self.role in (Role.ADMIN.value, Role.SUPER_ADMIN.value)

    @property
    def is_super_admin(self) -> bool:
        return self.role == Role.SUPER_ADMIN.value

    @property
    def display_name(self) -> str:
        if self.first_name:
            return self.first_name
        if self.email:
            return self.email.split("@")[0]
        return self.username or "?"
