"""
Account model (customer sites).
"""

from typing import Optional

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from repbook.models.base import Base, TimestampMixin


class Account(Base, TimestampMixin):
    """A customer site the rep sells into."""

    __tablename__ = "accounts"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        index=True,
    )
    account_number: Mapped[Optional[str]] = mapped_column(
        String(100),
        nullable=True,
        index=True,
    )
    region: Mapped[Optional[str]] = mapped_column(
        String(100),
        nullable=True,
    )
    account_type: Mapped[Optional[str]] = mapped_column(
        String(100),
        nullable=True,
    )
    city: Mapped[Optional[str]] = mapped_column(
        String(100),
        nullable=True,
    )
    state: Mapped[Optional[str]] = mapped_column(
        String(50),
        nullable=True,
    )

    def __repr__(self) -> str:
        return f"<Account(id={self.id}, name='{self.name}')>"
