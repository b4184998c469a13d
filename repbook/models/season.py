"""
Season (tracker period) model.
"""

from datetime import date
from typing import Optional

from sqlalchemy import Boolean, Date, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from repbook.models.base import Base, TimestampMixin


class Season(Base, TimestampMixin):
    """
    A selling season for one brand, e.g. "US 2025-2026".

    Archived seasons stay queryable for reports but are hidden from the
    active tracker tabs.
    """

    __tablename__ = "seasons"

    id: Mapped[int] = mapped_column(primary_key=True)
    company_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("companies.id"),
        nullable=True,
        index=True,
    )
    label: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
    )
    start_date: Mapped[Optional[date]] = mapped_column(
        Date,
        nullable=True,
    )
    end_date: Mapped[Optional[date]] = mapped_column(
        Date,
        nullable=True,
    )
    archived: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<Season(id={self.id}, label='{self.label}', archived={self.archived})>"
