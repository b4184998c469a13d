"""
Order model for recorded sales.
"""

from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING, Optional

from sqlalchemy import Date, ForeignKey, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from repbook.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from repbook.models.account import Account
    from repbook.models.company import Company
    from repbook.models.season import Season


class Order(Base, TimestampMixin):
    """
    One sale to an account for a brand in a season.

    Edits to total, commission_override, company or stage must go through
    repbook.services.orders so the linked Commission row is kept in step.
    """

    __tablename__ = "orders"

    id: Mapped[int] = mapped_column(primary_key=True)
    account_id: Mapped[int] = mapped_column(
        ForeignKey("accounts.id"),
        nullable=False,
        index=True,
    )
    company_id: Mapped[int] = mapped_column(
        ForeignKey("companies.id"),
        nullable=False,
        index=True,
    )
    season_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("seasons.id"),
        nullable=True,
        index=True,
    )
    order_type: Mapped[Optional[str]] = mapped_column(
        String(50),
        nullable=True,
        comment="Rental / Retail",
    )
    order_number: Mapped[Optional[str]] = mapped_column(
        String(100),
        nullable=True,
    )
    close_date: Mapped[Optional[date]] = mapped_column(
        Date,
        nullable=True,
    )
    stage: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        index=True,
    )
    total: Mapped[Decimal] = mapped_column(
        Numeric(12, 2),
        nullable=False,
    )
    commission_override: Mapped[Optional[Decimal]] = mapped_column(
        Numeric(5, 2),
        nullable=True,
        comment="Per-order percentage; wins over the company default",
    )
    notes: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
    )

    # Relationships
    account: Mapped["Account"] = relationship("Account")
    company: Mapped["Company"] = relationship("Company")
    season: Mapped[Optional["Season"]] = relationship("Season")

    def __repr__(self) -> str:
        return f"<Order(id={self.id}, total={self.total}, stage='{self.stage}')>"
