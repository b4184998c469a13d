"""
Commission model with its embedded payment ledger.
"""

from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional

from sqlalchemy import JSON, Date, Integer, Numeric
from sqlalchemy import Enum as SQLAlchemyEnum
from sqlalchemy.orm import Mapped, mapped_column

from repbook.models.base import Base, TimestampMixin


class PayStatus(str, Enum):
    """Payment progress of a commission."""
    UNPAID = "unpaid"
    PARTIAL = "partial"
    PAID = "paid"


class Commission(Base, TimestampMixin):
    """
    Commission owed to the rep for one commissionable order.

    amount_paid, amount_remaining, pay_status and paid_date are
    materialized from the payments ledger and are only ever written
    together by repbook.services.ledger.apply_state.

    Rows written before the ledger existed carry an empty ``payments``
    list with a scalar amount_paid / paid_date pair; those are read as a
    single synthetic payment.

    order_id has no database-level cascade: the order workflow deletes the
    commission explicitly before the order.
    """

    __tablename__ = "commissions"

    id: Mapped[int] = mapped_column(primary_key=True)
    order_id: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        unique=True,
        index=True,
    )
    commission_due: Mapped[Decimal] = mapped_column(
        Numeric(12, 2),
        nullable=False,
    )
    payments: Mapped[Optional[list]] = mapped_column(
        JSON,
        nullable=True,
        comment='[{"amount": "900.00", "date": "2025-02-01"}]',
    )
    amount_paid: Mapped[Decimal] = mapped_column(
        Numeric(12, 2),
        default=Decimal("0"),
        nullable=False,
    )
    amount_remaining: Mapped[Decimal] = mapped_column(
        Numeric(12, 2),
        default=Decimal("0"),
        nullable=False,
    )
    paid_date: Mapped[Optional[date]] = mapped_column(
        Date,
        nullable=True,
    )
    pay_status: Mapped[PayStatus] = mapped_column(
        SQLAlchemyEnum(
            PayStatus,
            values_callable=lambda x: [e.value for e in x],
        ),
        default=PayStatus.UNPAID,
        nullable=False,
        index=True,
    )

    def __repr__(self) -> str:
        return (
            f"<Commission(id={self.id}, order_id={self.order_id}, "
            f"due={self.commission_due}, status={self.pay_status})>"
        )
