"""
Database models for Repbook.

All models are exported here for convenient imports:
    from repbook.models import Order, Commission, etc.
"""

from repbook.models.account import Account
from repbook.models.base import Base, TimestampMixin
from repbook.models.commission import Commission, PayStatus
from repbook.models.company import Company
from repbook.models.order import Order
from repbook.models.season import Season
from repbook.models.todo import Todo

__all__ = [
    # Base
    "Base",
    "TimestampMixin",
    # Brands and accounts
    "Company",
    "Account",
    "Season",
    # Sales
    "Order",
    "Commission",
    "PayStatus",
    # Todos
    "Todo",
]
