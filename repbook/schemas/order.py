"""Order schemas."""

from datetime import date
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from repbook.schemas.commission import CommissionResponse


class OrderCreate(BaseModel):
    """Record a sale."""

    account_id: int
    company_id: int
    season_id: Optional[int] = None
    order_type: Optional[str] = Field(None, max_length=50)
    order_number: Optional[str] = Field(None, max_length=100)
    close_date: Optional[date] = None
    stage: str = Field("Closed - Won", min_length=1, max_length=50)
    total: Decimal = Field(..., ge=0, max_digits=12, decimal_places=2)
    commission_override: Optional[Decimal] = Field(None, ge=0, le=100, decimal_places=2)
    notes: Optional[str] = None


class OrderUpdate(BaseModel):
    """Edit a sale. Send commission_override: null to fall back to the brand rate."""

    account_id: Optional[int] = None
    company_id: Optional[int] = None
    season_id: Optional[int] = None
    order_type: Optional[str] = Field(None, max_length=50)
    order_number: Optional[str] = Field(None, max_length=100)
    close_date: Optional[date] = None
    stage: Optional[str] = Field(None, min_length=1, max_length=50)
    total: Optional[Decimal] = Field(None, ge=0, max_digits=12, decimal_places=2)
    commission_override: Optional[Decimal] = Field(None, ge=0, le=100, decimal_places=2)
    notes: Optional[str] = None

    @field_validator("account_id")
    @classmethod
    def reject_null(cls, v, info):
        if v is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return v


class OrderResponse(BaseModel):
    id: int
    account_id: int
    company_id: int
    season_id: Optional[int]
    order_type: Optional[str]
    order_number: Optional[str]
    close_date: Optional[date]
    stage: str
    total: Decimal
    commission_override: Optional[Decimal]
    notes: Optional[str]

    # Related info
    commission: Optional[CommissionResponse] = None

    model_config = {"from_attributes": True}


class OrderListResponse(BaseModel):
    items: List[OrderResponse]
    total: int
