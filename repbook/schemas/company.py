"""Company (brand) schemas."""

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class CompanyCreate(BaseModel):
    """Create a brand."""

    name: str = Field(..., min_length=1, max_length=255)
    commission_percent: Decimal = Field(Decimal("0"), ge=0, le=100, decimal_places=2)
    sort_order: int = 0
    logo_url: Optional[str] = Field(None, max_length=500)


class CompanyUpdate(BaseModel):
    """Update a brand. A new commission_percent recomputes its commissions."""

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    commission_percent: Optional[Decimal] = Field(None, ge=0, le=100, decimal_places=2)
    logo_url: Optional[str] = Field(None, max_length=500)

    @field_validator("name")
    @classmethod
    def reject_null(cls, v, info):
        """Omit a field to leave it unchanged; null is not a value for it."""
        if v is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return v


class CompanyResponse(BaseModel):
    id: int
    name: str
    commission_percent: Decimal
    sort_order: int
    logo_url: Optional[str]

    model_config = {"from_attributes": True}


class SortOrderItem(BaseModel):
    id: int
    sort_order: int
