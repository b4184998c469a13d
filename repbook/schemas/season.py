"""Season (tracker) schemas."""

from datetime import date
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class SeasonCreate(BaseModel):
    company_id: Optional[int] = None
    label: str = Field(..., min_length=1, max_length=100)
    start_date: Optional[date] = None
    end_date: Optional[date] = None


class SeasonUpdate(BaseModel):
    label: Optional[str] = Field(None, min_length=1, max_length=100)
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    archived: Optional[bool] = None

    @field_validator("label", "archived")
    @classmethod
    def reject_null(cls, v, info):
        if v is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return v


class SeasonResponse(BaseModel):
    id: int
    company_id: Optional[int]
    label: str
    start_date: Optional[date]
    end_date: Optional[date]
    archived: bool

    model_config = {"from_attributes": True}
