"""Todo schemas."""

from datetime import date
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class TodoCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    company_id: Optional[int] = None
    account_id: Optional[int] = None
    note: Optional[str] = Field(None, max_length=2000)
    phone: Optional[str] = Field(None, max_length=50)
    due_date: Optional[date] = None
    pinned: bool = False


class TodoUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    company_id: Optional[int] = None
    account_id: Optional[int] = None
    note: Optional[str] = Field(None, max_length=2000)
    phone: Optional[str] = Field(None, max_length=50)
    due_date: Optional[date] = None
    completed: Optional[bool] = None
    pinned: Optional[bool] = None

    @field_validator("title", "completed", "pinned")
    @classmethod
    def reject_null(cls, v, info):
        """Omit a field to leave it unchanged; null is not a value for it."""
        if v is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return v


class TodoResponse(BaseModel):
    id: int
    title: str
    company_id: Optional[int]
    account_id: Optional[int]
    note: Optional[str]
    phone: Optional[str]
    due_date: Optional[date]
    completed: bool
    pinned: bool
    sort_order: int

    model_config = {"from_attributes": True}
