"""Account schemas."""

from typing import Optional

from pydantic import BaseModel, Field, field_validator


class AccountCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    account_number: Optional[str] = Field(None, max_length=100)
    region: Optional[str] = Field(None, max_length=100)
    account_type: Optional[str] = Field(None, max_length=100)
    city: Optional[str] = Field(None, max_length=100)
    state: Optional[str] = Field(None, max_length=50)


class AccountUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    account_number: Optional[str] = Field(None, max_length=100)
    region: Optional[str] = Field(None, max_length=100)
    account_type: Optional[str] = Field(None, max_length=100)
    city: Optional[str] = Field(None, max_length=100)
    state: Optional[str] = Field(None, max_length=50)

    @field_validator("name")
    @classmethod
    def reject_null(cls, v, info):
        if v is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return v


class AccountResponse(BaseModel):
    id: int
    name: str
    account_number: Optional[str]
    region: Optional[str]
    account_type: Optional[str]
    city: Optional[str]
    state: Optional[str]

    model_config = {"from_attributes": True}
