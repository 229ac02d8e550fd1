"""Genre Schemas — create/update payloads and response shapes.

Invariants:
    - GenreCreate.name required, 1-100 chars after stripping
    - GenreUpdate distinguishes absent fields from explicit values (exclude_unset)
    - Explicit null for name is rejected; explicit null for description clears it
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _strip_required(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("value cannot be empty or whitespace")
    return v


class GenreCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    description: str | None = None

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        return _strip_required(v)


class GenreUpdate(BaseModel):
    name: str = Field(None, min_length=1, max_length=100)
    description: str | None = None

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        return _strip_required(v)


class GenreResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    description: str | None = None
    created_at: datetime = Field(serialization_alias="createdAt")
    updated_at: datetime = Field(serialization_alias="updatedAt")


class GenreBookSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str
    writer: str
    price: float
    stock_quantity: int


class GenreDetailResponse(GenreResponse):
    books: list[GenreBookSummary] = []
