"""Book Schemas — create/update payloads, list query and response shapes.

Invariants:
    - BookCreate requires title, publisher, publication_year and price
    - price >= 0 with at most 2 decimal places; 0 <= stock_quantity <= MAX_STOCK
    - BookUpdate distinguishes absent fields from explicit values (exclude_unset):
      explicit "" / 0 / null (for nullable fields) are applied, explicit null for a
      required column is a validation error

Design Decisions:
    - Accepts genreId|genre_id, writer|author and stock_quantity|stock
    - writer optional on create; the service falls back to the title
"""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from library_api.schemas.genre import GenreResponse

_TEXT_FIELDS = ("title", "writer", "publisher")
MAX_STOCK = 2**31 - 1


def _strip_required(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("value cannot be empty or whitespace")
    return v


class BookCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(min_length=1, max_length=255)
    writer: str | None = Field(
        None, max_length=255, validation_alias=AliasChoices("writer", "author"),
    )
    publisher: str = Field(min_length=1, max_length=255)
    publication_year: int = Field(ge=0, le=9999)
    description: str | None = None
    price: Decimal = Field(ge=0, max_digits=10, decimal_places=2)
    stock_quantity: int = Field(
        0, ge=0, le=MAX_STOCK,
        validation_alias=AliasChoices("stock_quantity", "stock"),
    )
    genre_id: UUID | None = Field(
        None, validation_alias=AliasChoices("genreId", "genre_id"),
    )

    @field_validator("title", "publisher")
    @classmethod
    def strip_required(cls, v: str) -> str:
        return _strip_required(v)

    @field_validator("writer")
    @classmethod
    def strip_writer(cls, v: str | None) -> str | None:
        if v is None:
            return None
        return v.strip() or None


class BookUpdate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(None, min_length=1, max_length=255)
    writer: str = Field(
        None, min_length=1, max_length=255,
        validation_alias=AliasChoices("writer", "author"),
    )
    publisher: str = Field(None, min_length=1, max_length=255)
    publication_year: int = Field(None, ge=0, le=9999)
    description: str | None = None
    price: Decimal = Field(None, ge=0, max_digits=10, decimal_places=2)
    stock_quantity: int = Field(
        None, ge=0, le=MAX_STOCK,
        validation_alias=AliasChoices("stock_quantity", "stock"),
    )
    genre_id: UUID | None = Field(
        None, validation_alias=AliasChoices("genreId", "genre_id"),
    )

    @field_validator(*_TEXT_FIELDS)
    @classmethod
    def strip_required(cls, v: str) -> str:
        return _strip_required(v)


class BookResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str
    writer: str
    publisher: str
    publication_year: int
    description: str | None = None
    price: float
    stock_quantity: int
    genre_id: UUID | None = Field(None, serialization_alias="genreId")
    genre: GenreResponse | None = None
    created_at: datetime = Field(serialization_alias="createdAt")
    updated_at: datetime = Field(serialization_alias="updatedAt")


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    total_pages: int = Field(
        validation_alias=AliasChoices("totalPages", "total_pages"),
        serialization_alias="totalPages",
    )


class BookListResponse(BaseModel):
    books: list[BookResponse]
    pagination: Pagination


class GenreBooksResponse(BookListResponse):
    genre: GenreResponse
