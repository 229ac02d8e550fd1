"""Transaction Schemas — order creation payload and order graph responses.

Invariants:
    - TransactionCreate.items is a non-empty list of {bookId, 1 <= quantity <= MAX_QUANTITY}
    - Order responses embed the buyer summary and, per item, the book's
      title, current price and genre name
"""

from datetime import datetime
from uuid import UUID

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from library_api.schemas.auth import UserSummary

MAX_QUANTITY = 2**31 - 1


class OrderItemInput(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    book_id: UUID = Field(validation_alias=AliasChoices("bookId", "book_id"))
    quantity: int = Field(ge=1, le=MAX_QUANTITY)


class TransactionCreate(BaseModel):
    items: list[OrderItemInput] = Field(min_length=1)


class GenreName(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    name: str


class OrderBookSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    title: str
    price: float
    genre: GenreName | None = None


class OrderItemResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    order_id: UUID
    book_id: UUID
    quantity: int
    created_at: datetime
    updated_at: datetime
    book: OrderBookSummary


class OrderResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    created_at: datetime
    updated_at: datetime
    user: UserSummary
    items: list[OrderItemResponse] = Field(serialization_alias="order_items")


class CreatedOrderResponse(OrderResponse):
    total_amount: float = Field(serialization_alias="totalAmount")
