"""Book ORM — catalog item.

Invariants:
    - title is globally unique (store constraint)
    - genre_id nullable; FK ON DELETE SET NULL
    - price and stock_quantity are non-negative (CHECK constraints)
    - Referenced by order_items with ON DELETE RESTRICT: a sold book cannot be deleted

Design Decisions:
    - No Book -> OrderItem relationship: the ORM never touches order items on
      book deletion, so the RESTRICT constraint is what blocks it
    - genre eagerly loaded (selectin): every book response embeds its genre
"""

import uuid
from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import (
    String, Text, Integer, Numeric, DateTime, ForeignKey, CheckConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from library_api.db.base import Base, utcnow


class Book(Base):
    """Book entity."""
    __tablename__ = "books"
    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_books_price_non_negative"),
        CheckConstraint(
            "stock_quantity >= 0", name="ck_books_stock_non_negative",
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    title: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    writer: Mapped[str] = mapped_column(String(255), nullable=False)
    publisher: Mapped[str] = mapped_column(String(255), nullable=False)
    publication_year: Mapped[int] = mapped_column(Integer, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    stock_quantity: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0,
    )
    genre_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("genres.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow,
    )

    genre: Mapped[Optional["Genre"]] = relationship(
        "Genre", back_populates="books", lazy="selectin",
    )
