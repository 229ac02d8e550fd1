"""Genre ORM — book category.

Invariants:
    - name is globally unique (store constraint)
    - Deleting a genre nulls books.genre_id (FK ON DELETE SET NULL), never deletes books

Design Decisions:
    - passive_deletes on Genre.books: the database applies SET NULL, the ORM does not
      load the collection just to delete the genre
"""

import uuid
from datetime import datetime

from sqlalchemy import String, Text, DateTime
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from library_api.db.base import Base, utcnow


class Genre(Base):
    """Genre entity — groups books."""
    __tablename__ = "genres"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow,
    )

    # Loaded explicitly with selectinload() where needed
    books: Mapped[list["Book"]] = relationship(
        "Book", back_populates="genre", passive_deletes=True,
        order_by="Book.title",
    )
