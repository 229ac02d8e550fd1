"""Boundary Protocols — persistence contracts consumed by the services layer.

Invariants:
    - Services depend on these Protocols only; SQLAlchemy lives in infrastructure
    - Every mutating method commits its own unit of work and returns the
      re-read entity with its relationships loaded
    - Store constraint violations propagate unchanged (IntegrityError)

Design Decisions:
    - Protocol over ABC: structural subtyping, so tests can pass in-memory fakes
    - Models referenced under TYPE_CHECKING only: core imports no ORM code at runtime
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol, Sequence

from library_api.core.domain_types import BookId, GenreId, OrderId, UserId
from library_api.core.pagination import PageRequest

if TYPE_CHECKING:
    from library_api.models import Book, Genre, Order, User


@dataclass(frozen=True)
class BookFilters:
    """Case-insensitive substring filters for book listings."""
    title: str | None = None
    writer: str | None = None
    genre_name: str | None = None
    genre_id: GenreId | None = None


class UserRepository(Protocol):
    """Contract for user persistence."""
    async def get(self, user_id: UserId) -> "User | None": ...
    async def get_by_email(self, email: str) -> "User | None": ...
    async def add(self, user: "User") -> "User": ...


class GenreRepository(Protocol):
    """Contract for genre persistence."""
    async def get(self, genre_id: GenreId, with_books: bool = False) -> "Genre | None": ...
    async def get_by_name(self, name: str) -> "Genre | None": ...
    async def list_all(self) -> Sequence["Genre"]: ...
    async def add(self, genre: "Genre") -> "Genre": ...
    async def update(self, genre: "Genre", changes: dict[str, Any]) -> "Genre": ...
    async def delete(self, genre: "Genre") -> None: ...


class BookRepository(Protocol):
    """Contract for book persistence."""
    async def get(self, book_id: BookId) -> "Book | None": ...
    async def get_by_title(self, title: str) -> "Book | None": ...
    async def get_many(self, book_ids: Sequence[BookId]) -> Sequence["Book"]: ...
    async def search(
        self, filters: BookFilters, page: PageRequest,
    ) -> tuple[Sequence["Book"], int]: ...
    async def add(self, book: "Book") -> "Book": ...
    async def update(self, book: "Book", changes: dict[str, Any]) -> "Book": ...
    async def delete(self, book: "Book") -> None: ...


class OrderRepository(Protocol):
    """Contract for order persistence."""
    async def get(self, order_id: OrderId) -> "Order | None": ...
    async def list_all(self) -> Sequence["Order"]: ...
    async def add(self, order: "Order") -> "Order": ...
    async def count(self) -> int: ...
    async def quantity_by_genre(self) -> list[tuple[str | None, int]]: ...
