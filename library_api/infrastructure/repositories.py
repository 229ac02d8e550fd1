"""SQLAlchemy Repositories — Persistence Gateway over the four record kinds.

Invariants:
    - One AsyncSession per repository instance (the request's session)
    - Writes commit immediately; reads after writes use populate_existing so
      eager-loaded relationships (book.genre, order.items...) reflect the new state
    - IntegrityError is never caught here; the error handlers translate it

Design Decisions:
    - icontains(autoescape=True) for filters: ILIKE on PostgreSQL, LIKE on SQLite
      (case-insensitive for ASCII), with % and _ in user input matched literally
    - Listing and counting run on the same filtered select
"""

import logging
from typing import Any, Sequence

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from library_api.core.domain_types import BookId, GenreId, OrderId, UserId
from library_api.core.pagination import PageRequest
from library_api.core.repository_protocols import BookFilters
from library_api.models import Book, Genre, Order, OrderItem, User

logger = logging.getLogger(__name__)


class SqlUserRepository:
    def __init__(self, db: AsyncSession):
        self._db = db

    async def get(self, user_id: UserId) -> User | None:
        return await self._db.get(User, user_id)

    async def get_by_email(self, email: str) -> User | None:
        result = await self._db.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def add(self, user: User) -> User:
        self._db.add(user)
        await self._db.commit()
        await self._db.refresh(user)
        return user


class SqlGenreRepository:
    def __init__(self, db: AsyncSession):
        self._db = db

    async def get(self, genre_id: GenreId, with_books: bool = False) -> Genre | None:
        query = select(Genre).where(Genre.id == genre_id)
        if with_books:
            query = query.options(selectinload(Genre.books))
        result = await self._db.execute(
            query.execution_options(populate_existing=True),
        )
        return result.scalar_one_or_none()

    async def get_by_name(self, name: str) -> Genre | None:
        result = await self._db.execute(select(Genre).where(Genre.name == name))
        return result.scalar_one_or_none()

    async def list_all(self) -> Sequence[Genre]:
        result = await self._db.execute(select(Genre).order_by(Genre.name.asc()))
        return result.scalars().all()

    async def add(self, genre: Genre) -> Genre:
        self._db.add(genre)
        await self._db.commit()
        await self._db.refresh(genre)
        return genre

    async def update(self, genre: Genre, changes: dict[str, Any]) -> Genre:
        for key, value in changes.items():
            setattr(genre, key, value)
        await self._db.commit()
        await self._db.refresh(genre)
        return genre

    async def delete(self, genre: Genre) -> None:
        await self._db.delete(genre)
        await self._db.commit()


class SqlBookRepository:
    def __init__(self, db: AsyncSession):
        self._db = db

    async def get(self, book_id: BookId) -> Book | None:
        result = await self._db.execute(
            select(Book)
            .where(Book.id == book_id)
            .execution_options(populate_existing=True),
        )
        return result.scalar_one_or_none()

    async def get_by_title(self, title: str) -> Book | None:
        result = await self._db.execute(select(Book).where(Book.title == title))
        return result.scalar_one_or_none()

    async def get_many(self, book_ids: Sequence[BookId]) -> Sequence[Book]:
        result = await self._db.execute(
            select(Book).where(Book.id.in_(list(set(book_ids)))),
        )
        return result.scalars().all()

    async def search(
        self, filters: BookFilters, page: PageRequest,
    ) -> tuple[Sequence[Book], int]:
        query = select(Book)
        if filters.genre_id is not None:
            query = query.where(Book.genre_id == filters.genre_id)
        if filters.title:
            query = query.where(Book.title.icontains(filters.title, autoescape=True))
        if filters.writer:
            query = query.where(Book.writer.icontains(filters.writer, autoescape=True))
        if filters.genre_name:
            query = query.join(Book.genre).where(
                Genre.name.icontains(filters.genre_name, autoescape=True),
            )

        total = await self._db.scalar(
            select(func.count()).select_from(query.subquery()),
        )
        result = await self._db.execute(
            query.order_by(Book.created_at.desc(), Book.title.asc())
            .offset(page.offset)
            .limit(page.limit),
        )
        return result.scalars().all(), total or 0

    async def add(self, book: Book) -> Book:
        self._db.add(book)
        await self._db.commit()
        return await self.get(book.id)

    async def update(self, book: Book, changes: dict[str, Any]) -> Book:
        for key, value in changes.items():
            setattr(book, key, value)
        await self._db.commit()
        return await self.get(book.id)

    async def delete(self, book: Book) -> None:
        await self._db.delete(book)
        await self._db.commit()


class SqlOrderRepository:
    def __init__(self, db: AsyncSession):
        self._db = db

    async def get(self, order_id: OrderId) -> Order | None:
        result = await self._db.execute(
            select(Order)
            .where(Order.id == order_id)
            .execution_options(populate_existing=True),
        )
        return result.scalar_one_or_none()

    async def list_all(self) -> Sequence[Order]:
        result = await self._db.execute(
            select(Order).order_by(Order.created_at.desc()),
        )
        return result.scalars().all()

    async def add(self, order: Order) -> Order:
        """Persist the order and all its items in a single commit."""
        self._db.add(order)
        await self._db.commit()
        logger.info(
            f"Order {order.id} persisted with {len(order.items)} item(s)",
            extra={"order_id": str(order.id), "user_id": str(order.user_id)},
        )
        return await self.get(order.id)

    async def count(self) -> int:
        return await self._db.scalar(select(func.count()).select_from(Order)) or 0

    async def quantity_by_genre(self) -> list[tuple[str | None, int]]:
        """Summed order-item quantity per genre name; None for books without a genre."""
        result = await self._db.execute(
            select(Genre.name, func.sum(OrderItem.quantity))
            .select_from(OrderItem)
            .join(Book, OrderItem.book_id == Book.id)
            .outerjoin(Genre, Book.genre_id == Genre.id)
            .group_by(Genre.name)
            .order_by(Genre.name.asc().nulls_last()),
        )
        return [(name, int(quantity or 0)) for name, quantity in result.all()]
