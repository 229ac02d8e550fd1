"""Service test fixtures — in-memory repositories satisfying the persistence Protocols.

Invariants:
    - No database: services run against plain dict-backed fakes
    - Fakes stamp ids and timestamps the way the store defaults would
"""

import uuid
from datetime import datetime, timezone
from decimal import Decimal

import pytest

from library_api.models import Book, Genre, Order, User


def _stamp(entity) -> None:
    now = datetime.now(timezone.utc)
    if entity.id is None:
        entity.id = uuid.uuid4()
    entity.created_at = entity.created_at or now
    entity.updated_at = now


class FakeUserRepository:
    def __init__(self):
        self.rows: dict[uuid.UUID, User] = {}

    async def get(self, user_id):
        return self.rows.get(user_id)

    async def get_by_email(self, email):
        return next((u for u in self.rows.values() if u.email == email), None)

    async def add(self, user):
        _stamp(user)
        self.rows[user.id] = user
        return user


class FakeGenreRepository:
    def __init__(self):
        self.rows: dict[uuid.UUID, Genre] = {}

    async def get(self, genre_id, with_books=False):
        return self.rows.get(genre_id)

    async def get_by_name(self, name):
        return next((g for g in self.rows.values() if g.name == name), None)

    async def list_all(self):
        return sorted(self.rows.values(), key=lambda g: g.name)

    async def add(self, genre):
        _stamp(genre)
        self.rows[genre.id] = genre
        return genre

    async def update(self, genre, changes):
        for key, value in changes.items():
            setattr(genre, key, value)
        _stamp(genre)
        return genre

    async def delete(self, genre):
        self.rows.pop(genre.id, None)


class FakeBookRepository:
    def __init__(self, genres: FakeGenreRepository):
        self.rows: dict[uuid.UUID, Book] = {}
        self._genres = genres
        self.search_calls = []

    def _link_genre(self, book):
        book.genre = self._genres.rows.get(book.genre_id) if book.genre_id else None

    async def get(self, book_id):
        return self.rows.get(book_id)

    async def get_by_title(self, title):
        return next((b for b in self.rows.values() if b.title == title), None)

    async def get_many(self, book_ids):
        return [self.rows[i] for i in set(book_ids) if i in self.rows]

    async def search(self, filters, page):
        self.search_calls.append((filters, page))
        matches = [
            b for b in self.rows.values()
            if filters.genre_id is None or b.genre_id == filters.genre_id
        ]
        return matches[page.offset:page.offset + page.limit], len(matches)

    async def add(self, book):
        _stamp(book)
        self._link_genre(book)
        self.rows[book.id] = book
        return book

    async def update(self, book, changes):
        for key, value in changes.items():
            setattr(book, key, value)
        _stamp(book)
        self._link_genre(book)
        return book

    async def delete(self, book):
        self.rows.pop(book.id, None)


class FakeOrderRepository:
    def __init__(self):
        self.rows: dict[uuid.UUID, Order] = {}

    async def get(self, order_id):
        return self.rows.get(order_id)

    async def list_all(self):
        return sorted(self.rows.values(), key=lambda o: o.created_at, reverse=True)

    async def add(self, order):
        _stamp(order)
        order.user_id = order.user.id
        for item in order.items:
            _stamp(item)
            item.order_id = order.id
            item.book_id = item.book.id
        self.rows[order.id] = order
        return order

    async def count(self):
        return len(self.rows)

    async def quantity_by_genre(self):
        totals: dict = {}
        for order in self.rows.values():
            for item in order.items:
                name = item.book.genre.name if item.book.genre else None
                totals[name] = totals.get(name, 0) + item.quantity
        return list(totals.items())


@pytest.fixture
def users():
    return FakeUserRepository()


@pytest.fixture
def genres():
    return FakeGenreRepository()


@pytest.fixture
def books(genres):
    return FakeBookRepository(genres)


@pytest.fixture
def orders():
    return FakeOrderRepository()


@pytest.fixture
def stored_user(users):
    async def _store(email: str = "buyer@example.com") -> User:
        return await users.add(
            User(email=email, password_hash="$2b$10$notarealhash", username=None),
        )
    return _store


@pytest.fixture
def stored_book(books):
    async def _store(title: str, price: Decimal = Decimal("10.00"), genre: Genre | None = None) -> Book:
        return await books.add(Book(
            title=title, writer="W", publisher="P", publication_year=2000,
            price=price, stock_quantity=1, genre_id=genre.id if genre else None,
        ))
    return _store
