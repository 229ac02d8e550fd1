"""Book Service — catalog CRUD, filtered listings and integrity checks.

Invariants:
    - Write order: required fields (schema) -> title uniqueness -> genre existence
      -> mutation; nothing is written when any check fails
    - Title uniqueness on update excludes the book itself
    - Partial update applies exactly the fields present in the request
    - Deleting a book referenced by order items fails at the store (RESTRICT)
"""

import logging

from library_api.core.domain_types import BookId, GenreId
from library_api.core.errors import ConflictError, ResourceNotFoundError
from library_api.core.pagination import PageRequest, build_pagination
from library_api.core.repository_protocols import (
    BookFilters, BookRepository, GenreRepository,
)
from library_api.models import Book
from library_api.schemas.book import (
    BookCreate, BookListResponse, BookResponse, BookUpdate, GenreBooksResponse,
)
from library_api.schemas.genre import GenreResponse

logger = logging.getLogger(__name__)


class BookService:
    def __init__(self, books: BookRepository, genres: GenreRepository):
        self._books = books
        self._genres = genres

    async def _get_or_404(self, book_id: BookId) -> Book:
        book = await self._books.get(book_id)
        if not book:
            raise ResourceNotFoundError("Book", book_id)
        return book

    async def _ensure_title_free(self, title: str, own_id: BookId | None = None) -> None:
        existing = await self._books.get_by_title(title)
        if existing and existing.id != own_id:
            raise ConflictError("Book with this title already exists", field="title")

    async def _ensure_genre_exists(self, genre_id: GenreId | None) -> None:
        if genre_id is not None and not await self._genres.get(genre_id):
            raise ResourceNotFoundError("Genre", genre_id)

    async def create(self, body: BookCreate) -> BookResponse:
        await self._ensure_title_free(body.title)
        await self._ensure_genre_exists(body.genre_id)

        book = await self._books.add(Book(
            title=body.title,
            writer=body.writer or body.title,
            publisher=body.publisher,
            publication_year=body.publication_year,
            description=body.description,
            price=body.price,
            stock_quantity=body.stock_quantity,
            genre_id=body.genre_id,
        ))
        logger.info(f"Book created: {book.id}")
        return BookResponse.model_validate(book)

    async def search(self, filters: BookFilters, page: PageRequest) -> BookListResponse:
        books, total = await self._books.search(filters, page)
        return BookListResponse(
            books=[BookResponse.model_validate(b) for b in books],
            pagination=build_pagination(page, total),
        )

    async def list_by_genre(
        self, genre_id: GenreId, filters: BookFilters, page: PageRequest,
    ) -> GenreBooksResponse:
        genre = await self._genres.get(genre_id)
        if not genre:
            raise ResourceNotFoundError("Genre", genre_id)

        scoped = BookFilters(
            title=filters.title, writer=filters.writer, genre_id=genre_id,
        )
        books, total = await self._books.search(scoped, page)
        return GenreBooksResponse(
            genre=GenreResponse.model_validate(genre),
            books=[BookResponse.model_validate(b) for b in books],
            pagination=build_pagination(page, total),
        )

    async def get(self, book_id: BookId) -> BookResponse:
        return BookResponse.model_validate(await self._get_or_404(book_id))

    async def update(self, book_id: BookId, body: BookUpdate) -> BookResponse:
        book = await self._get_or_404(book_id)
        changes = body.model_dump(exclude_unset=True)

        if "title" in changes and changes["title"] != book.title:
            await self._ensure_title_free(changes["title"], own_id=book.id)
        if "genre_id" in changes:
            await self._ensure_genre_exists(changes["genre_id"])

        book = await self._books.update(book, changes)
        return BookResponse.model_validate(book)

    async def delete(self, book_id: BookId) -> None:
        book = await self._get_or_404(book_id)
        await self._books.delete(book)
        logger.info(f"Book deleted: {book_id}")
