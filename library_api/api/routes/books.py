"""Book Routes — catalog CRUD, filtered listing and per-genre listing.

Invariants:
    - page and limit are integers >= 1 (400 otherwise); limit clamped to 100
    - /genre/{genre_id} is two segments deep, so it never collides with /{book_id}
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse

from library_api.api.dependencies import get_book_service
from library_api.core.domain_types import BookId, GenreId
from library_api.core.pagination import DEFAULT_LIMIT, DEFAULT_PAGE, PageRequest
from library_api.core.repository_protocols import BookFilters
from library_api.schemas.book import BookCreate, BookUpdate
from library_api.schemas.envelope import success_response
from library_api.services.book_service import BookService

router = APIRouter(prefix="/api/books", tags=["books"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_book(
    body: BookCreate, service: BookService = Depends(get_book_service),
) -> JSONResponse:
    book = await service.create(body)
    return success_response(
        "Book created successfully", book, status.HTTP_201_CREATED,
    )


@router.get("")
async def list_books(
    title: str | None = None,
    writer: str | None = None,
    genre: str | None = None,
    page: int = Query(DEFAULT_PAGE, ge=1),
    limit: int = Query(DEFAULT_LIMIT, ge=1),
    service: BookService = Depends(get_book_service),
) -> JSONResponse:
    """List books, newest first, with optional substring filters."""
    result = await service.search(
        BookFilters(title=title, writer=writer, genre_name=genre),
        PageRequest.build(page, limit),
    )
    return success_response("Books retrieved successfully", result)


@router.get("/genre/{genre_id}")
async def list_books_by_genre(
    genre_id: UUID,
    title: str | None = None,
    writer: str | None = None,
    page: int = Query(DEFAULT_PAGE, ge=1),
    limit: int = Query(DEFAULT_LIMIT, ge=1),
    service: BookService = Depends(get_book_service),
) -> JSONResponse:
    result = await service.list_by_genre(
        GenreId(genre_id),
        BookFilters(title=title, writer=writer),
        PageRequest.build(page, limit),
    )
    return success_response("Books retrieved successfully", result)


@router.get("/{book_id}")
async def get_book(
    book_id: UUID, service: BookService = Depends(get_book_service),
) -> JSONResponse:
    book = await service.get(BookId(book_id))
    return success_response("Book detail retrieved successfully", book)


@router.patch("/{book_id}")
async def update_book(
    book_id: UUID,
    body: BookUpdate,
    service: BookService = Depends(get_book_service),
) -> JSONResponse:
    book = await service.update(BookId(book_id), body)
    return success_response("Book updated successfully", book)


@router.delete("/{book_id}")
async def delete_book(
    book_id: UUID, service: BookService = Depends(get_book_service),
) -> JSONResponse:
    await service.delete(BookId(book_id))
    return success_response("Book deleted successfully", None)
