"""Genre Routes — CRUD; detail nests the genre's books."""

from uuid import UUID

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from library_api.api.dependencies import get_genre_service
from library_api.core.domain_types import GenreId
from library_api.schemas.envelope import success_response
from library_api.schemas.genre import GenreCreate, GenreUpdate
from library_api.services.genre_service import GenreService

router = APIRouter(prefix="/api/genres", tags=["genres"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_genre(
    body: GenreCreate, service: GenreService = Depends(get_genre_service),
) -> JSONResponse:
    genre = await service.create(body)
    return success_response(
        "Genre created successfully", genre, status.HTTP_201_CREATED,
    )


@router.get("")
async def list_genres(
    service: GenreService = Depends(get_genre_service),
) -> JSONResponse:
    """All genres sorted by name."""
    return success_response(
        "Genres retrieved successfully", await service.list_all(),
    )


@router.get("/{genre_id}")
async def get_genre(
    genre_id: UUID, service: GenreService = Depends(get_genre_service),
) -> JSONResponse:
    genre = await service.get(GenreId(genre_id))
    return success_response("Genre detail retrieved successfully", genre)


@router.patch("/{genre_id}")
async def update_genre(
    genre_id: UUID,
    body: GenreUpdate,
    service: GenreService = Depends(get_genre_service),
) -> JSONResponse:
    genre = await service.update(GenreId(genre_id), body)
    return success_response("Genre updated successfully", genre)


@router.delete("/{genre_id}")
async def delete_genre(
    genre_id: UUID, service: GenreService = Depends(get_genre_service),
) -> JSONResponse:
    """Delete a genre; its books keep existing with genreId = null."""
    await service.delete(GenreId(genre_id))
    return success_response("Genre deleted successfully", None)
