"""Genre Service — CRUD with name-uniqueness enforcement.

Invariants:
    - Write order: required fields (schema) -> name uniqueness -> mutation
    - Uniqueness check on update excludes the genre itself
    - Delete never removes books; the store nulls their genre_id
"""

import logging

from library_api.core.domain_types import GenreId
from library_api.core.errors import ConflictError, ResourceNotFoundError
from library_api.core.repository_protocols import GenreRepository
from library_api.models import Genre
from library_api.schemas.genre import (
    GenreCreate, GenreDetailResponse, GenreResponse, GenreUpdate,
)

logger = logging.getLogger(__name__)


class GenreService:
    def __init__(self, genres: GenreRepository):
        self._genres = genres

    async def _get_or_404(self, genre_id: GenreId, with_books: bool = False) -> Genre:
        genre = await self._genres.get(genre_id, with_books=with_books)
        if not genre:
            raise ResourceNotFoundError("Genre", genre_id)
        return genre

    async def _ensure_name_free(self, name: str, own_id: GenreId | None = None) -> None:
        existing = await self._genres.get_by_name(name)
        if existing and existing.id != own_id:
            raise ConflictError("Genre already exists", field="name")

    async def create(self, body: GenreCreate) -> GenreResponse:
        await self._ensure_name_free(body.name)
        genre = await self._genres.add(
            Genre(name=body.name, description=body.description),
        )
        logger.info(f"Genre created: {genre.id}")
        return GenreResponse.model_validate(genre)

    async def list_all(self) -> list[GenreResponse]:
        return [GenreResponse.model_validate(g) for g in await self._genres.list_all()]

    async def get(self, genre_id: GenreId) -> GenreDetailResponse:
        genre = await self._get_or_404(genre_id, with_books=True)
        return GenreDetailResponse.model_validate(genre)

    async def update(self, genre_id: GenreId, body: GenreUpdate) -> GenreResponse:
        genre = await self._get_or_404(genre_id)
        changes = body.model_dump(exclude_unset=True)
        if "name" in changes and changes["name"] != genre.name:
            await self._ensure_name_free(changes["name"], own_id=genre.id)
        genre = await self._genres.update(genre, changes)
        return GenreResponse.model_validate(genre)

    async def delete(self, genre_id: GenreId) -> None:
        genre = await self._get_or_404(genre_id)
        await self._genres.delete(genre)
        logger.info(f"Genre deleted: {genre_id}")
