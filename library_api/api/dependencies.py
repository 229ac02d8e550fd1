"""Service Providers — FastAPI dependencies that assemble services per request.

Invariants:
    - Every service instance is bound to the request's AsyncSession
    - Token settings come from get_settings (overridable in tests)
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from library_api.config import Settings, get_settings
from library_api.infrastructure.database import get_db
from library_api.infrastructure.repositories import (
    SqlBookRepository, SqlGenreRepository, SqlOrderRepository, SqlUserRepository,
)
from library_api.services.auth_service import AuthService
from library_api.services.book_service import BookService
from library_api.services.genre_service import GenreService
from library_api.services.transaction_service import TransactionService


def get_auth_service(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> AuthService:
    return AuthService(
        SqlUserRepository(db),
        jwt_secret=settings.jwt_secret,
        jwt_algorithm=settings.jwt_algorithm,
        jwt_expires_minutes=settings.jwt_expires_minutes,
    )


def get_book_service(db: AsyncSession = Depends(get_db)) -> BookService:
    return BookService(SqlBookRepository(db), SqlGenreRepository(db))


def get_genre_service(db: AsyncSession = Depends(get_db)) -> GenreService:
    return GenreService(SqlGenreRepository(db))


def get_transaction_service(db: AsyncSession = Depends(get_db)) -> TransactionService:
    return TransactionService(
        SqlOrderRepository(db), SqlBookRepository(db), SqlUserRepository(db),
    )
