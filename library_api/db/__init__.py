"""Database package — SQLAlchemy declarative base."""
