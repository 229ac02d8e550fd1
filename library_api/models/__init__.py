"""ORM Models — SQLAlchemy declarative models for all catalog entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Store-level constraints (unique, FK ondelete) are the final authority on integrity

Design Decisions:
    - One file per entity
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from library_api.models.user import User  # noqa: F401
from library_api.models.genre import Genre  # noqa: F401
from library_api.models.book import Book  # noqa: F401
from library_api.models.order import Order, OrderItem  # noqa: F401
