"""Services Layer — one controller per resource (auth, books, genres, transactions).

Invariants:
    - Services raise LibraryError subclasses, never HTTPException
    - Services depend on repository protocols, never on AsyncSession directly
"""
