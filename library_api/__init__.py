"""Library Catalog API — books, genres, users and purchase orders.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
