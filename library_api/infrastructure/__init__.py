"""Infrastructure — database engine, repositories and logging setup.

Invariants:
    - All SQLAlchemy queries live here; services see only repository protocols
"""
