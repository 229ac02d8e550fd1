"""API Layer — FastAPI routes, auth gate and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - Every response body is an envelope: {success, message, data?, errors?}

Design Decisions:
    - Thin routes delegate to services; services own validation and integrity checks
"""
