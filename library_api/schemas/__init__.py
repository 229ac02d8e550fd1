"""Pydantic schemas — request validation and response shapes."""
