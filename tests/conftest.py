"""Root conftest — shared test configuration."""

import os

# Never pick up a real signing secret or database from the environment
os.environ["JWT_SECRET"] = "test-signing-secret"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
