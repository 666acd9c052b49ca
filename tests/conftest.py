"""Root conftest — shared test configuration."""

import os

# Settings are resolved at import of roster_api.main; never point tests at a real database
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///:memory:",
)
os.environ.setdefault("LOG_FORMAT", "text")
