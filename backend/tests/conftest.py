"""Root conftest — shared test configuration."""

import os

# Ensure tests never pick up a developer's real database or service factory
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("JWT_EXPIRES_IN", "1h")
os.environ.pop("DATABASE_URL", None)
os.environ.pop("USER_SERVICE_FACTORY", None)
