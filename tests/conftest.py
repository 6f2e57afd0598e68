from __future__ import annotations

import os

import pytest

# Set env before any claimdesk imports (settings/engine are created at import time).
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("DATABASE_URL", "sqlite:///./.claimdesk_test.db")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret")


@pytest.fixture(autouse=True)
def _reset_db() -> None:
    import claimdesk.models  # noqa: F401
    from claimdesk.core.db import engine
    from claimdesk.core.models import Base

    Base.metadata.drop_all(engine)
    Base.metadata.create_all(engine)

    yield
