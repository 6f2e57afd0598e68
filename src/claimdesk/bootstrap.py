from __future__ import annotations

import claimdesk.models  # noqa: F401
from claimdesk.core.config import settings
from claimdesk.core.db import engine
from claimdesk.core.logging import get_logger, log_event
from claimdesk.core.models import Base

logger = get_logger(__name__)


def bootstrap() -> None:
    if settings.environment == "dev" and str(settings.database_url).startswith("sqlite"):
        Base.metadata.create_all(engine)
        log_event(logger, "bootstrap.schema_created")
