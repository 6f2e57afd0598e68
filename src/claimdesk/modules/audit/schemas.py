from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel

from claimdesk.modules.audit.models import EventType


class ClaimEventOut(BaseModel):
    id: uuid.UUID
    claim_id: uuid.UUID
    actor_user_id: uuid.UUID
    actor_display_name: str | None
    event_type: EventType
    note: str | None
    timestamp: datetime
