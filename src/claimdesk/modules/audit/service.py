from __future__ import annotations

import uuid

from sqlalchemy import select
from sqlalchemy.orm import Session

from claimdesk.modules.audit.models import ClaimEvent, EventType
from claimdesk.modules.identity.context import Caller


def record_event(
    session: Session,
    *,
    claim_id: uuid.UUID,
    actor: Caller,
    event_type: EventType,
    note: str | None,
) -> ClaimEvent:
    """Stage an audit row. The caller commits it together with the claim change."""
    event = ClaimEvent(
        claim_id=claim_id,
        actor_user_id=actor.user_id,
        actor_display_name=actor.display_name,
        event_type=event_type,
        note=note,
    )
    session.add(event)
    return event


def list_events(session: Session, *, claim_id: uuid.UUID) -> list[ClaimEvent]:
    return list(
        session.scalars(
            select(ClaimEvent)
            .where(ClaimEvent.claim_id == claim_id)
            .order_by(ClaimEvent.timestamp.asc(), ClaimEvent.id.asc())
        )
    )
