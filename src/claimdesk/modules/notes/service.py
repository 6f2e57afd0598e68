from __future__ import annotations

import uuid

from sqlalchemy import select
from sqlalchemy.orm import Session

from claimdesk.core.errors import BadRequest
from claimdesk.core.logging import get_logger, log_event
from claimdesk.modules.claims.service import get_claim_for_org
from claimdesk.modules.identity.context import Caller, RequestOrgContext
from claimdesk.modules.notes.models import ClaimNote

logger = get_logger(__name__)


def list_notes(
    session: Session, *, ctx: RequestOrgContext, claim_id: uuid.UUID
) -> list[ClaimNote]:
    claim = get_claim_for_org(session, ctx=ctx, claim_id=claim_id)
    return list(
        session.scalars(
            select(ClaimNote)
            .where(ClaimNote.claim_id == claim.id)
            .order_by(ClaimNote.created_at.asc())
        )
    )


def add_note(
    session: Session,
    *,
    ctx: RequestOrgContext,
    caller: Caller,
    claim_id: uuid.UUID,
    content: str,
) -> ClaimNote:
    claim = get_claim_for_org(session, ctx=ctx, claim_id=claim_id)
    if not content or not content.strip():
        raise BadRequest("content: must not be blank")

    note = ClaimNote(
        claim_id=claim.id,
        author_user_id=caller.user_id,
        author_display_name=caller.display_name,
        content=content,
    )
    session.add(note)
    session.commit()
    session.refresh(note)
    log_event(logger, "claim.note.added", claim_id=str(claim.id), note_id=str(note.id))
    return note
