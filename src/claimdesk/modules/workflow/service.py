from __future__ import annotations

import uuid
from collections.abc import Callable

from sqlalchemy.orm import Session

from claimdesk.core.logging import get_logger, log_event
from claimdesk.modules.audit.service import record_event
from claimdesk.modules.claims.models import Claim
from claimdesk.modules.claims.service import get_claim_for_org
from claimdesk.modules.identity.context import Caller, RequestOrgContext
from claimdesk.modules.workflow.lifecycle import TRANSITIONS, require_permitted, require_status

logger = get_logger(__name__)


def run_transition(
    session: Session,
    *,
    action: str,
    ctx: RequestOrgContext,
    caller: Caller,
    claim_id: uuid.UUID,
    note: str | None = None,
    mutate: Callable[[Claim], None] | None = None,
) -> Claim:
    """Apply one lifecycle operation to an existing claim.

    The status write and its audit event are committed together.
    """
    transition = TRANSITIONS[action]
    if transition.gate_before_load:
        require_permitted(transition, ctx, actor_id=caller.user_id)

    claim = get_claim_for_org(session, ctx=ctx, claim_id=claim_id)
    require_status(transition, claim)

    if not transition.gate_before_load:
        require_permitted(transition, ctx, actor_id=caller.user_id, owner_id=claim.user_id)

    previous = claim.status
    if mutate is not None:
        mutate(claim)
    claim.status = transition.target

    record_event(
        session,
        claim_id=claim.id,
        actor=caller,
        event_type=transition.event_type,
        note=(note or "").strip() or transition.default_note,
    )
    session.add(claim)
    session.commit()
    session.refresh(claim)

    log_event(
        logger,
        "claim.transition",
        claim_id=str(claim.id),
        action=action,
        from_status=previous.value,
        to_status=claim.status.value,
    )
    return claim


def submit_claim(
    session: Session, *, ctx: RequestOrgContext, caller: Caller, claim_id: uuid.UUID, note: str | None = None
) -> Claim:
    return run_transition(session, action="submit", ctx=ctx, caller=caller, claim_id=claim_id, note=note)


def review_claim(
    session: Session, *, ctx: RequestOrgContext, caller: Caller, claim_id: uuid.UUID, note: str | None = None
) -> Claim:
    return run_transition(session, action="review", ctx=ctx, caller=caller, claim_id=claim_id, note=note)


def approve_claim(
    session: Session, *, ctx: RequestOrgContext, caller: Caller, claim_id: uuid.UUID, note: str | None = None
) -> Claim:
    return run_transition(session, action="approve", ctx=ctx, caller=caller, claim_id=claim_id, note=note)


def deny_claim(
    session: Session, *, ctx: RequestOrgContext, caller: Caller, claim_id: uuid.UUID, note: str | None = None
) -> Claim:
    return run_transition(session, action="deny", ctx=ctx, caller=caller, claim_id=claim_id, note=note)


def close_claim(
    session: Session, *, ctx: RequestOrgContext, caller: Caller, claim_id: uuid.UUID, note: str | None = None
) -> Claim:
    return run_transition(session, action="close", ctx=ctx, caller=caller, claim_id=claim_id, note=note)
