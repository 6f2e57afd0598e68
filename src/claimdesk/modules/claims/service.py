from __future__ import annotations

import uuid
from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from claimdesk.core.errors import NotFound
from claimdesk.core.logging import get_logger, log_event
from claimdesk.core.models import utcnow
from claimdesk.modules.audit.models import ClaimEvent
from claimdesk.modules.audit.service import list_events, record_event
from claimdesk.modules.claims.models import Claim, ClaimStatus, ClaimType
from claimdesk.modules.claims.numbering import allocation_lock, insert_numbered_claim
from claimdesk.modules.claims.priority import PRIORITY_LABELS, calculate_priority
from claimdesk.modules.identity.context import Caller, RequestOrgContext
from claimdesk.modules.workflow.lifecycle import TRANSITIONS, require_permitted

logger = get_logger(__name__)

UPDATABLE_FIELDS = ("type", "description", "incident_date", "amount")

# Claims in these states no longer count as open exposure.
_FINISHED_STATUSES = (ClaimStatus.CLOSED, ClaimStatus.DENIED)


def create_claim(
    session: Session,
    *,
    ctx: RequestOrgContext,
    caller: Caller,
    claim_type: ClaimType,
    description: str | None = None,
    incident_date: date | None = None,
    amount: Decimal | None = None,
) -> Claim:
    transition = TRANSITIONS["create"]
    require_permitted(transition, ctx, actor_id=caller.user_id)

    now = utcnow()
    claim = Claim(
        organization_id=ctx.organization_id,
        user_id=caller.user_id,
        status=transition.target,
        type=claim_type,
        description=description,
        incident_date=incident_date,
        amount=amount,
        filed_date=now,
    )
    with allocation_lock:
        insert_numbered_claim(session, claim, year=now.year)
        record_event(
            session,
            claim_id=claim.id,
            actor=caller,
            event_type=transition.event_type,
            note=transition.default_note,
        )
        session.commit()
    session.refresh(claim)
    log_event(
        logger,
        "claim.created",
        claim_id=str(claim.id),
        claim_number=claim.claim_number,
        claim_type=claim.type.value,
    )
    return claim


def update_claim(
    session: Session,
    *,
    ctx: RequestOrgContext,
    caller: Caller,
    claim_id: uuid.UUID,
    changes: dict[str, Any],
) -> Claim:
    from claimdesk.modules.workflow.service import run_transition

    def _patch(claim: Claim) -> None:
        for field, value in changes.items():
            # None means "not provided"; fields cannot be cleared.
            if field not in UPDATABLE_FIELDS or value is None:
                continue
            setattr(claim, field, value)

    return run_transition(
        session, action="update", ctx=ctx, caller=caller, claim_id=claim_id, mutate=_patch
    )


def get_claim_for_org(
    session: Session, *, ctx: RequestOrgContext, claim_id: uuid.UUID
) -> Claim:
    claim = session.scalar(
        select(Claim).where(Claim.id == claim_id, Claim.organization_id == ctx.organization_id)
    )
    if not claim:
        # Same answer for "missing" and "belongs to another organization".
        raise NotFound("Claim not found")
    return claim


def list_claims(
    session: Session,
    *,
    ctx: RequestOrgContext,
    status: ClaimStatus | None = None,
    page: int = 0,
    size: int = 20,
) -> tuple[list[Claim], int]:
    conditions = [Claim.organization_id == ctx.organization_id]
    if status is not None:
        conditions.append(Claim.status == status)

    total = session.scalar(select(func.count(Claim.id)).where(*conditions)) or 0
    claims = list(
        session.scalars(
            select(Claim)
            .where(*conditions)
            .order_by(Claim.created_at.desc(), Claim.claim_number.desc())
            .offset(page * size)
            .limit(size)
        )
    )
    return claims, total


def list_all_claims(session: Session, *, ctx: RequestOrgContext) -> list[Claim]:
    return list(
        session.scalars(
            select(Claim)
            .where(Claim.organization_id == ctx.organization_id)
            .order_by(Claim.claim_number.asc())
        )
    )


def list_claim_events(
    session: Session, *, ctx: RequestOrgContext, claim_id: uuid.UUID
) -> list[ClaimEvent]:
    claim = get_claim_for_org(session, ctx=ctx, claim_id=claim_id)
    return list_events(session, claim_id=claim.id)


def _count(session: Session, *conditions) -> int:
    return session.scalar(select(func.count(Claim.id)).where(*conditions)) or 0


def get_claim_stats(
    session: Session, *, ctx: RequestOrgContext, now: datetime | None = None
) -> dict[str, Any]:
    now = now or utcnow()
    org_id = ctx.organization_id
    in_org = Claim.organization_id == org_id

    total = _count(session, in_org)

    by_status: dict[str, int] = {s.value: 0 for s in ClaimStatus}
    for status, count in session.execute(
        select(Claim.status, func.count(Claim.id)).where(in_org).group_by(Claim.status)
    ):
        by_status[ClaimStatus(status).value] = count

    by_type: dict[str, int] = {t.value: 0 for t in ClaimType}
    for claim_type, count in session.execute(
        select(Claim.type, func.count(Claim.id)).where(in_org).group_by(Claim.type)
    ):
        by_type[ClaimType(claim_type).value] = count

    exposure = session.scalar(
        select(func.coalesce(func.sum(Claim.amount), 0)).where(
            in_org, Claim.status.not_in(_FINISHED_STATUSES)
        )
    )

    approved = by_status[ClaimStatus.APPROVED.value]
    decided = approved + by_status[ClaimStatus.DENIED.value] + by_status[ClaimStatus.CLOSED.value]
    approval_rate = approved / decided * 100.0 if decided else 0.0

    this_week = _count(session, in_org, Claim.created_at >= now - timedelta(days=7))

    by_priority: dict[str, int] = {label: 0 for label in PRIORITY_LABELS}
    for claim in session.scalars(select(Claim).where(in_org)):
        result = calculate_priority(claim.type, claim.amount, claim.filed_date, claim.status, now=now)
        by_priority[result.priority] += 1

    return {
        "total_claims": total,
        "open_claims": total
        - by_status[ClaimStatus.CLOSED.value]
        - by_status[ClaimStatus.DENIED.value],
        "claims_by_status": by_status,
        "claims_by_type": by_type,
        "total_exposure": Decimal(str(exposure or 0)),
        "approval_rate": approval_rate,
        "claims_this_week": this_week,
        "claims_by_priority": by_priority,
    }
