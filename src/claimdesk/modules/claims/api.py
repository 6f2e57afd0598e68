from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from claimdesk.api.deps import get_caller, get_org_context
from claimdesk.core.config import settings
from claimdesk.core.db import db_session
from claimdesk.modules.audit.schemas import ClaimEventOut
from claimdesk.modules.claims.models import ClaimStatus
from claimdesk.modules.claims.schemas import (
    ClaimCreate,
    ClaimDetailOut,
    ClaimOut,
    ClaimPage,
    ClaimStatsOut,
    ClaimUpdate,
)
from claimdesk.modules.claims.service import (
    create_claim,
    get_claim_for_org,
    get_claim_stats,
    list_claim_events,
    list_claims,
    update_claim,
)
from claimdesk.modules.identity.context import Caller, RequestOrgContext
from claimdesk.modules.workflow.lifecycle import allowed_actions

router = APIRouter(tags=["claims"])


@router.post("/claims", response_model=ClaimOut, status_code=status.HTTP_201_CREATED)
def create_claim_endpoint(
    payload: ClaimCreate,
    session: Session = Depends(db_session),
    caller: Caller = Depends(get_caller),
    ctx: RequestOrgContext = Depends(get_org_context),
) -> ClaimOut:
    claim = create_claim(
        session,
        ctx=ctx,
        caller=caller,
        claim_type=payload.type,
        description=payload.description,
        incident_date=payload.incident_date,
        amount=payload.amount,
    )
    return ClaimOut.from_claim(claim)


@router.get("/claims", response_model=ClaimPage)
def list_claims_endpoint(
    status_filter: ClaimStatus | None = Query(default=None, alias="status"),
    page: int = Query(default=0, ge=0),
    size: int | None = Query(default=None, ge=1),
    session: Session = Depends(db_session),
    ctx: RequestOrgContext = Depends(get_org_context),
) -> ClaimPage:
    size = min(size or settings.default_page_size, settings.max_page_size)
    claims, total = list_claims(
        session, ctx=ctx, status=status_filter, page=page, size=size
    )
    return ClaimPage(
        items=[ClaimOut.from_claim(c) for c in claims], total=total, page=page, size=size
    )


@router.get("/claims/stats", response_model=ClaimStatsOut)
def claim_stats_endpoint(
    session: Session = Depends(db_session),
    ctx: RequestOrgContext = Depends(get_org_context),
) -> ClaimStatsOut:
    return ClaimStatsOut(**get_claim_stats(session, ctx=ctx))


@router.get("/claims/{claim_id}", response_model=ClaimDetailOut)
def get_claim_endpoint(
    claim_id: uuid.UUID,
    session: Session = Depends(db_session),
    caller: Caller = Depends(get_caller),
    ctx: RequestOrgContext = Depends(get_org_context),
) -> ClaimDetailOut:
    claim = get_claim_for_org(session, ctx=ctx, claim_id=claim_id)
    out = ClaimOut.from_claim(claim)
    return ClaimDetailOut(
        **out.model_dump(), allowed_actions=allowed_actions(ctx, claim, actor_id=caller.user_id)
    )


@router.put("/claims/{claim_id}", response_model=ClaimOut)
def update_claim_endpoint(
    claim_id: uuid.UUID,
    payload: ClaimUpdate,
    session: Session = Depends(db_session),
    caller: Caller = Depends(get_caller),
    ctx: RequestOrgContext = Depends(get_org_context),
) -> ClaimOut:
    claim = update_claim(
        session,
        ctx=ctx,
        caller=caller,
        claim_id=claim_id,
        changes=payload.model_dump(exclude_unset=True),
    )
    return ClaimOut.from_claim(claim)


@router.get("/claims/{claim_id}/events", response_model=list[ClaimEventOut])
def list_claim_events_endpoint(
    claim_id: uuid.UUID,
    session: Session = Depends(db_session),
    ctx: RequestOrgContext = Depends(get_org_context),
) -> list[ClaimEventOut]:
    events = list_claim_events(session, ctx=ctx, claim_id=claim_id)
    return [ClaimEventOut.model_validate(e, from_attributes=True) for e in events]
