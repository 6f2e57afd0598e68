from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from claimdesk.api.deps import get_caller, get_org_context
from claimdesk.core.db import db_session
from claimdesk.modules.claims.schemas import ClaimOut, TransitionRequest
from claimdesk.modules.identity.context import Caller, RequestOrgContext
from claimdesk.modules.workflow.service import (
    approve_claim,
    close_claim,
    deny_claim,
    review_claim,
    submit_claim,
)

router = APIRouter(tags=["workflow"])


@router.post("/claims/{claim_id}/submit", response_model=ClaimOut)
def submit_claim_endpoint(
    claim_id: uuid.UUID,
    payload: TransitionRequest | None = None,
    session: Session = Depends(db_session),
    caller: Caller = Depends(get_caller),
    ctx: RequestOrgContext = Depends(get_org_context),
) -> ClaimOut:
    note = payload.note if payload else None
    claim = submit_claim(session, ctx=ctx, caller=caller, claim_id=claim_id, note=note)
    return ClaimOut.from_claim(claim)


@router.post("/claims/{claim_id}/review", response_model=ClaimOut)
def review_claim_endpoint(
    claim_id: uuid.UUID,
    payload: TransitionRequest | None = None,
    session: Session = Depends(db_session),
    caller: Caller = Depends(get_caller),
    ctx: RequestOrgContext = Depends(get_org_context),
) -> ClaimOut:
    note = payload.note if payload else None
    claim = review_claim(session, ctx=ctx, caller=caller, claim_id=claim_id, note=note)
    return ClaimOut.from_claim(claim)


@router.post("/claims/{claim_id}/approve", response_model=ClaimOut)
def approve_claim_endpoint(
    claim_id: uuid.UUID,
    payload: TransitionRequest | None = None,
    session: Session = Depends(db_session),
    caller: Caller = Depends(get_caller),
    ctx: RequestOrgContext = Depends(get_org_context),
) -> ClaimOut:
    note = payload.note if payload else None
    claim = approve_claim(session, ctx=ctx, caller=caller, claim_id=claim_id, note=note)
    return ClaimOut.from_claim(claim)


@router.post("/claims/{claim_id}/deny", response_model=ClaimOut)
def deny_claim_endpoint(
    claim_id: uuid.UUID,
    payload: TransitionRequest | None = None,
    session: Session = Depends(db_session),
    caller: Caller = Depends(get_caller),
    ctx: RequestOrgContext = Depends(get_org_context),
) -> ClaimOut:
    note = payload.note if payload else None
    claim = deny_claim(session, ctx=ctx, caller=caller, claim_id=claim_id, note=note)
    return ClaimOut.from_claim(claim)


@router.post("/claims/{claim_id}/close", response_model=ClaimOut)
def close_claim_endpoint(
    claim_id: uuid.UUID,
    payload: TransitionRequest | None = None,
    session: Session = Depends(db_session),
    caller: Caller = Depends(get_caller),
    ctx: RequestOrgContext = Depends(get_org_context),
) -> ClaimOut:
    note = payload.note if payload else None
    claim = close_claim(session, ctx=ctx, caller=caller, claim_id=claim_id, note=note)
    return ClaimOut.from_claim(claim)
