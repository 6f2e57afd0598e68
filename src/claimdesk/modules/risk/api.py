from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from claimdesk.api.deps import get_org_context
from claimdesk.core.db import db_session
from claimdesk.modules.claims.service import get_claim_for_org
from claimdesk.modules.identity.context import RequestOrgContext
from claimdesk.modules.risk.schemas import RiskAssessmentOut
from claimdesk.modules.risk.service import assess_risk

router = APIRouter(tags=["risk"])


@router.get("/claims/{claim_id}/risk-signals", response_model=RiskAssessmentOut)
def risk_signals_endpoint(
    claim_id: uuid.UUID,
    session: Session = Depends(db_session),
    ctx: RequestOrgContext = Depends(get_org_context),
) -> RiskAssessmentOut:
    claim = get_claim_for_org(session, ctx=ctx, claim_id=claim_id)
    assessment = assess_risk(session, claim=claim, organization_id=ctx.organization_id)
    return RiskAssessmentOut.from_assessment(assessment)
