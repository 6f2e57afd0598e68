from __future__ import annotations

from fastapi import APIRouter

from claimdesk.modules.attachments.api import router as attachments_router
from claimdesk.modules.claims.api import router as claims_router
from claimdesk.modules.exports.api import router as exports_router
from claimdesk.modules.identity.api import router as identity_router
from claimdesk.modules.notes.api import router as notes_router
from claimdesk.modules.risk.api import router as risk_router
from claimdesk.modules.workflow.api import router as workflow_router

router = APIRouter()


@router.get("/api/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


router.include_router(identity_router, prefix="/api")
# /claims/export must be matched before /claims/{claim_id}.
router.include_router(exports_router, prefix="/api")
router.include_router(claims_router, prefix="/api")
router.include_router(workflow_router, prefix="/api")
router.include_router(risk_router, prefix="/api")
router.include_router(notes_router, prefix="/api")
router.include_router(attachments_router, prefix="/api")
