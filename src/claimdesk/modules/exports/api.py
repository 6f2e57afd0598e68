from __future__ import annotations

from typing import Literal

from fastapi import APIRouter, Depends
from fastapi.responses import Response
from sqlalchemy.orm import Session

from claimdesk.api.deps import get_org_context
from claimdesk.core.db import db_session
from claimdesk.core.logging import get_logger, log_event
from claimdesk.modules.claims.service import list_all_claims
from claimdesk.modules.exports.service import build_claims_csv, build_claims_xlsx
from claimdesk.modules.identity.context import RequestOrgContext

router = APIRouter(tags=["exports"])
logger = get_logger(__name__)

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


@router.get("/claims/export")
def export_claims(
    format: Literal["csv", "xlsx"] = "csv",
    session: Session = Depends(db_session),
    ctx: RequestOrgContext = Depends(get_org_context),
) -> Response:
    claims = list_all_claims(session, ctx=ctx)
    log_event(logger, "claims.export", format=format, claims_count=len(claims))
    if format == "xlsx":
        return Response(
            content=build_claims_xlsx(claims),
            media_type=XLSX_MEDIA_TYPE,
            headers={"Content-Disposition": 'attachment; filename="claims-export.xlsx"'},
        )
    return Response(
        content=build_claims_csv(claims),
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="claims-export.csv"'},
    )
