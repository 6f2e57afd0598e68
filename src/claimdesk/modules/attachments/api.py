from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from claimdesk.api.deps import get_caller, get_org_context
from claimdesk.core.db import db_session
from claimdesk.modules.attachments.schemas import AttachmentCreate, AttachmentOut
from claimdesk.modules.attachments.service import (
    add_attachment,
    delete_attachment,
    list_attachments,
)
from claimdesk.modules.identity.context import Caller, RequestOrgContext

router = APIRouter(tags=["attachments"])


@router.get("/claims/{claim_id}/attachments", response_model=list[AttachmentOut])
def list_attachments_endpoint(
    claim_id: uuid.UUID,
    session: Session = Depends(db_session),
    ctx: RequestOrgContext = Depends(get_org_context),
) -> list[AttachmentOut]:
    attachments = list_attachments(session, ctx=ctx, claim_id=claim_id)
    return [AttachmentOut.model_validate(a, from_attributes=True) for a in attachments]


@router.post(
    "/claims/{claim_id}/attachments",
    response_model=AttachmentOut,
    status_code=status.HTTP_201_CREATED,
)
def add_attachment_endpoint(
    claim_id: uuid.UUID,
    payload: AttachmentCreate,
    session: Session = Depends(db_session),
    caller: Caller = Depends(get_caller),
    ctx: RequestOrgContext = Depends(get_org_context),
) -> AttachmentOut:
    attachment = add_attachment(
        session,
        ctx=ctx,
        caller=caller,
        claim_id=claim_id,
        **payload.model_dump(),
    )
    return AttachmentOut.model_validate(attachment, from_attributes=True)


@router.delete("/claims/{claim_id}/attachments/{attachment_id}")
def delete_attachment_endpoint(
    claim_id: uuid.UUID,
    attachment_id: uuid.UUID,
    session: Session = Depends(db_session),
    ctx: RequestOrgContext = Depends(get_org_context),
) -> Response:
    delete_attachment(session, ctx=ctx, claim_id=claim_id, attachment_id=attachment_id)
    return Response(status_code=204)
