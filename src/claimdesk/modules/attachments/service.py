from __future__ import annotations

import uuid

from sqlalchemy import select
from sqlalchemy.orm import Session

from claimdesk.core.errors import BadRequest, NotFound
from claimdesk.core.logging import get_logger, log_event
from claimdesk.modules.attachments.models import ClaimAttachment
from claimdesk.modules.claims.service import get_claim_for_org
from claimdesk.modules.identity.context import Caller, RequestOrgContext

logger = get_logger(__name__)


def list_attachments(
    session: Session, *, ctx: RequestOrgContext, claim_id: uuid.UUID
) -> list[ClaimAttachment]:
    claim = get_claim_for_org(session, ctx=ctx, claim_id=claim_id)
    return list(
        session.scalars(
            select(ClaimAttachment)
            .where(ClaimAttachment.claim_id == claim.id)
            .order_by(ClaimAttachment.created_at.desc())
        )
    )


def add_attachment(
    session: Session,
    *,
    ctx: RequestOrgContext,
    caller: Caller,
    claim_id: uuid.UUID,
    filename: str,
    file_size_bytes: int,
    mime_type: str,
) -> ClaimAttachment:
    claim = get_claim_for_org(session, ctx=ctx, claim_id=claim_id)

    problems: list[str] = []
    if not filename or not filename.strip():
        problems.append("filename: must not be blank")
    if file_size_bytes is None or file_size_bytes <= 0:
        problems.append("file_size_bytes: must be greater than 0")
    if not mime_type or not mime_type.strip():
        problems.append("mime_type: must not be blank")
    if problems:
        raise BadRequest("; ".join(problems))

    attachment = ClaimAttachment(
        claim_id=claim.id,
        filename=filename,
        file_size_bytes=file_size_bytes,
        mime_type=mime_type,
        uploaded_by_user_id=caller.user_id,
        uploaded_by_display_name=caller.display_name,
    )
    session.add(attachment)
    session.commit()
    session.refresh(attachment)
    log_event(
        logger,
        "claim.attachment.added",
        claim_id=str(claim.id),
        attachment_id=str(attachment.id),
        mime_type=mime_type,
        byte_size=file_size_bytes,
    )
    return attachment


def delete_attachment(
    session: Session,
    *,
    ctx: RequestOrgContext,
    claim_id: uuid.UUID,
    attachment_id: uuid.UUID,
) -> None:
    claim = get_claim_for_org(session, ctx=ctx, claim_id=claim_id)
    attachment = session.scalar(
        select(ClaimAttachment).where(
            ClaimAttachment.id == attachment_id, ClaimAttachment.claim_id == claim.id
        )
    )
    if not attachment:
        raise NotFound("Attachment not found")
    session.delete(attachment)
    session.commit()
    log_event(
        logger,
        "claim.attachment.deleted",
        claim_id=str(claim.id),
        attachment_id=str(attachment_id),
    )
