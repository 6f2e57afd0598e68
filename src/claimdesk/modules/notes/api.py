from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from claimdesk.api.deps import get_caller, get_org_context
from claimdesk.core.db import db_session
from claimdesk.modules.identity.context import Caller, RequestOrgContext
from claimdesk.modules.notes.schemas import NoteCreate, NoteOut
from claimdesk.modules.notes.service import add_note, list_notes

router = APIRouter(tags=["notes"])


@router.get("/claims/{claim_id}/notes", response_model=list[NoteOut])
def list_notes_endpoint(
    claim_id: uuid.UUID,
    session: Session = Depends(db_session),
    ctx: RequestOrgContext = Depends(get_org_context),
) -> list[NoteOut]:
    notes = list_notes(session, ctx=ctx, claim_id=claim_id)
    return [NoteOut.model_validate(n, from_attributes=True) for n in notes]


@router.post(
    "/claims/{claim_id}/notes", response_model=NoteOut, status_code=status.HTTP_201_CREATED
)
def add_note_endpoint(
    claim_id: uuid.UUID,
    payload: NoteCreate,
    session: Session = Depends(db_session),
    caller: Caller = Depends(get_caller),
    ctx: RequestOrgContext = Depends(get_org_context),
) -> NoteOut:
    note = add_note(session, ctx=ctx, caller=caller, claim_id=claim_id, content=payload.content)
    return NoteOut.model_validate(note, from_attributes=True)
