from __future__ import annotations

import uuid

import pytest
from fastapi import HTTPException

from claimdesk.core.db import SessionLocal
from claimdesk.modules.attachments.service import (
    add_attachment,
    delete_attachment,
    list_attachments,
)
from claimdesk.modules.claims.models import ClaimType
from claimdesk.modules.claims.service import create_claim
from claimdesk.modules.identity.context import Caller, RequestOrgContext
from claimdesk.modules.notes.service import add_note, list_notes

ORG = uuid.UUID("6f1c2a9e-3b7d-4c55-9a0e-1f2d3c4b5a60")
ADMIN = Caller(user_id=uuid.uuid4(), display_name="Ada Admin")
VIEWER = Caller(user_id=uuid.uuid4(), display_name="Vic Viewer")
ADMIN_CTX = RequestOrgContext(organization_id=ORG, roles=("admin",))
VIEWER_CTX = RequestOrgContext(organization_id=ORG, roles=("viewer",))


def test_any_member_can_add_notes_listed_oldest_first():
    with SessionLocal() as session:
        claim = create_claim(session, ctx=ADMIN_CTX, caller=ADMIN, claim_type=ClaimType.AUTO)
        add_note(session, ctx=ADMIN_CTX, caller=ADMIN, claim_id=claim.id, content="Called insured")
        add_note(session, ctx=VIEWER_CTX, caller=VIEWER, claim_id=claim.id, content="Photos look ok")

        notes = list_notes(session, ctx=VIEWER_CTX, claim_id=claim.id)
        assert [n.content for n in notes] == ["Called insured", "Photos look ok"]
        assert notes[1].author_user_id == VIEWER.user_id
        assert notes[1].author_display_name == "Vic Viewer"


def test_blank_note_is_rejected():
    with SessionLocal() as session:
        claim = create_claim(session, ctx=ADMIN_CTX, caller=ADMIN, claim_type=ClaimType.AUTO)
        with pytest.raises(HTTPException) as excinfo:
            add_note(session, ctx=ADMIN_CTX, caller=ADMIN, claim_id=claim.id, content="   ")
        assert excinfo.value.status_code == 400
        assert list_notes(session, ctx=ADMIN_CTX, claim_id=claim.id) == []


def test_attachments_are_listed_newest_first_and_deletable():
    with SessionLocal() as session:
        claim = create_claim(session, ctx=ADMIN_CTX, caller=ADMIN, claim_type=ClaimType.PROPERTY)
        first = add_attachment(
            session,
            ctx=ADMIN_CTX,
            caller=ADMIN,
            claim_id=claim.id,
            filename="estimate.pdf",
            file_size_bytes=20480,
            mime_type="application/pdf",
        )
        second = add_attachment(
            session,
            ctx=VIEWER_CTX,
            caller=VIEWER,
            claim_id=claim.id,
            filename="roof.jpg",
            file_size_bytes=512000,
            mime_type="image/jpeg",
        )
        assert second.uploaded_by_display_name == "Vic Viewer"

        listed = list_attachments(session, ctx=ADMIN_CTX, claim_id=claim.id)
        assert [a.id for a in listed] == [second.id, first.id]

        delete_attachment(session, ctx=ADMIN_CTX, claim_id=claim.id, attachment_id=first.id)
        assert [a.id for a in list_attachments(session, ctx=ADMIN_CTX, claim_id=claim.id)] == [
            second.id
        ]

        with pytest.raises(HTTPException) as excinfo:
            delete_attachment(session, ctx=ADMIN_CTX, claim_id=claim.id, attachment_id=first.id)
        assert excinfo.value.status_code == 404
        assert excinfo.value.detail == "Attachment not found"


def test_attachment_of_another_claim_is_not_found():
    with SessionLocal() as session:
        claim = create_claim(session, ctx=ADMIN_CTX, caller=ADMIN, claim_type=ClaimType.AUTO)
        other = create_claim(session, ctx=ADMIN_CTX, caller=ADMIN, claim_type=ClaimType.AUTO)
        attachment = add_attachment(
            session,
            ctx=ADMIN_CTX,
            caller=ADMIN,
            claim_id=claim.id,
            filename="a.pdf",
            file_size_bytes=1,
            mime_type="application/pdf",
        )
        with pytest.raises(HTTPException) as excinfo:
            delete_attachment(
                session, ctx=ADMIN_CTX, claim_id=other.id, attachment_id=attachment.id
            )
        assert excinfo.value.status_code == 404


def test_attachment_validation_problems_are_joined():
    with SessionLocal() as session:
        claim = create_claim(session, ctx=ADMIN_CTX, caller=ADMIN, claim_type=ClaimType.AUTO)
        with pytest.raises(HTTPException) as excinfo:
            add_attachment(
                session,
                ctx=ADMIN_CTX,
                caller=ADMIN,
                claim_id=claim.id,
                filename=" ",
                file_size_bytes=0,
                mime_type="",
            )
        assert excinfo.value.status_code == 400
        assert excinfo.value.detail == (
            "filename: must not be blank; "
            "file_size_bytes: must be greater than 0; "
            "mime_type: must not be blank"
        )
