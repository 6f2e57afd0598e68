from __future__ import annotations

import uuid
from decimal import Decimal

import pytest
from fastapi import HTTPException

from claimdesk.core.db import SessionLocal
from claimdesk.modules.attachments.service import add_attachment, list_attachments
from claimdesk.modules.claims.models import ClaimType
from claimdesk.modules.claims.service import (
    create_claim,
    get_claim_for_org,
    get_claim_stats,
    list_all_claims,
    list_claim_events,
    list_claims,
    update_claim,
)
from claimdesk.modules.exports.service import build_claims_csv
from claimdesk.modules.identity.context import Caller, RequestOrgContext
from claimdesk.modules.notes.service import add_note, list_notes
from claimdesk.modules.workflow.service import submit_claim

ORG_A = uuid.UUID("6f1c2a9e-3b7d-4c55-9a0e-1f2d3c4b5a60")
ORG_B = uuid.UUID("0d9e8f7a-6b5c-4d3e-8f21-a0b1c2d3e4f5")

ADMIN = Caller(user_id=uuid.uuid4(), display_name="Ada Admin")
CTX_A = RequestOrgContext(organization_id=ORG_A, roles=("admin",))
CTX_B = RequestOrgContext(organization_id=ORG_B, roles=("admin",))


def test_claims_of_another_organization_are_not_found():
    with SessionLocal() as session:
        claim = create_claim(
            session, ctx=CTX_A, caller=ADMIN, claim_type=ClaimType.AUTO, amount=Decimal("10.00")
        )

        operations = (
            lambda: get_claim_for_org(session, ctx=CTX_B, claim_id=claim.id),
            lambda: list_claim_events(session, ctx=CTX_B, claim_id=claim.id),
            lambda: submit_claim(session, ctx=CTX_B, caller=ADMIN, claim_id=claim.id),
            lambda: update_claim(
                session, ctx=CTX_B, caller=ADMIN, claim_id=claim.id, changes={"description": "x"}
            ),
            lambda: list_notes(session, ctx=CTX_B, claim_id=claim.id),
            lambda: add_note(session, ctx=CTX_B, caller=ADMIN, claim_id=claim.id, content="hi"),
            lambda: list_attachments(session, ctx=CTX_B, claim_id=claim.id),
            lambda: add_attachment(
                session,
                ctx=CTX_B,
                caller=ADMIN,
                claim_id=claim.id,
                filename="a.pdf",
                file_size_bytes=10,
                mime_type="application/pdf",
            ),
        )
        for op in operations:
            with pytest.raises(HTTPException) as excinfo:
                op()
            assert excinfo.value.status_code == 404

        with pytest.raises(HTTPException) as missing:
            get_claim_for_org(session, ctx=CTX_B, claim_id=uuid.uuid4())
        with pytest.raises(HTTPException) as foreign:
            get_claim_for_org(session, ctx=CTX_B, claim_id=claim.id)
        assert missing.value.detail == foreign.value.detail == "Claim not found"


def test_listing_stats_and_export_only_see_own_organization():
    with SessionLocal() as session:
        create_claim(
            session, ctx=CTX_A, caller=ADMIN, claim_type=ClaimType.AUTO, amount=Decimal("10.00")
        )
        create_claim(
            session, ctx=CTX_A, caller=ADMIN, claim_type=ClaimType.HEALTH, amount=Decimal("20.00")
        )
        create_claim(
            session, ctx=CTX_B, caller=ADMIN, claim_type=ClaimType.PROPERTY, amount=Decimal("5.00")
        )

        claims, total = list_claims(session, ctx=CTX_A)
        assert total == 2
        assert {c.organization_id for c in claims} == {ORG_A}

        stats_b = get_claim_stats(session, ctx=CTX_B)
        assert stats_b["total_claims"] == 1
        assert stats_b["claims_by_type"]["PROPERTY"] == 1
        assert stats_b["claims_by_type"]["AUTO"] == 0
        assert stats_b["total_exposure"] == Decimal("5")

        csv_b = build_claims_csv(list_all_claims(session, ctx=CTX_B))
        assert len(csv_b.strip().splitlines()) == 2
        assert ",PROPERTY," in csv_b
