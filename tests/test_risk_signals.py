from __future__ import annotations

import uuid
from datetime import timedelta
from decimal import Decimal

from claimdesk.core.db import SessionLocal
from claimdesk.core.models import utcnow
from claimdesk.modules.claims.models import Claim, ClaimStatus, ClaimType
from claimdesk.modules.claims.service import create_claim
from claimdesk.modules.identity.context import Caller, RequestOrgContext
from claimdesk.modules.risk.service import RiskSeverity, assess_risk, overall_risk

ORG = uuid.UUID("6f1c2a9e-3b7d-4c55-9a0e-1f2d3c4b5a60")
ADMIN = Caller(user_id=uuid.uuid4(), display_name="Ada Admin")
CTX = RequestOrgContext(organization_id=ORG, roles=("admin",))


def _create(session, caller=ADMIN, **kwargs) -> Claim:
    fields = {"claim_type": ClaimType.AUTO}
    fields.update(kwargs)
    return create_claim(session, ctx=CTX, caller=caller, **fields)


def _labels(assessment) -> list[str]:
    return [s.label for s in assessment.signals]


def test_quiet_claim_has_single_no_risk_signal():
    with SessionLocal() as session:
        claim = _create(session, amount=Decimal("2500.00"))
        assessment = assess_risk(session, claim=claim, organization_id=ORG)

    assert assessment.risk_score == 0
    assert assessment.overall_risk == RiskSeverity.LOW
    assert _labels(assessment) == ["No Risk Signals"]
    assert assessment.signals[0].severity == RiskSeverity.LOW


def test_same_day_filing_uses_utc_calendar_date():
    with SessionLocal() as session:
        claim = _create(session, amount=Decimal("2500.00"), incident_date=utcnow().date())
        assessment = assess_risk(session, claim=claim, organization_id=ORG)

    assert _labels(assessment) == ["Same-Day Filing"]
    assert assessment.risk_score == 5


def test_above_average_amount_and_multiple_recent_claims():
    with SessionLocal() as session:
        _create(session, amount=Decimal("1000.00"))
        _create(session, amount=Decimal("1000.00"))
        claim = _create(session, amount=Decimal("10000.00"))
        assessment = assess_risk(session, claim=claim, organization_id=ORG)

    # average 4000 includes the assessed claim itself
    assert _labels(assessment) == ["Above Average Amount", "Multiple Recent Claims"]
    assert assessment.risk_score == 40
    assert assessment.overall_risk == RiskSeverity.MEDIUM


def test_average_is_per_type():
    with SessionLocal() as session:
        _create(session, claim_type=ClaimType.PROPERTY, amount=Decimal("100.00"))
        claim = _create(session, claim_type=ClaimType.AUTO, amount=Decimal("5000.00"))
        assessment = assess_risk(session, claim=claim, organization_id=ORG)

    assert "Above Average Amount" not in _labels(assessment)


def test_claim_without_amount_skips_amount_rules():
    with SessionLocal() as session:
        _create(session, amount=Decimal("1.00"))
        claim = _create(session)
        assessment = assess_risk(session, claim=claim, organization_id=ORG)

    assert _labels(assessment) == ["Multiple Recent Claims"]


def test_high_value_claim():
    with SessionLocal() as session:
        claim = _create(session, amount=Decimal("150000.00"))
        assessment = assess_risk(session, claim=claim, organization_id=ORG)

    assert _labels(assessment) == ["High Value Claim"]
    assert assessment.risk_score == 20
    assert assessment.overall_risk == RiskSeverity.LOW


def test_frequent_claimant_with_long_history():
    with SessionLocal() as session:
        old = utcnow() - timedelta(days=200)
        for i in range(8):
            session.add(
                Claim(
                    claim_number=f"CLM-2000-{i + 1:05d}",
                    organization_id=ORG,
                    user_id=ADMIN.user_id,
                    status=ClaimStatus.CLOSED,
                    type=ClaimType.HEALTH,
                    created_at=old,
                    updated_at=old,
                    filed_date=old,
                )
            )
        session.commit()
        for _ in range(3):
            claim = _create(session)
        assessment = assess_risk(session, claim=claim, organization_id=ORG)

    # 3 recent claims, 11 in total
    assert _labels(assessment) == ["Multiple Recent Claims", "High Claim History"]
    assert assessment.risk_score == 25
    assert assessment.overall_risk == RiskSeverity.MEDIUM

    with SessionLocal() as session:
        claim = _create(session)
        assessment = assess_risk(session, claim=claim, organization_id=ORG)

    assert _labels(assessment) == ["Frequent Claimant", "High Claim History"]
    assert assessment.risk_score == 40


def test_other_users_and_organizations_do_not_count():
    other_user = Caller(user_id=uuid.uuid4(), display_name="Someone Else")
    other_org = RequestOrgContext(organization_id=uuid.uuid4(), roles=("admin",))
    with SessionLocal() as session:
        for _ in range(4):
            _create(session, caller=other_user)
            create_claim(session, ctx=other_org, caller=ADMIN, claim_type=ClaimType.AUTO)
        claim = _create(session)
        assessment = assess_risk(session, claim=claim, organization_id=ORG)

    assert _labels(assessment) == ["No Risk Signals"]


def test_overall_thresholds():
    assert overall_risk(50) == RiskSeverity.HIGH
    assert overall_risk(49) == RiskSeverity.MEDIUM
    assert overall_risk(25) == RiskSeverity.MEDIUM
    assert overall_risk(24) == RiskSeverity.LOW
