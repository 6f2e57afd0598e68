from __future__ import annotations

from datetime import UTC, datetime, timedelta
from decimal import Decimal

from claimdesk.modules.claims.models import ClaimStatus, ClaimType
from claimdesk.modules.claims.priority import calculate_priority, priority_label

NOW = datetime(2026, 6, 1, 12, 0, tzinfo=UTC)


def test_old_large_liability_claim_under_submission_is_critical():
    result = calculate_priority(
        ClaimType.LIABILITY,
        Decimal("150000"),
        NOW - timedelta(days=60),
        ClaimStatus.SUBMITTED,
        now=NOW,
    )
    assert result.score == 40 + 20 + 20 + 10
    assert result.score >= 70
    assert result.priority == "CRITICAL"


def test_absent_inputs_contribute_nothing():
    result = calculate_priority(None, None, None, None, now=NOW)
    assert result.score == 0
    assert result.priority == "LOW"


def test_unknown_type_scores_zero():
    assert calculate_priority("BOAT", None, None, None, now=NOW).score == 0


def test_amount_tiers():
    scores = [
        calculate_priority(None, Decimal(v), None, None, now=NOW).score
        for v in ("999.99", "1000", "10000", "50000", "100000")
    ]
    assert scores == [0, 10, 20, 30, 40]


def test_age_tiers_use_whole_days():
    def age_score(days: float) -> int:
        return calculate_priority(None, None, NOW - timedelta(days=days), None, now=NOW).score

    assert age_score(7) == 0
    assert age_score(8) == 5
    assert age_score(15) == 10
    assert age_score(30.5) == 10
    assert age_score(31) == 20


def test_naive_filed_date_is_read_as_utc():
    naive = (NOW - timedelta(days=31)).replace(tzinfo=None)
    assert calculate_priority(None, None, naive, None, now=NOW).score == 20


def test_active_statuses_add_points():
    for status, points in (
        (ClaimStatus.DRAFT, 0),
        (ClaimStatus.SUBMITTED, 10),
        (ClaimStatus.UNDER_REVIEW, 10),
        (ClaimStatus.APPROVED, 0),
        (ClaimStatus.CLOSED, 0),
    ):
        assert calculate_priority(None, None, None, status, now=NOW).score == points


def test_larger_amount_never_lowers_score():
    previous = -1
    for amount in ("1", "999", "1000", "9999", "10000", "50000", "99999", "100000", "500000"):
        score = calculate_priority(
            ClaimType.AUTO, Decimal(amount), NOW, ClaimStatus.DRAFT, now=NOW
        ).score
        assert score >= previous
        previous = score


def test_labels():
    assert priority_label(70) == "CRITICAL"
    assert priority_label(69) == "HIGH"
    assert priority_label(50) == "HIGH"
    assert priority_label(49) == "MEDIUM"
    assert priority_label(30) == "MEDIUM"
    assert priority_label(29) == "LOW"
