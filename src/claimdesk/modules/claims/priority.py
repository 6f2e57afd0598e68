from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import NamedTuple

from claimdesk.core.models import as_utc, utcnow
from claimdesk.modules.claims.models import ClaimStatus, ClaimType

PRIORITY_LABELS = ("CRITICAL", "HIGH", "MEDIUM", "LOW")

_AMOUNT_TIERS: tuple[tuple[Decimal, int], ...] = (
    (Decimal("100000"), 40),
    (Decimal("50000"), 30),
    (Decimal("10000"), 20),
    (Decimal("1000"), 10),
)

_TYPE_POINTS: dict[ClaimType, int] = {
    ClaimType.LIABILITY: 20,
    ClaimType.PROPERTY: 15,
    ClaimType.HEALTH: 10,
    ClaimType.AUTO: 5,
}

# (days older than, points)
_AGE_TIERS: tuple[tuple[int, int], ...] = ((30, 20), (14, 10), (7, 5))

_ACTIVE_STATUSES = frozenset({ClaimStatus.SUBMITTED, ClaimStatus.UNDER_REVIEW})


class PriorityResult(NamedTuple):
    priority: str
    score: int


def _amount_points(amount: Decimal | None) -> int:
    if amount is None:
        return 0
    for threshold, points in _AMOUNT_TIERS:
        if amount >= threshold:
            return points
    return 0


def _type_points(claim_type: ClaimType | str | None) -> int:
    if claim_type is None:
        return 0
    try:
        return _TYPE_POINTS.get(ClaimType(claim_type), 0)
    except ValueError:
        return 0


def _age_points(filed_date: datetime | None, now: datetime) -> int:
    if filed_date is None:
        return 0
    days_old = (as_utc(now) - as_utc(filed_date)).days
    for threshold, points in _AGE_TIERS:
        if days_old > threshold:
            return points
    return 0


def priority_label(score: int) -> str:
    if score >= 70:
        return "CRITICAL"
    if score >= 50:
        return "HIGH"
    if score >= 30:
        return "MEDIUM"
    return "LOW"


def calculate_priority(
    claim_type: ClaimType | str | None,
    amount: Decimal | None,
    filed_date: datetime | None,
    status: ClaimStatus | str | None,
    *,
    now: datetime | None = None,
) -> PriorityResult:
    """Score a claim's urgency. Absent inputs contribute nothing; never raises."""
    score = (
        _amount_points(amount)
        + _type_points(claim_type)
        + _age_points(filed_date, now or utcnow())
    )
    if status is not None and status in _ACTIVE_STATUSES:
        score += 10
    return PriorityResult(priority=priority_label(score), score=score)
