from __future__ import annotations

import enum
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from decimal import Decimal

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from claimdesk.core.logging import get_logger, log_event
from claimdesk.core.models import as_utc, utcnow
from claimdesk.modules.claims.models import Claim, ClaimType

logger = get_logger(__name__)

HIGH_VALUE_THRESHOLD = Decimal("100000")
RECENT_WINDOW_DAYS = 90


class RiskSeverity(str, enum.Enum):
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"


@dataclass(frozen=True)
class RiskSignal:
    severity: RiskSeverity
    label: str
    description: str
    points: int = 0


@dataclass
class RiskAssessment:
    overall_risk: RiskSeverity
    risk_score: int
    signals: list[RiskSignal] = field(default_factory=list)


NO_RISK_SIGNAL = RiskSignal(
    severity=RiskSeverity.LOW,
    label="No Risk Signals",
    description="No elevated risk factors detected",
)


def average_amount(
    session: Session, *, organization_id: uuid.UUID, claim_type: ClaimType
) -> Decimal | None:
    avg = session.scalar(
        select(func.avg(Claim.amount)).where(
            Claim.organization_id == organization_id,
            Claim.type == claim_type,
            Claim.amount.is_not(None),
        )
    )
    if avg is None:
        return None
    return Decimal(str(avg))


def count_user_claims(
    session: Session,
    *,
    organization_id: uuid.UUID,
    user_id: uuid.UUID,
    since: datetime | None = None,
) -> int:
    conditions = [Claim.organization_id == organization_id, Claim.user_id == user_id]
    if since is not None:
        conditions.append(Claim.created_at >= since)
    return session.scalar(select(func.count(Claim.id)).where(*conditions)) or 0


def overall_risk(score: int) -> RiskSeverity:
    if score >= 50:
        return RiskSeverity.HIGH
    if score >= 25:
        return RiskSeverity.MEDIUM
    return RiskSeverity.LOW


def assess_risk(
    session: Session,
    *,
    claim: Claim,
    organization_id: uuid.UUID,
    now: datetime | None = None,
) -> RiskAssessment:
    """Evaluate every rule against ``claim`` and the organization's history.

    Rules are independent; all that hold are reported in a fixed order. The
    history aggregates include ``claim`` itself.
    """
    now = now or utcnow()
    signals: list[RiskSignal] = []

    avg = average_amount(session, organization_id=organization_id, claim_type=claim.type)
    if avg is not None and claim.amount is not None and claim.amount > avg * 2:
        signals.append(
            RiskSignal(
                RiskSeverity.HIGH,
                "Above Average Amount",
                "Claim amount is more than 2x the average for this type",
                30,
            )
        )

    recent = count_user_claims(
        session,
        organization_id=organization_id,
        user_id=claim.user_id,
        since=now - timedelta(days=RECENT_WINDOW_DAYS),
    )
    if recent > 3:
        signals.append(
            RiskSignal(
                RiskSeverity.HIGH,
                "Frequent Claimant",
                f"{recent} claims filed by this user in the last {RECENT_WINDOW_DAYS} days",
                25,
            )
        )
    elif recent > 1:
        signals.append(
            RiskSignal(
                RiskSeverity.MEDIUM,
                "Multiple Recent Claims",
                f"{recent} claims filed by this user in the last {RECENT_WINDOW_DAYS} days",
                10,
            )
        )

    if claim.amount is not None and claim.amount > HIGH_VALUE_THRESHOLD:
        signals.append(
            RiskSignal(
                RiskSeverity.HIGH,
                "High Value Claim",
                "Claim exceeds $100,000 threshold",
                20,
            )
        )

    if claim.incident_date is not None and claim.filed_date is not None:
        if as_utc(claim.filed_date).date() == claim.incident_date:
            signals.append(
                RiskSignal(
                    RiskSeverity.LOW,
                    "Same-Day Filing",
                    "Claim filed on the same day as the incident",
                    5,
                )
            )

    lifetime = count_user_claims(
        session, organization_id=organization_id, user_id=claim.user_id
    )
    if lifetime > 10:
        signals.append(
            RiskSignal(
                RiskSeverity.MEDIUM,
                "High Claim History",
                f"{lifetime} total claims from this user",
                15,
            )
        )

    score = sum(s.points for s in signals)
    if not signals:
        signals.append(NO_RISK_SIGNAL)

    assessment = RiskAssessment(overall_risk=overall_risk(score), risk_score=score, signals=signals)
    log_event(
        logger,
        "risk.assessed",
        claim_id=str(claim.id),
        risk_score=score,
        overall_risk=assessment.overall_risk.value,
        signals=[s.label for s in signals],
    )
    return assessment
