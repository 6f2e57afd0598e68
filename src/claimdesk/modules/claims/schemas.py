from __future__ import annotations

import uuid
from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from claimdesk.modules.claims.models import Claim, ClaimStatus, ClaimType
from claimdesk.modules.claims.priority import calculate_priority


class ClaimCreate(BaseModel):
    type: ClaimType
    description: str | None = None
    incident_date: date | None = None
    amount: Decimal | None = Field(default=None, gt=0, max_digits=15, decimal_places=2)


class ClaimUpdate(BaseModel):
    type: ClaimType | None = None
    description: str | None = None
    incident_date: date | None = None
    amount: Decimal | None = Field(default=None, gt=0, max_digits=15, decimal_places=2)


class TransitionRequest(BaseModel):
    note: str | None = Field(default=None, max_length=2000)


class ClaimOut(BaseModel):
    id: uuid.UUID
    claim_number: str
    user_id: uuid.UUID
    organization_id: uuid.UUID
    status: ClaimStatus
    type: ClaimType
    description: str | None
    incident_date: date | None
    filed_date: datetime | None
    amount: Decimal | None
    created_at: datetime
    updated_at: datetime
    priority: str
    priority_score: int

    @classmethod
    def from_claim(cls, claim: Claim) -> ClaimOut:
        result = calculate_priority(claim.type, claim.amount, claim.filed_date, claim.status)
        return cls(
            id=claim.id,
            claim_number=claim.claim_number,
            user_id=claim.user_id,
            organization_id=claim.organization_id,
            status=claim.status,
            type=claim.type,
            description=claim.description,
            incident_date=claim.incident_date,
            filed_date=claim.filed_date,
            amount=claim.amount,
            created_at=claim.created_at,
            updated_at=claim.updated_at,
            priority=result.priority,
            priority_score=result.score,
        )


class ClaimDetailOut(ClaimOut):
    allowed_actions: list[str] = []


class ClaimPage(BaseModel):
    items: list[ClaimOut]
    total: int
    page: int
    size: int


class ClaimStatsOut(BaseModel):
    total_claims: int
    open_claims: int
    claims_by_status: dict[str, int]
    claims_by_type: dict[str, int]
    total_exposure: Decimal
    approval_rate: float
    claims_this_week: int
    claims_by_priority: dict[str, int]
