from __future__ import annotations

import enum
import uuid
from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import Date, DateTime, Enum, Numeric, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from claimdesk.core.models import Base, Timestamped, UUIDPrimaryKey, utcnow


class ClaimStatus(str, enum.Enum):
    DRAFT = "DRAFT"
    SUBMITTED = "SUBMITTED"
    UNDER_REVIEW = "UNDER_REVIEW"
    APPROVED = "APPROVED"
    DENIED = "DENIED"
    CLOSED = "CLOSED"


class ClaimType(str, enum.Enum):
    AUTO = "AUTO"
    PROPERTY = "PROPERTY"
    HEALTH = "HEALTH"
    LIABILITY = "LIABILITY"


class Claim(UUIDPrimaryKey, Timestamped, Base):
    __tablename__ = "claims_claim"

    claim_number: Mapped[str] = mapped_column(String(20), unique=True, index=True)
    organization_id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), index=True)
    user_id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), index=True)

    status: Mapped[ClaimStatus] = mapped_column(Enum(ClaimStatus, native_enum=False), index=True)
    type: Mapped[ClaimType] = mapped_column(Enum(ClaimType, native_enum=False), index=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    incident_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    filed_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True, default=utcnow
    )
    amount: Mapped[Decimal | None] = mapped_column(Numeric(15, 2), nullable=True)
