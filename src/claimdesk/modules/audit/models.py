from __future__ import annotations

import enum
import uuid
from datetime import datetime

from sqlalchemy import DateTime, Enum, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from claimdesk.core.models import Base, UUIDPrimaryKey, utcnow


class EventType(str, enum.Enum):
    CREATED = "CREATED"
    UPDATED = "UPDATED"
    SUBMITTED = "SUBMITTED"
    REVIEWED = "REVIEWED"
    APPROVED = "APPROVED"
    DENIED = "DENIED"
    CLOSED = "CLOSED"


class ClaimEvent(UUIDPrimaryKey, Base):
    """Append-only audit row. One per successful lifecycle transition."""

    __tablename__ = "audit_claim_event"

    claim_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("claims_claim.id"), index=True
    )
    actor_user_id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), index=True)
    actor_display_name: Mapped[str | None] = mapped_column(String(255), nullable=True)

    event_type: Mapped[EventType] = mapped_column(Enum(EventType, native_enum=False), index=True)
    note: Mapped[str | None] = mapped_column(Text, nullable=True)
    timestamp: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    claim = relationship("Claim")
