from __future__ import annotations

import uuid

from sqlalchemy import ForeignKey, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from claimdesk.core.models import Base, CreatedAt, UUIDPrimaryKey


class ClaimNote(UUIDPrimaryKey, CreatedAt, Base):
    __tablename__ = "notes_claim_note"

    claim_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("claims_claim.id"), index=True
    )
    author_user_id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True))
    author_display_name: Mapped[str] = mapped_column(String(255))
    content: Mapped[str] = mapped_column(Text)

    claim = relationship("Claim")
