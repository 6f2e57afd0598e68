from __future__ import annotations

import uuid

from sqlalchemy import BigInteger, ForeignKey, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from claimdesk.core.models import Base, CreatedAt, UUIDPrimaryKey


class ClaimAttachment(UUIDPrimaryKey, CreatedAt, Base):
    __tablename__ = "attachments_claim_attachment"

    claim_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("claims_claim.id"), index=True
    )
    filename: Mapped[str] = mapped_column(String(500))
    file_size_bytes: Mapped[int] = mapped_column(BigInteger)
    mime_type: Mapped[str] = mapped_column(String(100))
    uploaded_by_user_id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True))
    uploaded_by_display_name: Mapped[str] = mapped_column(String(255))

    claim = relationship("Claim")
