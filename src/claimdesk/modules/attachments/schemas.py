from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, Field


class AttachmentCreate(BaseModel):
    filename: str = Field(min_length=1, max_length=500)
    file_size_bytes: int = Field(gt=0)
    mime_type: str = Field(min_length=1, max_length=100)


class AttachmentOut(BaseModel):
    id: uuid.UUID
    claim_id: uuid.UUID
    filename: str
    file_size_bytes: int
    mime_type: str
    uploaded_by_user_id: uuid.UUID
    uploaded_by_display_name: str
    created_at: datetime
