from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, Field


class NoteCreate(BaseModel):
    content: str = Field(min_length=1)


class NoteOut(BaseModel):
    id: uuid.UUID
    claim_id: uuid.UUID
    author_user_id: uuid.UUID
    author_display_name: str
    content: str
    created_at: datetime
