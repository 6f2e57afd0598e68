from __future__ import annotations

import uuid

from pydantic import BaseModel


class MembershipOut(BaseModel):
    organization_id: str
    name: str | None
    roles: list[str]


class MeOut(BaseModel):
    user_id: uuid.UUID
    display_name: str
    email: str | None
    organizations: list[MembershipOut]
