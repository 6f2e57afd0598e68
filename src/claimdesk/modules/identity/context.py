from __future__ import annotations

import hashlib
import uuid
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from claimdesk.core.errors import BadRequest, Forbidden, Unauthenticated
from claimdesk.core.logging import get_logger, log_event
from claimdesk.modules.identity.memberships import (
    ROLE_ADMIN,
    ROLE_BILLING,
    ROLE_VIEWER,
    is_member,
    org_roles,
)

logger = get_logger(__name__)


@dataclass(frozen=True)
class Caller:
    user_id: uuid.UUID
    display_name: str
    email: str | None = None
    claims: Mapping[str, Any] = field(default_factory=dict, repr=False, compare=False)


@dataclass(frozen=True)
class RequestOrgContext:
    organization_id: uuid.UUID
    roles: tuple[str, ...] = ()

    def has_role(self, role: str) -> bool:
        return role in self.roles

    @property
    def is_admin(self) -> bool:
        return self.has_role(ROLE_ADMIN)

    @property
    def is_billing(self) -> bool:
        return self.has_role(ROLE_BILLING)

    @property
    def is_viewer(self) -> bool:
        return self.has_role(ROLE_VIEWER)


def email_user_id(email: str) -> uuid.UUID:
    # Name-based UUID (MD5, version 3) over the raw email bytes, no namespace.
    # The email is not normalized, so "A@x.com" and "a@x.com" map to different ids.
    digest = hashlib.md5(email.encode("utf-8")).digest()  # noqa: S324
    return uuid.UUID(bytes=digest, version=3)


def resolve_caller(claims: Mapping[str, Any]) -> Caller:
    email = claims.get("email") if isinstance(claims.get("email"), str) else None
    sub = claims.get("sub")
    if isinstance(sub, str) and sub:
        try:
            user_id = uuid.UUID(sub)
        except ValueError as e:
            raise Unauthenticated("Invalid token subject") from e
    elif email:
        user_id = email_user_id(email)
    else:
        raise Unauthenticated("Token has neither subject nor email")

    name = claims.get("name")
    if isinstance(name, str) and name:
        display_name = name
    elif email:
        display_name = email
    else:
        display_name = "Unknown"
    return Caller(user_id=user_id, display_name=display_name, email=email, claims=claims)


def build_org_context(claims: Mapping[str, Any], organization_id: str | None) -> RequestOrgContext:
    requested = (organization_id or "").strip()
    if not requested:
        log_event(logger, "org_context.rejected", reason="missing_header")
        raise BadRequest("organization id required")

    roles = org_roles(claims, requested)
    if not roles and not is_member(claims, requested):
        log_event(logger, "org_context.rejected", reason="not_member", requested=requested)
        raise Forbidden("not a member of requested organization")

    try:
        org_uuid = uuid.UUID(requested)
    except ValueError as e:
        raise BadRequest("organization id must be a UUID") from e

    return RequestOrgContext(organization_id=org_uuid, roles=tuple(roles))
