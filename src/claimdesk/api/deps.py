from __future__ import annotations

from typing import Any

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from claimdesk.core.config import settings
from claimdesk.core.errors import Unauthenticated
from claimdesk.core.logging import set_org_context, set_user_context
from claimdesk.core.security import decode_access_token
from claimdesk.modules.identity.context import (
    Caller,
    RequestOrgContext,
    build_org_context,
    resolve_caller,
)

bearer_scheme = HTTPBearer(auto_error=False)


def get_token_claims(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> dict[str, Any]:
    token = credentials.credentials if credentials else None
    if not token:
        raise Unauthenticated("Not authenticated")

    claims = decode_access_token(token)
    if claims is None:
        raise Unauthenticated("Invalid token")
    return claims


async def get_caller(claims: dict[str, Any] = Depends(get_token_claims)) -> Caller:
    caller = resolve_caller(claims)
    set_user_context(str(caller.user_id))
    return caller


async def get_org_context(
    request: Request,
    caller: Caller = Depends(get_caller),
) -> RequestOrgContext:
    ctx = build_org_context(caller.claims, request.headers.get(settings.org_header_name))
    set_org_context(str(ctx.organization_id))
    return ctx
