from __future__ import annotations

from fastapi import APIRouter, Depends

from claimdesk.api.deps import get_caller
from claimdesk.modules.identity.context import Caller
from claimdesk.modules.identity.memberships import list_memberships
from claimdesk.modules.identity.schemas import MeOut, MembershipOut

router = APIRouter(tags=["identity"])


@router.get("/auth/me", response_model=MeOut)
def me(caller: Caller = Depends(get_caller)) -> MeOut:
    return MeOut(
        user_id=caller.user_id,
        display_name=caller.display_name,
        email=caller.email,
        organizations=[
            MembershipOut(organization_id=m.organization_id, name=m.name, roles=list(m.roles))
            for m in list_memberships(caller.claims)
        ],
    )
