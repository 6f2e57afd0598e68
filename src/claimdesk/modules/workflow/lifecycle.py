"""Claim lifecycle: which operation moves a claim from where to where, and who may do it.

    DRAFT -> SUBMITTED -> UNDER_REVIEW -> APPROVED | DENIED -> CLOSED

Every operation is a row in ``TRANSITIONS``. ``require_permitted`` and
``require_status`` are the only places the table is interpreted.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass

from claimdesk.core.errors import Conflict, Forbidden
from claimdesk.modules.audit.models import EventType
from claimdesk.modules.claims.models import Claim, ClaimStatus
from claimdesk.modules.identity.context import RequestOrgContext
from claimdesk.modules.identity.memberships import ROLE_ADMIN, ROLE_BILLING


@dataclass(frozen=True)
class Transition:
    action: str
    event_type: EventType
    source: frozenset[ClaimStatus]
    target: ClaimStatus
    roles: frozenset[str]
    owner_allowed: bool
    # Role-only gates are checked before the claim is loaded so a caller
    # without the role learns nothing about the claim's state.
    gate_before_load: bool
    forbidden_detail: str
    conflict_detail: str
    default_note: str


TRANSITIONS: dict[str, Transition] = {
    t.action: t
    for t in (
        Transition(
            action="create",
            event_type=EventType.CREATED,
            source=frozenset(),
            target=ClaimStatus.DRAFT,
            roles=frozenset({ROLE_ADMIN}),
            owner_allowed=False,
            gate_before_load=True,
            forbidden_detail="Only admins can create claims",
            conflict_detail="",
            default_note="Claim created",
        ),
        Transition(
            action="update",
            event_type=EventType.UPDATED,
            source=frozenset({ClaimStatus.DRAFT}),
            target=ClaimStatus.DRAFT,
            roles=frozenset({ROLE_ADMIN}),
            owner_allowed=True,
            gate_before_load=False,
            forbidden_detail="Only the claim owner or an admin can update this claim",
            conflict_detail="Can only update claims in DRAFT status",
            default_note="Claim updated",
        ),
        Transition(
            action="submit",
            event_type=EventType.SUBMITTED,
            source=frozenset({ClaimStatus.DRAFT}),
            target=ClaimStatus.SUBMITTED,
            roles=frozenset({ROLE_ADMIN}),
            owner_allowed=True,
            gate_before_load=False,
            forbidden_detail="Only the claim owner or an admin can submit this claim",
            conflict_detail="Can only submit claims in DRAFT status",
            default_note="Claim submitted for review",
        ),
        Transition(
            action="review",
            event_type=EventType.REVIEWED,
            source=frozenset({ClaimStatus.SUBMITTED}),
            target=ClaimStatus.UNDER_REVIEW,
            roles=frozenset({ROLE_ADMIN}),
            owner_allowed=False,
            gate_before_load=True,
            forbidden_detail="Only admins can move claims to review",
            conflict_detail="Can only review claims in SUBMITTED status",
            default_note="Claim moved to review",
        ),
        Transition(
            action="approve",
            event_type=EventType.APPROVED,
            source=frozenset({ClaimStatus.UNDER_REVIEW}),
            target=ClaimStatus.APPROVED,
            roles=frozenset({ROLE_ADMIN, ROLE_BILLING}),
            owner_allowed=False,
            gate_before_load=True,
            forbidden_detail="Only admins or billing users can approve claims",
            conflict_detail="Can only approve claims in UNDER_REVIEW status",
            default_note="Claim approved",
        ),
        Transition(
            action="deny",
            event_type=EventType.DENIED,
            source=frozenset({ClaimStatus.UNDER_REVIEW}),
            target=ClaimStatus.DENIED,
            roles=frozenset({ROLE_ADMIN}),
            owner_allowed=False,
            gate_before_load=True,
            forbidden_detail="Only admins can deny claims",
            conflict_detail="Can only deny claims in UNDER_REVIEW status",
            default_note="Claim denied",
        ),
        Transition(
            action="close",
            event_type=EventType.CLOSED,
            source=frozenset({ClaimStatus.APPROVED, ClaimStatus.DENIED}),
            target=ClaimStatus.CLOSED,
            roles=frozenset({ROLE_ADMIN}),
            owner_allowed=True,
            gate_before_load=False,
            forbidden_detail="Only the claim owner or an admin can close this claim",
            conflict_detail="Can only close claims in APPROVED or DENIED status",
            default_note="Claim closed",
        ),
    )
}


def is_permitted(
    transition: Transition,
    ctx: RequestOrgContext,
    *,
    actor_id: uuid.UUID,
    owner_id: uuid.UUID | None = None,
) -> bool:
    if any(ctx.has_role(role) for role in transition.roles):
        return True
    return transition.owner_allowed and owner_id is not None and owner_id == actor_id


def require_permitted(
    transition: Transition,
    ctx: RequestOrgContext,
    *,
    actor_id: uuid.UUID,
    owner_id: uuid.UUID | None = None,
) -> None:
    if not is_permitted(transition, ctx, actor_id=actor_id, owner_id=owner_id):
        raise Forbidden(transition.forbidden_detail)


def require_status(transition: Transition, claim: Claim) -> None:
    if claim.status not in transition.source:
        raise Conflict(transition.conflict_detail)


def allowed_actions(
    ctx: RequestOrgContext, claim: Claim, *, actor_id: uuid.UUID
) -> list[str]:
    """Operations the caller could run on ``claim`` right now."""
    return [
        t.action
        for t in TRANSITIONS.values()
        if claim.status in t.source
        and is_permitted(t, ctx, actor_id=actor_id, owner_id=claim.user_id)
    ]
