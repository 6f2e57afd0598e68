"""Organization membership as carried in the token's ``organizations`` claim.

The claim is a mapping keyed by organization id::

    {"organizations": {"<org-uuid>": {"name": "acme-corp", "roles": ["admin", "billing"]}}}

The map key is the canonical organization identifier. An ``id`` field inside
the value is not consulted.

Nothing here raises on malformed input: a missing or oddly shaped claim means
"not a member", never an error.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

ORGANIZATIONS_CLAIM = "organizations"

ROLE_ADMIN = "admin"
ROLE_BILLING = "billing"
ROLE_VIEWER = "viewer"


@dataclass(frozen=True)
class OrgMembership:
    organization_id: str
    name: str | None
    roles: tuple[str, ...]


def _organizations(claims: Mapping[str, Any] | None) -> Mapping[str, Any]:
    if not isinstance(claims, Mapping):
        return {}
    orgs = claims.get(ORGANIZATIONS_CLAIM)
    return orgs if isinstance(orgs, Mapping) else {}


def _roles_of(entry: Any) -> list[str]:
    if not isinstance(entry, Mapping):
        return []
    roles = entry.get("roles")
    if not isinstance(roles, (list, tuple)):
        return []
    return [r for r in roles if isinstance(r, str)]


def org_roles(claims: Mapping[str, Any] | None, organization_id: str) -> list[str]:
    return _roles_of(_organizations(claims).get(organization_id))


def is_member(claims: Mapping[str, Any] | None, organization_id: str) -> bool:
    return organization_id in _organizations(claims)


def org_authorities(claims: Mapping[str, Any] | None) -> set[str]:
    authorities: set[str] = set()
    for org_id, entry in _organizations(claims).items():
        for role in _roles_of(entry):
            authorities.add(f"ORG_{org_id}_ROLE_{role.upper()}")
    return authorities


def list_memberships(claims: Mapping[str, Any] | None) -> list[OrgMembership]:
    out: list[OrgMembership] = []
    for org_id, entry in _organizations(claims).items():
        name = entry.get("name") if isinstance(entry, Mapping) else None
        out.append(
            OrgMembership(
                organization_id=str(org_id),
                name=name if isinstance(name, str) else None,
                roles=tuple(_roles_of(entry)),
            )
        )
    return out
