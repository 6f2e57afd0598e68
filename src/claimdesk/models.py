"""
Alembic model import hook.

Importing this module ensures all SQLAlchemy models are registered on Base.metadata.
"""

from __future__ import annotations

# Claim first - every other table references claims_claim
from claimdesk.modules.claims.models import Claim  # noqa: F401

from claimdesk.modules.attachments.models import ClaimAttachment  # noqa: F401
from claimdesk.modules.audit.models import ClaimEvent  # noqa: F401
from claimdesk.modules.notes.models import ClaimNote  # noqa: F401
