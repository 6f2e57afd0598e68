"""Claim number allocation.

Numbers look like ``CLM-2026-00042``: a per-year prefix and a five digit,
zero-padded sequence. Callers hold ``allocation_lock`` from allocation through
commit, which serializes allocation inside the process. The unique constraint
on ``claim_number`` catches collisions with other processes; a colliding insert
is rolled back to its savepoint and retried with a fresh number.
"""

from __future__ import annotations

import logging
import re
import threading

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from claimdesk.core.config import settings
from claimdesk.core.errors import Conflict
from claimdesk.core.logging import get_logger, log_event
from claimdesk.modules.claims.models import Claim

logger = get_logger(__name__)

CLAIM_NUMBER_RE = re.compile(r"^CLM-\d{4}-\d{5}$")
MAX_SEQUENCE = 99999

allocation_lock = threading.Lock()


def claim_number_prefix(year: int) -> str:
    return f"CLM-{year}-"


def format_claim_number(year: int, sequence: int) -> str:
    return f"{claim_number_prefix(year)}{sequence:05d}"


def next_claim_number(session: Session, *, year: int) -> str:
    prefix = claim_number_prefix(year)
    # Zero padding keeps lexical and numeric order identical.
    latest = session.scalar(
        select(func.max(Claim.claim_number)).where(Claim.claim_number.like(f"{prefix}%"))
    )
    sequence = int(latest[len(prefix) :]) + 1 if latest else 1
    if sequence > MAX_SEQUENCE:
        raise Conflict(f"Claim number sequence exhausted for {year}")
    return format_claim_number(year, sequence)


def _is_taken(session: Session, claim_number: str) -> bool:
    return session.scalar(select(Claim.id).where(Claim.claim_number == claim_number)) is not None


def insert_numbered_claim(
    session: Session, claim: Claim, *, year: int, max_attempts: int | None = None
) -> Claim:
    """Assign a fresh claim number to ``claim`` and flush it inside a savepoint."""
    attempts = max_attempts or settings.claim_number_max_attempts
    for attempt in range(1, attempts + 1):
        claim.claim_number = next_claim_number(session, year=year)
        try:
            with session.begin_nested():
                session.add(claim)
                session.flush()
        except IntegrityError as e:
            if not _is_taken(session, claim.claim_number):
                # Some other constraint failed; not ours to retry.
                raise
            log_event(
                logger,
                "claim_number.collision",
                level=logging.WARNING,
                claim_number=claim.claim_number,
                attempt=attempt,
                error=str(e.orig),
            )
            continue
        return claim

    raise Conflict("Could not allocate a unique claim number, please retry")
