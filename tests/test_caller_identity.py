from __future__ import annotations

import hashlib
import uuid

import pytest
from fastapi import HTTPException

from claimdesk.modules.identity.context import email_user_id, resolve_caller


def test_subject_is_used_as_user_id():
    sub = str(uuid.uuid4())
    caller = resolve_caller({"sub": sub, "email": "jane@example.com", "name": "Jane Doe"})
    assert caller.user_id == uuid.UUID(sub)
    assert caller.display_name == "Jane Doe"
    assert caller.email == "jane@example.com"


def test_email_fallback_is_stable_name_based_uuid():
    first = resolve_caller({"email": "jane@example.com"})
    second = resolve_caller({"email": "jane@example.com"})
    assert first.user_id == second.user_id
    assert first.user_id.version == 3
    assert first.user_id == uuid.UUID(
        bytes=hashlib.md5(b"jane@example.com").digest(), version=3
    )


def test_email_fallback_is_not_normalized():
    assert email_user_id("Jane@example.com") != email_user_id("jane@example.com")


def test_display_name_falls_back_to_email_then_unknown():
    assert resolve_caller({"email": "jane@example.com"}).display_name == "jane@example.com"
    assert resolve_caller({"sub": str(uuid.uuid4())}).display_name == "Unknown"


def test_token_without_subject_or_email_is_unauthenticated():
    with pytest.raises(HTTPException) as excinfo:
        resolve_caller({"name": "Nobody"})
    assert excinfo.value.status_code == 401


def test_non_uuid_subject_is_unauthenticated():
    with pytest.raises(HTTPException) as excinfo:
        resolve_caller({"sub": "user-42", "email": "jane@example.com"})
    assert excinfo.value.status_code == 401
