# src/core/permissions.py
from __future__ import annotations

from typing import Any, Optional

from src.core.models import Resource

SUPER_ADMIN = "superAdmin"


def can_approve(role: Optional[str], resource: Resource) -> bool:
    # role None = not resolved yet (or failed) -> closed
    return role == SUPER_ADMIN and not resource.is_approved


def is_owner(resource: Resource, user_id: Any) -> bool:
    if resource.user_id is None or user_id in (None, ""):
        return False
    return str(resource.user_id) == str(user_id)
