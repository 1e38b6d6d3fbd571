"""
Approval eligibility: only a resolved superAdmin may approve, and only
while the resource is still pending.
"""

import pytest

from src.core.models import Resource
from src.core.permissions import SUPER_ADMIN, can_approve, is_owner

PENDING = Resource(id="r1", is_approved=False)
APPROVED = Resource(id="r1", is_approved=True)


@pytest.mark.parametrize("role", ["teacher", "admin", "parent", "SUPERADMIN", "superadmin", ""])
def test_other_roles_never_approve(role):
    assert can_approve(role, PENDING) is False
    assert can_approve(role, APPROVED) is False

def test_super_admin_approves_pending():
    assert can_approve(SUPER_ADMIN, PENDING) is True

@pytest.mark.parametrize("role", [SUPER_ADMIN, "teacher", None])
def test_approved_resource_is_closed(role):
    assert can_approve(role, APPROVED) is False

def test_unset_role_is_closed():
    assert can_approve(None, PENDING) is False

def test_is_owner_compares_as_text():
    r = Resource(id=1, user_id=42)
    assert is_owner(r, "42") is True
    assert is_owner(r, 7) is False

def test_is_owner_without_owner_or_user():
    assert is_owner(Resource(id=1), "42") is False
    assert is_owner(Resource(id=1, user_id=42), None) is False
