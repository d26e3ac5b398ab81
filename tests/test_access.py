# File: tests/test_access.py

from types import SimpleNamespace

import pytest

from planner.core.errors import ForbiddenError
from planner.services import access


def project(owner="owner", members=()):
    return SimpleNamespace(owner_id=owner, member_ids=set(members))


@pytest.mark.parametrize(
    "check",
    [access.can_view, access.can_modify_task, access.can_be_assigned],
)
def test_owner_or_member_checks(check):
    p = project(members=["m1"])
    assert check("owner", p)
    assert check("m1", p)
    assert not check("stranger", p)


@pytest.mark.parametrize(
    "check",
    [access.can_modify_project, access.can_delete_or_assign_task],
)
def test_owner_only_checks(check):
    p = project(members=["m1"])
    assert check("owner", p)
    assert not check("m1", p)
    assert not check("stranger", p)


def test_owner_listed_as_member_is_still_owner():
    p = project(members=["owner"])
    assert access.can_modify_project("owner", p)
    assert access.can_view("owner", p)


def test_require_raises_forbidden_with_message():
    with pytest.raises(ForbiddenError) as exc:
        access.require_modify_project("m1", project(members=["m1"]), "Not authorized to delete this project")
    assert exc.value.status_code == 403
    assert exc.value.message == "Not authorized to delete this project"


def test_require_passes_silently():
    assert access.require_view("owner", project()) is None
