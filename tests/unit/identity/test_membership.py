"""
Tests for club membership transitions.
"""

import pytest

from portal.domain.users import ResolvedRole
from portal.identity.membership import (
    DEFAULT_CLUB_POSITION,
    demote_from_club,
    promote_to_club_member,
)
from portal.identity.role_resolver import resolve_role

pytestmark = pytest.mark.unit


def test_promote_sets_club_details(student):
    promoted = promote_to_club_member(student, "Robotics", "Secretary")

    assert promoted.is_club_member is True
    assert promoted.club_name == "Robotics"
    assert promoted.position == "Secretary"
    assert promoted.email == student.email
    assert promoted.stored_role == student.stored_role


def test_promote_defaults_position(student):
    promoted = promote_to_club_member(student, "  Music  ")

    assert promoted.club_name == "Music"
    assert promoted.position == DEFAULT_CLUB_POSITION


@pytest.mark.parametrize("club_name", ["", "   ", None])
def test_promote_requires_club_name(student, club_name):
    with pytest.raises(ValueError):
        promote_to_club_member(student, club_name)


def test_promote_does_not_mutate_input(student):
    promote_to_club_member(student, "Robotics")

    assert student.is_club_member is False
    assert student.club_name is None


def test_demote_clears_details(student):
    demoted = demote_from_club(promote_to_club_member(student, "Robotics", "Lead"))

    assert demoted.is_club_member is False
    assert demoted.club_name is None
    assert demoted.position is None


def test_role_follows_membership(student):
    year = 2026
    assert resolve_role(student, current_year=year) == ResolvedRole.STUDENT

    promoted = promote_to_club_member(student, "Robotics")
    assert resolve_role(promoted, current_year=year) == ResolvedRole.STUDENT_EDITOR

    assert resolve_role(demote_from_club(promoted), current_year=year) == ResolvedRole.STUDENT


def test_promoting_admin_keeps_admin(admin):
    assert resolve_role(promote_to_club_member(admin, "Robotics")) == ResolvedRole.ADMIN
