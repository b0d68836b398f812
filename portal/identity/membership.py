"""
Name: Club Membership Transitions

Responsibilities:
  - Produce the snapshot an admin promote/demote action results in
  - Keep club_name/position consistent with is_club_member

Collaborators:
  - domain/users.py: UserSnapshot
  - the user store (external) persists the returned snapshot

Notes:
  - Pure: the input snapshot is never mutated. Resolve role and
    permissions again from the returned snapshot.
"""

from __future__ import annotations

from dataclasses import replace

from ..domain.users import UserSnapshot

DEFAULT_CLUB_POSITION = "Member"


def promote_to_club_member(
    user: UserSnapshot, club_name: str, position: str | None = None
) -> UserSnapshot:
    """Grant club membership; position defaults to "Member"."""
    club = (club_name or "").strip()
    if not club:
        raise ValueError("club_name is required to promote a club member")

    return replace(
        user,
        is_club_member=True,
        club_name=club,
        position=(position or "").strip() or DEFAULT_CLUB_POSITION,
    )


def demote_from_club(user: UserSnapshot) -> UserSnapshot:
    """Revoke club membership and clear club details."""
    return replace(user, is_club_member=False, club_name=None, position=None)
