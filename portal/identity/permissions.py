"""
Name: Action Permissions

Responsibilities:
  - Define the catalog of actions (Action)
  - Derive a user's action set from stored role + club membership
  - Resolve legacy permission names to actions

Collaborators:
  - domain/users.py: UserSnapshot, StoredRole
  - identity/guards.py: require_actions() checks against this set
  - application/post_submission.py: maps post types to required actions

Constraints:
  - Base role is the stored role (default STUDENT), never the
    STUDENT_EDITOR synthesis of identity/role_resolver.py
  - Deterministic and side-effect free; recomputed per authorization check

Notes:
  - Complements role gating (has_role) with fine-grained actions
  - Club membership adds CREATE_CLUB_POST for any non-admin base role
"""

from __future__ import annotations

from enum import Enum
from typing import FrozenSet

from ..domain.users import StoredRole, UserSnapshot


class Action(str, Enum):
    """Actions a user may be allowed to perform."""

    # Everyone
    VIEW_CONTENT = "VIEW_CONTENT"
    INTERACT = "INTERACT"  # like, comment

    # Club members
    CREATE_CLUB_POST = "CREATE_CLUB_POST"
    MANAGE_CLUB_POSTS = "MANAGE_CLUB_POSTS"

    # Alumni
    CREATE_JOB = "CREATE_JOB"
    POST_RESOURCE = "POST_RESOURCE"

    # Admin
    APPROVE_CLUB_MEMBER = "APPROVE_CLUB_MEMBER"
    MANAGE_USERS = "MANAGE_USERS"
    MODERATE_CONTENT = "MODERATE_CONTENT"
    ACCESS_ADMIN_PANEL = "ACCESS_ADMIN_PANEL"


ALL_ACTIONS: FrozenSet[Action] = frozenset(Action)

BASE_ACTIONS: FrozenSet[Action] = frozenset({Action.VIEW_CONTENT, Action.INTERACT})

ALUMNI_ACTIONS: FrozenSet[Action] = frozenset(
    {Action.CREATE_JOB, Action.POST_RESOURCE}
)

# R: Older clients still ask for these names.
LEGACY_ACTION_ALIASES: dict[str, Action] = {
    "CREATE_EVENT": Action.CREATE_CLUB_POST,
    "CREATE_JOB": Action.CREATE_JOB,
    "VIEW_EVENTS": Action.VIEW_CONTENT,
    "VIEW_JOBS": Action.VIEW_CONTENT,
}


def parse_action(name: Action | str) -> Action | None:
    """Resolve an Action or an action/legacy name (case-insensitive)."""
    if isinstance(name, Action):
        return name
    key = str(name).strip().upper()
    if key in LEGACY_ACTION_ALIASES:
        return LEGACY_ACTION_ALIASES[key]
    try:
        return Action(key)
    except ValueError:
        return None


def _permission_role(user: UserSnapshot) -> StoredRole:
    if user.is_admin:
        return StoredRole.ADMIN
    return user.stored_role or StoredRole.STUDENT


def calculate_permissions(user: UserSnapshot | None) -> FrozenSet[Action]:
    """
    Calculate the action set for a user snapshot.

    Rules:
      - everyone: VIEW_CONTENT, INTERACT
      - ADMIN: every action, nothing else checked
      - ALUMNI: + CREATE_JOB, POST_RESOURCE
      - club member: + CREATE_CLUB_POST
      - legacy STUDENT_EDITOR stored role: + CREATE_CLUB_POST
    """
    if user is None:
        return frozenset()

    role = _permission_role(user)
    if role == StoredRole.ADMIN:
        return ALL_ACTIONS

    permissions = set(BASE_ACTIONS)

    if role == StoredRole.ALUMNI:
        permissions |= ALUMNI_ACTIONS

    if user.is_club_member:
        permissions.add(Action.CREATE_CLUB_POST)

    # Seeded demo accounts set the legacy role without the flag.
    if role == StoredRole.STUDENT_EDITOR:
        permissions.add(Action.CREATE_CLUB_POST)

    return frozenset(permissions)


def can(permissions: FrozenSet[Action], action: Action | str) -> bool:
    """True if the action (or its legacy alias) is in the permission set."""
    resolved = parse_action(action)
    return resolved is not None and resolved in permissions
