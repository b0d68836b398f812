"""
Name: Role Resolver

Responsibilities:
  - Collapse admin flag, stored role, club membership and email into one
    ResolvedRole used for UI and route gating
  - Provide display names and the case-insensitive has_role gate

Collaborators:
  - domain/users.py: UserSnapshot, StoredRole, ResolvedRole
  - identity/email_roles.py: email-based inference when no role is stored
  - identity/guards.py: require_roles() uses resolve_role + has_role

Rules (first match wins):
  1. is_admin or stored ADMIN -> ADMIN
  2. club member whose base role is a student -> STUDENT_EDITOR
  3. known stored role -> that role
  4. email present -> detect_role_from_email
  5. otherwise -> STUDENT

Notes:
  - Club membership never changes an ALUMNI account's label; the flag's
    CREATE_CLUB_POST action is handled by identity/permissions.py.
  - Nothing is cached: callers re-run resolve_role after every mutation.
"""

from __future__ import annotations

from typing import Iterable

from ..domain.users import ResolvedRole, StoredRole, UserSnapshot
from .email_roles import detect_role_from_email

_DISPLAY_NAMES: dict[ResolvedRole, str] = {
    ResolvedRole.STUDENT: "Student",
    ResolvedRole.STUDENT_EDITOR: "Club Member",
    ResolvedRole.ALUMNI: "Alumni",
    ResolvedRole.ADMIN: "Administrator",
}


def _base_role(user: UserSnapshot, *, current_year: int | None) -> ResolvedRole:
    if user.stored_role is not None:
        return ResolvedRole(user.stored_role.value)
    if user.email:
        return detect_role_from_email(user.email, current_year=current_year)
    return ResolvedRole.STUDENT


def resolve_role(
    user: UserSnapshot | None, *, current_year: int | None = None
) -> ResolvedRole | None:
    """Resolve the single authoritative role for a user snapshot."""
    if user is None:
        return None

    if user.is_admin or user.stored_role == StoredRole.ADMIN:
        return ResolvedRole.ADMIN

    base = _base_role(user, current_year=current_year)
    if user.is_club_member and base == ResolvedRole.STUDENT:
        return ResolvedRole.STUDENT_EDITOR
    return base


def role_display_name(role: ResolvedRole | str | None) -> str:
    """Human label for a role; unknown values read as "User"."""
    if not role:
        return "User"
    try:
        return _DISPLAY_NAMES[ResolvedRole(_normalize(role))]
    except ValueError:
        return "User"


def _normalize(role: ResolvedRole | StoredRole | str) -> str:
    if isinstance(role, (ResolvedRole, StoredRole)):
        return role.value
    return str(role).strip().upper()


def has_role(
    resolved_role: ResolvedRole | str | None,
    allowed_roles: ResolvedRole | str | Iterable[ResolvedRole | str],
) -> bool:
    """
    Case-insensitive membership test of a resolved role against one role
    or a collection of roles.
    """
    if not resolved_role:
        return False

    if isinstance(allowed_roles, (str, ResolvedRole, StoredRole)):
        allowed = [allowed_roles]
    else:
        allowed = list(allowed_roles)

    current = _normalize(resolved_role)
    return any(_normalize(role) == current for role in allowed)
