"""
Name: User Snapshot and Role Catalog

Responsibilities:
  - Define the closed role enumerations (stored vs resolved)
  - Define the immutable user snapshot consumed by identity policies
  - Normalize raw user-store records into snapshots

Collaborators:
  - identity/role_resolver.py: resolves UserSnapshot -> ResolvedRole
  - identity/permissions.py: derives the action set from a snapshot
  - identity/membership.py: produces updated snapshots on promote/demote

Constraints:
  - No I/O, no caching: a snapshot is a value, callers rebuild it after
    any store mutation
  - club_name/position are only kept while is_club_member is true
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Optional


class StoredRole(str, Enum):
    """R: Role values persisted by the user store."""

    STUDENT = "STUDENT"
    ALUMNI = "ALUMNI"
    ADMIN = "ADMIN"
    # Legacy value written directly by older seed data.
    STUDENT_EDITOR = "STUDENT_EDITOR"

    @classmethod
    def parse(cls, value: object) -> Optional["StoredRole"]:
        """Case-insensitive parse; unknown or empty values yield None."""
        if isinstance(value, StoredRole):
            return value
        if not isinstance(value, str) or not value.strip():
            return None
        try:
            return cls(value.strip().upper())
        except ValueError:
            return None


class ResolvedRole(str, Enum):
    """R: UI-facing role used for route gating."""

    STUDENT = "STUDENT"
    STUDENT_EDITOR = "STUDENT_EDITOR"
    ALUMNI = "ALUMNI"
    ADMIN = "ADMIN"


@dataclass(frozen=True, slots=True)
class ParsedEmail:
    """Joining year and department decoded from an institutional email."""

    joining_year: int
    department: str


_TRUE_STRINGS = frozenset({"true", "1", "yes", "y", "on"})


def _as_flag(value: Any) -> bool:
    """Store flags may arrive as JSON booleans, 0/1 or strings ("false")."""
    if isinstance(value, str):
        return value.strip().lower() in _TRUE_STRINGS
    if isinstance(value, (bool, int)):
        return bool(value)
    return False


@dataclass(frozen=True, slots=True)
class UserSnapshot:
    """
    Point-in-time view of a user record.

    Attributes:
        email: Institutional email (name.YYdept@domain), may be missing
        stored_role: Role persisted at registration, authoritative when present
        is_club_member: Set by an admin promote action
        club_name: Club the member belongs to (only while is_club_member)
        position: Position inside the club (only while is_club_member)
        is_admin: Out-of-band admin flag, overrides every other field
    """

    email: str | None = None
    stored_role: StoredRole | None = None
    is_club_member: bool = False
    club_name: str | None = None
    position: str | None = None
    is_admin: bool = False

    def __post_init__(self) -> None:
        if not self.is_club_member and (self.club_name or self.position):
            object.__setattr__(self, "club_name", None)
            object.__setattr__(self, "position", None)

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "UserSnapshot":
        """
        Build a snapshot from a user-store record.

        Accepts the store's camelCase keys (role/storedRole, isClubMember,
        clubName, isAdmin) as well as snake_case keys.
        """

        def pick(*keys: str) -> Any:
            for key in keys:
                if key in record and record[key] is not None:
                    return record[key]
            return None

        email = pick("email")
        return cls(
            email=email.strip() if isinstance(email, str) and email.strip() else None,
            # R: unknown role strings (e.g. "FACULTY") collapse to None.
            stored_role=StoredRole.parse(pick("stored_role", "storedRole", "role")),
            is_club_member=_as_flag(pick("is_club_member", "isClubMember")),
            club_name=pick("club_name", "clubName"),
            position=pick("position"),
            is_admin=_as_flag(pick("is_admin", "isAdmin")),
        )
