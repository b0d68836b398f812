"""
Name: Identity Layer Exports

Responsibilities:
  - Re-export role resolution and permission helpers used by route handlers
"""

from .email_roles import detect_role_from_email, is_valid_institutional_email, parse_email
from .membership import demote_from_club, promote_to_club_member
from .permissions import Action, calculate_permissions, can
from .role_resolver import has_role, resolve_role, role_display_name

__all__ = [
    "Action",
    "calculate_permissions",
    "can",
    "demote_from_club",
    "detect_role_from_email",
    "has_role",
    "is_valid_institutional_email",
    "parse_email",
    "promote_to_club_member",
    "resolve_role",
    "role_display_name",
]
