"""
Name: Route Authorization Guards

Responsibilities:
  - Provide FastAPI dependencies for coarse role gating (require_roles)
    and fine action gating (require_actions)
  - Keep the club-member gate used by club post endpoints

Collaborators:
  - identity/role_resolver.py: resolve_role, has_role
  - identity/permissions.py: calculate_permissions, parse_action
  - crosscutting/error_responses.py: unauthorized (401) / forbidden (403)

Constraints:
  - The authentication layer (external) stores the current UserSnapshot in
    request.state.user; these guards never load users themselves
  - Role and permissions are resolved on every request (no caching)

Notes:
  - Several actions in require_actions means "at least one" (OR)
"""

from __future__ import annotations

from typing import Callable

from fastapi import Request

from ..crosscutting.error_responses import forbidden, unauthorized
from ..crosscutting.logger import logger
from ..domain.users import ResolvedRole, UserSnapshot
from .permissions import Action, calculate_permissions, parse_action
from .role_resolver import has_role, resolve_role


def current_user(request: Request) -> UserSnapshot:
    """Return the authenticated snapshot or raise 401."""
    user = getattr(request.state, "user", None)
    if not isinstance(user, UserSnapshot):
        logger.warning("Auth failed: no user on request", extra={"path": request.url.path})
        raise unauthorized("Not authorized")
    return user


def require_user() -> Callable:
    """R: Dependency that only requires an authenticated user."""

    async def dependency(request: Request) -> UserSnapshot:
        return current_user(request)

    return dependency


def require_roles(*roles: ResolvedRole | str) -> Callable:
    """R: Require one of the resolved roles (case-insensitive)."""
    allowed = tuple(roles)

    async def dependency(request: Request) -> UserSnapshot:
        user = current_user(request)
        role = resolve_role(user)
        if not has_role(role, allowed):
            logger.warning(
                "Role gate denied",
                extra={
                    "email": user.email,
                    "role": role.value if role else None,
                    "allowed": [str(getattr(r, "value", r)) for r in allowed],
                    "path": request.url.path,
                },
            )
            raise forbidden("User role not authorized")
        return user

    dependency._required_roles = tuple(str(getattr(r, "value", r)) for r in allowed)
    return dependency


def require_actions(*actions: Action | str) -> Callable:
    """R: Require at least one of the actions (legacy names accepted)."""
    required = set()
    for action in actions:
        parsed = parse_action(action)
        if parsed is None:
            raise ValueError(f"Unknown action: {action}")
        required.add(parsed)

    async def dependency(request: Request) -> UserSnapshot:
        user = current_user(request)
        permissions = calculate_permissions(user)
        if required and not permissions.intersection(required):
            logger.warning(
                "Action gate denied",
                extra={
                    "email": user.email,
                    "actions": sorted(a.value for a in required),
                    "path": request.url.path,
                },
            )
            raise forbidden(
                "Insufficient permissions. Required: "
                + ", ".join(sorted(a.value for a in required))
            )
        return user

    dependency._required_actions = tuple(sorted(a.value for a in required))
    return dependency


def require_club_member() -> Callable:
    """R: Club members and admins only."""

    async def dependency(request: Request) -> UserSnapshot:
        user = current_user(request)
        if not user.is_club_member and resolve_role(user) != ResolvedRole.ADMIN:
            logger.warning(
                "Club gate denied",
                extra={"email": user.email, "path": request.url.path},
            )
            raise forbidden("Only club members can perform this action")
        return user

    return dependency
