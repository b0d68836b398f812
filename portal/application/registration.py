"""
Name: Registration Validation

Responsibilities:
  - Validate institutional emails at registration (domain, pattern,
    joining-year window) with caller-visible errors
  - Validate password strength rules
  - Build the profile persisted once at registration (role, department,
    batch year)

Collaborators:
  - identity/email_roles.py: parse_email, detect_role_from_email,
    enrollment_year_window
  - crosscutting/config.py: institutional domain, admin account email
  - crosscutting/exceptions.py: RegistrationValidationError

Notes:
  - Only this module escalates email problems to errors; role detection
    elsewhere silently defaults to STUDENT
  - Passwords are only checked here, never stored or hashed
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Final, Tuple

from ..crosscutting.config import get_settings
from ..crosscutting.exceptions import RegistrationValidationError
from ..domain.users import StoredRole
from ..identity.email_roles import (
    detect_role_from_email,
    enrollment_year_window,
    match_local_part,
    parse_email,
    this_year,
)

INVALID_EMAIL_MESSAGE: Final[str] = "Invalid email format or year restricted"
UNKNOWN_DEPARTMENT: Final[str] = "UNKNOWN"
MIN_PASSWORD_LENGTH: Final[int] = 8

# R: Ordered; the first failing rule is reported.
_PASSWORD_RULES: Tuple[Tuple[Callable[[str], bool], str], ...] = (
    (
        lambda p: len(p) >= MIN_PASSWORD_LENGTH,
        f"Password must be at least {MIN_PASSWORD_LENGTH} characters long",
    ),
    (lambda p: re.search(r"[A-Z]", p) is not None, "Add at least 1 capital letter"),
    (lambda p: re.search(r"[a-z]", p) is not None, "Add at least 1 small letter"),
    (lambda p: re.search(r"[0-9]", p) is not None, "Add at least 1 numeric character"),
    (
        lambda p: re.search(r"[^A-Za-z0-9]", p) is not None,
        "Add at least 1 special character",
    ),
)


@dataclass(frozen=True, slots=True)
class RegistrationProfile:
    """Values computed once from the email and persisted with the user."""

    role: StoredRole
    department: str
    batch_year: int | None


def is_admin_account(email: str) -> bool:
    return email.strip().lower() == get_settings().admin_account_email


def _reject(msg: str) -> RegistrationValidationError:
    return RegistrationValidationError(
        INVALID_EMAIL_MESSAGE, errors=[{"field": "email", "msg": msg}]
    )


def validate_registration_email(email: str | None, *, current_year: int | None = None) -> None:
    """
    Validate an email for registration.

    Raises:
        RegistrationValidationError: wrong domain, missing name.YYdept local
            part, or joining year outside the accepted window
    """
    settings = get_settings()
    domain = settings.institutional_email_domain

    if not email or not email.strip():
        raise RegistrationValidationError(
            "Email is required", errors=[{"field": "email", "msg": "Email is required"}]
        )

    if not email.endswith(domain):
        raise _reject(f"Registration is exclusive to {domain} email addresses")

    if is_admin_account(email):
        return

    match = match_local_part(email)
    if not match:
        raise _reject(f"Format: name.yearDept{domain} (e.g., student.23cse{domain})")

    year = current_year if current_year is not None else this_year()
    low, high = enrollment_year_window(current_year=year)
    year_digits = int(match.group(1))
    if not low <= year_digits <= high:
        raise _reject(f"Year must be between {low:02d} and {high:02d}")


def validate_password_strength(password: str | None) -> None:
    """
    Raises:
        RegistrationValidationError: first failing strength rule
    """
    if not password:
        raise RegistrationValidationError(
            "Password is required",
            errors=[{"field": "password", "msg": "Password is required"}],
        )
    for check, message in _PASSWORD_RULES:
        if not check(password):
            raise RegistrationValidationError(
                message, errors=[{"field": "password", "msg": message}]
            )


def build_registration_profile(
    email: str, *, current_year: int | None = None
) -> RegistrationProfile:
    """
    Compute the role, department and batch year stored at registration.

    The admin account registers as ADMIN; every other address gets the
    email-detected role.
    """
    year = current_year if current_year is not None else this_year()
    parsed = parse_email(email, current_year=year)

    if is_admin_account(email):
        role = StoredRole.ADMIN
    else:
        role = StoredRole(detect_role_from_email(email, current_year=year).value)

    return RegistrationProfile(
        role=role,
        department=parsed.department if parsed else UNKNOWN_DEPARTMENT,
        batch_year=parsed.joining_year if parsed else None,
    )


def prepare_registration(
    email: str, password: str, *, current_year: int | None = None
) -> RegistrationProfile:
    """Validate registration input and return the profile to persist."""
    validate_password_strength(password)
    validate_registration_email(email, current_year=current_year)
    return build_registration_profile(email, current_year=current_year)
