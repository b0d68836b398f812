"""
Name: Email Role Parser

Responsibilities:
  - Decode joining year and department from institutional emails
    (name.YYdept@domain)
  - Infer STUDENT vs ALUMNI from the joining year and program duration
  - Expose the accepted enrollment-year window used at registration

Collaborators:
  - crosscutting/config.py: domain, program duration, year-digit window
  - identity/role_resolver.py: falls back to detect_role_from_email
  - application/registration.py: validates the year window

Constraints:
  - Pure functions; a malformed email is never an exception (None / STUDENT)
  - Two-digit years are read in the current century, no fixed epoch

Notes:
  - Every function accepts current_year so callers and tests can pin the clock
"""

from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Final

from ..crosscutting.config import get_settings
from ..domain.users import ParsedEmail, ResolvedRole

# R: ".<2 digits><3 letters>" anchored at the end of the local part.
_LOCAL_PART_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"\.([0-9]{2})([a-z]{3})\Z", re.IGNORECASE
)


def this_year() -> int:
    return datetime.now(timezone.utc).year


def match_local_part(email: str) -> re.Match[str] | None:
    """Match the year/department suffix of the email's local part."""
    local_part = email.split("@", 1)[0]
    return _LOCAL_PART_PATTERN.search(local_part)


def parse_email(
    email: str | None,
    domain: str | None = None,
    *,
    current_year: int | None = None,
) -> ParsedEmail | None:
    """
    Parse an institutional email into joining year and department.

    Args:
        email: Address to parse
        domain: Required suffix (default: settings.institutional_email_domain)
        current_year: Year used to pick the century (default: now, UTC)

    Returns:
        ParsedEmail, or None if the domain or the local-part pattern does not match
    """
    domain = domain if domain is not None else get_settings().institutional_email_domain
    if not email or not email.endswith(domain):
        return None

    match = match_local_part(email)
    if not match:
        return None

    year = current_year if current_year is not None else this_year()
    century = (year // 100) * 100
    return ParsedEmail(
        joining_year=century + int(match.group(1)),
        department=match.group(2).upper(),
    )


def graduation_year(parsed: ParsedEmail, program_duration: int | None = None) -> int:
    duration = (
        program_duration
        if program_duration is not None
        else get_settings().program_duration_years
    )
    return parsed.joining_year + duration


def detect_role_from_email(
    email: str | None,
    *,
    current_year: int | None = None,
    domain: str | None = None,
    program_duration: int | None = None,
) -> ResolvedRole:
    """
    Infer STUDENT or ALUMNI from an institutional email.

    A user graduating this year is still a STUDENT (strict greater-than).
    Unparseable emails default to STUDENT.
    """
    year = current_year if current_year is not None else this_year()
    parsed = parse_email(email, domain, current_year=year)
    if parsed is None:
        return ResolvedRole.STUDENT

    if year > graduation_year(parsed, program_duration):
        return ResolvedRole.ALUMNI
    return ResolvedRole.STUDENT


def is_valid_institutional_email(email: str | None, domain: str | None = None) -> bool:
    """True when the email has the domain suffix and the .YYdept local part."""
    return parse_email(email, domain) is not None


def enrollment_year_window(*, current_year: int | None = None) -> tuple[int, int]:
    """
    Accepted range of two-digit joining years at registration (inclusive).

    The upper bound defaults to the current year's last two digits so future
    cohorts cannot register.
    """
    settings = get_settings()
    year = current_year if current_year is not None else this_year()
    upper = settings.enrollment_year_max_digits
    if upper is None:
        upper = year % 100
    return settings.enrollment_year_min_digits, upper
