"""
Name: Pytest Configuration and Shared Fixtures

Responsibilities:
  - Configure an isolated settings environment (no .env file)
  - Reset cached settings/validators between tests
  - Provide user snapshot factories

Notes:
  - Date-dependent tests pass current_year explicitly (see PINNED_YEAR)
"""

import os
import sys
from pathlib import Path

import pytest

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from portal.crosscutting import config as app_config  # noqa: E402

app_config.Settings.model_config["env_file"] = None

from portal.application.content_moderation import (  # noqa: E402
    clear_content_validator_cache,
)
from portal.domain.users import StoredRole, UserSnapshot  # noqa: E402

os.environ.setdefault("APP_ENV", "test")

PINNED_YEAR = 2026


def pytest_configure(config) -> None:
    config.addinivalue_line(
        "markers", "unit: Unit tests (fast, no external dependencies)"
    )


@pytest.fixture(autouse=True)
def _reset_caches():
    """R: Settings and validator are lru_cached singletons."""
    app_config.get_settings.cache_clear()
    clear_content_validator_cache()
    yield
    app_config.get_settings.cache_clear()
    clear_content_validator_cache()


# ============================================================================
# Test Data Factories
# ============================================================================


class UserFactory:
    """R: Factory for user snapshots with portal defaults."""

    @staticmethod
    def create(
        email: str | None = "priya.24ece@kongu.edu",
        stored_role: StoredRole | None = StoredRole.STUDENT,
        is_club_member: bool = False,
        club_name: str | None = None,
        position: str | None = None,
        is_admin: bool = False,
    ) -> UserSnapshot:
        return UserSnapshot(
            email=email,
            stored_role=stored_role,
            is_club_member=is_club_member,
            club_name=club_name,
            position=position,
            is_admin=is_admin,
        )


@pytest.fixture
def user_factory() -> type[UserFactory]:
    """R: Provide UserFactory for tests."""
    return UserFactory


@pytest.fixture
def student(user_factory) -> UserSnapshot:
    return user_factory.create()


@pytest.fixture
def alumni(user_factory) -> UserSnapshot:
    return user_factory.create(email="arjun.19mec@kongu.edu", stored_role=StoredRole.ALUMNI)


@pytest.fixture
def admin(user_factory) -> UserSnapshot:
    return user_factory.create(email="admin@kongu.edu", stored_role=StoredRole.ADMIN)
