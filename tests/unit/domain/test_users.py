"""
Unit tests for domain/users.py and domain/posts.py value objects.
"""

from dataclasses import FrozenInstanceError

import pytest

from portal.crosscutting.exceptions import InvalidPostError
from portal.domain.posts import PostSubmission, PostType
from portal.domain.users import StoredRole, UserSnapshot

pytestmark = pytest.mark.unit


class TestStoredRoleParse:
    @pytest.mark.parametrize(
        "value,expected",
        [
            ("STUDENT", StoredRole.STUDENT),
            ("alumni", StoredRole.ALUMNI),
            (" Admin ", StoredRole.ADMIN),
            ("student_editor", StoredRole.STUDENT_EDITOR),
            (StoredRole.ALUMNI, StoredRole.ALUMNI),
            ("FACULTY", None),
            ("", None),
            (None, None),
            (3, None),
        ],
    )
    def test_parse(self, value, expected):
        assert StoredRole.parse(value) == expected


class TestUserSnapshot:
    def test_is_immutable(self, student):
        with pytest.raises(FrozenInstanceError):
            student.is_admin = True

    def test_club_details_dropped_without_membership(self):
        user = UserSnapshot(club_name="Robotics", position="Lead")

        assert user.club_name is None
        assert user.position is None

    def test_club_details_kept_for_members(self):
        user = UserSnapshot(is_club_member=True, club_name="Robotics", position="Lead")
        assert (user.club_name, user.position) == ("Robotics", "Lead")

    def test_from_record_camel_case(self):
        user = UserSnapshot.from_record(
            {
                "email": " priya.24ece@kongu.edu ",
                "role": "STUDENT",
                "isClubMember": True,
                "clubName": "Music",
                "position": "Treasurer",
                "isAdmin": False,
            }
        )

        assert user == UserSnapshot(
            email="priya.24ece@kongu.edu",
            stored_role=StoredRole.STUDENT,
            is_club_member=True,
            club_name="Music",
            position="Treasurer",
        )

    def test_from_record_snake_case(self):
        user = UserSnapshot.from_record(
            {"email": "arjun.19mec@kongu.edu", "stored_role": "alumni", "is_admin": 1}
        )

        assert user.stored_role == StoredRole.ALUMNI
        assert user.is_admin is True
        assert user.is_club_member is False

    @pytest.mark.parametrize(
        "raw,expected",
        [
            (True, True),
            (False, False),
            (1, True),
            (0, False),
            ("true", True),
            (" Yes ", True),
            ("false", False),
            ("0", False),
            ("", False),
            ([], False),
        ],
    )
    def test_from_record_flags(self, raw, expected):
        user = UserSnapshot.from_record(
            {"isClubMember": raw, "clubName": "Robotics", "isAdmin": raw}
        )

        assert user.is_club_member is expected
        assert user.is_admin is expected

    def test_string_false_flag_drops_club_details(self):
        user = UserSnapshot.from_record(
            {"email": "priya.24ece@kongu.edu", "isClubMember": "false", "clubName": "Robotics"}
        )

        assert user.is_club_member is False
        assert user.club_name is None

    def test_from_record_missing_fields(self):
        assert UserSnapshot.from_record({}) == UserSnapshot()

    def test_from_record_blank_email(self):
        assert UserSnapshot.from_record({"email": "  "}).email is None


class TestPostSubmission:
    def test_type_is_case_insensitive(self):
        submission = PostSubmission.from_payload({"title": "t", "content": "c", "type": "club_update"})
        assert submission.post_type == PostType.CLUB_UPDATE

    def test_enum_type_is_accepted(self):
        submission = PostSubmission.from_payload({"title": "t", "content": "c", "post_type": PostType.RESOURCE})
        assert submission.post_type == PostType.RESOURCE

    def test_unknown_type_raises_typed_error(self):
        with pytest.raises(InvalidPostError) as exc_info:
            PostSubmission.from_payload({"title": "t", "content": "c", "type": "announcement"})

        assert exc_info.value.field == "type"
        assert exc_info.value.message == "Unknown post type: ANNOUNCEMENT"
        assert exc_info.value.error_code == "POST_INVALID"
