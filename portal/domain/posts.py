"""
Name: Post Submission Value Objects

Responsibilities:
  - Define the post type catalog
  - Define the candidate submission checked before persistence

Collaborators:
  - application/post_submission.py: moderation + authoring policy
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping

from ..crosscutting.exceptions import InvalidPostError


class PostType(str, Enum):
    """Post types accepted by the portal feed."""

    GENERAL = "GENERAL"
    CLUB_UPDATE = "CLUB_UPDATE"
    JOB_POST = "JOB_POST"
    RESOURCE = "RESOURCE"
    EVENT = "EVENT"
    EXPERIENCE = "EXPERIENCE"


@dataclass(frozen=True, slots=True)
class PostSubmission:
    """Text fields of a post as submitted by a client."""

    title: str | None
    content: str | None
    post_type: PostType = PostType.GENERAL
    company_name: str | None = None
    location: str | None = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "PostSubmission":
        """Build from a request body (camelCase or snake_case keys).

        Raises:
            InvalidPostError: type is not a known PostType
        """
        raw_type = payload.get("type") or payload.get("post_type") or PostType.GENERAL
        if not isinstance(raw_type, PostType):
            name = str(raw_type).strip().upper()
            try:
                raw_type = PostType(name)
            except ValueError as exc:
                raise InvalidPostError(f"Unknown post type: {name}", field="type") from exc
        return cls(
            title=payload.get("title"),
            content=payload.get("content"),
            post_type=raw_type,
            company_name=payload.get("companyName", payload.get("company_name")),
            location=payload.get("location"),
        )
