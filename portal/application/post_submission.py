"""
Name: Post Submission Checks

Responsibilities:
  - Decide whether a user may author a post of a given type
  - Moderate the submitted text fields before the post is persisted
  - Offer a collecting variant that reports every violating field

Collaborators:
  - domain/posts.py: PostSubmission, PostType
  - identity/permissions.py: calculate_permissions, Action
  - application/content_moderation.py: ContentValidator, validate_content
  - crosscutting/exceptions.py: ContentRejectedError, PostAuthoringError

Rules:
  - title and content are always moderated; company name and location only
    for JOB_POST
  - moderate_post_submission stops at the first violation (fail-fast)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import FrozenSet, List, Optional, Tuple

from ..crosscutting.exceptions import ContentRejectedError, PostAuthoringError
from ..crosscutting.logger import logger
from ..domain.posts import PostSubmission, PostType
from ..domain.users import UserSnapshot
from ..identity.permissions import Action, calculate_permissions
from .content_moderation import ContentValidator, get_content_validator

# R: Any one of the listed actions is enough to author the type.
POST_TYPE_ACTIONS: dict[PostType, FrozenSet[Action]] = {
    PostType.GENERAL: frozenset({Action.INTERACT}),
    PostType.EXPERIENCE: frozenset({Action.INTERACT}),
    PostType.CLUB_UPDATE: frozenset({Action.CREATE_CLUB_POST}),
    PostType.EVENT: frozenset({Action.CREATE_CLUB_POST, Action.POST_RESOURCE}),
    PostType.JOB_POST: frozenset({Action.CREATE_JOB}),
    PostType.RESOURCE: frozenset({Action.POST_RESOURCE}),
}

_DENIAL_MESSAGES: dict[PostType, str] = {
    PostType.CLUB_UPDATE: "Only club members can post club updates",
    PostType.EVENT: "Only club members or alumni can post events",
    PostType.JOB_POST: "Only alumni can post jobs",
    PostType.RESOURCE: "Only alumni can post resources",
}


@dataclass(frozen=True, slots=True)
class FieldViolation:
    """One moderated field that failed."""

    field: str
    reason: str
    category: Optional[str] = None

    @property
    def message(self) -> str:
        return f"Inappropriate {self.field}: {self.reason}"


def can_author_post(user: UserSnapshot, post_type: PostType) -> bool:
    permissions = calculate_permissions(user)
    return bool(permissions.intersection(POST_TYPE_ACTIONS[post_type]))


def check_post_authoring(user: UserSnapshot, post_type: PostType) -> None:
    """Raise PostAuthoringError if the user may not author this post type."""
    if can_author_post(user, post_type):
        return
    logger.warning("Post authoring denied", extra={"post_type": post_type.value})
    raise PostAuthoringError(
        _DENIAL_MESSAGES.get(post_type, "Not allowed to create this post")
    )


def _moderated_fields(submission: PostSubmission) -> List[Tuple[str, Optional[str]]]:
    fields = [("Title", submission.title), ("Content", submission.content)]
    if submission.post_type == PostType.JOB_POST:
        fields.append(("Company Name", submission.company_name))
        fields.append(("Location", submission.location))
    return fields


def collect_post_violations(
    submission: PostSubmission, validator: ContentValidator | None = None
) -> List[FieldViolation]:
    """Moderate every field and return all violations (in field order)."""
    validator = validator or get_content_validator()
    violations: List[FieldViolation] = []
    for field, value in _moderated_fields(submission):
        verdict = validator.validate(value)
        if not verdict.is_safe:
            violations.append(
                FieldViolation(
                    field=field,
                    reason=verdict.reason or "Inappropriate content detected.",
                    category=verdict.category.value if verdict.category else None,
                )
            )
    return violations


def moderate_post_submission(
    submission: PostSubmission, validator: ContentValidator | None = None
) -> None:
    """
    Moderate a submission, raising on the first unsafe field.

    Raises:
        ContentRejectedError: message "Inappropriate <Field>: <reason>"
    """
    validator = validator or get_content_validator()
    for field, value in _moderated_fields(submission):
        verdict = validator.validate(value)
        if verdict.is_safe:
            continue

        category = verdict.category.value if verdict.category else None
        logger.info(
            "Post submission rejected by moderation",
            extra={
                "field": field,
                "category": category,
                "post_type": submission.post_type.value,
            },
        )
        raise ContentRejectedError(
            field=field,
            reason=verdict.reason or "Inappropriate content detected.",
            category=category,
        )


def check_post_submission(
    user: UserSnapshot,
    submission: PostSubmission,
    validator: ContentValidator | None = None,
) -> None:
    """Authoring policy first, then moderation."""
    check_post_authoring(user, submission.post_type)
    moderate_post_submission(submission, validator)
