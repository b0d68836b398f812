"""
Name: Content Moderator (keyword deny-list)

Responsibilities:
  - Scan untrusted post text against categorized banned keywords
  - Return a verdict (is_safe + fixed human-readable reason), never raise
  - Keep the strategy pluggable behind the ContentValidator protocol

Collaborators:
  - crosscutting/config.py: moderation_enabled, moderation_keywords_config
  - application/post_submission.py: applies the validator per field

Rules:
  - Categories are scanned in a fixed order; the first hit wins
  - Word categories match whole ASCII words, case-insensitive
    ("assessment" does not hit "ass"; a trailing accented letter still
    leaves "sex" a whole word)
  - suspicious_links matches as an escaped literal substring ("t.me/")

Notes:
  - Static list: no context awareness, false positives are accepted
  - Logs never include the scanned text, only the category
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from typing import Final, Mapping, Optional, Protocol, Sequence, Tuple

from ..crosscutting.config import get_settings
from ..crosscutting.logger import logger


class ModerationCategory(str, Enum):
    """Keyword categories, declared in scan order."""

    EXPLICIT = "explicit"
    PROFANITY = "profanity"
    HATE_SPEECH = "hate_speech"
    SCAM = "scam"
    SUSPICIOUS_LINKS = "suspicious_links"


FALLBACK_REASON: Final[str] = "Inappropriate content detected."

CATEGORY_REASONS: Final[dict[ModerationCategory, str]] = {
    ModerationCategory.EXPLICIT: "Explicit content is not allowed.",
    ModerationCategory.PROFANITY: "Abusive language is not allowed.",
    ModerationCategory.HATE_SPEECH: "Hate speech or discriminatory terms are not allowed.",
    ModerationCategory.SCAM: "Potential scam or fraud-related content detected.",
    ModerationCategory.SUSPICIOUS_LINKS: "External messenger or suspicious links are not allowed.",
}

BANNED_KEYWORDS: Final[dict[ModerationCategory, Tuple[str, ...]]] = {
    ModerationCategory.EXPLICIT: (
        "sex",
        "porn",
        "nude",
        "xxx",
        "blowjob",
        "sexvideo",
        "erotic",
        "naked",
        "pornography",
    ),
    ModerationCategory.PROFANITY: (
        "fuck",
        "bitch",
        "asshole",
        "bastard",
        "shit",
        "motherfucker",
        "dick",
        "pussy",
    ),
    ModerationCategory.HATE_SPEECH: (
        "racist",
        "casteist",
        "terrorist",
        "nazi",
        "hate",
        "discrimination",
        "religious abuse",
        "caste abuse",
    ),
    ModerationCategory.SCAM: (
        "easy money",
        "quick cash",
        "pay to join",
        "earn fast",
        "become rich quick",
        "lottery winner",
        "investment double",
    ),
    ModerationCategory.SUSPICIOUS_LINKS: (
        "t.me/",
        "chat.whatsapp.com/",
        "bit.ly/scam",
        "tinyurl.com/scam",
        "telegram link",
        "whatsapp group link",
    ),
}

# R: Config JSON may use the camelCase names of the original keyword tables.
_CATEGORY_ALIASES: Final[dict[str, ModerationCategory]] = {
    "hatespeech": ModerationCategory.HATE_SPEECH,
    "suspiciouslinks": ModerationCategory.SUSPICIOUS_LINKS,
}


@dataclass(frozen=True, slots=True)
class ModerationVerdict:
    """Outcome of scanning one text."""

    is_safe: bool
    reason: Optional[str] = None
    category: Optional[ModerationCategory] = None


SAFE_VERDICT: Final[ModerationVerdict] = ModerationVerdict(is_safe=True)


class ContentValidator(Protocol):
    """Strategy interface for moderation backends."""

    def validate(self, text: Optional[str]) -> ModerationVerdict: ...


@dataclass(frozen=True, slots=True)
class _KeywordRule:
    """Compiled rule (category + keyword + regex)."""

    category: ModerationCategory
    keyword: str
    regex: re.Pattern[str]


def _compile_rule(category: ModerationCategory, keyword: str) -> _KeywordRule:
    escaped = re.escape(keyword)
    if category == ModerationCategory.SUSPICIOUS_LINKS:
        pattern = escaped
    else:
        pattern = rf"\b{escaped}\b"
    return _KeywordRule(
        category=category,
        keyword=keyword,
        # R: ASCII word boundaries; an attached accented letter does not shield a word.
        regex=re.compile(pattern, re.IGNORECASE | re.ASCII),
    )


class KeywordContentValidator:
    """
    Deny-list validator.

    Args:
        keywords: Per-category keyword lists; categories left out use
            BANNED_KEYWORDS
    """

    def __init__(
        self,
        keywords: Mapping[ModerationCategory, Sequence[str]] | None = None,
    ):
        merged = dict(BANNED_KEYWORDS)
        for category, words in (keywords or {}).items():
            merged[ModerationCategory(category)] = tuple(words)

        # R: Rules in category declaration order => deterministic first hit.
        self._rules: Tuple[_KeywordRule, ...] = tuple(
            _compile_rule(category, keyword)
            for category in ModerationCategory
            for keyword in merged.get(category, ())
            if keyword and keyword.strip()
        )

    @property
    def rule_count(self) -> int:
        return len(self._rules)

    def validate(self, text: Optional[str]) -> ModerationVerdict:
        if not text:
            return SAFE_VERDICT

        for rule in self._rules:
            if rule.regex.search(text):
                logger.debug(
                    "Moderation hit", extra={"category": rule.category.value}
                )
                return ModerationVerdict(
                    is_safe=False,
                    reason=CATEGORY_REASONS.get(rule.category, FALLBACK_REASON),
                    category=rule.category,
                )

        return SAFE_VERDICT


class PassThroughContentValidator:
    """Accepts every text (moderation disabled)."""

    def validate(self, text: Optional[str]) -> ModerationVerdict:
        return SAFE_VERDICT


def _parse_category(name: object) -> ModerationCategory | None:
    if not isinstance(name, str) or not name.strip():
        return None
    key = name.strip().lower()
    if key in _CATEGORY_ALIASES:
        return _CATEGORY_ALIASES[key]
    try:
        return ModerationCategory(key)
    except ValueError:
        return None


def parse_keyword_overrides(raw: str) -> dict[ModerationCategory, Tuple[str, ...]]:
    """
    Parse MODERATION_KEYWORDS_CONFIG.

    Format:
    {
        "scam": ["easy money", "quick cash"],
        "suspiciousLinks": ["t.me/"]
    }

    Malformed JSON, unknown categories and non-list values are logged and
    ignored.
    """
    raw = (raw or "").strip()
    if not raw:
        return {}

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        logger.warning(
            "Invalid MODERATION_KEYWORDS_CONFIG (JSON)", extra={"error": str(exc)}
        )
        return {}

    if not isinstance(data, dict):
        logger.warning("Invalid MODERATION_KEYWORDS_CONFIG (shape)")
        return {}

    overrides: dict[ModerationCategory, Tuple[str, ...]] = {}
    for name, words in data.items():
        category = _parse_category(name)
        if category is None:
            logger.warning("Unknown moderation category", extra={"category": name})
            continue
        if not isinstance(words, list):
            logger.warning(
                "Moderation keywords must be a list", extra={"category": name}
            )
            continue
        overrides[category] = tuple(
            w.strip().lower() for w in words if isinstance(w, str) and w.strip()
        )
    return overrides


@lru_cache(maxsize=1)
def get_content_validator() -> ContentValidator:
    """Validator configured from settings (cached)."""
    settings = get_settings()
    if not settings.moderation_enabled:
        return PassThroughContentValidator()
    return KeywordContentValidator(
        parse_keyword_overrides(settings.moderation_keywords_config)
    )


def clear_content_validator_cache() -> None:
    """Clear cache (tests / config reload)."""
    get_content_validator.cache_clear()


def validate_content(text: Optional[str]) -> ModerationVerdict:
    """Scan text with the configured validator."""
    return get_content_validator().validate(text)
