"""
Name: Content Moderator Tests

Responsibilities:
  - Validate category detection, reasons and scan order
  - Validate whole-word matching vs. literal link matching
  - Validate config overrides and the disabled switch
"""

import pytest

from portal.application.content_moderation import (
    BANNED_KEYWORDS,
    CATEGORY_REASONS,
    SAFE_VERDICT,
    KeywordContentValidator,
    ModerationCategory,
    PassThroughContentValidator,
    get_content_validator,
    parse_keyword_overrides,
    validate_content,
)

pytestmark = pytest.mark.unit


@pytest.fixture
def validator() -> KeywordContentValidator:
    return KeywordContentValidator()


class TestKeywordContentValidator:
    @pytest.mark.parametrize(
        "text",
        [
            "Guest lecture on compiler design this Friday",
            "Semester assessment schedule is out",
            "Photos from the Sussex exchange programme",
            "Dickens reading club meets at 5",
            "",
            None,
        ],
    )
    def test_safe_text(self, validator, text):
        assert validator.validate(text) == SAFE_VERDICT

    @pytest.mark.parametrize(
        "text,category",
        [
            ("Free PORN here", ModerationCategory.EXPLICIT),
            ("what the shit", ModerationCategory.PROFANITY),
            ("that is racist", ModerationCategory.HATE_SPEECH),
            ("stop the caste abuse", ModerationCategory.HATE_SPEECH),
            ("Easy Money from home!", ModerationCategory.SCAM),
            ("join us at t.me/freecash", ModerationCategory.SUSPICIOUS_LINKS),
            ("https://chat.whatsapp.com/abc", ModerationCategory.SUSPICIOUS_LINKS),
        ],
    )
    def test_detects_category(self, validator, text, category):
        verdict = validator.validate(text)

        assert verdict.is_safe is False
        assert verdict.category == category
        assert verdict.reason == CATEGORY_REASONS[category]

    def test_reasons_are_fixed_strings(self):
        assert CATEGORY_REASONS[ModerationCategory.SUSPICIOUS_LINKS] == (
            "External messenger or suspicious links are not allowed."
        )
        assert CATEGORY_REASONS[ModerationCategory.PROFANITY] == "Abusive language is not allowed."

    def test_first_category_in_scan_order_wins(self, validator):
        # Both scam and explicit terms; explicit is scanned first.
        verdict = validator.validate("easy money and nude pics")
        assert verdict.category == ModerationCategory.EXPLICIT

    @pytest.mark.parametrize("text", ["sexé video", "ñporn clip", "Shitê happens"])
    def test_accented_letters_do_not_extend_words(self, validator, text):
        assert validator.validate(text).is_safe is False

    def test_ascii_word_boundaries_keep_substrings_safe(self, validator):
        assert validator.validate("assessment on dickens").is_safe
        assert validator.validate("sexé video").category == ModerationCategory.EXPLICIT

    def test_links_match_inside_words(self, validator):
        verdict = validator.validate("contact:t.me/xyz")
        assert verdict.category == ModerationCategory.SUSPICIOUS_LINKS

    def test_keyword_metacharacters_are_literal(self):
        validator = KeywordContentValidator({ModerationCategory.SUSPICIOUS_LINKS: ["a.b/"]})

        assert validator.validate("axb/").is_safe
        assert not validator.validate("see a.b/c").is_safe

    def test_override_replaces_category_only(self):
        validator = KeywordContentValidator({ModerationCategory.SCAM: ["crypto doubler"]})

        assert validator.validate("easy money").is_safe
        assert validator.validate("Crypto Doubler scheme").category == ModerationCategory.SCAM
        assert validator.validate("porn").category == ModerationCategory.EXPLICIT

    def test_empty_override_disables_category(self):
        validator = KeywordContentValidator({ModerationCategory.HATE_SPEECH: []})
        assert validator.validate("terrorist").is_safe

    def test_rule_count(self, validator):
        assert validator.rule_count == sum(len(words) for words in BANNED_KEYWORDS.values())


def test_pass_through_accepts_everything():
    assert PassThroughContentValidator().validate("porn t.me/x") == SAFE_VERDICT


class TestParseKeywordOverrides:
    def test_empty(self):
        assert parse_keyword_overrides("") == {}
        assert parse_keyword_overrides("   ") == {}

    def test_valid_json_with_aliases(self):
        overrides = parse_keyword_overrides(
            '{"scam": ["Quick Loan", " "], "suspiciousLinks": ["discord.gg/"], "hateSpeech": []}'
        )

        assert overrides == {
            ModerationCategory.SCAM: ("quick loan",),
            ModerationCategory.SUSPICIOUS_LINKS: ("discord.gg/",),
            ModerationCategory.HATE_SPEECH: (),
        }

    @pytest.mark.parametrize("raw", ["{not json", "[1, 2]", '"scam"'])
    def test_malformed_is_ignored(self, raw):
        assert parse_keyword_overrides(raw) == {}

    def test_unknown_category_and_bad_values_are_skipped(self):
        overrides = parse_keyword_overrides(
            '{"gambling": ["bet"], "scam": "easy money", "explicit": ["nsfw", 3]}'
        )
        assert overrides == {ModerationCategory.EXPLICIT: ("nsfw",)}


class TestConfiguredValidator:
    def test_default_is_keyword_validator(self):
        assert isinstance(get_content_validator(), KeywordContentValidator)
        assert get_content_validator() is get_content_validator()

    def test_disabled_by_settings(self, monkeypatch):
        monkeypatch.setenv("MODERATION_ENABLED", "false")

        assert isinstance(get_content_validator(), PassThroughContentValidator)
        assert validate_content("porn").is_safe

    def test_overrides_from_settings(self, monkeypatch):
        monkeypatch.setenv("MODERATION_KEYWORDS_CONFIG", '{"scam": ["crypto doubler"]}')

        assert not validate_content("crypto doubler").is_safe
        assert validate_content("easy money").is_safe

    def test_validate_content_uses_defaults(self):
        verdict = validate_content("Join my telegram link")

        assert verdict.category == ModerationCategory.SUSPICIOUS_LINKS
