"""Unit tests for the result protocol and option models."""

import re

import pytest
from dirkit.fs.models import (
    AUDIO_PATTERN,
    IMAGE_PATTERN,
    JSON_PATTERN,
    TXT_PATTERN,
    VIDEO_PATTERN,
    ListOptions,
    ResultEnvelope,
    Status,
    matches_template,
)


class TestStatus:
    """Tests for the Status enum."""

    def test_values_are_strings(self) -> None:
        """Status members compare equal to their string values."""
        assert Status.OK == "ok"
        assert Status.NOT_EMPTY.value == "not_empty"

    def test_vocabulary_is_closed(self) -> None:
        """Status has exactly the documented members."""
        assert {s.name for s in Status} == {
            "OK",
            "PENDING",
            "NOT_PERMITTED",
            "PATH_NOT_FOUND",
            "ALREADY_EXISTS",
            "NOT_EMPTY",
            "MISSING_CALLBACK",
            "MISSING_OPTIONS",
            "OVERWRITE_NOT_PERMITTED",
            "DECODE_FAILED",
            "PARSE_FAILED",
        }


class TestResultEnvelope:
    """Tests for the ResultEnvelope dataclass."""

    def test_ok_envelope_carries_data(self) -> None:
        """OK envelopes accept a payload."""
        envelope = ResultEnvelope(Status.OK, [1, 2])

        assert envelope.ok is True
        assert envelope.data == [1, 2]

    def test_non_ok_envelope_rejects_data(self) -> None:
        """Non-OK envelopes cannot carry data."""
        with pytest.raises(ValueError, match="cannot carry data"):
            ResultEnvelope(Status.PATH_NOT_FOUND, ["x"])

    def test_failure_envelope_carries_error(self) -> None:
        """Stage failures keep their exception in error."""
        error = ValueError("bad")
        envelope = ResultEnvelope(Status.PARSE_FAILED, error=error)

        assert envelope.data is None
        assert envelope.error is error
        assert envelope.ok is False

    def test_pending(self) -> None:
        """pending is True only for PENDING."""
        assert ResultEnvelope(Status.PENDING).pending is True
        assert ResultEnvelope(Status.OK).pending is False


class TestMatchesTemplate:
    """Tests for template matching."""

    def test_string_is_exact_match(self) -> None:
        """String templates compare the whole full name."""
        assert matches_template("a.txt", "a.txt") is True
        assert matches_template("aa.txt", "a.txt") is False

    def test_pattern_is_searched(self) -> None:
        """Compiled patterns are searched anywhere in the name."""
        assert matches_template("save01.json", re.compile(r"\d+")) is True
        assert matches_template("save.json", re.compile(r"\d+")) is False

    @pytest.mark.parametrize("template", [None, "", 42, ["a.txt"]])
    def test_other_templates_match_everything(self, template: object) -> None:
        """Templates of any other kind do not filter."""
        assert matches_template("anything", template) is True


class TestListOptions:
    """Tests for ListOptions validation."""

    def test_defaults(self) -> None:
        """ListOptions defaults to async with a budget of one directory."""
        options = ListOptions()

        assert options.sync is False
        assert options.template is None
        assert options.search_limit == 1

    def test_rejects_limit_below_one(self) -> None:
        """A search budget below one directory is rejected."""
        with pytest.raises(ValueError, match="search_limit"):
            ListOptions(search_limit=0)


class TestTypedPatterns:
    """Tests for the typed discovery patterns."""

    @pytest.mark.parametrize(
        ("pattern", "name", "expected"),
        [
            (AUDIO_PATTERN, "bgm.ogg", True),
            (AUDIO_PATTERN, "bgm.rpgmvo", True),
            (AUDIO_PATTERN, "bgm.OGG", True),
            (AUDIO_PATTERN, "bgm.ogg.bak", False),
            (IMAGE_PATTERN, "face.png", True),
            (IMAGE_PATTERN, "face.rpgmvp", True),
            (IMAGE_PATTERN, "face.jpg", False),
            (VIDEO_PATTERN, "intro.webm", True),
            (VIDEO_PATTERN, "intro.mp4", False),
            (JSON_PATTERN, "System.json", True),
            (JSON_PATTERN, "System.jsonc", False),
            (TXT_PATTERN, "notes.TXT", True),
            (TXT_PATTERN, "notes.txt~", False),
        ],
    )
    def test_pattern(self, pattern: re.Pattern[str], name: str, expected: bool) -> None:
        """Patterns match the extension at the end of the name only."""
        assert (pattern.search(name) is not None) is expected
