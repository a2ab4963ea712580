"""Tests for garden_advisor.services.answers."""

import math

import pytest

from garden_advisor.errors import MalformedAnswerError
from garden_advisor.services.answers import sanitize_answers, validate_answer


class TestValidateAnswer:
    """Shape checks per question type."""

    def test_single(self, bank):
        """A single choice is one known option id."""
        q = bank.by_id("sun")
        assert validate_answer(q, "shade") == "shade"
        with pytest.raises(MalformedAnswerError):
            validate_answer(q, "moonlight")
        with pytest.raises(MalformedAnswerError):
            validate_answer(q, ["full"])

    def test_multi_dedupes_in_catalog_order(self, bank):
        """Duplicates collapse; order follows the catalog."""
        q = bank.by_id("style")
        assert validate_answer(q, ["formal", "cottage", "formal"]) == ["cottage", "formal"]

    def test_multi_rejects_unknown_and_scalars(self, bank):
        """Lists only, of known ids only."""
        q = bank.by_id("uses")
        with pytest.raises(MalformedAnswerError):
            validate_answer(q, "pets")
        with pytest.raises(MalformedAnswerError):
            validate_answer(q, ["pets", "helipad"])

    def test_scale_range_and_step(self, bank):
        """Scale answers are in range and on the step."""
        q = bank.by_id("maintenance")
        assert validate_answer(q, 3) == 3
        for bad in (0, 6, 2.5, True, math.nan, "3"):
            with pytest.raises(MalformedAnswerError):
                validate_answer(q, bad)

    def test_scale_huge_int(self, bank):
        """Integers too large for a float are out of range, not a crash."""
        q = bank.by_id("maintenance")
        for bad in (10**400, -(10**400), math.inf):
            with pytest.raises(MalformedAnswerError):
                validate_answer(q, bad)

    def test_text(self, bank):
        """Text answers are strings."""
        q = bank.by_id("notes")
        assert validate_answer(q, "") == ""
        with pytest.raises(MalformedAnswerError) as exc:
            validate_answer(q, 12)
        assert exc.value.code == "MALFORMED_ANSWER"
        assert exc.value.question_id == "notes"


class TestSanitize:
    """Bulk filtering never raises."""

    def test_drops_unknown_and_malformed(self, bank):
        """Only well-formed answers to known questions survive."""
        raw = {
            "style": ["modern", "modern"],
            "sun": 7,
            "ghost": "boo",
            "maintenance": 2,
        }
        assert sanitize_answers(raw, bank) == {"style": ["modern"], "maintenance": 2}

    def test_drops_huge_scale_value(self, bank):
        """An oversized integer is skipped like any other bad answer."""
        assert sanitize_answers({"maintenance": 10**400}, bank) == {}

    def test_none_is_empty(self, bank):
        """Missing answers sanitize to an empty dict."""
        assert sanitize_answers(None, bank) == {}
