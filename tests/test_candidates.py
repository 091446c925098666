"""Tests for splitting generated replies into candidates."""

import pytest
from pathlib import Path

import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from backend.services.candidates import FALLBACK_REPLY, parse_candidates


REPLY_A = "Hi Sam, Thursday works great for me. See you then!"
REPLY_B = "Hello Sam, happy to move it. Does 10am on Thursday suit you?"
REPLY_C = "Hey Sam, no problem at all. Thursday it is."


class TestDelimiterSplit:
    """Tests for the primary delimiter split."""

    def test_three_delimited_replies(self):
        raw = f"{REPLY_A}\n---REPLY---\n{REPLY_B}\n---REPLY---\n{REPLY_C}"
        assert parse_candidates(raw) == [REPLY_A, REPLY_B, REPLY_C]

    def test_empty_segments_discarded(self):
        raw = f"---REPLY---{REPLY_A}---REPLY---   ---REPLY---{REPLY_B}---REPLY---{REPLY_C}---REPLY---"
        assert parse_candidates(raw) == [REPLY_A, REPLY_B, REPLY_C]

    def test_ten_segments_keeps_first_three(self):
        raw = "---REPLY---".join(f"Reply text number {i}" for i in range(10))
        assert parse_candidates(raw) == [
            "Reply text number 0",
            "Reply text number 1",
            "Reply text number 2",
        ]

    def test_custom_count(self):
        raw = "---REPLY---".join(["one", "two", "three", "four", "five"])
        assert parse_candidates(raw, n=5) == ["one", "two", "three", "four", "five"]


class TestOpenerSplit:
    """Tests for the blank-line-before-greeting fallback."""

    def test_splits_on_greetings(self):
        raw = f"{REPLY_A}\n\n{REPLY_B}\n\n{REPLY_C}"
        assert parse_candidates(raw) == [REPLY_A, REPLY_B, REPLY_C]

    def test_case_insensitive(self):
        raw = f"{REPLY_A}\n\nthank you Sam, Thursday is fine.\n\ndear Sam, Thursday suits me well."
        assert parse_candidates(raw) == [
            REPLY_A,
            "thank you Sam, Thursday is fine.",
            "dear Sam, Thursday suits me well.",
        ]

    def test_short_segments_dropped(self):
        raw = f"{REPLY_A}\n\nHi there!\n\n{REPLY_B}"
        result = parse_candidates(raw)

        assert "Hi there!" not in result
        assert result == [REPLY_A, REPLY_B, REPLY_A]

    def test_paragraphs_without_opener_stay_together(self):
        raw = f"{REPLY_A}\n\nLooking forward to it."
        assert parse_candidates(raw) == [raw] * 3


class TestLabelStripping:
    """Tests for removal of enumerate-style labels."""

    def test_reply_and_option_labels(self):
        raw = (
            f"Reply 1: {REPLY_A}---REPLY---Option 2: {REPLY_B}---REPLY---3. {REPLY_C}"
        )
        assert parse_candidates(raw) == [REPLY_A, REPLY_B, REPLY_C]

    def test_label_without_colon(self):
        raw = f"Reply 1 {REPLY_A}---REPLY---{REPLY_B}---REPLY---{REPLY_C}"
        assert parse_candidates(raw)[0] == REPLY_A

    def test_label_only_in_leading_position(self):
        text = "We could meet at 3. Or later if you prefer."
        raw = f"{text}---REPLY---{REPLY_B}---REPLY---{REPLY_C}"
        assert parse_candidates(raw)[0] == text


class TestPadding:
    """Tests for the exactly-N guarantee."""

    @pytest.mark.parametrize("raw", ["", "   ", "\n\n", "---REPLY---", None])
    def test_empty_input_gives_apologies(self, raw):
        assert parse_candidates(raw) == [FALLBACK_REPLY] * 3

    def test_single_block_repeated(self):
        assert parse_candidates("Sure, Thursday works for me.") == [
            "Sure, Thursday works for me."
        ] * 3

    def test_two_replies_padded_with_first(self):
        raw = f"{REPLY_A}---REPLY---{REPLY_B}"
        assert parse_candidates(raw) == [REPLY_A, REPLY_B, REPLY_A]

    def test_label_only_segments_never_returned_empty(self):
        result = parse_candidates("1.---REPLY---2.---REPLY---3.")
        assert result == [FALLBACK_REPLY] * 3

    @pytest.mark.parametrize("n", [1, 2, 3, 4, 7])
    def test_always_exactly_n(self, n):
        raw = f"{REPLY_A}---REPLY---{REPLY_B}---REPLY---{REPLY_C}"
        result = parse_candidates(raw, n=n)

        assert len(result) == n
        assert all(candidate for candidate in result)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
