"""
Tests for core_transcripts.content.validator.ContentValidator.
"""

import pytest

from core_transcripts.content.validator import ContentValidator


class TestRejectionReason:
    @pytest.mark.parametrize("text", [None, "", "short"])
    def test_too_short(self, text) -> None:
        assert ContentValidator.rejection_reason(text) == "too_short"

    def test_exactly_minimum_length_is_valid(self) -> None:
        assert ContentValidator.rejection_reason("a" * 10) is None

    @pytest.mark.parametrize(
        "payload",
        [
            "%PDF-1.7 lorem ipsum dolor sit amet",
            "PK\x03\x04 zipped package body here",
            "\x89PNG\r\n\x1a\n image data follows",
            "GIF89a image data follows here",
            "....JFIF.... jpeg image data",
            "\xff\xd8\xff\xe0 jpeg start of image data",
            "BM\x00\x00 bitmap header and pixel data",
        ],
    )
    def test_binary_signature(self, payload: str) -> None:
        assert ContentValidator.rejection_reason(payload) == "binary_signature"

    def test_signature_after_window_is_ignored(self) -> None:
        text = "x" * 150 + "%PDF"
        assert ContentValidator.rejection_reason(text) is None

    def test_low_printable_ratio(self) -> None:
        text = "abc" + "\x00\x01\x02\x03\x04\x05\x06\x07\x08\x0e" * 2
        assert ContentValidator.rejection_reason(text) == "low_printable_ratio"

    def test_mostly_printable_long_text_is_valid(self) -> None:
        text = "a" * 950 + "\x00" * 50
        assert len(text) == 1000
        assert ContentValidator.rejection_reason(text) is None

    def test_ratio_exactly_at_threshold_is_valid(self) -> None:
        assert ContentValidator.rejection_reason("a" * 7 + "\x00" * 3) is None

    def test_ratio_just_below_threshold_is_rejected(self) -> None:
        text = "a" * 69 + "\x00" * 31
        assert ContentValidator.rejection_reason(text) == "low_printable_ratio"

    def test_whitespace_counts_as_printable(self) -> None:
        assert ContentValidator.rejection_reason("Alice:\n\tHello everyone\r\n") is None


class TestIsValid:
    def test_transcript_is_valid(self) -> None:
        assert ContentValidator.is_valid("Alice: Hello everyone, welcome to the sync.")

    def test_none_is_invalid(self) -> None:
        assert not ContentValidator.is_valid(None)
