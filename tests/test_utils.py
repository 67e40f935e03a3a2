"""Tests for presentation helpers."""

import random

import pytest

from engine import Outcome
from utils import (
    RANDOM_PAGE_MAX,
    format_hit_rate,
    format_sequence,
    frame_color,
    parse_sequence,
    random_page,
    segment_color,
)


class TestParseSequence:
    """Verify comma separated sequence parsing."""

    def test_ignores_blanks_and_spaces(self) -> None:
        """Empty tokens are skipped."""
        assert parse_sequence(" 1, 2,,3 ,") == [1, 2, 3]

    def test_rejects_non_numbers(self) -> None:
        """A non-integer token raises ValueError."""
        with pytest.raises(ValueError):
            parse_sequence("1,a,3")

    def test_rejects_non_positive(self) -> None:
        """Page ids start at 1."""
        with pytest.raises(ValueError):
            parse_sequence("1,0")

    def test_format_is_inverse(self) -> None:
        """Formatting produces the text the input box shows."""
        assert format_sequence([1, 2, 5]) == "1,2,5"


class TestHelpers:
    """Verify hit rate, random pages and colors."""

    def test_hit_rate(self) -> None:
        """One decimal place, '0' before any reference."""
        assert format_hit_rate(0, 0) == "0"
        assert format_hit_rate(3, 9) == "25.0"
        assert format_hit_rate(1, 2) == "33.3"

    def test_random_page_in_range(self) -> None:
        """Random pages fall in 1..RANDOM_PAGE_MAX."""
        rng = random.Random(0)
        pages = {random_page(rng) for _ in range(200)}
        assert pages <= set(range(1, RANDOM_PAGE_MAX + 1))

    def test_frame_color(self) -> None:
        """Hits, faults and untouched frames get distinct colors."""
        colors = {frame_color(Outcome.HIT), frame_color(Outcome.FAULT), frame_color(None)}
        assert len(colors) == 3

    def test_segment_color_is_stable(self) -> None:
        """The same id always maps to the same color."""
        assert segment_color(1) == segment_color(1)
        assert segment_color(0) != segment_color(1)
