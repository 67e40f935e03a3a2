"""Tests for base/limit segmentation and address translation."""

import pytest

from segmentation import (
    DEFAULT_SEGMENTS,
    InvalidSegment,
    Segment,
    SegmentationFault,
    build_segment_table,
    find_segment,
    translate,
)

DATA = Segment(1, "Data", 1000, 2000)


class TestTranslate:
    """Verify translation boundaries and first-match resolution."""

    def test_base_is_inclusive(self) -> None:
        """The base address translates with offset 0."""
        result = translate([DATA], 1000)
        assert result.segment == DATA
        assert result.offset == 0

    def test_last_address_in_segment(self) -> None:
        """base + limit - 1 is the last valid address."""
        assert translate([DATA], 2999).offset == 1999

    def test_end_is_exclusive(self) -> None:
        """base + limit faults and reports the address."""
        with pytest.raises(SegmentationFault) as excinfo:
            translate([DATA], 3000)
        assert excinfo.value.address == 3000
        assert "3000" in str(excinfo.value)

    def test_physical_address_is_logical_address(self) -> None:
        """No relocation: only the offset is relative to the base."""
        result = translate(DEFAULT_SEGMENTS, 1500)
        assert result.segment.name == "Data"
        assert result.physical_address == 1500
        assert result.logical_address == 1500
        assert result.offset == 500

    def test_overlap_resolves_in_table_order(self) -> None:
        """The first matching segment wins, whatever its base."""
        a = Segment(0, "A", 0, 100)
        b = Segment(1, "B", 50, 100)
        assert translate([a, b], 60).segment == a
        assert translate([b, a], 60).segment == b
        assert translate([a, b], 120).offset == 70

    def test_gap_faults(self) -> None:
        """Addresses between segments are not mapped."""
        table = [Segment(0, "Low", 0, 10), Segment(1, "High", 20, 10)]
        with pytest.raises(SegmentationFault):
            translate(table, 15)

    def test_negative_address_faults(self) -> None:
        """Nothing maps below zero."""
        with pytest.raises(SegmentationFault):
            translate(DEFAULT_SEGMENTS, -1)

    def test_empty_table_faults(self) -> None:
        """An empty table maps nothing."""
        with pytest.raises(SegmentationFault):
            translate([], 0)

    def test_translate_is_repeatable(self) -> None:
        """Identical inputs give identical results and mutate nothing."""
        table = list(DEFAULT_SEGMENTS)
        assert translate(table, 4500) == translate(table, 4500)
        assert table == list(DEFAULT_SEGMENTS)

    def test_default_table_covers_memory(self) -> None:
        """The default layout is contiguous up to 6000."""
        assert translate(DEFAULT_SEGMENTS, 5999).segment.name == "Heap"
        with pytest.raises(SegmentationFault):
            translate(DEFAULT_SEGMENTS, 6000)


class TestFindSegment:
    """Verify the non-raising lookup."""

    def test_hit_and_miss(self) -> None:
        """Returns the segment or None."""
        assert find_segment(DEFAULT_SEGMENTS, 3500).name == "Stack"
        assert find_segment(DEFAULT_SEGMENTS, 7000) is None


class TestBuildSegmentTable:
    """Verify segment table construction and validation."""

    def test_from_dicts_keeps_order(self) -> None:
        """Rows may use either seg_id or id."""
        table = build_segment_table([
            {"id": 2, "name": "Stack", "base": 3000, "limit": 1000},
            {"seg_id": 0, "name": "Code", "base": 0, "limit": 1000},
        ])
        assert [s.seg_id for s in table] == [2, 0]
        assert table[0].end == 4000

    def test_duplicate_id(self) -> None:
        """Segment ids are unique within a table."""
        with pytest.raises(InvalidSegment):
            build_segment_table([DATA, Segment(1, "Other", 0, 10)])

    def test_negative_base(self) -> None:
        """Bases start at zero."""
        with pytest.raises(InvalidSegment):
            build_segment_table([Segment(0, "Bad", -1, 10)])

    def test_zero_limit(self) -> None:
        """A segment covers at least one address."""
        with pytest.raises(InvalidSegment):
            build_segment_table([{"id": 0, "base": 0, "limit": 0}])

    def test_malformed_row(self) -> None:
        """Missing keys are reported as InvalidSegment."""
        with pytest.raises(InvalidSegment):
            build_segment_table([{"id": 0, "base": 0}])

    def test_overlap_is_allowed(self) -> None:
        """Overlapping segments are accepted as configured."""
        table = build_segment_table([Segment(0, "A", 0, 100), Segment(1, "B", 50, 100)])
        assert len(table) == 2
