# segmentation.py
"""
Base/limit segmentation.

A segment table is a plain ordered list of Segment objects. Translation
is a linear scan that returns the first segment containing the address,
so overlapping segments resolve in table order and gaps fault.
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence

MEMORY_SIZE = 6000
DEFAULT_ADDRESS = 1500


class SegmentationFault(IndexError):
    """Raised when an address is outside every configured segment."""

    def __init__(self, address: int):
        super().__init__(
            f"Segmentation Fault: address {address} is not within any valid segment"
        )
        self.address = address


class InvalidSegment(ValueError):
    """Raised for a bad segment definition or a duplicate segment id."""


@dataclass(frozen=True)
class Segment:
    """
    A named, contiguous logical address range [base, base + limit).

    Attributes:
        seg_id (int): Unique identifier within a segment table
        name (str): Display name (Code, Data, ...)
        base (int): First address of the segment
        limit (int): Segment length
    """
    seg_id: int
    name: str
    base: int
    limit: int

    @property
    def end(self) -> int:
        return self.base + self.limit

    def contains(self, address: int) -> bool:
        return self.base <= address < self.base + self.limit


@dataclass(frozen=True)
class TranslationResult:
    """
    A successful translation.

    The physical address equals the logical address; only the offset is
    computed relative to the segment base.
    """
    segment: Segment
    logical_address: int
    physical_address: int
    offset: int


DEFAULT_SEGMENTS = (
    Segment(0, "Code", 0, 1000),
    Segment(1, "Data", 1000, 2000),
    Segment(2, "Stack", 3000, 1000),
    Segment(3, "Heap", 4000, 2000),
)


def build_segment_table(rows: Iterable) -> List[Segment]:
    """
    Build a segment table from Segment objects or dicts.

    Dict rows use the keys seg_id (or id), name, base and limit.

    Raises:
        InvalidSegment: negative base, non-positive limit or duplicate id
    """
    table: List[Segment] = []
    seen = set()
    for row in rows:
        if isinstance(row, dict):
            try:
                seg_id = row["seg_id"] if "seg_id" in row else row["id"]
                segment = Segment(int(seg_id), str(row.get("name", f"Segment {seg_id}")),
                                  int(row["base"]), int(row["limit"]))
            except (KeyError, TypeError, ValueError) as e:
                raise InvalidSegment(f"Malformed segment row {row!r}") from e
        else:
            segment = row

        if segment.base < 0:
            raise InvalidSegment(f"Segment {segment.seg_id}: base must be >= 0")
        if segment.limit <= 0:
            raise InvalidSegment(f"Segment {segment.seg_id}: limit must be > 0")
        if segment.seg_id in seen:
            raise InvalidSegment(f"Segment {segment.seg_id} already exists")
        seen.add(segment.seg_id)
        table.append(segment)
    return table


def find_segment(segments: Sequence[Segment], address: int) -> Optional[Segment]:
    """Return the first segment containing address, or None."""
    for seg in segments:
        if seg.base <= address < seg.base + seg.limit:
            return seg
    return None


def translate(segments: Sequence[Segment], address: int) -> TranslationResult:
    """
    Translate a logical address against a segment table.

    Args:
        segments (Sequence[Segment]): Segment table, scanned in order
        address (int): Logical address

    Returns:
        TranslationResult: Matched segment, physical address and offset

    Raises:
        SegmentationFault: If no segment contains the address
    """
    seg = find_segment(segments, address)
    if seg is None:
        raise SegmentationFault(address)
    return TranslationResult(
        segment=seg,
        logical_address=address,
        physical_address=address,
        offset=address - seg.base,
    )
