# engine.py
"""
Demand-paging simulation engine.

Steps through a fixed page reference sequence one reference at a time,
keeping a frame table, hit/fault counters and an append-only history.
When a fault happens and every frame is occupied, a victim selector
(FIFO, LRU or Optimal) picks the frame to overwrite.
"""

import threading
from collections import deque
from dataclasses import dataclass
from typing import Deque, List, Optional, Sequence, Tuple

DEFAULT_FRAME_COUNT = 3
DEFAULT_SEQUENCE = (1, 2, 3, 4, 1, 2, 5, 1, 2, 3, 4, 5)

FIFO_QUEUE = "queue"
FIFO_CURSOR = "cursor"


# -----------------------------
# Errors
# -----------------------------
class InvalidConfiguration(ValueError):
    """Raised by reset() for a bad frame count, policy or sequence."""


class SequenceExhausted(IndexError):
    """Raised by step() once every reference has been processed."""

    def __init__(self, cursor: int, length: int):
        super().__init__(f"Reference sequence exhausted at step {cursor} of {length}")
        self.cursor = cursor
        self.length = length


# -----------------------------
# Value types
# -----------------------------
class ReplacementPolicy:
    """
    Available page replacement algorithms.

    FIFO:    replaces the page that has been resident longest
    LRU:     replaces the page not referenced for the longest time
    OPTIMAL: replaces the page whose next reference is furthest away
    """
    FIFO = "FIFO"
    LRU = "LRU"
    OPTIMAL = "OPTIMAL"

    ALL = (FIFO, LRU, OPTIMAL)

    @classmethod
    def parse(cls, value: str) -> str:
        name = str(value).strip().upper()
        if name not in cls.ALL:
            raise InvalidConfiguration(f"Unknown replacement policy: {value!r}")
        return name


class Outcome:
    HIT = "HIT"
    FAULT = "FAULT"


@dataclass(frozen=True)
class StepRecord:
    """
    One processed reference.

    Attributes:
        step (int): Index of the reference in the sequence
        page (int): Referenced page
        frames (Tuple[Optional[int], ...]): Frame table after the step
        outcome (str): Outcome.HIT or Outcome.FAULT
        frame (int): Frame holding the page after the step
        victim (Optional[int]): Frame overwritten by replacement, if any
        evicted (Optional[int]): Page evicted by replacement, if any
    """
    step: int
    page: int
    frames: Tuple[Optional[int], ...]
    outcome: str
    frame: int
    victim: Optional[int] = None
    evicted: Optional[int] = None

    @property
    def hit(self) -> bool:
        return self.outcome == Outcome.HIT

    @property
    def fault(self) -> bool:
        return self.outcome == Outcome.FAULT


@dataclass(frozen=True)
class SimulationCounters:
    hits: int = 0
    faults: int = 0

    @property
    def total(self) -> int:
        return self.hits + self.faults

    @property
    def hit_ratio(self) -> float:
        return round(self.hits / self.total, 4) if self.total else 0.0

    @property
    def fault_rate(self) -> float:
        return round(self.faults / self.total, 4) if self.total else 0.0


@dataclass(frozen=True)
class SimulationState:
    """Read-only snapshot returned by PageReferenceSimulator.get_state()."""
    policy: str
    frame_count: int
    frames: Tuple[Optional[int], ...]
    counters: SimulationCounters
    history: Tuple[StepRecord, ...]
    cursor: int
    remaining: int


# -----------------------------
# Victim selection
# -----------------------------
def _occupied(frames: Sequence[Optional[int]]) -> List[int]:
    indices = [i for i, page in enumerate(frames) if page is not None]
    if not indices:
        raise ValueError("No occupied frame to evict")
    return indices


def fifo_victim(load_order: Sequence[int]) -> int:
    """Return the frame loaded earliest. Hits never reorder the queue."""
    if not load_order:
        raise ValueError("No occupied frame to evict")
    return load_order[0]


def cursor_fifo_victim(frame_count: int, cursor: int) -> int:
    """Round-robin approximation of FIFO: the victim is cursor mod frame_count."""
    return cursor % frame_count


def lru_victim(frames: Sequence[Optional[int]], sequence: Sequence[int], cursor: int) -> int:
    """
    Pick the frame whose page was referenced least recently before cursor.

    A page never referenced before cursor scores -1. Ties go to the
    lowest frame index.
    """
    victim = None
    oldest = None
    for i in _occupied(frames):
        last_used = -1
        for j in range(cursor - 1, -1, -1):
            if sequence[j] == frames[i]:
                last_used = j
                break
        if oldest is None or last_used < oldest:
            oldest = last_used
            victim = i
    return victim


def optimal_victim(frames: Sequence[Optional[int]], sequence: Sequence[int], cursor: int) -> int:
    """
    Pick the frame whose page is referenced again furthest in the future.

    A page never referenced after cursor scores +inf. Ties go to the
    lowest frame index.
    """
    victim = None
    furthest = None
    for i in _occupied(frames):
        next_use = float('inf')
        for j in range(cursor + 1, len(sequence)):
            if sequence[j] == frames[i]:
                next_use = j
                break
        if furthest is None or next_use > furthest:
            furthest = next_use
            victim = i
    return victim


def select_victim(policy: str, frames: Sequence[Optional[int]], sequence: Sequence[int],
                  cursor: int, load_order: Sequence[int] = (),
                  fifo_mode: str = FIFO_QUEUE) -> int:
    """Dispatch to the victim selector for policy."""
    if policy == ReplacementPolicy.FIFO:
        if fifo_mode == FIFO_CURSOR:
            return cursor_fifo_victim(len(frames), cursor)
        return fifo_victim(load_order)
    elif policy == ReplacementPolicy.LRU:
        return lru_victim(frames, sequence, cursor)
    elif policy == ReplacementPolicy.OPTIMAL:
        return optimal_victim(frames, sequence, cursor)
    raise InvalidConfiguration(f"Unknown replacement policy: {policy!r}")


# -----------------------------
# Simulator
# -----------------------------
class PageReferenceSimulator:
    """
    Stepwise page reference simulator.

    The simulator owns its frame table, cursor, counters, history and
    event log; callers only read them. Driving the run (a button, a
    timer) is left to the caller: step() advances exactly one reference.

    Attributes:
        frame_count (int): Number of physical frames
        policy (str): Replacement policy for the current run
        fifo_mode (str): FIFO_QUEUE for insertion order, FIFO_CURSOR for
            the cursor mod frame_count approximation
        event_log (List[str]): Human-readable log of every operation
    """

    def __init__(self, frame_count: int = DEFAULT_FRAME_COUNT,
                 policy: str = ReplacementPolicy.FIFO,
                 sequence: Sequence[int] = DEFAULT_SEQUENCE,
                 fifo_mode: str = FIFO_QUEUE):
        self._lock = threading.Lock()
        self.event_log: List[str] = []
        self.reset(frame_count, policy, sequence, fifo_mode)

    # =========================================================================
    # CONFIGURATION
    # =========================================================================

    def reset(self, frame_count: int, policy: str, sequence: Sequence[int],
              fifo_mode: str = FIFO_QUEUE):
        """
        Start a new run.

        Everything is validated before any state is touched, so a
        rejected configuration leaves the previous run intact.

        Raises:
            InvalidConfiguration: frame_count < 1, empty sequence,
                non-positive page, unknown policy or FIFO mode
        """
        if isinstance(frame_count, bool) or not isinstance(frame_count, int) or frame_count < 1:
            raise InvalidConfiguration(f"Frame count must be an integer >= 1, got {frame_count!r}")
        policy = ReplacementPolicy.parse(policy)
        if fifo_mode not in (FIFO_QUEUE, FIFO_CURSOR):
            raise InvalidConfiguration(f"Unknown FIFO mode: {fifo_mode!r}")
        sequence = tuple(sequence)
        if not sequence:
            raise InvalidConfiguration("Reference sequence must not be empty")
        for page in sequence:
            if isinstance(page, bool) or not isinstance(page, int) or page < 1:
                raise InvalidConfiguration(f"Page ids must be positive integers, got {page!r}")

        with self._lock:
            self.frame_count = frame_count
            self.policy = policy
            self.fifo_mode = fifo_mode
            self._sequence: Tuple[int, ...] = sequence
            self._frames: List[Optional[int]] = [None] * frame_count
            self._load_order: Deque[int] = deque()
            self._cursor = 0
            self._hits = 0
            self._faults = 0
            self._history: List[StepRecord] = []
            self.event_log = [
                f"Reset: {frame_count} frames, {policy}, {len(sequence)} references"
            ]

    # =========================================================================
    # STEPPING
    # =========================================================================

    def step(self) -> StepRecord:
        """
        Process the reference at the cursor.

        Returns:
            StepRecord: The record appended to the history

        Raises:
            SequenceExhausted: If every reference has been processed
        """
        with self._lock:
            if self._cursor >= len(self._sequence):
                raise SequenceExhausted(self._cursor, len(self._sequence))

            page = self._sequence[self._cursor]
            victim = None
            evicted = None

            if page in self._frames:
                # ----- PAGE HIT -----
                outcome = Outcome.HIT
                frame_no = self._frames.index(page)
                self._hits += 1
                self.event_log.append(f"Hit: Page {page} in Frame {frame_no}")
            else:
                # ----- PAGE FAULT -----
                outcome = Outcome.FAULT
                self._faults += 1
                self.event_log.append(f"Fault: Page {page} not in memory")

                if None in self._frames:
                    frame_no = self._frames.index(None)
                    self._frames[frame_no] = page
                    self._load_order.append(frame_no)
                    self.event_log.append(f"Loaded: Page {page} -> Frame {frame_no}")
                else:
                    frame_no = select_victim(self.policy, self._frames, self._sequence,
                                             self._cursor, self._load_order, self.fifo_mode)
                    victim = frame_no
                    evicted = self._frames[frame_no]
                    self.event_log.append(f"Evicting: Page {evicted} from Frame {frame_no}")
                    self._frames[frame_no] = page
                    self._load_order.remove(frame_no)
                    self._load_order.append(frame_no)
                    self.event_log.append(f"Loaded: Page {page} -> Frame {frame_no} (replaced)")

            record = StepRecord(
                step=self._cursor,
                page=page,
                frames=tuple(self._frames),
                outcome=outcome,
                frame=frame_no,
                victim=victim,
                evicted=evicted,
            )
            self._history.append(record)
            self._cursor += 1
            return record

    def run_to_completion(self) -> List[StepRecord]:
        """Step until the sequence is exhausted and return the new records."""
        records = []
        while not self.is_finished:
            records.append(self.step())
        return records

    # =========================================================================
    # READ-ONLY STATE
    # =========================================================================

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def remaining(self) -> int:
        return len(self._sequence) - self._cursor

    @property
    def is_finished(self) -> bool:
        return self._cursor >= len(self._sequence)

    @property
    def sequence(self) -> Tuple[int, ...]:
        return self._sequence

    @property
    def frames(self) -> Tuple[Optional[int], ...]:
        return tuple(self._frames)

    @property
    def history(self) -> Tuple[StepRecord, ...]:
        return tuple(self._history)

    @property
    def counters(self) -> SimulationCounters:
        return SimulationCounters(self._hits, self._faults)

    @property
    def load_order(self) -> Tuple[int, ...]:
        """Frame indices in load order, oldest first."""
        return tuple(self._load_order)

    def get_state(self) -> SimulationState:
        with self._lock:
            return SimulationState(
                policy=self.policy,
                frame_count=self.frame_count,
                frames=tuple(self._frames),
                counters=SimulationCounters(self._hits, self._faults),
                history=tuple(self._history),
                cursor=self._cursor,
                remaining=len(self._sequence) - self._cursor,
            )
