# utils.py

import random

from engine import Outcome

AUTO_PLAY_INTERVAL = 1.0  # seconds between auto-advance steps
RANDOM_PAGE_MAX = 6

SEGMENT_COLORS = ["#3b82f6", "#10b981", "#f59e0b", "#8b5cf6", "#ef4444", "#06b6d4"]


def parse_sequence(text):
    """Parse a comma separated page sequence. Raises ValueError on bad tokens."""
    pages = []
    for token in text.split(','):
        token = token.strip()
        if token == '':
            continue
        page = int(token)
        if page < 1:
            raise ValueError(f"Page ids must be positive, got {page}")
        pages.append(page)
    return pages


def format_sequence(pages):
    return ','.join(map(str, pages))


def random_page(rng=random):
    """Return a random page id in 1..RANDOM_PAGE_MAX."""
    return rng.randint(1, RANDOM_PAGE_MAX)


def format_hit_rate(hits, faults):
    """Hit rate as a percentage string with one decimal, '0' before any reference."""
    total = hits + faults
    if total == 0:
        return "0"
    return f"{hits / total * 100:.1f}"


def frame_color(outcome):
    """Return a color for the frame touched by a step."""
    if outcome == Outcome.HIT:
        return "lightgreen"
    if outcome == Outcome.FAULT:
        return "salmon"
    return "lightgray"


def segment_color(seg_id):
    return SEGMENT_COLORS[seg_id % len(SEGMENT_COLORS)]
