"""Handicap stroke allocation across holes by stroke index."""

import math
from typing import List, Optional, Sequence

from models.hole import Hole

from .config import get_config
from .logging_config import get_logger

logger = get_logger("handicap")


def playing_handicap(handicap: Optional[float], policy: Optional[str] = None) -> int:
    """
    Convert a (possibly fractional) handicap into whole strokes received.

    ``policy`` is "truncate" (12.6 -> 12) or "round" (12.5 -> 13); it defaults
    to the configured ``handicap_rounding``. None, NaN and negatives give 0.
    """
    if handicap is None or isinstance(handicap, bool):
        return 0
    try:
        value = float(handicap)
    except (TypeError, ValueError):
        return 0
    if not math.isfinite(value) or value <= 0:
        return 0

    policy = policy or get_config().handicap_rounding
    if policy == "round":
        return int(math.floor(value + 0.5))
    return int(math.floor(value))


def stroke_order(holes: Sequence[Hole]) -> List[int]:
    """
    Hole positions (0-based) ordered hardest first.

    Holes without a stroke index use their ordinal position instead. Equal
    indices keep hole order.
    """
    keyed = [
        (hole.effective_stroke_index(position), position)
        for position, hole in enumerate(holes, start=1)
    ]
    return [position - 1 for _, position in sorted(keyed)]


def allocate_handicap_strokes(
    total_strokes: int,
    holes: Sequence[Hole],
    strokes_given: bool = True,
) -> List[int]:
    """
    Distribute ``total_strokes`` over ``holes``.

    Every hole receives ``total // N`` strokes and the ``total % N`` hardest
    holes (lowest stroke index) receive one more, so the allocation always
    sums to ``total_strokes``.

    Returns:
        One entry per hole, in hole order. All zeros when strokes are not
        given or the total is not positive.
    """
    n = len(holes)
    if n == 0:
        return []
    if not strokes_given or not total_strokes or total_strokes <= 0:
        return [0] * n

    total = int(total_strokes)
    base, remainder = divmod(total, n)
    allocation = [base] * n
    for position in stroke_order(holes)[:remainder]:
        allocation[position] += 1

    logger.debug("Allocated %d strokes over %d holes: %s", total, n, allocation)
    return allocation


def allocation_for_player(handicap: Optional[float], holes: Sequence[Hole], strokes_given: bool) -> List[int]:
    """Allocation for a raw player handicap, applying the rounding policy first."""
    return allocate_handicap_strokes(playing_handicap(handicap), holes, strokes_given)


def strokes_for_hole(total_strokes: int, stroke_index: Optional[int], hole_count: Optional[int] = None) -> int:
    """Strokes received on a single hole of the given stroke index."""
    if not total_strokes or total_strokes <= 0 or not stroke_index:
        return 0
    n = hole_count or get_config().default_hole_count
    base, remainder = divmod(int(total_strokes), n)
    return base + (1 if stroke_index <= remainder else 0)
