"""Stableford points from net score relative to par."""

from typing import Optional

from models.round import Round
from models.score import ScoreRecord
from models.tour import Tour

from .config import get_config
from .handicap import allocation_for_player
from .logging_config import get_logger

logger = get_logger("stableford")


def hole_stableford_points(
    gross: int,
    par: int,
    strokes_received: int = 0,
    max_points: Optional[int] = None,
) -> int:
    """Points for one hole: ``base - (net - par)`` clamped to ``[0, max_points]``."""
    config = get_config()
    cap = config.stableford_max_points if max_points is None else max_points
    net_to_par = (gross - strokes_received) - par
    points = config.stableford_base_points - net_to_par
    return max(0, min(cap, points))


def stableford_points(round_obj: Round, record: Optional[ScoreRecord], handicap: Optional[float] = None) -> int:
    """
    Stableford total for one record in one round.

    A manual override on the record replaces the computed total. Holes with
    no recorded score add nothing. Strokes are allocated from ``handicap``
    only when the round gives strokes.
    """
    if record is None:
        return 0
    if record.stableford_manual is not None:
        return record.stableford_manual

    holes = round_obj.holes
    allocation = allocation_for_player(handicap, holes, round_obj.settings.strokes_given)

    total = 0
    for index, hole in enumerate(holes):
        gross = record.strokes(index)
        if gross is None:
            continue
        total += hole_stableford_points(gross, hole.par, allocation[index])
    return total


def tournament_stableford(tour: Tour, player_id: str) -> int:
    """Sum of a player's Stableford points over the tour's completed rounds."""
    player = tour.get_player(player_id)
    handicap = player.handicap if player is not None else None

    total = 0
    for round_obj in tour.completed_rounds():
        total += stableford_points(round_obj, round_obj.scores.get(player_id), handicap)
    logger.debug("Tournament Stableford for %s: %d", player_id, total)
    return total
