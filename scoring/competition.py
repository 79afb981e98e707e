"""Closest-to-pin and longest-drive winners per hole."""

from collections import Counter
from typing import Dict, List, Optional

from models.competition import CompetitionType, CompetitionWinner
from models.round import Round
from models.tour import Tour

from .logging_config import get_logger

logger = get_logger("competition")


def hole_competition_winners(round_obj: Round, competition: CompetitionType, hole_number: int) -> List[CompetitionWinner]:
    return list(round_obj.competition_winners.get(CompetitionType(competition), {}).get(hole_number, []))


def replace_competition_winner(
    winners: List[CompetitionWinner],
    winner: Optional[CompetitionWinner],
    match_id: Optional[str] = None,
) -> List[CompetitionWinner]:
    """
    Return a hole's winner list with one slot replaced.

    A hole holds at most one round-wide winner (no ``match_id``) plus one
    winner per match. ``match_id`` picks the slot; ``winner=None`` clears it.
    The input list is not modified.
    """
    if match_id is not None:
        kept = [w for w in winners if w.match_id != match_id]
    else:
        kept = [w for w in winners if w.match_id is not None]
    if winner is not None:
        kept.append(winner)
    return kept


def competition_tally(tour: Tour, competition: CompetitionType) -> Dict[str, int]:
    """Holes won per player in one competition across the tour's rounds."""
    counts: Counter = Counter()
    competition = CompetitionType(competition)
    for round_obj in tour.rounds:
        for winners in round_obj.competition_winners.get(competition, {}).values():
            for winner in winners:
                counts[winner.player_id] += 1
    logger.debug("%s tally over %d rounds: %s", competition.value, len(tour.rounds), dict(counts))
    return dict(counts)
