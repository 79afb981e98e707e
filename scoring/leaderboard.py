"""Leaderboard ordering and the individual leaderboard."""

from typing import Dict, List, Optional, Sequence, TypeVar

from models.leaderboard import LeaderboardEntry, TeamLeaderboardEntry
from models.round import Round
from models.tour import Tour

from .logging_config import get_logger

logger = get_logger("leaderboard")

EntryT = TypeVar("EntryT", LeaderboardEntry, TeamLeaderboardEntry)


def _sort_key(entry) -> tuple:
    if not entry.total_score:
        # Unscored entries all share one key, so they keep their input order.
        return (1, 0)
    score = entry.net_score if entry.net_score is not None else entry.total_score
    return (0, score)


def sort_and_position(entries: Sequence[EntryT]) -> List[EntryT]:
    """
    Rank entries and assign positions 1..K.

    Entries with a score sort ascending by net score when present, else by
    gross. Entries with no score go last. The sort is stable and ties are
    not grouped: equal scores get consecutive, distinct positions.
    """
    ranked = sorted(entries, key=_sort_key)
    return [entry.with_updates(position=index) for index, entry in enumerate(ranked, start=1)]


def _rounds_in_scope(tour: Tour, round_id: Optional[str]) -> List[Round]:
    if round_id is None:
        return tour.completed_rounds()
    round_obj = tour.get_round(round_id)
    return [round_obj] if round_obj is not None else []


def individual_leaderboard(tour: Tour, round_id: Optional[str] = None) -> List[LeaderboardEntry]:
    """
    Per-player totals, ranked.

    Tournament-wide (``round_id`` None) only completed rounds count. Team
    (scramble) records are excluded. A player's net falls back to gross for
    rounds where no handicap applied, so net totals stay comparable.
    """
    rounds = _rounds_in_scope(tour, round_id)
    totals: Dict[str, dict] = {}

    for round_obj in rounds:
        for player_id, record in round_obj.scores.items():
            if record.is_team_score:
                continue
            stats = totals.setdefault(player_id, {
                "total_score": 0,
                "total_to_par": 0,
                "net_score": 0,
                "net_to_par": 0,
                "handicap_strokes": 0,
                "rounds_played": 0,
                "has_handicap": False,
            })
            stats["total_score"] += record.total_score
            stats["total_to_par"] += record.total_to_par
            stats["net_score"] += record.net_score if record.net_score is not None else record.total_score
            stats["net_to_par"] += record.net_to_par if record.net_to_par is not None else record.total_to_par
            stats["handicap_strokes"] += record.handicap_strokes or 0
            stats["rounds_played"] += 1
            if record.handicap_strokes:
                stats["has_handicap"] = True

    entries: List[LeaderboardEntry] = []
    for player in tour.players:
        stats = totals.get(player.id)
        if stats is None:
            continue
        team = tour.team_for_player(player.id)
        has_handicap = stats["has_handicap"]
        entries.append(LeaderboardEntry(
            player=player,
            total_score=stats["total_score"],
            total_to_par=stats["total_to_par"],
            net_score=stats["net_score"] if has_handicap else None,
            net_to_par=stats["net_to_par"] if has_handicap else None,
            handicap_strokes=stats["handicap_strokes"] if has_handicap else None,
            rounds_played=stats["rounds_played"],
            team_id=team.id if team is not None else None,
        ))

    logger.debug("Individual leaderboard built from %d rounds, %d entries", len(rounds), len(entries))
    return sort_and_position(entries)
