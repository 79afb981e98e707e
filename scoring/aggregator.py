"""Gross/net totals for a single score record."""

from typing import Any, Iterable, Optional

from models.player import Player
from models.round import Round
from models.score import UNPLAYED, Played, ScoreRecord, to_entries

from .handicap import allocation_for_player
from .logging_config import get_logger

logger = get_logger("aggregator")


def team_score_id(team_id: str) -> str:
    """Synthetic player id under which a scramble team's record is stored."""
    return f"{team_id}_score"


def score_round(
    round_obj: Round,
    entries: Optional[Iterable[Any]],
    player: Optional[Player] = None,
    player_id: Optional[str] = None,
    stableford_manual: Optional[int] = None,
) -> ScoreRecord:
    """
    Build a ScoreRecord with every derived field recomputed from ``entries``.

    Only holes with a recorded score count towards the gross total, the par
    used for to-par, and the handicap strokes. Entries past the end of the
    entry list are unplayed; entries past the round's last hole are ignored.
    Net fields are only set when at least one handicap stroke applies.
    """
    record_id = player_id or (player.id if player is not None else None)
    if record_id is None:
        raise ValueError("score_round needs a player or a player_id")

    entry_list = to_entries(list(entries) if entries is not None else [])
    holes = round_obj.holes
    if len(entry_list) > len(holes):
        logger.debug(
            "Ignoring %d entries beyond the %d holes of round %s",
            len(entry_list) - len(holes), len(holes), round_obj.id,
        )

    strokes_given = round_obj.settings.strokes_given
    handicap = player.handicap if player is not None else None
    allocation = allocation_for_player(handicap, holes, strokes_given)

    total_score = 0
    played_par = 0
    handicap_strokes = 0
    for index, hole in enumerate(holes):
        entry = entry_list[index] if index < len(entry_list) else UNPLAYED
        if not isinstance(entry, Played):
            continue
        total_score += entry.strokes
        played_par += hole.par
        handicap_strokes += allocation[index]

    total_to_par = total_score - played_par
    net_score = total_score - handicap_strokes if handicap_strokes > 0 else None
    net_to_par = total_to_par - handicap_strokes if handicap_strokes > 0 else None

    return ScoreRecord(
        player_id=record_id,
        team_id=player.team_id if player is not None else None,
        entries=entry_list,
        total_score=total_score,
        total_to_par=total_to_par,
        handicap_strokes=handicap_strokes if strokes_given else None,
        net_score=net_score,
        net_to_par=net_to_par,
        stableford_manual=stableford_manual,
    )


def score_team_round(round_obj: Round, team_id: str, entries: Optional[Iterable[Any]]) -> ScoreRecord:
    """Gross-only record for a team playing one ball (scramble)."""
    record = score_round(round_obj, entries, player_id=team_score_id(team_id))
    return record.with_updates(
        team_id=team_id,
        is_team_score=True,
        handicap_strokes=None,
        net_score=None,
        net_to_par=None,
    )


def rescore(round_obj: Round, record: ScoreRecord, player: Optional[Player] = None) -> ScoreRecord:
    """Recompute a stored record from its raw entries, e.g. after round settings change."""
    if record.is_team_score:
        team_id = record.team_id or record.player_id.removesuffix("_score")
        return score_team_round(round_obj, team_id, record.entries)
    rebuilt = score_round(
        round_obj,
        record.entries,
        player=player,
        player_id=record.player_id,
        stableford_manual=record.stableford_manual,
    )
    if rebuilt.team_id is None and record.team_id is not None:
        rebuilt = rebuilt.with_updates(team_id=record.team_id)
    return rebuilt
