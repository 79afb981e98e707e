"""
Team totals per round and across a tour.

A round's format picks the strategy: best-ball derives the team score hole
by hole from its players' records, scramble passes through the single team
record, and every other stroke format sums the players' own totals.
"""

from typing import Callable, Dict, List, Optional, Sequence, Tuple

from models.leaderboard import TeamLeaderboardEntry
from models.player import Player
from models.round import MATCH_PLAY_FORMATS, Round, RoundFormat
from models.score import ScoreRecord
from models.team import Team
from models.tour import Tour

from .leaderboard import sort_and_position
from .logging_config import get_logger
from .matchplay import has_match_scores, player_match_holes, team_points

logger = get_logger("team")

TeamStrategy = Callable[[Team, Tour, Round], TeamLeaderboardEntry]


def _records(tour: Tour, team: Team, round_obj: Round) -> List[Tuple[Player, Optional[ScoreRecord]]]:
    return [(player, round_obj.scores.get(player.id)) for player in tour.team_players(team)]


def best_ball_hole_scores(round_obj: Round, records: Sequence[Optional[ScoreRecord]]) -> List[Optional[int]]:
    """Lowest recorded score per hole among ``records``; None where nobody scored."""
    best: List[Optional[int]] = []
    for index in range(round_obj.hole_count):
        scores = [r.strokes(index) for r in records if r is not None]
        scores = [s for s in scores if s is not None]
        best.append(min(scores) if scores else None)
    return best


def best_ball_entry(team: Team, tour: Tour, round_obj: Round) -> TeamLeaderboardEntry:
    """
    Best-ball: the team's hole score is its best player's score on that hole.

    A hole nobody on the team scored is left out of both the total and the
    par it is compared against.
    """
    pairs = _records(tour, team, round_obj)
    records = [record for _, record in pairs]

    total_score = 0
    counted_par = 0
    for hole, best in zip(round_obj.holes, best_ball_hole_scores(round_obj, records)):
        if best is None:
            continue
        total_score += best
        counted_par += hole.par

    players_with_scores = sum(1 for r in records if r is not None and r.holes_played > 0)
    return TeamLeaderboardEntry(
        team=team,
        total_score=total_score,
        total_to_par=total_score - counted_par,
        players_with_scores=players_with_scores,
        total_players=len(pairs),
    )


def scramble_entry(team: Team, tour: Tour, round_obj: Round) -> TeamLeaderboardEntry:
    """Scramble: the team's own record is used unchanged."""
    total_players = len(tour.team_players(team))
    record = round_obj.team_scores.get(team.id)
    if record is None or not record.is_team_score:
        return TeamLeaderboardEntry(team=team, total_players=total_players)

    return TeamLeaderboardEntry(
        team=team,
        total_score=record.total_score,
        total_to_par=record.total_to_par,
        players_with_scores=total_players if record.total_score > 0 else 0,
        total_players=total_players,
    )


def individual_sum_entry(team: Team, tour: Tour, round_obj: Round) -> TeamLeaderboardEntry:
    """
    Individual-sum: add up each scoring teammate's own totals.

    Only players who have posted at least one hole count. Net totals are
    reported when any of them had handicap strokes applied; players without
    a net score contribute their gross.
    """
    pairs = _records(tour, team, round_obj)

    total_score = total_to_par = net_score = net_to_par = handicap_strokes = 0
    players_with_scores = 0
    has_handicap = False
    for _, record in pairs:
        if record is None or record.total_score <= 0:
            continue
        total_score += record.total_score
        total_to_par += record.total_to_par
        net_score += record.net_score if record.net_score is not None else record.total_score
        net_to_par += record.net_to_par if record.net_to_par is not None else record.total_to_par
        handicap_strokes += record.handicap_strokes or 0
        if record.handicap_strokes:
            has_handicap = True
        players_with_scores += 1

    return TeamLeaderboardEntry(
        team=team,
        total_score=total_score,
        total_to_par=total_to_par,
        net_score=net_score if has_handicap else None,
        net_to_par=net_to_par if has_handicap else None,
        total_handicap_strokes=handicap_strokes if has_handicap else None,
        players_with_scores=players_with_scores,
        total_players=len(pairs),
    )


def match_play_contribution(team: Team, tour: Tour, round_obj: Round) -> Tuple[int, int]:
    """
    (strokes, to-par) a team contributes from a match-play round.

    Each teammate's side strokes on every played hole of their matches are
    summed regardless of who won, against the par of those same holes.
    """
    strokes = par = 0
    for player in tour.team_players(team):
        for hole_number, hole_strokes in player_match_holes(round_obj, player.id):
            hole = round_obj.get_hole(hole_number)
            strokes += hole_strokes
            par += hole.par if hole is not None else 0
    return strokes, strokes - par


def match_play_entry(team: Team, tour: Tour, round_obj: Round) -> TeamLeaderboardEntry:
    players = tour.team_players(team)
    strokes, to_par = match_play_contribution(team, tour, round_obj)
    points = None
    if round_obj.ryder_cup is not None:
        points = team_points(round_obj.ryder_cup.matches).get(team.id, 0.0)
    return TeamLeaderboardEntry(
        team=team,
        total_score=strokes,
        total_to_par=to_par,
        players_with_scores=sum(1 for p in players if has_match_scores(round_obj, p.id)),
        total_players=len(players),
        ryder_cup_points=points,
    )


TEAM_STRATEGIES: Dict[RoundFormat, TeamStrategy] = {
    RoundFormat.BEST_BALL: best_ball_entry,
    RoundFormat.SCRAMBLE: scramble_entry,
}
TEAM_STRATEGIES.update({fmt: match_play_entry for fmt in MATCH_PLAY_FORMATS})


def strategy_for(round_obj: Round) -> TeamStrategy:
    """Pick the team strategy for a round; anything unlisted is individual-sum."""
    if round_obj.ryder_cup is not None:
        return match_play_entry
    if round_obj.format == RoundFormat.BEST_BALL and round_obj.settings.team_scoring == "scramble":
        return scramble_entry
    return TEAM_STRATEGIES.get(round_obj.format, individual_sum_entry)


def round_team_leaderboard(tour: Tour, round_id: str) -> List[TeamLeaderboardEntry]:
    """Ranked team entries for a single round, whatever its status."""
    round_obj = tour.get_round(round_id)
    if round_obj is None or not tour.teams:
        return []
    strategy = strategy_for(round_obj)
    return sort_and_position([strategy(team, tour, round_obj) for team in tour.teams])


def _player_scored(round_obj: Round, player_id: str) -> bool:
    record = round_obj.scores.get(player_id)
    if record is not None and record.total_score > 0:
        return True
    return round_obj.is_match_play and has_match_scores(round_obj, player_id)


def tournament_team_entry(team: Team, tour: Tour) -> TeamLeaderboardEntry:
    """One team's totals over every completed round, each scored by its own format."""
    rounds = tour.completed_rounds()
    players = tour.team_players(team)

    total_score = total_to_par = net_score = net_to_par = handicap_strokes = 0
    has_handicap = False
    points = 0.0
    has_points = False
    for round_obj in rounds:
        entry = strategy_for(round_obj)(team, tour, round_obj)
        total_score += entry.total_score
        total_to_par += entry.total_to_par
        net_score += entry.net_score if entry.net_score is not None else entry.total_score
        net_to_par += entry.net_to_par if entry.net_to_par is not None else entry.total_to_par
        if entry.total_handicap_strokes:
            handicap_strokes += entry.total_handicap_strokes
            has_handicap = True
        if entry.ryder_cup_points is not None:
            points += entry.ryder_cup_points
            has_points = True

    players_with_scores = sum(
        1 for player in players if any(_player_scored(r, player.id) for r in rounds)
    )
    return TeamLeaderboardEntry(
        team=team,
        total_score=total_score,
        total_to_par=total_to_par,
        net_score=net_score if has_handicap else None,
        net_to_par=net_to_par if has_handicap else None,
        total_handicap_strokes=handicap_strokes if has_handicap else None,
        players_with_scores=players_with_scores,
        total_players=len(players),
        ryder_cup_points=points if has_points else None,
    )


def tournament_team_leaderboard(tour: Tour) -> List[TeamLeaderboardEntry]:
    """Ranked team entries across all completed rounds."""
    entries = [tournament_team_entry(team, tour) for team in tour.teams]
    logger.debug("Tournament team leaderboard over %d completed rounds", len(tour.completed_rounds()))
    return sort_and_position(entries)


def team_leaderboard(tour: Tour, round_id: Optional[str] = None) -> List[TeamLeaderboardEntry]:
    """Single-round leaderboard when ``round_id`` is given, else tournament-wide."""
    if not tour.teams:
        return []
    if round_id is not None:
        return round_team_leaderboard(tour, round_id)
    return tournament_team_leaderboard(tour)
