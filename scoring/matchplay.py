"""
Match-play state machine and Ryder Cup point totals.

Every update replays the whole hole history of a match: hole results, lead,
state, winner, closeout margin and points are derived from the raw
(side A, side B) score pairs and nothing is patched incrementally. The
closeout margin therefore reflects the full current history; if holes are
scored after a match was decided, the margin is recomputed from them too.
"""

import math
from typing import Any, Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

from pydantic import Field

from models.base import BaseGolfModel
from models.match import (
    HoleResult,
    Match,
    MatchHole,
    MatchPoints,
    MatchState,
    MatchStatus,
    MatchWinner,
    RyderCup,
)
from models.round import Round
from models.tour import Tour

from .config import get_config
from .logging_config import get_logger

logger = get_logger("matchplay")

DEFAULT_SIDE_A_NAME = "Team A"
DEFAULT_SIDE_B_NAME = "Team B"


def is_valid_score(value: Any) -> bool:
    """A usable match-play score is a positive whole number (``4`` or ``4.0``)."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    if not math.isfinite(value) or value <= 0:
        return False
    return not isinstance(value, float) or value.is_integer()


def hole_result(side_a_score: Any, side_b_score: Any) -> HoleResult:
    """Lower score wins the hole; a hole missing a valid score on either side is unplayed."""
    if not (is_valid_score(side_a_score) and is_valid_score(side_b_score)):
        return HoleResult.UNPLAYED
    if side_a_score < side_b_score:
        return HoleResult.SIDE_A
    if side_b_score < side_a_score:
        return HoleResult.SIDE_B
    return HoleResult.TIE


def lead_phrase(lead: int, side_a_name: str = DEFAULT_SIDE_A_NAME, side_b_name: str = DEFAULT_SIDE_B_NAME) -> str:
    if lead == 0:
        return "All Square"
    if lead > 0:
        return f"{side_a_name} {lead} up"
    return f"{side_b_name} {-lead} up"


class MatchEvaluation(BaseGolfModel):
    """Everything derived from one replay of a match's hole history."""
    holes: List[MatchHole] = Field(default_factory=list)
    side_a_wins: int = 0
    side_b_wins: int = 0
    holes_played: int = 0
    holes_remaining: int = 0
    state: MatchState = MatchState.NOT_STARTED
    winner: Optional[MatchWinner] = None
    margin: Optional[str] = None
    points: MatchPoints = Field(default_factory=MatchPoints)
    status_text: str = "Not started"

    @property
    def lead(self) -> int:
        """Positive when side A leads, negative when side B leads."""
        return self.side_a_wins - self.side_b_wins

    @property
    def is_complete(self) -> bool:
        return self.state == MatchState.COMPLETE


def _derive(
    side_a_wins: int,
    side_b_wins: int,
    holes_played: int,
    total_holes: int,
    side_a_name: str,
    side_b_name: str,
) -> dict:
    lead = side_a_wins - side_b_wins
    abs_lead = abs(lead)
    remaining = total_holes - holes_played
    leader_name = side_a_name if lead > 0 else side_b_name
    leader = MatchWinner.SIDE_A if lead > 0 else MatchWinner.SIDE_B
    leader_points = MatchPoints(side_a=1, side_b=0) if lead > 0 else MatchPoints(side_a=0, side_b=1)

    if holes_played == 0:
        return dict(state=MatchState.NOT_STARTED, winner=None, margin=None,
                    points=MatchPoints(), status_text="Not started")

    if abs_lead > remaining:
        margin = f"{abs_lead}&{remaining}"
        return dict(state=MatchState.COMPLETE, winner=leader, margin=margin,
                    points=leader_points, status_text=f"{leader_name} wins {margin}")

    if remaining == 0:
        # Any non-zero lead with nothing left was closed out above as "N&0".
        return dict(state=MatchState.COMPLETE, winner=MatchWinner.HALVED, margin=None,
                    points=MatchPoints(side_a=0.5, side_b=0.5), status_text="Halved")

    if lead != 0 and abs_lead == remaining:
        return dict(state=MatchState.DORMIE, winner=None, margin=None, points=MatchPoints(),
                    status_text=f"Dormie - {lead_phrase(lead, side_a_name, side_b_name)}")

    return dict(state=MatchState.IN_PROGRESS, winner=None, margin=None, points=MatchPoints(),
                status_text=lead_phrase(lead, side_a_name, side_b_name))


def _latest_by_hole(holes: Iterable[MatchHole]) -> List[MatchHole]:
    latest: Dict[int, MatchHole] = {}
    for hole in holes:
        latest[hole.hole_number] = hole
    return [latest[number] for number in sorted(latest)]


def evaluate_match(
    holes: Sequence[MatchHole],
    total_holes: Optional[int] = None,
    side_a_name: str = DEFAULT_SIDE_A_NAME,
    side_b_name: str = DEFAULT_SIDE_B_NAME,
) -> MatchEvaluation:
    """
    Replay a match's hole history from scratch.

    Holes are taken in hole-number order (the last entry wins if a number
    repeats). Holes beyond ``total_holes`` are dropped. Each played hole's
    ``match_status`` records the standing as of that hole; the returned
    state, winner, margin and points describe the full history.
    """
    total = total_holes or get_config().default_hole_count

    replayed: List[MatchHole] = []
    side_a_wins = side_b_wins = played = 0
    for hole in _latest_by_hole(holes):
        if hole.hole_number > total:
            logger.debug("Dropping hole %d from a %d-hole match", hole.hole_number, total)
            continue
        result = hole_result(hole.side_a_score, hole.side_b_score)
        match_status = None
        if result != HoleResult.UNPLAYED:
            played += 1
            if result == HoleResult.SIDE_A:
                side_a_wins += 1
            elif result == HoleResult.SIDE_B:
                side_b_wins += 1
            match_status = _derive(side_a_wins, side_b_wins, played, total,
                                   side_a_name, side_b_name)["status_text"]
        replayed.append(hole.with_updates(result=result, match_status=match_status))

    derived = _derive(side_a_wins, side_b_wins, played, total, side_a_name, side_b_name)
    return MatchEvaluation(
        holes=replayed,
        side_a_wins=side_a_wins,
        side_b_wins=side_b_wins,
        holes_played=played,
        holes_remaining=total - played,
        **derived,
    )


def recompute_match(
    match: Match,
    total_holes: Optional[int] = None,
    side_a_name: str = DEFAULT_SIDE_A_NAME,
    side_b_name: str = DEFAULT_SIDE_B_NAME,
) -> Match:
    """Return ``match`` with every derived field rebuilt from its raw hole history."""
    evaluation = evaluate_match(match.holes, total_holes, side_a_name, side_b_name)
    complete = evaluation.is_complete
    return match.with_updates(
        holes=evaluation.holes,
        status=MatchStatus.COMPLETED if complete else MatchStatus.IN_PROGRESS,
        state=evaluation.state,
        winner=evaluation.winner,
        status_text=evaluation.status_text,
        result_summary=evaluation.status_text if complete else None,
        points=evaluation.points if complete else MatchPoints(),
    )


def _raw_score(value: Any) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value)


def apply_hole_score(
    match: Match,
    hole_number: int,
    side_a_score: Any,
    side_b_score: Any,
    total_holes: Optional[int] = None,
    side_a_name: str = DEFAULT_SIDE_A_NAME,
    side_b_name: str = DEFAULT_SIDE_B_NAME,
) -> Match:
    """
    Record or correct the score pair for one hole and replay the match.

    Invalid scores are stored but leave the hole unplayed. A hole number
    outside ``1..total_holes`` is ignored and the match is only recomputed.
    """
    total = total_holes or get_config().default_hole_count
    if isinstance(hole_number, bool) or not isinstance(hole_number, int) or not 1 <= hole_number <= total:
        logger.warning("Ignoring score for hole %r on match %s (%d holes)", hole_number, match.id, total)
        return recompute_match(match, total, side_a_name, side_b_name)

    updated = MatchHole(
        hole_number=hole_number,
        side_a_score=_raw_score(side_a_score),
        side_b_score=_raw_score(side_b_score),
    )
    holes = [h for h in match.holes if h.hole_number != hole_number]
    holes.append(updated)
    holes.sort(key=lambda h: h.hole_number)

    logger.debug("Match %s hole %d: %r vs %r", match.id, hole_number, side_a_score, side_b_score)
    return recompute_match(match.with_updates(holes=holes), total, side_a_name, side_b_name)


# ----------------------------------------------------------------
# Point totals
# ----------------------------------------------------------------

def side_points(matches: Iterable[Match]) -> Tuple[float, float]:
    """Sum of (side A, side B) points across matches."""
    side_a = side_b = 0.0
    for match in matches:
        side_a += match.points.side_a
        side_b += match.points.side_b
    return side_a, side_b


def team_points(matches: Iterable[Match]) -> Dict[str, float]:
    """Points per team id across matches, whichever side the team played on."""
    totals: Dict[str, float] = {}
    for match in matches:
        totals[match.side_a.team_id] = totals.get(match.side_a.team_id, 0.0) + match.points.side_a
        totals[match.side_b.team_id] = totals.get(match.side_b.team_id, 0.0) + match.points.side_b
    return totals


def tour_team_points(tour: Tour) -> Dict[str, float]:
    """Points per team id over the match-play rounds a tour has completed."""
    totals: Dict[str, float] = {}
    for round_obj in tour.completed_rounds():
        if round_obj.ryder_cup is None:
            continue
        for team_id, points in team_points(round_obj.ryder_cup.matches).items():
            totals[team_id] = totals.get(team_id, 0.0) + points
    return totals


class RyderCupStandings(BaseGolfModel):
    """Read-only snapshot of two teams' points against the target."""
    team_a_id: Optional[str] = None
    team_b_id: Optional[str] = None
    team_a_points: float = 0.0
    team_b_points: float = 0.0
    target_points: float = 14.5
    matches_total: int = 0
    matches_completed: int = 0

    def points_for(self, team_id: str) -> float:
        if team_id == self.team_a_id:
            return self.team_a_points
        if team_id == self.team_b_id:
            return self.team_b_points
        return 0.0

    def points_needed(self, team_id: str) -> float:
        return max(0.0, self.target_points - self.points_for(team_id))

    def has_won(self, team_id: str) -> bool:
        return self.points_for(team_id) >= self.target_points

    @property
    def leader(self) -> Optional[str]:
        if self.team_a_points > self.team_b_points:
            return self.team_a_id
        if self.team_b_points > self.team_a_points:
            return self.team_b_id
        return None


def ryder_cup_standings(
    ryder_cup: Optional[RyderCup],
    team_a_id: Optional[str] = None,
    team_b_id: Optional[str] = None,
) -> RyderCupStandings:
    """Totals for a round's Ryder Cup. Team ids default to the first match's sides."""
    if ryder_cup is None:
        return RyderCupStandings(team_a_id=team_a_id, team_b_id=team_b_id,
                                 target_points=get_config().ryder_cup_target_points)

    matches = ryder_cup.matches
    if matches:
        team_a_id = team_a_id or matches[0].side_a.team_id
        team_b_id = team_b_id or matches[0].side_b.team_id
    totals = team_points(matches)
    return RyderCupStandings(
        team_a_id=team_a_id,
        team_b_id=team_b_id,
        team_a_points=totals.get(team_a_id, 0.0) if team_a_id else 0.0,
        team_b_points=totals.get(team_b_id, 0.0) if team_b_id else 0.0,
        target_points=ryder_cup.target_points,
        matches_total=len(matches),
        matches_completed=sum(1 for m in matches if m.is_complete),
    )


# ----------------------------------------------------------------
# Player strokes from matches
# ----------------------------------------------------------------

def player_match_holes(round_obj: Round, player_id: str) -> Iterator[Tuple[int, int]]:
    """(hole number, strokes) for every played hole of every match the player is in."""
    if round_obj.ryder_cup is None:
        return
    for match in round_obj.ryder_cup.matches:
        side = match.side_of(player_id)
        if side is None:
            continue
        for hole in match.holes:
            if not (is_valid_score(hole.side_a_score) and is_valid_score(hole.side_b_score)):
                continue
            score = hole.side_a_score if side == "a" else hole.side_b_score
            yield hole.hole_number, int(score)


def player_match_strokes(round_obj: Round, player_id: str) -> int:
    """Raw strokes a player's side took across a round's matches, win or lose."""
    return sum(strokes for _, strokes in player_match_holes(round_obj, player_id))


def has_match_scores(round_obj: Round, player_id: str) -> bool:
    return next(player_match_holes(round_obj, player_id), None) is not None


def matches_won(tour: Tour, player_id: str) -> float:
    """Matches won by a player over completed rounds; a halved match counts 0.5."""
    won = 0.0
    for round_obj in tour.completed_rounds():
        if round_obj.ryder_cup is None:
            continue
        for match in round_obj.ryder_cup.matches:
            side = match.side_of(player_id)
            if side is None or not match.is_complete:
                continue
            if match.winner == MatchWinner.HALVED:
                won += 0.5
            elif (match.winner == MatchWinner.SIDE_A and side == "a") or (
                match.winner == MatchWinner.SIDE_B and side == "b"
            ):
                won += 1
    return won
