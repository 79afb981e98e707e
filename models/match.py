from enum import Enum
from pydantic import Field
from typing import Dict, List, Optional

from .base import BaseGolfModel


class MatchFormat(str, Enum):
    SINGLES = "singles"
    FOURSOMES = "foursomes"
    FOUR_BALL = "four-ball"


class HoleResult(str, Enum):
    SIDE_A = "side-a"
    SIDE_B = "side-b"
    TIE = "tie"
    UNPLAYED = "unplayed"


class MatchState(str, Enum):
    """Derived match-play state. ``COMPLETE`` is terminal for a given history."""
    NOT_STARTED = "not-started"
    IN_PROGRESS = "in-progress"
    DORMIE = "dormie"
    COMPLETE = "complete"


class MatchStatus(str, Enum):
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


class MatchWinner(str, Enum):
    SIDE_A = "side-a"
    SIDE_B = "side-b"
    HALVED = "halved"


class RyderCupSession(str, Enum):
    DAY1_FOURSOMES = "day1-foursomes"
    DAY1_FOUR_BALL = "day1-four-ball"
    DAY2_FOURSOMES = "day2-foursomes"
    DAY2_FOUR_BALL = "day2-four-ball"
    DAY3_SINGLES = "day3-singles"


class MatchSide(BaseGolfModel):
    """One side of a match: the team and the players actually playing it."""
    team_id: str
    player_ids: List[str] = Field(default_factory=list)


class MatchPoints(BaseGolfModel):
    side_a: float = Field(0.0, ge=0, le=1)
    side_b: float = Field(0.0, ge=0, le=1)

    @property
    def total(self) -> float:
        return self.side_a + self.side_b


class MatchHole(BaseGolfModel):
    """Raw score pair for one hole plus its derived result."""
    hole_number: int = Field(..., ge=1)
    side_a_score: Optional[float] = None
    side_b_score: Optional[float] = None
    result: HoleResult = HoleResult.UNPLAYED
    match_status: Optional[str] = None


class Match(BaseGolfModel):
    """
    A head-to-head match inside a match-play round.

    ``holes`` keeps the raw (side A, side B) history. Everything else on the
    model is rebuilt from that history by ``scoring.matchplay.recompute_match``.
    """
    id: str
    round_id: Optional[str] = None
    format: MatchFormat = MatchFormat.SINGLES
    side_a: MatchSide
    side_b: MatchSide
    holes: List[MatchHole] = Field(default_factory=list)

    status: MatchStatus = MatchStatus.IN_PROGRESS
    state: MatchState = MatchState.NOT_STARTED
    winner: Optional[MatchWinner] = None
    status_text: str = "Not started"
    result_summary: Optional[str] = None
    points: MatchPoints = Field(default_factory=MatchPoints)

    @property
    def is_complete(self) -> bool:
        return self.status == MatchStatus.COMPLETED

    def side_of(self, player_id: str) -> Optional[str]:
        """Return "a" or "b" for the side the player is on, None if not in this match."""
        if player_id in self.side_a.player_ids:
            return "a"
        if player_id in self.side_b.player_ids:
            return "b"
        return None

    def get_hole(self, hole_number: int) -> Optional[MatchHole]:
        for hole in self.holes:
            if hole.hole_number == hole_number:
                return hole
        return None


def _empty_sessions() -> Dict[str, List[str]]:
    return {session.value: [] for session in RyderCupSession}


class RyderCup(BaseGolfModel):
    """Match-play container for a round: its matches and session line-ups."""
    target_points: float = Field(14.5, gt=0)
    matches: List[Match] = Field(default_factory=list)
    sessions: Dict[str, List[str]] = Field(default_factory=_empty_sessions)

    def get_match(self, match_id: str) -> Optional[Match]:
        for match in self.matches:
            if match.id == match_id:
                return match
        return None
