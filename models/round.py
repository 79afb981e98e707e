from datetime import datetime
from enum import Enum
from pydantic import Field, field_validator
from typing import Dict, List, Optional

from .base import BaseGolfModel
from .competition import CompetitionType, CompetitionWinner
from .hole import Hole
from .match import RyderCup
from .score import ScoreRecord


class RoundFormat(str, Enum):
    STROKE_PLAY = "stroke-play"
    BEST_BALL = "best-ball"
    SCRAMBLE = "scramble"
    ALTERNATE_SHOT = "alternate-shot"
    SKINS = "skins"
    MATCH_PLAY = "match-play"
    SINGLES_MATCH_PLAY = "singles-match-play"
    FOURSOMES_MATCH_PLAY = "foursomes-match-play"
    FOUR_BALL_MATCH_PLAY = "four-ball-match-play"


MATCH_PLAY_FORMATS = frozenset({
    RoundFormat.MATCH_PLAY,
    RoundFormat.SINGLES_MATCH_PLAY,
    RoundFormat.FOURSOMES_MATCH_PLAY,
    RoundFormat.FOUR_BALL_MATCH_PLAY,
})


class RoundStatus(str, Enum):
    CREATED = "created"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


_STATUS_ORDER = {
    RoundStatus.CREATED: 0,
    RoundStatus.IN_PROGRESS: 1,
    RoundStatus.COMPLETED: 2,
}


class RoundSettings(BaseGolfModel):
    """Per-round switches. ``strokes_given`` gates handicap allocation."""
    strokes_given: bool = False
    stableford_scoring: bool = False
    team_scoring: Optional[str] = None  # "best-ball" | "scramble" | "alternate-shot"
    match_play_type: Optional[str] = None  # "singles" | "foursomes" | "four-ball"
    ryder_cup_session: Optional[str] = None


class Round(BaseGolfModel):
    """A round of a tour: its holes, format, settings and recorded scores."""
    id: str
    name: Optional[str] = None
    course_name: Optional[str] = None
    format: RoundFormat = RoundFormat.STROKE_PLAY
    holes: List[Hole] = Field(default_factory=list)
    settings: RoundSettings = Field(default_factory=RoundSettings)
    status: RoundStatus = RoundStatus.CREATED

    # Player-keyed records; scramble team records live in team_scores keyed by team id.
    scores: Dict[str, ScoreRecord] = Field(default_factory=dict)
    team_scores: Dict[str, ScoreRecord] = Field(default_factory=dict)
    ryder_cup: Optional[RyderCup] = None
    # Closest-to-pin and longest-drive winners, keyed by hole number.
    competition_winners: Dict[CompetitionType, Dict[int, List[CompetitionWinner]]] = Field(default_factory=dict)

    created_at: Optional[datetime] = None
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None

    @field_validator("holes")
    @classmethod
    def validate_hole_numbers(cls, v):
        numbers = [h.number for h in v]
        if len(numbers) != len(set(numbers)):
            raise ValueError("Hole numbers must be unique within a round")
        return v

    @property
    def hole_count(self) -> int:
        return len(self.holes)

    @property
    def total_par(self) -> int:
        return sum(h.par for h in self.holes)

    @property
    def is_match_play(self) -> bool:
        return self.format in MATCH_PLAY_FORMATS or self.ryder_cup is not None

    @property
    def is_completed(self) -> bool:
        return self.status == RoundStatus.COMPLETED or self.completed_at is not None

    @property
    def is_stableford(self) -> bool:
        return self.format == RoundFormat.STROKE_PLAY and self.settings.stableford_scoring

    def get_hole(self, number: int) -> Optional[Hole]:
        """Get a hole by its number."""
        for hole in self.holes:
            if hole.number == number:
                return hole
        return None

    def hole_par(self, hole_index: int) -> Optional[int]:
        """Par for a 0-based hole index, None when the round has no such hole."""
        if 0 <= hole_index < len(self.holes):
            return self.holes[hole_index].par
        return None

    def can_transition_to(self, status: RoundStatus) -> bool:
        """Lifecycle is monotonic: created -> in-progress -> completed."""
        return _STATUS_ORDER[RoundStatus(status)] >= _STATUS_ORDER[self.status]
