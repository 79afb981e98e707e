import math
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Annotated, Any, List, Literal, Optional, Union

from .base import BaseGolfModel


class Played(BaseModel):
    """A hole with a recorded stroke count."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["played"] = "played"
    strokes: int = Field(..., ge=1)


class Unplayed(BaseModel):
    """A hole with no recorded score (not yet played, or conceded)."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["unplayed"] = "unplayed"


HoleEntry = Annotated[Union[Played, Unplayed], Field(discriminator="kind")]

UNPLAYED = Unplayed()


def to_entry(value: Any) -> Union[Played, Unplayed]:
    """
    Normalise a raw per-hole value into a HoleEntry.

    Positive whole numbers (``5`` or ``5.0``) become ``Played``; ``None``, zero,
    negatives, fractions, NaN/inf, booleans and anything non-numeric become
    ``Unplayed``.
    """
    if isinstance(value, (Played, Unplayed)):
        return value
    if isinstance(value, dict) and value.get("kind") in ("played", "unplayed"):
        if value["kind"] == "unplayed":
            return UNPLAYED
        return to_entry(value.get("strokes"))
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return UNPLAYED
    if not math.isfinite(value) or value <= 0:
        return UNPLAYED
    if isinstance(value, float) and not value.is_integer():
        return UNPLAYED
    return Played(strokes=int(value))


def to_entries(values: Any) -> List[Union[Played, Unplayed]]:
    if not values:
        return []
    return [to_entry(v) for v in values]


class ScoreRecord(BaseGolfModel):
    """
    One player's (or, for scramble, one team's) score for a round.

    Only ``entries`` and ``stableford_manual`` are raw input. Every other field
    is derived by ``scoring.aggregator`` from the full entry list.
    """

    player_id: str
    team_id: Optional[str] = None
    is_team_score: bool = False
    entries: List[HoleEntry] = Field(default_factory=list)

    total_score: int = 0
    total_to_par: int = 0
    handicap_strokes: Optional[int] = None
    net_score: Optional[int] = None
    net_to_par: Optional[int] = None
    stableford_manual: Optional[int] = None

    @field_validator("entries", mode="before")
    @classmethod
    def coerce_entries(cls, v):
        return to_entries(v)

    def strokes(self, hole_index: int) -> Optional[int]:
        """Strokes for a 0-based hole index, or None when unplayed or out of range."""
        if 0 <= hole_index < len(self.entries):
            entry = self.entries[hole_index]
            if isinstance(entry, Played):
                return entry.strokes
        return None

    def raw_scores(self) -> List[Optional[int]]:
        """Entries flattened to ints with None for unplayed holes."""
        return [self.strokes(i) for i in range(len(self.entries))]

    @property
    def holes_played(self) -> int:
        return sum(1 for e in self.entries if isinstance(e, Played))

    @property
    def has_score(self) -> bool:
        return self.total_score > 0

    @property
    def has_handicap_applied(self) -> bool:
        return bool(self.handicap_strokes)
