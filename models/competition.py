from enum import Enum
from pydantic import Field
from typing import Optional

from .base import BaseGolfModel


class CompetitionType(str, Enum):
    CLOSEST_TO_PIN = "closest-to-pin"
    LONGEST_DRIVE = "longest-drive"


class CompetitionWinner(BaseGolfModel):
    """Winner of a side competition on one hole, optionally scoped to a match."""
    player_id: str
    distance: Optional[float] = Field(None, ge=0)
    match_id: Optional[str] = None
