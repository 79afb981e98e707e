from pydantic import Field
from typing import Optional

from .base import BaseGolfModel


class Player(BaseGolfModel):
    """A golfer entered in a tour. The engine only ever reads the handicap."""

    id: str
    name: Optional[str] = None
    handicap: Optional[float] = Field(None, ge=0, le=54)
    team_id: Optional[str] = None
    user_id: Optional[str] = None

    @property
    def has_handicap(self) -> bool:
        return bool(self.handicap)
