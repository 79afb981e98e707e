from pydantic import Field
from typing import List, Optional

from .base import BaseGolfModel


class Team(BaseGolfModel):
    """A team of players. Colour and captain are display metadata only."""

    id: str
    name: Optional[str] = None
    captain_id: Optional[str] = None
    player_ids: List[str] = Field(default_factory=list)
    color: Optional[str] = None

    def has_player(self, player_id: str) -> bool:
        return player_id in self.player_ids
