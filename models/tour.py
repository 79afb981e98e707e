from datetime import datetime
from enum import Enum
from pydantic import Field
from typing import List, Optional

from .base import BaseGolfModel
from .player import Player
from .round import Round
from .team import Team


class TourFormat(str, Enum):
    INDIVIDUAL = "individual"
    TEAM = "team"
    RYDER_CUP = "ryder-cup"


class Tour(BaseGolfModel):
    """A tournament: its players, teams and rounds."""
    id: str
    name: Optional[str] = None
    description: Optional[str] = None
    format: TourFormat = TourFormat.INDIVIDUAL
    players: List[Player] = Field(default_factory=list)
    teams: List[Team] = Field(default_factory=list)
    rounds: List[Round] = Field(default_factory=list)
    is_active: bool = True
    created_at: Optional[datetime] = None

    def get_player(self, player_id: str) -> Optional[Player]:
        for player in self.players:
            if player.id == player_id:
                return player
        return None

    def get_team(self, team_id: str) -> Optional[Team]:
        for team in self.teams:
            if team.id == team_id:
                return team
        return None

    def get_round(self, round_id: str) -> Optional[Round]:
        for round_obj in self.rounds:
            if round_obj.id == round_id:
                return round_obj
        return None

    def team_players(self, team: Team) -> List[Player]:
        """Players on a team, in the team's player order. Unknown ids are skipped."""
        players = []
        for player_id in team.player_ids:
            player = self.get_player(player_id)
            if player is not None:
                players.append(player)
        return players

    def team_for_player(self, player_id: str) -> Optional[Team]:
        for team in self.teams:
            if team.has_player(player_id):
                return team
        player = self.get_player(player_id)
        if player and player.team_id:
            return self.get_team(player.team_id)
        return None

    def completed_rounds(self) -> List[Round]:
        return [r for r in self.rounds if r.is_completed]
