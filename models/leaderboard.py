from pydantic import Field
from typing import Optional

from .base import BaseGolfModel
from .player import Player
from .team import Team


class LeaderboardEntry(BaseGolfModel):
    """Individual leaderboard row."""
    player: Player
    total_score: int = 0
    total_to_par: int = 0
    net_score: Optional[int] = None
    net_to_par: Optional[int] = None
    handicap_strokes: Optional[int] = None
    rounds_played: int = 0
    position: int = 0
    team_id: Optional[str] = None


class TeamLeaderboardEntry(BaseGolfModel):
    """Team leaderboard row. Net fields stay None unless a handicap was applied."""
    team: Team
    total_score: int = 0
    total_to_par: int = 0
    net_score: Optional[int] = None
    net_to_par: Optional[int] = None
    total_handicap_strokes: Optional[int] = None
    players_with_scores: int = 0
    total_players: int = 0
    position: int = 0
    ryder_cup_points: Optional[float] = Field(None, ge=0)
