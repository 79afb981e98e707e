from .base import BaseGolfModel
from .competition import CompetitionType, CompetitionWinner
from .hole import Hole
from .leaderboard import LeaderboardEntry, TeamLeaderboardEntry
from .match import (
    HoleResult,
    Match,
    MatchFormat,
    MatchHole,
    MatchPoints,
    MatchSide,
    MatchState,
    MatchStatus,
    MatchWinner,
    RyderCup,
    RyderCupSession,
)
from .player import Player
from .round import MATCH_PLAY_FORMATS, Round, RoundFormat, RoundSettings, RoundStatus
from .score import UNPLAYED, HoleEntry, Played, ScoreRecord, Unplayed, to_entries, to_entry
from .team import Team
from .tour import Tour, TourFormat

__all__ = [
    "BaseGolfModel",
    "CompetitionType",
    "CompetitionWinner",
    "Hole",
    "HoleEntry",
    "HoleResult",
    "LeaderboardEntry",
    "MATCH_PLAY_FORMATS",
    "Match",
    "MatchFormat",
    "MatchHole",
    "MatchPoints",
    "MatchSide",
    "MatchState",
    "MatchStatus",
    "MatchWinner",
    "Played",
    "Player",
    "Round",
    "RoundFormat",
    "RoundSettings",
    "RoundStatus",
    "RyderCup",
    "RyderCupSession",
    "ScoreRecord",
    "Team",
    "TeamLeaderboardEntry",
    "Tour",
    "TourFormat",
    "UNPLAYED",
    "Unplayed",
    "to_entries",
    "to_entry",
]
