from .stats import (
    aggregate_player_stats,
    format_streak,
    format_to_par,
    hole_winners,
    match_lead_progression,
    player_round_stats,
    stableford_per_round,
    team_stats,
    tournament_stats,
)
from .visualizations import (
    plot_match_progression,
    plot_stableford_per_round,
    plot_team_leaderboard,
)

__all__ = [
    "player_round_stats",
    "aggregate_player_stats",
    "hole_winners",
    "team_stats",
    "tournament_stats",
    "match_lead_progression",
    "stableford_per_round",
    "format_to_par",
    "format_streak",
    "plot_match_progression",
    "plot_team_leaderboard",
    "plot_stableford_per_round",
]
