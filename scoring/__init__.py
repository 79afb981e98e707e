from .aggregator import rescore, score_round, score_team_round, team_score_id
from .competition import competition_tally, hole_competition_winners, replace_competition_winner
from .config import EngineConfig, clear_config_cache, get_config
from .handicap import allocate_handicap_strokes, allocation_for_player, playing_handicap, strokes_for_hole
from .leaderboard import individual_leaderboard, sort_and_position
from .logging_config import get_logger, setup_logging
from .matchplay import (
    MatchEvaluation,
    RyderCupStandings,
    apply_hole_score,
    evaluate_match,
    hole_result,
    matches_won,
    player_match_strokes,
    recompute_match,
    ryder_cup_standings,
    side_points,
    team_points,
    tour_team_points,
)
from .stableford import hole_stableford_points, stableford_points, tournament_stableford
from .team import (
    TEAM_STRATEGIES,
    best_ball_entry,
    individual_sum_entry,
    match_play_contribution,
    round_team_leaderboard,
    scramble_entry,
    strategy_for,
    team_leaderboard,
    tournament_team_leaderboard,
)

__all__ = [
    # Handicap allocation
    "playing_handicap",
    "allocate_handicap_strokes",
    "allocation_for_player",
    "strokes_for_hole",
    # Score aggregation
    "score_round",
    "score_team_round",
    "rescore",
    "team_score_id",
    # Side competitions
    "hole_competition_winners",
    "replace_competition_winner",
    "competition_tally",
    # Stableford
    "hole_stableford_points",
    "stableford_points",
    "tournament_stableford",
    # Team aggregation
    "TEAM_STRATEGIES",
    "best_ball_entry",
    "scramble_entry",
    "individual_sum_entry",
    "match_play_contribution",
    "strategy_for",
    "round_team_leaderboard",
    "tournament_team_leaderboard",
    "team_leaderboard",
    # Leaderboards
    "sort_and_position",
    "individual_leaderboard",
    # Match play
    "MatchEvaluation",
    "RyderCupStandings",
    "hole_result",
    "evaluate_match",
    "recompute_match",
    "apply_hole_score",
    "side_points",
    "team_points",
    "tour_team_points",
    "ryder_cup_standings",
    "player_match_strokes",
    "matches_won",
    # Config / logging
    "EngineConfig",
    "get_config",
    "clear_config_cache",
    "setup_logging",
    "get_logger",
]
