from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional, Sequence

from models.match import HoleResult
from models.round import Round
from models.score import ScoreRecord
from models.tour import Tour
from scoring.matchplay import DEFAULT_SIDE_A_NAME, DEFAULT_SIDE_B_NAME, evaluate_match
from scoring.stableford import stableford_points
from scoring.team import strategy_for

SCORE_TYPE_ORDER = [
    "eagle_or_better",
    "birdie",
    "par",
    "bogey",
    "double_bogey_or_worse",
]

STREAK_LABELS = {
    "birdie": "Birdie",
    "par": "Par",
    "bogey": "Bogey",
    "under-par": "Under Par",
    "over-par": "Over Par",
}

MOMENTUM_THRESHOLD = 2
MOMENTUM_WINDOW = 3
BEST_PERFORMER_COUNT = 3


def format_to_par(to_par: int) -> str:
    """Score relative to par for display: E, +3, -2."""
    if to_par == 0:
        return "E"
    return f"+{to_par}" if to_par > 0 else str(to_par)


def format_streak(streak: Dict[str, Any]) -> str:
    kind = streak.get("type", "none")
    length = streak.get("length", 0)
    if kind == "none" or not length:
        return "No active streak"
    return f"{STREAK_LABELS[kind]} streak: {length} hole{'s' if length > 1 else ''}"


def _score_type_from_to_par(to_par: int) -> str:
    if to_par <= -2:
        return "eagle_or_better"
    if to_par == -1:
        return "birdie"
    if to_par == 0:
        return "par"
    if to_par == 1:
        return "bogey"
    return "double_bogey_or_worse"


def _streak_kind(to_par: int) -> str:
    if to_par == -1:
        return "birdie"
    if to_par == 0:
        return "par"
    if to_par == 1:
        return "bogey"
    return "under-par" if to_par < 0 else "over-par"


def _streak_continues(kind: str, to_par: int) -> bool:
    if kind == "under-par":
        return to_par < 0
    if kind == "over-par":
        return to_par > 0
    return kind != "none" and _streak_kind(to_par) == kind


def _empty_nine() -> Dict[str, int]:
    return {"score": 0, "to_par": 0, "birdies": 0, "pars": 0, "bogeys": 0, "holes_played": 0}


def player_round_stats(round_obj: Round, player_id: str) -> Optional[Dict[str, Any]]:
    """
    Hole-by-hole breakdown of one player's round.

    Returns None when the player has no record for the round. Counts score
    types by gross strokes against par, tracks the best and worst hole, the
    streak running into the last played hole (an unplayed hole resets it),
    and front-nine / back-nine summaries by hole position.
    """
    record = round_obj.scores.get(player_id)
    if record is None:
        return None

    counts = {name: 0 for name in SCORE_TYPE_ORDER}
    front9 = _empty_nine()
    back9 = _empty_nine()
    best_hole: Optional[Dict[str, int]] = None
    worst_hole: Optional[Dict[str, int]] = None
    streak_kind = "none"
    streak_length = 0

    for index, hole in enumerate(round_obj.holes):
        strokes = record.strokes(index)
        if strokes is None:
            streak_kind, streak_length = "none", 0
            continue

        to_par = strokes - hole.par
        counts[_score_type_from_to_par(to_par)] += 1

        if best_hole is None or to_par < best_hole["to_par"]:
            best_hole = {"hole_number": hole.number, "score": strokes, "to_par": to_par}
        if worst_hole is None or to_par > worst_hole["to_par"]:
            worst_hole = {"hole_number": hole.number, "score": strokes, "to_par": to_par}

        nine = front9 if index < 9 else back9
        nine["score"] += strokes
        nine["to_par"] += to_par
        nine["holes_played"] += 1
        if to_par == -1:
            nine["birdies"] += 1
        elif to_par == 0:
            nine["pars"] += 1
        elif to_par == 1:
            nine["bogeys"] += 1

        if _streak_continues(streak_kind, to_par):
            streak_length += 1
        else:
            streak_kind, streak_length = _streak_kind(to_par), 1

    return {
        "player_id": player_id,
        "round_id": round_obj.id,
        **counts,
        "best_hole": best_hole,
        "worst_hole": worst_hole,
        "current_streak": {"type": streak_kind, "length": streak_length},
        "front9": front9,
        "back9": back9,
    }


def aggregate_player_stats(rounds: Iterable[Round], player_id: str) -> Dict[str, Any]:
    """Score-type totals and round averages across rounds. Match-play rounds are skipped."""
    totals = {name: 0 for name in SCORE_TYPE_ORDER}
    total_score = 0
    rounds_played = 0
    best_round_score: Optional[int] = None
    best_round_id: Optional[str] = None

    for round_obj in rounds:
        if round_obj.is_match_play:
            continue
        stats = player_round_stats(round_obj, player_id)
        if stats is None:
            continue
        for name in SCORE_TYPE_ORDER:
            totals[name] += stats[name]

        record = round_obj.scores[player_id]
        total_score += record.total_score
        rounds_played += 1
        if best_round_score is None or record.total_score < best_round_score:
            best_round_score = record.total_score
            best_round_id = round_obj.id

    return {
        "player_id": player_id,
        **{f"total_{name}": value for name, value in totals.items()},
        "rounds_played": rounds_played,
        "average_score_per_round": total_score / rounds_played if rounds_played else 0.0,
        "best_round_score": best_round_score or 0,
        "best_round_id": best_round_id,
    }


def hole_winners(round_obj: Round, player_ids: Optional[Sequence[str]] = None) -> List[Dict[str, Any]]:
    """Lowest gross score on each hole and who made it. Holes nobody scored are left out."""
    candidates = list(player_ids) if player_ids is not None else list(round_obj.scores)
    results: List[Dict[str, Any]] = []

    for index, hole in enumerate(round_obj.holes):
        scored = []
        for player_id in candidates:
            record = round_obj.scores.get(player_id)
            strokes = record.strokes(index) if record is not None else None
            if strokes is not None:
                scored.append((player_id, strokes))
        if not scored:
            continue

        lowest = min(strokes for _, strokes in scored)
        winners = [player_id for player_id, strokes in scored if strokes == lowest]
        results.append(
            {
                "hole_number": hole.number,
                "winner_ids": winners,
                "score": lowest,
                "to_par": lowest - hole.par,
                "is_tied": len(winners) > 1,
            }
        )
    return results


def _momentum(recent: Sequence[int]) -> str:
    """Compare the earlier and later halves of the recent scores; lower is better."""
    if len(recent) < 2:
        return "no-data"
    split = (len(recent) + 1) // 2
    first, second = recent[:split], recent[split:]
    improvement = sum(first) / len(first) - sum(second) / len(second)
    if improvement > MOMENTUM_THRESHOLD:
        return "improving"
    if improvement < -MOMENTUM_THRESHOLD:
        return "declining"
    return "stable"


def _player_records(tour: Tour, player_id: str) -> List[ScoreRecord]:
    records = []
    for round_obj in tour.rounds:
        record = round_obj.scores.get(player_id)
        if record is not None and record.has_score:
            records.append(record)
    return records


def team_stats(tour: Tour, team_id: str) -> Optional[Dict[str, Any]]:
    """
    Per-team summary across every round of the tour that the team scored in.

    Each round's team score comes from that round's team strategy, so
    best-ball, scramble and summed rounds are each counted the way the
    leaderboard counts them. Momentum compares the last three team scores.
    """
    team = tour.get_team(team_id)
    if team is None:
        return None

    player_stats = []
    for player in tour.team_players(team):
        records = _player_records(tour, player.id)
        if not records:
            continue
        scores = [r.total_score for r in records]
        player_stats.append(
            {
                "player": player,
                "rounds_played": len(records),
                "total_score": sum(scores),
                "average_score": sum(scores) / len(scores),
                "best_score": min(scores),
                "to_par": sum(r.total_to_par for r in records),
            }
        )

    round_scores: List[int] = []
    to_par = 0
    for round_obj in tour.rounds:
        entry = strategy_for(round_obj)(team, tour, round_obj)
        if entry.players_with_scores == 0 or entry.total_score <= 0:
            continue
        round_scores.append(entry.total_score)
        to_par += entry.total_to_par

    recent = round_scores[-MOMENTUM_WINDOW:]
    best_performers = sorted(player_stats, key=lambda ps: ps["average_score"])[:BEST_PERFORMER_COUNT]
    return {
        "team": team,
        "rounds_played": len(round_scores),
        "total_score": sum(round_scores),
        "average_score": sum(round_scores) / len(round_scores) if round_scores else 0.0,
        "best_score": min(round_scores) if round_scores else 0,
        "worst_score": max(round_scores) if round_scores else 0,
        "to_par": to_par,
        "recent_scores": recent,
        "momentum": _momentum(recent),
        "best_performers": best_performers,
        "player_stats": player_stats,
    }


def tournament_stats(tour: Tour) -> Dict[str, Any]:
    """Headline numbers for a tour: round counts, average individual score, lowest round."""
    individual = [
        (round_obj.id, record)
        for round_obj in tour.rounds
        for record in round_obj.scores.values()
        if not record.is_team_score and record.has_score
    ]

    average = 0.0
    if individual:
        average = round(sum(r.total_score for _, r in individual) / len(individual), 1)

    lowest_round: Optional[Dict[str, Any]] = None
    for round_id, record in individual:
        if lowest_round is None or record.total_to_par < lowest_round["to_par"]:
            lowest_round = {
                "player_id": record.player_id,
                "round_id": round_id,
                "score": record.total_score,
                "to_par": record.total_to_par,
            }

    return {
        "total_rounds": len(tour.rounds),
        "completed_rounds": len(tour.completed_rounds()),
        "total_players": len(tour.players),
        "average_score": average,
        "lowest_round": lowest_round,
    }


def match_lead_progression(
    round_obj: Round,
    match_id: str,
    side_a_name: str = DEFAULT_SIDE_A_NAME,
    side_b_name: str = DEFAULT_SIDE_B_NAME,
) -> List[Dict[str, Any]]:
    """Running lead after each played hole of a match; positive means side A is up."""
    match = round_obj.ryder_cup.get_match(match_id) if round_obj.ryder_cup else None
    if match is None:
        return []

    evaluation = evaluate_match(match.holes, round_obj.hole_count or None, side_a_name, side_b_name)
    rows: List[Dict[str, Any]] = []
    lead = 0
    for hole in evaluation.holes:
        if hole.match_status is None:
            continue
        if hole.result == HoleResult.SIDE_A:
            lead += 1
        elif hole.result == HoleResult.SIDE_B:
            lead -= 1
        rows.append({"hole_number": hole.hole_number, "lead": lead, "status": hole.match_status})
    return rows


def stableford_per_round(tour: Tour, player_id: str) -> List[Dict[str, Any]]:
    """Stableford points by completed round for one player, for plotting/reporting."""
    player = tour.get_player(player_id)
    handicap = player.handicap if player is not None else None
    results: List[Dict[str, Any]] = []
    for index, round_obj in enumerate(tour.completed_rounds(), start=1):
        record = round_obj.scores.get(player_id)
        results.append(
            {
                "round_index": index,
                "round_id": round_obj.id,
                "round_name": round_obj.name,
                "points": stableford_points(round_obj, record, handicap),
                "holes_played": record.holes_played if record is not None else 0,
            }
        )
    return results
