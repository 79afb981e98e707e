"""
Boundary layer between callers and the scoring engine.

TourService looks entities up on a Tour, checks the preconditions the pure
engine does not (entity exists, player on team, lifecycle only moves
forward), stores the engine's recomputed records back on the tour, and
raises typed errors from ``services.exceptions`` when a request is invalid.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence
from uuid import uuid4

from models import (
    CompetitionType,
    CompetitionWinner,
    Match,
    MatchFormat,
    MatchSide,
    Player,
    Round,
    RoundFormat,
    RoundSettings,
    RoundStatus,
    RyderCup,
    RyderCupSession,
    ScoreRecord,
    Team,
    Tour,
)
from models.leaderboard import LeaderboardEntry, TeamLeaderboardEntry
from scoring.aggregator import rescore, score_round, score_team_round
from scoring.competition import competition_tally, hole_competition_winners, replace_competition_winner
from scoring.config import get_config
from scoring.leaderboard import individual_leaderboard
from scoring.logging_config import get_logger
from scoring.matchplay import (
    DEFAULT_SIDE_A_NAME,
    DEFAULT_SIDE_B_NAME,
    RyderCupStandings,
    apply_hole_score,
    ryder_cup_standings,
    tour_team_points,
)
from scoring.stableford import stableford_points, tournament_stableford
from scoring.team import team_leaderboard
from services.exceptions import MembershipError, NotFoundError, RoundStateError, ScoringError

logger = get_logger("service")

SCRAMBLE_TEAM_SCORING = "scramble"


class TourService:
    """Score entry, match play and leaderboards for one tour held in memory."""

    def __init__(self, tour: Tour):
        self.tour = tour

    # ================================================================
    # Lookups
    # ================================================================

    def get_round(self, round_id: str) -> Round:
        round_obj = self.tour.get_round(round_id)
        if round_obj is None:
            raise NotFoundError("Round", round_id)
        return round_obj

    def get_player(self, player_id: str) -> Player:
        player = self.tour.get_player(player_id)
        if player is None:
            raise NotFoundError("Player", player_id)
        return player

    def get_team(self, team_id: str) -> Team:
        team = self.tour.get_team(team_id)
        if team is None:
            raise NotFoundError("Team", team_id)
        return team

    def get_match(self, round_id: str, match_id: str) -> Match:
        round_obj = self.get_round(round_id)
        match = round_obj.ryder_cup.get_match(match_id) if round_obj.ryder_cup else None
        if match is None:
            raise NotFoundError("Match", match_id)
        return match

    # ================================================================
    # Round lifecycle
    # ================================================================

    def _transition(self, round_obj: Round, status: RoundStatus, at: Optional[datetime] = None) -> Round:
        if not round_obj.can_transition_to(status):
            logger.warning("Rejected move of round %s from %s to %s", round_obj.id, round_obj.status.value, status.value)
            raise RoundStateError(
                f"Round '{round_obj.id}' cannot move from {round_obj.status.value} to {status.value}"
            )
        if round_obj.status == status:
            return round_obj

        now = at or datetime.now()
        if status in (RoundStatus.IN_PROGRESS, RoundStatus.COMPLETED) and round_obj.started_at is None:
            round_obj.started_at = now
        if status == RoundStatus.COMPLETED:
            round_obj.completed_at = now
        round_obj.status = status
        logger.info("Round %s is now %s", round_obj.id, status.value)
        return round_obj

    def start_round(self, round_id: str, at: Optional[datetime] = None) -> Round:
        return self._transition(self.get_round(round_id), RoundStatus.IN_PROGRESS, at)

    def complete_round(self, round_id: str, at: Optional[datetime] = None) -> Round:
        return self._transition(self.get_round(round_id), RoundStatus.COMPLETED, at)

    def _open_round(self, round_id: str) -> Round:
        """Fetch a round that still accepts scores, starting it if needed."""
        round_obj = self.get_round(round_id)
        if round_obj.is_completed:
            logger.warning("Rejected score for completed round %s", round_id)
            raise RoundStateError(f"Round '{round_id}' is completed and no longer accepts scores")
        if round_obj.status == RoundStatus.CREATED:
            self._transition(round_obj, RoundStatus.IN_PROGRESS)
        return round_obj

    def update_round_settings(self, round_id: str, **settings: Any) -> Round:
        """Change round settings and rescore every stored record against them."""
        round_obj = self.get_round(round_id)
        updated = round_obj.settings.model_copy()
        for name, value in settings.items():
            if name not in RoundSettings.model_fields:
                raise ScoringError(f"Unknown round setting '{name}'")
            error = updated.update_field(name, value)
            if error:
                raise ScoringError(f"Invalid value for {name}: {error}")
        round_obj.settings = updated

        for player_id, record in list(round_obj.scores.items()):
            round_obj.scores[player_id] = rescore(round_obj, record, self.tour.get_player(player_id))
        for team_id, record in list(round_obj.team_scores.items()):
            round_obj.team_scores[team_id] = rescore(round_obj, record)
        logger.info("Round %s settings updated, %d records rescored", round_id,
                    len(round_obj.scores) + len(round_obj.team_scores))
        return round_obj

    # ================================================================
    # Stroke-play score entry
    # ================================================================

    def record_player_score(
        self,
        round_id: str,
        player_id: str,
        scores: Sequence[Any],
        stableford_manual: Optional[int] = None,
    ) -> ScoreRecord:
        """Replace a player's raw hole scores for a round and store the recomputed record."""
        player = self.get_player(player_id)
        if self.get_round(round_id).is_match_play:
            raise RoundStateError(f"Round '{round_id}' is match play; record scores per match")
        round_obj = self._open_round(round_id)

        previous = round_obj.scores.get(player_id)
        if stableford_manual is None and previous is not None:
            stableford_manual = previous.stableford_manual

        record = score_round(round_obj, scores, player=player, stableford_manual=stableford_manual)
        team = self.tour.team_for_player(player_id)
        if team is not None and record.team_id is None:
            record = record.with_updates(team_id=team.id)
        round_obj.scores[player_id] = record
        logger.info("Scored %s in round %s: %d (%+d)", player_id, round_id,
                    record.total_score, record.total_to_par)
        return record

    def record_team_score(self, round_id: str, team_id: str, scores: Sequence[Any]) -> ScoreRecord:
        """Store a scramble team's single combined score for a round."""
        round_obj = self.get_round(round_id)
        self.get_team(team_id)
        is_scramble = round_obj.format == RoundFormat.SCRAMBLE or (
            round_obj.format == RoundFormat.BEST_BALL
            and round_obj.settings.team_scoring == SCRAMBLE_TEAM_SCORING
        )
        if not is_scramble:
            raise RoundStateError(f"Round '{round_id}' is not a scramble round")
        self._open_round(round_id)

        record = score_team_round(round_obj, team_id, scores)
        round_obj.team_scores[team_id] = record
        logger.info("Scored team %s in round %s: %d", team_id, round_id, record.total_score)
        return record

    def set_stableford_override(self, round_id: str, player_id: str, points: Optional[int]) -> ScoreRecord:
        """Set (or clear with None) the manual Stableford total for a player's round."""
        round_obj = self.get_round(round_id)
        self.get_player(player_id)
        record = round_obj.scores.get(player_id)
        if record is None:
            raise NotFoundError("Score for player", player_id)
        record = record.with_updates(stableford_manual=points)
        round_obj.scores[player_id] = record
        return record

    # ================================================================
    # Match play
    # ================================================================

    def _ensure_ryder_cup(self, round_obj: Round) -> RyderCup:
        if round_obj.ryder_cup is None:
            round_obj.ryder_cup = RyderCup(target_points=get_config().ryder_cup_target_points)
        return round_obj.ryder_cup

    def _check_side(self, side: MatchSide) -> None:
        team = self.get_team(side.team_id)
        for player_id in side.player_ids:
            self.get_player(player_id)
            if not team.has_player(player_id):
                logger.warning("Player %s is not on team %s", player_id, team.id)
                raise MembershipError(f"Player '{player_id}' is not on team '{team.id}'")

    def _new_match(self, round_id: str, match_format: MatchFormat, side_a: MatchSide, side_b: MatchSide) -> Match:
        self._check_side(side_a)
        self._check_side(side_b)
        return Match(
            id=uuid4().hex,
            round_id=round_id,
            format=match_format,
            side_a=side_a,
            side_b=side_b,
        )

    def create_match(
        self,
        round_id: str,
        match_format: MatchFormat,
        side_a: MatchSide,
        side_b: MatchSide,
    ) -> Match:
        round_obj = self.get_round(round_id)
        if round_obj.is_completed:
            raise RoundStateError(f"Round '{round_id}' is completed")
        match = self._new_match(round_id, match_format, side_a, side_b)
        self._ensure_ryder_cup(round_obj).matches.append(match)
        logger.info("Created %s match %s in round %s", MatchFormat(match_format).value, match.id, round_id)
        return match

    @staticmethod
    def session_format(session_type: str) -> MatchFormat:
        if "four-ball" in session_type:
            return MatchFormat.FOUR_BALL
        if "foursomes" in session_type:
            return MatchFormat.FOURSOMES
        return MatchFormat.SINGLES

    def add_ryder_cup_session(
        self,
        round_id: str,
        session_type: str,
        pairings: Sequence[Dict[str, List[str]]],
    ) -> List[Match]:
        """
        Create one match per pairing for a Ryder Cup session.

        Each pairing is ``{"side_a": [...player ids], "side_b": [...]}``. A
        side's team is the team of its first player, falling back to the
        tour's first two teams.
        """
        round_obj = self.get_round(round_id)
        if len(self.tour.teams) < 2:
            raise ScoringError("Ryder Cup requires two teams")
        if round_obj.is_completed:
            raise RoundStateError(f"Round '{round_id}' is completed")

        match_format = self.session_format(session_type)
        session_key = session_type if session_type in {s.value for s in RyderCupSession} else None
        default_a, default_b = self.tour.teams[0].id, self.tour.teams[1].id

        created: List[Match] = []
        for pairing in pairings:
            side_a_ids = list(pairing.get("side_a", []))
            side_b_ids = list(pairing.get("side_b", []))
            team_a = self.tour.team_for_player(side_a_ids[0]) if side_a_ids else None
            team_b = self.tour.team_for_player(side_b_ids[0]) if side_b_ids else None
            team_a_id = team_a.id if team_a else default_a
            team_b_id = team_b.id if team_b else (default_b if team_a_id == default_a else default_a)

            created.append(self._new_match(
                round_id,
                match_format,
                MatchSide(team_id=team_a_id, player_ids=side_a_ids),
                MatchSide(team_id=team_b_id, player_ids=side_b_ids),
            ))

        # Nothing is stored until every pairing has passed its checks.
        ryder_cup = self._ensure_ryder_cup(round_obj)
        ryder_cup.matches.extend(created)
        if session_key:
            ryder_cup.sessions.setdefault(session_key, []).extend(match.id for match in created)
        logger.info("Created %d %s matches in round %s", len(created), match_format.value, round_id)

        if round_obj.status == RoundStatus.CREATED:
            self._transition(round_obj, RoundStatus.IN_PROGRESS)
        return created

    def _side_name(self, team_id: str, fallback: str) -> str:
        team = self.tour.get_team(team_id)
        return team.name if team is not None and team.name else fallback

    def record_match_hole(
        self,
        round_id: str,
        match_id: str,
        hole_number: int,
        side_a_score: Any,
        side_b_score: Any,
    ) -> Match:
        """Record or correct one hole of a match and store the replayed match."""
        match = self.get_match(round_id, match_id)
        round_obj = self._open_round(round_id)
        total_holes = round_obj.hole_count or get_config().default_hole_count

        updated = apply_hole_score(
            match,
            hole_number,
            side_a_score,
            side_b_score,
            total_holes,
            self._side_name(match.side_a.team_id, DEFAULT_SIDE_A_NAME),
            self._side_name(match.side_b.team_id, DEFAULT_SIDE_B_NAME),
        )
        matches = round_obj.ryder_cup.matches
        matches[[m.id for m in matches].index(match_id)] = updated
        logger.info("Match %s after hole %d: %s", match_id, hole_number, updated.status_text)
        return updated

    def round_standings(self, round_id: str) -> RyderCupStandings:
        round_obj = self.get_round(round_id)
        team_a_id = self.tour.teams[0].id if len(self.tour.teams) >= 2 else None
        team_b_id = self.tour.teams[1].id if len(self.tour.teams) >= 2 else None
        return ryder_cup_standings(round_obj.ryder_cup, team_a_id, team_b_id)

    def tour_points(self) -> Dict[str, float]:
        return tour_team_points(self.tour)

    # ================================================================
    # Side competitions
    # ================================================================

    def set_competition_winner(
        self,
        round_id: str,
        hole_number: int,
        competition: CompetitionType,
        winner_id: Optional[str],
        distance: Optional[float] = None,
        match_id: Optional[str] = None,
    ) -> List[CompetitionWinner]:
        """
        Record (or, with ``winner_id=None``, clear) a closest-to-pin or
        longest-drive winner on one hole. With ``match_id`` the winner belongs
        to that match only; otherwise it is the round-wide winner.

        Returns the hole's winners after the change.
        """
        round_obj = self.get_round(round_id)
        competition = CompetitionType(competition)
        if round_obj.get_hole(hole_number) is None:
            raise NotFoundError("Hole", str(hole_number))
        if distance is not None and distance < 0:
            raise ScoringError(f"Distance must be non-negative, got {distance}")
        if match_id is not None:
            self.get_match(round_id, match_id)
        winner = None
        if winner_id is not None:
            self.get_player(winner_id)
            winner = CompetitionWinner(player_id=winner_id, distance=distance, match_id=match_id)

        winners = replace_competition_winner(
            hole_competition_winners(round_obj, competition, hole_number), winner, match_id
        )
        round_obj.competition_winners.setdefault(competition, {})[hole_number] = winners
        logger.info("Round %s hole %d %s: %s", round_id, hole_number, competition.value,
                    winner_id or "cleared")
        return winners

    def competition_tally(self, competition: CompetitionType) -> Dict[str, int]:
        return competition_tally(self.tour, competition)

    # ================================================================
    # Leaderboards
    # ================================================================

    def individual_leaderboard(self, round_id: Optional[str] = None) -> List[LeaderboardEntry]:
        if round_id is not None:
            self.get_round(round_id)
        return individual_leaderboard(self.tour, round_id)

    def team_leaderboard(self, round_id: Optional[str] = None) -> List[TeamLeaderboardEntry]:
        if round_id is not None:
            self.get_round(round_id)
        return team_leaderboard(self.tour, round_id)

    def stableford(self, player_id: str, round_id: Optional[str] = None) -> int:
        player = self.get_player(player_id)
        if round_id is None:
            return tournament_stableford(self.tour, player_id)
        round_obj = self.get_round(round_id)
        return stableford_points(round_obj, round_obj.scores.get(player_id), player.handicap)
