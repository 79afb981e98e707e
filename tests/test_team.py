from models import (
    Hole,
    Match,
    MatchPoints,
    MatchSide,
    Player,
    Round,
    RoundFormat,
    RoundSettings,
    RoundStatus,
    RyderCup,
    Team,
    Tour,
)
from scoring.aggregator import score_round, score_team_round
from scoring.matchplay import apply_hole_score
from scoring.team import (
    best_ball_entry,
    best_ball_hole_scores,
    individual_sum_entry,
    match_play_entry,
    scramble_entry,
    strategy_for,
    team_leaderboard,
)


def _build_holes(count=3):
    return [Hole(number=i + 1, par=4, stroke_index=i + 1) for i in range(count)]


def _build_tour(rounds=None):
    players = [
        Player(id="a1", name="Ann", handicap=3, team_id="red"),
        Player(id="a2", name="Al", team_id="red"),
        Player(id="b1", name="Bo", team_id="blue"),
        Player(id="b2", name="Bea", team_id="blue"),
    ]
    teams = [
        Team(id="red", name="Red", player_ids=["a1", "a2"]),
        Team(id="blue", name="Blue", player_ids=["b1", "b2"]),
    ]
    return Tour(id="tour", players=players, teams=teams, rounds=rounds or [])


def _score(tour, round_obj, player_id, entries):
    round_obj.scores[player_id] = score_round(round_obj, entries, player=tour.get_player(player_id))


# ================================================================
# Best-ball
# ================================================================

def test_best_ball_takes_lowest_per_hole():
    round_obj = Round(id="r1", format=RoundFormat.BEST_BALL, holes=_build_holes())
    tour = _build_tour([round_obj])
    _score(tour, round_obj, "a1", [4, 5, 3])
    _score(tour, round_obj, "a2", [5, 3, 6])

    entry = best_ball_entry(tour.get_team("red"), tour, round_obj)
    assert entry.total_score == 10
    assert entry.total_to_par == -2
    assert entry.players_with_scores == 2
    assert entry.total_players == 2


def test_best_ball_skips_holes_nobody_scored():
    round_obj = Round(id="r1", format=RoundFormat.BEST_BALL, holes=_build_holes())
    tour = _build_tour([round_obj])
    _score(tour, round_obj, "a1", [4, None, 3])
    _score(tour, round_obj, "a2", [5, None])

    assert best_ball_hole_scores(round_obj, list(round_obj.scores.values())) == [4, None, 3]
    entry = best_ball_entry(tour.get_team("red"), tour, round_obj)
    assert entry.total_score == 7
    assert entry.total_to_par == -1


def test_best_ball_with_no_scores():
    round_obj = Round(id="r1", format=RoundFormat.BEST_BALL, holes=_build_holes())
    tour = _build_tour([round_obj])
    entry = best_ball_entry(tour.get_team("blue"), tour, round_obj)
    assert entry.total_score == 0
    assert entry.players_with_scores == 0


# ================================================================
# Scramble
# ================================================================

def test_scramble_uses_team_record():
    round_obj = Round(id="r1", format=RoundFormat.SCRAMBLE, holes=_build_holes())
    tour = _build_tour([round_obj])
    round_obj.team_scores["red"] = score_team_round(round_obj, "red", [3, 4, 3])

    entry = scramble_entry(tour.get_team("red"), tour, round_obj)
    assert entry.total_score == 10
    assert entry.total_to_par == -2
    assert entry.net_score is None

    empty = scramble_entry(tour.get_team("blue"), tour, round_obj)
    assert empty.total_score == 0
    assert empty.players_with_scores == 0


def test_best_ball_round_with_scramble_team_scoring():
    round_obj = Round(
        id="r1",
        format=RoundFormat.BEST_BALL,
        holes=_build_holes(),
        settings=RoundSettings(team_scoring="scramble"),
    )
    assert strategy_for(round_obj) is scramble_entry


# ================================================================
# Individual sum
# ================================================================

def test_individual_sum_with_handicap():
    round_obj = Round(
        id="r1",
        format=RoundFormat.STROKE_PLAY,
        holes=_build_holes(),
        settings=RoundSettings(strokes_given=True),
    )
    tour = _build_tour([round_obj])
    _score(tour, round_obj, "a1", [5, 5, 5])   # handicap 3 -> net 12
    _score(tour, round_obj, "a2", [4, 4, 4])   # no handicap

    entry = individual_sum_entry(tour.get_team("red"), tour, round_obj)
    assert entry.total_score == 27
    assert entry.total_to_par == 3
    assert entry.net_score == 24
    assert entry.net_to_par == 0
    assert entry.total_handicap_strokes == 3
    assert entry.players_with_scores == 2


def test_individual_sum_skips_unscored_players():
    round_obj = Round(id="r1", holes=_build_holes())
    tour = _build_tour([round_obj])
    _score(tour, round_obj, "b1", [4, 4, 4])
    _score(tour, round_obj, "b2", [])

    entry = individual_sum_entry(tour.get_team("blue"), tour, round_obj)
    assert entry.total_score == 12
    assert entry.players_with_scores == 1
    assert entry.net_score is None


def test_unlisted_formats_sum_individual_scores():
    assert strategy_for(Round(id="r", format=RoundFormat.SKINS)) is individual_sum_entry
    assert strategy_for(Round(id="r", format=RoundFormat.ALTERNATE_SHOT)) is individual_sum_entry


# ================================================================
# Match play
# ================================================================

def _build_match_round():
    match = Match(
        id="m1",
        side_a=MatchSide(team_id="red", player_ids=["a1"]),
        side_b=MatchSide(team_id="blue", player_ids=["b1"]),
    )
    for number, (a, b) in enumerate([(4, 5), (3, 4), (4, 4)], start=1):
        match = apply_hole_score(match, number, a, b, total_holes=3)
    return Round(
        id="r1",
        format=RoundFormat.SINGLES_MATCH_PLAY,
        holes=_build_holes(),
        ryder_cup=RyderCup(matches=[match]),
    )


def test_match_play_entry_counts_strokes_and_points():
    round_obj = _build_match_round()
    tour = _build_tour([round_obj])
    assert round_obj.ryder_cup.matches[0].points == MatchPoints(side_a=1, side_b=0)

    red = match_play_entry(tour.get_team("red"), tour, round_obj)
    assert red.total_score == 11
    assert red.total_to_par == -1
    assert red.ryder_cup_points == 1
    assert red.players_with_scores == 1

    blue = match_play_entry(tour.get_team("blue"), tour, round_obj)
    assert blue.total_score == 13
    assert blue.ryder_cup_points == 0


# ================================================================
# Leaderboards
# ================================================================

def test_round_team_leaderboard_orders_and_positions():
    round_obj = Round(id="r1", format=RoundFormat.BEST_BALL, holes=_build_holes())
    tour = _build_tour([round_obj])
    _score(tour, round_obj, "a1", [5, 5, 5])
    _score(tour, round_obj, "b1", [4, 4, 4])

    board = team_leaderboard(tour, "r1")
    assert [e.team.id for e in board] == ["blue", "red"]
    assert [e.position for e in board] == [1, 2]


def test_tournament_team_leaderboard_completed_rounds_only():
    done = Round(id="r1", holes=_build_holes(), status=RoundStatus.COMPLETED)
    live = Round(id="r2", holes=_build_holes())
    tour = _build_tour([done, live])
    _score(tour, done, "a1", [4, 4, 4])
    _score(tour, done, "b1", [5, 5, 5])
    _score(tour, live, "b1", [1, 1, 1])

    board = team_leaderboard(tour)
    red, blue = board
    assert red.team.id == "red"
    assert red.total_score == 12
    assert blue.total_score == 15
    assert blue.players_with_scores == 1


def test_tournament_team_leaderboard_unscored_teams_last():
    done = Round(id="r1", holes=_build_holes(), status=RoundStatus.COMPLETED)
    tour = _build_tour([done])
    _score(tour, done, "b1", [6, 6, 6])

    board = team_leaderboard(tour)
    assert [e.team.id for e in board] == ["blue", "red"]
    assert board[1].total_score == 0


def test_team_leaderboard_without_teams():
    tour = Tour(id="solo", players=[Player(id="p1")])
    assert team_leaderboard(tour) == []
