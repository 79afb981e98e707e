import math

import pytest
from pydantic import ValidationError

from models import (
    UNPLAYED,
    Hole,
    Match,
    MatchSide,
    Played,
    Player,
    Round,
    RoundFormat,
    RoundSettings,
    RoundStatus,
    RyderCup,
    ScoreRecord,
    Team,
    Tour,
    Unplayed,
    to_entries,
    to_entry,
)


# ================================================================
# Hole
# ================================================================

def test_hole_validation():
    h = Hole(number=1, par=4, stroke_index=18)
    assert h.number == 1
    assert h.par == 4

    with pytest.raises(ValidationError):
        Hole(number=1, par=7)             # par > 6

    with pytest.raises(ValidationError):
        Hole(number=1, stroke_index=19)   # stroke index > 18

    with pytest.raises(ValidationError):
        Hole(number=0)


def test_hole_effective_stroke_index_falls_back_to_position():
    assert Hole(number=3, stroke_index=7).effective_stroke_index(3) == 7
    assert Hole(number=3).effective_stroke_index(3) == 3


# ================================================================
# HoleEntry conversion
# ================================================================

def test_to_entry_accepts_positive_numbers():
    assert to_entry(4) == Played(strokes=4)
    assert to_entry(5.0) == Played(strokes=5)


@pytest.mark.parametrize("value", [None, 0, -3, 0.5, 4.9, math.nan, math.inf, True, "4", [4]])
def test_to_entry_treats_everything_else_as_unplayed(value):
    assert isinstance(to_entry(value), Unplayed)


def test_to_entry_passes_through_entries_and_dicts():
    assert to_entry(UNPLAYED) is UNPLAYED
    assert to_entry({"kind": "played", "strokes": 3}) == Played(strokes=3)
    assert to_entry({"kind": "unplayed"}) == UNPLAYED


def test_to_entries_empty():
    assert to_entries(None) == []
    assert to_entries([]) == []


def test_played_rejects_zero_strokes():
    with pytest.raises(ValidationError):
        Played(strokes=0)


# ================================================================
# ScoreRecord
# ================================================================

def test_score_record_coerces_raw_entries():
    record = ScoreRecord(player_id="p1", entries=[4, None, 0, 5])
    assert record.raw_scores() == [4, None, None, 5]
    assert record.holes_played == 2
    assert record.strokes(0) == 4
    assert record.strokes(1) is None
    assert record.strokes(10) is None


def test_score_record_serialisation_keeps_entry_kinds():
    record = ScoreRecord(player_id="p1", entries=[4, None])
    data = record.model_dump()
    assert data["entries"] == [{"kind": "played", "strokes": 4}, {"kind": "unplayed"}]
    assert ScoreRecord.model_validate(data) == record


def test_update_field_returns_error_message():
    record = ScoreRecord(player_id="p1")
    assert record.update_field("stableford_manual", 30) is None
    assert record.stableford_manual == 30

    error = record.update_field("total_score", "lots")
    assert error is not None
    assert record.total_score == 0


def test_with_updates_leaves_original_untouched():
    record = ScoreRecord(player_id="p1", total_score=40)
    updated = record.with_updates(total_score=41)
    assert updated.total_score == 41
    assert record.total_score == 40


# ================================================================
# Round
# ================================================================

def test_round_par_and_lookups():
    holes = [Hole(number=i, par=3 if i == 2 else 4) for i in range(1, 10)]
    round_obj = Round(id="r1", holes=holes)

    assert round_obj.hole_count == 9
    assert round_obj.total_par == 35
    assert round_obj.get_hole(2).par == 3
    assert round_obj.get_hole(10) is None
    assert round_obj.hole_par(0) == 4
    assert round_obj.hole_par(9) is None


def test_round_rejects_duplicate_hole_numbers():
    with pytest.raises(ValidationError):
        Round(id="r1", holes=[Hole(number=1), Hole(number=1)])


def test_round_format_flags():
    assert Round(id="r", format=RoundFormat.SINGLES_MATCH_PLAY).is_match_play
    assert not Round(id="r", format=RoundFormat.BEST_BALL).is_match_play

    stableford = Round(id="r", settings=RoundSettings(stableford_scoring=True))
    assert stableford.is_stableford
    assert not Round(id="r", format=RoundFormat.SCRAMBLE,
                     settings=RoundSettings(stableford_scoring=True)).is_stableford


def test_round_status_only_moves_forward():
    round_obj = Round(id="r1", status=RoundStatus.IN_PROGRESS)
    assert round_obj.can_transition_to(RoundStatus.IN_PROGRESS)
    assert round_obj.can_transition_to(RoundStatus.COMPLETED)
    assert not round_obj.can_transition_to(RoundStatus.CREATED)


# ================================================================
# Match / RyderCup
# ================================================================

def test_match_side_lookup():
    match = Match(
        id="m1",
        side_a=MatchSide(team_id="t1", player_ids=["p1", "p2"]),
        side_b=MatchSide(team_id="t2", player_ids=["p3"]),
    )
    assert match.side_of("p2") == "a"
    assert match.side_of("p3") == "b"
    assert match.side_of("p9") is None
    assert match.status_text == "Not started"
    assert not match.is_complete


def test_ryder_cup_defaults():
    cup = RyderCup()
    assert cup.target_points == 14.5
    assert "day3-singles" in cup.sessions
    assert cup.get_match("missing") is None


# ================================================================
# Tour
# ================================================================

def test_tour_lookups():
    tour = Tour(
        id="tour",
        players=[Player(id="p1", name="Ann"), Player(id="p2", name="Ben", team_id="t2")],
        teams=[Team(id="t1", name="Reds", player_ids=["p1", "ghost"]), Team(id="t2", name="Blues")],
        rounds=[Round(id="r1"), Round(id="r2", status=RoundStatus.COMPLETED)],
    )

    assert tour.get_player("p1").name == "Ann"
    assert tour.get_team("t3") is None
    assert [p.id for p in tour.team_players(tour.get_team("t1"))] == ["p1"]
    assert tour.team_for_player("p1").id == "t1"
    assert tour.team_for_player("p2").id == "t2"
    assert [r.id for r in tour.completed_rounds()] == ["r2"]


def test_player_handicap_bounds():
    with pytest.raises(ValidationError):
        Player(id="p1", handicap=-1)
    assert not Player(id="p1").has_handicap
    assert Player(id="p1", handicap=12.4).has_handicap
