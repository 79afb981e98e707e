import pytest

from models import Hole, Player, Round, RoundSettings
from scoring.aggregator import rescore, score_round, score_team_round, team_score_id


def _build_round(hole_count=18, strokes_given=True, pars=None):
    pars = pars or [4] * hole_count
    holes = [Hole(number=i + 1, par=pars[i], stroke_index=i + 1) for i in range(hole_count)]
    return Round(id="r1", holes=holes, settings=RoundSettings(strokes_given=strokes_given))


# ================================================================
# score_round
# ================================================================

def test_all_bogeys_with_handicap_ten():
    round_obj = _build_round()
    player = Player(id="p1", handicap=10)
    record = score_round(round_obj, [5] * 18, player=player)

    assert record.total_score == 90
    assert record.total_to_par == 18
    assert record.handicap_strokes == 10
    assert record.net_score == 80
    assert record.net_to_par == 8


def test_partial_round_only_counts_played_holes():
    round_obj = _build_round()
    player = Player(id="p1", handicap=18)
    record = score_round(round_obj, [5, 4, None, 3], player=player)

    assert record.total_score == 12
    assert record.total_to_par == 0
    assert record.handicap_strokes == 3
    assert record.net_score == 9
    assert record.net_to_par == -3
    assert record.holes_played == 3


def test_no_strokes_given_leaves_net_unset():
    round_obj = _build_round(strokes_given=False)
    record = score_round(round_obj, [5] * 18, player=Player(id="p1", handicap=10))

    assert record.handicap_strokes is None
    assert record.net_score is None
    assert record.net_to_par is None


def test_zero_handicap_has_no_net():
    round_obj = _build_round()
    record = score_round(round_obj, [4] * 18, player=Player(id="p1", handicap=0))

    assert record.handicap_strokes == 0
    assert record.net_score is None


def test_invalid_entries_are_unplayed():
    round_obj = _build_round(hole_count=9)
    record = score_round(round_obj, [4, 0, -1, float("nan"), "x", 3], player_id="p1")

    assert record.total_score == 7
    assert record.total_to_par == -1
    assert record.holes_played == 2


def test_fractional_entries_are_unplayed():
    round_obj = _build_round(hole_count=3)
    record = score_round(round_obj, [0.5, 4.9, 4.0], player_id="p1")

    assert record.total_score == 4
    assert record.total_to_par == 0
    assert record.holes_played == 1


def test_entries_beyond_hole_count_are_ignored():
    round_obj = _build_round(hole_count=3)
    record = score_round(round_obj, [4, 4, 4, 9, 9], player_id="p1")

    assert record.total_score == 12
    assert record.total_to_par == 0


def test_empty_entries():
    round_obj = _build_round()
    record = score_round(round_obj, None, player_id="p1")
    assert record.total_score == 0
    assert record.total_to_par == 0
    assert record.entries == []


def test_mixed_pars():
    round_obj = _build_round(hole_count=3, pars=[3, 4, 5])
    record = score_round(round_obj, [3, 5, 4], player_id="p1")
    assert record.total_score == 12
    assert record.total_to_par == 0


def test_player_team_id_is_carried():
    round_obj = _build_round(hole_count=3)
    record = score_round(round_obj, [4, 4, 4], player=Player(id="p1", team_id="t1"))
    assert record.player_id == "p1"
    assert record.team_id == "t1"


def test_score_round_needs_an_id():
    with pytest.raises(ValueError):
        score_round(_build_round(), [4])


# ================================================================
# Team records and rescoring
# ================================================================

def test_score_team_round_is_gross_only():
    round_obj = _build_round(hole_count=9)
    record = score_team_round(round_obj, "t1", [3] * 9)

    assert record.player_id == team_score_id("t1") == "t1_score"
    assert record.team_id == "t1"
    assert record.is_team_score
    assert record.total_score == 27
    assert record.total_to_par == -9
    assert record.net_score is None
    assert record.handicap_strokes is None


def test_rescore_after_settings_change():
    round_obj = _build_round()
    player = Player(id="p1", handicap=10)
    record = score_round(round_obj, [5] * 18, player=player, stableford_manual=30)
    assert record.net_score == 80

    round_obj.settings.strokes_given = False
    rebuilt = rescore(round_obj, record, player)

    assert rebuilt.total_score == 90
    assert rebuilt.net_score is None
    assert rebuilt.stableford_manual == 30


def test_rescore_team_record():
    round_obj = _build_round(hole_count=9)
    record = score_team_round(round_obj, "t1", [4] * 9)
    rebuilt = rescore(round_obj, record)
    assert rebuilt.is_team_score
    assert rebuilt.team_id == "t1"
    assert rebuilt.total_score == 36
