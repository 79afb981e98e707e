from models import CompetitionType, CompetitionWinner, Hole, Player, Round, Tour
from scoring.competition import competition_tally, hole_competition_winners, replace_competition_winner


def _build_round(round_id="r1"):
    return Round(id=round_id, holes=[Hole(number=i + 1, par=3) for i in range(3)])


# ================================================================
# Replacing a hole's winner
# ================================================================

def test_round_wide_winner_is_replaced():
    winners = replace_competition_winner([], CompetitionWinner(player_id="p1", distance=4.2))
    winners = replace_competition_winner(winners, CompetitionWinner(player_id="p2"))
    assert [w.player_id for w in winners] == ["p2"]


def test_match_winners_are_kept_per_match():
    winners = [
        CompetitionWinner(player_id="p1"),
        CompetitionWinner(player_id="p2", match_id="m1"),
        CompetitionWinner(player_id="p3", match_id="m2"),
    ]
    updated = replace_competition_winner(winners, CompetitionWinner(player_id="p4", match_id="m1"), "m1")
    assert [(w.player_id, w.match_id) for w in updated] == [("p1", None), ("p3", "m2"), ("p4", "m1")]
    assert len(winners) == 3


def test_clearing_a_slot():
    winners = [CompetitionWinner(player_id="p1"), CompetitionWinner(player_id="p2", match_id="m1")]
    assert [w.player_id for w in replace_competition_winner(winners, None)] == ["p2"]
    assert [w.player_id for w in replace_competition_winner(winners, None, "m1")] == ["p1"]
    assert replace_competition_winner([], None) == []


# ================================================================
# Lookups and tally
# ================================================================

def test_hole_competition_winners_defaults_to_empty():
    round_obj = _build_round()
    assert hole_competition_winners(round_obj, CompetitionType.CLOSEST_TO_PIN, 2) == []


def test_competition_tally():
    r1 = _build_round("r1")
    r1.competition_winners[CompetitionType.CLOSEST_TO_PIN] = {
        1: [CompetitionWinner(player_id="p1")],
        2: [CompetitionWinner(player_id="p1"), CompetitionWinner(player_id="p2", match_id="m1")],
    }
    r2 = _build_round("r2")
    r2.competition_winners[CompetitionType.LONGEST_DRIVE] = {3: [CompetitionWinner(player_id="p2")]}
    tour = Tour(id="t", players=[Player(id="p1"), Player(id="p2")], rounds=[r1, r2])

    assert competition_tally(tour, CompetitionType.CLOSEST_TO_PIN) == {"p1": 2, "p2": 1}
    assert competition_tally(tour, "longest-drive") == {"p2": 1}
