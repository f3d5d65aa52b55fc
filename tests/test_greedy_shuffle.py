import random

import pytest

from partnerpairing.exceptions import (
    InvalidIterationBudgetException,
    InvalidRosterException,
    PairingException,
)
from partnerpairing.models.pairing import PairHistory, build_history
from partnerpairing.pairing import PairingGenerator, create_greedy_pairings


class ScriptedShuffle:
    """Random source that replays fixed permutations."""

    def __init__(self, orders):
        self.orders = list(orders)
        self.calls = 0

    def shuffle(self, x):
        order = self.orders[self.calls % len(self.orders)]
        assert sorted(order) == sorted(x)
        x[:] = order
        self.calls += 1


def _history(counts):
    return PairHistory(counts=counts)


def _assert_covers(result, roster):
    assert sorted(result.participants()) == sorted(roster)


def test_four_names_without_history():
    roster = ["Ann", "Bo", "Cy", "Di"]
    for seed in range(20):
        result = create_greedy_pairings(roster, PairHistory.empty(), iterations=1, seed=seed)

        assert len(result.pairs) == 2
        assert result.solo is None
        assert result.total_score == 0
        _assert_covers(result, roster)


def test_trio_roster_avoids_known_pair():
    roster = ["Ann", "Bo", "Cy"]
    history = build_history([("Ann", "Bo")] * 3)

    result = create_greedy_pairings(roster, history, iterations=1000, seed=3)

    assert result.total_score == 0
    assert len(result.pairs) == 1
    assert "Cy" in result.pairs[0]
    assert result.solo in {"Ann", "Bo"}
    assert set(result.pairs[0]) != {"Ann", "Bo"}


def test_odd_roster_yields_one_solo():
    roster = ["Ann", "Bo", "Cy", "Di", "Ed"]

    result = create_greedy_pairings(roster, PairHistory.empty(), iterations=10, seed=1)

    assert len(result.pairs) == 2
    assert result.solo is not None
    assert result.total_score == 0
    _assert_covers(result, roster)


def test_single_participant_is_solo():
    result = create_greedy_pairings(["Ann"], PairHistory.empty(), iterations=5)

    assert result.pairs == []
    assert result.solo == "Ann"
    assert result.total_score == 0


def test_empty_roster_is_rejected():
    with pytest.raises(InvalidRosterException):
        create_greedy_pairings([], PairHistory.empty(), iterations=5)


@pytest.mark.parametrize("iterations", [0, -3, True, 2.5, "10"])
def test_invalid_iteration_budget_is_rejected(iterations):
    with pytest.raises(InvalidIterationBudgetException):
        PairingGenerator(PairHistory.empty(), iterations=iterations)


def test_budget_errors_are_pairing_errors():
    assert issubclass(InvalidIterationBudgetException, PairingException)
    assert issubclass(InvalidRosterException, PairingException)


def test_greedy_pass_picks_least_met_partner():
    generator = PairingGenerator(_history({("Ann", "Bo"): 1}), iterations=1)

    pairs, solo, total = generator.build_candidate(["Ann", "Bo", "Cy", "Di"])

    assert pairs == [("Ann", "Cy"), ("Bo", "Di")]
    assert solo is None
    assert total == 0


def test_greedy_tie_keeps_first_partner_in_scan_order():
    history = _history({("Ann", "Bo"): 2, ("Ann", "Cy"): 1, ("Ann", "Di"): 1})
    generator = PairingGenerator(history, iterations=1)

    pairs, _, total = generator.build_candidate(["Ann", "Bo", "Cy", "Di"])

    assert pairs[0] == ("Ann", "Cy")
    assert total == 1 + history.score("Bo", "Di")


def test_greedy_pass_on_odd_pool_leaves_last_unmatched():
    generator = PairingGenerator(PairHistory.empty(), iterations=1)

    pairs, solo, total = generator.build_candidate(["Ann", "Bo", "Cy"])

    assert pairs == [("Ann", "Bo")]
    assert solo == "Cy"
    assert total == 0


def test_best_candidate_is_kept_and_ties_keep_the_earliest():
    history = _history(
        {
            ("Ann", "Cy"): 1,
            ("Ann", "Di"): 1,
            ("Bo", "Cy"): 1,
            ("Bo", "Di"): 1,
            ("Cy", "Di"): 5,
        }
    )
    rng = ScriptedShuffle(
        [
            ["Ann", "Bo", "Cy", "Di"],  # Ann-Bo then Cy-Di: 5
            ["Cy", "Ann", "Bo", "Di"],  # Cy-Ann then Bo-Di: 2
            ["Cy", "Bo", "Ann", "Di"],  # Cy-Bo then Ann-Di: 2
        ]
    )

    result = PairingGenerator(history, iterations=3, rng=rng).generate(
        ["Ann", "Bo", "Cy", "Di"]
    )

    assert rng.calls == 3
    assert result.pairs == [("Cy", "Ann"), ("Bo", "Di")]
    assert result.total_score == 2
    assert result.iterations == 3


def test_every_iteration_uses_a_fresh_copy_of_the_roster():
    roster = ["Ann", "Bo", "Cy", "Di"]
    rng = ScriptedShuffle([["Di", "Cy", "Bo", "Ann"]])

    PairingGenerator(PairHistory.empty(), iterations=4, rng=rng).generate(roster)

    assert roster == ["Ann", "Bo", "Cy", "Di"]
    assert rng.calls == 4


def test_same_seed_gives_same_result():
    roster = [f"P{i:02d}" for i in range(11)]
    history = build_history([("P00", "P01"), ("P02", "P03"), ("P00", "P01")])

    first = create_greedy_pairings(roster, history, iterations=200, seed=99)
    second = create_greedy_pairings(roster, history, iterations=200, seed=99)

    assert first == second


def test_injected_random_instance_is_used():
    roster = [f"P{i}" for i in range(8)]

    first = create_greedy_pairings(
        roster, PairHistory.empty(), iterations=5, rng=random.Random(7)
    )
    second = create_greedy_pairings(roster, PairHistory.empty(), iterations=5, seed=7)

    assert first == second


def test_larger_budget_never_scores_worse_for_same_seed():
    rnd = random.Random(5)
    roster = [f"P{i:02d}" for i in range(12)]
    records = [tuple(rnd.sample(roster, 2)) for _ in range(60)]
    history = build_history(records)

    for seed in range(5):
        small = create_greedy_pairings(roster, history, iterations=10, seed=seed)
        large = create_greedy_pairings(roster, history, iterations=500, seed=seed)
        assert large.total_score <= small.total_score


def test_coverage_and_score_consistency_on_random_inputs():
    rnd = random.Random(2024)
    for size in range(1, 12):
        roster = [f"Name{i}" for i in range(size)]
        records = []
        if size > 1:
            records = [tuple(rnd.sample(roster, 2)) for _ in range(rnd.randint(0, 30))]
        history = build_history(records)

        result = create_greedy_pairings(
            roster, history, iterations=25, seed=rnd.randint(0, 10_000)
        )

        members = result.participants()
        assert sorted(members) == sorted(roster)
        assert len(members) == len(set(members))
        assert len(result.pairs) == size // 2
        assert (result.solo is not None) == (size % 2 == 1)
        assert result.total_score == sum(history.score(a, b) for a, b in result.pairs)


def test_perfect_rotation_is_found_when_available():
    roster = ["Ann", "Bo", "Cy", "Di", "Ed", "Flo"]
    history = build_history([("Ann", "Bo"), ("Cy", "Di"), ("Ed", "Flo")])

    result = create_greedy_pairings(roster, history, iterations=500, seed=11)

    assert result.total_score == 0
    for a, b in result.pairs:
        assert history.score(a, b) == 0
