import random
from collections import Counter

import pytest

from ngram_from_scratch.classic_ngram.sampling import (
    sample_next_token,
    sample_with_nucleus,
    sample_with_temperature,
    temperature_weights,
)


def test_single_token_always_returned():
    rng = random.Random(0)
    for temperature in (0.01, 1.0, 50.0):
        assert sample_with_temperature({7: 3}, temperature, rng) == 7
        assert sample_with_nucleus({7: 3}, 0.1, temperature, rng) == 7


def test_empty_distribution_gives_none():
    assert sample_with_temperature({}, 1.0) is None
    assert sample_with_nucleus({}, 0.5) is None
    assert sample_next_token({}, 1.0, 0.5) is None


@pytest.mark.parametrize("temperature", [0, -1.0, float("nan"), float("inf")])
def test_invalid_temperature_raises(temperature):
    with pytest.raises(ValueError):
        sample_with_temperature({0: 1}, temperature)


def test_low_temperature_is_near_argmax():
    rng = random.Random(1)
    draws = [sample_with_temperature({0: 100, 1: 1}, 0.05, rng) for _ in range(50)]
    assert draws.count(0) >= 45


def test_very_low_temperature_does_not_overflow():
    rng = random.Random(2)
    assert sample_with_temperature({0: 100, 1: 99}, 1e-4, rng) == 0


def test_high_temperature_flattens():
    rng = random.Random(3)
    draws = Counter(sample_with_temperature({0: 10, 1: 10, 2: 10}, 5.0, rng) for _ in range(3000))
    assert set(draws) == {0, 1, 2}
    for token in (0, 1, 2):
        assert 800 < draws[token] < 1200


def test_temperature_one_keeps_raw_proportions():
    weights = dict(temperature_weights({0: 4, 1: 2}, 1.0))
    assert weights[1] / weights[0] == pytest.approx(0.5)


def test_nucleus_restricts_candidates():
    dist = {0: 50, 1: 30, 2: 15, 3: 5}
    rng = random.Random(4)
    narrow = {sample_with_nucleus(dist, 0.05, 1.0, rng) for _ in range(500)}
    wide = {sample_with_nucleus(dist, 0.99, 1.0, rng) for _ in range(500)}
    assert narrow == {0}
    assert narrow < wide
    assert wide == {0, 1, 2, 3}


def test_nucleus_ties_follow_insertion_order():
    rng = random.Random(5)
    # equal weights: the first-inserted token alone reaches top_p
    draws = {sample_with_nucleus({4: 1, 2: 1, 9: 1}, 0.2, 1.0, rng) for _ in range(100)}
    assert draws == {4}


def test_roulette_is_deterministic_for_fixed_seed():
    dist = {0: 3, 1: 5, 2: 2}
    first = [sample_with_temperature(dist, 0.8, random.Random(42)) for _ in range(5)]
    second = [sample_with_temperature(dist, 0.8, random.Random(42)) for _ in range(5)]
    assert first == second


class _FixedDraw:
    def __init__(self, value):
        self.value = value

    def random(self):
        return self.value


def test_roulette_walks_entries_in_order():
    # relative weights 1:1:2, a draw of 0.3 covers 1.2 of 4 -> second token
    dist = {10: 1, 11: 1, 12: 2}
    assert sample_with_temperature(dist, 1.0, _FixedDraw(0.3)) == 11
    assert sample_with_temperature(dist, 1.0, _FixedDraw(0.0)) == 10
    assert sample_with_temperature(dist, 1.0, _FixedDraw(0.99)) == 12


@pytest.mark.parametrize("top_p", [None, 0, 1, 1.5, -0.2])
def test_dispatch_falls_back_to_temperature(top_p):
    dist = {0: 1, 1: 1}
    draw = _FixedDraw(0.75)
    assert sample_next_token(dist, 1.0, top_p, draw) == sample_with_temperature(dist, 1.0, draw)


def test_dispatch_uses_nucleus_inside_unit_interval():
    dist = {0: 1, 1: 100}
    # nucleus keeps only token 1, plain sampling would pick token 0 for this draw
    assert sample_next_token(dist, 1.0, 0.5, _FixedDraw(0.0)) == 1
    assert sample_next_token(dist, 1.0, None, _FixedDraw(0.0)) == 0
