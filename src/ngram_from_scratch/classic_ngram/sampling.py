"""
Next-token sampling over n-gram frequency distributions.

All samplers take counts (token -> occurrences), reweight them with a
temperature and draw one token with a single roulette pass. Ties are resolved
by the distribution's insertion order, so a seeded `random.Random` gives
reproducible draws.
"""

import math
import random
from typing import List, Mapping, Optional, Tuple


def _check_temperature(temperature: float) -> None:
    if not temperature > 0 or math.isinf(temperature):
        raise ValueError(f"temperature must be a finite number > 0, got {temperature}")


def temperature_weights(distribution: Mapping[int, int], temperature: float) -> List[Tuple[int, float]]:
    """(token, count ** (1 / temperature)) pairs, scaled so the largest weight is 1.

    Scaling by the largest count keeps the proportions and avoids float
    overflow for temperatures close to zero.
    """
    _check_temperature(temperature)
    if not distribution:
        return []
    max_count = max(distribution.values())
    exponent = 1.0 / temperature
    return [(token, (count / max_count) ** exponent) for token, count in distribution.items()]


def _roulette(weighted: List[Tuple[int, float]], rng) -> Optional[int]:
    if not weighted:
        return None
    total_weight = sum(weight for _, weight in weighted)
    threshold = rng.random() * total_weight
    for token, weight in weighted:
        threshold -= weight
        if threshold <= 0:
            return token
    # float residue: threshold never went non-positive
    return weighted[0][0]


def sample_with_temperature(
    distribution: Mapping[int, int],
    temperature: float = 1.0,
    rng: Optional[random.Random] = None,
) -> Optional[int]:
    """Draw a token with probability proportional to count ** (1 / temperature).

    Low temperatures approach argmax, temperature 1 is the raw count
    distribution and high temperatures flatten toward uniform.

    Returns None only for an empty distribution.
    """
    rng = rng or random
    return _roulette(temperature_weights(distribution, temperature), rng)


def sample_with_nucleus(
    distribution: Mapping[int, int],
    top_p: float,
    temperature: float = 1.0,
    rng: Optional[random.Random] = None,
) -> Optional[int]:
    """Nucleus (top-p) sampling.

    Temperature-adjusted weights are sorted in descending order and the
    smallest prefix whose cumulative probability reaches `top_p` is kept;
    the token is then drawn from that prefix only.
    """
    rng = rng or random
    weighted = temperature_weights(distribution, temperature)
    if not weighted:
        return None

    # sorted() is stable: equal weights keep insertion order
    weighted.sort(key=lambda entry: entry[1], reverse=True)
    total_weight = sum(weight for _, weight in weighted)

    nucleus: List[Tuple[int, float]] = []
    cumulative = 0.0
    for token, weight in weighted:
        cumulative += weight / total_weight
        nucleus.append((token, weight))
        if cumulative >= top_p:
            break

    return _roulette(nucleus, rng)


def sample_next_token(
    distribution: Mapping[int, int],
    temperature: float = 1.0,
    top_p: Optional[float] = None,
    rng: Optional[random.Random] = None,
) -> Optional[int]:
    """Use nucleus sampling when 0 < top_p < 1, plain temperature sampling otherwise."""
    if top_p is not None and 0 < top_p < 1:
        return sample_with_nucleus(distribution, top_p, temperature, rng)
    return sample_with_temperature(distribution, temperature, rng)
