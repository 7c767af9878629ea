from __future__ import annotations

import random
from collections import Counter
from collections.abc import Callable

import pytest

from story_forge.core.selection import (
    PoolConfigurationError,
    WeightedPool,
    chance,
    pick,
    pick_generator,
)


def test_pick_respects_heavy_weight() -> None:
    rng = random.Random(7)
    counts = Counter(pick(["light", "heavy"], [1, 99], rng=rng) for _ in range(1000))
    assert counts["heavy"] >= 960
    assert counts["light"] + counts["heavy"] == 1000


def test_pick_never_returns_zero_weight_item() -> None:
    rng = random.Random(11)
    picks = {pick(["never", "a", "b"], [0, 1, 1], rng=rng) for _ in range(500)}
    assert "never" not in picks
    assert picks == {"a", "b"}


def test_pick_uniform_covers_every_item() -> None:
    rng = random.Random(3)
    picks = {pick(("x", "y", "z"), rng=rng) for _ in range(200)}
    assert picks == {"x", "y", "z"}


@pytest.mark.parametrize(
    ("items", "weights"),
    [
        ([], None),
        (["a", "b"], [1]),
        (["a"], [-1]),
        (["a", "b"], [0, 0]),
        (["a"], [float("nan")]),
    ],
)
def test_pick_rejects_bad_pools(items: list[str], weights: list[float] | None) -> None:
    with pytest.raises(PoolConfigurationError):
        pick(items, weights, rng=random.Random(0))


def test_pool_configuration_error_is_a_value_error() -> None:
    assert issubclass(PoolConfigurationError, ValueError)


def test_weighted_pool_validates_on_construction() -> None:
    with pytest.raises(PoolConfigurationError):
        WeightedPool.from_pairs([("a", 0), ("b", 0)])
    pool = WeightedPool.from_pairs([("a", 0), ("b", 5)])
    assert len(pool) == 2
    assert {pool.draw(random.Random(seed)) for seed in range(50)} == {"b"}


def test_pick_generator_calls_only_the_chosen_producer() -> None:
    calls: list[str] = []

    def producer(label: str) -> Callable[[], str]:
        def produce() -> str:
            calls.append(label)
            return label

        return produce

    result = pick_generator([producer("skip"), producer("run")], [0, 1], rng=random.Random(1))
    assert result == "run"
    assert calls == ["run"]


def test_chance_bounds() -> None:
    rng = random.Random(5)
    assert not any(chance(0.0, rng=rng) for _ in range(100))
    assert all(chance(1.0, rng=rng) for _ in range(100))


def test_same_seed_gives_same_sequence() -> None:
    pool = WeightedPool.uniform([str(index) for index in range(20)])
    first = [pool.draw(random.Random(42)) for _ in range(5)]
    second = [pool.draw(random.Random(42)) for _ in range(5)]
    assert first == second
