"""Weighted random selection over in-memory pools."""

from __future__ import annotations

import math
import random
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")

_DEFAULT_RNG = random.Random()


class PoolConfigurationError(ValueError):
    """Raised when a pool cannot be sampled (empty, mismatched, or bad weights)."""


def _checked_weights(item_count: int, weights: Sequence[float] | None) -> list[float] | None:
    if item_count == 0:
        raise PoolConfigurationError("Cannot pick from an empty pool.")
    if weights is None:
        return None
    if len(weights) != item_count:
        raise PoolConfigurationError(
            f"Pool has {item_count} items but {len(weights)} weights."
        )
    checked: list[float] = []
    for weight in weights:
        value = float(weight)
        if not math.isfinite(value) or value < 0:
            raise PoolConfigurationError(f"Pool weight must be finite and >= 0, got {weight!r}.")
        checked.append(value)
    if sum(checked) <= 0:
        raise PoolConfigurationError("Pool weights must sum to a positive value.")
    return checked


def pick(
    items: Sequence[T],
    weights: Sequence[float] | None = None,
    *,
    rng: random.Random | None = None,
) -> T:
    """Pick one item, uniformly or proportionally to `weights`.

    Zero-weight items are never returned.
    """
    checked = _checked_weights(len(items), weights)
    source = rng or _DEFAULT_RNG
    if checked is None:
        return items[source.randrange(len(items))]
    return source.choices(items, weights=checked, k=1)[0]


def pick_generator(
    producers: Sequence[Callable[[], T]],
    weights: Sequence[float] | None = None,
    *,
    rng: random.Random | None = None,
) -> T:
    """Pick one zero-argument producer and return what it produces."""
    producer = pick(producers, weights, rng=rng)
    return producer()


def chance(probability: float, *, rng: random.Random | None = None) -> bool:
    source = rng or _DEFAULT_RNG
    return source.random() < probability


@dataclass(frozen=True)
class WeightedPool(Generic[T]):
    """Ordered items with selection weights, validated on construction."""

    items: tuple[T, ...]
    weights: tuple[float, ...] | None = None

    def __post_init__(self) -> None:
        _checked_weights(len(self.items), self.weights)

    @classmethod
    def uniform(cls, items: Sequence[T]) -> WeightedPool[T]:
        return cls(items=tuple(items))

    @classmethod
    def from_pairs(cls, pairs: Sequence[tuple[T, float]]) -> WeightedPool[T]:
        return cls(
            items=tuple(item for item, _ in pairs),
            weights=tuple(float(weight) for _, weight in pairs),
        )

    def draw(self, rng: random.Random | None = None) -> T:
        return pick(self.items, self.weights, rng=rng)

    def __len__(self) -> int:
        return len(self.items)
