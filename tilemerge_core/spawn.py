from __future__ import annotations

import random
from typing import Optional, Sequence, TypeVar

T = TypeVar('T')


def random_item(items: Sequence[T], rng: Optional[random.Random] = None) -> Optional[T]:
    """Picks a uniformly random item, or None when the sequence is empty."""
    if not items:
        return None
    rng = rng or random.Random()
    return items[rng.randrange(len(items))]


def random_item_weighted(items: Sequence[T], weights: Sequence[float], rng: Optional[random.Random] = None) -> T:
    """
    Picks an item using cumulative-weight sampling.
    Draws r in [0, total) and subtracts each weight in order until r goes negative.
    """
    if len(items) != len(weights):
        raise ValueError(f'Got {len(items)} items but {len(weights)} weights')
    if not items:
        raise ValueError('Cannot pick from an empty list of items')
    if any(w < 0 for w in weights):
        raise ValueError('Weights must not be negative')
    total = sum(weights)
    if total <= 0:
        raise ValueError('Total weight must be positive')
    rng = rng or random.Random()
    remaining = rng.random() * total
    for item, weight in zip(items, weights):
        remaining -= weight
        if remaining < 0:
            return item
    # Float rounding can leave a tiny remainder: take the last weighted item.
    return next(item for item, weight in zip(reversed(items), reversed(weights)) if weight > 0)
