import random
from typing import AbstractSet, Iterable, List, Optional

from .structured import Item

EMPTY: AbstractSet[str] = frozenset()


def _eligible(pool: Iterable[Item], exclude: AbstractSet[str]) -> List[Item]:
    return [item for item in pool if item.identity not in exclude]


def sample(pool: Iterable[Item], exclude: AbstractSet[str] = EMPTY) -> Optional[Item]:
    """
    Draw one item uniformly at random from the items not in ``exclude``.

    Returns None when nothing is eligible; callers treat that as a
    completed state rather than an error.
    """
    eligible = _eligible(pool, exclude)
    if not eligible:
        return None
    return random.choice(eligible)


def sample_distinct(pool: Iterable[Item], count: int, exclude: AbstractSet[str] = EMPTY) -> List[Item]:
    """Draw up to ``count`` distinct items without replacement."""
    if count <= 0:
        return []
    eligible = _eligible(pool, exclude)
    return random.sample(eligible, min(count, len(eligible)))
