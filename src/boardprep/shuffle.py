import random
from typing import List, Optional, TypeVar

T = TypeVar("T")


def fisher_yates(items: List[T], rng: Optional[random.Random] = None) -> List[T]:
    """Shuffle ``items`` in place with a single Fisher-Yates pass and return it.

    Every permutation is equally likely given a uniform source. Empty and
    single-item lists come back unchanged.
    """
    rand = rng or random
    for i in range(len(items) - 1, 0, -1):
        j = rand.randint(0, i)
        items[i], items[j] = items[j], items[i]
    return items
