import random
from typing import Optional, Sequence, TypeVar

T = TypeVar("T")


def shuffle_records(items: Sequence[T], rng: Optional[random.Random] = None) -> list[T]:
    """
    Return a shuffled copy of items (Fisher-Yates).

    The AIC search already sorts randomly, but we shuffle again so the order
    on screen does not depend on the server.
    """
    rng = rng or random.Random()
    shuffled = list(items)
    for i in range(len(shuffled) - 1, 0, -1):
        j = rng.randint(0, i)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled
