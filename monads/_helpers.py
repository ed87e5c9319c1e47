"""Internal helpers for monads.

Small functions shared by the container modules.
These are not part of the public API but are handy when writing custom families."""

from __future__ import annotations

from collections.abc import Callable


def identity[T](x: T) -> T:
    return x


# Pair helpers for (value, state) tuples
def map_first[A, B, S](f: Callable[[A], B]) -> Callable[[tuple[A, S]], tuple[B, S]]:
    """Lift f to act on the value half of a (value, state) pair."""

    def apply(pair: tuple[A, S]) -> tuple[B, S]:
        value, state = pair
        return f(value), state

    return apply


def first[A, S](pair: tuple[A, S]) -> A:
    """Value half of a (value, state) pair."""
    return pair[0]


def second[A, S](pair: tuple[A, S]) -> S:
    """State half of a (value, state) pair."""
    return pair[1]


__all__ = (
    "first",
    "identity",
    "map_first",
    "second",
)
