"""
Core type definitions for monads.

Capability contract + алиасы, используемые по всей библиотеке.
"""

from __future__ import annotations

import typing
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

# ============================================================================
# Capability contract
# ============================================================================


@typing.runtime_checkable
class Container[T](typing.Protocol):
    """
    Minimal shape every container satisfies to take part in generic sequencing.

    Monadic laws (for the family's lift `of`):
    - Left identity: of(a).sequence(f) ≡ f(a)
    - Right identity: m.sequence(of) ≡ m
    - Associativity: m.sequence(f).sequence(g) ≡ m.sequence(x => f(x).sequence(g))
    """

    def transform[U](self, f: Callable[[T], U], /) -> Container[U]: ...

    def sequence[U](self, f: Callable[[T], Container[U]], /) -> Container[U]: ...


# ============================================================================
# Type aliases
# ============================================================================

# Lift = "pure"/"return" of some container family
type Lift = Callable[[typing.Any], typing.Any]

# Thunk = deferred synchronous computation
type Thunk[A] = Callable[[], A]

# AsyncThunk = deferred computation completing asynchronously
type AsyncThunk[A] = Callable[[], Awaitable[A]]

# StatePair = (value, state)
type StatePair[A, S] = tuple[A, S]

# Transition = one step of a state machine
type Transition[S, A] = Callable[[S], StatePair[A, S]]

# Step for tail_rec: seed -> M[Either[next_seed, result]]
type Step[A, M] = Callable[[A], M]


# ============================================================================
# Capability object (dictionary passing)
# ============================================================================


@dataclass(frozen=True, slots=True)
class Monad[M]:
    """
    Typeclass instance for one container family.

    Passed explicitly wherever generic code (StateT, do) has to build
    values of a family it does not know.

    NOTE: tail_rec is optional. Families whose `sequence` runs eagerly
    (Either, Except) provide one, otherwise deep loops would recurse.
    Lazy families interpret their bind chains iteratively, so the
    default unrolling through `sequence` is enough for them.
    """

    of: Callable[[typing.Any], M]
    tail_rec: Callable[[Callable[[typing.Any], M], typing.Any], M] | None = None

    def rec(self, step: Callable[[typing.Any], M], seed: typing.Any, /) -> M:
        """
        Run `step` until it produces Right(result).

        step(a) returns M[Either[A, B]]: Left(a') loops with a', Right(b) stops.

        NOTE: without tail_rec the first step's container is looked up in the
              family registry, so a lift nobody registered (Right, a lambda
              around StateT.of, ...) still reaches its family's loop.
              Only a family that is unknown there unrolls through `sequence`.
        """
        if self.tail_rec is not None:
            return self.tail_rec(step, seed)

        head: typing.Any = step(seed)
        family = family_of(head)
        if family is not None and family.tail_rec is not None:
            # step(seed) already ran; its container is replayed once
            pending = [head]

            def resume(a: typing.Any) -> M:
                return pending.pop() if pending else step(a)

            return family.tail_rec(resume, seed)

        def go(a: typing.Any) -> M:
            m: typing.Any = step(a)
            return m.sequence(lambda e: e.fold(go, self.of))

        return head.sequence(lambda e: e.fold(go, self.of))


# lift function -> full capability, filled by the built-in families
_KNOWN: dict[Callable[[typing.Any], typing.Any], Monad[typing.Any]] = {}

# container class -> capability of a given value, filled by the built-in families
_FAMILIES: dict[type, Callable[[typing.Any], Monad[typing.Any]]] = {}


def register_monad[M](monad: Monad[M], /, *aliases: Callable[[typing.Any], M]) -> Monad[M]:
    """
    Remember `monad` so that passing just its lift finds the full capability.

    `aliases` are other lifts of the same family (Right for Either.of, ...).
    """
    for lift in (monad.of, *aliases):
        _KNOWN[lift] = monad
    return monad


def register_family(cls: type, resolve: Callable[[typing.Any], Monad[typing.Any]], /) -> None:
    """Map a container class (subclasses included) to the capability of its values."""
    _FAMILIES[cls] = resolve


def family_of(value: object, /) -> Monad[typing.Any] | None:
    """Capability of the family `value` belongs to, None when not registered."""
    for cls in type(value).__mro__:
        resolve = _FAMILIES.get(cls)
        if resolve is not None:
            return resolve(value)
    return None


def as_monad[M](m: Monad[M] | Callable[[typing.Any], M], /) -> Monad[M]:
    """
    Accept either a capability object or a bare lift function.

    NOTE: a registered lift (Either.of, IO.of, ...) resolves to its full
          capability, so stack-safe tail_rec is kept.
    """
    if isinstance(m, Monad):
        return m
    if not callable(m):
        raise TypeError(f"expected Monad or lift callable, got {m!r}")
    known = _KNOWN.get(m)
    if known is not None:
        return known
    return Monad(of=m)


__all__ = (
    # Contract
    "Container",
    "Monad",
    "as_monad",
    "family_of",
    "register_family",
    "register_monad",
    # Type aliases
    "AsyncThunk",
    "Lift",
    "StatePair",
    "Step",
    "Thunk",
    "Transition",
)
