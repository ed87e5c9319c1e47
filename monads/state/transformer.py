"""StateT - State transformer

Adds state threading on top of an arbitrary underlying family M:
StateT[S, A] wraps S -> M[(A, S)].

The underlying family is passed explicitly (a Monad capability or just
its lift function). StateT only ever calls M's `transform`/`sequence`
and the lift, it never looks inside an M value. Because of that the
semantics come from M:

- over Either/Except a failure stops every later transition, and the state
  reached before the failing step is dropped together with the chain
  (there is no rollback to an earlier state);
- over IO/AsyncIO the transitions interleave with real effects in the
  order they are written.

Example:
    increment = StateT.modify(lambda n: n + 1, Either.of)
    log = lambda msg: StateT.lift(Either.try_catch(lambda: print(msg)), Either.of)

    program = (
        increment
        .sequence(lambda _: log("incremented"))
        .sequence(lambda _: StateT.get(Either.of))
    )
    program.run(0)  # Right((1, 1))
"""

from __future__ import annotations

import typing
from collections.abc import Callable
from dataclasses import dataclass
from typing import assert_never

from .._helpers import first, map_first, second
from .._types import Container, Lift, Monad, as_monad, register_family
from ..branching.either import Either, Left, Right


def _reassociate[A, B, S](pair: tuple[Either[A, B], S]) -> Either[tuple[A, S], tuple[B, S]]:
    """(Either[A, B], S) -> Either[(A, S), (B, S)]"""
    either, state = pair
    return either.fold(lambda a: Left((a, state)), lambda b: Right((b, state)))


# ============================================================================
# Instructions
# ============================================================================


@dataclass(frozen=True, slots=True)
class _Run[S, A]:
    transition: Callable[[S], Container[tuple[A, S]]]


@dataclass(frozen=True, slots=True)
class _Then[S, A, B]:
    source: StateT[S, A]
    extend: Callable[[Container[tuple[A, S]]], Container[tuple[B, S]]]


type _Instruction = _Run[typing.Any, typing.Any] | _Then[typing.Any, typing.Any, typing.Any]


# ============================================================================
# StateT
# ============================================================================


class StateT[S, A]:
    """
    State transformer over an underlying container family.

    Monadic laws (observed through run(s0), up to M's own equality):
    - Left identity: StateT.of(a, m).sequence(f) ≡ f(a)
    - Right identity: t.sequence(lambda a: StateT.of(a, m)) ≡ t
    - Associativity: t.sequence(f).sequence(g) ≡ t.sequence(x => f(x).sequence(g))

    NOTE: transform/sequence chains are kept as instructions and unwound by
          a loop, so `t = t.sequence(...)` repeated many times stays flat.
          Continuations nested inside each other (t.sequence(lambda a: u.sequence(...)))
          are as deep as M makes them; use tail_rec for long loops.
    """

    __slots__ = ("_instruction", "_underlying")

    def __init__(
        self,
        run: Callable[[S], Container[tuple[A, S]]],
        underlying: Monad[typing.Any] | Lift,
        /,
    ) -> None:
        self._instruction: _Instruction = _Run(run)
        self._underlying = as_monad(underlying)

    @property
    def underlying(self) -> Monad[typing.Any]:
        """Capability of the wrapped family."""
        return self._underlying

    def _then[B](
        self,
        extend: Callable[[Container[tuple[A, S]]], Container[tuple[B, S]]],
    ) -> StateT[S, B]:
        chained: StateT[S, B] = StateT.__new__(StateT)
        chained._instruction = _Then(self, extend)
        chained._underlying = self._underlying
        return chained

    def _step(self, state: S) -> Container[tuple[A, S]]:
        current: StateT[S, typing.Any] = self
        pending: list[Callable[[typing.Any], typing.Any]] = []
        while True:
            match current._instruction:
                case _Then(source, extend):
                    pending.append(extend)
                    current = source
                case _Run(transition):
                    result: typing.Any = transition(state)
                    break
                case _ as unreachable:
                    assert_never(unreachable)

        while pending:
            result = pending.pop()(result)
        return typing.cast(Container[tuple[A, S]], result)

    # Constructors

    @staticmethod
    def of[T, V](value: V, m: Monad[typing.Any] | Lift, /) -> StateT[T, V]:
        """Leave state untouched, yield value inside M."""
        underlying = as_monad(m)
        return StateT(lambda state: underlying.of((value, state)), underlying)

    @staticmethod
    def from_function[T, V](
        run: Callable[[T], Container[tuple[V, T]]],
        m: Monad[typing.Any] | Lift,
        /,
    ) -> StateT[T, V]:
        """Wrap a transition S -> M[(value, new_state)]."""
        return StateT(run, m)

    @staticmethod
    def lift[T, V](ma: Container[V], m: Monad[typing.Any] | Lift, /) -> StateT[T, V]:
        """
        Promote a plain M value: its payload is paired with the untouched state.

        NOTE: ma itself is not state-aware. For lazy families it runs
              every time the resulting StateT is run.
        """
        return StateT(lambda state: ma.transform(lambda value: (value, state)), m)

    @staticmethod
    def get[T](m: Monad[typing.Any] | Lift, /) -> StateT[T, T]:
        underlying = as_monad(m)
        return StateT(lambda state: underlying.of((state, state)), underlying)

    @staticmethod
    def put[T](new_state: T, m: Monad[typing.Any] | Lift, /) -> StateT[T, None]:
        underlying = as_monad(m)
        return StateT(lambda _: underlying.of((None, new_state)), underlying)

    @staticmethod
    def modify[T](f: Callable[[T], T], m: Monad[typing.Any] | Lift, /) -> StateT[T, None]:
        underlying = as_monad(m)
        return StateT(lambda state: underlying.of((None, f(state))), underlying)

    @staticmethod
    def gets[T, V](f: Callable[[T], V], m: Monad[typing.Any] | Lift, /) -> StateT[T, V]:
        underlying = as_monad(m)
        return StateT(lambda state: underlying.of((f(state), state)), underlying)

    # Functor / Monad operations

    def transform[B](self, f: Callable[[A], B], /) -> StateT[S, B]:
        """Functor fmap through M.transform, state untouched."""
        return self._then(lambda m: m.transform(map_first(f)))

    def sequence[B](self, f: Callable[[A], StateT[S, B]], /) -> StateT[S, B]:
        """
        Monadic bind (>>=).

        Runs self to get M[(value, s1)], then M.sequence continues with
        f(value) from s1. Whether the continuation runs at all is M's decision.
        """
        return self._then(lambda m: m.sequence(lambda pair: f(pair[0])._step(pair[1])))

    # Execution

    def run(self, initial: S, /) -> Container[tuple[A, S]]:
        """M[(value, final_state)]."""
        return self._step(initial)

    def eval(self, initial: S, /) -> Container[A]:
        """M[value]."""
        return self._step(initial).transform(first)

    def exec(self, initial: S, /) -> Container[S]:
        """M[final_state]."""
        return self._step(initial).transform(second)

    def to_function(self) -> Callable[[S], Container[tuple[A, S]]]:
        return self._step

    # Generic machinery

    @staticmethod
    def tail_rec[T, V, B](
        step: Callable[[V], StateT[T, Either[V, B]]],
        seed: V,
        m: Monad[typing.Any] | Lift,
        /,
    ) -> StateT[T, B]:
        """Loop delegated to the underlying family's rec, threading state through the seed."""
        underlying = as_monad(m)

        def run(state: T) -> Container[tuple[B, T]]:
            def inner(pair: tuple[V, T]) -> Container[Either[tuple[V, T], tuple[B, T]]]:
                value, current = pair
                return step(value)._step(current).transform(_reassociate)

            return underlying.rec(inner, (seed, state))

        return StateT(run, underlying)

    @staticmethod
    def monad(m: Monad[typing.Any] | Lift, /) -> Monad[StateT[typing.Any, typing.Any]]:
        """Capability object for StateT over m (for do-blocks and stacking)."""
        underlying = as_monad(m)
        return Monad(
            of=lambda value: StateT.of(value, underlying),
            tail_rec=lambda step, seed: StateT.tail_rec(step, seed, underlying),
        )


register_family(StateT, lambda t: StateT.monad(t.underlying))


__all__ = ("StateT",)
