"""State Monad

Pure state threading: State[S, A] wraps S -> (A, S).

State is never stored anywhere, it is the explicit argument of run().
Composition is kept as a bind tree and run() interprets it with a loop,
so long chains are stack-safe.

Example:
    increment = State.modify(lambda n: n + 1)
    program = increment.sequence(lambda _: increment).sequence(lambda _: State.get())
    program.run(0)  # (2, 2)
"""

from __future__ import annotations

import typing
from collections.abc import Callable
from dataclasses import dataclass
from typing import assert_never

from .._types import Monad, register_monad


@dataclass(frozen=True, slots=True)
class _Step[S, A]:
    transition: Callable[[S], tuple[A, S]]


@dataclass(frozen=True, slots=True)
class _Bind[S, A, B]:
    source: State[S, A]
    continuation: Callable[[A], State[S, B]]


type _Instruction = _Step[typing.Any, typing.Any] | _Bind[typing.Any, typing.Any, typing.Any]


class State[S, A]:
    """
    State Monad.

    Monadic laws (observed through run(s0)):
    - Left identity: State.of(a).sequence(f) ≡ f(a)
    - Right identity: m.sequence(State.of) ≡ m
    - Associativity: m.sequence(f).sequence(g) ≡ m.sequence(x => f(x).sequence(g))
    """

    __slots__ = ("_instruction",)

    def __init__(self, instruction: _Instruction, /) -> None:
        self._instruction = instruction

    # Constructors

    @staticmethod
    def of[T, V](value: V, /) -> State[T, V]:
        """Leave state untouched, yield value."""
        return State(_Step(lambda state: (value, state)))

    @staticmethod
    def from_function[T, V](transition: Callable[[T], tuple[V, T]], /) -> State[T, V]:
        """Wrap a pure transition S -> (value, new_state)."""
        return State(_Step(transition))

    @staticmethod
    def get[T]() -> State[T, T]:
        """Yield the current state."""
        return State(_Step(lambda state: (state, state)))

    @staticmethod
    def put[T](new_state: T, /) -> State[T, None]:
        """Replace the state."""
        return State(_Step(lambda _: (None, new_state)))

    @staticmethod
    def modify[T](f: Callable[[T], T], /) -> State[T, None]:
        """Replace the state with f(state)."""
        return State(_Step(lambda state: (None, f(state))))

    @staticmethod
    def gets[T, V](f: Callable[[T], V], /) -> State[T, V]:
        """Project a value from the state without changing it."""
        return State(_Step(lambda state: (f(state), state)))

    # Functor / Monad operations

    def transform[B](self, f: Callable[[A], B], /) -> State[S, B]:
        return State(_Bind(self, lambda value: State.of(f(value))))

    def sequence[B](self, f: Callable[[A], State[S, B]], /) -> State[S, B]:
        """
        Monadic bind (>>=).

        Runs self, then f(value) from the intermediate state.
        """
        return State(_Bind(self, f))

    # Execution

    def run(self, initial: S, /) -> tuple[A, S]:
        """Run the computation, return (value, final_state)."""
        current: State[S, typing.Any] = self
        state = initial
        stack: list[Callable[[typing.Any], State[S, typing.Any]]] = []
        while True:
            match current._instruction:
                case _Bind(source, continuation):
                    stack.append(continuation)
                    current = source
                    continue
                case _Step(transition):
                    value, state = transition(state)
                case _ as unreachable:
                    assert_never(unreachable)

            if not stack:
                return typing.cast(A, value), state
            current = stack.pop()(value)

    def eval(self, initial: S, /) -> A:
        """Run and keep the value only."""
        value, _ = self.run(initial)
        return value

    def exec(self, initial: S, /) -> S:
        """Run and keep the final state only."""
        _, state = self.run(initial)
        return state

    def to_function(self) -> Callable[[S], tuple[A, S]]:
        """The whole computation as a plain S -> (A, S) function."""
        return self.run


state_monad: Monad[State[typing.Any, typing.Any]] = register_monad(Monad(of=State.of))


__all__ = (
    "State",
    "state_monad",
)
