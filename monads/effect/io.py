"""IO Monad

Deferred synchronous effects. Building an IO never executes anything;
only `run()` does, and every call of `run()` executes the program again.

The program is kept as a small instruction tree (pure / delay / bind)
and `run()` walks it with an explicit continuation stack, so long
chains of `sequence` don't grow the Python call stack."""

from __future__ import annotations

import logging
import typing
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import assert_never

from .._types import Monad, register_monad
from ..branching.exceptional import Except

if typing.TYPE_CHECKING:
    from .async_io import AsyncIO

logger = logging.getLogger(__name__)


# ============================================================================
# Instructions
# ============================================================================


@dataclass(frozen=True, slots=True)
class _Pure[A]:
    value: A


@dataclass(frozen=True, slots=True)
class _Delay[A]:
    thunk: Callable[[], A]


@dataclass(frozen=True, slots=True)
class _Bind[A, B]:
    source: IO[A]
    continuation: Callable[[A], IO[B]]


type _Instruction = _Pure[typing.Any] | _Delay[typing.Any] | _Bind[typing.Any, typing.Any]


# ============================================================================
# IO
# ============================================================================


class IO[A]:
    """
    IO Monad.

    Monadic laws (observed through run()):
    - Left identity: IO.of(a).sequence(f) ≡ f(a)
    - Right identity: m.sequence(IO.of) ≡ m
    - Associativity: m.sequence(f).sequence(g) ≡ m.sequence(x => f(x).sequence(g))
    """

    __slots__ = ("_instruction",)

    def __init__(self, instruction: _Instruction, /) -> None:
        self._instruction = instruction

    @staticmethod
    def of[V](value: V, /) -> IO[V]:
        """Lift a value; running it has no observable effect."""
        return IO(_Pure(value))

    @staticmethod
    def from_effect[V](thunk: Callable[[], V], /) -> IO[V]:
        """Wrap a side effect. The thunk is not called here."""
        return IO(_Delay(thunk))

    @staticmethod
    def from_awaitable[V](thunk: Callable[[], Awaitable[V]], /) -> IO[Awaitable[V]]:
        """
        Wrap an awaitable-producing effect so it can be composed before awaiting.

        NOTE: run() only creates the awaitable, awaiting it is up to the caller.
              Use to_async() / AsyncIO when the result itself is needed.
        """
        return IO(_Delay(thunk))

    # Functor / Monad operations

    def transform[B](self, f: Callable[[A], B], /) -> IO[B]:
        """Functor fmap - apply f to the result once the effect ran."""
        return IO(_Bind(self, lambda value: IO(_Pure(f(value)))))

    def sequence[B](self, f: Callable[[A], IO[B]], /) -> IO[B]:
        """
        Monadic bind (>>=).

        Runs self, feeds the result to f and runs the IO it returns.
        """
        return IO(_Bind(self, f))

    def tap(self, observer: Callable[[A], None], /) -> IO[A]:
        """Execute observer on the result, pass the result through unchanged."""

        def observe(value: A) -> A:
            observer(value)
            return value

        return self.transform(observe)

    def attempt(self) -> IO[Except[A]]:
        """Catch exceptions raised while running into Except.Failure."""
        return IO(_Delay(lambda: Except.try_catch(self.run)))

    # Execution

    def run(self) -> A:
        """
        Execute the program and return its result.

        Exceptions raised by wrapped effects propagate unchanged.
        """
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Running IO program %r", self)

        current: IO[typing.Any] = self
        stack: list[Callable[[typing.Any], IO[typing.Any]]] = []
        while True:
            match current._instruction:
                case _Bind(source, continuation):
                    stack.append(continuation)
                    current = source
                    continue
                case _Pure(value):
                    result = value
                case _Delay(thunk):
                    result = thunk()
                case _ as unreachable:
                    assert_never(unreachable)

            if not stack:
                return typing.cast(A, result)
            current = stack.pop()(result)

    def to_async(self) -> AsyncIO[A]:
        """Convert to AsyncIO; the effect still runs synchronously inside it."""
        from .async_io import AsyncIO

        return AsyncIO.from_io(self)

    def __repr__(self) -> str:
        return f"IO({type(self._instruction).__name__.lstrip('_').lower()})"


io_monad: Monad[IO[typing.Any]] = register_monad(Monad(of=IO.of))


__all__ = (
    "IO",
    "io_monad",
)
