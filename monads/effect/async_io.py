"""AsyncIO Monad

Lazy + Coro: deferred effects completing asynchronously.

Nothing runs at construction time. Every `run()` starts an independent
computation (no in-flight state is stored on the instance), and within
one chain a step never starts before the previous one resolved.

Interop with kungfu: to_lazy_coro_result / from_lazy_coro_result, cache()."""

from __future__ import annotations

import logging
import typing
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import assert_never

from kungfu import Error, LazyCoroResult, Ok, Result
from kungfu.library.caching import acache

from .._types import Monad, register_monad
from ..branching.exceptional import Except

if typing.TYPE_CHECKING:
    from .io import IO

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class _Pure[A]:
    value: A


@dataclass(frozen=True, slots=True)
class _Defer[A]:
    thunk: Callable[[], Awaitable[A]]


@dataclass(frozen=True, slots=True)
class _Bind[A, B]:
    source: AsyncIO[A]
    continuation: Callable[[A], AsyncIO[B]]


type _Instruction = _Pure[typing.Any] | _Defer[typing.Any] | _Bind[typing.Any, typing.Any]


class AsyncIO[A]:
    """
    Async IO Monad.

    Monadic laws (observed through await run()):
    - Left identity: AsyncIO.of(a).sequence(f) ≡ f(a)
    - Right identity: m.sequence(AsyncIO.of) ≡ m
    - Associativity: m.sequence(f).sequence(g) ≡ m.sequence(x => f(x).sequence(g))
    """

    __slots__ = ("_instruction",)

    def __init__(self, instruction: _Instruction, /) -> None:
        self._instruction = instruction

    @staticmethod
    def of[V](value: V, /) -> AsyncIO[V]:
        """Lift a value into AsyncIO."""
        return AsyncIO(_Pure(value))

    @staticmethod
    def from_effect[V](thunk: Callable[[], Awaitable[V]], /) -> AsyncIO[V]:
        """
        Wrap an async effect.

        NOTE: thunk must be a zero-arg callable (e.g. an async def or a lambda).
              A bare coroutine would already be created and could only be awaited once.
        """
        return AsyncIO(_Defer(thunk))

    @staticmethod
    def from_io[V](io: IO[V], /) -> AsyncIO[V]:
        """Embed a synchronous IO; it runs on the event loop thread when awaited."""

        async def run() -> V:
            return io.run()

        return AsyncIO(_Defer(run))

    @staticmethod
    def from_lazy_coro_result[T, E](lazy: LazyCoroResult[T, E], /) -> AsyncIO[Result[T, E]]:
        """Convert kungfu LazyCoroResult into AsyncIO of its Result."""

        async def run() -> Result[T, E]:
            return await lazy()

        return AsyncIO(_Defer(run))

    # Functor / Monad operations

    def transform[B](self, f: Callable[[A], B], /) -> AsyncIO[B]:
        """Functor fmap - apply f to the resolved value."""
        return AsyncIO(_Bind(self, lambda value: AsyncIO(_Pure(f(value)))))

    def sequence[B](self, f: Callable[[A], AsyncIO[B]], /) -> AsyncIO[B]:
        """
        Monadic bind (>>=).

        f is called only after self resolved, so the next effect can't start early.
        """
        return AsyncIO(_Bind(self, f))

    def tap(self, observer: Callable[[A], None], /) -> AsyncIO[A]:
        """Execute sync observer on the value, pass it through unchanged."""

        def observe(value: A) -> A:
            observer(value)
            return value

        return self.transform(observe)

    def tap_async(self, observer: Callable[[A], Awaitable[None]], /) -> AsyncIO[A]:
        """Await async observer on the value, pass it through unchanged."""

        def observe(value: A) -> AsyncIO[A]:
            async def run() -> A:
                await observer(value)
                return value

            return AsyncIO(_Defer(run))

        return self.sequence(observe)

    def attempt(self) -> AsyncIO[Except[A]]:
        """Catch exceptions raised while running into Except.Failure."""

        async def run() -> Except[A]:
            try:
                return Except.ok(await self.run())
            except Exception as exc:
                return Except.failed(exc)

        return AsyncIO(_Defer(run))

    # Utility operations

    def cache(self) -> AsyncIO[A]:
        """Cache the result - the effect runs once, later runs reuse the value."""
        return AsyncIO(_Defer(acache(self.run)))

    def to_lazy_coro_result(self) -> LazyCoroResult[A, Exception]:
        """Convert to kungfu LazyCoroResult, exceptions become Error."""

        async def run() -> Result[A, Exception]:
            try:
                return Ok(await self.run())
            except Exception as exc:
                return Error(exc)

        return LazyCoroResult(run)

    # Execution

    async def run(self) -> A:
        """
        Execute the program and return its result.

        Exceptions raised by wrapped effects propagate unchanged.
        """
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Running AsyncIO program %r", self)

        current: AsyncIO[typing.Any] = self
        stack: list[Callable[[typing.Any], AsyncIO[typing.Any]]] = []
        while True:
            match current._instruction:
                case _Bind(source, continuation):
                    stack.append(continuation)
                    current = source
                    continue
                case _Pure(value):
                    result = value
                case _Defer(thunk):
                    result = await thunk()
                case _ as unreachable:
                    assert_never(unreachable)

            if not stack:
                return typing.cast(A, result)
            current = stack.pop()(result)

    def __await__(self) -> typing.Generator[typing.Any, None, A]:
        """Allow direct await on the program."""
        return self.run().__await__()

    def __repr__(self) -> str:
        return f"AsyncIO({type(self._instruction).__name__.lstrip('_').lower()})"


async_io_monad: Monad[AsyncIO[typing.Any]] = register_monad(Monad(of=AsyncIO.of))


__all__ = (
    "AsyncIO",
    "async_io_monad",
)
