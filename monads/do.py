"""
Do-notation
===========

Generator functions as monadic "do" blocks.

Each `yield container` suspends the block; the interpreter binds the
container with `sequence` and resumes the generator with its payload.
The block's `return` value is lifted with the family's `of`.

Example:
    @do_notation(io_monad)
    def show_time():
        now = yield IO.from_effect(datetime.now)
        yield IO.from_effect(lambda: print(now.isoformat()))
        return now

    show_time().run()

Driving goes through Monad.rec (a loop, not recursion), and a fresh
generator is created every time the composed container is evaluated,
so lazy results (IO, State, ...) can be run again.
"""

from __future__ import annotations

import logging
import typing
from collections.abc import Callable, Generator
from functools import wraps

from ._errors import NotAContainerError
from ._types import Container, Lift, Monad, as_monad
from .branching.either import Left, Right

logger = logging.getLogger(__name__)

type Block[R] = Callable[[], Generator[typing.Any, typing.Any, R]]


def _drive[M, R](
    m: Monad[M],
    generator: Generator[typing.Any, typing.Any, R],
) -> M:
    """Fold the generator into one container: one bind per yield, one lift at the end."""
    steps = 0

    def step(sent: typing.Any) -> M:
        nonlocal steps
        try:
            yielded = generator.send(sent)
        except StopIteration as stop:
            if logger.isEnabledFor(logging.DEBUG):
                logger.debug("do-block finished after %d step(s)", steps)
            return m.of(Right(stop.value))

        if not isinstance(yielded, Container):
            generator.close()
            raise NotAContainerError(yielded)
        steps += 1
        return typing.cast(M, yielded.transform(Left))

    return m.rec(step, None)


def do[M, R](m: Monad[M] | Lift, block: Block[R], /) -> M:
    """
    Interpret a generator block against one container family.

    Equivalent to chaining every yielded container with `sequence` and
    finishing with `m.of(returned_value)`:
    - no yields at all behaves exactly like m.of(returned_value);
    - a short-circuiting yield (Left, Failure, ...) is the result, the
      generator is never resumed after it.
    """
    monad = as_monad(m)
    return typing.cast(M, monad.of(None).sequence(lambda _: _drive(monad, block())))


def do_with[M](m: Monad[M] | Lift, /) -> Callable[[Block[typing.Any]], M]:
    """
    Partially apply the family: do_with(m)(block) == do(m, block).

    Example:
        do_io = do_with(IO.of)
        program = do_io(lambda: (yield IO.of(1)) + (yield IO.of(2)))
    """
    monad = as_monad(m)

    def runner(block: Block[typing.Any], /) -> M:
        return do(monad, block)

    return runner


def do_notation[M, **P](
    m: Monad[M] | Lift,
    /,
) -> Callable[[Callable[P, Generator[typing.Any, typing.Any, typing.Any]]], Callable[P, M]]:
    """
    Decorator: generator function -> function returning a container.

    Example:
        @do_notation(either_monad)
        def reciprocal_of(text: str):
            n = yield parse_number(text)
            r = yield reciprocal(n)
            return r

        reciprocal_of("10")  # Right(0.1)
    """
    monad = as_monad(m)

    def decorator(
        func: Callable[P, Generator[typing.Any, typing.Any, typing.Any]],
    ) -> Callable[P, M]:
        @wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> M:
            return do(monad, lambda: func(*args, **kwargs))

        return wrapper

    return decorator


__all__ = (
    "Block",
    "do",
    "do_notation",
    "do_with",
)
