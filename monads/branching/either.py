"""
Either
======

Either[L, R] ≅ Left[L] | Right[R]

Двухветочный контейнер: Right продолжает цепочку, Left её обрывает.
Only the Right branch is visited by `transform`/`sequence`; a Left
short-circuits every following step and is forwarded unchanged.

Example:
    def parse_number(s: str) -> Either[str, float]:
        return Either.try_catch(lambda: float(s), lambda _: f"'{s}' is not a number")

    def reciprocal(n: float) -> Either[str, float]:
        return Either.left("division by zero") if n == 0 else Either.right(1 / n)

    parse_number("10").sequence(reciprocal).fold(
        lambda err: f"Error: {err}",
        lambda value: f"Reciprocal is {value}",
    )  # "Reciprocal is 0.1"
"""

from __future__ import annotations

import typing
from collections.abc import Callable

from kungfu import Error, Ok, Result

from .._errors import UnwrapError
from .._helpers import identity
from .._types import Monad, register_family, register_monad


class Either[L, R]:
    """
    Base of the Left/Right union.

    Never instantiated directly: use Either.left / Either.right / Either.of
    or one of the bridging constructors.

    Monadic laws (of = Either.of):
    - Left identity: of(a).sequence(f) ≡ f(a)
    - Right identity: m.sequence(of) ≡ m
    - Associativity: m.sequence(f).sequence(g) ≡ m.sequence(x => f(x).sequence(g))
    """

    __slots__ = ()

    # Constructors

    @staticmethod
    def left[A](value: A, /) -> Either[A, typing.Never]:
        """Construct the failure branch."""
        return Left(value)

    @staticmethod
    def right[B](value: B, /) -> Either[typing.Never, B]:
        """Construct the success branch."""
        return Right(value)

    @staticmethod
    def of[B](value: B, /) -> Either[typing.Never, B]:
        """Lift a value (same as right)."""
        return Right(value)

    @staticmethod
    def from_nullable[A, B](value: B | None, on_missing: Callable[[], A], /) -> Either[A, B]:
        """
        Convert Optional to Either. None becomes Left(on_missing()).

        NOTE: on_missing is a thunk so the failure payload is only
              built when the value is actually absent.
        """
        if value is None:
            return Left(on_missing())
        return Right(value)

    @staticmethod
    def try_catch[B, A](
        effect: Callable[[], B],
        on_error: Callable[[Exception], A] | None = None,
        /,
    ) -> Either[A, B]:
        """
        Execute effect right now, catching exceptions into Left.

        Without on_error the raw exception becomes the Left payload.

        NOTE: Only Exception subclasses are caught; KeyboardInterrupt and
              friends keep propagating.
        """
        try:
            return Right(effect())
        except Exception as exc:
            if on_error is None:
                return Left(typing.cast(A, exc))
            return Left(on_error(exc))

    @staticmethod
    def from_result[A, B](result: Result[B, A], /) -> Either[A, B]:
        """Ok -> Right, Error -> Left."""
        match result:
            case Ok(value):
                return Right(value)
            case Error(err):
                return Left(err)
            case _:
                raise TypeError(f"expected kungfu Result, got {result!r}")

    @staticmethod
    def tail_rec[A, B, E](
        step: Callable[[A], Either[E, Either[A, B]]],
        seed: A,
        /,
    ) -> Either[E, B]:
        """
        Stack-safe loop: Right(Left(a)) continues, Right(Right(b)) stops.

        A Left returned by step ends the loop and is forwarded unchanged.
        """
        current = step(seed)
        while True:
            match current:
                case Right(Left(next_seed)):
                    current = step(next_seed)
                case Right(Right(result)):
                    return Right(result)
                case Right(other):
                    raise TypeError(f"tail_rec step must produce Either, got {other!r}")
                case _:
                    return typing.cast(Either[E, B], current)

    # Inspectors

    def is_left(self) -> bool:
        return isinstance(self, Left)

    def is_right(self) -> bool:
        return isinstance(self, Right)

    # Functor / Monad operations

    def transform[B](self, f: Callable[[R], B], /) -> Either[L, B]:
        """Functor fmap - apply f to the Right value, pass Left through."""
        match self:
            case Right(value):
                return Right(f(value))
            case _:
                return typing.cast(Either[L, B], self)

    def map_left[A](self, f: Callable[[L], A], /) -> Either[A, R]:
        """Map over the Left value."""
        match self:
            case Left(value):
                return Left(f(value))
            case _:
                return typing.cast(Either[A, R], self)

    def sequence[B](self, f: Callable[[R], Either[L, B]], /) -> Either[L, B]:
        """
        Monadic bind (>>=).

        - On Right: returns f(value)
        - On Left: short-circuit, f is never called
        """
        match self:
            case Right(value):
                return f(value)
            case _:
                return typing.cast(Either[L, B], self)

    # Extractors

    def fold[T](self, on_left: Callable[[L], T], on_right: Callable[[R], T], /) -> T:
        """Eliminate into a plain value; exactly one handler runs."""
        match self:
            case Right(value):
                return on_right(value)
            case Left(value):
                return on_left(value)
            case _:
                raise TypeError(f"unknown Either branch: {self!r}")

    def match[T](self, *, left: Callable[[L], T], right: Callable[[R], T]) -> T:
        """Keyword flavour of fold."""
        return self.fold(left, right)

    def get_or_else(self, fallback: Callable[[L], R], /) -> R:
        """Right value, or fallback(left) computed lazily."""
        return self.fold(fallback, identity)

    def swap(self) -> Either[R, L]:
        """Exchange branches, keeping the stored value."""
        match self:
            case Right(value):
                return Left(value)
            case Left(value):
                return Right(value)
            case _:
                raise TypeError(f"unknown Either branch: {self!r}")

    def unwrap(self) -> R:
        """Right value, raising UnwrapError on Left."""
        match self:
            case Right(value):
                return value
            case Left(value):
                raise UnwrapError(value)
            case _:
                raise TypeError(f"unknown Either branch: {self!r}")

    def to_result(self) -> Result[R, L]:
        """Convert to kungfu Result: Right -> Ok, Left -> Error."""
        return self.fold(Error, Ok)


class Left[L](Either[L, typing.Never]):
    """Failure branch."""

    __slots__ = ("_value",)
    __match_args__ = ("value",)

    def __init__(self, value: L, /) -> None:
        self._value = value

    @property
    def value(self) -> L:
        return self._value

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Left) and self._value == other._value

    def __hash__(self) -> int:
        return hash((Left, self._value))

    def __repr__(self) -> str:
        return f"Left({self._value!r})"


class Right[R](Either[typing.Never, R]):
    """Success branch."""

    __slots__ = ("_value",)
    __match_args__ = ("value",)

    def __init__(self, value: R, /) -> None:
        self._value = value

    @property
    def value(self) -> R:
        return self._value

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Right) and self._value == other._value

    def __hash__(self) -> int:
        return hash((Right, self._value))

    def __repr__(self) -> str:
        return f"Right({self._value!r})"


either_monad: Monad[Either[typing.Any, typing.Any]] = register_monad(
    Monad(of=Either.of, tail_rec=Either.tail_rec),
    Either.right,
    Right,
)
register_family(Either, lambda _: either_monad)


__all__ = (
    "Either",
    "Left",
    "Right",
    "either_monad",
)
