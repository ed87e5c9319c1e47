"""
Except
======

Except[A] ≅ Failure[Exception] | Success[A]

Either with the failure side fixed to the exception family.
Only Success is visited by `transform`/`sequence`; a Failure
short-circuits the rest of the chain.
"""

from __future__ import annotations

import typing
from collections.abc import Callable

from kungfu import Error, Ok, Result

from .._helpers import identity
from .._types import Monad, register_family, register_monad
from .either import Either, Left, Right


class Except[A]:
    """
    Base of the Failure/Success union.

    Monadic laws (of = Except.of):
    - Left identity: of(a).sequence(f) ≡ f(a)
    - Right identity: m.sequence(of) ≡ m
    - Associativity: m.sequence(f).sequence(g) ≡ m.sequence(x => f(x).sequence(g))
    """

    __slots__ = ()

    # Constructors

    @staticmethod
    def failed(error: Exception, /) -> Except[typing.Never]:
        """Construct the failure branch. Only exceptions are accepted."""
        return Failure(error)

    @staticmethod
    def ok[B](value: B, /) -> Except[B]:
        """Construct the success branch."""
        return Success(value)

    @staticmethod
    def of[B](value: B, /) -> Except[B]:
        """Lift a value (same as ok)."""
        return Success(value)

    @staticmethod
    def from_nullable[B](value: B | None, on_missing: Callable[[], Exception], /) -> Except[B]:
        """None becomes Failure(on_missing())."""
        if value is None:
            return Failure(on_missing())
        return Success(value)

    @staticmethod
    def try_catch[B](
        effect: Callable[[], B],
        on_error: Callable[[Exception], Exception] | None = None,
        /,
    ) -> Except[B]:
        """Execute effect right now; a raised exception becomes Failure."""
        try:
            return Success(effect())
        except Exception as exc:
            return Failure(exc if on_error is None else on_error(exc))

    @staticmethod
    def from_either[B](either: Either[Exception, B], /) -> Except[B]:
        return either.fold(Failure, Success)

    @staticmethod
    def from_result[B](result: Result[B, Exception], /) -> Except[B]:
        """Ok -> Success, Error -> Failure."""
        match result:
            case Ok(value):
                return Success(value)
            case Error(err):
                return Failure(err)
            case _:
                raise TypeError(f"expected kungfu Result, got {result!r}")

    @staticmethod
    def tail_rec[S, B](step: Callable[[S], Except[Either[S, B]]], seed: S, /) -> Except[B]:
        """Stack-safe loop, see Monad.rec. A Failure from step is returned as-is."""
        current = step(seed)
        while True:
            match current:
                case Success(Left(next_seed)):
                    current = step(next_seed)
                case Success(Right(result)):
                    return Success(result)
                case Success(other):
                    raise TypeError(f"tail_rec step must produce Either, got {other!r}")
                case _:
                    return typing.cast(Except[B], current)

    # Inspectors

    def is_failure(self) -> bool:
        return isinstance(self, Failure)

    def is_ok(self) -> bool:
        return isinstance(self, Success)

    # Functor / Monad operations

    def transform[B](self, f: Callable[[A], B], /) -> Except[B]:
        match self:
            case Success(value):
                return Success(f(value))
            case _:
                return typing.cast(Except[B], self)

    def sequence[B](self, f: Callable[[A], Except[B]], /) -> Except[B]:
        """Monadic bind: f runs only on Success."""
        match self:
            case Success(value):
                return f(value)
            case _:
                return typing.cast(Except[B], self)

    # Extractors

    def fold[T](self, on_failure: Callable[[Exception], T], on_success: Callable[[A], T], /) -> T:
        match self:
            case Success(value):
                return on_success(value)
            case Failure(error):
                return on_failure(error)
            case _:
                raise TypeError(f"unknown Except branch: {self!r}")

    def match[T](self, *, failure: Callable[[Exception], T], success: Callable[[A], T]) -> T:
        return self.fold(failure, success)

    def get_or_else(self, fallback: Callable[[Exception], A], /) -> A:
        return self.fold(fallback, identity)

    def unwrap(self) -> A:
        """
        Success value; a Failure re-raises the stored exception.

        NOTE: The exception is raised as-is (same object, same traceback chain).
        """
        match self:
            case Success(value):
                return value
            case Failure(error):
                raise error
            case _:
                raise TypeError(f"unknown Except branch: {self!r}")

    def to_either(self) -> Either[Exception, A]:
        return self.fold(Left, Right)

    def to_result(self) -> Result[A, Exception]:
        """Convert to kungfu Result: Success -> Ok, Failure -> Error."""
        return self.fold(Error, Ok)


class Failure(Except[typing.Never]):
    """Failure branch holding an exception."""

    __slots__ = ("_error",)
    __match_args__ = ("error",)

    def __init__(self, error: Exception, /) -> None:
        if not isinstance(error, Exception):
            raise TypeError(f"Except failure must be an Exception, got {error!r}")
        self._error = error

    @property
    def error(self) -> Exception:
        return self._error

    def __eq__(self, other: object) -> bool:
        # exceptions compare by identity, so compare type + args instead
        if not isinstance(other, Failure):
            return False
        if self._error is other._error:
            return True
        return type(self._error) is type(other._error) and self._error.args == other._error.args

    def __hash__(self) -> int:
        return hash((Failure, type(self._error), self._error.args))

    def __repr__(self) -> str:
        return f"Failure({self._error!r})"


class Success[A](Except[A]):
    """Success branch."""

    __slots__ = ("_value",)
    __match_args__ = ("value",)

    def __init__(self, value: A, /) -> None:
        self._value = value

    @property
    def value(self) -> A:
        return self._value

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Success) and self._value == other._value

    def __hash__(self) -> int:
        return hash((Success, self._value))

    def __repr__(self) -> str:
        return f"Success({self._value!r})"


except_monad: Monad[Except[typing.Any]] = register_monad(
    Monad(of=Except.of, tail_rec=Except.tail_rec),
    Except.ok,
    Success,
)
register_family(Except, lambda _: except_monad)


__all__ = (
    "Except",
    "Failure",
    "Success",
    "except_monad",
)
