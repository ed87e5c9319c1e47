"""Tests for the Either container."""

import pytest
from kungfu import Error, Ok

from monads import Either, Left, Right, UnwrapError


def parse_number(s: str) -> Either[str, float]:
    return Either.try_catch(lambda: float(s), lambda _: f"'{s}' is not a number")


def reciprocal(n: float) -> Either[str, float]:
    return Either.left("division by zero") if n == 0 else Either.right(1 / n)


def describe(program: Either[str, float]) -> str:
    return program.fold(
        lambda err: f"Error: {err}",
        lambda value: f"Reciprocal is {value}",
    )


def test_reciprocal_of_valid_number():
    program = parse_number("10").sequence(reciprocal)

    assert program == Right(0.1)
    assert describe(program) == "Reciprocal is 0.1"


def test_reciprocal_of_zero_fails():
    program = parse_number("0").sequence(reciprocal)

    assert program == Left("division by zero")
    assert describe(program) == "Error: division by zero"


def test_reciprocal_of_garbage_never_reaches_second_step():
    called = []

    def tracked_reciprocal(n: float) -> Either[str, float]:
        called.append(n)
        return reciprocal(n)

    program = parse_number("a").sequence(tracked_reciprocal)

    assert program == Left("'a' is not a number")
    assert describe(program) == "Error: 'a' is not a number"
    assert called == []


def test_constructors():
    assert Either.left(1) == Left(1)
    assert Either.right(1) == Right(1)
    assert Either.of(1) == Right(1)
    assert Left(1) != Right(1)
    assert Either.left(1).is_left() and not Either.left(1).is_right()
    assert Either.right(1).is_right() and not Either.right(1).is_left()


def test_left_ignores_transform_and_sequence():
    failure: Either[str, int] = Either.left("nope")

    def explode(_: int) -> Either[str, int]:
        raise AssertionError("must not be called")

    assert failure.transform(lambda x: x + 1) is failure
    assert failure.sequence(explode) is failure
    assert failure.transform(explode).sequence(explode) == Left("nope")


def test_transform_applies_to_right():
    assert Either.right(2).transform(lambda x: x * 10) == Right(20)


def test_map_left():
    assert Either.left("e").map_left(str.upper) == Left("E")
    assert Either.right(1).map_left(str.upper) == Right(1)


def test_fold_calls_exactly_one_handler():
    calls = []

    Either.right(1).fold(lambda l: calls.append(("left", l)), lambda r: calls.append(("right", r)))
    Either.left(2).fold(lambda l: calls.append(("left", l)), lambda r: calls.append(("right", r)))

    assert calls == [("right", 1), ("left", 2)]


def test_match_with_keyword_handlers():
    assert Either.right(3).match(left=lambda _: "left", right=lambda r: f"right {r}") == "right 3"
    assert Either.left(3).match(left=lambda l: f"left {l}", right=lambda _: "right") == "left 3"


def test_structural_pattern_matching():
    match Either.right(5):
        case Right(value):
            assert value == 5
        case Left(_):
            pytest.fail("expected Right")


def test_get_or_else_is_lazy():
    calls = []

    def fallback(err: str) -> int:
        calls.append(err)
        return -1

    assert Either.right(7).get_or_else(fallback) == 7
    assert calls == []
    assert Either.left("bad").get_or_else(fallback) == -1
    assert calls == ["bad"]


def test_swap():
    assert Either.right(1).swap() == Left(1)
    assert Either.left("x").swap() == Right("x")


def test_from_nullable():
    calls = []

    def on_missing() -> str:
        calls.append(1)
        return "missing"

    assert Either.from_nullable(0, on_missing) == Right(0)
    assert calls == []
    assert Either.from_nullable(None, on_missing) == Left("missing")
    assert calls == [1]


def test_try_catch_keeps_raw_exception_by_default():
    error = ValueError("boom")

    def effect() -> int:
        raise error

    result = Either.try_catch(effect)

    assert result.is_left()
    assert result.fold(lambda e: e, lambda _: None) is error


def test_try_catch_runs_effect_immediately():
    calls = []
    Either.try_catch(lambda: calls.append(1))
    assert calls == [1]


def test_try_catch_does_not_swallow_base_exceptions():
    def effect() -> int:
        raise KeyboardInterrupt

    with pytest.raises(KeyboardInterrupt):
        Either.try_catch(effect)


def test_unwrap():
    assert Either.right(1).unwrap() == 1
    with pytest.raises(UnwrapError) as exc_info:
        Either.left("bad").unwrap()
    assert exc_info.value.value == "bad"


def test_result_bridge():
    match Either.right(1).to_result():
        case Ok(value):
            assert value == 1
        case _:
            pytest.fail("expected Ok")

    match Either.left("e").to_result():
        case Error(err):
            assert err == "e"
        case _:
            pytest.fail("expected Error")

    assert Either.from_result(Ok(2)) == Right(2)
    assert Either.from_result(Error("e")) == Left("e")


def test_tail_rec_is_stack_safe():
    def countdown(n: int) -> Either[str, Either[int, str]]:
        if n == 0:
            return Either.right(Either.right("done"))
        return Either.right(Either.left(n - 1))

    assert Either.tail_rec(countdown, 100_000) == Right("done")


def test_tail_rec_forwards_failure():
    seen = []

    def step(n: int) -> Either[str, Either[int, int]]:
        seen.append(n)
        if n == 3:
            return Either.left("stop")
        return Either.right(Either.left(n + 1))

    assert Either.tail_rec(step, 0) == Left("stop")
    assert seen == [0, 1, 2, 3]


def test_hash_and_equality():
    assert {Right(1), Right(1), Left(1)} == {Right(1), Left(1)}
    assert repr(Left("x")) == "Left('x')"
