"""
Functor and monad laws for every container family.

Containers holding functions (IO, State, StateT) are compared through
what they produce when run, branching containers directly.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

import pytest

from monads import (
    IO,
    AsyncIO,
    Either,
    Except,
    State,
    StateT,
    either_monad,
    io_monad,
)


@dataclass(frozen=True, slots=True)
class Family:
    name: str
    of: Callable[[Any], Any]
    samples: tuple[Any, ...]
    f: Callable[[int], Any]
    g: Callable[[int], Any]
    observe: Callable[[Any], Any]


def _either_f(x: int) -> Either[str, int]:
    return Either.right(x * 2) if x < 10 else Either.left("too big")


def _except_f(x: int) -> Except[int]:
    return Except.ok(x * 2) if x < 10 else Except.failed(OverflowError("too big"))


def _state_f(x: int) -> State[int, int]:
    return State.modify(lambda s: s * 2).transform(lambda _: x + 1)


def _statet_either_f(x: int) -> StateT[int, int]:
    if x >= 10:
        return StateT.lift(Either.left("too big"), either_monad)
    return StateT.modify(lambda s: s + x, either_monad).transform(lambda _: x * 2)


def _statet_io_f(x: int) -> StateT[int, int]:
    return StateT.modify(lambda s: s + x, io_monad).transform(lambda _: x * 2)


FAMILIES = [
    Family(
        name="either",
        of=Either.of,
        samples=(Either.right(3), Either.right(12), Either.left("boom")),
        f=_either_f,
        g=lambda x: Either.right(x + 1),
        observe=lambda m: m,
    ),
    Family(
        name="except",
        of=Except.of,
        samples=(Except.ok(3), Except.ok(12), Except.failed(ValueError("boom"))),
        f=_except_f,
        g=lambda x: Except.ok(x - 1),
        observe=lambda m: m,
    ),
    Family(
        name="io",
        of=IO.of,
        samples=(IO.of(3), IO.from_effect(lambda: 7)),
        f=lambda x: IO.from_effect(lambda: x * 2),
        g=lambda x: IO.of(x + 1),
        observe=lambda m: m.run(),
    ),
    Family(
        name="state",
        of=State.of,
        samples=(State.of(3), State.from_function(lambda s: (s, s + 1))),
        f=_state_f,
        g=lambda x: State.gets(lambda s: s + x),
        observe=lambda m: m.run(5),
    ),
    Family(
        name="statet-either",
        of=lambda v: StateT.of(v, either_monad),
        samples=(
            StateT.of(3, either_monad),
            StateT.from_function(lambda s: Either.right((s, s + 1)), either_monad),
            StateT.lift(Either.left("boom"), either_monad),
        ),
        f=_statet_either_f,
        g=lambda x: StateT.gets(lambda s: s - x, either_monad),
        observe=lambda m: m.run(5),
    ),
    Family(
        name="statet-io",
        of=lambda v: StateT.of(v, io_monad),
        samples=(
            StateT.of(3, io_monad),
            StateT.lift(IO.from_effect(lambda: 4), io_monad),
        ),
        f=_statet_io_f,
        g=lambda x: StateT.gets(lambda s: s * x, io_monad),
        observe=lambda m: m.run(5).run(),
    ),
]

CASES = [(family, sample) for family in FAMILIES for sample in family.samples]
IDS = [f"{family.name}-{index}" for family in FAMILIES for index, _ in enumerate(family.samples)]


@pytest.mark.parametrize("family", FAMILIES, ids=[family.name for family in FAMILIES])
@pytest.mark.parametrize("value", [0, 3, 11])
def test_left_identity(family: Family, value: int):
    assert family.observe(family.of(value).sequence(family.f)) == family.observe(family.f(value))


@pytest.mark.parametrize(("family", "m"), CASES, ids=IDS)
def test_right_identity(family: Family, m: Any):
    assert family.observe(m.sequence(family.of)) == family.observe(m)


@pytest.mark.parametrize(("family", "m"), CASES, ids=IDS)
def test_associativity(family: Family, m: Any):
    left = m.sequence(family.f).sequence(family.g)
    right = m.sequence(lambda x: family.f(x).sequence(family.g))
    assert family.observe(left) == family.observe(right)


@pytest.mark.parametrize(("family", "m"), CASES, ids=IDS)
def test_functor_identity(family: Family, m: Any):
    assert family.observe(m.transform(lambda x: x)) == family.observe(m)


@pytest.mark.parametrize(("family", "m"), CASES, ids=IDS)
def test_functor_composition(family: Family, m: Any):
    def f(x: int) -> int:
        return x + 2

    def g(x: int) -> int:
        return x * 3

    assert family.observe(m.transform(f).transform(g)) == family.observe(m.transform(lambda x: g(f(x))))


# AsyncIO needs an event loop to observe


async def _async_f(x: int) -> int:
    return x * 2


ASYNC_SAMPLES = [AsyncIO.of(3), AsyncIO.from_effect(lambda: _async_f(4))]


@pytest.mark.asyncio
@pytest.mark.parametrize("value", [0, 5])
async def test_async_left_identity(value: int):
    def f(x: int) -> AsyncIO[int]:
        return AsyncIO.from_effect(lambda: _async_f(x))

    assert await AsyncIO.of(value).sequence(f).run() == await f(value).run()


@pytest.mark.asyncio
@pytest.mark.parametrize("m", ASYNC_SAMPLES)
async def test_async_right_identity_and_associativity(m: AsyncIO[int]):
    def f(x: int) -> AsyncIO[int]:
        return AsyncIO.from_effect(lambda: _async_f(x))

    def g(x: int) -> AsyncIO[int]:
        return AsyncIO.of(x + 1)

    assert await m.sequence(AsyncIO.of).run() == await m.run()
    assert await m.sequence(f).sequence(g).run() == await m.sequence(lambda x: f(x).sequence(g)).run()


@pytest.mark.asyncio
@pytest.mark.parametrize("m", ASYNC_SAMPLES)
async def test_async_functor_laws(m: AsyncIO[int]):
    assert await m.transform(lambda x: x).run() == await m.run()
    assert await m.transform(str).transform(len).run() == await m.transform(lambda x: len(str(x))).run()


@pytest.mark.parametrize("family", FAMILIES[:2], ids=["either", "except"])
def test_failure_makes_transform_and_sequence_no_ops(family: Family):
    failure = family.samples[-1]

    def explode(_: Any) -> Any:
        raise AssertionError("must not be called")

    assert failure.transform(explode) is failure
    assert failure.sequence(explode) is failure
