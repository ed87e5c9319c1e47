from __future__ import annotations

import asyncio

from _infra import banner, parse_number, reciprocal, run

from monads import IO, AsyncIO, async_io_monad, do, do_notation, either_monad, io_monad


@do_notation(either_monad)
def reciprocal_of(text: str):
    n = yield parse_number(text)
    r = yield reciprocal(n)
    return r


@do_notation(io_monad)
def greet(name: str):
    greeting = yield IO.of(f"hello, {name}")
    yield IO.from_effect(lambda: print(greeting))
    return len(greeting)


async def fetch(n: int) -> int:
    await asyncio.sleep(0.01)
    return n * 2


async def main() -> None:
    banner("04_do_notation: generator blocks for every family")

    for text in ("10", "0", "a"):
        print(f"{text!r} -> {reciprocal_of(text)!r}")

    program = greet("world")
    print(f"greeting length: {program.run()}")

    def pipeline():
        a = yield AsyncIO.from_effect(lambda: fetch(1))
        b = yield AsyncIO.from_effect(lambda: fetch(a))
        return a + b

    print(f"async sum: {await do(async_io_monad, pipeline)}")


if __name__ == "__main__":
    run(main)
