from __future__ import annotations

from _infra import banner, run

from monads import Either, State, StateT, either_monad

type Counter = int


async def main() -> None:
    banner("03_state_counter: State and StateT over Either")

    increment = State.modify(lambda n: n + 1)
    program = increment.sequence(lambda _: increment).sequence(lambda _: State.get())

    result, final_state = program.run(0)
    print(f"State: result={result} final_state={final_state}")

    def write_log(msg: str) -> StateT[Counter, None]:
        return StateT.lift(Either.try_catch(lambda: print(f"  log: {msg}")), either_monad)

    increment_t = StateT.modify(lambda n: n + 1, either_monad)
    guarded = StateT.gets(lambda n: n, either_monad).sequence(
        lambda n: StateT.lift(Either.left(f"counter overflow at {n}"), either_monad)
        if n >= 2
        else StateT.of(n, either_monad)
    )

    program_t = (
        increment_t
        .sequence(lambda _: write_log("incremented"))
        .sequence(lambda _: increment_t)
        .sequence(lambda _: write_log("incremented again"))
        .sequence(lambda _: guarded)
        .sequence(lambda _: write_log("never printed"))
    )

    print(
        program_t.run(0).match(
            left=lambda err: f"StateT error: {err}",
            right=lambda pair: f"StateT result={pair[0]} final_state={pair[1]}",
        )
    )


if __name__ == "__main__":
    run(main)
