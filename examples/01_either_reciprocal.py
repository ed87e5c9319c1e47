from __future__ import annotations

from _infra import banner, parse_number, parse_number_exc, reciprocal, run

from monads import Except, Left, Right


async def main() -> None:
    banner("01_either_reciprocal: Either / Except short-circuit")

    for text in ("10", "0", "a"):
        program = parse_number(text).sequence(reciprocal)
        print(
            program.fold(
                lambda err: f"Error: {err}",
                lambda value: f"Reciprocal is {value}",
            )
        )

        match program:
            case Right(value):
                print(f"  matched Right({value})")
            case Left(err):
                print(f"  matched Left({err!r})")

    # Except: same pipeline, failure side is always an exception
    safe = parse_number_exc("a").sequence(
        lambda n: Except.try_catch(lambda: 1 / n),
    )
    print(safe.match(failure=lambda e: f"failure: {e}", success=lambda v: f"ok: {v}"))


if __name__ == "__main__":
    run(main)
