from __future__ import annotations

from datetime import datetime, timezone

from _infra import banner, run

from monads import IO, AsyncIO


def put_str_ln(msg: str) -> IO[None]:
    # Locality: the effect is described here, executed only by run().
    return IO.from_effect(lambda: print(msg))


async def main() -> None:
    banner("02_io_show_time: IO / AsyncIO deferred effects")

    now: IO[datetime] = IO.from_effect(lambda: datetime.now(timezone.utc))

    show_time = now.transform(lambda date: date.isoformat()).sequence(put_str_ln)

    print("nothing printed yet, running twice:")
    show_time.run()
    show_time.run()

    # Same thing asynchronously, with a cached first read
    cached_now = show_time.to_async().transform(lambda _: "done").cache()
    print(await cached_now)
    print(await AsyncIO.of(1).tap(lambda v: print(f"tap saw {v}")).run())


if __name__ == "__main__":
    run(main)
