from __future__ import annotations

import asyncio
import sys
from collections.abc import Callable, Coroutine
from dataclasses import dataclass
from pathlib import Path

_PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))

from monads import Either, Except  # noqa: E402


@dataclass(frozen=True, slots=True)
class Failure(Exception):
    message: str

    def __str__(self) -> str:  # pragma: no cover (examples only)
        return self.message


def parse_number(text: str) -> Either[str, float]:
    return Either.try_catch(lambda: float(text), lambda _: f"'{text}' is not a number")


def reciprocal(n: float) -> Either[str, float]:
    return Either.left("division by zero") if n == 0 else Either.right(1 / n)


def parse_number_exc(text: str) -> Except[float]:
    return Except.try_catch(lambda: float(text), lambda _: Failure(f"'{text}' is not a number"))


def banner(title: str) -> None:  # pragma: no cover (examples only)
    print(f"\n== {title} ==")


def run(main: Callable[[], Coroutine[object, object, None]]) -> None:  # pragma: no cover (examples only)
    asyncio.run(main())
