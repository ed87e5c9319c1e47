
from __future__ import annotations

import typing


class UnwrapError(Exception):
    """unwrap() called on the failure branch."""

    value: typing.Any

    def __init__(self, value: typing.Any) -> None:
        self.value = value
        super().__init__(f"Called unwrap() on failure branch: {value!r}")


class NotAContainerError(TypeError):
    """A do-block yielded something that has no `sequence`."""

    value: typing.Any

    def __init__(self, value: typing.Any) -> None:
        self.value = value
        super().__init__(f"do-block yielded a non-container value: {value!r}")


__all__ = ("NotAContainerError", "UnwrapError")
