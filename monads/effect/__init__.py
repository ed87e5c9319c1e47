"""
Deferred-effect containers
==========================

IO[A] - синхронный отложенный эффект.
AsyncIO[A] - асинхронный отложенный эффект.
"""

from .async_io import AsyncIO, async_io_monad
from .io import IO, io_monad

__all__ = (
    "AsyncIO",
    "IO",
    "async_io_monad",
    "io_monad",
)
