"""
Branching containers
====================

Either[L, R] и Except[A] - чистые, синхронные, без отложенных эффектов.
"""

from .either import Either, Left, Right, either_monad
from .exceptional import Except, Failure, Success, except_monad

__all__ = (
    # Either
    "Either",
    "Left",
    "Right",
    "either_monad",
    # Except
    "Except",
    "Failure",
    "Success",
    "except_monad",
)
