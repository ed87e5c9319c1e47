"""
State containers
================

State[S, A] - чистая передача состояния.
StateT[S, A] - то же самое поверх произвольного контейнера M.
"""

from .state import State, state_monad
from .transformer import StateT

__all__ = (
    "State",
    "StateT",
    "state_monad",
)
