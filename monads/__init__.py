"""
Monads library for composing effects without running them.

Containers that defer, sequence and short-circuit computations
until a result is explicitly requested.

Architecture:
- Branching containers (Either, Except) - pure, short-circuit on failure
- Deferred effects (IO, AsyncIO) - nothing runs before run()
- State / StateT - explicit state threading, StateT over any family
- do / do_with / do_notation - generator blocks folded into sequence chains
- Monad capability objects (*_monad) for generic code
"""

# Core types
from ._types import (
    Container,
    Lift,
    Monad,
    StatePair,
    as_monad,
    family_of,
    register_family,
    register_monad,
)

# Internal helpers (for custom families)
from . import _helpers

# Branching containers
from . import branching
from .branching import (
    Either,
    Except,
    Failure,
    Left,
    Right,
    Success,
    either_monad,
    except_monad,
)

# Deferred effects
from . import effect
from .effect import IO, AsyncIO, async_io_monad, io_monad

# State
from . import state
from .state import State, StateT, state_monad

# Do-notation
from .do import do, do_notation, do_with

# Errors
from ._errors import NotAContainerError, UnwrapError

__all__ = (
    # Types
    "Container",
    "Lift",
    "Monad",
    "StatePair",
    "as_monad",
    "family_of",
    "register_family",
    "register_monad",
    # Internal helpers (for custom families)
    "_helpers",
    # Branching
    "branching",
    "Either",
    "Left",
    "Right",
    "either_monad",
    "Except",
    "Failure",
    "Success",
    "except_monad",
    # Deferred effects
    "effect",
    "IO",
    "io_monad",
    "AsyncIO",
    "async_io_monad",
    # State
    "state",
    "State",
    "state_monad",
    "StateT",
    # Do-notation
    "do",
    "do_notation",
    "do_with",
    # Errors
    "NotAContainerError",
    "UnwrapError",
)
