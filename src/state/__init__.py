"""
State model and helpers for local YAML persistence.

This package defines the in-memory schema recording when each image was last
used, where it lives on disk, and how it is loaded and saved.
"""

from .local_store import (
    LocalStateStore,
    LocationUnavailableError,
    StateSerializationError,
    StateValidationError,
    load_state,
    load_state_or_initial,
    save_state,
)
from .models import State, initial_state
from .paths import state_path

__all__ = [
    "LocalStateStore",
    "LocationUnavailableError",
    "State",
    "StateSerializationError",
    "StateValidationError",
    "initial_state",
    "load_state",
    "load_state_or_initial",
    "save_state",
    "state_path",
]
