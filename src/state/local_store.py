from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Callable, Optional
from uuid import uuid4

import yaml
from pydantic import ValidationError

from . import paths
from .models import State


logger = logging.getLogger(__name__)


class LocationUnavailableError(RuntimeError):
    """Raised when the host exposes no per-user data directory to store state in."""


class StateValidationError(ValueError):
    """Raised when the persisted state is not valid UTF-8 YAML matching the schema."""


class StateSerializationError(RuntimeError):
    """Raised when a State cannot be rendered to YAML. Indicates a bug, not bad input."""


def _dump_state_yaml(state: State) -> bytes:
    try:
        text = yaml.safe_dump(state.model_dump(), sort_keys=True, default_flow_style=False)
    except (ValueError, yaml.YAMLError) as ex:
        raise StateSerializationError("Failed to serialize state") from ex
    return text.encode("utf-8")


def _load_state_yaml(data: bytes) -> State:
    try:
        raw = yaml.safe_load(data.decode("utf-8"))
        return State.model_validate(raw)
    except (UnicodeDecodeError, yaml.YAMLError, ValidationError) as ex:
        raise StateValidationError(f"Failed to parse state: {ex}") from ex


class LocalStateStore:
    """
    Local-disk persistence for `State`, stored as YAML in the user's data directory.

    Usage
    - `read()` returns the persisted State. A missing file raises
      `FileNotFoundError`; use `read_or_initial()` to fall back to an empty
      state on first run.
    - `write(state)` replaces the file content in full and returns the path.

    The location comes from `locate`, a callable returning the file path or
    None. It defaults to `state.paths.state_path`, looked up on every call.
    No locking is performed; one process is expected to own the file.
    """

    def __init__(self, *, locate: Optional[Callable[[], Optional[Path]]] = None) -> None:
        self._locate = locate

    def _resolve(self) -> Path:
        path = self._locate() if self._locate is not None else paths.state_path()
        if path is None:
            raise LocationUnavailableError("Unable to locate data directory.")
        return path

    # -------- Core operations --------
    def read(self) -> State:
        """Load State from disk.

        Raises:
        - LocationUnavailableError if no data directory exists.
        - FileNotFoundError if no state has been saved yet; other OSErrors as-is.
        - StateValidationError if the content is malformed or fails the schema.
        """
        path = self._resolve()
        # Log what we are trying to do in case an error occurs.
        logger.debug("Attempting to load the state from `%s`…", path)
        return _load_state_yaml(path.read_bytes())

    def read_or_initial(self) -> State:
        """Like `read()`, but return an empty State if the file doesn't exist yet."""
        try:
            return self.read()
        except FileNotFoundError:
            logger.debug("No persisted state found; starting from an empty state.")
            return State.empty()

    def write(self, state: State) -> Path:
        """Serialize State to YAML and write it, creating parent directories.

        The payload goes to a temporary sibling first and is then moved over
        the target, so readers never see a half-written file from this process.
        A symlinked state file is replaced by a regular file rather than written
        through, and the new file gets default permissions.
        """
        path = self._resolve()
        payload = _dump_state_yaml(state)

        logger.debug("Persisting the state to `%s`…", path)
        path.parent.mkdir(parents=True, exist_ok=True)

        temp_path = path.with_name(f"{path.name}.tmp-{uuid4().hex}")
        try:
            temp_path.write_bytes(payload)
            os.replace(temp_path, path)
        except OSError:
            try:
                temp_path.unlink()
            except FileNotFoundError:
                pass
            raise

        return path


# -------- Convenience top-level helpers --------
def load_state() -> State:
    return LocalStateStore().read()


def load_state_or_initial() -> State:
    return LocalStateStore().read_or_initial()


def save_state(state: State) -> Path:
    return LocalStateStore().write(state)
