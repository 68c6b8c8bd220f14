from __future__ import annotations

from datetime import timedelta
from typing import Any, Dict

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictInt,
    ValidationError,
    field_serializer,
    field_validator,
)


_NANOS_PER_SEC = 1_000_000_000


class WireDuration(BaseModel):
    """On-disk form of a duration since the UNIX epoch: whole seconds plus nanoseconds."""

    model_config = ConfigDict(extra="forbid")

    secs: StrictInt = Field(ge=0)
    nanos: StrictInt = Field(ge=0, lt=_NANOS_PER_SEC)

    @classmethod
    def from_timedelta(cls, delta: timedelta) -> "WireDuration":
        secs = delta.days * 86_400 + delta.seconds
        return cls(secs=secs, nanos=delta.microseconds * 1_000)

    def to_timedelta(self) -> timedelta:
        # timedelta resolution is one microsecond
        return timedelta(seconds=self.secs, microseconds=self.nanos // 1_000)


class State(BaseModel):
    """
    Persistent agent state serialized to YAML on the local disk.

    Fields
    - images: map from image ID (e.g., "img:sha256:abc") to the last time the
      image was used, expressed as a duration since the UNIX epoch.

    Notes
    - Unknown fields are rejected, both at the top level and inside each
      duration, so a file written by a different schema fails loudly instead
      of being silently reinterpreted.
    - Durations are stored as {secs, nanos} mappings; see `WireDuration`.
    """

    model_config = ConfigDict(extra="forbid", strict=True)

    images: Dict[str, timedelta] = Field(
        description="Map of image IDs to last use time since the UNIX epoch",
    )

    @field_validator("images", mode="before")
    @classmethod
    def _decode_durations(cls, value: Any) -> Any:
        if not isinstance(value, dict):
            return value  # let pydantic report the type error
        decoded: Dict[Any, Any] = {}
        for key, raw in value.items():
            if isinstance(raw, dict):
                try:
                    raw = WireDuration.model_validate(raw).to_timedelta()
                except (ValidationError, OverflowError) as ex:
                    raise ValueError(f"invalid duration for image {key!r}: {ex}") from ex
            decoded[key] = raw
        return decoded

    @field_validator("images")
    @classmethod
    def _check_non_negative(cls, value: Dict[str, timedelta]) -> Dict[str, timedelta]:
        for key, delta in value.items():
            if delta < timedelta(0):
                raise ValueError(f"negative last use time for image {key!r}")
        return value

    @field_serializer("images")
    def _encode_durations(self, images: Dict[str, timedelta]) -> Dict[str, Dict[str, int]]:
        return {key: WireDuration.from_timedelta(delta).model_dump() for key, delta in images.items()}

    @classmethod
    def empty(cls) -> "State":
        """Convenience constructor for a fresh, empty state."""
        return cls(images={})


def initial_state() -> State:
    """Return the state the agent starts with when nothing was loaded from disk."""
    return State.empty()
