"""Per-stack settings."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class StackSettings(BaseModel):
    """Behaviour switches shared by a stack and the views it hands out."""

    model_config = ConfigDict(frozen=True)

    # Raise BorrowError on stale iterators and RefMut handles.
    check_borrows: bool = True
    # clear() logs at DEBUG when it releases at least this many nodes.
    log_teardown_threshold: int = Field(default=10_000, ge=0)


DEFAULT_SETTINGS = StackSettings()
