"""Base model for greenbox value types.

Upstream records inherit from :class:`GreenboxBaseModel` which provides:

* ``frozen=True`` so parsed records are immutable values.
* ``extra="ignore"`` so additional upstream keys never break parsing.
* A ``raw`` dict that captures the original payload.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class GreenboxBaseModel(BaseModel):
    """Base for models parsed from upstream payloads."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
    )

    raw: dict[str, Any] = Field(default_factory=dict, repr=False, exclude=True)
    """Original upstream record."""

    @model_validator(mode="before")
    @classmethod
    def _stash_raw(cls, values: Any) -> Any:
        """Stash the raw payload unless the caller passed ``raw=`` explicitly."""
        if not isinstance(values, dict):
            return values
        if "raw" in values:
            return values
        return {**values, "raw": dict(values)}
