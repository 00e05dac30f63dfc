"""Product value types: upstream records and their display form."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, StrictInt, field_validator

from greenbox.models._base import GreenboxBaseModel


class RawProduct(GreenboxBaseModel):
    """A product exactly as a product source delivered it.

    Parameters
    ----------
    id : str
        Opaque identifier, kept verbatim.  Numeric upstream ids are coerced
        to ``str``; blank ids are rejected.
    name : str
        Free-form product name.
    price : int
        Price in minor currency units (cents).
    """

    id: str
    name: str
    price: StrictInt

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> Any:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("id")
    @classmethod
    def _require_id(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("id must be non-empty")
        return value

    def __hash__(self) -> int:
        # raw is debugging context, not part of the product value
        return hash((self.id, self.name, self.price))


class DisplayProduct(BaseModel):
    """A transformed, display-ready product held by the cache."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str
    name: str
    price: str
