"""Data models for greenbox products."""

from greenbox.models._base import GreenboxBaseModel
from greenbox.models.product import DisplayProduct, RawProduct

__all__ = [
    "DisplayProduct",
    "GreenboxBaseModel",
    "RawProduct",
]
