"""Record transformer: upstream products to their display form.

Every function here is pure; the cache applies them to whole fetches.
"""

from __future__ import annotations

from collections.abc import Iterable

from greenbox.models.product import DisplayProduct, RawProduct

_CURRENCY_SYMBOL = "$"
_MINOR_UNITS_PER_MAJOR = 100


def capitalize_name(name: str) -> str:
    """Lowercase *name*, then uppercase only its first character.

    ``capitalize_name("BLUE SOAP") == "Blue soap"``; an empty string is
    returned unchanged.
    """
    lowered = name.lower()
    return lowered[:1].upper() + lowered[1:]


def price_to_money(price: int) -> str:
    """Render a price in cents as a currency string (``1253`` -> ``"$12.53"``)."""
    return f"{_CURRENCY_SYMBOL}{price / _MINOR_UNITS_PER_MAJOR:.2f}"


def to_display_product(raw: RawProduct) -> DisplayProduct:
    return DisplayProduct(
        id=raw.id,
        name=capitalize_name(raw.name),
        price=price_to_money(raw.price),
    )


def to_display_products(raws: Iterable[RawProduct]) -> tuple[DisplayProduct, ...]:
    """Transform a whole fetch, preserving upstream order."""
    return tuple(to_display_product(raw) for raw in raws)
