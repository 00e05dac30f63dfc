"""Deterministic in-memory product source for tests and local development."""

from __future__ import annotations

import random
from collections.abc import Iterable

from greenbox._constants import DEFAULT_MEMORY_SIZE
from greenbox.models.product import RawProduct

_ADJECTIVES: tuple[str, ...] = (
    "BLUE",
    "green",
    "Organic",
    "fresh",
    "RED",
    "wild",
    "Golden",
    "smoked",
    "sweet",
    "BITTER",
)
_NOUNS: tuple[str, ...] = (
    "SOAP",
    "apples",
    "Kale",
    "honey",
    "TEA",
    "lentils",
    "Basil",
    "oat milk",
    "pears",
    "COFFEE",
)

# Price bounds in cents.
_MIN_PRICE = 50
_MAX_PRICE = 9_999


class InMemoryProductSource:
    """Product source that never leaves the process.

    With *products* every fetch returns a copy of that fixed list.
    Otherwise each fetch generates *size* pseudo-random products from a
    ``random.Random`` seeded with *seed*, so two sources built with the
    same seed produce the same sequence of lists.
    """

    def __init__(
        self,
        products: Iterable[RawProduct] | None = None,
        *,
        seed: int | None = None,
        size: int = DEFAULT_MEMORY_SIZE,
    ) -> None:
        if size <= 0:
            raise ValueError(f"size must be positive, got {size}")
        self._products = list(products) if products is not None else None
        self._rng = random.Random(seed)
        self._size = size
        self.fetch_count = 0

    def _generate(self) -> list[RawProduct]:
        rng = self._rng
        return [
            RawProduct(
                id=f"{rng.getrandbits(64):016x}",
                name=f"{rng.choice(_ADJECTIVES)} {rng.choice(_NOUNS)}",
                price=rng.randint(_MIN_PRICE, _MAX_PRICE),
            )
            for _ in range(self._size)
        ]

    async def fetch_products(self) -> list[RawProduct]:
        self.fetch_count += 1
        if self._products is not None:
            return list(self._products)
        return self._generate()
