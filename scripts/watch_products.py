#!/usr/bin/env python3
"""Run a greenbox product cache and print the list after every refresh.

Usage
-----
Point the cache at a products endpoint and run::

    export GREENBOX_PRODUCTS_URL="http://localhost:4000/api/products"
    python scripts/watch_products.py

Or try it without any server::

    python scripts/watch_products.py --source memory --interval 5

Options::

    --source {http,memory}   Product source (default: GREENBOX_PRODUCT_SOURCE or http)
    --url URL                Products endpoint (default: GREENBOX_PRODUCTS_URL)
    --interval SECONDS       Refresh interval (default: GREENBOX_REFRESH_INTERVAL or 600)
    --cycles N               Exit after N refreshes (default: run until interrupted)
    --json                   Print each list as JSON
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any

# Allow running from the repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from greenbox import DisplayProduct, GreenboxConfig, GreenboxError, ProductCache, build_product_source  # noqa: E402


def _section(title: str) -> str:
    line = "=" * 60
    return f"\n{line}\n  {title}\n{line}"


def _print_products(products: tuple[DisplayProduct, ...], *, json_mode: bool) -> None:
    if json_mode:
        print(json.dumps([p.model_dump() for p in products], indent=2, ensure_ascii=False))
        return
    print(_section(f"{len(products)} products"))
    width = max((len(p.name) for p in products), default=0)
    for product in products:
        print(f"  {product.name:<{width}}  {product.price:>10}  ({product.id})")


async def main() -> None:
    parser = argparse.ArgumentParser(
        description="Run a greenbox product cache and print it after every refresh.",
    )
    parser.add_argument("--source", choices=("http", "memory"), help="Product source")
    parser.add_argument("--url", help="Products endpoint URL")
    parser.add_argument("--interval", type=float, help="Refresh interval in seconds")
    parser.add_argument("--cycles", type=int, default=0, help="Exit after N refreshes (0 = forever)")
    parser.add_argument("--json", action="store_true", dest="json_mode", help="Output JSON")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    else:
        logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    overrides: dict[str, Any] = {}
    if args.source:
        overrides["product_source"] = args.source
    if args.url:
        overrides["products_url"] = args.url
    if args.interval:
        overrides["refresh_interval"] = args.interval

    try:
        config = GreenboxConfig.from_env(**overrides)
    except GreenboxError as exc:
        parser.error(str(exc))

    done = asyncio.Event()
    seen = 0

    def on_refresh(products: tuple[DisplayProduct, ...]) -> None:
        nonlocal seen
        _print_products(products, json_mode=args.json_mode)
        seen += 1
        if args.cycles and seen > args.cycles:
            done.set()

    source = build_product_source(config)
    try:
        cache = ProductCache.from_config(config, source, on_refresh=on_refresh)
        try:
            async with cache:
                await done.wait()
        except GreenboxError as exc:
            print(f"!! {exc}", file=sys.stderr)
            raise SystemExit(1) from exc
    finally:
        close = getattr(source, "close", None)
        if close is not None:
            await close()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        pass
