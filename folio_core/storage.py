"""
On-disk layout for a portfolio: the name on the first line, then one
"<symbol>,<quantity>" record per line. Prices are never written.
"""

from __future__ import annotations

import math
from pathlib import Path
from typing import Iterable

from folio_core.errors import PersistenceError

SEPARATOR = ","


def format_records(name: str, positions: Iterable[tuple[str, float]]) -> str:
    if not name or name != name.strip() or "\n" in name or "\r" in name:
        raise PersistenceError(f"Portfolio name cannot be stored: {name!r}")
    lines = [name]
    for symbol, quantity in positions:
        quantity = float(quantity)
        if not (math.isfinite(quantity) and quantity > 0):
            raise PersistenceError(f"Quantity for {symbol} cannot be stored: {quantity!r}")
        # repr keeps the shortest string that parses back to the same float
        lines.append(f"{symbol}{SEPARATOR}{quantity!r}")
    return "".join(line + "\n" for line in lines)


def parse_records(text: str, *, source: str = "<string>") -> tuple[str, dict[str, float]]:
    """Parse file contents into (name, {symbol: quantity}). Blank lines are ignored."""
    lines = text.splitlines()
    if not lines or not lines[0].strip():
        raise PersistenceError(f"{source}: missing portfolio name")
    name = lines[0]
    positions: dict[str, float] = {}
    for lineno, line in enumerate(lines[1:], start=2):
        if not line.strip():
            continue
        parts = line.strip().split(SEPARATOR)
        if len(parts) != 2 or not parts[0]:
            raise PersistenceError(f"{source}:{lineno}: expected '<symbol>,<quantity>', got {line!r}")
        symbol, raw_quantity = parts
        try:
            quantity = float(raw_quantity)
        except ValueError as exc:
            raise PersistenceError(f"{source}:{lineno}: bad quantity {raw_quantity!r}") from exc
        if not (math.isfinite(quantity) and quantity > 0):
            raise PersistenceError(f"{source}:{lineno}: quantity must be positive, got {raw_quantity!r}")
        positions[symbol] = quantity
    return name, positions


def write_portfolio_file(path: str | Path, name: str, positions: Iterable[tuple[str, float]]) -> None:
    """Overwrite path with the portfolio records."""
    text = format_records(name, positions)
    try:
        with open(path, "w", encoding="utf-8", newline="\n") as fh:
            fh.write(text)
    except OSError as exc:
        raise PersistenceError(f"Could not write portfolio file {path}: {exc}") from exc


def read_portfolio_file(path: str | Path) -> tuple[str, dict[str, float]]:
    try:
        with open(path, encoding="utf-8") as fh:
            text = fh.read()
    except OSError as exc:
        raise PersistenceError(f"Could not read portfolio file {path}: {exc}") from exc
    return parse_records(text, source=str(path))
