"""Coercion of raw persisted stat rows into strict numeric mappings."""

import math
import numbers
from collections.abc import Iterable, Mapping
from typing import Any, Optional

from .models import StatRow

# Columns that identify a row rather than count something
ID_COLUMNS = frozenset({'id', 'match_id', 'player_id', 'club_id'})


def to_number(value: Any) -> float:
    """
    Coerce any value to a finite float.

    Numbers and numeric strings are returned as floats. Everything else
    (None, empty strings, NaN, infinities, objects) becomes 0.0.
    """
    if isinstance(value, bool):
        return 1.0 if value else 0.0

    if isinstance(value, numbers.Number):
        try:
            number = float(value)
        except (OverflowError, TypeError, ValueError):
            return 0.0
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return 0.0
        try:
            number = float(text)
        except ValueError:
            return 0.0
    else:
        return 0.0

    if not math.isfinite(number):
        return 0.0
    return number


def _to_id(value: Any) -> Optional[int]:
    number = to_number(value)
    if not number or number != int(number):
        return None
    return int(number)


def normalize_values(raw: Mapping) -> dict[str, float]:
    """Coerce every stat column of a raw row, skipping identifiers and joined records."""
    values = {}
    for key, value in raw.items():
        key = str(key)
        if key in ID_COLUMNS or isinstance(value, (Mapping, list, tuple)):
            continue
        values[key] = to_number(value)
    return values


def normalize_row(raw: Any) -> StatRow:
    """
    Build a StatRow from a raw record of unknown shape.

    Args:
        raw: Record as returned by the store (usually a dict)

    Returns:
        StatRow with int identifiers (or None) and numeric values.
        Non-mapping input yields an empty row.
    """
    if not isinstance(raw, Mapping):
        return StatRow(player_id=None, match_id=None)

    return StatRow(
        player_id=_to_id(raw.get('player_id')),
        match_id=_to_id(raw.get('match_id')),
        values=normalize_values(raw),
    )


def normalize_rows(raws: Optional[Iterable[Any]]) -> list[StatRow]:
    """Normalize a sequence of raw records."""
    if raws is None:
        return []
    return [normalize_row(raw) for raw in raws]
