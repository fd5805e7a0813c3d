"""Validation functions for weights, favorites, matches and computed totals."""

import math
from collections.abc import Iterable, Mapping
from typing import Any

from .constants import STAT_KEYS
from .models import AggregatedTotals, Match, MatchComparisonTotals


def validate_weight_map(weights: Mapping[Any, Any]) -> list[str]:
    """
    Check a weight map before it is saved.

    Checks:
    - Keys belong to the stat vocabulary
    - Weights are finite numbers
    - Weights stay within -100..100

    Returns:
        List of warning messages (empty if valid)
    """
    warnings = []

    for key, weight in weights.items():
        if str(key).strip() not in STAT_KEYS:
            warnings.append(f'Unknown stat key: {key!r}')

        if isinstance(weight, bool) or not isinstance(weight, (int, float)):
            warnings.append(f'Weight for {key} is not a number: {weight!r}')
            continue
        if not math.isfinite(weight):
            warnings.append(f'Weight for {key} is not finite')
        elif abs(weight) > 100:
            warnings.append(f'Weight for {key} is {weight} (outside -100..100)')

    return warnings


def validate_favorite_keys(keys: Iterable[Any]) -> list[str]:
    """Report unknown, blank and duplicated favorite keys."""
    warnings = []
    seen = set()
    duplicates = set()

    for key in keys:
        text = str(key).strip() if key is not None else ''
        if not text:
            warnings.append('Blank favorite key')
            continue
        if text not in STAT_KEYS:
            warnings.append(f'Unknown stat key: {text!r}')
        if text in seen:
            duplicates.add(text)
        seen.add(text)

    if duplicates:
        warnings.append(f'Duplicate favorite keys: {", ".join(sorted(duplicates))}')

    return warnings


def validate_match(match: Match) -> list[str]:
    """Check that a match's metadata is usable for comparison."""
    errors = []

    if match.home_score < 0 or match.away_score < 0:
        errors.append(f'Match {match.id} has a negative score ({match.home_score}-{match.away_score})')
    if not match.opponent or match.opponent == '-':
        errors.append(f'Match {match.id} has no opponent')
    if match.jornada is not None and match.jornada < 0:
        errors.append(f'Match {match.id} has invalid jornada {match.jornada}')

    return errors


def validate_totals(totals: AggregatedTotals) -> list[str]:
    """
    Sanity-check aggregated totals.

    Checks:
    - No NaN or infinite totals
    - Percentages within 0..100
    - Goals never exceed shots
    """
    warnings = []

    for key, value in totals.totals.items():
        if not math.isfinite(value):
            warnings.append(f'{key} total is not finite')
        elif value < 0:
            warnings.append(f'{key} total is negative ({value})')

    for key, value in totals.derived.items():
        if key.startswith(('eficiencia', 'porcentaje')) and not 0 <= value <= 100:
            warnings.append(f'{key} is {value}% (outside 0-100)')

    goals = totals.get('goles_totales')
    shots = totals.get('tiros_totales')
    if goals > shots:
        warnings.append(f'goles_totales ({goals:g}) exceeds tiros_totales ({shots:g})')

    return warnings


def validate_match_totals(totals: MatchComparisonTotals) -> list[str]:
    """Sanity-check a match comparison record."""
    warnings = []

    for field in (
        'eficiencia_tiro',
        'eficiencia_hombre_mas',
        'eficiencia_defensiva_hombre_menos',
        'porcentaje_paradas',
    ):
        value = getattr(totals, field)
        if not 0 <= value <= 100:
            warnings.append(f'{totals.jornada} {field} is {value}% (outside 0-100)')

    if totals.goles > totals.tiros:
        warnings.append(f'{totals.jornada} has more goals ({totals.goles:g}) than shots ({totals.tiros:g})')

    return warnings
