"""Aggregation of per-match stat rows into totals, efficiencies and averages."""

import logging
import math
from collections import defaultdict
from collections.abc import Iterable, Mapping, Sequence
from typing import Optional

from .constants import (
    AVERAGE_KEYS,
    EFFICIENCY_RATIOS,
    EXCLUSION_KEYS,
    RIVAL_GOALS_KEY,
)
from .models import AggregatedTotals, Match, StatRow

logger = logging.getLogger('wpstats.aggregation')


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves toward +infinity (2.5 -> 3, -2.5 -> -2)."""
    return math.floor(value + 0.5)


def efficiency(numerator: float, denominator: float) -> int:
    """
    Percentage of numerator over denominator, rounded to an integer.

    Returns 0 when the denominator is not positive.
    """
    if denominator <= 0:
        return 0
    return round_half_up(numerator / denominator * 100)


def per_match_average(total: float, match_count: int) -> str:
    """Format total / match_count with one decimal ('0.0' when there are no matches)."""
    if match_count <= 0:
        return '0.0'
    return f'{total / match_count:.1f}'


def sum_field(rows: Iterable[StatRow], key: str) -> float:
    """Sum one stat key across rows (missing values count as 0)."""
    return math.fsum(row.get(key) for row in rows)


def filter_rows(
    rows: Iterable[StatRow],
    match_id: Optional[int] = None,
    player_id: Optional[int] = None,
) -> list[StatRow]:
    """Keep the rows matching the given match and/or player."""
    return [
        row
        for row in rows
        if (match_id is None or row.match_id == match_id)
        and (player_id is None or row.player_id == player_id)
    ]


def _derive(result: AggregatedTotals, rows: Sequence[StatRow]) -> None:
    # Read from the rows, not totals: independent of the requested keys.
    for name, (numerator_key, denominator_keys) in EFFICIENCY_RATIOS.items():
        denominator = math.fsum(sum_field(rows, k) for k in denominator_keys)
        result.derived[name] = efficiency(sum_field(rows, numerator_key), denominator)

    for name, key in AVERAGE_KEYS.items():
        result.averages[name] = per_match_average(sum_field(rows, key), result.match_count)

    result.derived['total_exclusiones'] = int(
        math.fsum(sum_field(rows, k) for k in EXCLUSION_KEYS)
    )


def aggregate(
    rows: Iterable[StatRow],
    keys: Optional[Sequence[str]] = None,
    match_id: Optional[int] = None,
    player_id: Optional[int] = None,
) -> AggregatedTotals:
    """
    Sum stat rows into totals with derived efficiencies and per-match averages.

    The result does not depend on row order.

    Args:
        rows: Normalized stat rows
        keys: Stat keys to total (default: every key present in the rows)
        match_id: Only aggregate rows for this match
        player_id: Only aggregate rows for this player

    Returns:
        AggregatedTotals with totals sorted by key
    """
    selected = filter_rows(rows, match_id=match_id, player_id=player_id)

    if keys is None:
        wanted = sorted({key for row in selected for key in row.values})
    else:
        wanted = sorted(set(keys))

    totals = {key: sum_field(selected, key) for key in wanted}
    match_ids = {row.match_id for row in selected if row.match_id is not None}
    result = AggregatedTotals(totals=totals, match_count=len(match_ids))
    _derive(result, selected)

    logger.debug(f'Aggregated {len(selected)} rows over {result.match_count} matches')
    return result


def aggregate_by_player(rows: Iterable[StatRow]) -> dict[int, AggregatedTotals]:
    """Aggregate rows separately for each player id (rows without one are skipped)."""
    grouped: dict[int, list[StatRow]] = defaultdict(list)
    for row in rows:
        if row.player_id is not None:
            grouped[row.player_id].append(row)

    return {player_id: aggregate(grouped[player_id]) for player_id in sorted(grouped)}


def goalkeeper_totals(rows: Iterable[StatRow], matches: Iterable[Match]) -> AggregatedTotals:
    """
    Aggregate a goalkeeper's rows and add goals conceded from final scores.

    Goals conceded come from the opponent's score of every match the
    goalkeeper has a row for, not from the recorded stat columns.
    """
    rows = list(rows)
    result = aggregate(rows)

    played = {row.match_id for row in rows}
    rival_goals = sum(m.goals_conceded for m in matches if m.id in played)
    result.totals[RIVAL_GOALS_KEY] = float(rival_goals)

    saves = result.get('portero_paradas_totales')
    result.derived['porcentaje_paradas_real'] = efficiency(saves, saves + rival_goals)
    result.averages['goles_recibidos_por_partido'] = per_match_average(
        rival_goals, result.match_count
    )
    return result


def top_players(
    totals_by_player: Mapping[int, AggregatedTotals],
    key: str,
    limit: int = 3,
) -> list[tuple[int, float]]:
    """
    Leaders for one stat key.

    Sorted by total descending, ties broken by player id ascending.
    Players with a zero total are left out.
    """
    entries = [
        (player_id, totals.get(key))
        for player_id, totals in totals_by_player.items()
        if totals.get(key) != 0
    ]
    entries.sort(key=lambda entry: (-entry[1], entry[0]))
    return entries[:limit]
