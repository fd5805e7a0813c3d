"""Per-match totals for the cross-match comparison table."""

from collections.abc import Iterable, Sequence
from typing import Optional

from .aggregation import efficiency, filter_rows, sum_field
from .models import Match, MatchComparisonTotals, StatRow

# Fields where the lowest value is the best one
INVERSE_FIELDS = frozenset({
    'perdidas',
    'goles_recibidos',
    'goles_recibidos_hombre_menos',
})


def calculate_match_totals(match: Match, rows: Iterable[StatRow]) -> MatchComparisonTotals:
    """
    Build the comparison record for one match.

    Only rows belonging to `match` are summed. Goals conceded are read from
    the final score using the home/away flag, never from the stat rows.

    Args:
        match: Match metadata
        rows: Stat rows (may include other matches)

    Returns:
        MatchComparisonTotals for the match
    """
    stats = filter_rows(rows, match_id=match.id)

    def total(key: str) -> float:
        return sum_field(stats, key)

    goles = total('goles_totales')
    tiros = total('tiros_totales')

    goles_hombre_mas = total('goles_hombre_mas')
    fallos_hombre_mas = total('tiros_hombre_mas') + total('tiros_penalti_fallado')

    recuperaciones = total('acciones_recuperacion')
    perdidas = total('acciones_perdida_poco')

    goles_recibidos = match.goals_conceded

    goles_hombre_menos = total('portero_goles_hombre_menos')
    paradas_hombre_menos = total('portero_paradas_hombre_menos')

    paradas = total('portero_paradas_totales')

    return MatchComparisonTotals(
        match_id=match.id,
        jornada=f'J{match.jornada if match.jornada is not None else "-"}',
        opponent=match.opponent,
        result=f'{match.home_score}-{match.away_score}',
        goles=goles,
        tiros=tiros,
        eficiencia_tiro=efficiency(goles, tiros),
        asistencias=total('acciones_asistencias'),
        goles_hombre_mas=goles_hombre_mas,
        fallos_hombre_mas=fallos_hombre_mas,
        eficiencia_hombre_mas=efficiency(goles_hombre_mas, goles_hombre_mas + fallos_hombre_mas),
        bloqueos=total('acciones_bloqueo'),
        recuperaciones=recuperaciones,
        perdidas=perdidas,
        balance_posesion=recuperaciones - perdidas,
        goles_recibidos=goles_recibidos,
        goles_recibidos_hombre_menos=goles_hombre_menos,
        paradas_hombre_menos=paradas_hombre_menos,
        eficiencia_defensiva_hombre_menos=efficiency(
            paradas_hombre_menos, paradas_hombre_menos + goles_hombre_menos
        ),
        paradas_portero=paradas,
        paradas_con_recuperacion=total('portero_paradas_parada_recup'),
        porcentaje_paradas=efficiency(paradas, paradas + goles_recibidos),
    )


def sort_matches(matches: Iterable[Match]) -> list[Match]:
    """Order matches by jornada (unnumbered last), then by date."""
    return sorted(
        matches,
        key=lambda m: (
            m.jornada if m.jornada is not None else 9999,
            m.match_date or '',
            m.id,
        ),
    )


def compare_matches(
    matches: Iterable[Match],
    rows: Iterable[StatRow],
    match_ids: Optional[Sequence[int]] = None,
) -> list[MatchComparisonTotals]:
    """Comparison records for the selected matches (all when `match_ids` is None)."""
    rows = list(rows)
    selected = [m for m in matches if match_ids is None or m.id in match_ids]
    return [calculate_match_totals(m, rows) for m in sort_matches(selected)]


def best_match_ids(
    comparisons: Sequence[MatchComparisonTotals],
    field: str,
    inverse: Optional[bool] = None,
) -> list[int]:
    """
    Ids of the matches holding the best value of a field.

    Best is the maximum, or the minimum for inverse fields. `inverse`
    defaults to whether the field is listed in INVERSE_FIELDS.
    """
    if not comparisons:
        return []
    if inverse is None:
        inverse = field in INVERSE_FIELDS

    values = [getattr(c, field) for c in comparisons]
    best = min(values) if inverse else max(values)
    return [c.match_id for c, value in zip(comparisons, values) if value == best]
