"""Unit tests for aggregation of stat rows."""

import itertools
import math

import pytest

from wpstats.aggregation import (
    aggregate,
    aggregate_by_player,
    efficiency,
    goalkeeper_totals,
    per_match_average,
    round_half_up,
    sum_field,
    top_players,
)
from wpstats.models import Match
from wpstats.normalize import normalize_rows


@pytest.fixture
def rows():
    return normalize_rows([
        {'match_id': 1, 'player_id': 7, 'goles_totales': 3, 'tiros_totales': 5, 'acciones_asistencias': 2},
        {'match_id': 2, 'player_id': 7, 'goles_totales': 1, 'tiros_totales': 5, 'faltas_exp_20_1c1': 1},
        {'match_id': 1, 'player_id': 9, 'goles_totales': 2, 'tiros_totales': 3, 'faltas_penalti': 1},
        {'match_id': 2, 'player_id': 9, 'goles_totales': 0.1, 'tiros_totales': 0.2, 'acciones_asistencias': 2},
    ])


class TestRatios:
    """Tests for efficiency and averages."""

    def test_efficiency_basic(self):
        assert efficiency(4, 10) == 40

    def test_efficiency_rounds_half_up(self):
        assert efficiency(1, 8) == 13  # 12.5
        assert efficiency(5, 8) == 63  # 62.5

    @pytest.mark.parametrize('denominator', [0, 0.0, -1])
    def test_efficiency_zero_guard(self, denominator):
        assert efficiency(5, denominator) == 0

    def test_round_half_up_negative(self):
        """Negative halves round toward +infinity."""
        assert round_half_up(-2.5) == -2
        assert round_half_up(-2.6) == -3
        assert round_half_up(2.4) == 2

    def test_per_match_average(self):
        assert per_match_average(7, 2) == '3.5'
        assert per_match_average(1, 3) == '0.3'

    def test_per_match_average_no_matches(self):
        assert per_match_average(7, 0) == '0.0'


class TestAggregate:
    """Tests for summing rows into totals."""

    def test_concrete_scenario(self):
        """Two matches of goals/shots give 4/10 and 40% efficiency."""
        rows = normalize_rows([
            {'match_id': 1, 'player_id': 1, 'goles_totales': 3, 'tiros_totales': 5},
            {'match_id': 2, 'player_id': 1, 'goles_totales': 1, 'tiros_totales': 5},
        ])
        result = aggregate(rows)
        assert result.totals == {'goles_totales': 4, 'tiros_totales': 10}
        assert result.derived['eficiencia_tiro'] == 40
        assert result.match_count == 2
        assert result.averages['goles_por_partido'] == '2.0'

    def test_order_independent(self, rows):
        """Every permutation of the rows produces identical totals."""
        expected = aggregate(rows)
        for permutation in itertools.permutations(rows):
            assert aggregate(list(permutation)) == expected

    def test_idempotent(self, rows):
        assert aggregate(rows) == aggregate(rows)

    def test_filter_by_player(self, rows):
        result = aggregate(rows, player_id=7)
        assert result.totals['goles_totales'] == 4
        assert result.totals['acciones_asistencias'] == 2
        assert result.match_count == 2

    def test_filter_by_match(self, rows):
        result = aggregate(rows, match_id=1)
        assert result.totals['goles_totales'] == 5
        assert result.match_count == 1

    def test_requested_keys_missing_are_zero(self, rows):
        result = aggregate(rows, keys=['goles_totales', 'acciones_bloqueo'])
        assert set(result.totals) == {'goles_totales', 'acciones_bloqueo'}
        assert result.totals['acciones_bloqueo'] == 0

    def test_requested_keys_do_not_change_derived(self):
        """Derived ratios and averages come from the rows, not the requested keys."""
        rows = normalize_rows([
            {'match_id': 1, 'player_id': 1, 'goles_totales': 3, 'tiros_totales': 5, 'faltas_penalti': 2},
            {'match_id': 2, 'player_id': 1, 'goles_totales': 1, 'tiros_totales': 5},
        ])
        full = aggregate(rows)
        narrowed = aggregate(rows, keys=['goles_totales'])

        assert narrowed.totals == {'goles_totales': 4}
        assert narrowed.derived['eficiencia_tiro'] == 40
        assert narrowed.derived['total_exclusiones'] == 2
        assert narrowed.derived == full.derived
        assert narrowed.averages == full.averages

    def test_empty_rows_have_no_division_artifacts(self):
        result = aggregate([])
        assert result.match_count == 0
        assert all(value == 0 for value in result.derived.values())
        assert all(value == '0.0' for value in result.averages.values())

    def test_zero_denominators(self):
        rows = normalize_rows([{'match_id': 1, 'player_id': 1, 'goles_totales': 2}])
        result = aggregate(rows)
        for value in result.derived.values():
            assert math.isfinite(value)
        assert result.derived['eficiencia_tiro'] == 0

    def test_total_exclusiones(self, rows):
        assert aggregate(rows).derived['total_exclusiones'] == 2

    def test_man_advantage_efficiency(self):
        rows = normalize_rows([{
            'match_id': 1,
            'player_id': 1,
            'goles_hombre_mas': 2,
            'tiros_hombre_mas': 1,
            'tiros_penalti_fallado': 1,
        }])
        assert aggregate(rows).derived['eficiencia_hombre_mas'] == 50

    def test_missing_value_reads_zero(self, rows):
        assert aggregate(rows).get('portero_paradas_totales') == 0

    def test_sum_field_floats(self, rows):
        assert sum_field(rows, 'goles_totales') == pytest.approx(6.1)


class TestPerPlayer:
    """Tests for per-player grouping and leaders."""

    def test_aggregate_by_player(self, rows):
        result = aggregate_by_player(rows)
        assert list(result) == [7, 9]
        assert result[9].totals['acciones_asistencias'] == 2

    def test_rows_without_player_skipped(self):
        rows = normalize_rows([{'match_id': 1, 'goles_totales': 4}])
        assert aggregate_by_player(rows) == {}

    def test_top_players_ties_by_id(self, rows):
        totals = aggregate_by_player(rows)
        assert top_players(totals, 'acciones_asistencias') == [(7, 2.0), (9, 2.0)]

    def test_top_players_skips_zero_and_limits(self, rows):
        totals = aggregate_by_player(rows)
        assert top_players(totals, 'faltas_penalti') == [(9, 1.0)]
        assert top_players(totals, 'goles_totales', limit=1) == [(7, 4.0)]


class TestGoalkeeperTotals:
    """Tests for goalkeeper goals conceded from final scores."""

    def test_goals_conceded_from_scores(self):
        matches = [
            Match(id=1, opponent='A', home_score=8, away_score=5, is_home=True),
            Match(id=2, opponent='B', home_score=11, away_score=7, is_home=False),
            Match(id=3, opponent='C', home_score=3, away_score=3, is_home=True),
        ]
        rows = normalize_rows([
            {'match_id': 1, 'player_id': 1, 'portero_paradas_totales': 9},
            {'match_id': 2, 'player_id': 1, 'portero_paradas_totales': 5},
        ])
        result = goalkeeper_totals(rows, matches)
        assert result.totals['portero_rival_goles_totales'] == 16
        assert result.derived['porcentaje_paradas_real'] == 47  # 14 / 30
        assert result.averages['goles_recibidos_por_partido'] == '8.0'

    def test_no_matches(self):
        result = goalkeeper_totals([], [])
        assert result.totals['portero_rival_goles_totales'] == 0
        assert result.derived['porcentaje_paradas_real'] == 0
