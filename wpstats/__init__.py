from .models import (
    AggregatedTotals,
    KeyDiff,
    Match,
    MatchComparisonTotals,
    PlayerRanking,
    StatRow,
    WeightDiff,
)
from .normalize import normalize_row, normalize_rows, to_number
from .aggregation import (
    aggregate,
    aggregate_by_player,
    efficiency,
    goalkeeper_totals,
    per_match_average,
    top_players,
)
from .scoring import (
    UNCONFIGURED,
    is_configured,
    normalize_weights,
    rank_players,
    score_breakdown,
    weighted_score,
)
from .reconcile import (
    DraftState,
    FavoriteDraft,
    apply_key_diff,
    apply_weight_diff,
    diff_keys,
    diff_weights,
    normalize_keys,
)
from .match_comparison import (
    INVERSE_FIELDS,
    best_match_ids,
    calculate_match_totals,
    compare_matches,
    sort_matches,
)
from .store import JsonFileStore, PersistenceError, StatStore, load_store
from .preferences import FavoritesSession, LoadState, WeightsSession

__all__ = [
    # Models
    'AggregatedTotals',
    'KeyDiff',
    'Match',
    'MatchComparisonTotals',
    'PlayerRanking',
    'StatRow',
    'WeightDiff',
    # Normalization
    'normalize_row',
    'normalize_rows',
    'to_number',
    # Aggregation
    'aggregate',
    'aggregate_by_player',
    'efficiency',
    'goalkeeper_totals',
    'per_match_average',
    'top_players',
    # Weighted scoring
    'UNCONFIGURED',
    'is_configured',
    'normalize_weights',
    'rank_players',
    'score_breakdown',
    'weighted_score',
    # Diff reconciliation
    'DraftState',
    'FavoriteDraft',
    'apply_key_diff',
    'apply_weight_diff',
    'diff_keys',
    'diff_weights',
    'normalize_keys',
    # Match comparison
    'INVERSE_FIELDS',
    'best_match_ids',
    'calculate_match_totals',
    'compare_matches',
    'sort_matches',
    # Storage
    'JsonFileStore',
    'PersistenceError',
    'StatStore',
    'load_store',
    # Preference sessions
    'FavoritesSession',
    'LoadState',
    'WeightsSession',
]
