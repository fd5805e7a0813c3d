"""Weighted performance scoring from aggregated totals and per-user weights."""

import math
from collections.abc import Mapping
from typing import Any, Union

from .models import AggregatedTotals, PlayerRanking
from .normalize import to_number


class _Unconfigured:
    """Score of a user who has not weighted any statistic."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return 'UNCONFIGURED'


UNCONFIGURED = _Unconfigured()

Score = Union[float, _Unconfigured]


def is_configured(score: Score) -> bool:
    return score is not UNCONFIGURED


def normalize_weights(weights: Mapping[Any, Any] | None) -> dict[str, float]:
    """
    Clean a raw weight map.

    Keys are stringified and trimmed (empty keys dropped), values coerced to
    numbers, and zero weights removed since they never contribute to a score.
    """
    normalized: dict[str, float] = {}
    for key, value in (weights or {}).items():
        if key is None:
            continue
        key = str(key).strip()
        weight = to_number(value)
        if key and weight != 0:
            normalized[key] = weight
    return normalized


def _total(totals: AggregatedTotals | Mapping[str, Any], key: str) -> float:
    if isinstance(totals, AggregatedTotals):
        return totals.get(key)
    return to_number(totals.get(key))


def score_breakdown(
    totals: AggregatedTotals | Mapping[str, Any],
    weights: Mapping[Any, Any] | None,
) -> dict[str, float]:
    """Product of total and weight for every weighted key."""
    return {
        key: _total(totals, key) * weight
        for key, weight in normalize_weights(weights).items()
    }


def weighted_score(
    totals: AggregatedTotals | Mapping[str, Any],
    weights: Mapping[Any, Any] | None,
) -> Score:
    """
    Sum of total x weight over the weighted keys.

    Only keys in the weight map are visited: an unweighted statistic adds
    nothing no matter how large its total is. Zero weights are dropped
    first, so a map holding only zeros is UNCONFIGURED, the same as an
    empty one. No rounding is applied.

    Args:
        totals: AggregatedTotals or a plain key -> total mapping
        weights: Stat key -> weight

    Returns:
        The score, or UNCONFIGURED when no non-zero weight exists
    """
    breakdown = score_breakdown(totals, weights)
    if not breakdown:
        return UNCONFIGURED
    return math.fsum(breakdown.values())


def rank_players(
    totals_by_player: Mapping[int, AggregatedTotals],
    weights: Mapping[Any, Any] | None,
) -> list[PlayerRanking]:
    """
    Rank players by weighted score.

    Sorted by score descending, then player id ascending. Equal scores share
    a rank (1, 1, 3). Returns an empty list when no weights are configured.
    """
    normalized = normalize_weights(weights)
    if not normalized:
        return []

    scored = sorted(
        ((player_id, weighted_score(totals, normalized)) for player_id, totals in totals_by_player.items()),
        key=lambda entry: (-entry[1], entry[0]),
    )

    rankings: list[PlayerRanking] = []
    for position, (player_id, score) in enumerate(scored, 1):
        if rankings and rankings[-1].score == score:
            rank = rankings[-1].rank
        else:
            rank = position
        rankings.append(PlayerRanking(player_id=player_id, score=score, rank=rank))
    return rankings
