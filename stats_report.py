#!/usr/bin/env python3
"""
Water polo stats report CLI

Prints player totals, weighted rankings and match comparisons from a JSON
store (data/store.json by default, see data/app_config.json).

Usage:
    python stats_report.py --player 7
    python stats_report.py --ranking --user coach-1
    python stats_report.py --compare 3 4 5
"""

import argparse
import sys
from pathlib import Path

from wpstats import (
    PersistenceError,
    aggregate,
    aggregate_by_player,
    best_match_ids,
    compare_matches,
    goalkeeper_totals,
    is_configured,
    load_store,
    rank_players,
    top_players,
    weighted_score,
)
from wpstats.config import get_config, get_data_path
from wpstats.logging_config import setup_logging

COMPARISON_ROWS = [
    ('Goles', 'goles'),
    ('Eficiencia tiro %', 'eficiencia_tiro'),
    ('Goles H+', 'goles_hombre_mas'),
    ('Eficiencia H+ %', 'eficiencia_hombre_mas'),
    ('Bloqueos', 'bloqueos'),
    ('Recuperaciones', 'recuperaciones'),
    ('Pérdidas', 'perdidas'),
    ('Balance posesión', 'balance_posesion'),
    ('Goles recibidos', 'goles_recibidos'),
    ('Paradas portero', 'paradas_portero'),
    ('% Paradas', 'porcentaje_paradas'),
]

LEADER_KEYS = [
    ('Goles', 'goles_totales'),
    ('Asistencias', 'acciones_asistencias'),
    ('Recuperaciones', 'acciones_recuperacion'),
]


def print_player(store, club_id: int, player_id: int, user_id: str | None, goalkeeper: bool) -> None:
    rows = store.fetch_stat_rows(club_id, player_id=player_id)
    if not rows:
        print(f"No stats recorded for player {player_id}")
        return

    if goalkeeper:
        totals = goalkeeper_totals(rows, store.fetch_matches(club_id))
    else:
        totals = aggregate(rows)

    print(f"Player {player_id}: {totals.match_count} matches")
    print("=" * 60)
    print(f"  Goles: {totals['goles_totales']:g} ({totals.averages['goles_por_partido']} x partido)")
    print(f"  Tiros: {totals['tiros_totales']:g} ({totals.averages['tiros_por_partido']} x partido)")
    print(f"  Eficiencia: {totals.derived['eficiencia_tiro']}%")
    print(f"  Asistencias: {totals['acciones_asistencias']:g}")
    print(f"  Exclusiones: {totals.derived['total_exclusiones']}")
    if goalkeeper:
        print(f"  Paradas: {totals['portero_paradas_totales']:g} ({totals.averages['paradas_por_partido']} x partido)")
        print(f"  Goles recibidos: {totals['portero_rival_goles_totales']:g}")
        print(f"  % Paradas: {totals.derived['porcentaje_paradas_real']}%")

    if user_id:
        weights = store.fetch_weight_map(user_id, club_id)
        score = weighted_score(totals, weights)
        label = f"{score:.1f}" if is_configured(score) else "sin configurar"
        print(f"  Valoración: {label}")


def print_ranking(store, club_id: int, user_id: str, limit: int) -> None:
    totals_by_player = aggregate_by_player(store.fetch_stat_rows(club_id))
    rankings = rank_players(totals_by_player, store.fetch_weight_map(user_id, club_id))

    print("\n" + "=" * 60)
    print("RANKING")
    print("=" * 60)
    if not rankings:
        print("  No stat weights configured")
    for entry in rankings:
        print(f"  {entry.rank}. Player {entry.player_id}: {entry.score:.1f} pts")

    for label, key in LEADER_KEYS:
        leaders = top_players(totals_by_player, key, limit=limit)
        names = ", ".join(f"{player_id} ({total:g})" for player_id, total in leaders) or "-"
        print(f"  Top {label}: {names}")


def print_comparison(store, club_id: int, match_ids: list[int]) -> None:
    comparisons = compare_matches(
        store.fetch_matches(club_id), store.fetch_stat_rows(club_id), match_ids
    )
    if not comparisons:
        print("No matching matches found")
        return

    header = "".join(f"{c.jornada + ' ' + c.opponent:>18}" for c in comparisons)
    print(f"{'':<20}{header}")
    for label, field in COMPARISON_ROWS:
        best = set(best_match_ids(comparisons, field))
        cells = "".join(
            f"{format(getattr(c, field), 'g') + ('*' if c.match_id in best else ''):>18}"
            for c in comparisons
        )
        print(f"{label:<20}{cells}")


def main():
    config = get_config()

    parser = argparse.ArgumentParser(description="Water polo statistics report")
    parser.add_argument(
        "--data", "-d",
        default=get_data_path(),
        help="Path to the JSON store",
    )
    parser.add_argument(
        "--club", "-c",
        type=int,
        default=config.default_club_id,
        help="Club id",
    )
    parser.add_argument(
        "--user", "-u",
        default=None,
        help="User whose stat weights are applied",
    )
    mode = parser.add_mutually_exclusive_group(required=True)
    mode.add_argument("--player", "-p", type=int, help="Show totals for a player")
    mode.add_argument("--ranking", action="store_true", help="Rank players by weighted score")
    mode.add_argument("--compare", nargs="+", type=int, metavar="MATCH_ID", help="Compare matches")
    parser.add_argument(
        "--goalkeeper", "-g",
        action="store_true",
        help="Treat --player as a goalkeeper",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Debug logging",
    )

    args = parser.parse_args()

    logger = setup_logging(
        log_dir=Path(config.log_dir),
        level="DEBUG" if args.verbose else config.log_level,
        log_to_file=False,
    )

    if args.ranking and not args.user:
        parser.error("--ranking requires --user")

    try:
        store = load_store(args.data)
        if args.player is not None:
            print_player(store, args.club, args.player, args.user, args.goalkeeper)
        elif args.ranking:
            print_ranking(store, args.club, args.user, config.top_players_limit)
        else:
            print_comparison(store, args.club, args.compare)
    except PersistenceError as e:
        logger.error(str(e))
        print(f"❌ Could not read store: {args.data}")
        sys.exit(1)


if __name__ == "__main__":
    main()
