"""Statistic vocabulary and mappings for wpstats."""

# Field player stat groups as shown in the weights configuration
FIELD_PLAYER_STAT_GROUPS = {
    'Goles': [
        'goles_boya_jugada',
        'goles_lanzamiento',
        'goles_dir_mas_5m',
        'goles_contraataque',
        'goles_penalti_anotado',
    ],
    'Tiros': [
        'tiros_penalti_fallado',
        'tiros_corner',
        'tiros_fuera',
        'tiros_parados',
        'tiros_bloqueado',
        'tiro_palo',
    ],
    'Superioridad': [
        'goles_hombre_mas',
        'gol_del_palo_sup',
        'tiros_hombre_mas',
        'rebote_recup_hombre_mas',
        'rebote_perd_hombre_mas',
    ],
    'Faltas': [
        'faltas_exp_20_1c1',
        'faltas_exp_20_boya',
        'faltas_penalti',
        'faltas_exp_simple',
        'exp_trans_def',
    ],
    'Acciones': [
        'acciones_bloqueo',
        'acciones_asistencias',
        'acciones_recuperacion',
        'acciones_rebote',
        'acciones_exp_provocada',
        'acciones_penalti_provocado',
        'acciones_recibir_gol',
        'acciones_perdida_poco',
        'faltas_contrafaltas',
        'pase_boya',
        'pase_boya_fallado',
    ],
}

GOALKEEPER_STAT_GROUPS = {
    'Goles encajados': [
        'portero_goles_boya_parada',
        'portero_goles_dir_mas_5m',
        'portero_goles_contraataque',
        'portero_goles_penalti',
        'portero_goles_lanzamiento',
    ],
    'Paradas': [
        'portero_tiros_parada_recup',
        'portero_paradas_fuera',
        'portero_paradas_penalti_parado',
        'lanz_recibido_fuera',
        'portero_lanz_palo',
    ],
    'Inferioridad': [
        'portero_goles_hombre_menos',
        'portero_paradas_hombre_menos',
        'portero_inferioridad_fuera',
        'portero_inferioridad_bloqueo',
    ],
    'Acciones': [
        'acciones_asistencias',
        'acciones_recuperacion',
        'portero_acciones_perdida_pos',
        'acciones_exp_provocada',
        'portero_gol',
        'portero_gol_superioridad',
        'portero_fallo_superioridad',
    ],
}

# Summary columns that are recorded on every row
SUMMARY_KEYS = [
    'goles_totales',
    'tiros_totales',
    'portero_goles_totales',
    'portero_paradas_totales',
    'portero_paradas_parada_recup',
]

# Every key a user may weight or mark as favorite
STAT_KEYS = frozenset(
    SUMMARY_KEYS
    + [key for keys in FIELD_PLAYER_STAT_GROUPS.values() for key in keys]
    + [key for keys in GOALKEEPER_STAT_GROUPS.values() for key in keys]
)

# Keys that add up to a player's exclusions
EXCLUSION_KEYS = [
    'faltas_exp_20_1c1',
    'faltas_exp_20_boya',
    'faltas_exp_3_int',
    'faltas_exp_3_bruta',
    'faltas_penalti',
]

# Derived efficiency -> (numerator key, denominator keys)
EFFICIENCY_RATIOS = {
    'eficiencia_tiro': ('goles_totales', ['tiros_totales']),
    'eficiencia_hombre_mas': (
        'goles_hombre_mas',
        ['goles_hombre_mas', 'tiros_hombre_mas', 'tiros_penalti_fallado'],
    ),
    'eficiencia_penaltis': (
        'goles_penalti_anotado',
        ['goles_penalti_anotado', 'tiros_penalti_fallado'],
    ),
    'porcentaje_paradas': (
        'portero_paradas_totales',
        ['portero_paradas_totales', 'portero_goles_totales'],
    ),
    'eficiencia_hombre_menos': (
        'portero_paradas_hombre_menos',
        ['portero_paradas_hombre_menos', 'portero_goles_hombre_menos'],
    ),
}

# Per-match average name -> total key
AVERAGE_KEYS = {
    'goles_por_partido': 'goles_totales',
    'tiros_por_partido': 'tiros_totales',
    'asistencias_por_partido': 'acciones_asistencias',
    'paradas_por_partido': 'portero_paradas_totales',
}

# Synthetic total holding the opponent's goals over a goalkeeper's matches
RIVAL_GOALS_KEY = 'portero_rival_goles_totales'
