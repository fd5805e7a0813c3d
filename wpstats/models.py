"""Data models for wpstats."""

from dataclasses import asdict, dataclass, field
from typing import Any, Optional


@dataclass(frozen=True)
class StatRow:
    """One player's (or team's) recorded statistics for one match."""
    player_id: Optional[int]
    match_id: Optional[int]
    values: dict[str, float] = field(default_factory=dict)

    def get(self, key: str) -> float:
        return self.values.get(key, 0.0)


_TRUE_STRINGS = {'true', 't', '1', 'yes', 'si', 'sí'}
_FALSE_STRINGS = {'false', 'f', '0', 'no'}


def _to_flag(value: Any, default: bool = True) -> bool:
    """Coerce a boolean-ish record value; unrecognized strings give the default."""
    if value is None:
        return default
    if isinstance(value, str):
        text = value.strip().lower()
        if text in _TRUE_STRINGS:
            return True
        if text in _FALSE_STRINGS:
            return False
        return default
    return bool(value)


def _to_optional_int(value: Any) -> Optional[int]:
    """Parse an integer, returning None for missing or unparsable values."""
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(float(str(value).strip()))
    except (OverflowError, TypeError, ValueError):
        return None


@dataclass
class Match:
    """Match metadata needed by the comparison and goalkeeper totals."""
    id: int
    opponent: str
    home_score: int = 0
    away_score: int = 0
    is_home: bool = True
    jornada: Optional[int] = None
    match_date: Optional[str] = None
    season: Optional[str] = None
    club_id: Optional[int] = None

    @property
    def goals_conceded(self) -> int:
        """Opponent's final score, read off the home/away flag."""
        return self.away_score if self.is_home else self.home_score

    @property
    def goals_scored(self) -> int:
        return self.home_score if self.is_home else self.away_score

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> 'Match':
        """Build a Match from a raw store record, coercing the scores."""
        from .normalize import to_number

        return cls(
            id=int(to_number(record.get('id'))),
            opponent=str(record.get('opponent') or '-'),
            home_score=int(to_number(record.get('home_score'))),
            away_score=int(to_number(record.get('away_score'))),
            is_home=_to_flag(record.get('is_home')),
            jornada=_to_optional_int(record.get('jornada')),
            match_date=record.get('match_date'),
            season=record.get('season'),
            club_id=record.get('club_id'),
        )


@dataclass
class AggregatedTotals:
    """Summed statistics across a set of rows plus derived ratios."""
    totals: dict[str, float] = field(default_factory=dict)
    match_count: int = 0
    derived: dict[str, int] = field(default_factory=dict)  # percentages and derived counts
    averages: dict[str, str] = field(default_factory=dict)  # per-match, one decimal

    def get(self, key: str) -> float:
        return self.totals.get(key, 0.0)

    def __getitem__(self, key: str) -> float:
        return self.get(key)


@dataclass
class KeyDiff:
    """Insert/delete sets that move a persisted key set to a desired one."""
    to_insert: list[str] = field(default_factory=list)
    to_delete: list[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.to_insert and not self.to_delete


@dataclass
class WeightDiff:
    """Upserts and deletions that move a persisted weight map to a desired one."""
    to_upsert: dict[str, float] = field(default_factory=dict)
    to_delete: list[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.to_upsert and not self.to_delete


@dataclass
class PlayerRanking:
    """A player's position in a weighted ranking."""
    player_id: int
    score: float
    rank: int


@dataclass
class MatchComparisonTotals:
    """Fixed-shape per-match totals used by the match comparison table."""
    match_id: int
    jornada: str
    opponent: str
    result: str

    # Attack
    goles: float = 0
    tiros: float = 0
    eficiencia_tiro: int = 0
    asistencias: float = 0

    goles_hombre_mas: float = 0
    fallos_hombre_mas: float = 0
    eficiencia_hombre_mas: int = 0

    # Defense
    bloqueos: float = 0
    recuperaciones: float = 0
    perdidas: float = 0
    balance_posesion: float = 0

    goles_recibidos: int = 0

    goles_recibidos_hombre_menos: float = 0
    paradas_hombre_menos: float = 0
    eficiencia_defensiva_hombre_menos: int = 0

    # Goalkeeper
    paradas_portero: float = 0
    paradas_con_recuperacion: float = 0
    porcentaje_paradas: int = 0

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
