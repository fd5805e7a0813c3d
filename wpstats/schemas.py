"""Pydantic schemas for the JSON store and configuration files."""

from pydantic import BaseModel, Field, field_validator


class MatchRecord(BaseModel):
    """Match row in the store."""

    id: int = Field(..., ge=1)
    club_id: int = Field(..., ge=1)
    opponent: str = Field(..., min_length=1)
    match_date: str | None = None
    location: str | None = None
    home_score: int = Field(default=0, ge=0)
    away_score: int = Field(default=0, ge=0)
    is_home: bool = True
    season: str | None = None
    jornada: int | None = Field(default=None, ge=0)
    notes: str | None = None
    penalty_home_score: int | None = None
    penalty_away_score: int | None = None

    class Config:
        extra = 'allow'


class StatRowRecord(BaseModel):
    """Per-player, per-match statistics row. Stat columns are open-ended."""

    id: int | None = None
    match_id: int = Field(..., ge=1)
    player_id: int = Field(..., ge=1)

    class Config:
        extra = 'allow'


class WeightRecord(BaseModel):
    """Persisted stat weight for a (user, club, stat key)."""

    user_id: str = Field(..., min_length=1)
    club_id: int = Field(..., ge=1)
    stat_key: str = Field(..., min_length=1)
    weight: float
    updated_at: str | None = None

    @field_validator('weight')
    @classmethod
    def validate_weight(cls, v):
        """Zero weights are deleted, never stored."""
        if v == 0:
            raise ValueError('Zero weights must not be persisted')
        return v

    class Config:
        extra = 'forbid'


class FavoriteRecord(BaseModel):
    """Persisted favorite stat for a (user, club, player, stat key)."""

    id: int = Field(..., ge=1)
    user_id: str = Field(..., min_length=1)
    club_id: int = Field(..., ge=1)
    player_id: int = Field(..., ge=1)
    stat_key: str = Field(..., min_length=1)

    class Config:
        extra = 'forbid'


class StoreFile(BaseModel):
    """Complete JSON store file structure."""

    matches: list[MatchRecord] = Field(default_factory=list)
    match_stats: list[StatRowRecord] = Field(default_factory=list)
    user_stat_weights: list[WeightRecord] = Field(default_factory=list)
    user_player_stat_favorites: list[FavoriteRecord] = Field(default_factory=list)

    @field_validator('user_stat_weights')
    @classmethod
    def validate_unique_weights(cls, v):
        """Ensure one weight per (user, club, stat key)."""
        seen = set()
        for record in v:
            key = (record.user_id, record.club_id, record.stat_key)
            if key in seen:
                raise ValueError(f'Duplicate weight for {key}')
            seen.add(key)
        return v

    @field_validator('user_player_stat_favorites')
    @classmethod
    def validate_unique_favorites(cls, v):
        """Ensure one favorite per (user, club, player, stat key)."""
        seen = set()
        for record in v:
            key = (record.user_id, record.club_id, record.player_id, record.stat_key)
            if key in seen:
                raise ValueError(f'Duplicate favorite for {key}')
            seen.add(key)
        return v

    class Config:
        extra = 'allow'


class AppConfig(BaseModel):
    """Application configuration settings."""

    data_path: str = Field(default='store.json', min_length=1)
    default_club_id: int = Field(default=1, ge=1)
    log_level: str = Field(default='INFO', pattern=r'^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$')
    log_dir: str = Field(default='logs', min_length=1)
    top_players_limit: int = Field(default=3, ge=1, le=50)

    class Config:
        extra = 'forbid'
