"""Storage boundary: fetching stat rows and persisting preference diffs.

The pure core never touches storage. Stores hand it complete, club-scoped
row sets and raise PersistenceError for any failure.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from .models import Match, StatRow
from .normalize import normalize_rows
from .reconcile import normalize_keys
from .scoring import normalize_weights
from .schemas import FavoriteRecord, StoreFile, WeightRecord
from .utils import load_json, save_json

logger = logging.getLogger('wpstats.store')


class PersistenceError(Exception):
    """A fetch or save against the backing store failed."""


class StatStore(ABC):
    """Interface of the backing store used by reports and preference sessions."""

    @abstractmethod
    def fetch_matches(self, club_id: int) -> list[Match]:
        ...

    @abstractmethod
    def fetch_stat_rows(
        self,
        club_id: int,
        player_id: Optional[int] = None,
        match_id: Optional[int] = None,
    ) -> list[StatRow]:
        ...

    @abstractmethod
    def fetch_weight_map(self, user_id: str, club_id: int) -> dict[str, float]:
        ...

    @abstractmethod
    def fetch_favorite_key_set(self, user_id: str, player_id: int, club_id: int) -> list[str]:
        ...

    @abstractmethod
    def persist_weight_diff(
        self,
        user_id: str,
        club_id: int,
        to_upsert: Mapping[str, float],
        to_delete: Iterable[str],
    ) -> None:
        ...

    @abstractmethod
    def persist_favorite_diff(
        self,
        user_id: str,
        player_id: int,
        club_id: int,
        to_insert: Iterable[str],
        to_delete: Iterable[str],
    ) -> None:
        ...


class JsonFileStore(StatStore):
    """
    Store backed by a single JSON document.

    Tables: matches, match_stats, user_stat_weights and
    user_player_stat_favorites. A missing file reads as an empty store.
    Every write re-reads the file, applies the change and replaces it.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path)

    def _read(self) -> StoreFile:
        try:
            return load_json(self.path, schema=StoreFile, default={})
        except (OSError, ValueError) as e:
            raise PersistenceError(f'Could not read {self.path}: {e}') from e

    def _write(self, data: StoreFile) -> None:
        try:
            save_json(self.path, data)
        except (OSError, TypeError) as e:
            raise PersistenceError(f'Could not write {self.path}: {e}') from e

    def fetch_matches(self, club_id: int) -> list[Match]:
        data = self._read()
        return [
            Match.from_record(record.model_dump())
            for record in data.matches
            if record.club_id == club_id
        ]

    def fetch_stat_rows(
        self,
        club_id: int,
        player_id: Optional[int] = None,
        match_id: Optional[int] = None,
    ) -> list[StatRow]:
        data = self._read()
        club_matches = {m.id for m in data.matches if m.club_id == club_id}
        records = [
            record.model_dump()
            for record in data.match_stats
            if record.match_id in club_matches
            and (player_id is None or record.player_id == player_id)
            and (match_id is None or record.match_id == match_id)
        ]
        logger.debug(f'Fetched {len(records)} stat rows for club {club_id}')
        return normalize_rows(records)

    def fetch_weight_map(self, user_id: str, club_id: int) -> dict[str, float]:
        data = self._read()
        return {
            record.stat_key: record.weight
            for record in data.user_stat_weights
            if record.user_id == user_id and record.club_id == club_id
        }

    def fetch_favorite_key_set(self, user_id: str, player_id: int, club_id: int) -> list[str]:
        data = self._read()
        return [
            record.stat_key
            for record in data.user_player_stat_favorites
            if record.user_id == user_id
            and record.club_id == club_id
            and record.player_id == player_id
        ]

    def persist_weight_diff(
        self,
        user_id: str,
        club_id: int,
        to_upsert: Mapping[str, float],
        to_delete: Iterable[str],
    ) -> None:
        upserts = normalize_weights(to_upsert)
        deletes = set(normalize_keys(to_delete)) - set(upserts)
        removed = deletes | set(upserts)

        data = self._read()
        kept = [
            record
            for record in data.user_stat_weights
            if not (record.user_id == user_id and record.club_id == club_id and record.stat_key in removed)
        ]
        now = datetime.now(timezone.utc).isoformat()
        try:
            kept.extend(
                WeightRecord(user_id=user_id, club_id=club_id, stat_key=key, weight=weight, updated_at=now)
                for key, weight in upserts.items()
            )
        except ValueError as e:
            raise PersistenceError(f'Invalid weight for user {user_id}: {e}') from e
        data.user_stat_weights = kept
        self._write(data)

        logger.info(
            f'Saved weights for user {user_id} (club {club_id}): '
            f'{len(upserts)} upserted, {len(deletes)} deleted'
        )

    def persist_favorite_diff(
        self,
        user_id: str,
        player_id: int,
        club_id: int,
        to_insert: Iterable[str],
        to_delete: Iterable[str],
    ) -> None:
        inserts = normalize_keys(to_insert)
        deletes = set(normalize_keys(to_delete))

        data = self._read()

        def owned(record: FavoriteRecord) -> bool:
            return (
                record.user_id == user_id
                and record.club_id == club_id
                and record.player_id == player_id
            )

        kept = [r for r in data.user_player_stat_favorites if not (owned(r) and r.stat_key in deletes)]
        existing = {r.stat_key for r in kept if owned(r)}
        next_id = max((r.id for r in data.user_player_stat_favorites), default=0) + 1

        try:
            for key in inserts:
                if key in existing:
                    continue
                kept.append(
                    FavoriteRecord(
                        id=next_id, user_id=user_id, club_id=club_id, player_id=player_id, stat_key=key
                    )
                )
                next_id += 1
        except ValueError as e:
            raise PersistenceError(f'Invalid favorite for user {user_id}: {e}') from e

        data.user_player_stat_favorites = kept
        self._write(data)

        logger.info(
            f'Saved favorites for user {user_id}, player {player_id}: '
            f'{len(inserts)} inserted, {len(deletes)} deleted'
        )


def load_store(path: Path | str) -> JsonFileStore:
    """
    Open an existing JSON store for reading.

    Raises:
        PersistenceError: If the file does not exist or is unreadable
    """
    store = JsonFileStore(path)
    if not store.path.is_file():
        raise PersistenceError(f'Store not found: {store.path}')
    store._read()
    return store

