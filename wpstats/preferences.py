"""Load/save sessions for a user's stat weights and favorite stats.

A session holds the committed state fetched from the store and the draft
being edited. A failed load leaves the session FAILED rather than LOADED with
empty data; a failed save keeps the draft and records an error message.
"""

import logging
from enum import Enum
from typing import Any, Optional

from .models import AggregatedTotals
from .reconcile import DraftState, FavoriteDraft
from .scoring import Score, weighted_score
from .store import PersistenceError, StatStore

logger = logging.getLogger('wpstats.preferences')

LOAD_WEIGHTS_ERROR = 'Error al cargar las valoraciones'
SAVE_WEIGHTS_ERROR = 'Error al guardar las valoraciones'
LOAD_FAVORITES_ERROR = 'Error al cargar los favoritos'
SAVE_FAVORITES_ERROR = 'Error al guardar los favoritos'


class LoadState(Enum):
    UNLOADED = 'unloaded'
    LOADED = 'loaded'
    FAILED = 'failed'


class WeightsSession:
    """A user's stat weights within a club."""

    def __init__(self, store: StatStore, user_id: str, club_id: int):
        self.store = store
        self.user_id = user_id
        self.club_id = club_id
        self.state = DraftState()
        self.load_state = LoadState.UNLOADED
        self.saving = False
        self.error: Optional[str] = None

    @property
    def loaded(self) -> bool:
        return self.load_state is LoadState.LOADED

    @property
    def weights(self) -> dict[str, float]:
        return self.state.committed

    @property
    def draft_weights(self) -> dict[str, float]:
        return self.state.draft

    @property
    def dirty(self) -> bool:
        return self.state.dirty

    def load(self) -> bool:
        """Fetch the persisted weights, replacing both committed and draft state."""
        self.error = None
        try:
            weights = self.store.fetch_weight_map(self.user_id, self.club_id)
        except PersistenceError as e:
            logger.error(f'Loading weights for user {self.user_id} failed: {e}')
            self.error = LOAD_WEIGHTS_ERROR
            self.load_state = LoadState.FAILED
            return False

        self.state = DraftState(weights)
        self.load_state = LoadState.LOADED
        return True

    def set_weight(self, key: str, value: Any) -> None:
        self.state.set_weight(key, value)

    def get_weight(self, key: str) -> float:
        return self.state.get_weight(key)

    def discard(self) -> None:
        self.state.discard()
        self.error = None

    def save(self) -> bool:
        """
        Persist the draft as a diff, then re-read what the store holds.

        Returns:
            True on success. On failure the draft is kept, `error` is set
            and False is returned.
        """
        self.saving = True
        self.error = None
        diff = self.state.diff()
        try:
            if not diff.is_empty:
                self.store.persist_weight_diff(self.user_id, self.club_id, diff.to_upsert, diff.to_delete)
            saved = self.store.fetch_weight_map(self.user_id, self.club_id)
        except PersistenceError as e:
            logger.error(f'Saving weights for user {self.user_id} failed: {e}')
            self.error = SAVE_WEIGHTS_ERROR
            return False
        finally:
            self.saving = False

        self.state.commit(saved)
        self.load_state = LoadState.LOADED
        return True

    def score(self, totals: AggregatedTotals) -> Score:
        """Score totals with the committed weights."""
        return weighted_score(totals, self.state.committed)


class FavoritesSession:
    """A user's favorite stats for one player."""

    def __init__(self, store: StatStore, user_id: str, player_id: int, club_id: int):
        self.store = store
        self.user_id = user_id
        self.player_id = player_id
        self.club_id = club_id
        self.state = FavoriteDraft()
        self.load_state = LoadState.UNLOADED
        self.error: Optional[str] = None

    @property
    def loaded(self) -> bool:
        return self.load_state is LoadState.LOADED

    @property
    def keys(self) -> list[str]:
        return self.state.draft

    def is_favorite(self, key: str) -> bool:
        return self.state.contains(key)

    def load(self) -> bool:
        self.error = None
        try:
            keys = self.store.fetch_favorite_key_set(self.user_id, self.player_id, self.club_id)
        except PersistenceError as e:
            logger.error(f'Loading favorites for player {self.player_id} failed: {e}')
            self.error = LOAD_FAVORITES_ERROR
            self.load_state = LoadState.FAILED
            return False

        self.state = FavoriteDraft(keys)
        self.load_state = LoadState.LOADED
        return True

    def toggle(self, key: str) -> bool:
        """
        Flip one favorite and persist it immediately.

        The draft is updated first. If the write fails the toggle is rolled
        back and the persisted state reloaded; when the reload fails too the
        load error is kept and the draft stays at the last committed keys.

        Returns:
            True if the key is a favorite afterwards
        """
        self.state.toggle(key)
        if not self.save():
            self.state.discard()
            if self.load():
                self.error = SAVE_FAVORITES_ERROR
        return self.is_favorite(key)

    def discard(self) -> None:
        self.state.discard()
        self.error = None

    def save(self) -> bool:
        """Persist the draft as a diff and re-read the stored keys."""
        self.error = None
        diff = self.state.diff()
        try:
            if not diff.is_empty:
                self.store.persist_favorite_diff(
                    self.user_id, self.player_id, self.club_id, diff.to_insert, diff.to_delete
                )
            saved = self.store.fetch_favorite_key_set(self.user_id, self.player_id, self.club_id)
        except PersistenceError as e:
            logger.error(f'Saving favorites for player {self.player_id} failed: {e}')
            self.error = SAVE_FAVORITES_ERROR
            return False

        self.state.commit(saved)
        self.load_state = LoadState.LOADED
        return True
