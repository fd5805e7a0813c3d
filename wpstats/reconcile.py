"""Diff reconciliation of favorite key sets and stat weight maps.

Both kinds of user preference are edited as a draft and written back as the
minimal set of inserts and deletes against what is persisted. Overlapping
saves for the same user and key set are last-write-wins.
"""

from collections.abc import Iterable, Mapping
from typing import Any, Optional

from .models import KeyDiff, WeightDiff
from .normalize import to_number
from .scoring import normalize_weights


def normalize_keys(keys: Optional[Iterable[Any]]) -> list[str]:
    """Stringify and trim keys, dropping empties and duplicates (first occurrence wins)."""
    seen: dict[str, None] = {}
    for key in keys or []:
        if key is None:
            continue
        key = str(key).strip()
        if key and key not in seen:
            seen[key] = None
    return list(seen)


def diff_keys(current: Optional[Iterable[Any]], desired: Optional[Iterable[Any]]) -> KeyDiff:
    """
    Compute the inserts and deletes that turn `current` into `desired`.

    Both sides are normalized first, so whitespace and duplicate noise
    never produces a change.

    Example:
        diff_keys(['a', 'b'], ['b', 'c', ' c '])
        # KeyDiff(to_insert=['c'], to_delete=['a'])
    """
    current_keys = normalize_keys(current)
    desired_keys = normalize_keys(desired)
    current_set = set(current_keys)
    desired_set = set(desired_keys)

    return KeyDiff(
        to_insert=[k for k in desired_keys if k not in current_set],
        to_delete=[k for k in current_keys if k not in desired_set],
    )


def apply_key_diff(current: Optional[Iterable[Any]], diff: KeyDiff) -> list[str]:
    deleted = set(diff.to_delete)
    result = [k for k in normalize_keys(current) if k not in deleted]
    return normalize_keys(result + diff.to_insert)


def weights_equal(a: Optional[Mapping[Any, Any]], b: Optional[Mapping[Any, Any]]) -> bool:
    return normalize_weights(a) == normalize_weights(b)


def diff_weights(
    current: Optional[Mapping[Any, Any]],
    desired: Optional[Mapping[Any, Any]],
) -> WeightDiff:
    """
    Compute the upserts and deletes that turn the `current` weight map into `desired`.

    A zero weight in `desired` is the same as the key being absent: it is
    deleted if persisted and never upserted.
    """
    current_weights = normalize_weights(current)
    desired_weights = normalize_weights(desired)

    return WeightDiff(
        to_upsert={
            key: weight
            for key, weight in desired_weights.items()
            if current_weights.get(key) != weight
        },
        to_delete=[key for key in current_weights if key not in desired_weights],
    )


def apply_weight_diff(current: Optional[Mapping[Any, Any]], diff: WeightDiff) -> dict[str, float]:
    result = {
        key: weight
        for key, weight in normalize_weights(current).items()
        if key not in diff.to_delete
    }
    result.update(diff.to_upsert)
    return normalize_weights(result)


class DraftState:
    """
    Committed and draft copies of a weight map.

    The draft is edited freely; `diff()` gives what a save must persist,
    `commit()` adopts the persisted state and `discard()` throws edits away.
    """

    def __init__(self, committed: Optional[Mapping[Any, Any]] = None):
        self.committed: dict[str, float] = normalize_weights(committed)
        self.draft: dict[str, float] = dict(self.committed)

    def set_weight(self, key: str, value: Any) -> None:
        """Set a draft weight; 0 (or anything non-numeric) removes the key."""
        key = str(key).strip()
        if not key:
            return
        weight = to_number(value)
        draft = dict(self.draft)
        if weight == 0:
            draft.pop(key, None)
        else:
            draft[key] = weight
        self.draft = draft

    def get_weight(self, key: str) -> float:
        return self.draft.get(str(key).strip(), 0.0)

    @property
    def dirty(self) -> bool:
        return not weights_equal(self.committed, self.draft)

    def diff(self) -> WeightDiff:
        return diff_weights(self.committed, self.draft)

    def commit(self, saved: Optional[Mapping[Any, Any]] = None) -> None:
        """Adopt `saved` (default: the draft) as both committed and draft state."""
        state = normalize_weights(self.draft if saved is None else saved)
        self.committed = state
        self.draft = dict(state)

    def discard(self) -> None:
        self.draft = dict(self.committed)


class FavoriteDraft:
    """Committed and draft copies of a favorite key set."""

    def __init__(self, committed: Optional[Iterable[Any]] = None):
        self.committed: list[str] = normalize_keys(committed)
        self.draft: list[str] = list(self.committed)

    def add(self, key: Any) -> None:
        self.draft = normalize_keys(self.draft + [key])

    def remove(self, key: Any) -> None:
        key = str(key).strip()
        self.draft = [k for k in self.draft if k != key]

    def toggle(self, key: Any) -> bool:
        """Flip a key in the draft. Returns True if it is now a favorite."""
        if str(key).strip() in self.draft:
            self.remove(key)
            return False
        self.add(key)
        return str(key).strip() in self.draft

    def contains(self, key: Any) -> bool:
        return str(key).strip() in self.draft

    @property
    def dirty(self) -> bool:
        return set(self.committed) != set(self.draft)

    def diff(self) -> KeyDiff:
        return diff_keys(self.committed, self.draft)

    def commit(self, saved: Optional[Iterable[Any]] = None) -> None:
        state = normalize_keys(self.draft if saved is None else saved)
        self.committed = state
        self.draft = list(state)

    def discard(self) -> None:
        self.draft = list(self.committed)
