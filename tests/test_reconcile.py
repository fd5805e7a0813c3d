"""Unit tests for favorite and weight diff reconciliation."""

import pytest

from wpstats.reconcile import (
    DraftState,
    FavoriteDraft,
    apply_key_diff,
    apply_weight_diff,
    diff_keys,
    diff_weights,
    normalize_keys,
    weights_equal,
)

KEY_SET_CASES = [
    ([], []),
    (['a'], []),
    ([], ['a', 'b']),
    (['a', 'b'], ['b', 'c', ' c ']),
    (['a', 'a', ' b'], ['b', '', None, 'd']),
    (['x', 'y', 'z'], ['z', 'y', 'x']),
]


class TestNormalizeKeys:
    """Tests for key cleaning."""

    def test_trim_dedupe_drop_empty(self):
        assert normalize_keys([' a', 'b', 'a ', '', None, '  ', 3]) == ['a', 'b', '3']

    def test_none(self):
        assert normalize_keys(None) == []


class TestDiffKeys:
    """Tests for favorite key set diffs."""

    def test_concrete_scenario(self):
        diff = diff_keys(['a', 'b'], ['b', 'c', ' c '])
        assert normalize_keys(['b', 'c', ' c ']) == ['b', 'c']
        assert diff.to_insert == ['c']
        assert diff.to_delete == ['a']

    @pytest.mark.parametrize(('current', 'desired'), KEY_SET_CASES)
    def test_applying_diff_reaches_desired(self, current, desired):
        diff = diff_keys(current, desired)
        assert set(apply_key_diff(current, diff)) == set(normalize_keys(desired))

    @pytest.mark.parametrize(('current', 'desired'), KEY_SET_CASES)
    def test_insert_and_delete_disjoint(self, current, desired):
        diff = diff_keys(current, desired)
        assert not set(diff.to_insert) & set(diff.to_delete)

    @pytest.mark.parametrize(('_current', 'desired'), KEY_SET_CASES)
    def test_self_diff_is_empty(self, _current, desired):
        assert diff_keys(desired, desired).is_empty

    def test_whitespace_noise_is_no_change(self):
        assert diff_keys(['goles_totales'], [' goles_totales', 'goles_totales ']).is_empty


class TestDiffWeights:
    """Tests for weight map diffs."""

    def test_zero_weight_deletes(self):
        diff = diff_weights({'a': 2, 'b': 1}, {'a': 0, 'b': 1, 'c': 3})
        assert diff.to_upsert == {'c': 3.0}
        assert diff.to_delete == ['a']

    def test_zero_for_unpersisted_key_is_no_op(self):
        assert diff_weights({}, {'a': 0}).is_empty

    def test_changed_weight_upserted(self):
        diff = diff_weights({'a': 2}, {'a': 5})
        assert diff.to_upsert == {'a': 5.0}
        assert diff.to_delete == []

    def test_round_trip(self):
        current = {'a': 2, 'b': 1, 'c': 4}
        desired = {'a': 0, 'b': 3, 'd': -1, ' ': 7}
        diff = diff_weights(current, desired)
        assert apply_weight_diff(current, diff) == {'b': 3.0, 'd': -1.0}

    def test_weights_equal_ignores_zeros(self):
        assert weights_equal({'a': 1, 'b': 0}, {'a': 1.0})
        assert not weights_equal({'a': 1}, {'a': 2})


class TestDraftState:
    """Tests for the committed/draft weight pair."""

    def test_set_and_get(self):
        state = DraftState({'goles_totales': 10})
        state.set_weight('acciones_bloqueo', 3)
        assert state.get_weight('acciones_bloqueo') == 3
        assert state.get_weight('tiros_totales') == 0
        assert state.dirty

    def test_zero_removes_key(self):
        state = DraftState({'goles_totales': 10})
        state.set_weight('goles_totales', 0)
        assert 'goles_totales' not in state.draft
        assert state.diff().to_delete == ['goles_totales']

    def test_set_back_to_committed_is_clean(self):
        state = DraftState({'goles_totales': 10})
        state.set_weight('goles_totales', 4)
        state.set_weight('goles_totales', 10)
        assert not state.dirty

    def test_discard(self):
        state = DraftState({'goles_totales': 10})
        state.set_weight('goles_totales', 2)
        state.discard()
        assert state.draft == {'goles_totales': 10}
        assert not state.dirty

    def test_commit_adopts_saved_state(self):
        state = DraftState()
        state.set_weight('goles_totales', 2)
        state.commit({'goles_totales': 2, 'tiros_totales': 1})
        assert state.committed == state.draft == {'goles_totales': 2, 'tiros_totales': 1}
        assert not state.dirty

    def test_draft_is_a_copy(self):
        state = DraftState({'a': 1})
        state.set_weight('a', 3)
        assert state.committed == {'a': 1}


class TestFavoriteDraft:
    """Tests for the committed/draft favorite pair."""

    def test_toggle(self):
        favorites = FavoriteDraft(['goles_totales'])
        assert favorites.toggle('acciones_bloqueo') is True
        assert favorites.toggle(' goles_totales ') is False
        diff = favorites.diff()
        assert diff.to_insert == ['acciones_bloqueo']
        assert diff.to_delete == ['goles_totales']

    def test_toggle_blank_key(self):
        favorites = FavoriteDraft()
        assert favorites.toggle('  ') is False
        assert not favorites.dirty

    def test_discard_and_commit(self):
        favorites = FavoriteDraft(['a'])
        favorites.add('b')
        favorites.discard()
        assert favorites.draft == ['a']
        favorites.add('b')
        favorites.commit()
        assert favorites.committed == ['a', 'b']
        assert not favorites.dirty
