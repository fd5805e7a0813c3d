"""Tests for configuration, logging setup and JSON helpers."""

import json
import logging

import pytest

from wpstats.config import clear_config_cache, get_config, get_data_path, get_default_club_id
from wpstats.logging_config import get_logger, setup_logging
from wpstats.utils import load_json, save_json


@pytest.fixture
def config_file(tmp_path, monkeypatch):
    path = tmp_path / 'app_config.json'
    monkeypatch.setenv('WPSTATS_CONFIG', str(path))
    clear_config_cache()
    yield path
    clear_config_cache()


class TestConfig:
    """Tests for loading app_config.json."""

    def test_values_from_file(self, config_file):
        config_file.write_text(json.dumps({'data_path': 'x/store.json', 'default_club_id': 4}))
        assert get_data_path() == config_file.parent / 'x' / 'store.json'
        assert get_default_club_id() == 4

    def test_absolute_data_path_kept(self, config_file, tmp_path):
        store = tmp_path / 'elsewhere' / 'store.json'
        config_file.write_text(json.dumps({'data_path': str(store)}))
        assert get_data_path() == store

    def test_default_data_path_next_to_config(self, config_file):
        assert get_data_path() == config_file.parent / 'store.json'

    def test_missing_file_uses_defaults(self, config_file):
        config = get_config()
        assert config.default_club_id == 1
        assert config.log_level == 'INFO'

    def test_cached_until_cleared(self, config_file):
        config_file.write_text(json.dumps({'default_club_id': 2}))
        assert get_default_club_id() == 2
        config_file.write_text(json.dumps({'default_club_id': 3}))
        assert get_default_club_id() == 2
        clear_config_cache()
        assert get_default_club_id() == 3

    @pytest.mark.parametrize('bad', [{'log_level': 'LOUD'}, {'default_club_id': 0}, {'unknown': True}])
    def test_invalid_config(self, config_file, bad):
        config_file.write_text(json.dumps(bad))
        with pytest.raises(ValueError):
            get_config()


class TestJsonHelpers:
    """Tests for load_json/save_json."""

    def test_save_and_load(self, tmp_path):
        path = tmp_path / 'nested' / 'data.json'
        save_json(path, {'weights': {'goles_totales': 10}})
        assert load_json(path) == {'weights': {'goles_totales': 10}}
        assert [p.name for p in path.parent.iterdir()] == ['data.json']

    def test_missing_without_default(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_json(tmp_path / 'missing.json')

    def test_missing_with_default(self, tmp_path):
        assert load_json(tmp_path / 'missing.json', default={}) == {}

    def test_unserializable_leaves_no_temp_file(self, tmp_path):
        path = tmp_path / 'data.json'
        with pytest.raises(TypeError):
            save_json(path, {'bad': object()})
        assert list(tmp_path.iterdir()) == []


class TestLogging:
    """Tests for logging setup."""

    def test_console_only(self):
        logger = setup_logging(level='DEBUG', log_to_file=False)
        assert logger.name == 'wpstats'
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1

    def test_file_handler(self, tmp_path):
        logger = setup_logging(log_dir=tmp_path / 'logs', log_to_console=False)
        logger.info('hello')
        for handler in logger.handlers:
            handler.flush()
        files = list((tmp_path / 'logs').glob('wpstats_*.log'))
        assert len(files) == 1
        assert 'hello' in files[0].read_text(encoding='utf-8')
        setup_logging(log_to_file=False, log_to_console=False)

    def test_get_logger_namespace(self):
        assert get_logger('store').name == 'wpstats.store'
        assert get_logger().name == 'wpstats'
