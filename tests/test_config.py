"""
tests/test_config.py
callscope_config.json load/save.
"""

import json

import pytest

from callscope.config import (
    CONFIG_FILENAME,
    DEFAULT_CONFIG,
    load_config,
    save_config,
    validate_config_update,
)


class TestConfig:

    def test_missing_file_returns_defaults(self, tmp_path):
        assert load_config(tmp_path) == DEFAULT_CONFIG

    def test_defaults_are_a_copy(self, tmp_path):
        cfg = load_config(tmp_path)
        cfg['top_n'] = 99
        assert DEFAULT_CONFIG['top_n'] == 5

    def test_file_overrides_defaults(self, tmp_path):
        (tmp_path / CONFIG_FILENAME).write_text(json.dumps({'top_n': 3}), encoding='utf-8')
        cfg = load_config(tmp_path)
        assert cfg['top_n'] == 3
        assert cfg['model'] == DEFAULT_CONFIG['model']

    def test_corrupt_file_falls_back(self, tmp_path):
        (tmp_path / CONFIG_FILENAME).write_text('{not json', encoding='utf-8')
        assert load_config(tmp_path) == DEFAULT_CONFIG

    def test_non_object_falls_back(self, tmp_path):
        (tmp_path / CONFIG_FILENAME).write_text('[1, 2]', encoding='utf-8')
        assert load_config(tmp_path) == DEFAULT_CONFIG

    def test_save_round_trip(self, tmp_path):
        cfg = {**DEFAULT_CONFIG, 'insights_enabled': True}
        path = save_config(cfg, tmp_path)
        assert path == tmp_path / CONFIG_FILENAME
        assert load_config(tmp_path)['insights_enabled'] is True

    def test_invalid_stored_values_fall_back(self, tmp_path):
        stored = {'top_n': -1, 'model': 5, 'insight_limit': 10, 'extra': 'x'}
        (tmp_path / CONFIG_FILENAME).write_text(json.dumps(stored), encoding='utf-8')
        cfg = load_config(tmp_path)
        assert cfg['top_n'] == DEFAULT_CONFIG['top_n']
        assert cfg['model'] == DEFAULT_CONFIG['model']
        assert cfg['insight_limit'] == 10
        assert 'extra' not in cfg


class TestValidateConfigUpdate:

    def test_known_keys_kept_unknown_dropped(self):
        assert validate_config_update({'top_n': 0, 'other': 1}) == {'top_n': 0}

    @pytest.mark.parametrize('update', [
        {'top_n': True},
        {'top_n': 2.5},
        {'insights_enabled': 0},
        {'ollama_host': '   '},
        {'insight_limit': -1},
    ])
    def test_invalid_values_raise(self, update):
        with pytest.raises(ValueError):
            validate_config_update(update)
