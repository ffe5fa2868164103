"""Tests for configuration loading."""

import json

import pytest

from config.config_loader import (
    DATA_DIR,
    load_config,
    load_generator_settings,
    load_geometry_filter_settings,
    resolve_source_path
)


@pytest.mark.unit
class TestConfigLoader:
    def test_bundled_config(self):
        config = load_config()
        assert config['sources']['admin_features'] == 'data-mapkick.json'
        assert config['settings']['map_center'] == [49.95, 24.30]
        assert 'private' in config['filter_options']['ownership']

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / 'absent.json')

    def test_required_keys(self, tmp_path):
        path = tmp_path / 'config.json'
        path.write_text(json.dumps({'sources': {}}), encoding='utf-8')
        with pytest.raises(KeyError):
            load_config(path)

    def test_invalid_json(self, tmp_path):
        path = tmp_path / 'config.json'
        path.write_text('{', encoding='utf-8')
        with pytest.raises(json.JSONDecodeError):
            load_config(path)

    def test_geometry_defaults_and_overrides(self):
        assert load_geometry_filter_settings({}) == {
            'max_area': 0.0005,
            'max_rectangle_area': 0.00001,
            'rectangle_tolerance': 0.0001
        }
        settings = load_geometry_filter_settings({'geometry_filter': {'max_area': 0.001}})
        assert settings['max_area'] == 0.001
        assert settings['max_rectangle_area'] == 0.00001

    def test_generator_defaults(self):
        assert load_generator_settings({'generator': {'seed': 4}}) == {
            'num_zones': 250, 'radius': 0.02, 'seed': 4
        }

    def test_resolve_source_path(self, tmp_path):
        assert resolve_source_path('data.json') == DATA_DIR / 'data.json'
        assert resolve_source_path(tmp_path / 'x.json') == tmp_path / 'x.json'
