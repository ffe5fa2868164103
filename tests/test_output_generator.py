"""Tests for output files and the end-to-end workflow."""

import json
from datetime import datetime

import pytest

import cadastral_map_creator
from core.collection_composer import compose_collection
from core.filter_predicate import FilterState
from core.map_builder import create_zone_map, zone_layer_name
from core.output_generator import build_summary, generate_output
from core.zone_recorder import record_drawn_zone


@pytest.fixture
def run(static_parcel, cadastral_parcel, catalog, config, rectangle_ring):
    state = FilterState.all_active(catalog).toggle('ownership', 'private')
    composed = compose_collection([static_parcel, cadastral_parcel], state)
    polygon = {'type': 'Polygon', 'coordinates': [rectangle_ring(0.001, 0.001)]}
    zones = record_drawn_zone((), polygon, now=datetime(2025, 10, 18, 12, 0))
    return composed, zones, state, create_zone_map(composed, config, zones)


@pytest.mark.unit
class TestBuildSummary:
    def test_summary(self, run):
        composed, zones, state, _ = run
        summary = build_summary(composed, zones, state, {'static_parcels': {'feature_count': 2}})

        assert summary['fingerprint'] == composed.fingerprint
        assert summary['layer_name'] == zone_layer_name(composed.fingerprint)
        assert summary['zones']['source_count'] == 2
        assert summary['zones']['attribute_excluded'] == 1
        assert summary['zones']['rendered'] == 1
        assert summary['zones']['total_vertices'] == 6
        assert 'private' not in summary['active_filters']['ownership']
        assert summary['drawn_zones'] == [
            {'id': zones[0].id, 'timestamp': '2025-10-18 12:00:00', 'vertices': 5}
        ]
        assert summary['sources']['static_parcels']['feature_count'] == 2


@pytest.mark.integration
class TestGenerateOutput:
    def test_files_written(self, run, tmp_path):
        composed, zones, state, map_obj = run
        output_path = generate_output(map_obj, composed, zones, state,
                                      output_name='test_run', output_dir=tmp_path)

        assert output_path == tmp_path / 'test_run'
        assert (output_path / 'index.html').exists()

        zones_geojson = json.loads((output_path / 'data' / 'cadastral_zones.geojson').read_text(encoding='utf-8'))
        assert len(zones_geojson['features']) == 1

        drawn = json.loads((output_path / 'data' / 'drawn_zones.geojson').read_text(encoding='utf-8'))
        assert drawn['features'][0]['properties']['zone_id'] == zones[0].id

        metadata = json.loads((output_path / 'metadata.json').read_text(encoding='utf-8'))
        assert metadata['fingerprint'] == composed.fingerprint


@pytest.mark.integration
class TestMainWorkflow:
    def test_generated_static_and_sample_admin(self, tmp_path, rectangle_ring):
        drawn = {'type': 'Polygon', 'coordinates': [rectangle_ring(0.001, 0.001)]}
        output_path = cadastral_map_creator.main(
            static_source=str(tmp_path / 'absent.json'),
            output_name='workflow',
            filter_overrides={'ownership': ['communal']},
            drawn_zones=[drawn],
            output_dir=tmp_path
        )

        assert output_path == tmp_path / 'workflow'
        metadata = json.loads((output_path / 'metadata.json').read_text(encoding='utf-8'))
        assert metadata['active_filters']['ownership'] == ['communal']
        assert metadata['sources']['static_parcels']['original_file'] == 'generated'
        assert len(metadata['drawn_zones']) == 1

        zones = json.loads((output_path / 'data' / 'cadastral_zones.geojson').read_text(encoding='utf-8'))
        ownerships = {f['properties'].get('ownership') for f in zones['features']}
        assert 'private' not in ownerships

    def test_failure_returns_none(self, tmp_path):
        assert cadastral_map_creator.main(config_path=tmp_path / 'absent.json', output_dir=tmp_path) is None
