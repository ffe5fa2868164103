"""Tests for the Folium zone map."""

import copy
from datetime import datetime

import folium
import pytest

from core.collection_composer import compose_collection
from core.filter_predicate import FilterState
from core.map_builder import build_filter_summary, create_zone_map, zone_layer_name
from core.zone_recorder import record_drawn_zone


def _geojson_layers(map_obj):
    return [child for child in map_obj._children.values() if isinstance(child, folium.GeoJson)]


@pytest.fixture
def composed(static_parcel, admin_boundary, cadastral_parcel, catalog):
    features = [static_parcel, admin_boundary, cadastral_parcel]
    return compose_collection(features, FilterState.all_active(catalog))


@pytest.mark.unit
class TestLayerName:
    def test_deterministic(self):
        assert zone_layer_name('Forest-----') == zone_layer_name('Forest-----')
        assert zone_layer_name('Forest-----').startswith('cadastral-zones-')

    def test_changes_with_fingerprint(self):
        assert zone_layer_name('Forest-----') != zone_layer_name('-----')


@pytest.mark.unit
class TestFilterSummary:
    def test_active_flags(self, catalog):
        state = FilterState.all_active(catalog).toggle('ownership', 'private')
        summary = build_filter_summary(catalog, state)

        assert [entry['dimension'] for entry in summary] == [
            'land_use', 'administrative_type', 'source_layer',
            'ownership', 'purpose', 'category'
        ]
        ownership = {item['value']: item['active'] for item in summary[3]['values']}
        assert ownership == {'communal': True, 'private': False, 'state': True}


@pytest.mark.integration
class TestCreateZoneMap:
    def test_zone_layer_named_after_fingerprint(self, composed, config, catalog):
        map_obj = create_zone_map(composed, config, catalog=catalog,
                                  filter_state=FilterState.all_active(catalog))

        names = [layer.layer_name for layer in _geojson_layers(map_obj)]
        assert zone_layer_name(composed.fingerprint) in names

    def test_source_features_not_mutated(self, composed, config):
        before = copy.deepcopy(composed.features)
        create_zone_map(composed, config)
        assert composed.features == before

    def test_empty_collection_skips_zone_layer(self, config):
        map_obj = create_zone_map(compose_collection([], FilterState()), config)
        assert _geojson_layers(map_obj) == []

    def test_drawn_zones_and_panel_rendered(self, composed, config, catalog, rectangle_ring):
        polygon = {'type': 'Polygon', 'coordinates': [rectangle_ring(0.001, 0.001)]}
        zones = record_drawn_zone((), polygon, now=datetime(2025, 10, 18, 12, 0))

        map_obj = create_zone_map(
            composed, config,
            drawn_zones=zones,
            catalog=catalog,
            filter_state=FilterState.all_active(catalog),
            bounds=[24.3, 49.95, 24.31, 49.96]
        )
        html = map_obj.get_root().render()

        assert 'Drawn zones' in [layer.layer_name for layer in _geojson_layers(map_obj)]
        assert f'data-fingerprint="{composed.fingerprint}"' in html
        assert zones[0].id in html
        assert 'Test Zones' in html

    def test_panel_empty_state(self, config):
        html = create_zone_map(compose_collection([], FilterState()), config).get_root().render()
        assert 'Немає нових додань' in html
