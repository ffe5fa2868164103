"""Shared fixtures for cadastral map creator tests."""

import pytest

ORIGIN_LNG = 24.30
ORIGIN_LAT = 49.95


def _rectangle_ring(width, height, x0=ORIGIN_LNG, y0=ORIGIN_LAT, split_bottom=False):
    ring = [[x0, y0]]
    if split_bottom:
        # Extra vertex on the bottom edge: same area, six coordinates
        ring.append([x0 + width / 2, y0])
    ring += [
        [x0 + width, y0],
        [x0 + width, y0 + height],
        [x0, y0 + height],
        [x0, y0]
    ]
    return ring


@pytest.fixture
def rectangle_ring():
    """Factory for closed axis-aligned rectangle rings (area = width * height)."""
    return _rectangle_ring


@pytest.fixture
def polygon_feature():
    """Factory for Polygon features with the given properties."""
    def make(ring=None, properties=None, source_layer=None):
        feature = {
            'type': 'Feature',
            'properties': properties if properties is not None else {},
            'geometry': {
                'type': 'Polygon',
                'coordinates': [ring if ring is not None else _rectangle_ring(0.001, 0.001, split_bottom=True)]
            }
        }
        if source_layer is not None:
            feature['sourceLayer'] = source_layer
        return feature
    return make


@pytest.fixture
def static_parcel(polygon_feature):
    return polygon_feature(properties={
        'name': 'Plot 1',
        'cadastral_number': '4621355200:01:001',
        'area_hectares': 2.5,
        'land_use': 'Forest'
    })


@pytest.fixture
def admin_boundary(polygon_feature):
    return polygon_feature(
        properties={
            'TYPE': 'village',
            'ADMIN_1': 'Lvivska',
            'ADMIN_2': 'Lvivskyi',
            'ADMIN_3': 'Novyi Yarychiv',
            'KOATUU_old': '4621355200'
        },
        source_layer='admin_boundaries'
    )


@pytest.fixture
def cadastral_parcel(polygon_feature):
    return polygon_feature(
        properties={
            'ownership': 'private',
            'purpose': '01.03 Personal farming',
            'category': 'agricultural',
            'koatuu': '4621355200:01:001:0012'
        },
        source_layer='land_polygons'
    )


@pytest.fixture
def catalog():
    return {
        'land_use': ['Forest', 'Residential'],
        'administrative_type': ['hromada', 'village'],
        'source_layer': ['admin_boundaries', 'land_polygons'],
        'ownership': ['communal', 'private', 'state'],
        'purpose': ['01.03 Personal farming', '07.08 Recreational use'],
        'category': ['agricultural', 'forestry']
    }


@pytest.fixture
def config():
    return {
        'sources': {'static_parcels': 'missing.json', 'admin_features': 'missing-mapkick.json'},
        'settings': {
            'title': 'Test Zones',
            'map_center': [ORIGIN_LAT, ORIGIN_LNG],
            'default_zoom': 13
        },
        'filter_options': {
            'ownership': ['communal', 'private', 'state'],
            'purpose': ['01.03 Personal farming'],
            'category': ['agricultural']
        }
    }
