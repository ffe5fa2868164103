"""Tests for zone popup HTML."""

import pytest

from utils.popup_formatters import format_popup_value, format_zone_popup


@pytest.mark.unit
class TestPopupFormatters:
    @pytest.mark.parametrize('value,expected', [
        ('Lviv Oblast', 'Lviv Oblast'),
        (None, 'N/A'),
        ('', 'N/A'),
        (float('nan'), 'N/A'),
        (2.5, '2.5'),
        (0, '0')
    ])
    def test_format_value(self, value, expected):
        assert format_popup_value(value) == expected

    def test_static_parcel(self, static_parcel):
        html = format_zone_popup(static_parcel)
        assert 'Plot 1' in html
        assert '4621355200:01:001' in html
        assert '2.5 ha' in html
        assert 'Forest' in html

    def test_admin_boundary_missing_values(self, polygon_feature):
        html = format_zone_popup(polygon_feature(properties={'TYPE': 'hromada'}))
        assert 'hromada' in html
        assert 'N/A' in html

    def test_cadastral_parcel_shows_present_fields_only(self, polygon_feature):
        html = format_zone_popup(polygon_feature(properties={'ownership': 'communal'}))
        assert 'Власність' in html
        assert 'communal' in html
        assert 'Категорія' not in html

    def test_fallback(self, polygon_feature):
        assert 'Feature data available' in format_zone_popup(polygon_feature())

    def test_attribute_values_are_escaped(self, polygon_feature):
        feature = polygon_feature(properties={
            'land_use': 'Forest & Park',
            'name': '<script>alert(1)</script>'
        })
        html = format_zone_popup(feature)
        assert '<script>' not in html
        assert '&lt;script&gt;alert(1)&lt;/script&gt;' in html
        assert 'Forest &amp; Park' in html

    def test_missing_area_keeps_unit(self, polygon_feature):
        html = format_zone_popup(polygon_feature(properties={'land_use': 'Forest'}))
        assert 'N/A ha' in html
