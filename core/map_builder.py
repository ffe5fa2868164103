"""
Map building module for Cadastral Map Creator.

This module creates interactive Leaflet maps with Folium showing the composed
cadastral zones, a polygon drawing control, recorded drawn zones and a side
panel with the active filters and drawn zone list.

The zone layer is named after the filter fingerprint, so a renderer comparing
layer names knows exactly when the zone geometry must be rebuilt.

Functions:
    zone_layer_name: Layer name derived from a filter fingerprint
    build_filter_summary: Active/inactive values per dimension for the side panel
    create_zone_map: Generate complete interactive Leaflet map
"""

import copy
import hashlib
import json
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Sequence

import folium
from folium import Element, plugins
from jinja2 import Environment, FileSystemLoader

from core.collection_composer import ComposedCollection
from core.feature_classifier import DIMENSIONS
from core.filter_predicate import FilterState
from core.zone_recorder import DrawnZone, zones_to_geojson
from utils.popup_formatters import format_zone_popup
from utils.logger import get_logger

logger = get_logger(__name__)

# Template directory path
TEMPLATES_DIR = Path(__file__).parent.parent / 'templates'

DIMENSION_LABELS = {
    'land_use': 'Land Use Category',
    'administrative_type': 'Administrative Type',
    'source_layer': 'Source Layer',
    'ownership': 'Форма власності (Ownership)',
    'purpose': 'Цільове призначення (Purpose)',
    'category': 'Категорія земель (Category)'
}

DEFAULT_ZONE_STYLE = {
    'color': '#2ecc71',
    'weight': 2,
    'fillOpacity': 0.35,
    'fillColor': '#27ae60'
}

DEFAULT_DRAWN_STYLE = {
    'color': '#3388ff',
    'weight': 2,
    'fillOpacity': 0.4
}


def zone_layer_name(fingerprint: str) -> str:
    """
    Layer name for the zone collection rendered under a fingerprint.
    """
    digest = hashlib.sha1(fingerprint.encode('utf-8')).hexdigest()[:12]
    return f"cadastral-zones-{digest}"


def build_filter_summary(
    catalog: Mapping[str, Sequence[str]],
    filter_state: FilterState
) -> List[Dict]:
    """
    Describe each dimension's known values and whether they are active.

    Returns:
        List of {'dimension', 'label', 'values': [{'value', 'active'}]} in
        fixed dimension order
    """
    summary = []
    for dimension in DIMENSIONS:
        summary.append({
            'dimension': dimension,
            'label': DIMENSION_LABELS[dimension],
            'values': [
                {'value': value, 'active': filter_state.is_active(dimension, value)}
                for value in catalog.get(dimension, [])
            ]
        })
    return summary


def create_zone_map(
    composed: ComposedCollection,
    config: Dict,
    drawn_zones: Sequence[DrawnZone] = (),
    catalog: Optional[Mapping[str, Sequence[str]]] = None,
    filter_state: Optional[FilterState] = None,
    bounds: Optional[List[float]] = None
) -> folium.Map:
    """
    Create an interactive Leaflet map with the composed zones.

    Generates a web map including:
    - OpenStreetMap base tiles
    - Composed cadastral zones with schema-specific popups
    - Polygon drawing control
    - Previously recorded drawn zones
    - Side panel with filter summary and drawn zone list
    - Fullscreen mode and mouse position

    Parameters:
    -----------
    composed : ComposedCollection
        Filtered zones to display
    config : Dict
        Configuration dictionary
    drawn_zones : Sequence[DrawnZone]
        Zones recorded in the session
    catalog : Optional[Mapping[str, Sequence[str]]]
        Known filter values per dimension (for the side panel)
    filter_state : Optional[FilterState]
        Active filters (for the side panel)
    bounds : Optional[List[float]]
        [minx, miny, maxx, maxy] to fit the view to

    Returns:
    --------
    folium.Map
        Folium map object ready to be saved

    Example:
        >>> map_obj = create_zone_map(session.compose(), config, session.drawn_zones)
        >>> map_obj.save('index.html')
    """
    logger.info("=" * 80)
    logger.info("Creating Interactive Web Map")
    logger.info("=" * 80)

    settings = config.get('settings', {})
    center = settings.get('map_center', [49.95, 24.30])

    m = folium.Map(
        location=center,
        zoom_start=settings.get('default_zoom', 13),
        tiles=None
    )

    folium.TileLayer('OpenStreetMap', name='Street Map', control=True).add_to(m)

    # Zone layer, rebuilt whenever the fingerprint changes
    layer_name = zone_layer_name(composed.fingerprint)
    zone_style = {**DEFAULT_ZONE_STYLE, **settings.get('zone_style', {})}

    if len(composed) > 0:
        logger.info(f"  - Adding {len(composed)} zones as {layer_name}...")

        # Popup HTML and layer ids go on copies so source features stay untouched
        zone_data = copy.deepcopy(composed.to_geojson())
        for index, feature in enumerate(zone_data['features']):
            feature['id'] = f"zone-{index}"
            if not isinstance(feature.get('properties'), dict):
                feature['properties'] = {}
            feature['properties']['popup_html'] = format_zone_popup(feature)

        zone_layer = folium.GeoJson(
            zone_data,
            name=layer_name,
            style_function=lambda x, style=zone_style: {**style, 'className': 'cadastre-zone'}
        )
        zone_layer.add_child(
            folium.GeoJsonPopup(fields=['popup_html'], labels=False, style="max-width: 400px;")
        )
        zone_layer.add_to(m)
    else:
        logger.info("  - Skipping zone layer (0 zones after filters)")

    # Drawn zones from this session
    drawn_style = {**DEFAULT_DRAWN_STYLE, **settings.get('drawn_zone_style', {})}
    if drawn_zones:
        logger.info(f"  - Adding {len(drawn_zones)} drawn zones...")
        folium.GeoJson(
            zones_to_geojson(drawn_zones),
            name='Drawn zones',
            style_function=lambda x, style=drawn_style: style,
            popup=folium.GeoJsonPopup(
                fields=['zone_id', 'timestamp', 'vertices'],
                aliases=['Zone', 'Added', 'Vertices']
            )
        ).add_to(m)

    # Polygon-only drawing control
    plugins.Draw(
        export=True,
        filename='drawn_zones.geojson',
        position='topright',
        draw_options={
            'polygon': {
                'allowIntersection': False,
                'showArea': True,
                'shapeOptions': drawn_style
            },
            'polyline': False,
            'rectangle': False,
            'circle': False,
            'marker': False,
            'circlemarker': False
        },
        edit_options={'remove': True}
    ).add_to(m)

    plugins.Fullscreen(position='topleft').add_to(m)
    plugins.MousePosition().add_to(m)

    # Side panel
    logger.info("  - Adding side panel...")
    env = Environment(loader=FileSystemLoader(str(TEMPLATES_DIR)))
    panel_template = env.get_template('zones_panel.html')
    panel_html = panel_template.render(
        title=settings.get('title', 'Cadastral Zones'),
        fingerprint=composed.fingerprint,
        zone_count=len(composed),
        source_count=composed.source_count,
        filters=build_filter_summary(catalog or {}, filter_state or FilterState()),
        zones=[
            {
                'id': zone.id,
                'timestamp': zone.timestamp,
                'vertex_count': zone.vertex_count,
                'geojson': json.dumps(zone.feature, indent=2, ensure_ascii=False)
            }
            for zone in drawn_zones
        ]
    )
    m.get_root().html.add_child(Element(panel_html))

    if bounds:
        m.fit_bounds([[bounds[1], bounds[0]], [bounds[3], bounds[2]]])

    m.get_root().title = settings.get('title', 'Cadastral Zones')

    logger.info("  ✓ Map created successfully\n")

    return m
