"""
Output generation module for Cadastral Map Creator.

This module handles saving the generated map and data files to the output directory.
Creates a timestamped directory structure with HTML map, GeoJSON data files, and metadata.

Functions:
    build_summary: Metadata summary of a composed collection and drawn zones
    generate_output: Save map, data files, and metadata to output directory
"""

import folium
import json
from pathlib import Path
from datetime import datetime
from typing import Dict, Optional, Sequence

from config.config_loader import OUTPUT_DIR
from core.collection_composer import ComposedCollection
from core.filter_predicate import FilterState
from core.map_builder import zone_layer_name
from core.source_loader import source_bounds
from core.zone_recorder import DrawnZone, zones_to_geojson
from utils.geometry_metrics import count_geometry_vertices
from utils.logger import get_logger

logger = get_logger(__name__)


def build_summary(
    composed: ComposedCollection,
    drawn_zones: Sequence[DrawnZone],
    filter_state: FilterState,
    source_metadata: Optional[Dict] = None
) -> Dict:
    """
    Summarize a composition run for metadata.json.

    Returns:
        Dictionary with fingerprint, layer name, feature counts, vertex
        totals, bounds, active filters and drawn zone list
    """
    summary = {
        'generated_at': datetime.now().isoformat(),
        'fingerprint': composed.fingerprint,
        'layer_name': zone_layer_name(composed.fingerprint),
        'zones': {
            'source_count': composed.source_count,
            'geometry_excluded': composed.geometry_excluded,
            'attribute_excluded': composed.attribute_excluded,
            'rendered': len(composed),
            'total_vertices': sum(
                count_geometry_vertices(f.get('geometry')) for f in composed.features
            ),
            'bounds': source_bounds(list(composed.features))
        },
        'active_filters': filter_state.as_dict(),
        'drawn_zones': [
            {'id': zone.id, 'timestamp': zone.timestamp, 'vertices': zone.vertex_count}
            for zone in drawn_zones
        ]
    }

    if source_metadata:
        summary['sources'] = source_metadata

    return summary


def generate_output(
    map_obj: folium.Map,
    composed: ComposedCollection,
    drawn_zones: Sequence[DrawnZone],
    filter_state: FilterState,
    output_name: Optional[str] = None,
    source_metadata: Optional[Dict] = None,
    output_dir: Optional[Path] = None
) -> Path:
    """
    Generate output directory with HTML map, GeoJSON data files and metadata.

    Creates an output directory containing:
    - index.html: Interactive Leaflet map
    - metadata.json: Summary statistics and active filters
    - data/cadastral_zones.geojson: Composed zone collection
    - data/drawn_zones.geojson: Zones drawn in the session

    Parameters:
    -----------
    map_obj : folium.Map
        Folium map object to save
    composed : ComposedCollection
        Zones shown on the map
    drawn_zones : Sequence[DrawnZone]
        Zones recorded in the session
    filter_state : FilterState
        Filters that produced the composed collection
    output_name : Optional[str]
        Custom output directory name (defaults to timestamped name)
    source_metadata : Optional[Dict]
        Per-source metadata to include in metadata.json
    output_dir : Optional[Path]
        Parent directory for outputs (defaults to OUTPUT_DIR)

    Returns:
    --------
    Path
        Path to output directory

    Example:
        >>> output_path = generate_output(map_obj, composed, zones, session.filter_state)
        >>> output_path
        Path('outputs/cadastral_map_20251018_143022')
    """
    logger.info("=" * 80)
    logger.info("Generating Output Files")
    logger.info("=" * 80)

    if output_name is None:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        output_name = f"cadastral_map_{timestamp}"

    output_path = (output_dir or OUTPUT_DIR) / output_name
    output_path.mkdir(parents=True, exist_ok=True)

    data_path = output_path / 'data'
    data_path.mkdir(exist_ok=True)

    logger.info(f"Output directory: {output_path}")

    logger.info(f"  - Saving {len(composed)} zones...")
    zones_file = data_path / 'cadastral_zones.geojson'
    with open(zones_file, 'w', encoding='utf-8') as f:
        json.dump(composed.to_geojson(), f, ensure_ascii=False)

    logger.info(f"  - Saving {len(drawn_zones)} drawn zones...")
    drawn_file = data_path / 'drawn_zones.geojson'
    with open(drawn_file, 'w', encoding='utf-8') as f:
        json.dump(zones_to_geojson(drawn_zones), f, ensure_ascii=False)

    logger.info("  - Saving interactive map...")
    map_file = output_path / 'index.html'
    map_obj.save(str(map_file))

    logger.info("  - Saving metadata...")
    metadata_file = output_path / 'metadata.json'
    summary = build_summary(composed, drawn_zones, filter_state, source_metadata)
    with open(metadata_file, 'w', encoding='utf-8') as f:
        json.dump(summary, f, indent=2, ensure_ascii=False)

    logger.info("")
    logger.info("=" * 80)
    logger.info("✓ Output Generation Complete")
    logger.info("=" * 80)
    logger.info(f"Files saved to: {output_path}")
    logger.info("  - index.html (interactive map)")
    logger.info("  - metadata.json (summary statistics)")
    logger.info("  - data/ (2 GeoJSON files)")
    logger.info("")
    logger.info(f"To view the map, open: {map_file}")
    logger.info("=" * 80)

    return output_path
