#!/usr/bin/env python
"""
Cadastral Map Creator
=====================
Renders cadastral zones of a territorial community on an interactive Leaflet web map,
filtered by land use, administrative type, source layer, ownership, purpose and category,
with a drawing tool for recording new polygonal zones.
"""

from pathlib import Path
from typing import Dict, Iterable, Optional
import time

# Import logging first
from utils.logger import setup_logging, get_logger

# Import configuration
from config.config_loader import (
    load_config,
    load_geometry_filter_settings,
    load_generator_settings,
    resolve_source_path
)

# Import core modules
from core.source_loader import load_feature_source, extract_source_metadata, source_bounds
from core.session import ZoneSession
from core.map_builder import create_zone_map
from core.output_generator import generate_output
from utils.zone_generator import generate_cadastral_zones


def load_sources(config: Dict, static_source: Optional[str], admin_source: Optional[str]):
    """
    Load both feature sources named in the arguments or configuration.

    The static parcel source falls back to synthetic parcels when its file is
    missing and 'generate_missing_static' is enabled. A missing administrative
    source yields no features.

    Returns:
        Tuple of (static_features, admin_features, source_metadata)
    """
    logger = get_logger(__name__)
    sources = config['sources']
    metadata = {}

    static_path = resolve_source_path(static_source or sources['static_parcels'])
    if static_path.exists():
        static_features = load_feature_source(static_path)
        metadata['static_parcels'] = extract_source_metadata(static_features, static_path)
    elif config['settings'].get('generate_missing_static', True):
        generator_settings = load_generator_settings(config)
        logger.info(f"Static parcels not found ({static_path.name}), generating synthetic parcels")
        static_features = generate_cadastral_zones(**generator_settings)['features']
        metadata['static_parcels'] = extract_source_metadata(static_features, 'generated')
    else:
        raise FileNotFoundError(f"Static parcel source not found: {static_path}")

    admin_path = resolve_source_path(admin_source or sources['admin_features'])
    if admin_path.exists():
        admin_features = load_feature_source(admin_path)
        metadata['admin_features'] = extract_source_metadata(admin_features, admin_path)
    else:
        logger.warning(f"⚠ Administrative source not found: {admin_path}")
        admin_features = []

    return static_features, admin_features, metadata


def main(
    static_source: Optional[str] = None,
    admin_source: Optional[str] = None,
    output_name: Optional[str] = None,
    filter_overrides: Optional[Dict[str, Iterable[str]]] = None,
    drawn_zones: Optional[Iterable[Dict]] = None,
    config_path: Optional[Path] = None,
    output_dir: Optional[Path] = None
) -> Optional[Path]:
    """
    Main execution workflow for Cadastral Map Creator.

    Workflow Steps:
    1. Setup logging to console and file
    2. Load configuration
    3. Load static and administrative feature sources
    4. Start a session with all filters active, then apply overrides
    5. Compose the filtered zone collection
    6. Record drawn zones
    7. Create interactive web map
    8. Generate output files

    Parameters:
    -----------
    static_source : Optional[str]
        Static parcel GeoJSON (defaults to the configured source)
    admin_source : Optional[str]
        Administrative export GeoJSON (defaults to the configured source)
    output_name : Optional[str]
        Custom name for output directory (defaults to timestamped name)
    filter_overrides : Optional[Dict[str, Iterable[str]]]
        Active values per dimension replacing the all-active default
    drawn_zones : Optional[Iterable[Dict]]
        Polygon features to record as drawn zones
    config_path : Optional[Path]
        Alternate configuration file
    output_dir : Optional[Path]
        Parent directory for outputs

    Returns:
    --------
    Optional[Path]
        Path to output directory if successful, None if failed

    Example:
        >>> output_path = main(filter_overrides={'land_use': ['Forest', 'Public']})
        >>> print(f"Map saved to: {output_path / 'index.html'}")
    """
    workflow_start_time = time.time()

    log_file = setup_logging()
    logger = get_logger(__name__)

    logger.info("=" * 80)
    logger.info("CADASTRAL MAP CREATOR - Cadastral Zone Viewer")
    logger.info("=" * 80)
    logger.info(f"Log file: {log_file}")
    logger.info("")

    try:
        config = load_config(config_path)
        logger.info("Configuration loaded")

        static_features, admin_features, source_metadata = load_sources(
            config, static_source, admin_source
        )

        session = ZoneSession(
            static_features,
            admin_features,
            filter_options=config.get('filter_options', {}),
            geometry_settings=load_geometry_filter_settings(config)
        )

        filter_state = session.filter_state
        for dimension, values in (filter_overrides or {}).items():
            filter_state = filter_state.with_values(dimension, values)
        composed = session.apply_filters(filter_state)

        if len(composed) == 0:
            logger.warning("⚠ WARNING: No zones remain after filtering.")
            logger.info("")

        for shape in drawn_zones or []:
            session.record_zone(shape)

        map_obj = create_zone_map(
            composed,
            config,
            drawn_zones=session.drawn_zones,
            catalog=session.catalog,
            filter_state=session.filter_state,
            bounds=source_bounds(list(composed.features))
        )

        output_path = generate_output(
            map_obj, composed, session.drawn_zones, session.filter_state,
            output_name=output_name,
            source_metadata=source_metadata,
            output_dir=output_dir
        )

        total_execution_time = time.time() - workflow_start_time

        logger.info("")
        logger.info("✓ WORKFLOW COMPLETE")
        logger.info(f"✓ Total execution time: {total_execution_time:.2f} seconds")
        logger.info(f"✓ Output directory: {output_path}")
        logger.info(f"✓ Log file: {log_file}")
        logger.info("")

        return output_path

    except Exception as e:
        elapsed_time = time.time() - workflow_start_time

        logger.error("")
        logger.error("=" * 80)
        logger.error("✗ WORKFLOW FAILED")
        logger.error("=" * 80)
        logger.error(f"Error: {str(e)}", exc_info=True)
        logger.error(f"Workflow failed after {elapsed_time:.2f} seconds")
        logger.error("")
        logger.error(f"See log file for details: {log_file}")
        logger.error("=" * 80)
        return None


if __name__ == "__main__":
    output_dir = main()

    if output_dir:
        print(f"\n✓ Success! Open {output_dir / 'index.html'} in your browser.")
    else:
        print("\n✗ Failed to generate map. Check log file for details.")
