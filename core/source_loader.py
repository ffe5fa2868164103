"""
Feature source loading module for Cadastral Map Creator.

This module reads the two zone feature sources and derives the catalog of
filter values they make available.

Sources:
    static parcels: GeoJSON FeatureCollection (name, cadastral_number,
        area_hectares, land_use)
    administrative export: GeoJSON FeatureCollection or a bare JSON array of
        features, optionally tagged with a feature-level 'sourceLayer'

Functions:
    load_feature_source: Read features from a GeoJSON / JSON array file
    build_filter_catalog: Collect the known values of every filter dimension
    source_bounds: Bounding box of a feature list via GeoPandas
    extract_source_metadata: Summary of a loaded source for output metadata
"""

import json
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional, Union

import geopandas as gpd
from shapely.errors import ShapelyError

from core.feature_classifier import (
    ADMINISTRATIVE_TYPE,
    CADASTRAL_KEYS,
    DIMENSIONS,
    LAND_USE,
    SOURCE_LAYER,
    feature_properties,
    feature_source_layer
)
from utils.logger import get_logger

logger = get_logger(__name__)


def load_feature_source(file_path: Union[str, Path]) -> List[Dict]:
    """
    Read zone features from a GeoJSON file.

    Accepts a FeatureCollection or a bare JSON array of features. Entries that
    are not JSON objects are skipped with a warning.

    Parameters:
    -----------
    file_path : Union[str, Path]
        Path to the source file

    Returns:
    --------
    List[Dict]
        Feature dicts in file order

    Raises:
    -------
    FileNotFoundError
        If the file doesn't exist
    ValueError
        If the file is not valid JSON or has an unsupported top-level shape
    """
    path = Path(file_path)

    if not path.exists():
        raise FileNotFoundError(f"Feature source not found: {path}")

    logger.info(f"Loading features from: {path}")

    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Failed to read feature source {path.name}: {e}") from e

    if isinstance(data, dict) and data.get('type') == 'FeatureCollection':
        raw_features = data.get('features') or []
    elif isinstance(data, list):
        raw_features = data
    else:
        raise ValueError(
            f"Unsupported feature source shape in {path.name}: "
            "expected a FeatureCollection or an array of features"
        )

    features = [f for f in raw_features if isinstance(f, dict)]
    skipped = len(raw_features) - len(features)
    if skipped:
        logger.warning(f"  - Skipped {skipped} malformed entries")

    logger.info(f"  - Loaded {len(features)} feature(s)")
    return features


def build_filter_catalog(
    features: Iterable[Dict],
    filter_options: Optional[Mapping[str, Iterable[str]]] = None
) -> Dict[str, List[str]]:
    """
    Collect the known values of every filter dimension.

    Land use, administrative type and source layer values come from the
    features themselves ('index_data' is never a layer). Ownership, purpose
    and category start from the configured option lists and are extended with
    any values present in the data so every zone is visible by default.

    Parameters:
    -----------
    features : Iterable[Dict]
        Zone features from all sources
    filter_options : Optional[Mapping[str, Iterable[str]]]
        Configured option lists keyed by dimension

    Returns:
    --------
    Dict[str, List[str]]
        Sorted known values per dimension
    """
    catalog = {dimension: set() for dimension in DIMENSIONS}

    for dimension, options in (filter_options or {}).items():
        if dimension in catalog:
            catalog[dimension].update(options)

    for feature in features:
        props = feature_properties(feature)

        if isinstance(props.get('land_use'), str) and props['land_use']:
            catalog[LAND_USE].add(props['land_use'])
        if isinstance(props.get('TYPE'), str) and props['TYPE']:
            catalog[ADMINISTRATIVE_TYPE].add(props['TYPE'])
        for key in CADASTRAL_KEYS:
            if isinstance(props.get(key), str) and props[key]:
                catalog[key].add(props[key])

        layer = feature_source_layer(feature)
        if isinstance(layer, str):
            catalog[SOURCE_LAYER].add(layer)

    result = {dimension: sorted(values) for dimension, values in catalog.items()}
    logger.debug(
        "Filter catalog: " + ", ".join(f"{d}={len(v)}" for d, v in result.items())
    )
    return result


def _to_geodataframe(features: List[Dict]) -> gpd.GeoDataFrame:
    with_geometry = [f for f in features if isinstance(f.get('geometry'), dict)]
    return gpd.GeoDataFrame.from_features(with_geometry, crs='EPSG:4326')


def source_bounds(features: List[Dict]) -> Optional[List[float]]:
    """
    Bounding box [minx, miny, maxx, maxy] of the features.

    Returns None when there are no readable geometries.
    """
    if not features:
        return None

    try:
        gdf = _to_geodataframe(features)
    except (ShapelyError, ValueError, TypeError, KeyError, AttributeError) as e:
        logger.warning(f"Could not compute bounds: {e}")
        return None

    if gdf.empty:
        return None

    return gdf.total_bounds.tolist()


def extract_source_metadata(features: List[Dict], file_path: Union[str, Path]) -> Dict:
    """
    Extract metadata about a loaded source for tracking.

    Args:
        features: Features read from the source
        file_path: Original file path

    Returns:
        Dictionary with metadata fields
    """
    geometry_types = sorted({
        f['geometry'].get('type')
        for f in features
        if isinstance(f.get('geometry'), dict) and f['geometry'].get('type')
    })

    return {
        'original_file': str(Path(file_path).name),
        'feature_count': len(features),
        'geometry_types': geometry_types,
        'bounds': source_bounds(features)
    }
