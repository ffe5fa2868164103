"""
Collection composition module for Cadastral Map Creator.

Turns the raw zone features into the single collection handed to the map
renderer, and derives the filter fingerprint used to decide when the rendered
zone layer must be rebuilt.

Composition steps:
1. Geometry pre-filter (Polygon features only): drop zones whose planar area
   exceeds the general ceiling, and grid-tile rectangles above the much smaller
   rectangle ceiling. Other geometry types pass through.
2. Attribute filter: keep features accepted by the filter predicate.
3. Output survivors in source order, duplicates kept.

Functions:
    passes_geometry_filter: Geometry pre-filter for a single feature
    filter_fingerprint: Deterministic string summarizing a FilterState
    compose_collection: Run the full composition pipeline
"""

from dataclasses import dataclass
from typing import Dict, Iterable, Optional, Tuple

from core.feature_classifier import DIMENSIONS
from core.filter_predicate import FilterState, include
from utils.geometry_metrics import (
    RECTANGLE_TOLERANCE,
    is_axis_aligned_quad,
    outer_ring,
    planar_magnitude
)
from utils.logger import get_logger

logger = get_logger(__name__)

# Area ceilings in squared degrees
MAX_AREA = 0.0005
MAX_RECTANGLE_AREA = 0.00001

VALUE_SEPARATOR = ','
DIMENSION_SEPARATOR = '-'


@dataclass(frozen=True)
class ComposedCollection:
    """Filtered zone features plus the fingerprint of the filters that produced them."""
    features: Tuple[Dict, ...]
    fingerprint: str
    source_count: int
    geometry_excluded: int
    attribute_excluded: int

    def __len__(self) -> int:
        return len(self.features)

    def to_geojson(self) -> Dict:
        return {
            'type': 'FeatureCollection',
            'features': list(self.features)
        }


def passes_geometry_filter(
    feature: Dict,
    max_area: float = MAX_AREA,
    max_rectangle_area: float = MAX_RECTANGLE_AREA,
    tolerance: float = RECTANGLE_TOLERANCE
) -> bool:
    """
    Apply the area-based pre-filter to a single feature.

    Parameters:
    -----------
    feature : Dict
        GeoJSON feature dict
    max_area : float
        General area ceiling in squared degrees (default: 0.0005)
    max_rectangle_area : float
        Ceiling for grid-tile rectangles in squared degrees (default: 0.00001)
    tolerance : float
        Rectangle detection tolerance in degrees (default: 0.0001)

    Returns:
    --------
    bool
        False when a Polygon is too large or is an oversized grid tile,
        True otherwise (non-Polygon features always pass)
    """
    geometry = feature.get('geometry') if isinstance(feature, dict) else None
    if not isinstance(geometry, dict) or geometry.get('type') != 'Polygon':
        return True

    ring = outer_ring(geometry)
    area = planar_magnitude(ring)

    if area > max_area:
        return False
    if is_axis_aligned_quad(ring, tolerance) and area > max_rectangle_area:
        return False

    return True


def _escape(value: str) -> str:
    return (
        str(value)
        .replace('\\', '\\\\')
        .replace(VALUE_SEPARATOR, '\\' + VALUE_SEPARATOR)
        .replace(DIMENSION_SEPARATOR, '\\' + DIMENSION_SEPARATOR)
    )


def filter_fingerprint(filter_state: FilterState) -> str:
    """
    Build the fingerprint string for a FilterState.

    Each dimension's active values are sorted and joined with ',', and the six
    per-dimension strings are joined with '-' in fixed dimension order.
    Separator characters inside values are backslash-escaped so distinct
    selections never collide.

    Example:
        >>> filter_fingerprint(FilterState(land_use={'B', 'A'}, ownership={'private'}))
        'A,B---private--'
    """
    parts = []
    for dimension in DIMENSIONS:
        values = sorted(_escape(v) for v in filter_state.values(dimension))
        parts.append(VALUE_SEPARATOR.join(values))
    return DIMENSION_SEPARATOR.join(parts)


def compose_collection(
    features: Iterable[Dict],
    filter_state: FilterState,
    geometry_settings: Optional[Dict] = None
) -> ComposedCollection:
    """
    Compose the renderable zone collection for a filter snapshot.

    Parameters:
    -----------
    features : Iterable[Dict]
        Zone features from all sources, in display order
    filter_state : FilterState
        Active filter selection
    geometry_settings : Optional[Dict]
        Overrides for 'max_area', 'max_rectangle_area' and 'rectangle_tolerance'
        (see config.config_loader.load_geometry_filter_settings)

    Returns:
    --------
    ComposedCollection
        Surviving features (same objects as the input, order preserved) with
        the filter fingerprint and exclusion counts
    """
    settings = geometry_settings or {}
    max_area = settings.get('max_area', MAX_AREA)
    max_rectangle_area = settings.get('max_rectangle_area', MAX_RECTANGLE_AREA)
    tolerance = settings.get('rectangle_tolerance', RECTANGLE_TOLERANCE)

    source = list(features)

    geometry_survivors = [
        f for f in source
        if passes_geometry_filter(f, max_area, max_rectangle_area, tolerance)
    ]
    output = tuple(f for f in geometry_survivors if include(f, filter_state))

    fingerprint = filter_fingerprint(filter_state)

    logger.debug(
        f"Composed {len(output)} of {len(source)} features "
        f"({len(source) - len(geometry_survivors)} dropped by geometry, "
        f"{len(geometry_survivors) - len(output)} by filters)"
    )
    logger.debug(f"Filter fingerprint: {fingerprint}")

    return ComposedCollection(
        features=output,
        fingerprint=fingerprint,
        source_count=len(source),
        geometry_excluded=len(source) - len(geometry_survivors),
        attribute_excluded=len(geometry_survivors) - len(output)
    )
