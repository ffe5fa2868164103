"""
Geometry metrics for Cadastral Map Creator.

This module provides the planar area estimate and grid-tile rectangle test used
to suppress noisy synthetic geometry, plus vertex counting helpers.

Coordinates are (longitude, latitude) pairs taken as-is. The area computed here
is an unprojected trapezoid sum in squared degrees, not a geodesic area, so
callers must not treat it as hectares.

Functions:
    outer_ring: Extract the outer ring of a GeoJSON Polygon geometry
    planar_magnitude: Shoelace-derived planar area of a ring
    is_axis_aligned_quad: Detect closed 4-corner grid-tile rectangles
    count_ring_vertices: Display vertex count of a ring
    count_geometry_vertices: Total vertices in a Polygon or MultiPolygon
"""

from typing import Dict, List, Optional, Sequence
from shapely.geometry import shape
from shapely.errors import ShapelyError

from utils.logger import get_logger

logger = get_logger(__name__)

# Width/height match tolerance for grid-tile detection (degrees)
RECTANGLE_TOLERANCE = 0.0001

Ring = Sequence[Sequence[float]]


def outer_ring(geometry: Optional[Dict]) -> Optional[List]:
    """
    Return the first (outer) ring of a GeoJSON Polygon geometry.

    Returns None for non-Polygon geometries and for polygons without rings.
    """
    if not isinstance(geometry, dict) or geometry.get('type') != 'Polygon':
        return None

    coordinates = geometry.get('coordinates')
    if not coordinates or not isinstance(coordinates, (list, tuple)):
        return None

    return coordinates[0] or None


def planar_magnitude(ring: Optional[Ring]) -> float:
    """
    Compute the planar area magnitude of a ring.

    Sums (x[i+1] - x[i]) * (y[i+1] + y[i]) over consecutive vertex pairs and
    returns half the absolute value.

    Parameters:
    -----------
    ring : Optional[Ring]
        Sequence of [lon, lat] coordinates, first and last equal

    Returns:
    --------
    float
        Area estimate in squared degrees. 0.0 for rings with fewer than two
        points or malformed coordinates.

    Example:
        >>> planar_magnitude([[0, 0], [2, 0], [2, 1], [0, 1], [0, 0]])
        2.0
    """
    if not ring or len(ring) < 2:
        return 0.0

    area = 0.0
    try:
        for i in range(len(ring) - 1):
            x1, y1 = float(ring[i][0]), float(ring[i][1])
            x2, y2 = float(ring[i + 1][0]), float(ring[i + 1][1])
            area += (x2 - x1) * (y2 + y1)
    except (TypeError, ValueError, IndexError):
        logger.debug("Malformed ring coordinates, treating area as 0")
        return 0.0

    return abs(area / 2)


def is_axis_aligned_quad(
    ring: Optional[Ring],
    tolerance: float = RECTANGLE_TOLERANCE
) -> bool:
    """
    Check whether a ring is a closed 4-corner grid-tile rectangle.

    Only rings with exactly 5 coordinates (4 corners + closing point) qualify.
    Opposite side widths |x2-x1| vs |x3-x4| and heights |y4-y1| vs |y3-y2|
    must each differ by less than the tolerance. This is not a general
    bounding-box test.

    Parameters:
    -----------
    ring : Optional[Ring]
        Sequence of [lon, lat] coordinates
    tolerance : float
        Maximum width/height difference in degrees (default: 0.0001)

    Returns:
    --------
    bool
        True for grid-tile rectangles, False otherwise (including malformed rings)
    """
    if not ring or len(ring) != 5:
        return False

    try:
        p1, p2, p3, p4 = [(float(p[0]), float(p[1])) for p in ring[:4]]
    except (TypeError, ValueError, IndexError):
        return False

    width1 = abs(p2[0] - p1[0])
    width2 = abs(p3[0] - p4[0])
    height1 = abs(p4[1] - p1[1])
    height2 = abs(p3[1] - p2[1])

    return abs(width1 - width2) < tolerance and abs(height1 - height2) < tolerance


def count_ring_vertices(ring: Optional[Ring]) -> int:
    """Vertex count shown for a ring, closing duplicate included."""
    if not ring:
        return 0
    return len(ring)


def count_geometry_vertices(geometry: Optional[Dict]) -> int:
    """
    Count total vertices in a Polygon or MultiPolygon geometry.

    Parameters:
    -----------
    geometry : Optional[Dict]
        GeoJSON geometry dict

    Returns:
    --------
    int
        Total number of vertices across exterior and interior rings,
        0 for other geometry types or unreadable geometry
    """
    if not geometry:
        return 0

    try:
        geom = shape(geometry)
    except (ShapelyError, TypeError, ValueError, KeyError, IndexError, AttributeError) as e:
        logger.debug(f"Could not read geometry for vertex count: {e}")
        return 0

    if geom.is_empty:
        return 0

    if geom.geom_type == 'Polygon':
        count = len(geom.exterior.coords)
        for interior in geom.interiors:
            count += len(interior.coords)
        return count

    elif geom.geom_type == 'MultiPolygon':
        total = 0
        for polygon in geom.geoms:
            total += len(polygon.exterior.coords)
            for interior in polygon.interiors:
                total += len(interior.coords)
        return total

    return 0
