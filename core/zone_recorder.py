"""
Drawn zone recording for Cadastral Map Creator.

Converts a polygon produced by the map drawing tool into the canonical zone
record kept for the session. The session list is append-only: recording
returns a new tuple holding every previous entry plus the new one.

Classes:
    DrawnZone: A recorded drawn polygon with identifier and creation time

Functions:
    record_drawn_zone: Append a drawn polygon to the session's zone list
    zones_to_geojson: Export recorded zones as a FeatureCollection
"""

import copy
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Optional, Sequence, Tuple

from utils.geometry_metrics import count_ring_vertices, outer_ring
from utils.logger import get_logger

logger = get_logger(__name__)

TIMESTAMP_FORMAT = '%Y-%m-%d %H:%M:%S'


@dataclass(frozen=True)
class DrawnZone:
    id: str
    feature: Dict
    timestamp: str

    @property
    def vertex_count(self) -> int:
        """Outer ring length, closing point included."""
        return count_ring_vertices(outer_ring(self.feature.get('geometry')))


def _as_polygon_feature(shape: Dict) -> Dict:
    if not isinstance(shape, dict):
        raise ValueError("Drawn shape must be a GeoJSON Feature or geometry dict")

    if shape.get('type') == 'Feature':
        feature = copy.deepcopy(shape)
        if feature.get('properties') is None:
            feature['properties'] = {}
    else:
        feature = {'type': 'Feature', 'properties': {}, 'geometry': copy.deepcopy(shape)}

    geometry = feature.get('geometry')
    if not isinstance(geometry, dict) or geometry.get('type') != 'Polygon':
        found = geometry.get('type') if isinstance(geometry, dict) else None
        raise ValueError(f"Drawn zone must be a Polygon, got {found}")

    return feature


def _unique_id(base_id: str, zones: Sequence[DrawnZone]) -> str:
    taken = {zone.id for zone in zones}
    if base_id not in taken:
        return base_id

    sequence = 1
    while f"{base_id}-{sequence}" in taken:
        sequence += 1
    return f"{base_id}-{sequence}"


def record_drawn_zone(
    zones: Sequence[DrawnZone],
    shape: Dict,
    now: Optional[datetime] = None
) -> Tuple[DrawnZone, ...]:
    """
    Record a finished drawn polygon.

    Parameters:
    -----------
    zones : Sequence[DrawnZone]
        Zones recorded so far in the session
    shape : Dict
        GeoJSON Feature (or bare geometry) with Polygon geometry, as emitted
        by the drawing tool
    now : Optional[datetime]
        Creation time (defaults to the current local time)

    Returns:
    --------
    Tuple[DrawnZone, ...]
        Previous zones followed by the new one

    Raises:
    -------
    ValueError
        If the drawn shape is not a Polygon

    Example:
        >>> zones = record_drawn_zone((), polygon_feature, now=datetime(2025, 10, 18, 12, 0))
        >>> zones[0].timestamp
        '2025-10-18 12:00:00'
    """
    feature = _as_polygon_feature(shape)

    if now is None:
        now = datetime.now()

    zone_id = _unique_id(f"zone-{int(now.timestamp() * 1000)}", zones)
    zone = DrawnZone(
        id=zone_id,
        feature=feature,
        timestamp=now.strftime(TIMESTAMP_FORMAT)
    )

    logger.info(f"Recorded drawn zone {zone.id} ({zone.vertex_count} vertices)")

    return tuple(zones) + (zone,)


def zones_to_geojson(zones: Sequence[DrawnZone]) -> Dict:
    """
    Export recorded zones as a FeatureCollection.

    Zone id and timestamp are added to a copy of each feature's properties;
    the recorded features are left untouched.
    """
    features = []
    for zone in zones:
        feature = copy.deepcopy(zone.feature)
        feature['id'] = zone.id
        feature['properties'] = {
            **(feature.get('properties') or {}),
            'zone_id': zone.id,
            'timestamp': zone.timestamp,
            'vertices': zone.vertex_count
        }
        features.append(feature)

    return {'type': 'FeatureCollection', 'features': features}
