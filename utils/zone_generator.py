"""
Synthetic cadastral parcel generator for Cadastral Map Creator.

Builds a GeoJSON FeatureCollection of static parcels in the shape of the
"static/generated" source: small near-rectangular trapezoids laid out on a
jittered grid around the community center. Used for demos when no static
parcel file is available, and for tests.

Functions:
    generate_cadastral_number: Cadastral number for a parcel index
    generate_parcel_ring: Outer ring of a single parcel
    generate_cadastral_zones: FeatureCollection of synthetic parcels
"""

import math
import random
from typing import Dict, List, Optional

from utils.logger import get_logger

logger = get_logger(__name__)

# Approximate center of Novyi Yarychiv
CENTER_LAT = 49.95
CENTER_LNG = 24.30

LAND_USE_TYPES = ['Agricultural', 'Residential', 'Commercial', 'Public', 'Forest']

# KOATUU prefix of the community
KOATUU_PREFIX = '4621355200'


def generate_cadastral_number(index: int) -> str:
    """
    Cadastral number in the form 4621355200:ZZ:PPP.

    Zone ZZ groups parcels by hundreds, PPP is the parcel within the zone.

    Example:
        >>> generate_cadastral_number(123)
        '4621355200:02:024'
    """
    zone = index // 100 + 1
    plot = index % 100 + 1
    return f"{KOATUU_PREFIX}:{zone:02d}:{plot:03d}"


def generate_parcel_ring(
    lat_offset: float,
    lng_offset: float,
    rng: random.Random
) -> List[List[float]]:
    """
    Generate the closed outer ring of one parcel.

    Sides are 0.0005-0.002 degrees; the two right-hand corners are shifted by
    up to 0.00005 degrees to form a slight trapezoid.
    """
    size_lat = 0.0005 + rng.random() * 0.0015
    size_lng = 0.0005 + rng.random() * 0.0015

    lat1 = CENTER_LAT + lat_offset
    lng1 = CENTER_LNG + lng_offset
    lat2 = lat1 + size_lat
    lng2 = lng1 + size_lng

    offset = 0.0001 * (rng.random() - 0.5)

    return [
        [lng1, lat1],
        [lng2, lat1 + offset],
        [lng2 + offset, lat2],
        [lng1, lat2],
        [lng1, lat1]
    ]


def generate_cadastral_zones(
    num_zones: int = 250,
    radius: float = 0.02,
    seed: Optional[int] = None
) -> Dict:
    """
    Generate a FeatureCollection of synthetic static parcels.

    Parameters:
    -----------
    num_zones : int
        Number of parcels to generate (default: 250)
    radius : float
        Half-width of the generation area in degrees (default: 0.02)
    seed : Optional[int]
        Random seed for reproducible output

    Returns:
    --------
    Dict
        GeoJSON FeatureCollection of Polygon features with name,
        cadastral_number, area_hectares and land_use properties
    """
    rng = random.Random(seed)
    grid_size = math.ceil(math.sqrt(num_zones)) if num_zones > 0 else 0
    features = []

    for i in range(grid_size):
        for j in range(grid_size):
            index = i * grid_size + j
            if index >= num_zones:
                break

            lat_offset = (i / grid_size - 0.5) * radius * 2 + (rng.random() - 0.5) * 0.001
            lng_offset = (j / grid_size - 0.5) * radius * 2 + (rng.random() - 0.5) * 0.001

            features.append({
                'type': 'Feature',
                'properties': {
                    'name': f"Plot {index + 1}",
                    'cadastral_number': generate_cadastral_number(index),
                    'area_hectares': round(rng.random() * 5 + 0.5, 1),
                    'land_use': rng.choice(LAND_USE_TYPES)
                },
                'geometry': {
                    'type': 'Polygon',
                    'coordinates': [generate_parcel_ring(lat_offset, lng_offset, rng)]
                }
            })

    logger.debug(f"Generated {len(features)} synthetic parcels (seed={seed})")

    return {
        'type': 'FeatureCollection',
        'features': features
    }
