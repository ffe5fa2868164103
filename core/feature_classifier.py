"""
Feature classification module for Cadastral Map Creator.

Zone features arrive from two differently-shaped sources. The attribute keys
present on a feature decide which schema it follows and which filter
dimensions govern whether it is shown.

Schemas:
    StaticParcel: generated/static parcels (name, cadastral_number, area_hectares, land_use)
    AdminBoundary: administrative boundaries (TYPE, ADMIN_1..3, KOATUU_old)
    CadastralParcel: cadastral parcels (ownership, purpose, category, koatuu)
    Unclassified: none of the recognised keys

Precedence (features without an attribute bag are always included):
    1. sourceLayer tag not in the active source layers -> excluded
       ('index_data' tiles are never selectable, so they are always excluded)
    2-4. ownership / purpose / category, each checked when present
    5. land_use -> land use dimension, TYPE ignored
    6. TYPE -> administrative type dimension
    7. nothing recognised -> always included

Functions:
    feature_properties: Attribute bag of a feature (empty dict if missing)
    layer_tag: Raw source layer tag of a feature
    feature_source_layer: Selectable source layer of a feature, if any
    classify_feature: Resolve the schema variant of a feature
    governing_dimensions: Filter dimensions (and values) that decide inclusion
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple, Union

# Filter dimensions, in fingerprint order
LAND_USE = 'land_use'
ADMINISTRATIVE_TYPE = 'administrative_type'
SOURCE_LAYER = 'source_layer'
OWNERSHIP = 'ownership'
PURPOSE = 'purpose'
CATEGORY = 'category'

DIMENSIONS = (LAND_USE, ADMINISTRATIVE_TYPE, SOURCE_LAYER, OWNERSHIP, PURPOSE, CATEGORY)

# Placeholder layer used by the administrative export, never a real layer
INDEX_LAYER = 'index_data'

# Cadastral parcel attribute keys, each checked independently
CADASTRAL_KEYS = (OWNERSHIP, PURPOSE, CATEGORY)


@dataclass(frozen=True)
class StaticParcel:
    land_use: str
    name: Optional[str] = None
    cadastral_number: Optional[str] = None
    area_hectares: Optional[float] = None


@dataclass(frozen=True)
class AdminBoundary:
    admin_type: str
    admin_1: Optional[str] = None
    admin_2: Optional[str] = None
    admin_3: Optional[str] = None
    koatuu_old: Optional[str] = None


@dataclass(frozen=True)
class CadastralParcel:
    ownership: Optional[str] = None
    purpose: Optional[str] = None
    category: Optional[str] = None
    koatuu: Optional[str] = None


@dataclass(frozen=True)
class Unclassified:
    pass


ZoneSchema = Union[StaticParcel, AdminBoundary, CadastralParcel, Unclassified]


def feature_properties(feature: Any) -> Dict:
    """Attribute bag of a feature, or an empty dict when missing or malformed."""
    if not isinstance(feature, dict):
        return {}
    props = feature.get('properties')
    return props if isinstance(props, dict) else {}


def layer_tag(feature: Any) -> Optional[str]:
    """
    Raw source layer tag of a feature, 'index_data' included.

    The administrative export carries the tag at feature level; a tag stored in
    the attribute bag is honoured when the feature-level one is absent.
    """
    if not isinstance(feature, dict):
        return None
    return feature.get('sourceLayer') or feature_properties(feature).get('sourceLayer') or None


def feature_source_layer(feature: Any) -> Optional[str]:
    """
    Return the real source layer of a feature, for the filter catalog.

    The 'index_data' placeholder is not a selectable layer and is reported as
    None.
    """
    layer = layer_tag(feature)
    if layer == INDEX_LAYER:
        return None
    return layer


def classify_feature(feature: Any) -> ZoneSchema:
    """
    Resolve which schema a feature follows from the keys it carries.

    Parameters:
    -----------
    feature : Any
        GeoJSON feature dict

    Returns:
    --------
    ZoneSchema
        CadastralParcel if any of ownership/purpose/category is present,
        otherwise StaticParcel for land_use, AdminBoundary for TYPE,
        Unclassified when nothing is recognised

    Example:
        >>> classify_feature({'properties': {'land_use': 'Forest', 'name': 'Plot 1'}})
        StaticParcel(land_use='Forest', name='Plot 1', cadastral_number=None, area_hectares=None)
    """
    props = feature_properties(feature)

    if any(props.get(key) for key in CADASTRAL_KEYS):
        return CadastralParcel(
            ownership=props.get('ownership') or None,
            purpose=props.get('purpose') or None,
            category=props.get('category') or None,
            koatuu=props.get('koatuu') or None
        )

    # land_use wins over TYPE when both are present
    if props.get('land_use'):
        return StaticParcel(
            land_use=props['land_use'],
            name=props.get('name'),
            cadastral_number=props.get('cadastral_number'),
            area_hectares=props.get('area_hectares')
        )

    if props.get('TYPE'):
        return AdminBoundary(
            admin_type=props['TYPE'],
            admin_1=props.get('ADMIN_1'),
            admin_2=props.get('ADMIN_2'),
            admin_3=props.get('ADMIN_3'),
            koatuu_old=props.get('KOATUU_old')
        )

    return Unclassified()


def governing_dimensions(feature: Any) -> Tuple[Tuple[str, Any], ...]:
    """
    List the (dimension, value) pairs whose active sets decide inclusion.

    A feature without an attribute bag has none. Otherwise the source layer
    pre-check comes first whenever a layer tag is present; 'index_data' is
    never among the selectable layers, so such tiles fail it. Ownership,
    purpose and category follow, each when present. Then land_use or, only in
    its absence, TYPE. An empty result means the feature is included
    unconditionally.
    """
    if not isinstance(feature, dict) or not isinstance(feature.get('properties'), dict):
        return ()

    props = feature['properties']
    dimensions = []

    layer = layer_tag(feature)
    if layer is not None:
        dimensions.append((SOURCE_LAYER, layer))

    for key in CADASTRAL_KEYS:
        if props.get(key):
            dimensions.append((key, props[key]))

    if props.get('land_use'):
        dimensions.append((LAND_USE, props['land_use']))
    elif props.get('TYPE'):
        dimensions.append((ADMINISTRATIVE_TYPE, props['TYPE']))

    return tuple(dimensions)
