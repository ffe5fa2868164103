"""
Popup formatting utilities for Cadastral Map Creator.

This module builds the popup HTML shown for each zone on the map. The layout
depends on the schema the zone follows (static parcel, administrative
boundary, cadastral parcel) with a generic fallback. Attribute values are
HTML-escaped.

Functions:
    format_popup_value: Format a single value for display in popup HTML
    format_zone_popup: Build popup HTML for a zone feature
"""

import html
from typing import Any, Dict

from core.feature_classifier import (
    AdminBoundary,
    CadastralParcel,
    StaticParcel,
    classify_feature
)

TITLE_STYLE = 'margin: 0 0 8px 0; font-size: 14px;'
ROW_STYLE = 'margin: 4px 0; font-size: 12px;'


def format_popup_value(value: Any, missing: str = 'N/A') -> str:
    """
    Format a popup value, substituting a placeholder for missing values.

    Examples:
        >>> format_popup_value('Lviv Oblast')
        'Lviv Oblast'

        >>> format_popup_value(None)
        'N/A'

        >>> format_popup_value(float('nan'))
        'N/A'

        >>> format_popup_value('<b>Plot</b>')
        '&lt;b&gt;Plot&lt;/b&gt;'
    """
    # Handle None, empty and NaN values
    if value is None or value == '' or (isinstance(value, float) and value != value):
        return missing
    return html.escape(str(value))


def _row(label: str, value: Any, suffix: str = '') -> str:
    return f'<p style="{ROW_STYLE}"><strong>{label}:</strong> {format_popup_value(value)}{suffix}</p>'


def format_zone_popup(feature: Dict) -> str:
    """
    Build popup HTML for a zone feature.

    Parameters:
    -----------
    feature : Dict
        GeoJSON feature dict

    Returns:
    --------
    str
        HTML fragment wrapped in a sans-serif div
    """
    schema = classify_feature(feature)
    html_parts = '<div style="font-family: sans-serif;">'

    if isinstance(schema, StaticParcel):
        html_parts += f'<h3 style="{TITLE_STYLE}">{format_popup_value(schema.name)}</h3>'
        html_parts += _row('Cadastral №', schema.cadastral_number)
        html_parts += _row('Area', schema.area_hectares, suffix=' ha')
        html_parts += _row('Land Use', schema.land_use)

    elif isinstance(schema, AdminBoundary):
        html_parts += f'<h3 style="{TITLE_STYLE}">{format_popup_value(schema.admin_3)}</h3>'
        html_parts += _row('Oblast', schema.admin_1)
        html_parts += _row('District', schema.admin_2)
        html_parts += _row('Type', schema.admin_type)
        html_parts += _row('KOATUU', schema.koatuu_old)

    elif isinstance(schema, CadastralParcel):
        html_parts += f'<h3 style="{TITLE_STYLE}">Земельна ділянка</h3>'
        # Only the attributes the parcel actually carries
        for label, value in (
            ('Власність', schema.ownership),
            ('Категорія', schema.category),
            ('Призначення', schema.purpose),
            ('КОАТУУ', schema.koatuu)
        ):
            if value:
                html_parts += _row(label, value)

    else:
        html_parts += f'<p style="{ROW_STYLE}">Feature data available</p>'

    html_parts += '</div>'
    return html_parts
