"""
Utility modules for Cadastral Map Creator.

This package contains utility functions and helpers used throughout the application.

Modules:
    logger: Logging configuration and setup
    geometry_metrics: Planar area, grid-tile detection and vertex counting
    popup_formatters: Zone popup HTML
    zone_generator: Synthetic static parcels
"""

__version__ = '1.0.0'
