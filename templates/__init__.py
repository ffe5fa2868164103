"""
HTML templates for Cadastral Map Creator.

This package contains Jinja2 templates for generating interactive map UI elements.

Templates:
    zones_panel.html: Side panel with filter summary and drawn zone list
"""

__version__ = '1.0.0'
