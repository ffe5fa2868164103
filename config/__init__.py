"""
Configuration package for Cadastral Map Creator.

This package contains configuration loading and validation.

Modules:
    config_loader: Load and validate zone configuration from JSON
"""

__version__ = '1.0.0'
