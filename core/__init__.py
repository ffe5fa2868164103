"""
Core modules for Cadastral Map Creator.

This package contains the zone filtering, composition and map output modules.

Modules:
    feature_classifier: Schema variants and governing filter dimensions
    filter_predicate: FilterState snapshots and the inclusion predicate
    collection_composer: Geometry pre-filter, fingerprint and composition
    zone_recorder: Record and export drawn zones
    source_loader: Read feature sources and build the filter catalog
    session: Session owner of sources, filters and drawn zones
    map_builder: Generate interactive Leaflet maps
    output_generator: Save output files and metadata
"""

__version__ = '1.0.0'
