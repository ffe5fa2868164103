"""
Interactive session state for Cadastral Map Creator.

A ZoneSession owns the loaded feature sources, the catalog of known filter
values, the current filter snapshot and the drawn zone list. Updates replace
state wholesale: a filter change supplies a complete FilterState, a draw event
supplies one finished polygon.

Classes:
    ZoneSession: Session-scoped owner of sources, filters and drawn zones
"""

from datetime import datetime
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from core.collection_composer import ComposedCollection, compose_collection, filter_fingerprint
from core.filter_predicate import FilterState
from core.source_loader import build_filter_catalog
from core.zone_recorder import DrawnZone, record_drawn_zone
from utils.logger import get_logger

logger = get_logger(__name__)


class ZoneSession:
    """
    Session owning zone sources, filter state and drawn zones.

    Example:
        >>> session = ZoneSession(static_features, admin_features, config['filter_options'])
        >>> composed = session.apply_filters(session.filter_state.toggle('land_use', 'Forest'))
        >>> zones = session.record_zone(drawn_polygon)
    """

    def __init__(
        self,
        static_features: Iterable[Dict] = (),
        admin_features: Iterable[Dict] = (),
        filter_options: Optional[Mapping[str, Iterable[str]]] = None,
        geometry_settings: Optional[Dict] = None
    ):
        self.filter_options = {k: list(v) for k, v in (filter_options or {}).items()}
        self.geometry_settings = dict(geometry_settings or {})
        self.drawn_zones: Tuple[DrawnZone, ...] = ()
        self._composed: Optional[ComposedCollection] = None
        self.load_sources(static_features, admin_features)

    @property
    def features(self) -> Tuple[Dict, ...]:
        """All zone features, static parcels first."""
        return self._static_features + self._admin_features

    def load_sources(self, static_features: Iterable[Dict], admin_features: Iterable[Dict]):
        """(Re)load both sources, rebuild the catalog and reset filters to all-active."""
        self._static_features = tuple(static_features)
        self._admin_features = tuple(admin_features)
        self.catalog: Dict[str, List[str]] = build_filter_catalog(self.features, self.filter_options)

        logger.info(
            f"Session sources: {len(self._static_features)} static, "
            f"{len(self._admin_features)} administrative features"
        )
        self.reset_filters()

    def reset_filters(self) -> FilterState:
        """Make every known value of every dimension active."""
        self.filter_state = FilterState.all_active(self.catalog)
        self._composed = None
        return self.filter_state

    def apply_filters(self, filter_state: FilterState) -> ComposedCollection:
        """
        Replace the filter snapshot and compose the zone collection.

        Recomposition is skipped when the fingerprint is unchanged.
        """
        self.filter_state = filter_state
        return self.compose()

    def compose(self) -> ComposedCollection:
        """Composed collection for the current filter snapshot."""
        if self._composed is not None and self._composed.fingerprint == self.fingerprint:
            return self._composed

        self._composed = compose_collection(self.features, self.filter_state, self.geometry_settings)
        logger.info(
            f"Zones after filters: {len(self._composed)} of {self._composed.source_count} "
            f"({self._composed.geometry_excluded} oversized, "
            f"{self._composed.attribute_excluded} filtered out)"
        )
        return self._composed

    @property
    def fingerprint(self) -> str:
        return filter_fingerprint(self.filter_state)

    def record_zone(self, shape: Dict, now: Optional[datetime] = None) -> Tuple[DrawnZone, ...]:
        """Record a finished drawn polygon and return the updated zone list."""
        self.drawn_zones = record_drawn_zone(self.drawn_zones, shape, now)
        return self.drawn_zones
