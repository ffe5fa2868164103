"""
Filter predicate module for Cadastral Map Creator.

Holds the six-dimension filter selection and the predicate deciding whether a
zone feature is shown under it.

Classes:
    FilterState: Immutable snapshot of active values per filter dimension

Functions:
    include: Evaluate a feature against a FilterState
"""

from dataclasses import dataclass, field, replace
from typing import Any, Dict, FrozenSet, Iterable, List, Mapping

from core.feature_classifier import DIMENSIONS, governing_dimensions


def _frozen(values: Iterable[str]) -> FrozenSet[str]:
    return values if isinstance(values, frozenset) else frozenset(values)


@dataclass(frozen=True)
class FilterState:
    """
    Active filter values for each of the six filter dimensions.

    A value is active when its dimension's set contains it. Snapshots are
    never modified; every operation returns a new FilterState.

    Example:
        >>> state = FilterState(land_use={'Forest', 'Residential'})
        >>> state.toggle('land_use', 'Forest').land_use
        frozenset({'Residential'})
    """
    land_use: FrozenSet[str] = field(default_factory=frozenset)
    administrative_type: FrozenSet[str] = field(default_factory=frozenset)
    source_layer: FrozenSet[str] = field(default_factory=frozenset)
    ownership: FrozenSet[str] = field(default_factory=frozenset)
    purpose: FrozenSet[str] = field(default_factory=frozenset)
    category: FrozenSet[str] = field(default_factory=frozenset)

    def __post_init__(self):
        for dimension in DIMENSIONS:
            object.__setattr__(self, dimension, _frozen(getattr(self, dimension)))

    @classmethod
    def all_active(cls, catalog: Mapping[str, Iterable[str]]) -> 'FilterState':
        """Build the all-inclusive state: every known value of every dimension active."""
        return cls(**{dimension: catalog.get(dimension, ()) for dimension in DIMENSIONS})

    def values(self, dimension: str) -> FrozenSet[str]:
        if dimension not in DIMENSIONS:
            raise KeyError(f"Unknown filter dimension: {dimension}")
        return getattr(self, dimension)

    def is_active(self, dimension: str, value: Any) -> bool:
        try:
            return value in self.values(dimension)
        except TypeError:
            # Unhashable attribute values never match a selection
            return False

    def with_values(self, dimension: str, values: Iterable[str]) -> 'FilterState':
        """Replace one dimension's active set."""
        self.values(dimension)
        return replace(self, **{dimension: frozenset(values)})

    def toggle(self, dimension: str, value: str) -> 'FilterState':
        current = self.values(dimension)
        if value in current:
            return self.with_values(dimension, current - {value})
        return self.with_values(dimension, current | {value})

    def select_all(self, dimension: str, catalog: Mapping[str, Iterable[str]]) -> 'FilterState':
        return self.with_values(dimension, catalog.get(dimension, ()))

    def deselect_all(self, dimension: str) -> 'FilterState':
        return self.with_values(dimension, ())

    def as_dict(self) -> Dict[str, List[str]]:
        """Sorted active values per dimension (JSON friendly)."""
        return {dimension: sorted(self.values(dimension)) for dimension in DIMENSIONS}


def include(feature: Any, filter_state: FilterState) -> bool:
    """
    Decide whether a feature passes the active filters.

    Every governing dimension of the feature (source layer pre-check,
    ownership/purpose/category when present, then land_use or TYPE) must have
    the feature's value active. Features without an attribute bag, or without
    any recognised attribute or layer tag, pass unconditionally.

    Parameters:
    -----------
    feature : Any
        GeoJSON feature dict
    filter_state : FilterState
        Active filter selection

    Returns:
    --------
    bool
        True if the feature should be shown
    """
    for dimension, value in governing_dimensions(feature):
        if not filter_state.is_active(dimension, value):
            return False
    return True
