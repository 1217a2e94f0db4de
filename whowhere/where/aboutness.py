"""Selection of the places a document is primarily about."""
from __future__ import annotations

from typing import Callable, Hashable, Iterable, Protocol, Sequence, TypeVar

from whowhere.extraction.models import ResolvedLocation

DEFAULT_TOP_K = 3
POPULATED_PLACE_CLASSES = ("P",)

K = TypeVar("K", bound=Hashable)


class AboutnessStrategy(Protocol):
    """Ranks resolved locations into primary countries, states and cities."""

    def select_countries(self, resolved_locations: Sequence[ResolvedLocation]) -> list[str]:
        """Return country codes, most salient first."""

    def select_states(
        self, resolved_locations: Sequence[ResolvedLocation]
    ) -> list[tuple[str, str]]:
        """Return ``(country_code, admin1_code)`` pairs, most salient first."""

    def select_cities(
        self, resolved_locations: Sequence[ResolvedLocation]
    ) -> list[ResolvedLocation]:
        """Return one representative record per salient city."""


def _count_by_key(
    resolved_locations: Iterable[ResolvedLocation],
    key: Callable[[ResolvedLocation], K | None],
) -> dict[K, list[int]]:
    """Map each key to ``[count, first_index]``, skipping ``None`` keys."""

    counts: dict[K, list[int]] = {}
    for index, location in enumerate(resolved_locations):
        value = key(location)
        if value is None:
            continue
        entry = counts.setdefault(value, [0, index])
        entry[0] += 1
    return counts


class FrequencyOfMentionAboutnessStrategy:
    """Places mentioned most often win; earlier mentions break ties."""

    def __init__(
        self,
        top_k: int = DEFAULT_TOP_K,
        city_feature_classes: Iterable[str] = POPULATED_PLACE_CLASSES,
    ) -> None:
        if top_k < 1:
            raise ValueError("top_k must be at least 1")
        self.top_k = top_k
        self.city_feature_classes = frozenset(city_feature_classes)

    def select_countries(self, resolved_locations: Sequence[ResolvedLocation]) -> list[str]:
        counts = _count_by_key(
            resolved_locations, lambda loc: loc.geo_entity.country_code or None
        )
        return self._top(counts)

    def select_states(
        self, resolved_locations: Sequence[ResolvedLocation]
    ) -> list[tuple[str, str]]:
        def state_key(location: ResolvedLocation) -> tuple[str, str] | None:
            entity = location.geo_entity
            if not entity.country_code or not entity.admin1_code:
                return None
            return entity.country_code, entity.admin1_code

        return self._top(_count_by_key(resolved_locations, state_key))

    def select_cities(
        self, resolved_locations: Sequence[ResolvedLocation]
    ) -> list[ResolvedLocation]:
        representatives: dict[int, ResolvedLocation] = {}
        populations: dict[int, int] = {}

        def city_key(location: ResolvedLocation) -> int | None:
            entity = location.geo_entity
            if entity.feature_class not in self.city_feature_classes:
                return None
            current = representatives.get(entity.id)
            if current is None or location.confidence < current.confidence:
                representatives[entity.id] = location
            populations[entity.id] = entity.population
            return entity.id

        counts = _count_by_key(resolved_locations, city_key)
        ranked = sorted(
            counts.items(),
            key=lambda item: (-item[1][0], -populations[item[0]], item[1][1]),
        )
        return [representatives[geo_id] for geo_id, _ in ranked[: self.top_k]]

    def _top(self, counts: dict[K, list[int]]) -> list[K]:
        ranked = sorted(counts.items(), key=lambda item: (-item[1][0], item[1][1]))
        return [key for key, _ in ranked[: self.top_k]]


__all__ = [
    "AboutnessStrategy",
    "DEFAULT_TOP_K",
    "FrequencyOfMentionAboutnessStrategy",
    "POPULATED_PLACE_CLASSES",
]
