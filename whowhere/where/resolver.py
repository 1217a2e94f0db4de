"""Resolution of location mentions against the gazetteer."""
from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Iterable, Protocol, Sequence

from whowhere.extraction.models import GeoEntity, RawMention, ResolvedLocation

from .disambiguation import LocationCandidate, disambiguate_location, rank_candidates
from .gazetteer import Gazetteer

_QUALIFIER_SEPARATOR = ","


class LocationResolver(Protocol):
    """Interface for turning location mentions into gazetteer records."""

    def resolve_locations(
        self, locations: Sequence[RawMention], fuzzy: bool
    ) -> list[ResolvedLocation]:
        """Return one :class:`ResolvedLocation` per mention that resolved."""


@dataclass
class ResolverStats:
    """Lookup counters shared by every resolution call."""

    _lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False)
    lookups: int = 0
    exact_hits: int = 0
    fuzzy_hits: int = 0
    misses: int = 0

    def record(self, *, exact: bool, fuzzy: bool) -> None:
        with self._lock:
            self.lookups += 1
            if exact:
                self.exact_hits += 1
            elif fuzzy:
                self.fuzzy_hits += 1
            else:
                self.misses += 1

    def snapshot(self) -> dict[str, int]:
        with self._lock:
            return {
                "lookups": self.lookups,
                "exact_hits": self.exact_hits,
                "fuzzy_hits": self.fuzzy_hits,
                "misses": self.misses,
            }


@dataclass(frozen=True, slots=True)
class _MentionLookup:
    mention: RawMention
    candidates: tuple[LocationCandidate, ...]
    qualifier_countries: frozenset[str] = frozenset()
    qualifier_states: frozenset[str] = frozenset()

    @property
    def qualified(self) -> bool:
        return bool(self.qualifier_countries or self.qualifier_states)


def split_qualifier(surface: str) -> tuple[str, str | None]:
    """Split ``"Paris, Texas"`` into ``("Paris", "Texas")``."""

    name, separator, qualifier = surface.rpartition(_QUALIFIER_SEPARATOR)
    if not separator or not name.strip() or not qualifier.strip():
        return surface.strip(), None
    return name.strip(), qualifier.strip()


class GazetteerLocationResolver:
    """Resolves mentions with exact (and optionally fuzzy) gazetteer lookups.

    Per-document state (candidate lists, document context) lives in local
    variables of :meth:`resolve_locations`; the only shared mutable state is
    :class:`ResolverStats`, which is lock protected.
    """

    def __init__(
        self,
        gazetteer: Gazetteer,
        *,
        max_hit_depth: int = 10,
        fuzzy_score_cutoff: float = 85.0,
    ) -> None:
        if max_hit_depth < 1:
            raise ValueError("max_hit_depth must be at least 1")
        self._gazetteer = gazetteer
        self._max_hit_depth = max_hit_depth
        self._fuzzy_score_cutoff = fuzzy_score_cutoff
        self.stats = ResolverStats()
        self._log = logging.getLogger("whowhere.resolver")

    @property
    def gazetteer(self) -> Gazetteer:
        return self._gazetteer

    def resolve_locations(
        self, locations: Sequence[RawMention], fuzzy: bool
    ) -> list[ResolvedLocation]:
        lookups = [self._lookup(mention, fuzzy) for mention in locations]
        context_countries, context_states = _document_context(lookups)

        resolved: list[ResolvedLocation] = []
        for lookup in lookups:
            result = disambiguate_location(
                lookup.candidates,
                qualifier_countries=lookup.qualifier_countries,
                qualifier_states=lookup.qualifier_states,
                context_countries=context_countries,
                context_states=context_states,
            )
            if result.entity is None:
                self._log.debug(
                    "Unresolved location %r (%s)", lookup.mention.text, result.status
                )
                continue
            resolved.append(
                ResolvedLocation(
                    source_mention=lookup.mention,
                    geo_entity=result.entity,
                    confidence=round(result.confidence, 4),
                )
            )
        return resolved

    def log_stats(self) -> None:
        stats = self.stats.snapshot()
        self._log.info(
            "Gazetteer lookups: %s (exact %s, fuzzy %s, misses %s)",
            stats["lookups"],
            stats["exact_hits"],
            stats["fuzzy_hits"],
            stats["misses"],
        )

    def _lookup(self, mention: RawMention, fuzzy: bool) -> _MentionLookup:
        surface = mention.text.strip().strip(_QUALIFIER_SEPARATOR).strip()
        exact = self._gazetteer.lookup(surface)
        if exact:
            self.stats.record(exact=True, fuzzy=False)
            return _MentionLookup(mention, self._exact_candidates(exact))

        name, qualifier = split_qualifier(surface)
        countries: frozenset[str] = frozenset()
        states: frozenset[str] = frozenset()
        if qualifier is not None:
            countries = frozenset(
                entity.country_code
                for entity in self._gazetteer.countries_named(qualifier)
                if entity.country_code
            )
            states = frozenset(
                entity.admin1_key
                for entity in self._gazetteer.admin1_named(qualifier)
                if entity.admin1_key
            )
            if countries or states:
                exact = self._gazetteer.lookup(name)
                if exact:
                    self.stats.record(exact=True, fuzzy=False)
                    return _MentionLookup(
                        mention, self._exact_candidates(exact), countries, states
                    )
            else:
                name = surface

        if fuzzy:
            hits = self._gazetteer.fuzzy_lookup(
                name, limit=self._max_hit_depth, score_cutoff=self._fuzzy_score_cutoff
            )
            if hits:
                self.stats.record(exact=False, fuzzy=True)
                candidates = rank_candidates(
                    LocationCandidate(entity, round((100.0 - score) / 100.0, 4))
                    for entity, score in hits
                )
                return _MentionLookup(
                    mention,
                    tuple(candidates[: self._max_hit_depth]),
                    countries,
                    states,
                )

        self.stats.record(exact=False, fuzzy=False)
        return _MentionLookup(mention, ())

    def _exact_candidates(
        self, entities: Iterable[GeoEntity]
    ) -> tuple[LocationCandidate, ...]:
        ranked = rank_candidates(LocationCandidate(entity) for entity in entities)
        return tuple(ranked[: self._max_hit_depth])


def _document_context(
    lookups: Sequence[_MentionLookup],
) -> tuple[frozenset[str], frozenset[str]]:
    """Countries and states named unambiguously in the document.

    Qualified mentions only vouch for themselves and are left out, so that
    "Paris, Texas" does not drag a bare "Paris" to Texas.
    """

    countries: set[str] = set()
    states: set[str] = set()
    for lookup in lookups:
        if lookup.qualified or len(lookup.candidates) != 1:
            continue
        entity = lookup.candidates[0].entity
        if entity.country_code:
            countries.add(entity.country_code)
        if entity.admin1_key:
            states.add(entity.admin1_key)
    return frozenset(countries), frozenset(states)


__all__ = [
    "GazetteerLocationResolver",
    "LocationResolver",
    "ResolverStats",
    "split_qualifier",
]
