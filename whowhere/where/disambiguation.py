"""Choice of a single gazetteer record for a location mention.

Candidates are ranked by match distance (exact matches first), then by
population. Explicit qualifiers ("Paris, Texas") and the places mentioned
unambiguously elsewhere in the document narrow the list before the top
candidate is taken.

The resulting ``confidence`` keeps the resolver scale: **lower is better**.
It is the candidate's match distance (``0.0`` for an exact name match) plus
a penalty describing how the choice was made:

* ``_PENALTY_RESOLVED``: only one candidate was left;
* ``_PENALTY_CONTEXT``: several candidates, narrowed by document context;
* ``_PENALTY_AMBIGUOUS``: several candidates, the highest ranked one won.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import AbstractSet, Iterable, Sequence

from whowhere.extraction.models import GeoEntity

_PENALTY_RESOLVED = 0.0
_PENALTY_CONTEXT = 0.25
_PENALTY_AMBIGUOUS = 0.5

STATUS_RESOLVED = "resolved"
STATUS_CONTEXT = "context"
STATUS_AMBIGUOUS = "ambiguous"
STATUS_UNKNOWN_QUALIFIER = "unknown_qualifier"
STATUS_UNRESOLVED = "unresolved"


@dataclass(frozen=True, slots=True)
class LocationCandidate:
    """Gazetteer record proposed for a mention.

    ``distance`` is ``0.0`` for an exact name match and grows towards
    ``1.0`` as fuzzy matches get worse.
    """

    entity: GeoEntity
    distance: float = 0.0


@dataclass(frozen=True, slots=True)
class DisambiguationResult:
    entity: GeoEntity | None
    status: str
    confidence: float
    candidates: tuple[LocationCandidate, ...]


def rank_candidates(candidates: Iterable[LocationCandidate]) -> list[LocationCandidate]:
    """Sort candidates best first and drop duplicated records."""

    best: dict[int, LocationCandidate] = {}
    for candidate in candidates:
        current = best.get(candidate.entity.id)
        if current is None or candidate.distance < current.distance:
            best[candidate.entity.id] = candidate
    return sorted(
        best.values(),
        key=lambda item: (item.distance, -item.entity.population, item.entity.id),
    )


def _narrow(
    candidates: Sequence[LocationCandidate],
    *,
    countries: AbstractSet[str],
    states: AbstractSet[str],
) -> list[LocationCandidate]:
    if states:
        by_state = [c for c in candidates if c.entity.admin1_key in states]
        if by_state:
            return by_state
    if countries:
        by_country = [c for c in candidates if c.entity.country_code in countries]
        if by_country:
            return by_country
    return []


def disambiguate_location(
    candidates: Iterable[LocationCandidate],
    *,
    qualifier_countries: AbstractSet[str] = frozenset(),
    qualifier_states: AbstractSet[str] = frozenset(),
    context_countries: AbstractSet[str] = frozenset(),
    context_states: AbstractSet[str] = frozenset(),
) -> DisambiguationResult:
    """Pick the record a location mention most likely refers to.

    1. A qualifier attached to the mention keeps only the candidates inside
       the named state or country. When none qualifies the mention stays
       unresolved.
    2. A single remaining candidate is resolved outright.
    3. Otherwise candidates located in states, then countries, mentioned
       unambiguously in the document are preferred.
    4. Failing that the highest ranked candidate is taken.
    """

    ranked = rank_candidates(candidates)
    if not ranked:
        return DisambiguationResult(None, STATUS_UNRESOLVED, 1.0, ())

    if qualifier_countries or qualifier_states:
        qualified = _narrow(ranked, countries=qualifier_countries, states=qualifier_states)
        if not qualified:
            return DisambiguationResult(
                None, STATUS_UNKNOWN_QUALIFIER, 1.0, tuple(ranked)
            )
        ranked = qualified

    if len(ranked) == 1:
        top = ranked[0]
        return DisambiguationResult(
            top.entity, STATUS_RESOLVED, top.distance + _PENALTY_RESOLVED, tuple(ranked)
        )

    in_context = _narrow(ranked, countries=context_countries, states=context_states)
    if in_context:
        top = in_context[0]
        return DisambiguationResult(
            top.entity, STATUS_CONTEXT, top.distance + _PENALTY_CONTEXT, tuple(ranked)
        )

    top = ranked[0]
    return DisambiguationResult(
        top.entity, STATUS_AMBIGUOUS, top.distance + _PENALTY_AMBIGUOUS, tuple(ranked)
    )


__all__ = [
    "DisambiguationResult",
    "LocationCandidate",
    "STATUS_AMBIGUOUS",
    "STATUS_CONTEXT",
    "STATUS_RESOLVED",
    "STATUS_UNKNOWN_QUALIFIER",
    "STATUS_UNRESOLVED",
    "disambiguate_location",
    "rank_candidates",
]
