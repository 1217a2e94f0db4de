"""Dataclasses shared by the extraction and resolution stages."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class MentionKind(str, Enum):
    """Coarse entity type attached to a raw mention."""

    LOCATION = "LOCATION"
    PERSON = "PERSON"


@dataclass(frozen=True, slots=True)
class RawMention:
    """Entity mention produced by the extractor."""

    text: str
    char_offset: int
    kind: MentionKind


@dataclass(frozen=True, slots=True)
class GeoEntity:
    """Gazetteer record. Treated as read-only reference data."""

    id: int
    name: str
    feature_class: str
    feature_code: str
    population: int = 0
    country_code: str = ""
    admin1_code: str = ""
    latitude: float = 0.0
    longitude: float = 0.0
    alt_names: tuple[str, ...] = field(default=(), compare=False, repr=False)

    @property
    def admin1_key(self) -> str:
        """Return the ``CC.ADMIN1`` key, or an empty string when either part is missing."""

        if not self.country_code or not self.admin1_code:
            return ""
        return f"{self.country_code}.{self.admin1_code}"


@dataclass(frozen=True, slots=True)
class ResolvedLocation:
    """A location mention matched to a gazetteer record.

    ``confidence`` follows the resolver scale where a lower value is a
    better match. It must never be inverted or re-normalised.
    """

    source_mention: RawMention
    geo_entity: GeoEntity
    confidence: float


@dataclass(frozen=True, slots=True)
class ResolvedPerson:
    """Person profile aggregated from identical mentions."""

    name: str
    occurrence_count: int


@dataclass(slots=True)
class ExtractedEntities:
    """Per-document aggregate filled in as resolution stages complete."""

    locations: list[RawMention] = field(default_factory=list)
    people: list[RawMention] = field(default_factory=list)
    resolved_locations: list[ResolvedLocation] = field(default_factory=list)
    resolved_people: list[ResolvedPerson] = field(default_factory=list)

    def add_mention(self, mention: RawMention) -> None:
        """Append ``mention`` to the list matching its kind."""

        if mention.kind is MentionKind.LOCATION:
            self.locations.append(mention)
        elif mention.kind is MentionKind.PERSON:
            self.people.append(mention)
        else:  # pragma: no cover - enum is closed
            raise ValueError(f"Unsupported mention kind: {mention.kind!r}")

    def has_usable_entities(self) -> bool:
        return bool(self.resolved_locations or self.resolved_people)


__all__ = [
    "ExtractedEntities",
    "GeoEntity",
    "MentionKind",
    "RawMention",
    "ResolvedLocation",
    "ResolvedPerson",
]
