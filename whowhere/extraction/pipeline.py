"""Orchestration of extraction, location resolution and person resolution."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from whowhere.errors import ExtractionFailure, ParseError, ResolutionFailure

from .models import ExtractedEntities
from .ner import EntityExtractor
from .people import PersonResolver

if TYPE_CHECKING:  # pragma: no cover - annotations only
    from whowhere.where.resolver import LocationResolver


class EntityResolutionPipeline:
    """Runs the extractor and both resolvers over a single document.

    The pipeline performs no recovery: extractor and resolver errors are
    re-raised as :class:`ExtractionFailure` / :class:`ResolutionFailure`
    for the caller to report.
    """

    def __init__(
        self,
        extractor: EntityExtractor | None,
        location_resolver: LocationResolver,
        *,
        fuzzy: bool = False,
        person_resolver: PersonResolver | None = None,
    ) -> None:
        self._extractor = extractor
        self._location_resolver = location_resolver
        self._person_resolver = person_resolver or PersonResolver()
        self._fuzzy = fuzzy
        self._log = logging.getLogger("whowhere.pipeline")

    @property
    def fuzzy(self) -> bool:
        return self._fuzzy

    def extract_and_resolve(self, text: str) -> ExtractedEntities:
        if self._extractor is None:
            raise ExtractionFailure("No entity extractor configured")
        self._log.debug("input: %s", text)
        try:
            entities = self._extractor.extract_entities(text)
        except ParseError:
            raise
        except Exception as exc:
            raise ExtractionFailure(f"Entity extraction failed: {exc}") from exc
        self._log.debug("extracted: %s", entities.locations)
        return self.resolve(entities)

    def resolve(self, entities: ExtractedEntities) -> ExtractedEntities:
        try:
            resolved_locations = self._location_resolver.resolve_locations(
                entities.locations, self._fuzzy
            )
        except ParseError:
            raise
        except Exception as exc:
            raise ResolutionFailure(f"Location resolution failed: {exc}") from exc
        entities.resolved_locations = list(resolved_locations)
        self._log.debug("resolved locations: %s", entities.resolved_locations)

        entities.resolved_people = self._person_resolver.resolve(entities.people)
        self._log.debug("resolved people: %s", entities.resolved_people)
        return entities


__all__ = ["EntityResolutionPipeline"]
