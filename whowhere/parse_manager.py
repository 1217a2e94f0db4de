"""Entry points turning text or annotations into result envelopes.

:class:`ParseManager` owns the expensive handles (entity extractor and
gazetteer-backed resolver), builds them lazily under a lock, drives the
resolution pipeline and the aboutness strategy, and is the single place
where failures are converted into error envelopes.

Extraction and resolution are blocking calls with no timeout. Callers
running an event loop should invoke these entry points from a worker
thread.
"""
from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Mapping, Sequence

from whowhere.envelope import error_envelope, location_to_dict, success_envelope
from whowhere.errors import (
    EmptyInput,
    ExtractionFailure,
    InternalFailure,
    NoEntitiesDetected,
    ParseError,
    ResolutionFailure,
)
from whowhere.extraction.annotations import entities_from_json_string, entities_from_payload
from whowhere.extraction.models import ExtractedEntities
from whowhere.extraction.ner import EntityExtractor, load_extractor
from whowhere.extraction.pipeline import EntityResolutionPipeline
from whowhere.lifecycle import LazyResource
from whowhere.settings import ParserConfig
from whowhere.where.aboutness import AboutnessStrategy, FrequencyOfMentionAboutnessStrategy
from whowhere.where.gazetteer import load_gazetteer
from whowhere.where.resolver import GazetteerLocationResolver, LocationResolver

# Bump whenever resolution semantics or the JSON shape change, so results
# persisted by consumers can be recognised as stale.
PARSER_VERSION = "0.5"

_EXPECTED_FAILURES = (EmptyInput, NoEntitiesDetected)


class ParseManager:
    """Service object behind ``parse_from_text`` and ``parse_from_nlp_json``."""

    def __init__(
        self,
        *,
        extractor_factory: Callable[[], EntityExtractor],
        resolver_factory: Callable[[], LocationResolver],
        fuzzy: bool = False,
        aboutness: AboutnessStrategy | None = None,
        version: str = PARSER_VERSION,
    ) -> None:
        self._extractor = LazyResource(
            "entity extractor", extractor_factory, error_type=ExtractionFailure
        )
        self._resolver = LazyResource(
            "location resolver", resolver_factory, error_type=ResolutionFailure
        )
        self._fuzzy = fuzzy
        self._aboutness = aboutness or FrequencyOfMentionAboutnessStrategy()
        self._version = version
        self._log = logging.getLogger("whowhere.parse_manager")

    @classmethod
    def from_config(cls, config: ParserConfig) -> "ParseManager":
        def build_extractor() -> EntityExtractor:
            return load_extractor(config.extractor_factory, config.extractor_settings)

        def build_resolver() -> LocationResolver:
            return GazetteerLocationResolver(
                load_gazetteer(config.gazetteer_path),
                max_hit_depth=config.max_hit_depth,
            )

        return cls(
            extractor_factory=build_extractor,
            resolver_factory=build_resolver,
            fuzzy=config.fuzzy,
            aboutness=FrequencyOfMentionAboutnessStrategy(top_k=config.aboutness_top_k),
        )

    @property
    def version(self) -> str:
        return self._version

    @property
    def aboutness(self) -> AboutnessStrategy:
        return self._aboutness

    def preload(self) -> None:
        """Build both handles now instead of on the first request."""

        self._extractor.get()
        self._resolver.get()

    def parse_from_text(self, text: str | None) -> dict[str, Any]:
        """Extract, resolve and summarise the people and places in ``text``."""

        try:
            if text is None or not text.strip():
                raise EmptyInput()
            entities = self._pipeline(with_extractor=True).extract_and_resolve(text)
            return self._assemble(entities)
        except Exception as exc:
            return self._error_from(exc)

    def parse_from_nlp_json(
        self, annotations: str | Mapping[str, Any] | Sequence[Any] | None
    ) -> dict[str, Any]:
        """Same as :meth:`parse_from_text` for already extracted entities.

        ``annotations`` is the serialized annotation blob or its decoded
        JSON value; the extractor is not used.
        """

        try:
            if annotations is None:
                raise EmptyInput()
            if isinstance(annotations, str):
                if not annotations.strip():
                    raise EmptyInput()
                entities = entities_from_json_string(annotations)
            else:
                entities = entities_from_payload(annotations)
            entities = self._pipeline(with_extractor=False).resolve(entities)
            return self._assemble(entities)
        except Exception as exc:
            return self._error_from(exc)

    def parse_from_entities(self, entities: ExtractedEntities | None) -> dict[str, Any]:
        """Build the envelope for entities that were already resolved."""

        try:
            return self._assemble(entities)
        except Exception as exc:
            return self._error_from(exc)

    def log_stats(self) -> None:
        if not self._resolver.loaded:
            return
        resolver = self._resolver.get()
        log_stats = getattr(resolver, "log_stats", None)
        if callable(log_stats):
            log_stats()

    def _pipeline(self, *, with_extractor: bool) -> EntityResolutionPipeline:
        extractor = self._extractor.get() if with_extractor else None
        return EntityResolutionPipeline(extractor, self._resolver.get(), fuzzy=self._fuzzy)

    def _assemble(self, entities: ExtractedEntities | None) -> dict[str, Any]:
        if entities is None or not entities.has_usable_entities():
            raise NoEntitiesDetected()

        resolved = entities.resolved_locations
        where: dict[str, Any] = {
            "resolvedLocations": [location_to_dict(location) for location in resolved]
        }
        if resolved:
            where["primaryCountries"] = list(self._aboutness.select_countries(resolved))
            where["primaryStates"] = [
                f"{country}.{admin1}"
                for country, admin1 in self._aboutness.select_states(resolved)
            ]
            where["primaryCities"] = [
                location_to_dict(location)
                for location in self._aboutness.select_cities(resolved)
            ]
        return success_envelope(self._version, where, entities.resolved_people)

    def _error_from(self, exc: Exception) -> dict[str, Any]:
        if isinstance(exc, _EXPECTED_FAILURES):
            return error_envelope(exc.message)
        if isinstance(exc, ParseError):
            self._log.warning("%s: %s", exc.kind, exc.message)
            return error_envelope(exc.message)
        self._log.exception("Unexpected failure while parsing")
        failure = InternalFailure(f"{type(exc).__name__}: {exc}")
        return error_envelope(failure.message)


_DEFAULT_MANAGER: ParseManager | None = None
_DEFAULT_MANAGER_LOCK = threading.Lock()


def get_parse_manager() -> ParseManager:
    """Return the process-wide manager, creating it from the environment."""

    global _DEFAULT_MANAGER
    if _DEFAULT_MANAGER is None:
        with _DEFAULT_MANAGER_LOCK:
            if _DEFAULT_MANAGER is None:
                _DEFAULT_MANAGER = ParseManager.from_config(ParserConfig.from_env())
    return _DEFAULT_MANAGER


def set_parse_manager(manager: ParseManager | None) -> None:
    global _DEFAULT_MANAGER
    with _DEFAULT_MANAGER_LOCK:
        _DEFAULT_MANAGER = manager


def parse_from_text(text: str | None) -> dict[str, Any]:
    return get_parse_manager().parse_from_text(text)


def parse_from_nlp_json(
    annotations: str | Mapping[str, Any] | Sequence[Any] | None,
) -> dict[str, Any]:
    return get_parse_manager().parse_from_nlp_json(annotations)


__all__ = [
    "PARSER_VERSION",
    "ParseManager",
    "get_parse_manager",
    "parse_from_nlp_json",
    "parse_from_text",
    "set_parse_manager",
]
