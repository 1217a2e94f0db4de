"""Entity extractor protocol and the bundled spaCy implementation."""
from __future__ import annotations

import logging
from importlib import import_module
from typing import Any, Protocol

from .models import ExtractedEntities, MentionKind, RawMention

_PERSON_LABELS = {"PERSON", "PER"}
_LOCATION_LABELS = {"LOC", "LOCATION", "GPE"}

_log = logging.getLogger("whowhere.extraction")


class EntityExtractor(Protocol):
    """Interface for a named entity recognition engine."""

    def extract_entities(self, text: str) -> ExtractedEntities:
        """Return the raw person and location mentions found in ``text``."""


def mention_kind_for_label(label: str | None) -> MentionKind | None:
    """Map an NER label to a mention kind; ``None`` for ignored labels."""

    if not label:
        return None
    normalized = label.strip().upper()
    if normalized in _PERSON_LABELS:
        return MentionKind.PERSON
    if normalized in _LOCATION_LABELS:
        return MentionKind.LOCATION
    return None


class SpacyEntityExtractor:
    """spaCy NER component.

    The loaded pipeline is shared between threads; spaCy allocates a new
    ``Doc`` per call, so no scratch state crosses documents.
    """

    def __init__(self, model: str = "en_core_web_sm", nlp: Any | None = None) -> None:
        if nlp is None:
            import spacy

            nlp = spacy.load(model, disable=["lemmatizer", "textcat"])
        self.nlp = nlp
        self.model = model

    def extract_entities(self, text: str) -> ExtractedEntities:
        doc = self.nlp(text)
        entities = ExtractedEntities()
        for ent in doc.ents:
            kind = mention_kind_for_label(ent.label_)
            if kind is None:
                continue
            entities.add_mention(
                RawMention(text=ent.text, char_offset=ent.start_char, kind=kind)
            )
        return entities


def create_spacy_extractor(**settings: Any) -> EntityExtractor:
    """Default factory used when no other extractor is configured."""

    extractor = SpacyEntityExtractor(**settings)
    _log.info("Loaded spaCy model %s", extractor.model)
    return extractor


def load_extractor(factory_path: str, settings: dict[str, Any]) -> EntityExtractor:
    """Instantiate an extractor from a ``module:attribute`` factory path."""

    module_name, _, attribute = factory_path.partition(":")
    if not module_name or not attribute:
        raise ValueError(
            "WHOWHERE_EXTRACTOR_FACTORY must follow the 'module:attribute' format"
        )
    module = import_module(module_name)
    factory = getattr(module, attribute)
    if callable(factory):
        return factory(**settings)
    return factory


__all__ = [
    "EntityExtractor",
    "SpacyEntityExtractor",
    "create_spacy_extractor",
    "load_extractor",
    "mention_kind_for_label",
]
