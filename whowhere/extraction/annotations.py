"""Parsing of entity annotations produced by an out-of-process extractor.

Accepted payloads::

    {"entities": [{"text": "Paris", "type": "LOCATION", "charOffset": 12}]}

or a bare list of entity objects. Labels outside the person/location
families (``ORGANIZATION``, ``MISC``...) are ignored.
"""
from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from whowhere.errors import ExtractionFailure

from .models import ExtractedEntities, RawMention
from .ner import mention_kind_for_label


class AnnotatedEntity(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    text: str
    type: str
    char_offset: int = Field(default=-1, alias="charOffset")


class AnnotationPayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    entities: list[AnnotatedEntity] = Field(default_factory=list)


def entities_from_payload(payload: Any) -> ExtractedEntities:
    """Build :class:`ExtractedEntities` from decoded annotation JSON."""

    if isinstance(payload, list):
        payload = {"entities": payload}
    try:
        parsed = AnnotationPayload.model_validate(payload)
    except ValidationError as exc:
        raise ExtractionFailure(f"Invalid annotation payload: {exc}") from exc

    entities = ExtractedEntities()
    for item in parsed.entities:
        kind = mention_kind_for_label(item.type)
        if kind is None:
            continue
        entities.add_mention(
            RawMention(text=item.text, char_offset=item.char_offset, kind=kind)
        )
    return entities


def entities_from_json_string(raw: str) -> ExtractedEntities:
    """Decode ``raw`` and return the raw mentions it describes."""

    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ExtractionFailure(f"Invalid annotation JSON: {exc}") from exc
    return entities_from_payload(payload)


__all__ = [
    "AnnotatedEntity",
    "AnnotationPayload",
    "entities_from_json_string",
    "entities_from_payload",
]
