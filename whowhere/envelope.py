"""Builders for the JSON-shaped result envelopes."""
from __future__ import annotations

import json
from typing import Any, Iterable, Mapping

from whowhere.extraction.models import ResolvedLocation, ResolvedPerson

STATUS_OK = "ok"
STATUS_ERROR = "error"


def location_to_dict(resolved: ResolvedLocation) -> dict[str, Any]:
    place = resolved.geo_entity
    return {
        "confidence": resolved.confidence,  # lower is better
        "id": place.id,
        "name": place.name,
        "featureClass": place.feature_class,
        "featureCode": place.feature_code,
        "population": place.population,
        "stateCode": place.admin1_code or "",
        "countryCode": place.country_code or "",
        "lat": place.latitude,
        "lon": place.longitude,
        "source": {
            "string": resolved.source_mention.text,
            "charIndex": resolved.source_mention.char_offset,
        },
    }


def person_to_dict(person: ResolvedPerson) -> dict[str, Any]:
    return {"name": person.name, "occurrenceCount": person.occurrence_count}


def success_envelope(
    version: str, where: Mapping[str, Any], people: Iterable[ResolvedPerson]
) -> dict[str, Any]:
    return {
        "status": STATUS_OK,
        "version": version,
        "where": dict(where),
        "who": [person_to_dict(person) for person in people],
    }


def error_envelope(details: str) -> dict[str, Any]:
    """All errors sent to clients share this shape."""

    return {"status": STATUS_ERROR, "details": details}


def to_json(envelope: Mapping[str, Any], *, pretty: bool = False) -> str:
    return json.dumps(
        envelope,
        ensure_ascii=False,
        indent=2 if pretty else None,
    )


__all__ = [
    "STATUS_ERROR",
    "STATUS_OK",
    "error_envelope",
    "location_to_dict",
    "person_to_dict",
    "success_envelope",
    "to_json",
]
