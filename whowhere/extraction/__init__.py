"""Entity extraction and resolution components."""
from .models import (
    ExtractedEntities,
    GeoEntity,
    MentionKind,
    RawMention,
    ResolvedLocation,
    ResolvedPerson,
)
from .people import PersonResolver, normalize_person_name
from .ner import EntityExtractor, SpacyEntityExtractor, load_extractor
from .annotations import entities_from_json_string, entities_from_payload
from .pipeline import EntityResolutionPipeline

__all__ = [
    "EntityExtractor",
    "EntityResolutionPipeline",
    "ExtractedEntities",
    "GeoEntity",
    "MentionKind",
    "PersonResolver",
    "RawMention",
    "ResolvedLocation",
    "ResolvedPerson",
    "SpacyEntityExtractor",
    "entities_from_json_string",
    "entities_from_payload",
    "load_extractor",
    "normalize_person_name",
]
