"""whowhere - people and places mentioned in unstructured text."""
from .errors import (
    EmptyInput,
    ExtractionFailure,
    InternalFailure,
    NoEntitiesDetected,
    ParseError,
    ResolutionFailure,
)
from .extraction import (
    EntityResolutionPipeline,
    ExtractedEntities,
    GeoEntity,
    MentionKind,
    PersonResolver,
    RawMention,
    ResolvedLocation,
    ResolvedPerson,
)
from .where import (
    AboutnessStrategy,
    FrequencyOfMentionAboutnessStrategy,
    Gazetteer,
    GazetteerLocationResolver,
)
from .envelope import to_json
from .parse_manager import (
    PARSER_VERSION,
    ParseManager,
    get_parse_manager,
    parse_from_nlp_json,
    parse_from_text,
    set_parse_manager,
)

__version__ = "0.5.0"

__all__ = [
    "AboutnessStrategy",
    "EmptyInput",
    "EntityResolutionPipeline",
    "ExtractedEntities",
    "ExtractionFailure",
    "FrequencyOfMentionAboutnessStrategy",
    "Gazetteer",
    "GazetteerLocationResolver",
    "GeoEntity",
    "InternalFailure",
    "MentionKind",
    "NoEntitiesDetected",
    "PARSER_VERSION",
    "ParseError",
    "ParseManager",
    "PersonResolver",
    "RawMention",
    "ResolutionFailure",
    "ResolvedLocation",
    "ResolvedPerson",
    "get_parse_manager",
    "parse_from_nlp_json",
    "parse_from_text",
    "set_parse_manager",
    "to_json",
]
