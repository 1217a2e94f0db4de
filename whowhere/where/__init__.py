"""Location resolution and aboutness ranking."""
from .gazetteer import Gazetteer, load_gazetteer
from .disambiguation import DisambiguationResult, LocationCandidate, disambiguate_location
from .resolver import GazetteerLocationResolver, LocationResolver, split_qualifier
from .aboutness import AboutnessStrategy, FrequencyOfMentionAboutnessStrategy

__all__ = [
    "AboutnessStrategy",
    "DisambiguationResult",
    "FrequencyOfMentionAboutnessStrategy",
    "Gazetteer",
    "GazetteerLocationResolver",
    "LocationCandidate",
    "LocationResolver",
    "disambiguate_location",
    "load_gazetteer",
    "split_qualifier",
]
