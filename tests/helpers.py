from whowhere.extraction.models import (
    ExtractedEntities,
    GeoEntity,
    MentionKind,
    RawMention,
    ResolvedLocation,
)


def location(text: str, offset: int = 0) -> RawMention:
    return RawMention(text=text, char_offset=offset, kind=MentionKind.LOCATION)


def person(text: str, offset: int = 0) -> RawMention:
    return RawMention(text=text, char_offset=offset, kind=MentionKind.PERSON)


def resolved(entity: GeoEntity, offset: int = 0, confidence: float = 0.0) -> ResolvedLocation:
    return ResolvedLocation(
        source_mention=location(entity.name, offset),
        geo_entity=entity,
        confidence=confidence,
    )


class ScriptedExtractor:
    """Extractor returning the same mentions for every text."""

    def __init__(self, mentions: list[RawMention]):
        self.mentions = list(mentions)
        self.calls: list[str] = []

    def extract_entities(self, text: str) -> ExtractedEntities:
        self.calls.append(text)
        entities = ExtractedEntities()
        for mention in self.mentions:
            entities.add_mention(mention)
        return entities


OBAMA_TEXT = "President Obama visited Paris and Paris, Texas."
OBAMA_MENTIONS = [person("Obama", 10), location("Paris", 24), location("Paris, Texas", 34)]
