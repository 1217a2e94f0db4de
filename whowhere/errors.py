"""Typed failures raised by the parsing pipeline.

Every failure is a :class:`ParseError` carrying a ``kind`` tag and a
human-readable message. :class:`whowhere.parse_manager.ParseManager` is the
only place where they are caught and turned into error envelopes.
"""
from __future__ import annotations


class ParseError(Exception):
    """Base class for failures reported in the error envelope."""

    kind = "InternalFailure"
    default_message = "Internal error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class EmptyInput(ParseError):
    kind = "EmptyInput"
    default_message = "No text"


class NoEntitiesDetected(ParseError):
    kind = "NoEntitiesDetected"
    # Historical wording, kept verbatim for consumers matching on it.
    default_message = "No place or person entitites detected in this text."


class ExtractionFailure(ParseError):
    """The entity extractor (or the annotation parser) failed."""

    kind = "ExtractionFailure"
    default_message = "Entity extraction failed"


class ResolutionFailure(ParseError):
    """The gazetteer or the location resolver failed."""

    kind = "ResolutionFailure"
    default_message = "Location resolution failed"


class InternalFailure(ParseError):
    kind = "InternalFailure"


__all__ = [
    "EmptyInput",
    "ExtractionFailure",
    "InternalFailure",
    "NoEntitiesDetected",
    "ParseError",
    "ResolutionFailure",
]
