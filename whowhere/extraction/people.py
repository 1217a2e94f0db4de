"""Aggregation of person mentions into person profiles."""
from __future__ import annotations

from typing import Iterable

from .models import RawMention, ResolvedPerson


def normalize_person_name(surface: str) -> str:
    """Return the grouping key for a person mention.

    Only surrounding whitespace is removed: grouping is case-sensitive and
    no coreference beyond string equality is attempted, so two people
    sharing the same surface form end up in the same profile.
    """

    return surface.strip()


class PersonResolver:
    """Counts person mentions sharing the same trimmed name."""

    def resolve(self, people_mentions: Iterable[RawMention]) -> list[ResolvedPerson]:
        counts: dict[str, int] = {}
        for mention in people_mentions:
            name = normalize_person_name(mention.text)
            if not name:
                continue
            counts[name] = counts.get(name, 0) + 1
        # dict preserves insertion order, which is first-seen order here
        return [
            ResolvedPerson(name=name, occurrence_count=count)
            for name, count in counts.items()
        ]


__all__ = ["PersonResolver", "normalize_person_name"]
