from types import SimpleNamespace

import pytest

from whowhere.extraction.models import MentionKind
from whowhere.extraction.ner import SpacyEntityExtractor, load_extractor, mention_kind_for_label

from tests.helpers import ScriptedExtractor, location


class FakeNlp:
    def __init__(self, ents):
        self.ents = ents

    def __call__(self, text):
        return SimpleNamespace(ents=self.ents)


def build_scripted_extractor(place: str = "Lyon") -> ScriptedExtractor:
    return ScriptedExtractor([location(place)])


def test_mention_kind_for_label():
    assert mention_kind_for_label("PER") is MentionKind.PERSON
    assert mention_kind_for_label(" gpe ") is MentionKind.LOCATION
    assert mention_kind_for_label("ORG") is None
    assert mention_kind_for_label(None) is None


def test_spacy_extractor_keeps_people_and_places():
    nlp = FakeNlp(
        [
            SimpleNamespace(text="Obama", label_="PERSON", start_char=10),
            SimpleNamespace(text="Paris", label_="GPE", start_char=24),
            SimpleNamespace(text="NATO", label_="ORG", start_char=40),
        ]
    )

    entities = SpacyEntityExtractor(nlp=nlp).extract_entities("ignored")

    assert [(m.text, m.char_offset) for m in entities.people] == [("Obama", 10)]
    assert [(m.text, m.char_offset) for m in entities.locations] == [("Paris", 24)]


def test_load_extractor_calls_the_factory_with_settings():
    extractor = load_extractor("tests.test_ner:build_scripted_extractor", {"place": "Texas"})

    assert [m.text for m in extractor.extract_entities("x").locations] == ["Texas"]


def test_load_extractor_rejects_malformed_paths():
    with pytest.raises(ValueError):
        load_extractor("tests.test_ner", {})
