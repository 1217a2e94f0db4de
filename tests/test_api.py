from fastapi.testclient import TestClient

from whowhere.api import create_app
from whowhere.parse_manager import PARSER_VERSION, ParseManager
from whowhere.where.resolver import GazetteerLocationResolver

from tests.helpers import OBAMA_MENTIONS, OBAMA_TEXT, ScriptedExtractor


def _client(gazetteer) -> TestClient:
    manager = ParseManager(
        extractor_factory=lambda: ScriptedExtractor(OBAMA_MENTIONS),
        resolver_factory=lambda: GazetteerLocationResolver(gazetteer),
    )
    return TestClient(create_app(manager))


def test_health_and_version(gazetteer):
    client = _client(gazetteer)

    assert client.get("/healthz").json() == {"status": "ok"}
    assert client.get("/version").json() == {"version": PARSER_VERSION}


def test_parse_text_by_query_and_body(gazetteer, places):
    client = _client(gazetteer)

    by_query = client.get("/parse/text", params={"q": OBAMA_TEXT})
    by_body = client.post("/parse/text", json={"text": OBAMA_TEXT})

    assert by_query.status_code == 200
    assert by_query.json() == by_body.json()
    assert by_body.json()["where"]["primaryCountries"] == ["FR", "US"]


def test_errors_are_reported_in_the_envelope(gazetteer):
    client = _client(gazetteer)

    response = client.get("/parse/text")

    assert response.status_code == 200
    assert response.json() == {"status": "error", "details": "No text"}


def test_parse_nlp(gazetteer, places):
    client = _client(gazetteer)

    response = client.post(
        "/parse/nlp",
        json={"annotations": [{"text": "Lyon", "type": "LOCATION", "charOffset": 0}]},
    )
    serialized = client.post(
        "/parse/nlp",
        json={"annotations": '[{"text": "Lyon", "type": "LOCATION", "charOffset": 0}]'},
    )

    assert response.json()["where"]["resolvedLocations"][0]["id"] == places.lyon.id
    assert serialized.json() == response.json()
    assert client.post("/parse/nlp", json={}).json()["details"] == "No text"
