import json
from pathlib import Path

import pytest

from whowhere.where.gazetteer import Gazetteer, load_gazetteer, load_geonames_dump

_GEONAMES_ROWS = [
    "# geonames sample",
    "2988507\tParis\tParis\tLutetia,Paname\t48.85341\t2.3488\tP\tPPLC\tFR\t\t11\t75\t751\t75056\t2138551\t\t42\tEurope/Paris\t2023-01-01",
    "3017382\tFrance\tFrance\tFrankreich\t46.0\t2.0\tA\tPCLI\tFR\t\t00\t\t\t\t66987244\t\t543\tEurope/Paris\t2023-01-01",
    "broken\trow",
]


def test_lookup_matches_names_and_alt_names_case_insensitively(gazetteer, places):
    assert {e.id for e in gazetteer.lookup("paris")} == {places.paris_fr.id, places.paris_tx.id}
    assert gazetteer.lookup("  PANAME ") == (places.paris_fr,)
    assert gazetteer.lookup("Atlantis") == ()


def test_get_by_id(gazetteer, places):
    assert gazetteer.get(places.lyon.id) == places.lyon
    assert gazetteer.get(1) is None
    assert len(gazetteer) == 5


def test_fuzzy_lookup_returns_similarity_scores(gazetteer, places):
    hits = gazetteer.fuzzy_lookup("Pariss")

    assert {entity.id for entity, _ in hits} == {places.paris_fr.id, places.paris_tx.id}
    assert all(85.0 <= score < 100.0 for _, score in hits)


def test_fuzzy_lookup_respects_cutoff(gazetteer):
    assert gazetteer.fuzzy_lookup("Zanzibar") == []
    assert Gazetteer([]).fuzzy_lookup("Paris") == []


def test_country_and_admin1_lookups(gazetteer, places):
    assert gazetteer.countries_named("France") == (places.france,)
    assert gazetteer.admin1_named("texas") == (places.texas,)
    assert gazetteer.admin1_named("France") == ()


def test_load_geonames_dump(tmp_path: Path):
    dump = tmp_path / "sample.txt"
    dump.write_text("\n".join(_GEONAMES_ROWS) + "\n", encoding="utf-8")

    gazetteer = load_geonames_dump(dump)

    assert len(gazetteer) == 2
    paris = gazetteer.get(2988507)
    assert paris is not None
    assert paris.admin1_code == "11"
    assert paris.population == 2138551
    assert gazetteer.lookup("Lutetia") == (paris,)
    france = gazetteer.get(3017382)
    assert france is not None
    assert france.admin1_code == ""
    assert france.admin1_key == ""


def test_load_gazetteer_picks_json_reader(tmp_path: Path):
    path = tmp_path / "places.json"
    path.write_text(
        json.dumps(
            [
                {
                    "id": 4717560,
                    "name": "Paris",
                    "feature_class": "P",
                    "feature_code": "PPLA2",
                    "population": 24171,
                    "country_code": "US",
                    "admin1_code": "TX",
                    "latitude": 33.66,
                    "longitude": -95.55,
                    "alt_names": ["Paris TX"],
                }
            ]
        ),
        encoding="utf-8",
    )

    gazetteer = load_gazetteer(path)

    paris = gazetteer.get(4717560)
    assert paris is not None
    assert paris.admin1_key == "US.TX"
    assert gazetteer.lookup("paris tx") == (paris,)


def test_load_gazetteer_rejects_non_list_json(tmp_path: Path):
    path = tmp_path / "bad.json"
    path.write_text(json.dumps({"data": "nope"}), encoding="utf-8")

    with pytest.raises(ValueError):
        load_gazetteer(path)


def test_load_gazetteer_without_path_is_empty():
    assert len(load_gazetteer(None)) == 0
