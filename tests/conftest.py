from types import SimpleNamespace

import pytest

from whowhere.extraction.models import GeoEntity
from whowhere.where.gazetteer import Gazetteer


@pytest.fixture
def places() -> SimpleNamespace:
    return SimpleNamespace(
        paris_fr=GeoEntity(
            id=2988507,
            name="Paris",
            feature_class="P",
            feature_code="PPLC",
            population=2138551,
            country_code="FR",
            admin1_code="11",
            latitude=48.85341,
            longitude=2.3488,
            alt_names=("Paname",),
        ),
        paris_tx=GeoEntity(
            id=4717560,
            name="Paris",
            feature_class="P",
            feature_code="PPLA2",
            population=24171,
            country_code="US",
            admin1_code="TX",
            latitude=33.66094,
            longitude=-95.55551,
        ),
        texas=GeoEntity(
            id=4736286,
            name="Texas",
            feature_class="A",
            feature_code="ADM1",
            population=22875689,
            country_code="US",
            admin1_code="TX",
            latitude=31.25044,
            longitude=-99.25061,
            alt_names=("TX",),
        ),
        france=GeoEntity(
            id=3017382,
            name="France",
            feature_class="A",
            feature_code="PCLI",
            population=66987244,
            country_code="FR",
            latitude=46.0,
            longitude=2.0,
        ),
        lyon=GeoEntity(
            id=2996944,
            name="Lyon",
            feature_class="P",
            feature_code="PPLA",
            population=472317,
            country_code="FR",
            admin1_code="84",
            latitude=45.74846,
            longitude=4.84671,
        ),
        atlantic=GeoEntity(
            id=3411923,
            name="Atlantic Ocean",
            feature_class="H",
            feature_code="OCN",
            latitude=10.0,
            longitude=-25.0,
        ),
    )


@pytest.fixture
def gazetteer(places) -> Gazetteer:
    return Gazetteer(
        [places.paris_fr, places.paris_tx, places.texas, places.france, places.lyon]
    )
