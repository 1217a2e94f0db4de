"""In-memory gazetteer index and file loaders."""
from __future__ import annotations

import csv
import json
import logging
import re
from collections import defaultdict
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping

from rapidfuzz import fuzz, process

from whowhere.extraction.models import GeoEntity

COUNTRY_FEATURE_CODES = frozenset({"PCLI", "PCLD", "PCLF", "PCLS", "PCLIX", "PCL", "TERR"})
ADMIN1_FEATURE_CODE = "ADM1"

# GeoNames "geoname" table columns used when reading tab-separated dumps.
_GEONAMES_COLUMNS = {
    "id": 0,
    "name": 1,
    "asciiname": 2,
    "alternatenames": 3,
    "latitude": 4,
    "longitude": 5,
    "feature_class": 6,
    "feature_code": 7,
    "country_code": 8,
    "admin1_code": 10,
    "population": 14,
}

_log = logging.getLogger("whowhere.gazetteer")


def normalize_place_name(name: str) -> str:
    return re.sub(r"\s+", " ", name).strip().lower()


class Gazetteer:
    """Name index over :class:`GeoEntity` records.

    The index is built once and only read afterwards, so a single instance
    can serve concurrent lookups.
    """

    def __init__(self, entities: Iterable[GeoEntity]):
        self._entities: tuple[GeoEntity, ...] = tuple(entities)
        self._by_id: Dict[int, GeoEntity] = {}
        by_name: Dict[str, List[GeoEntity]] = defaultdict(list)
        for entity in self._entities:
            self._by_id[entity.id] = entity
            seen: set[str] = set()
            for variant in (entity.name, *entity.alt_names):
                key = normalize_place_name(variant)
                if not key or key in seen:
                    continue
                seen.add(key)
                by_name[key].append(entity)
        self._by_name: Dict[str, tuple[GeoEntity, ...]] = {
            key: tuple(values) for key, values in by_name.items()
        }
        self._names: tuple[str, ...] = tuple(self._by_name)

    def __len__(self) -> int:
        return len(self._entities)

    def get(self, geo_id: int) -> GeoEntity | None:
        return self._by_id.get(geo_id)

    def lookup(self, name: str) -> tuple[GeoEntity, ...]:
        """Return records whose name or alternate name equals ``name``."""

        return self._by_name.get(normalize_place_name(name), ())

    def fuzzy_lookup(
        self, name: str, *, limit: int = 10, score_cutoff: float = 85.0
    ) -> list[tuple[GeoEntity, float]]:
        """Return ``(record, similarity)`` pairs for approximate name matches.

        Similarity is the rapidfuzz ratio in the ``0..100`` range.
        """

        key = normalize_place_name(name)
        if not key or not self._names:
            return []
        hits = process.extract(
            key,
            self._names,
            scorer=fuzz.ratio,
            limit=limit,
            score_cutoff=score_cutoff,
        )
        results: list[tuple[GeoEntity, float]] = []
        for matched_name, score, _ in hits:
            for entity in self._by_name[matched_name]:
                results.append((entity, float(score)))
        return results

    def countries_named(self, name: str) -> tuple[GeoEntity, ...]:
        return tuple(
            entity
            for entity in self.lookup(name)
            if entity.feature_code in COUNTRY_FEATURE_CODES
        )

    def admin1_named(self, name: str) -> tuple[GeoEntity, ...]:
        return tuple(
            entity
            for entity in self.lookup(name)
            if entity.feature_code == ADMIN1_FEATURE_CODE
        )


def geo_entity_from_mapping(item: Mapping[str, Any]) -> GeoEntity:
    alt_names = item.get("alt_names") or ()
    if isinstance(alt_names, str):
        alt_names = [part for part in alt_names.split(",") if part.strip()]
    return GeoEntity(
        id=int(item["id"]),
        name=str(item["name"]),
        feature_class=str(item.get("feature_class") or ""),
        feature_code=str(item.get("feature_code") or ""),
        population=int(item.get("population") or 0),
        country_code=str(item.get("country_code") or ""),
        admin1_code=str(item.get("admin1_code") or ""),
        latitude=float(item.get("latitude") or 0.0),
        longitude=float(item.get("longitude") or 0.0),
        alt_names=tuple(str(name).strip() for name in alt_names),
    )


def _geo_entity_from_geonames_row(row: list[str]) -> GeoEntity:
    def column(name: str) -> str:
        return row[_GEONAMES_COLUMNS[name]].strip()

    alt_names = [column("asciiname")]
    alt_names.extend(part for part in column("alternatenames").split(",") if part)
    admin1 = column("admin1_code")
    return GeoEntity(
        id=int(column("id")),
        name=column("name"),
        feature_class=column("feature_class"),
        feature_code=column("feature_code"),
        population=int(column("population") or 0),
        country_code=column("country_code"),
        # GeoNames uses "00" for "no admin1 subdivision"
        admin1_code="" if admin1 == "00" else admin1,
        latitude=float(column("latitude") or 0.0),
        longitude=float(column("longitude") or 0.0),
        alt_names=tuple(alt_names),
    )


def load_geonames_dump(path: str | Path) -> Gazetteer:
    """Load a GeoNames ``allCountries.txt``-style tab-separated dump."""

    entities: list[GeoEntity] = []
    skipped = 0
    with open(path, "r", encoding="utf-8", newline="") as stream:
        reader = csv.reader(stream, delimiter="\t", quoting=csv.QUOTE_NONE)
        for row in reader:
            if not row or row[0].startswith("#"):
                continue
            if len(row) <= _GEONAMES_COLUMNS["population"]:
                skipped += 1
                continue
            entities.append(_geo_entity_from_geonames_row(row))
    if skipped:
        _log.warning("Skipped %s malformed rows in %s", skipped, path)
    return Gazetteer(entities)


def load_gazetteer_json(path: str | Path) -> Gazetteer:
    """Load a JSON list of gazetteer records."""

    with open(path, "r", encoding="utf-8") as stream:
        payload = json.load(stream)
    if isinstance(payload, Mapping):
        payload = payload.get("data", [])
    if not isinstance(payload, list):
        raise ValueError("Gazetteer JSON must be a list of records")
    return Gazetteer(geo_entity_from_mapping(item) for item in payload)


def load_gazetteer(path: str | Path | None) -> Gazetteer:
    """Load a gazetteer file, picking the reader from the file extension."""

    if not path:
        _log.warning("No gazetteer configured; every location will be unresolved")
        return Gazetteer([])
    path = Path(path)
    if path.suffix.lower() == ".json":
        gazetteer = load_gazetteer_json(path)
    else:
        gazetteer = load_geonames_dump(path)
    _log.info("Loaded %s gazetteer records from %s", len(gazetteer), path)
    return gazetteer


__all__ = [
    "ADMIN1_FEATURE_CODE",
    "COUNTRY_FEATURE_CODES",
    "Gazetteer",
    "geo_entity_from_mapping",
    "load_gazetteer",
    "load_gazetteer_json",
    "load_geonames_dump",
    "normalize_place_name",
]
