"""Settings loaded from environment variables (and an optional ``.env``)."""
from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any

from dotenv import load_dotenv

from whowhere.where.aboutness import DEFAULT_TOP_K

load_dotenv()

_DEFAULT_EXTRACTOR_FACTORY = "whowhere.extraction.ner:create_spacy_extractor"
_DEFAULT_MAX_HIT_DEPTH = 10
_DEFAULT_API_BIND_HOST = "0.0.0.0"
_DEFAULT_API_PORT = 8080
_TRUE_VALUES = {"1", "true", "yes", "on"}


def _bool_env(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in _TRUE_VALUES


def _json_env(name: str) -> dict[str, Any]:
    raw = os.getenv(name)
    if not raw:
        return {}
    try:
        value = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise RuntimeError(f"Invalid JSON in environment variable {name!r}: {raw}") from exc
    if not isinstance(value, dict):
        raise RuntimeError(f"Environment variable {name!r} must hold a JSON object")
    return value


@lru_cache(maxsize=None)
def get_api_port() -> int:
    """Port used by the HTTP adapter."""

    return int(os.getenv("WHOWHERE_API_PORT", os.getenv("PORT", _DEFAULT_API_PORT)))


@lru_cache(maxsize=None)
def get_api_bind_host() -> str:
    return os.getenv("WHOWHERE_API_BIND_HOST", _DEFAULT_API_BIND_HOST)


@dataclass
class ParserConfig:
    """Everything needed to build a :class:`~whowhere.parse_manager.ParseManager`."""

    gazetteer_path: str | None = None
    extractor_factory: str = _DEFAULT_EXTRACTOR_FACTORY
    extractor_settings: dict[str, Any] = field(default_factory=dict)
    fuzzy: bool = False
    max_hit_depth: int = _DEFAULT_MAX_HIT_DEPTH
    aboutness_top_k: int = DEFAULT_TOP_K

    @classmethod
    def from_env(cls) -> "ParserConfig":
        return cls(
            gazetteer_path=os.getenv("WHOWHERE_GAZETTEER_PATH") or None,
            extractor_factory=os.getenv(
                "WHOWHERE_EXTRACTOR_FACTORY", _DEFAULT_EXTRACTOR_FACTORY
            ),
            extractor_settings=_json_env("WHOWHERE_EXTRACTOR_SETTINGS"),
            fuzzy=_bool_env("WHOWHERE_FUZZY"),
            max_hit_depth=int(
                os.getenv("WHOWHERE_MAX_HIT_DEPTH", str(_DEFAULT_MAX_HIT_DEPTH))
            ),
            aboutness_top_k=int(
                os.getenv("WHOWHERE_ABOUTNESS_TOP_K", str(DEFAULT_TOP_K))
            ),
        )


__all__ = [
    "ParserConfig",
    "get_api_bind_host",
    "get_api_port",
]
