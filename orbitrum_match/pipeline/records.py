"""Turn raw client/professional records into validated models.

Records come from the search route or from exported storage dumps, so keys
may be camelCase or snake_case, enum values may be Portuguese, and most
fields may be missing. Missing fields get the same defaults the search route
has always applied.
"""

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from orbitrum_match.core.schemas import ClientRequest, ProfessionalProfile

logger = logging.getLogger(__name__)

CLIENT_DEFAULTS: dict[str, Any] = {
    "project_type": "Desenvolvimento",
    "budget": 5000,
    "urgency": "normal",
    "work_preference": "remote",
    "communication_style": "technical",
    "experience_required": "mid",
    "location": None,
}

PROFESSIONAL_DEFAULTS: dict[str, Any] = {
    "experience_years": 3,
    "rating": 4.5,
    "completed_projects": 10,
    "response_time_hours": 24,
    "hourly_rate": 45,
    "work_preferences": ["remote", "onsite"],
    "communication_style": "technical",
    "work_methodology": "agile",
}

DEFAULT_CITY = "São Paulo"
DEFAULT_STATE = "SP"
DEFAULT_WORK_RADIUS_KM = 20


def _pick(data: Mapping[str, Any], name: str) -> Any:
    """Return data[snake] or data[camel], whichever is set (non-null)."""
    head, *rest = name.split("_")
    camel = head + "".join(part.capitalize() for part in rest)
    for key in (name, camel):
        value = data.get(key)
        if value is not None:
            return value
    return None


def client_from_request(data: Mapping[str, Any]) -> ClientRequest:
    """Build a ClientRequest from a request body, filling route defaults."""
    values: dict[str, Any] = {}
    for name, default in CLIENT_DEFAULTS.items():
        value = _pick(data, name)
        values[name] = default if value is None or value == "" else value
    return ClientRequest.model_validate(values)


def professional_from_record(data: Mapping[str, Any]) -> ProfessionalProfile:
    """Build a ProfessionalProfile from a storage record, filling defaults."""
    services = data.get("services") or []
    values: dict[str, Any] = {
        "id": data.get("id"),
        "name": data.get("name"),
        "title": data.get("title") or "",
        "skills": data.get("skills") or services,
        "specializations": data.get("specializations") or services,
        "available": data.get("available") is not False,
        "location": _professional_location(data),
    }
    for name, default in PROFESSIONAL_DEFAULTS.items():
        value = _pick(data, name)
        values[name] = default if value is None else value
    return ProfessionalProfile.model_validate(values)


def _professional_location(data: Mapping[str, Any]) -> dict[str, Any] | None:
    """Location from a nested mapping or flat keys; None without coordinates."""
    nested = data.get("location")
    source: Mapping[str, Any] = nested if isinstance(nested, Mapping) else data

    latitude = source.get("latitude")
    longitude = source.get("longitude")
    if latitude is None or longitude is None:
        return None

    radius = _pick(source, "work_radius_km")
    if radius is None:
        radius = source.get("workRadius")
    return {
        "latitude": latitude,
        "longitude": longitude,
        "city": source.get("city") or DEFAULT_CITY,
        "state": source.get("state") or DEFAULT_STATE,
        "work_radius_km": DEFAULT_WORK_RADIUS_KM if radius is None else radius,
    }


def _read_file(path: str | Path) -> Any:
    path = Path(path)
    if not path.exists():
        msg = f"Input file not found: {path}"
        raise FileNotFoundError(msg)
    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() == ".json":
        return json.loads(text)
    return yaml.safe_load(text)


def load_records(path: str | Path, key: str = "professionals") -> list[dict[str, Any]]:
    """Load a list of records from YAML/JSON (bare list or under ``key``)."""
    raw = _read_file(path)
    if isinstance(raw, Mapping):
        raw = raw.get(key)
    if not isinstance(raw, list) or not all(isinstance(r, Mapping) for r in raw):
        msg = f"{path}: expected a list of records or a mapping with a '{key}' list"
        raise ValueError(msg)
    logger.debug("Loaded %d records from %s", len(raw), path)
    return [dict(r) for r in raw]


def load_professionals(path: str | Path) -> list[ProfessionalProfile]:
    """Load and validate every professional record in a file."""
    return [professional_from_record(r) for r in load_records(path)]


def load_client_request(path: str | Path) -> ClientRequest:
    """Load a single client request (a mapping) from YAML/JSON."""
    raw = _read_file(path) or {}
    if not isinstance(raw, Mapping):
        msg = f"{path}: expected a mapping with the client request fields"
        raise ValueError(msg)
    return client_from_request(raw)
