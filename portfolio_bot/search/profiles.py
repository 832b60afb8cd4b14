"""
Persona loading and per-request resolution.

Two on-disk shapes are accepted for the personas document and both end up as
a ProfileSet:

    # (a) explicit mapping
    {"default": "sankalp", "profiles": {"sankalp": {...}, "anaita": {...}}}

    # (b) flat mapping, "default" as a sibling key
    {"default": "sankalp", "sankalp": {...}, "anaita": {...}}

".json" files are parsed with json, anything else (".yaml", ".yml") with
yaml.safe_load. Anything missing or malformed yields an empty set with default "default".
"""

from __future__ import annotations

import json
import os
from typing import Any, Dict, List, Mapping, Optional

import yaml

from portfolio_bot.logger import get_logger
from .matching import contains_term
from .types import Persona, ProfileSet

logger = get_logger(__name__)

DEFAULT_PROFILE_ID = "default"


def normalize_profile_id(pid: Any) -> str:
    return str(pid or "").strip().lower()


def _read_document(path: str) -> Any:
    with open(path, "r", encoding="utf-8") as f:
        if path.endswith(".json"):
            return json.load(f)
        return yaml.safe_load(f)


# -------------------------
# Normalization
# -------------------------
def _build_profiles(records: Mapping[str, Any]) -> Dict[str, Persona]:
    out: Dict[str, Persona] = {}
    for raw_id, record in records.items():
        pid = normalize_profile_id(raw_id)
        if not pid:
            continue
        if not isinstance(record, Mapping):
            logger.warning(f"Skipping persona '{raw_id}': expected a mapping, got {type(record).__name__}")
            continue
        out[pid] = Persona.from_record(pid, record)
    return out


def normalize_profiles(raw: Any) -> ProfileSet:
    if not isinstance(raw, Mapping):
        return ProfileSet(default=DEFAULT_PROFILE_ID, profiles={})

    default = raw.get("default")
    default = default if isinstance(default, str) else DEFAULT_PROFILE_ID

    # shape (a)
    if isinstance(raw.get("profiles"), Mapping):
        return ProfileSet(default=default, profiles=_build_profiles(raw["profiles"]))

    # shape (b): everything except the pointer is a persona
    records = {k: v for k, v in raw.items() if k != "default"}
    return ProfileSet(default=default, profiles=_build_profiles(records))


def load_profiles(path: str) -> ProfileSet:
    try:
        raw = _read_document(path)
    except (OSError, ValueError, yaml.YAMLError) as e:
        logger.warning(f"Personas not loaded from {path}: {e}")
        return ProfileSet(default=DEFAULT_PROFILE_ID, profiles={})
    if raw is not None and not isinstance(raw, Mapping):
        logger.warning(f"Personas document {path} is not a mapping; ignoring it")
    return normalize_profiles(raw)


def load_legacy_profile(path: str) -> Dict[str, Any]:
    """Old single-profile file. Only used to fill in name and tone."""
    if not os.path.exists(path):
        return {}
    try:
        raw = _read_document(path)
    except (OSError, ValueError, yaml.YAMLError) as e:
        logger.warning(f"Legacy profile not loaded from {path}: {e}")
        return {}
    return dict(raw) if isinstance(raw, Mapping) else {}


# -------------------------
# Resolution
# -------------------------
def persona_terms(persona: Persona) -> List[str]:
    """id, full name, first name and aliases; lowercased, deduplicated."""
    terms = [persona.id]
    if persona.name:
        name = persona.name.lower()
        first = name.split()[0] if name.split() else ""
        terms.extend([first, name])
    terms.extend(persona.aliases)
    return list(dict.fromkeys(t for t in terms if t))


def infer_profile_id(profile_set: ProfileSet, message: str) -> Optional[str]:
    msg = (message or "").lower()
    for pid, persona in profile_set.profiles.items():
        if any(contains_term(msg, term) for term in persona_terms(persona)):
            return pid
    return None


def resolve_profile(
    profile_set: ProfileSet,
    requested_id: Optional[str],
    message: str,
) -> Persona:
    """
    Pick the active persona for a request:
      1. an explicitly requested, known id
      2. a persona mentioned in the message
      3. the declared default
      4. a bare "default" persona
    """
    profiles = profile_set.profiles

    requested = normalize_profile_id(requested_id)
    if requested and requested in profiles:
        return profiles[requested]

    inferred = infer_profile_id(profile_set, message)
    if inferred:
        return profiles[inferred]

    default = normalize_profile_id(profile_set.default) or DEFAULT_PROFILE_ID
    if default in profiles:
        return profiles[default]

    return Persona(id=DEFAULT_PROFILE_ID)
