from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel

from placement_engine.core.config import settings
from placement_engine.core.errors import EngineValidationError
from placement_engine.schemas import RequiredSkill, Skill, SkillLevel, skill_key
from placement_engine.taxonomy import TaxonomyProvider, get_default_taxonomy_provider

CGPA_MIN = 0.0
CGPA_MAX = 10.0

_LEVEL_ALIASES = {
    "beginner": SkillLevel.BEGINNER,
    "basic": SkillLevel.BEGINNER,
    "novice": SkillLevel.BEGINNER,
    "intermediate": SkillLevel.INTERMEDIATE,
    "proficient": SkillLevel.INTERMEDIATE,
    "advanced": SkillLevel.ADVANCED,
    "expert": SkillLevel.ADVANCED,
}


def as_mapping(raw: Any, *, record: str) -> Mapping[str, Any]:
    if raw is None:
        return {}
    if isinstance(raw, BaseModel):
        return raw.model_dump()
    if isinstance(raw, Mapping):
        return raw
    raise EngineValidationError(
        f"Unsupported {record} record of type {type(raw).__name__}",
        code="unsupported_record",
    )


def pick_field(raw: Mapping[str, Any], *names: str, default: Any = None) -> Any:
    """Return the first non-null value among field spellings, in preference order."""
    for name in names:
        value = raw.get(name)
        if value is not None:
            return value
    return default


def normalize_text(value: Any) -> str:
    if value is None:
        return ""
    return " ".join(str(value).split())


def _to_finite_float(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number


def clamp_cgpa(value: float) -> float:
    return min(CGPA_MAX, max(CGPA_MIN, value))


def coerce_cgpa(value: Any) -> float:
    number = _to_finite_float(value)
    if number is None:
        return 0.0
    return clamp_cgpa(number)


def coerce_optional_cgpa(value: Any) -> float | None:
    number = _to_finite_float(value)
    if number is None:
        return None
    return clamp_cgpa(number)


def coerce_min_cgpa(value: Any) -> float | None:
    """Eligibility cut-off. A cut-off above the scale is kept so nobody can meet it."""
    number = _to_finite_float(value)
    if number is None:
        return None
    return max(CGPA_MIN, number)


def coerce_level(value: Any, default: SkillLevel | None) -> SkillLevel | None:
    if isinstance(value, SkillLevel):
        return value
    if not isinstance(value, str):
        return default
    return _LEVEL_ALIASES.get(value.strip().lower(), default)


def resolve_taxonomy(taxonomy_provider: TaxonomyProvider | None) -> TaxonomyProvider | None:
    if taxonomy_provider is not None:
        return taxonomy_provider
    if settings.use_skill_synonyms:
        return get_default_taxonomy_provider()
    return None


def canonical_skill_name(raw: Any, taxonomy_provider: TaxonomyProvider | None = None) -> str:
    name = normalize_text(raw)
    if not name or taxonomy_provider is None:
        return name
    cleaned, canonical = taxonomy_provider.normalize_skill(name)
    return canonical or cleaned


def _evidence_tags(raw: Any) -> list[str]:
    if not isinstance(raw, (list, tuple)):
        return []
    tags: list[str] = []
    for item in raw:
        if isinstance(item, Mapping):
            item = item.get("type") or item.get("name")
        tag = normalize_text(item)
        if tag:
            tags.append(tag)
    return tags


def _skill_parts(entry: Any) -> tuple[Any, Any, Any]:
    if isinstance(entry, BaseModel):
        entry = entry.model_dump()
    if isinstance(entry, str):
        return entry, None, None
    if isinstance(entry, Mapping):
        name = pick_field(entry, "name", "skill")
        level = pick_field(entry, "level", "confidence")
        return name, level, entry.get("evidence")
    return None, None, None


def normalize_skills(
    entries: Any,
    taxonomy_provider: TaxonomyProvider | None = None,
) -> list[Skill]:
    """Clean a raw skill list; later duplicates overwrite earlier ones in place."""
    if not isinstance(entries, (list, tuple)):
        return []
    by_key: dict[str, Skill] = {}
    for entry in entries:
        raw_name, raw_level, raw_evidence = _skill_parts(entry)
        name = canonical_skill_name(raw_name, taxonomy_provider)
        if not name:
            continue
        by_key[skill_key(name)] = Skill(
            name=name,
            level=coerce_level(raw_level, SkillLevel.BEGINNER),
            evidence=_evidence_tags(raw_evidence),
        )
    return list(by_key.values())


def normalize_required_skills(
    entries: Any,
    taxonomy_provider: TaxonomyProvider | None = None,
) -> list[RequiredSkill]:
    if not isinstance(entries, (list, tuple)):
        return []
    by_key: dict[str, RequiredSkill] = {}
    for entry in entries:
        raw_name, raw_level, _ = _skill_parts(entry)
        name = canonical_skill_name(raw_name, taxonomy_provider)
        if not name:
            continue
        by_key[skill_key(name)] = RequiredSkill(name=name, level=coerce_level(raw_level, None))
    return list(by_key.values())
