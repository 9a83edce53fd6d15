from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import TypeAdapter, ValidationError

from placement_engine.core.errors import EngineValidationError
from placement_engine.schemas import CertificationChange, CgpaChange, SimulationChange, SkillChange, SkillLevel
from placement_engine.taxonomy import TaxonomyProvider

from .utils import canonical_skill_name, coerce_level, resolve_taxonomy

_CHANGE_ADAPTER: TypeAdapter[SimulationChange] = TypeAdapter(SimulationChange)
_CHANGE_KINDS = ("skill", "cgpa", "certification")


def _from_tagged(data: Mapping[str, Any]) -> dict[str, Any] | None:
    # {"skill": {"name": ..., "level": ...}} style payloads.
    tags = [kind for kind in _CHANGE_KINDS if kind in data]
    if len(tags) != 1 or not isinstance(data[tags[0]], Mapping):
        return None
    kind = tags[0]
    payload = {"kind": kind, **data[kind]}
    if "effort" in data:
        payload["effort"] = data["effort"]
    return payload


def _from_typed(data: Mapping[str, Any]) -> dict[str, Any]:
    # {"type": "skill", "value": "React", "level": "Beginner"} style payloads.
    kind = str(data.get("type", "")).strip().lower()
    value = data.get("value")
    payload: dict[str, Any] = {"kind": kind}
    if kind == "cgpa":
        payload["target"] = value
    else:
        payload["name"] = value
    if "level" in data:
        payload["level"] = data["level"]
    if "effort" in data:
        payload["effort"] = data["effort"]
    return payload


def _canonicalize(change: SimulationChange, taxonomy_provider: TaxonomyProvider | None) -> SimulationChange:
    taxonomy = resolve_taxonomy(taxonomy_provider)
    if not isinstance(change, SkillChange) or taxonomy is None:
        return change
    name = canonical_skill_name(change.name, taxonomy)
    if name == change.name:
        return change
    return change.model_copy(update={"name": name})


def parse_change(raw: Any, taxonomy_provider: TaxonomyProvider | None = None) -> SimulationChange:
    """Validate one what-if change; skill names go through the same taxonomy as profiles."""
    if isinstance(raw, (SkillChange, CgpaChange, CertificationChange)):
        return _canonicalize(raw, taxonomy_provider)
    if not isinstance(raw, Mapping):
        raise EngineValidationError(
            f"Unsupported simulation change of type {type(raw).__name__}",
            code="invalid_change",
        )

    if "kind" in raw:
        payload = dict(raw)
    elif "type" in raw:
        payload = _from_typed(raw)
    else:
        tagged = _from_tagged(raw)
        if tagged is None:
            raise EngineValidationError("Simulation change has no recognizable kind", code="invalid_change")
        payload = tagged

    if payload.get("kind") == "skill":
        payload["level"] = coerce_level(payload.get("level"), SkillLevel.BEGINNER)

    try:
        change = _CHANGE_ADAPTER.validate_python(payload)
    except ValidationError as exc:
        raise EngineValidationError(f"Invalid simulation change: {exc}", code="invalid_change") from exc
    return _canonicalize(change, taxonomy_provider)
