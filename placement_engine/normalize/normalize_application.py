from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from placement_engine.core.errors import EngineValidationError
from placement_engine.schemas import Application, ApplicationSnapshot, ApplicationStatus
from placement_engine.taxonomy import TaxonomyProvider

from .normalize_opportunity import normalize_opportunity
from .utils import as_mapping, coerce_optional_cgpa, normalize_skills, normalize_text, pick_field, resolve_taxonomy

_LEGACY_STATUSES = {
    "APPLIED": ApplicationStatus.PENDING,
    "PENDING_APPROVAL": ApplicationStatus.PENDING,
}


def coerce_application_status(value: Any) -> ApplicationStatus:
    if value is None:
        return ApplicationStatus.PENDING
    if isinstance(value, ApplicationStatus):
        return value
    token = str(value).strip().upper()
    if token in _LEGACY_STATUSES:
        return _LEGACY_STATUSES[token]
    try:
        return ApplicationStatus(token)
    except ValueError as exc:
        raise EngineValidationError(
            f"Unknown application status '{value}'",
            code="invalid_status",
        ) from exc


def _normalize_snapshot(
    data: Mapping[str, Any],
    taxonomy_provider: TaxonomyProvider | None,
) -> ApplicationSnapshot | None:
    nested = data.get("snapshot")
    if isinstance(nested, Mapping):
        raw_cgpa = pick_field(nested, "cgpa", "snapshotCgpa", "snapshot_cgpa")
        raw_skills = pick_field(nested, "skills", "snapshotSkills", "snapshot_skills")
    else:
        raw_cgpa = pick_field(data, "snapshotCgpa", "snapshot_cgpa")
        raw_skills = pick_field(data, "snapshotSkills", "snapshot_skills")
    if raw_cgpa is None and raw_skills is None:
        return None
    return ApplicationSnapshot(
        cgpa=coerce_optional_cgpa(raw_cgpa),
        skills=normalize_skills(raw_skills, taxonomy_provider) if raw_skills is not None else None,
    )


def normalize_application(raw: Any, taxonomy_provider: TaxonomyProvider | None = None) -> Application:
    data = as_mapping(raw, record="application")
    taxonomy = resolve_taxonomy(taxonomy_provider)

    raw_opportunity = pick_field(data, "opportunity", "job")
    if raw_opportunity is None:
        raise EngineValidationError(
            "Application has no opportunity attached",
            code="missing_opportunity",
        )

    application_id = pick_field(data, "applicationId", "application_id", "id")
    profile_id = pick_field(data, "profileId", "profile_id", "studentId", "student_id")
    applied_at = pick_field(data, "appliedAt", "applied_at", "appliedDate", "created_at")
    return Application(
        application_id=normalize_text(application_id) or None,
        profile_id=normalize_text(profile_id) or None,
        opportunity=normalize_opportunity(raw_opportunity, taxonomy),
        status=coerce_application_status(data.get("status")),
        snapshot=_normalize_snapshot(data, taxonomy),
        applied_at=normalize_text(applied_at) or None,
    )
