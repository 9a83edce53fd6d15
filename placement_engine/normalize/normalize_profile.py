from __future__ import annotations

from typing import Any

from placement_engine.schemas import Profile
from placement_engine.taxonomy import TaxonomyProvider

from .utils import as_mapping, coerce_cgpa, normalize_skills, normalize_text, pick_field, resolve_taxonomy


def normalize_profile(raw: Any, taxonomy_provider: TaxonomyProvider | None = None) -> Profile:
    data = as_mapping(raw, record="profile")
    profile_id = pick_field(data, "profileId", "profile_id", "studentId", "student_id", "id")
    return Profile(
        profile_id=normalize_text(profile_id) or None,
        name=normalize_text(data.get("name")),
        cgpa=coerce_cgpa(data.get("cgpa")),
        skills=normalize_skills(data.get("skills"), resolve_taxonomy(taxonomy_provider)),
    )
