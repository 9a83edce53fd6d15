from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from placement_engine.core.errors import EngineValidationError
from placement_engine.schemas import Opportunity, Profile
from placement_engine.taxonomy import TaxonomyProvider

from .normalize_application import coerce_application_status, normalize_application
from .normalize_changes import parse_change
from .normalize_opportunity import normalize_opportunity
from .normalize_profile import normalize_profile

_OPPORTUNITY_FIELDS = {
    "requiredSkills",
    "required_skills",
    "minCgpa",
    "min_cgpa",
    "role",
    "title",
    "company",
    "companyName",
    "company_name",
    "status",
}

_ADAPTERS = {
    "profile": normalize_profile,
    "opportunity": normalize_opportunity,
}


def normalize(
    raw: Any,
    taxonomy_provider: TaxonomyProvider | None = None,
    *,
    kind: str | None = None,
) -> Profile | Opportunity:
    """Route a raw record to the profile or opportunity adapter.

    Pass ``kind="profile"`` or ``kind="opportunity"`` to pick the adapter
    explicitly. Without it the record is routed by shape: a mapping carrying any
    known opportunity field goes to the opportunity adapter, and everything else,
    including an opportunity that only uses unrecognized field names, is read as
    a profile.
    """
    if kind is not None:
        adapter = _ADAPTERS.get(kind.strip().lower())
        if adapter is None:
            raise EngineValidationError(f"Unknown record kind '{kind}'", code="unknown_kind")
        return adapter(raw, taxonomy_provider)
    if isinstance(raw, Opportunity):
        return normalize_opportunity(raw, taxonomy_provider)
    if isinstance(raw, Mapping) and _OPPORTUNITY_FIELDS & set(raw):
        return normalize_opportunity(raw, taxonomy_provider)
    return normalize_profile(raw, taxonomy_provider)


__all__ = [
    "normalize",
    "normalize_profile",
    "normalize_opportunity",
    "normalize_application",
    "coerce_application_status",
    "parse_change",
]
