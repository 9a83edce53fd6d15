from __future__ import annotations

from typing import Any

from placement_engine.schemas import Opportunity, OpportunityStatus
from placement_engine.taxonomy import TaxonomyProvider

from .utils import (
    as_mapping,
    coerce_min_cgpa,
    normalize_required_skills,
    normalize_text,
    pick_field,
    resolve_taxonomy,
)


def _coerce_status(value: Any) -> OpportunityStatus:
    # Rows written before the status column existed are live postings.
    if value is None:
        return OpportunityStatus.ACTIVE
    if isinstance(value, OpportunityStatus):
        return value
    try:
        return OpportunityStatus(str(value).strip().lower())
    except ValueError:
        return OpportunityStatus.DRAFT


def normalize_opportunity(raw: Any, taxonomy_provider: TaxonomyProvider | None = None) -> Opportunity:
    data = as_mapping(raw, record="opportunity")
    opportunity_id = pick_field(data, "opportunityId", "opportunity_id", "jobId", "job_id", "id")
    return Opportunity(
        opportunity_id=normalize_text(opportunity_id) or None,
        role=normalize_text(pick_field(data, "role", "title")),
        company=normalize_text(pick_field(data, "company", "companyName", "company_name")),
        min_cgpa=coerce_min_cgpa(pick_field(data, "minCgpa", "min_cgpa")),
        required_skills=normalize_required_skills(
            pick_field(data, "requiredSkills", "required_skills"),
            resolve_taxonomy(taxonomy_provider),
        ),
        status=_coerce_status(data.get("status")),
    )
