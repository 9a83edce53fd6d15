from __future__ import annotations

from typing import Any

from placement_engine.core.config.scoring import get_scoring_value
from placement_engine.engine.scoring import missing_skill_names, skill_gaps
from placement_engine.normalize import normalize_application, normalize_profile
from placement_engine.schemas import (
    Application,
    ExplanationRequest,
    Profile,
    RuleAssessment,
    RuleViolation,
    SkillConfidence,
)
from placement_engine.taxonomy import TaxonomyProvider


def build_explanation_request(
    profile: Profile | Any,
    application: Application | Any,
    taxonomy_provider: TaxonomyProvider | None = None,
) -> ExplanationRequest:
    """Payload for the external explanation generator.

    Skills and CGPA come from the application snapshot when one was captured,
    so the explanation describes the profile that was actually rejected.
    """
    live = normalize_profile(profile, taxonomy_provider)
    normalized = normalize_application(application, taxonomy_provider)
    opportunity = normalized.opportunity
    skills = normalized.effective_skills(live)

    return ExplanationRequest(
        student_name=live.name or "Student",
        student_skills=[skill.name for skill in skills],
        student_cgpa=normalized.effective_cgpa(live),
        job_role=opportunity.role or "Position",
        job_company=opportunity.company or "Company",
        job_required_skills=[requirement.name for requirement in opportunity.required_skills],
        job_min_cgpa=opportunity.min_cgpa if opportunity.min_cgpa is not None else 0.0,
        is_snapshot=normalized.uses_snapshot,
        skill_confidence_data=[
            SkillConfidence(name=skill.name, confidence=skill.level.value, evidence=list(skill.evidence))
            for skill in skills
        ],
    )


def assess_rejection(
    profile: Profile | Any,
    application: Application | Any,
    taxonomy_provider: TaxonomyProvider | None = None,
) -> RuleAssessment:
    """Structured rule check behind a rejection: CGPA gate and missing skills."""
    live = normalize_profile(profile, taxonomy_provider)
    normalized = normalize_application(application, taxonomy_provider)
    opportunity = normalized.opportunity
    skills = normalized.effective_skills(live)
    cgpa = normalized.effective_cgpa(live)

    max_skill_violations = int(get_scoring_value("explanation.max_skill_violations", 3))
    max_missing = int(get_scoring_value("explanation.max_missing_skills", 5))

    violations: list[RuleViolation] = []
    if opportunity.min_cgpa is not None and cgpa < opportunity.min_cgpa:
        violations.append(
            RuleViolation(
                category="CGPA",
                description="CGPA requirement not met",
                expected=f"{opportunity.min_cgpa:g}",
                actual=f"{cgpa:g}",
            )
        )

    missing = missing_skill_names(skills, opportunity)
    for name in missing[:max_skill_violations]:
        violations.append(
            RuleViolation(
                category="SKILLS",
                description=f"Missing required skill: {name}",
                expected=name,
                actual="Not found in profile",
            )
        )

    return RuleAssessment(
        type="RULE_BASED" if violations else "NON_RULE_BASED",
        violations=violations,
        key_missing_skills=missing[:max_missing],
        skill_gaps=skill_gaps(skills, opportunity)[:max_missing],
    )
