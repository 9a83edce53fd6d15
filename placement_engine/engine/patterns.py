from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from placement_engine.core.config.scoring import get_scoring_value
from placement_engine.normalize import normalize_application, normalize_profile
from placement_engine.schemas import (
    Application,
    ApplicationStatus,
    PatternAnalysis,
    Profile,
    SkillFrequency,
    skill_key,
)
from placement_engine.taxonomy import TaxonomyProvider

logger = logging.getLogger(__name__)

NO_REJECTIONS_PRIORITY = "No rejected applications to analyze yet"
CGPA_PRIORITY = "Raise your CGPA above the cut-offs of the roles you are targeting"


def _priority_for(entry: SkillFrequency) -> str:
    noun = "application" if entry.frequency == 1 else "applications"
    return f"Learn {entry.skill} (missing in {entry.frequency} rejected {noun})"


def aggregate(
    profile: Profile | Any,
    applications: Iterable[Application | Any],
    taxonomy_provider: TaxonomyProvider | None = None,
) -> PatternAnalysis:
    """Reduce rejected applications to a missing-skill histogram and a CGPA flag.

    Each rejection is judged against the profile as it was at submission
    (the application snapshot) and falls back to the live profile for legacy
    rows without one. ``common_missing_skills`` is the full ranked histogram:
    frequency descending, ties in first-seen order.
    """
    live = normalize_profile(profile, taxonomy_provider)
    rejected = [
        application
        for application in (normalize_application(raw, taxonomy_provider) for raw in applications)
        if application.status is ApplicationStatus.REJECTED
    ]

    if not rejected:
        return PatternAnalysis(
            common_missing_skills=[],
            cgpa_issues=False,
            improvement_priorities=[NO_REJECTIONS_PRIORITY],
            rejection_count=0,
        )

    counts: dict[str, int] = {}
    labels: dict[str, str] = {}
    gated = 0
    below_gate = 0
    for application in rejected:
        held = {skill.key for skill in application.effective_skills(live)}
        for requirement in application.opportunity.required_skills:
            if requirement.key in held:
                continue
            labels.setdefault(requirement.key, requirement.name)
            counts[requirement.key] = counts.get(requirement.key, 0) + 1

        min_cgpa = application.opportunity.min_cgpa
        if min_cgpa is not None:
            gated += 1
            if application.effective_cgpa(live) < min_cgpa:
                below_gate += 1

    # sorted() is stable and dicts keep insertion order, so ties stay first-seen.
    ranked = sorted(counts, key=lambda key: counts[key], reverse=True)
    histogram = [SkillFrequency(skill=labels[key], frequency=counts[key]) for key in ranked]
    cgpa_issues = gated > 0 and below_gate * 2 > gated

    priorities = [_priority_for(entry) for entry in histogram]
    if cgpa_issues:
        priorities.append(CGPA_PRIORITY)

    logger.info(
        "rejection_patterns_aggregated rejections=%s missing_skills=%s cgpa_issues=%s",
        len(rejected),
        len(histogram),
        cgpa_issues,
    )
    return PatternAnalysis(
        common_missing_skills=histogram,
        cgpa_issues=cgpa_issues,
        improvement_priorities=priorities,
        rejection_count=len(rejected),
    )


def top_missing_skills(analysis: PatternAnalysis, limit: int | None = None) -> list[SkillFrequency]:
    if limit is None:
        limit = int(get_scoring_value("patterns.top_missing_skills", 5))
    return analysis.common_missing_skills[: max(0, limit)]


def compare_with_previous(current: PatternAnalysis, previous: PatternAnalysis | None) -> list[str]:
    """Progress notes between two pattern analyses of the same candidate."""
    if previous is None:
        return ["This is your first analysis. Start working on the identified priorities!"]

    still_missing = {skill_key(entry.skill) for entry in current.common_missing_skills}
    improvements = [
        f"Successfully acquired: {entry.skill}"
        for entry in previous.common_missing_skills
        if skill_key(entry.skill) not in still_missing
    ]
    if previous.cgpa_issues and not current.cgpa_issues:
        improvements.append("CGPA now meets more requirements")
    if not improvements:
        improvements.append("Keep working on your improvement priorities to see progress!")
    return improvements
