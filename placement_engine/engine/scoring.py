from __future__ import annotations

import math
from collections.abc import Iterable, Mapping, Sequence

from placement_engine.core.config.scoring import get_scoring_value
from placement_engine.schemas import Opportunity, Profile, Skill, SkillGap, SkillLevel

from ._guards import require

_DEFAULT_LEVEL_WEIGHTS = {
    SkillLevel.BEGINNER: 1.0,
    SkillLevel.INTERMEDIATE: 2.0,
    SkillLevel.ADVANCED: 3.0,
}


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _skills_of(subject: Profile | Sequence[Skill]) -> list[Skill]:
    if isinstance(subject, Profile):
        return list(subject.skills)
    return [skill for skill in subject if isinstance(skill, Skill)]


def level_weights(overrides: Mapping[SkillLevel, float] | None = None) -> dict[SkillLevel, float]:
    if overrides is not None:
        return {**_DEFAULT_LEVEL_WEIGHTS, **overrides}
    configured = get_scoring_value("matching.level_weights", {}) or {}
    weights = dict(_DEFAULT_LEVEL_WEIGHTS)
    for level in SkillLevel:
        value = configured.get(level.value)
        if isinstance(value, (int, float)) and value > 0:
            weights[level] = float(value)
    return weights


def matched_skill_names(subject: Profile | Sequence[Skill], opportunity: Opportunity) -> list[str]:
    held = {skill.key for skill in _skills_of(subject)}
    return [req.name for req in opportunity.required_skills if req.key in held]


def missing_skill_names(subject: Profile | Sequence[Skill], opportunity: Opportunity) -> list[str]:
    held = {skill.key for skill in _skills_of(subject)}
    return [req.name for req in opportunity.required_skills if req.key not in held]


def score_skills(skills: Iterable[Skill], opportunity: Opportunity) -> int:
    required = opportunity.required_keys()
    if not required:
        return 100
    held = {skill.key for skill in skills}
    return _round_half_up(100 * len(required & held) / len(required))


def score(profile: Profile, opportunity: Opportunity) -> int:
    """Percentage of required skills the profile holds, by case-insensitive name."""
    require(profile, Profile, "profile")
    require(opportunity, Opportunity, "opportunity")
    return score_skills(profile.skills, opportunity)


def weighted_score(
    profile: Profile,
    opportunity: Opportunity,
    weights: Mapping[SkillLevel, float] | None = None,
) -> int:
    """Match score where a skill held below the required level counts partially."""
    require(profile, Profile, "profile")
    require(opportunity, Opportunity, "opportunity")
    if not opportunity.required_skills:
        return 100

    table = level_weights(weights)
    held = {skill.key: skill for skill in profile.skills}
    credit = 0.0
    for requirement in opportunity.required_skills:
        skill = held.get(requirement.key)
        if skill is None:
            continue
        if requirement.level is None:
            credit += 1.0
            continue
        credit += min(1.0, table[skill.level] / table[requirement.level])
    return _round_half_up(100 * credit / len(opportunity.required_skills))


def skill_gaps(subject: Profile | Sequence[Skill], opportunity: Opportunity) -> list[SkillGap]:
    """Required skills that are missing or held below the stated level."""
    held = {skill.key: skill for skill in _skills_of(subject)}
    gaps: list[SkillGap] = []
    for requirement in opportunity.required_skills:
        skill = held.get(requirement.key)
        if skill is None:
            gaps.append(
                SkillGap(
                    skill=requirement.name,
                    required=requirement.level,
                    student_level=None,
                    suggestion=f"Develop {requirement.name} skills through online courses, projects, or certifications",
                )
            )
            continue
        if requirement.level is not None and skill.level.rank < requirement.level.rank:
            gaps.append(
                SkillGap(
                    skill=requirement.name,
                    required=requirement.level,
                    student_level=skill.level,
                    suggestion=(
                        f"Raise {requirement.name} from {skill.level.value} to "
                        f"{requirement.level.value} with a project that shows it"
                    ),
                )
            )
    return gaps
