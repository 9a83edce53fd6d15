from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Sequence
from typing import Any

from placement_engine.core.config import settings
from placement_engine.core.config.scoring import get_scoring_value
from placement_engine.core.errors import DuplicateChangeError
from placement_engine.normalize import normalize_opportunity, normalize_profile, parse_change
from placement_engine.schemas import (
    CertificationChange,
    CgpaChange,
    MatchScoreImprovement,
    Opportunity,
    Profile,
    RecommendedStep,
    SimulationChange,
    SimulationResult,
    Skill,
    SkillChange,
    TimelineEntry,
)
from placement_engine.taxonomy import TaxonomyProvider

from .eligibility import count_eligible, is_eligible
from .ranking import RankedChange, rank
from .scoring import score_skills

logger = logging.getLogger(__name__)


def prepare_changes(
    changes: Iterable[SimulationChange | Any],
    taxonomy_provider: TaxonomyProvider | None = None,
) -> list[SimulationChange]:
    """Validate a change batch: one CGPA change (the last), unique skills and certifications."""
    prepared: list[SimulationChange] = []
    seen: set[tuple[str, str]] = set()
    for raw in changes:
        change = parse_change(raw, taxonomy_provider)
        if isinstance(change, CgpaChange):
            prepared = [item for item in prepared if not isinstance(item, CgpaChange)]
            prepared.append(change)
            continue
        if change.key in seen:
            raise DuplicateChangeError(f"{change.kind} '{change.name}' is already part of this simulation")
        seen.add(change.key)
        prepared.append(change)
    return prepared


def apply_changes(profile: Profile, changes: Sequence[SimulationChange]) -> Profile:
    """Return a copy of ``profile`` with skill and CGPA changes applied."""
    simulated = profile.model_copy(deep=True)
    for change in changes:
        if isinstance(change, SkillChange):
            existing = simulated.find_skill(change.name)
            if existing is None:
                simulated.skills.append(Skill(name=change.name, level=change.level))
            elif change.level.rank > existing.level.rank:
                existing.level = change.level
        elif isinstance(change, CgpaChange):
            simulated.cgpa = change.target
    return simulated


def select_reference_opportunities(
    corpus: Sequence[Opportunity],
    companies: Sequence[str],
) -> list[Opportunity]:
    """First active opening per reference company; no companies means the whole active corpus."""
    active = [opportunity for opportunity in corpus if opportunity.is_active]
    needles = [company.strip().lower() for company in companies if company and company.strip()]
    if not needles:
        return active

    selected: list[Opportunity] = []
    taken: set[int] = set()
    for needle in needles:
        match = next((o for o in active if needle in o.company.lower()), None)
        if match is not None and id(match) not in taken:
            taken.add(id(match))
            selected.append(match)
    return selected


def _yields(
    change: SimulationChange,
    profile: Profile,
    corpus: Sequence[Opportunity],
    current_eligible: int,
) -> tuple[int, int]:
    """(immediate, long_term) yield of one change applied on its own."""
    if isinstance(change, SkillChange):
        if profile.find_skill(change.name) is not None:
            return 0, 0
        key = change.key[1]
        requiring = [o for o in corpus if o.is_active and key in o.required_keys()]
        immediate = sum(1 for o in requiring if is_eligible(profile, o))
        return immediate, len(requiring)
    if isinstance(change, CgpaChange):
        gained = count_eligible(apply_changes(profile, [change]), corpus) - current_eligible
        return gained, gained
    return 0, 0


def _action(change: SimulationChange) -> str:
    if isinstance(change, SkillChange):
        return f"Add {change.name} ({change.level.value})"
    if isinstance(change, CgpaChange):
        return f"Raise CGPA to {change.target:g}"
    return f"Earn {change.name} certification"


def _timeline_action(change: SimulationChange) -> str:
    if isinstance(change, SkillChange):
        return f"{change.name} course + project"
    if isinstance(change, CgpaChange):
        return f"Focus on coursework to reach CGPA {change.target:g}"
    return f"Prepare for and pass {change.name}"


def _effort_label(effort: float, unit: str) -> str:
    plural = unit if effort == 1 else f"{unit}s"
    return f"{effort:g} {plural.lower()}"


def build_timeline(ranked: Sequence[RankedChange], unit: str) -> list[TimelineEntry]:
    timeline: list[TimelineEntry] = []
    start = 1
    for entry in ranked:
        span = max(1, math.ceil(entry.effort))
        end = start + span - 1
        period = f"{unit} {start}-{end}" if end > start else f"{unit} {start}"
        timeline.append(TimelineEntry(period=period, action=_timeline_action(entry.change)))
        start = end + 1
    return timeline


def simulate(
    profile: Profile | Any,
    changes: Iterable[SimulationChange | Any],
    corpus: Iterable[Opportunity | Any],
    *,
    reference_companies: Sequence[str] | None = None,
    effort_unit: str | None = None,
    taxonomy_provider: TaxonomyProvider | None = None,
) -> SimulationResult:
    """Project a batch of what-if changes across an opportunity corpus.

    The caller's records are never mutated: the profile and corpus are
    normalized into fresh models and the changes land on a deep copy.
    ``reference_companies`` picks the openings used for before/after match
    scores (defaults to the configured employer list; an empty list uses every
    active opening). Certifications are reported but have no modeled effect.
    """
    current = normalize_profile(profile, taxonomy_provider)
    opportunities = [normalize_opportunity(raw, taxonomy_provider) for raw in corpus]
    prepared = prepare_changes(changes, taxonomy_provider)
    unit = (effort_unit or settings.effort_unit).strip() or settings.effort_unit

    current_eligible = count_eligible(current, opportunities)
    simulated = apply_changes(current, prepared)
    new_eligible = count_eligible(simulated, opportunities)

    if reference_companies is None:
        reference_companies = get_scoring_value("simulation.reference_companies", []) or []
    improvements: list[MatchScoreImprovement] = []
    for opportunity in select_reference_opportunities(opportunities, reference_companies):
        before = score_skills(current.skills, opportunity)
        after = score_skills(simulated.skills, opportunity)
        if before != after:
            improvements.append(
                MatchScoreImprovement(opportunity_label=opportunity.label, before=before, after=after)
            )

    yields = {change: _yields(change, current, opportunities, current_eligible) for change in prepared}
    ranked = rank(prepared, {change: immediate for change, (immediate, _) in yields.items()})
    path = [
        RecommendedStep(
            priority=index,
            action=_action(entry.change),
            effort_estimate=_effort_label(entry.effort, unit),
            immediate_yield=entry.immediate_yield,
            long_term_yield=yields[entry.change][1],
        )
        for index, entry in enumerate(ranked, start=1)
    ]

    logger.info(
        "simulation_completed changes=%s corpus=%s current=%s new=%s improvements=%s",
        len(prepared),
        len(opportunities),
        current_eligible,
        new_eligible,
        len(improvements),
    )
    return SimulationResult(
        current_eligible_count=current_eligible,
        new_eligible_count=new_eligible,
        delta_eligible_count=new_eligible - current_eligible,
        match_score_improvements=improvements,
        recommended_path=path,
        timeline=build_timeline(ranked, unit),
        certifications=[change.name for change in prepared if isinstance(change, CertificationChange)],
    )
