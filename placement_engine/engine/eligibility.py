from __future__ import annotations

from collections.abc import Iterable

from placement_engine.schemas import Opportunity, Profile

from ._guards import require


def is_eligible(profile: Profile, opportunity: Opportunity) -> bool:
    """CGPA gate on an active opportunity.

    Required skills are deliberately not part of eligibility; they only feed
    the match score.
    """
    require(profile, Profile, "profile")
    require(opportunity, Opportunity, "opportunity")
    if not opportunity.is_active:
        return False
    if opportunity.min_cgpa is None:
        return True
    return profile.cgpa >= opportunity.min_cgpa


def eligible_opportunities(profile: Profile, corpus: Iterable[Opportunity]) -> list[Opportunity]:
    return [opportunity for opportunity in corpus if is_eligible(profile, opportunity)]


def count_eligible(profile: Profile, corpus: Iterable[Opportunity]) -> int:
    return len(eligible_opportunities(profile, corpus))
