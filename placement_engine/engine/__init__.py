from .eligibility import count_eligible, eligible_opportunities, is_eligible
from .lifecycle import can_transition, submit_application, transition
from .patterns import aggregate, compare_with_previous, top_missing_skills
from .ranking import RankedChange, default_effort, rank
from .scoring import matched_skill_names, missing_skill_names, score, skill_gaps, weighted_score
from .simulator import apply_changes, prepare_changes, select_reference_opportunities, simulate

__all__ = [
    "is_eligible",
    "eligible_opportunities",
    "count_eligible",
    "score",
    "weighted_score",
    "skill_gaps",
    "matched_skill_names",
    "missing_skill_names",
    "aggregate",
    "top_missing_skills",
    "compare_with_previous",
    "RankedChange",
    "default_effort",
    "rank",
    "prepare_changes",
    "apply_changes",
    "select_reference_opportunities",
    "simulate",
    "submit_application",
    "transition",
    "can_transition",
]
