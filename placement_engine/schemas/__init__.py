from .analysis import PatternAnalysis, SkillFrequency, SkillGap
from .application import Application, ApplicationSnapshot, ApplicationStatus
from .explanation import (
    ExplanationRequest,
    ExplanationResponse,
    RuleAssessment,
    RuleViolation,
    SkillConfidence,
)
from .opportunity import Opportunity, OpportunityStatus, RequiredSkill
from .profile import Profile, Skill, SkillLevel, skill_key
from .simulation import (
    CertificationChange,
    CgpaChange,
    MatchScoreImprovement,
    RecommendedStep,
    SimulationChange,
    SimulationResult,
    SkillChange,
    TimelineEntry,
)

__all__ = [
    "Skill",
    "SkillLevel",
    "skill_key",
    "Profile",
    "RequiredSkill",
    "Opportunity",
    "OpportunityStatus",
    "Application",
    "ApplicationSnapshot",
    "ApplicationStatus",
    "SkillChange",
    "CgpaChange",
    "CertificationChange",
    "SimulationChange",
    "MatchScoreImprovement",
    "RecommendedStep",
    "TimelineEntry",
    "SimulationResult",
    "SkillFrequency",
    "PatternAnalysis",
    "SkillGap",
    "SkillConfidence",
    "ExplanationRequest",
    "RuleViolation",
    "RuleAssessment",
    "ExplanationResponse",
]
