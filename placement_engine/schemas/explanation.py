from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .analysis import SkillGap


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SkillConfidence(_CamelModel):
    name: str
    confidence: str
    evidence: list[str] = Field(default_factory=list)


class ExplanationRequest(_CamelModel):
    student_name: str
    student_skills: list[str] = Field(default_factory=list)
    student_cgpa: float
    job_role: str
    job_company: str
    job_required_skills: list[str] = Field(default_factory=list)
    job_min_cgpa: float
    is_snapshot: bool
    skill_confidence_data: list[SkillConfidence] = Field(default_factory=list)


class RuleViolation(_CamelModel):
    category: Literal["CGPA", "SKILLS"]
    description: str
    expected: str
    actual: str


class RuleAssessment(_CamelModel):
    type: Literal["RULE_BASED", "NON_RULE_BASED"]
    violations: list[RuleViolation] = Field(default_factory=list)
    key_missing_skills: list[str] = Field(default_factory=list)
    skill_gaps: list[SkillGap] = Field(default_factory=list)


class ExplanationResponse(_CamelModel):
    """Narrative returned by the external generator; displayed as-is."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    core_mismatch: str
    key_missing_skills: list[str] = Field(default_factory=list)
    resume_feedback: list[str] = Field(default_factory=list)
    action_plan: list[str] = Field(default_factory=list)
    sentiment: str = ""
    type: str | None = None
    violations: list[dict] | None = None
    skill_gaps: list[dict] | None = None
