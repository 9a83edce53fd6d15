from __future__ import annotations

from pydantic import BaseModel, Field

from .profile import SkillLevel


class SkillFrequency(BaseModel):
    skill: str
    frequency: int


class PatternAnalysis(BaseModel):
    common_missing_skills: list[SkillFrequency] = Field(default_factory=list)
    cgpa_issues: bool = False
    improvement_priorities: list[str] = Field(default_factory=list)
    industry_insights: str = ""
    rejection_count: int = 0


class SkillGap(BaseModel):
    skill: str
    required: SkillLevel | None = None
    student_level: SkillLevel | None = None
    suggestion: str = ""

    @property
    def is_missing(self) -> bool:
        return self.student_level is None
