from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .profile import SkillLevel, skill_key


def _clean_name(value: str) -> str:
    cleaned = " ".join(value.split())
    if not cleaned:
        raise ValueError("name must not be empty")
    return cleaned


class SkillChange(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["skill"] = "skill"
    name: str
    level: SkillLevel = SkillLevel.BEGINNER
    effort: float | None = Field(default=None, ge=0.0)

    @field_validator("name")
    @classmethod
    def _validate_name(cls, value: str) -> str:
        return _clean_name(value)

    @property
    def key(self) -> tuple[str, str]:
        return ("skill", skill_key(self.name))


class CgpaChange(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["cgpa"] = "cgpa"
    target: float = Field(ge=0.0, le=10.0, allow_inf_nan=False)
    effort: float | None = Field(default=None, ge=0.0)

    @property
    def key(self) -> tuple[str, str]:
        return ("cgpa", "")


class CertificationChange(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["certification"] = "certification"
    name: str
    effort: float | None = Field(default=None, ge=0.0)

    @field_validator("name")
    @classmethod
    def _validate_name(cls, value: str) -> str:
        return _clean_name(value)

    @property
    def key(self) -> tuple[str, str]:
        return ("certification", skill_key(self.name))


SimulationChange = Annotated[
    Union[SkillChange, CgpaChange, CertificationChange],
    Field(discriminator="kind"),
]


class MatchScoreImprovement(BaseModel):
    opportunity_label: str
    before: int
    after: int


class RecommendedStep(BaseModel):
    priority: int
    action: str
    effort_estimate: str
    immediate_yield: int
    long_term_yield: int


class TimelineEntry(BaseModel):
    period: str
    action: str


class SimulationResult(BaseModel):
    current_eligible_count: int
    new_eligible_count: int
    delta_eligible_count: int
    match_score_improvements: list[MatchScoreImprovement] = Field(default_factory=list)
    recommended_path: list[RecommendedStep] = Field(default_factory=list)
    timeline: list[TimelineEntry] = Field(default_factory=list)
    certifications: list[str] = Field(default_factory=list)
