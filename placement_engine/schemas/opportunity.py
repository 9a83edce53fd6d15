from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field, field_validator, model_validator

from .profile import SkillLevel, skill_key


class OpportunityStatus(str, Enum):
    ACTIVE = "active"
    CLOSED = "closed"
    DRAFT = "draft"


class RequiredSkill(BaseModel):
    name: str
    level: SkillLevel | None = None

    @field_validator("name")
    @classmethod
    def _validate_name(cls, value: str) -> str:
        cleaned = " ".join(value.split())
        if not cleaned:
            raise ValueError("required skill name must not be empty")
        return cleaned

    @property
    def key(self) -> str:
        return skill_key(self.name)


class Opportunity(BaseModel):
    opportunity_id: str | None = None
    role: str = ""
    company: str = ""
    min_cgpa: float | None = Field(default=None, ge=0.0, allow_inf_nan=False)
    required_skills: list[RequiredSkill] = Field(default_factory=list)
    status: OpportunityStatus = OpportunityStatus.ACTIVE

    @model_validator(mode="after")
    def _validate_unique_requirements(self) -> "Opportunity":
        seen: set[str] = set()
        for requirement in self.required_skills:
            if requirement.key in seen:
                raise ValueError(f"duplicate required skill '{requirement.name}'")
            seen.add(requirement.key)
        return self

    @property
    def is_active(self) -> bool:
        return self.status is OpportunityStatus.ACTIVE

    @property
    def label(self) -> str:
        return self.company or self.role or self.opportunity_id or "Opportunity"

    def required_keys(self) -> set[str]:
        return {requirement.key for requirement in self.required_skills}
