from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field, field_validator, model_validator


def skill_key(name: str) -> str:
    """Comparison key for skill names; matching is case-insensitive."""
    return " ".join(name.split()).lower()


class SkillLevel(str, Enum):
    BEGINNER = "Beginner"
    INTERMEDIATE = "Intermediate"
    ADVANCED = "Advanced"

    @property
    def rank(self) -> int:
        return _LEVEL_RANK[self]


_LEVEL_RANK = {
    SkillLevel.BEGINNER: 1,
    SkillLevel.INTERMEDIATE: 2,
    SkillLevel.ADVANCED: 3,
}


class Skill(BaseModel):
    name: str
    level: SkillLevel = SkillLevel.BEGINNER
    evidence: list[str] = Field(default_factory=list)

    @field_validator("name")
    @classmethod
    def _validate_name(cls, value: str) -> str:
        cleaned = " ".join(value.split())
        if not cleaned:
            raise ValueError("skill name must not be empty")
        return cleaned

    @property
    def key(self) -> str:
        return skill_key(self.name)


def _reject_duplicate_skills(skills: list[Skill], owner: str) -> None:
    seen: set[str] = set()
    for skill in skills:
        if skill.key in seen:
            raise ValueError(f"duplicate skill '{skill.name}' in {owner}")
        seen.add(skill.key)


class Profile(BaseModel):
    profile_id: str | None = None
    name: str = ""
    cgpa: float = Field(default=0.0, ge=0.0, le=10.0)
    skills: list[Skill] = Field(default_factory=list)

    @model_validator(mode="after")
    def _validate_unique_skills(self) -> "Profile":
        _reject_duplicate_skills(self.skills, "profile")
        return self

    def skill_keys(self) -> set[str]:
        return {skill.key for skill in self.skills}

    def find_skill(self, name: str) -> Skill | None:
        wanted = skill_key(name)
        for skill in self.skills:
            if skill.key == wanted:
                return skill
        return None
