from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field, model_validator

from .opportunity import Opportunity
from .profile import Profile, Skill, _reject_duplicate_skills


class ApplicationStatus(str, Enum):
    PENDING = "PENDING"
    SHORTLISTED = "SHORTLISTED"
    INTERVIEW_SCHEDULED = "INTERVIEW_SCHEDULED"
    ACCEPTED = "ACCEPTED"
    REJECTED = "REJECTED"

    @property
    def is_terminal(self) -> bool:
        return self in {ApplicationStatus.ACCEPTED, ApplicationStatus.REJECTED}


class ApplicationSnapshot(BaseModel):
    """Profile values frozen at submission time.

    Either field may be missing on legacy rows; the live profile fills the gap.
    """

    cgpa: float | None = Field(default=None, ge=0.0, le=10.0)
    skills: list[Skill] | None = None

    @model_validator(mode="after")
    def _validate_unique_skills(self) -> "ApplicationSnapshot":
        if self.skills:
            _reject_duplicate_skills(self.skills, "application snapshot")
        return self


class Application(BaseModel):
    application_id: str | None = None
    profile_id: str | None = None
    opportunity: Opportunity
    status: ApplicationStatus = ApplicationStatus.PENDING
    snapshot: ApplicationSnapshot | None = None
    applied_at: str | None = None

    @property
    def uses_snapshot(self) -> bool:
        return self.snapshot is not None and self.snapshot.cgpa is not None

    def effective_cgpa(self, profile: Profile) -> float:
        if self.snapshot is not None and self.snapshot.cgpa is not None:
            return self.snapshot.cgpa
        return profile.cgpa

    def effective_skills(self, profile: Profile) -> list[Skill]:
        if self.snapshot is not None and self.snapshot.skills is not None:
            return list(self.snapshot.skills)
        return list(profile.skills)
