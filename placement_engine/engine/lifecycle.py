from __future__ import annotations

import logging

from placement_engine.core.errors import EngineValidationError, InvalidTransitionError
from placement_engine.schemas import (
    Application,
    ApplicationSnapshot,
    ApplicationStatus,
    Opportunity,
    Profile,
)

from ._guards import require

logger = logging.getLogger(__name__)

_STAGE_ORDER = {
    ApplicationStatus.PENDING: 0,
    ApplicationStatus.SHORTLISTED: 1,
    ApplicationStatus.INTERVIEW_SCHEDULED: 2,
    ApplicationStatus.ACCEPTED: 3,
    ApplicationStatus.REJECTED: 3,
}


def can_transition(current: ApplicationStatus, target: ApplicationStatus) -> bool:
    if current.is_terminal:
        return False
    if target is ApplicationStatus.REJECTED:
        return True
    return _STAGE_ORDER[target] >= _STAGE_ORDER[current]


def submit_application(
    profile: Profile,
    opportunity: Opportunity,
    *,
    application_id: str | None = None,
    applied_at: str | None = None,
) -> Application:
    """Create a PENDING application with the profile frozen into its snapshot."""
    require(profile, Profile, "profile")
    require(opportunity, Opportunity, "opportunity")
    if not opportunity.is_active:
        raise EngineValidationError(
            f"Opportunity '{opportunity.label}' is {opportunity.status.value} and not accepting applications",
            code="opportunity_not_active",
        )
    return Application(
        application_id=application_id,
        profile_id=profile.profile_id,
        opportunity=opportunity.model_copy(deep=True),
        status=ApplicationStatus.PENDING,
        snapshot=ApplicationSnapshot(
            cgpa=profile.cgpa,
            skills=[skill.model_copy(deep=True) for skill in profile.skills],
        ),
        applied_at=applied_at,
    )


def transition(application: Application, target: ApplicationStatus) -> Application:
    """Return the application moved to ``target``; ACCEPTED and REJECTED are final."""
    require(application, Application, "application")
    if not can_transition(application.status, target):
        raise InvalidTransitionError(
            f"Cannot move application from {application.status.value} to {target.value}"
        )
    if target is application.status:
        return application.model_copy(deep=True)
    logger.debug(
        "application_transition id=%s from=%s to=%s",
        application.application_id,
        application.status.value,
        target.value,
    )
    return application.model_copy(update={"status": target}, deep=True)
