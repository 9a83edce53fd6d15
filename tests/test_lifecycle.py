import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from placement_engine.core.errors import EngineValidationError, InvalidTransitionError  # noqa: E402
from placement_engine.engine.lifecycle import can_transition, submit_application, transition  # noqa: E402
from placement_engine.normalize import normalize_opportunity, normalize_profile  # noqa: E402
from placement_engine.schemas import ApplicationStatus, SkillLevel  # noqa: E402


def _profile():
    return normalize_profile(
        {"id": "s1", "name": "Asha", "cgpa": 7.4, "skills": [{"name": "Python", "level": "Advanced"}]}
    )


def _opportunity(**overrides):
    raw = {"id": "o1", "role": "SDE", "company": "Google", "minCgpa": 7.0, "requiredSkills": ["Python"]}
    raw.update(overrides)
    return normalize_opportunity(raw)


class SubmitApplicationTests(unittest.TestCase):
    def test_submission_captures_snapshot(self):
        profile = _profile()
        application = submit_application(profile, _opportunity(), application_id="a1", applied_at="2024-02-01")

        self.assertEqual(application.status, ApplicationStatus.PENDING)
        self.assertEqual(application.profile_id, "s1")
        self.assertTrue(application.uses_snapshot)
        self.assertEqual(application.snapshot.cgpa, 7.4)
        self.assertEqual(application.applied_at, "2024-02-01")

        profile.cgpa = 9.0
        profile.skills[0].level = SkillLevel.BEGINNER
        self.assertEqual(application.snapshot.cgpa, 7.4)
        self.assertEqual(application.snapshot.skills[0].level, SkillLevel.ADVANCED)

    def test_closed_opportunity_rejects_submission(self):
        with self.assertRaises(EngineValidationError) as ctx:
            submit_application(_profile(), _opportunity(status="closed"))
        self.assertEqual(ctx.exception.code, "opportunity_not_active")

    def test_raw_records_are_rejected(self):
        with self.assertRaises(EngineValidationError):
            submit_application({"cgpa": 7}, _opportunity())


class TransitionTests(unittest.TestCase):
    def setUp(self):
        self.application = submit_application(_profile(), _opportunity(), application_id="a1")

    def test_forward_path_to_acceptance(self):
        shortlisted = transition(self.application, ApplicationStatus.SHORTLISTED)
        scheduled = transition(shortlisted, ApplicationStatus.INTERVIEW_SCHEDULED)
        accepted = transition(scheduled, ApplicationStatus.ACCEPTED)
        self.assertEqual(accepted.status, ApplicationStatus.ACCEPTED)
        self.assertEqual(self.application.status, ApplicationStatus.PENDING)
        self.assertEqual(accepted.snapshot, self.application.snapshot)

    def test_rejection_allowed_from_any_open_stage(self):
        for status in (
            ApplicationStatus.PENDING,
            ApplicationStatus.SHORTLISTED,
            ApplicationStatus.INTERVIEW_SCHEDULED,
        ):
            with self.subTest(status=status):
                self.assertTrue(can_transition(status, ApplicationStatus.REJECTED))

    def test_terminal_statuses_are_final(self):
        rejected = transition(self.application, ApplicationStatus.REJECTED)
        for target in ApplicationStatus:
            with self.subTest(target=target):
                with self.assertRaises(InvalidTransitionError):
                    transition(rejected, target)

    def test_backward_moves_are_rejected(self):
        scheduled = transition(self.application, ApplicationStatus.INTERVIEW_SCHEDULED)
        with self.assertRaises(InvalidTransitionError) as ctx:
            transition(scheduled, ApplicationStatus.SHORTLISTED)
        self.assertEqual(ctx.exception.code, "invalid_transition")

    def test_same_open_status_returns_copy(self):
        same = transition(self.application, ApplicationStatus.PENDING)
        self.assertIsNot(same, self.application)
        self.assertEqual(same, self.application)


if __name__ == "__main__":
    unittest.main()
