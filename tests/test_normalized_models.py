import sys
import unittest
from pathlib import Path

from pydantic import ValidationError

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from placement_engine.schemas import (  # noqa: E402
    ApplicationStatus,
    CgpaChange,
    ExplanationRequest,
    Opportunity,
    Profile,
    Skill,
    SkillChange,
    SkillLevel,
)


class NormalizedModelsTests(unittest.TestCase):
    def test_profile_rejects_duplicate_skill_names(self):
        with self.assertRaises(ValidationError):
            Profile(skills=[Skill(name="React"), Skill(name="react")])

    def test_opportunity_rejects_duplicate_requirements(self):
        with self.assertRaises(ValidationError):
            Opportunity(required_skills=[{"name": "SQL"}, {"name": " sql "}])

    def test_profile_cgpa_range_is_enforced(self):
        with self.assertRaises(ValidationError):
            Profile(cgpa=10.5)

    def test_invalid_enum_value_is_rejected(self):
        with self.assertRaises(ValidationError):
            Skill(name="SQL", level="Guru")

    def test_terminal_statuses(self):
        self.assertTrue(ApplicationStatus.ACCEPTED.is_terminal)
        self.assertTrue(ApplicationStatus.REJECTED.is_terminal)
        self.assertFalse(ApplicationStatus.INTERVIEW_SCHEDULED.is_terminal)

    def test_changes_are_frozen_and_hashable(self):
        change = SkillChange(name="React", level=SkillLevel.INTERMEDIATE)
        self.assertEqual(change.key, ("skill", "react"))
        self.assertEqual({change: 3}[SkillChange(name="React", level=SkillLevel.INTERMEDIATE)], 3)
        with self.assertRaises(ValidationError):
            change.name = "Vue"
        self.assertEqual(CgpaChange(target=8).key, ("cgpa", ""))

    def test_explanation_request_serializes_camel_case(self):
        request = ExplanationRequest(
            student_name="Asha",
            student_cgpa=7.2,
            job_role="SDE",
            job_company="Google",
            job_min_cgpa=7.5,
            is_snapshot=True,
        )
        payload = request.model_dump(by_alias=True)
        self.assertEqual(payload["studentName"], "Asha")
        self.assertEqual(payload["jobMinCgpa"], 7.5)
        self.assertTrue(payload["isSnapshot"])


if __name__ == "__main__":
    unittest.main()
