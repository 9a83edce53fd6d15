import json
import sys
import unittest
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from openai import OpenAIError  # noqa: E402

from placement_engine.core.errors import ExplanationUnavailableError  # noqa: E402
from placement_engine.services import (  # noqa: E402
    ExplanationClient,
    assess_rejection,
    build_explanation_request,
    explanation_enabled,
)

PROFILE = {
    "id": "s1",
    "name": "Asha",
    "cgpa": 8.0,
    "skills": [{"name": "Python", "level": "Advanced", "evidence": ["project"]}, {"name": "React"}],
}

JOB = {
    "role": "SDE Intern",
    "company": "Google",
    "minCgpa": 7.5,
    "requiredSkills": [{"name": "React"}, {"name": "DSA"}, {"name": "Python", "level": "Intermediate"}],
}

SNAPSHOT_APPLICATION = {
    "id": "a1",
    "status": "REJECTED",
    "snapshotCgpa": 6.8,
    "snapshotSkills": [{"name": "Python", "level": "Beginner"}],
    "job": JOB,
}

LEGACY_APPLICATION = {"id": "a2", "status": "REJECTED", "job": JOB}


def _completion(content):
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


def _client_returning(content):
    client = MagicMock()
    client.chat.completions.create.return_value = _completion(content)
    return client


class ExplanationRequestTests(unittest.TestCase):
    def test_snapshot_values_are_sent_when_captured(self):
        request = build_explanation_request(PROFILE, SNAPSHOT_APPLICATION)
        self.assertTrue(request.is_snapshot)
        self.assertEqual(request.student_cgpa, 6.8)
        self.assertEqual(request.student_skills, ["Python"])
        self.assertEqual(request.skill_confidence_data[0].confidence, "Beginner")
        self.assertEqual(request.job_required_skills, ["React", "DSA", "Python"])

    def test_legacy_application_uses_live_profile(self):
        request = build_explanation_request(PROFILE, LEGACY_APPLICATION)
        self.assertFalse(request.is_snapshot)
        self.assertEqual(request.student_cgpa, 8.0)
        self.assertEqual(request.student_skills, ["Python", "React"])
        self.assertEqual(request.skill_confidence_data[0].evidence, ["project"])

    def test_defaults_for_blank_fields(self):
        request = build_explanation_request({"cgpa": 7}, {"status": "REJECTED", "job": {}})
        self.assertEqual(request.student_name, "Student")
        self.assertEqual(request.job_role, "Position")
        self.assertEqual(request.job_company, "Company")
        self.assertEqual(request.job_min_cgpa, 0.0)

    def test_payload_serializes_with_camel_case_keys(self):
        payload = build_explanation_request(PROFILE, SNAPSHOT_APPLICATION).model_dump(by_alias=True)
        self.assertIn("studentCgpa", payload)
        self.assertIn("isSnapshot", payload)
        self.assertIn("skillConfidenceData", payload)


class RuleAssessmentTests(unittest.TestCase):
    def test_snapshot_rejection_is_rule_based(self):
        assessment = assess_rejection(PROFILE, SNAPSHOT_APPLICATION)
        self.assertEqual(assessment.type, "RULE_BASED")
        self.assertEqual([v.category for v in assessment.violations], ["CGPA", "SKILLS", "SKILLS"])
        self.assertEqual(assessment.violations[0].expected, "7.5")
        self.assertEqual(assessment.violations[0].actual, "6.8")
        self.assertEqual(assessment.key_missing_skills, ["React", "DSA"])
        self.assertEqual([gap.skill for gap in assessment.skill_gaps], ["React", "DSA", "Python"])
        self.assertFalse(assessment.skill_gaps[2].is_missing)

    def test_qualified_profile_is_non_rule_based(self):
        assessment = assess_rejection(
            {"cgpa": 9, "skills": ["React", "DSA", {"name": "Python", "level": "Advanced"}]},
            LEGACY_APPLICATION,
        )
        self.assertEqual(assessment.type, "NON_RULE_BASED")
        self.assertEqual(assessment.violations, [])
        self.assertEqual(assessment.skill_gaps, [])


class ExplanationClientTests(unittest.TestCase):
    def setUp(self):
        self.request = build_explanation_request(PROFILE, SNAPSHOT_APPLICATION)

    def test_valid_response_is_parsed(self):
        body = {
            "type": "RULE_BASED",
            "coreMismatch": "CGPA below cut-off",
            "keyMissingSkills": ["React"],
            "resumeFeedback": ["Add a React project"],
            "actionPlan": ["Build a React app"],
            "sentiment": "encouraging",
        }
        client = _client_returning(json.dumps(body))
        explanation = ExplanationClient(client, model="test-model").explain(self.request)

        self.assertEqual(explanation.core_mismatch, "CGPA below cut-off")
        self.assertEqual(explanation.key_missing_skills, ["React"])
        kwargs = client.chat.completions.create.call_args.kwargs
        self.assertEqual(kwargs["model"], "test-model")
        self.assertEqual(kwargs["response_format"], {"type": "json_object"})
        self.assertIn('"isSnapshot":true', kwargs["messages"][1]["content"])

    def test_failures_map_to_unavailable_codes(self):
        cases = {
            "empty_response": _client_returning(""),
            "invalid_json": _client_returning("not json"),
            "invalid_schema": _client_returning(json.dumps({"sentiment": "neutral"})),
        }
        failing = MagicMock()
        failing.chat.completions.create.side_effect = OpenAIError("boom")
        cases["llm_exception"] = failing

        for code, client in cases.items():
            with self.subTest(code=code):
                with self.assertRaises(ExplanationUnavailableError) as ctx:
                    ExplanationClient(client).explain(self.request)
                self.assertEqual(ctx.exception.code, code)

    def test_disabled_generator_raises_without_client(self):
        with patch("placement_engine.services.explanation_client.explanation_enabled", return_value=False):
            with self.assertRaises(ExplanationUnavailableError) as ctx:
                ExplanationClient().explain(self.request)
        self.assertEqual(ctx.exception.code, "llm_disabled")

    def test_placeholder_key_disables_generator(self):
        fake = SimpleNamespace(explanation_enabled=True, ai_provider="openai", openai_api_key="your_openai_key")
        with patch("placement_engine.services.explanation_client.settings", fake):
            self.assertFalse(explanation_enabled())
        fake = SimpleNamespace(explanation_enabled=True, ai_provider="openai", openai_api_key="sk-live")
        with patch("placement_engine.services.explanation_client.settings", fake):
            self.assertTrue(explanation_enabled())


if __name__ == "__main__":
    unittest.main()
