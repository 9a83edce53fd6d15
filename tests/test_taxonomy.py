import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from placement_engine.normalize import normalize_opportunity, normalize_profile  # noqa: E402
from placement_engine.taxonomy.local_taxonomy import LocalTaxonomy  # noqa: E402


class TaxonomyTests(unittest.TestCase):
    def test_synonym_normalization_resolves_canonical_name(self):
        taxonomy = LocalTaxonomy()
        cleaned, canonical = taxonomy.normalize_skill("  ReactJS ")
        self.assertEqual(cleaned, "ReactJS")
        self.assertEqual(canonical, "React")

    def test_unknown_skill_has_no_canonical_name(self):
        _, canonical = LocalTaxonomy().normalize_skill("Underwater Basket Weaving")
        self.assertIsNone(canonical)

    def test_extra_aliases_override_bundled_table(self):
        taxonomy = LocalTaxonomy(extra_aliases={"DSA": "Data Structures", "ML  Ops": "MLOps"})
        self.assertEqual(taxonomy.normalize_skill("dsa")[1], "Data Structures")
        self.assertEqual(taxonomy.normalize_skill("ml ops")[1], "MLOps")
        self.assertEqual(taxonomy.normalize_skill("reactjs")[1], "React")

    def test_normalizers_apply_taxonomy_when_given(self):
        taxonomy = LocalTaxonomy()
        profile = normalize_profile({"skills": [{"name": "k8s"}, {"name": "Kubernetes"}]}, taxonomy)
        self.assertEqual([skill.name for skill in profile.skills], ["Kubernetes"])

        opportunity = normalize_opportunity({"requiredSkills": ["nodejs", "Postgres"]}, taxonomy)
        self.assertEqual([req.name for req in opportunity.required_skills], ["Node.js", "PostgreSQL"])


if __name__ == "__main__":
    unittest.main()
