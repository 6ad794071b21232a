import os
import tempfile
import unittest
from unittest.mock import patch

import support  # noqa: F401

from app.core.config.scoring import (  # noqa: E402
    get_scoring_config,
    get_scoring_value,
    reset_scoring_config_cache,
)
from app.scoring import CATEGORIES, effective_weights, load_default_profile  # noqa: E402


class ScoringConfigTests(unittest.TestCase):
    def test_loader_and_value_lookup(self):
        config = get_scoring_config()
        self.assertIsInstance(config, dict)
        self.assertEqual(get_scoring_value("weights.keyword_match"), 30)
        self.assertEqual(get_scoring_value("summary.word_band"), [80, 120])
        self.assertIsNone(get_scoring_value("weights.unknown"))
        self.assertEqual(get_scoring_value("weights.formatting.deeper", "fallback"), "fallback")

    def test_config_path_override_and_cache_reset(self):
        with tempfile.TemporaryDirectory() as tmp_dir:
            path = os.path.join(tmp_dir, "scoring.yaml")
            with open(path, "w", encoding="utf-8") as handle:
                handle.write("weights:\n  keyword_match: 45\n")

            get_scoring_config()
            try:
                with patch.dict(os.environ, {"ATS_SCORING_CONFIG_PATH": path}):
                    # Cached defaults win until the cache is reset.
                    self.assertEqual(get_scoring_value("weights.keyword_match"), 30)
                    reset_scoring_config_cache()
                    self.assertEqual(get_scoring_value("weights.keyword_match"), 45)
            finally:
                reset_scoring_config_cache()

        self.assertEqual(get_scoring_value("weights.keyword_match"), 30)

    def test_missing_or_malformed_config_fails_loudly(self):
        with tempfile.TemporaryDirectory() as tmp_dir:
            bad = os.path.join(tmp_dir, "bad.yaml")
            with open(bad, "w", encoding="utf-8") as handle:
                handle.write("- just\n- a list\n")

            try:
                for path in (os.path.join(tmp_dir, "missing.yaml"), bad):
                    with patch.dict(os.environ, {"ATS_SCORING_CONFIG_PATH": path}):
                        reset_scoring_config_cache()
                        with self.assertRaises(RuntimeError):
                            get_scoring_config()
            finally:
                reset_scoring_config_cache()

    def test_default_weights_sum_to_one_hundred(self):
        profile = load_default_profile()
        self.assertEqual(tuple(profile.weights), CATEGORIES)
        self.assertAlmostEqual(sum(profile.weights.values()), 100.0)
        self.assertIn("increased", profile.action_verbs)
        self.assertEqual(set(profile.tip_templates), set(CATEGORIES))
        self.assertEqual(profile.passive_phrases[0], "responsible for")
        self.assertEqual(profile.skills_breadth_min, 5)

    def test_redistribution_keeps_proportions(self):
        profile = load_default_profile()
        weights = effective_weights(profile, include_keyword_match=False)
        self.assertNotIn("keyword_match", weights)
        self.assertAlmostEqual(sum(weights.values()), 100.0)
        self.assertAlmostEqual(weights["formatting"] / weights["summary_quality"], 20 / 15)


if __name__ == "__main__":
    unittest.main()
