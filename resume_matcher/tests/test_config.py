"""
Unit tests for configuration management.
"""

import json
import logging
import os
import tempfile
import unittest
from unittest import mock

from resume_matcher.core.assembler import ProfileAssembler
from resume_matcher.core.orchestrator import MatchOrchestrator
from resume_matcher.integrations import HuggingFaceEntityRecognizer
from resume_matcher.utils import Config


class TestConfig(unittest.TestCase):
    """Test loading, saving and dot-notation access."""

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.path = os.path.join(self.tmp.name, "config.json")

    def tearDown(self):
        self.tmp.cleanup()

    def test_defaults_without_file(self):
        config = Config(self.path)
        self.assertEqual(config.get("extraction.min_text_length"), 50)
        self.assertFalse(config.get("entities.enabled"))
        self.assertEqual(config.get("matching.weights.skills"), 0.35)
        self.assertEqual(config.get("missing.key", "fallback"), "fallback")

    def test_set_and_get(self):
        config = Config(self.path)
        config.set("extraction.parallel", True)
        config.set("custom.nested.value", 3)

        self.assertTrue(config.get("extraction.parallel"))
        self.assertEqual(config.get("custom.nested.value"), 3)

    def test_saved_values_merge_with_defaults(self):
        with open(self.path, "w") as f:
            json.dump({"matching": {"weights": {"skills": 0.5}}}, f)

        config = Config(self.path)
        self.assertEqual(config.get("matching.weights.skills"), 0.5)
        self.assertEqual(config.get("matching.weights.title"), 0.25)
        self.assertEqual(config.get("matching.max_workers"), 4)

    def test_save_round_trip(self):
        config = Config.create_default_config(self.path)
        config.set("logging.level", "DEBUG")
        config.save()

        self.assertEqual(Config(self.path).get_log_level(), logging.DEBUG)

    def test_defaults_are_not_shared(self):
        Config(self.path).set("extraction.caps.skills", 1)
        self.assertEqual(Config(self.path).get("extraction.caps.skills"), 25)
        self.assertEqual(Config.DEFAULT_CONFIG["extraction"]["caps"]["skills"], 25)

    def test_unknown_log_level(self):
        config = Config(self.path)
        config.set("logging.level", "chatty")
        self.assertEqual(config.get_log_level(), logging.WARNING)

    def test_api_key_from_environment(self):
        config = Config(self.path)
        config.set("api_keys.huggingface", "hf_from_file")

        with mock.patch.dict(os.environ, {"HUGGINGFACE_API_KEY": "hf_from_env"}):
            self.assertEqual(config.get_api_key("huggingface"), "hf_from_env")
        with mock.patch.dict(os.environ, {}, clear=True):
            self.assertEqual(config.get_api_key("huggingface"), "hf_from_file")

    def test_set_api_key_persists(self):
        config = Config(self.path)
        config.set_api_key("huggingface", "hf_abcdefghijkl")

        with open(self.path) as f:
            self.assertEqual(json.load(f)["api_keys"]["huggingface"], "hf_abcdefghijkl")

    def test_masked(self):
        config = Config(self.path)
        config.set("api_keys.huggingface", "hf_abcdefghijkl")
        masked = config.masked()

        self.assertEqual(masked["api_keys"]["huggingface"], "hf_a...ijkl")
        self.assertEqual(masked["extraction"]["min_text_length"], 50)
        self.assertEqual(config.get("api_keys.huggingface"), "hf_abcdefghijkl")

        config.set("api_keys.huggingface", "")
        self.assertEqual(config.masked()["api_keys"]["huggingface"], "(not set)")


class TestConfigBuilders(unittest.TestCase):
    """Test wiring of components from configuration."""

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.config = Config(os.path.join(self.tmp.name, "config.json"))

    def tearDown(self):
        self.tmp.cleanup()

    def test_matcher_weights(self):
        self.config.set("matching.weights.skills", 0.6)
        self.config.set("matching.weights.unknown", 1.0)
        self.assertEqual(self.config.build_matcher_weights(), {
            "skill_match": 0.6,
            "title_match": 0.25,
            "experience_match": 0.2,
            "location_match": 0.2,
        })

    def test_assembler(self):
        self.config.set("extraction.caps.skills", 3)
        self.config.set("extraction.parallel", True)
        assembler = self.config.build_assembler()

        self.assertIsInstance(assembler, ProfileAssembler)
        self.assertEqual(assembler.caps["skills"], 3)
        self.assertEqual(assembler.caps["languages"], 6)
        self.assertTrue(assembler.parallel)
        self.assertIsNone(assembler.recognizer)

    def test_orchestrator(self):
        self.config.set("matching.max_workers", 2)
        orchestrator = self.config.build_orchestrator()

        self.assertIsInstance(orchestrator, MatchOrchestrator)
        self.assertEqual(orchestrator.max_workers, 2)
        self.assertEqual(orchestrator.weights["skill_match"], 0.35)

    def test_recognizer_disabled_by_default(self):
        self.assertIsNone(self.config.build_recognizer())

    def test_recognizer_without_key(self):
        self.config.set("entities.enabled", True)
        with mock.patch.dict(os.environ, {}, clear=True):
            with self.assertLogs("resume_matcher.utils.config", level="WARNING"):
                self.assertIsNone(self.config.build_recognizer())

    def test_recognizer_with_key(self):
        self.config.set("entities.enabled", True)
        self.config.set("entities.timeout", 10)
        self.config.set("api_keys.huggingface", "hf_abcdefghijkl")

        with mock.patch.dict(os.environ, {}, clear=True):
            recognizer = self.config.build_recognizer()

        self.assertIsInstance(recognizer, HuggingFaceEntityRecognizer)
        self.assertEqual(recognizer.api_key, "hf_abcdefghijkl")
        self.assertEqual(recognizer.timeout, 10)

    def test_extra_taxonomy_file(self):
        extra = os.path.join(self.tmp.name, "extra.json")
        with open(extra, "w") as f:
            json.dump({"technical": {"frontend": {"Elm": []}}, "soft": ["Patience"]}, f)
        self.config.set("extraction.taxonomy_path", extra)

        technical, soft = self.config.build_taxonomies()
        self.assertEqual(technical.canonicalize("elm"), "Elm")
        self.assertEqual(technical.canonicalize("python"), "Python")
        self.assertIn("Patience", soft)
        self.assertIn("Leadership", soft)


if __name__ == "__main__":
    unittest.main()
