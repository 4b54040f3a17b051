"""
Configuration management for Resume Matcher.
"""

from pathlib import Path
from typing import Optional
import copy
import json
import logging
import os

from resume_matcher.core.assembler import DEFAULT_CAPS, ProfileAssembler
from resume_matcher.core.orchestrator import MatchOrchestrator
from resume_matcher.core.taxonomy import SOFT, SkillTaxonomy
from resume_matcher.integrations import HuggingFaceEntityRecognizer

logger = logging.getLogger(__name__)


class Config:
    """Manages application configuration and API keys."""

    DEFAULT_CONFIG = {
        "api_keys": {
            "huggingface": "",
        },
        "extraction": {
            "min_text_length": 50,
            "parallel": False,
            "always_enhance_summary": False,
            "taxonomy_path": "",
            "caps": dict(DEFAULT_CAPS),
        },
        "entities": {
            "enabled": False,
            "model": HuggingFaceEntityRecognizer.DEFAULT_MODEL,
            "name_confidence": 0.85,
            "entity_confidence": 0.7,
            "timeout": 30,
        },
        "matching": {
            "weights": {
                "skills": 0.35,
                "title": 0.25,
                "experience": 0.20,
                "location": 0.20,
            },
            "max_workers": 4,
        },
        "logging": {
            "level": "WARNING",
        },
    }

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize configuration.

        Args:
            config_path: Path to config file (default: ~/.resume_matcher/config.json)
        """
        if config_path:
            self.config_path = Path(config_path)
        else:
            self.config_path = Path.home() / ".resume_matcher" / "config.json"

        self.config = self._load_config()

    def _load_config(self) -> dict:
        """Load configuration from file or create default."""
        defaults = copy.deepcopy(self.DEFAULT_CONFIG)
        if self.config_path.exists():
            with open(self.config_path, 'r') as f:
                user_config = json.load(f)

            # Merge with defaults
            return self._deep_merge(defaults, user_config)

        return defaults

    def _deep_merge(self, base: dict, override: dict) -> dict:
        """Deep merge two dictionaries."""
        result = base.copy()
        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value
        return result

    def save(self) -> None:
        """Save current configuration to file."""
        self.config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(self.config_path, 'w') as f:
            json.dump(self.config, f, indent=2)

    def get(self, key: str, default=None):
        """
        Get a configuration value using dot notation.

        Args:
            key: Configuration key (e.g., "matching.weights.skills")
            default: Default value if key not found

        Returns:
            Configuration value
        """
        value = self.config

        for k in key.split('.'):
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

    def set(self, key: str, value) -> None:
        """
        Set a configuration value using dot notation.

        Args:
            key: Configuration key (e.g., "extraction.parallel")
            value: Value to set
        """
        keys = key.split('.')
        config = self.config

        for k in keys[:-1]:
            if not isinstance(config.get(k), dict):
                config[k] = {}
            config = config[k]

        config[keys[-1]] = value

    def get_api_key(self, provider: str) -> str:
        """
        Get API key for a provider.

        Environment variables (e.g. HUGGINGFACE_API_KEY) take precedence
        over the config file.
        """
        env_value = os.environ.get(f"{provider.upper()}_API_KEY")

        if env_value:
            return env_value

        return self.get(f"api_keys.{provider}", "")

    def set_api_key(self, provider: str, key: str) -> None:
        """Set API key for a provider."""
        self.set(f"api_keys.{provider}", key)
        self.save()

    def get_log_level(self) -> int:
        """Configured logging level as a logging module constant."""
        level = str(self.get("logging.level", "WARNING")).upper()
        return getattr(logging, level, logging.WARNING)

    def build_taxonomies(self) -> tuple[SkillTaxonomy, SkillTaxonomy]:
        """Built-in technical and soft-skill taxonomies, extended by ``taxonomy_path``."""
        technical = SkillTaxonomy.default()
        soft = SkillTaxonomy.default_soft()

        extra_path = self.get("extraction.taxonomy_path")
        if extra_path:
            technical = technical.merge(SkillTaxonomy.load(extra_path))
            soft = soft.merge(SkillTaxonomy.load(extra_path, section=SOFT))

        return technical, soft

    def build_recognizer(self) -> Optional[HuggingFaceEntityRecognizer]:
        """The configured entity recognizer, or None when disabled or unusable."""
        if not self.get("entities.enabled", False):
            return None

        recognizer = HuggingFaceEntityRecognizer(
            api_key=self.get_api_key("huggingface"),
            model=self.get("entities.model"),
            timeout=self.get("entities.timeout", 30),
        )
        if not recognizer.is_available():
            logger.warning("Entity recognition enabled but no Hugging Face API key is set")
            return None
        return recognizer

    def build_assembler(self) -> ProfileAssembler:
        """A profile assembler wired from the extraction and entities sections."""
        taxonomy, soft_taxonomy = self.build_taxonomies()
        return ProfileAssembler(
            taxonomy=taxonomy,
            soft_taxonomy=soft_taxonomy,
            recognizer=self.build_recognizer(),
            min_text_length=self.get("extraction.min_text_length", ProfileAssembler.MIN_TEXT_LENGTH),
            caps=self.get("extraction.caps"),
            always_enhance_summary=self.get("extraction.always_enhance_summary", False),
            parallel=self.get("extraction.parallel", False),
            max_workers=self.get("matching.max_workers", 4),
            name_confidence=self.get("entities.name_confidence", 0.85),
            entity_confidence=self.get("entities.entity_confidence", 0.7),
        )

    def build_matcher_weights(self) -> dict:
        """Scoring weights keyed the way JobMatcher.WEIGHTS is."""
        names = {
            "skills": "skill_match",
            "title": "title_match",
            "experience": "experience_match",
            "location": "location_match",
        }
        weights = self.get("matching.weights", {})
        return {names[k]: float(v) for k, v in weights.items() if k in names}

    def build_orchestrator(self) -> MatchOrchestrator:
        taxonomy, _ = self.build_taxonomies()
        return MatchOrchestrator(
            weights=self.build_matcher_weights(),
            taxonomy=taxonomy,
            max_workers=self.get("matching.max_workers", 4),
        )

    def masked(self) -> dict:
        """Current configuration with API keys masked."""
        return self._mask_sensitive(self.config)

    def _mask_sensitive(self, data: dict, sensitive_keys: set = None, masking: bool = False) -> dict:
        """Mask sensitive values in configuration."""
        if sensitive_keys is None:
            sensitive_keys = {"api_key", "api_keys", "key", "secret", "password", "token"}

        result = {}
        for key, value in data.items():
            sensitive = masking or any(s in key.lower() for s in sensitive_keys)
            if isinstance(value, dict):
                result[key] = self._mask_sensitive(value, sensitive_keys, sensitive)
            elif sensitive and isinstance(value, str):
                if value:
                    result[key] = f"{value[:4]}...{value[-4:]}" if len(value) > 8 else "****"
                else:
                    result[key] = "(not set)"
            else:
                result[key] = value
        return result

    @classmethod
    def create_default_config(cls, path: str = None) -> 'Config':
        """Create a new config file with default values."""
        config = cls(path)
        config.save()
        return config
