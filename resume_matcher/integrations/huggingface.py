"""
Hugging Face Inference API entity recognizer.

Uses a token-classification model to tag people (PER), places (LOC) and
organizations (ORG). Requires a Hugging Face API token.
"""

from typing import Optional
import re

import requests

from .base import EntityRecognizer, EntityRecognitionError
from resume_matcher.core.models import Entity


class HuggingFaceEntityRecognizer(EntityRecognizer):
    """Named-entity recognition through the Hugging Face inference API."""

    API_URL = "https://api-inference.huggingface.co/models"
    DEFAULT_MODEL = "dbmdz/bert-large-cased-finetuned-conll03-english"

    # The model reads at most 512 tokens; about 3 characters per token.
    MAX_TOKENS = 512
    CHARS_PER_TOKEN = 3

    LABEL_ALIASES = {"PERSON": "PER", "LOCATION": "LOC", "ORGANIZATION": "ORG"}

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        timeout: int = 30,
    ):
        super().__init__(api_key)
        self.model = model or self.DEFAULT_MODEL
        self.timeout = timeout

    @property
    def name(self) -> str:
        return "HuggingFace"

    @property
    def requires_api_key(self) -> bool:
        return True

    def recognize(self, text: str) -> list[Entity]:
        if not self.is_available():
            raise EntityRecognitionError("Hugging Face API key not configured")

        entities = []
        for chunk in self.split_into_chunks(text):
            entities.extend(self._recognize_chunk(chunk))

        self.logger.info(f"{self.name} NER found {len(entities)} entities")
        return entities

    def _recognize_chunk(self, chunk: str) -> list[Entity]:
        try:
            response = requests.post(
                f"{self.API_URL}/{self.model}",
                headers={"Authorization": f"Bearer {self.api_key}"},
                json={
                    "inputs": chunk,
                    "parameters": {"aggregation_strategy": "simple"},
                },
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise EntityRecognitionError(f"{self.name} request failed: {e}") from e

        if response.status_code == 401:
            raise EntityRecognitionError(f"{self.name} API authentication failed")
        if response.status_code != 200:
            raise EntityRecognitionError(f"{self.name} API error: {response.status_code}")

        try:
            data = response.json()
        except ValueError as e:
            raise EntityRecognitionError(f"{self.name} returned invalid JSON") from e

        if not isinstance(data, list):
            # Errors such as "model is loading" come back as an object.
            message = data.get("error", data) if isinstance(data, dict) else data
            raise EntityRecognitionError(f"{self.name} API error: {message}")

        return [entity for entity in map(self._parse_entity, data) if entity]

    def _parse_entity(self, data: dict) -> Optional[Entity]:
        """Parse one API result into an Entity, dropping malformed items."""
        if not isinstance(data, dict):
            return None

        label = str(data.get("entity_group") or data.get("entity") or "").upper()
        label = self.LABEL_ALIASES.get(label, label)
        # WordPiece continuations are reported with a "##" prefix.
        text = str(data.get("word", "")).replace("##", "").strip()
        if not label or not text:
            return None

        try:
            score = float(data.get("score", 0.0))
        except (TypeError, ValueError):
            score = 0.0

        return Entity(label=label, text=text, score=score)

    def split_into_chunks(self, text: str) -> list[str]:
        """Split text on sentence boundaries into model-sized chunks."""
        max_chars = self.MAX_TOKENS * self.CHARS_PER_TOKEN
        chunks = []
        current = ""

        for sentence in re.split(r"(?<=[.!?\n])\s+", text):
            if current and len(current) + len(sentence) + 1 > max_chars:
                chunks.append(current.strip())
                current = ""
            current = f"{current} {sentence}" if current else sentence

        if current.strip():
            chunks.append(current.strip())

        # A single sentence longer than the limit is truncated.
        return [chunk[:max_chars] for chunk in chunks] or [text[:max_chars]]
