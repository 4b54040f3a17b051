"""
Base class for named-entity recognition collaborators.
"""

from abc import ABC, abstractmethod
from typing import Optional
import logging

from resume_matcher.core.models import Entity


class EntityRecognitionError(Exception):
    """Raised when an entity recognizer cannot produce entities."""


class EntityRecognizer(ABC):
    """
    Abstract base class for optional entity recognizers.

    Recognizers supply higher-confidence hints (people, places,
    organizations) that extractors prefer over pattern matches. Extraction
    never depends on one being available.
    """

    def __init__(self, api_key: Optional[str] = None):
        self.api_key = api_key
        self.logger = logging.getLogger(self.__class__.__name__)

    @property
    @abstractmethod
    def name(self) -> str:
        """Recognizer name."""
        pass

    @property
    @abstractmethod
    def requires_api_key(self) -> bool:
        """Whether this recognizer requires an API key."""
        pass

    @abstractmethod
    def recognize(self, text: str) -> list[Entity]:
        """
        Find named entities in text.

        Args:
            text: Normalized resume text

        Returns:
            Entities in the order the recognizer reported them

        Raises:
            EntityRecognitionError: If the recognizer is unavailable or fails
        """
        pass

    def is_available(self) -> bool:
        """Check if the recognizer is properly configured."""
        if self.requires_api_key and not self.api_key:
            return False
        return True
