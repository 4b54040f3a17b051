"""
Optional external collaborators for resume extraction.
"""

from .base import EntityRecognizer, EntityRecognitionError
from .huggingface import HuggingFaceEntityRecognizer

__all__ = [
    "EntityRecognizer",
    "EntityRecognitionError",
    "HuggingFaceEntityRecognizer",
]
