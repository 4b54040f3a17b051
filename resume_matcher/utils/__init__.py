"""
Utility modules for the resume matcher application.
"""

from .config import Config

__all__ = [
    "Config",
]
