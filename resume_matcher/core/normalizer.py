"""
Text Normalizer - Cleans raw resume text before field extraction.

Every extractor assumes the line and paragraph boundaries produced here.
"""

import re

_LINE_BREAKS = re.compile(r"\r\n?")
_HORIZONTAL_SPACE = re.compile(r"[^\S\n]")
_WIDE_GAP = re.compile(r"\s{3,}")
_UNSAFE_CHARS = re.compile(r"[^\w@.,\-()/+#\n ]")
_SPACE_RUNS = re.compile(r" {2,}")
_LINE_EDGES = re.compile(r" *\n *")


def normalize(raw_text: str) -> str:
    """
    Normalize raw resume text.

    Steps, in order:
    - line endings become ``\\n`` and tabs/other horizontal whitespace a space
    - runs of 3+ whitespace characters become a paragraph break
    - characters outside the safelist (word chars, ``@ . , - ( ) / + #``,
      newline, space) become a space
    - repeated spaces collapse and lines are trimmed

    Args:
        raw_text: Text decoded from the source document

    Returns:
        Normalized text; empty input yields an empty string
    """
    if not raw_text:
        return ""

    text = _LINE_BREAKS.sub("\n", str(raw_text))
    text = _HORIZONTAL_SPACE.sub(" ", text)
    text = _WIDE_GAP.sub("\n\n", text)
    text = _UNSAFE_CHARS.sub(" ", text)
    text = _SPACE_RUNS.sub(" ", text)
    text = _LINE_EDGES.sub("\n", text)
    return text.strip()
