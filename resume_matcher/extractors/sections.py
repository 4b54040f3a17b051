"""
Locating headed sections ("Skills", "Summary", ...) in normalized resume text.
"""

from typing import Sequence
import re

SUMMARY_HEADINGS = [
    "professional summary", "executive summary", "career summary",
    "summary of qualifications", "career objective", "summary", "objective",
    "profile", "about me", "overview",
]

SKILLS_HEADINGS = [
    "technical skills", "core competencies", "areas of expertise", "key skills",
    "skills", "technologies", "expertise", "competencies", "tech stack",
]

SOFT_SKILLS_HEADINGS = [
    "soft skills", "interpersonal skills", "personal skills", "core competencies",
]

EXPERIENCE_HEADINGS = [
    "professional experience", "work experience", "employment history",
    "work history", "experience",
]

KNOWN_HEADINGS = set(
    SUMMARY_HEADINGS + SKILLS_HEADINGS + SOFT_SKILLS_HEADINGS + EXPERIENCE_HEADINGS + [
        "education", "academic background", "certifications", "certificates",
        "licenses", "languages", "projects", "awards", "honors", "publications",
        "references", "interests", "hobbies", "achievements", "volunteer",
        "volunteer experience", "contact", "contact information", "personal details",
    ]
)


def is_heading(line: str) -> bool:
    """A short line consisting only of a recognized heading."""
    words = line.split()
    if not words or len(words) > 4:
        return False
    return " ".join(words).strip(" ,.-").lower() in KNOWN_HEADINGS


def find_section(text: str, headings: Sequence[str]) -> str:
    """
    Return the block following the first of ``headings`` found at a line start.

    The block starts with whatever follows the heading on its own line and
    runs until the next blank line or the next recognized heading line.
    Returns "" when no heading matches or every matching block is empty.
    """
    names = sorted(headings, key=len, reverse=True)
    alternation = "|".join(r"\s+".join(map(re.escape, h.split())) for h in names)
    heading = re.compile(rf"^(?:{alternation})(?![\w])[ ,.\-]*(.*)$", re.IGNORECASE)

    lines = text.split("\n")
    for i, line in enumerate(lines):
        match = heading.match(line)
        if not match:
            continue

        rest = match.group(1).strip()
        # "Profile of ..." in prose is not a heading; inline content needs a capitalized heading.
        if rest and not line[:1].isupper():
            continue

        block = [rest] if rest else []
        for following in lines[i + 1:]:
            if not following.strip():
                if block:
                    break
                continue
            if is_heading(following):
                break
            block.append(following)

        content = "\n".join(block).strip()
        if content:
            return content

    return ""
