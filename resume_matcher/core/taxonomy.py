"""
Skill Taxonomy - Canonical skill names, their variants and category tags.

The taxonomy is data: the built-in table lives in ``data/skills.json`` and
can be extended by merging another file with the same layout::

    {
        "technical": {"<category>": {"<canonical>": ["<variant>", ...]}},
        "soft": ["<canonical>", ...],
        "soft_variants": {"<canonical>": ["<variant>", ...]}
    }
"""

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Iterable, Iterator, Optional
import json
import re

DEFAULT_TAXONOMY_PATH = Path(__file__).resolve().parent.parent / "data" / "skills.json"

TECHNICAL = "technical"
SOFT = "soft"

# Terms this short are ambiguous in prose ("go", "r", "ai") and match case-sensitively.
SHORT_TERM_LENGTH = 2


def term_key(term: str) -> str:
    """Lookup key that ignores case, spacing, dots, hyphens and underscores."""
    return re.sub(r"[\s\-_.]+", "", term.lower())


def _term_pattern(term: str) -> re.Pattern:
    words = [re.escape(word) for word in term.split()]
    body = r"[\s\-]+".join(words)
    if len(term) <= SHORT_TERM_LENGTH:
        # Short terms also refuse hyphens: "C-level", "Objective-C", "go-live".
        return re.compile(rf"(?<![\w+#.\-]){body}(?![\w+#\-]|\.\w)")
    # Bounded token: "Go" must not match inside "Google", nor "C" inside "C++".
    return re.compile(rf"(?<![\w+#.]){body}(?![\w+#]|\.\w)", re.IGNORECASE)


@dataclass(frozen=True)
class SkillEntry:
    """A canonical skill with its accepted spellings."""
    name: str
    category: str
    variants: tuple[str, ...] = ()

    @property
    def terms(self) -> tuple[str, ...]:
        return (self.name,) + self.variants


class SkillTaxonomy:
    """Bidirectional canonical-skill <-> variant table."""

    def __init__(self, entries: Iterable[SkillEntry] = ()):
        self._entries: dict[str, SkillEntry] = {}
        self._lookup: dict[str, str] = {}
        self._short_terms: dict[str, str] = {}
        self._patterns: dict[str, list[re.Pattern]] = {}
        self._prose_patterns: dict[str, list[re.Pattern]] = {}

        for entry in entries:
            self._add(entry)

    def _add(self, entry: SkillEntry) -> None:
        key = entry.name.lower()
        existing = self._entries.get(key)
        if existing:
            variants = list(existing.variants)
            variants.extend(v for v in entry.variants if v not in variants)
            entry = SkillEntry(existing.name, entry.category or existing.category, tuple(variants))

        self._entries[key] = entry
        for term in entry.terms:
            term = term.strip()
            if not term:
                continue
            if len(term) <= SHORT_TERM_LENGTH:
                self._short_terms[term] = entry.name
            else:
                self._lookup.setdefault(term_key(term), entry.name)
        terms = [t.strip() for t in entry.terms if t.strip()]
        self._patterns[key] = [_term_pattern(t) for t in terms]
        # One-letter terms ("C", "R") are only trusted in skill lists.
        self._prose_patterns[key] = [_term_pattern(t) for t in terms if len(t) > 1]

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[SkillEntry]:
        return iter(self._entries.values())

    def __contains__(self, name: str) -> bool:
        return bool(self.canonicalize(name))

    @property
    def names(self) -> list[str]:
        return [entry.name for entry in self._entries.values()]

    def categories(self) -> dict[str, list[str]]:
        """Group canonical names by category tag."""
        grouped: dict[str, list[str]] = {}
        for entry in self._entries.values():
            grouped.setdefault(entry.category, []).append(entry.name)
        return grouped

    def category_of(self, name: str) -> str:
        canonical = self.canonicalize(name)
        if not canonical:
            return ""
        return self._entries[canonical.lower()].category

    def canonicalize(self, term: str) -> str:
        """
        Map a skill spelling to its canonical name.

        Args:
            term: Any spelling, e.g. "reactjs" or "Amazon Web Services"

        Returns:
            The canonical name, or "" when the term is not in the taxonomy
        """
        term = (term or "").strip()
        if not term:
            return ""
        if len(term) <= SHORT_TERM_LENGTH:
            return self._short_terms.get(term, "")
        return self._lookup.get(term_key(term), "")

    def contains(self, text: str, name: str) -> bool:
        """Whether any variant of ``name`` appears as a bounded token in ``text``."""
        canonical = self.canonicalize(name)
        if not canonical or not text:
            return False
        return any(p.search(text) for p in self._patterns[canonical.lower()])

    def find_all(self, text: str, single_letters: bool = True) -> list[str]:
        """
        Find every taxonomy skill present in the text.

        Returns canonical names ordered by where they first appear in the text;
        skills first seen at the same offset keep taxonomy order. Pass
        ``single_letters=False`` when scanning free prose, where "Plan C" or
        "R D" are not skills.
        """
        if not text:
            return []

        patterns = self._patterns if single_letters else self._prose_patterns
        hits = []
        for index, (key, entry) in enumerate(self._entries.items()):
            positions = [m.start() for m in (p.search(text) for p in patterns[key]) if m]
            if positions:
                hits.append((min(positions), index, entry.name))

        hits.sort()
        return [name for _, _, name in hits]

    def merge(self, other: "SkillTaxonomy") -> "SkillTaxonomy":
        """Return a new taxonomy holding this table extended by ``other``."""
        return SkillTaxonomy(list(self) + list(other))

    @classmethod
    def from_dict(cls, data: dict, section: str = TECHNICAL) -> "SkillTaxonomy":
        entries = []
        if section == SOFT:
            variants = data.get("soft_variants", {})
            for name in data.get("soft", []):
                entries.append(SkillEntry(name, SOFT, tuple(variants.get(name, []))))
        else:
            for category, skills in data.get(TECHNICAL, {}).items():
                for name, variants in skills.items():
                    entries.append(SkillEntry(name, category, tuple(variants or ())))
        return cls(entries)

    @classmethod
    def load(cls, path: Optional[str] = None, section: str = TECHNICAL) -> "SkillTaxonomy":
        """Load a taxonomy section from a JSON file (default: built-in table)."""
        path = Path(path) if path else DEFAULT_TAXONOMY_PATH
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        return cls.from_dict(data, section=section)

    @staticmethod
    @lru_cache(maxsize=None)
    def default() -> "SkillTaxonomy":
        """Shared built-in technical taxonomy."""
        return SkillTaxonomy.load()

    @staticmethod
    @lru_cache(maxsize=None)
    def default_soft() -> "SkillTaxonomy":
        """Shared built-in soft-skill lexicon."""
        return SkillTaxonomy.load(section=SOFT)
