from __future__ import annotations

import re
from dataclasses import dataclass
from functools import lru_cache

from data_designer_proposal_guard.patterns import DEFAULT_CATALOG, EM_DASH, PatternCatalog


@dataclass(frozen=True)
class DetectionResult:
    """Distinct catalog entries found per lexical category, plus the em-dash count."""

    matches: dict[str, tuple[str, ...]]
    em_dashes: int = 0

    def get(self, category: str) -> tuple[str, ...]:
        return self.matches.get(category, ())

    @property
    def pattern_count(self) -> int:
        return sum(len(found) for found in self.matches.values())

    def to_payload(self) -> dict[str, object]:
        payload: dict[str, object] = {k: list(v) for k, v in self.matches.items()}
        payload["em_dashes"] = self.em_dashes
        return payload


@lru_cache(maxsize=1024)
def _word_re(entry: str) -> re.Pattern[str]:
    return re.compile(r"(?<!\w)" + re.escape(entry) + r"(?!\w)", re.IGNORECASE)


def _fold(text: str) -> str:
    return text.replace("’", "'")


def detect_patterns(text: str, entries: tuple[str, ...] | list[str]) -> list[str]:
    """Return the entries present in ``text`` at least once, in catalog order.

    Entries containing a space match as case-insensitive substrings; single
    words match only on word boundaries, so ``fast`` does not hit ``breakfast``.
    """
    folded = _fold(text)
    lowered = folded.lower()
    found = []
    for entry in entries:
        if " " in entry:
            if entry.lower() in lowered:
                found.append(entry)
        elif _word_re(entry).search(folded):
            found.append(entry)
    return found


def detect_em_dashes(text: str) -> int:
    return text.count(EM_DASH)


def detect_lexical(text: str, catalog: PatternCatalog = DEFAULT_CATALOG) -> DetectionResult:
    matches = {name: tuple(detect_patterns(text, entries)) for name, entries in catalog.categories()}
    return DetectionResult(matches=matches, em_dashes=detect_em_dashes(text))
