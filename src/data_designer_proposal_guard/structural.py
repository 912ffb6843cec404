from __future__ import annotations

from dataclasses import dataclass

from data_designer_proposal_guard.patterns import (
    FORMULAIC_INTRO_RE,
    FORMULAIC_INTRODUCTION,
    MD_HEADING_RE,
    OVER_SIGNPOSTING,
    OVER_SIGNPOSTING_PHRASES,
    SYMMETRIC_COVERAGE,
    SYMMETRIC_COVERAGE_RE,
    TEMPLATE_SECTION_PROGRESSION,
    TEMPLATE_SECTIONS_RE,
)


@dataclass(frozen=True)
class StructuralFinding:
    tag: str
    match: str = ""

    @property
    def label(self) -> str:
        if self.tag == OVER_SIGNPOSTING and self.match:
            return f'{self.tag}: "{self.match}"'
        return self.tag

    def to_payload(self) -> dict[str, object]:
        return {"tag": self.tag, "match": self.match}


def _opening_line(text: str) -> str:
    for line in text.splitlines():
        if line.strip() and not MD_HEADING_RE.match(line):
            return line.strip()
    return ""


def detect_structural_patterns(text: str) -> tuple[StructuralFinding, ...]:
    """Run the four document-structure heuristics, each recorded at most once."""
    found: list[StructuralFinding] = []

    folded = text.replace("’", "'")

    m = FORMULAIC_INTRO_RE.match(_opening_line(folded))
    if m:
        found.append(StructuralFinding(FORMULAIC_INTRODUCTION, m.group(0)))

    lowered = folded.lower()
    for phrase in OVER_SIGNPOSTING_PHRASES:
        if phrase in lowered:
            found.append(StructuralFinding(OVER_SIGNPOSTING, phrase))
            break

    m = TEMPLATE_SECTIONS_RE.search(text)
    if m:
        found.append(StructuralFinding(TEMPLATE_SECTION_PROGRESSION, m.group(0)[:60]))

    m = SYMMETRIC_COVERAGE_RE.search(text)
    if m:
        found.append(StructuralFinding(SYMMETRIC_COVERAGE, m.group(0)))

    return tuple(found)
