"""Phrase catalogs and structural regexes for AI slop detection.

Everything here is configuration data built once at import time. Catalogs are
tuples so their order is stable and they cannot be mutated by callers.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, fields

# ---------------------------------------------------------------------------
# Lexical catalogs
# ---------------------------------------------------------------------------

_GENERIC_BOOSTERS = (
    "incredibly", "extremely", "highly", "very", "truly", "absolutely",
    "definitely", "really", "quite", "remarkably", "exceptionally",
    "particularly", "especially", "significantly", "substantially",
    "considerably", "dramatically", "tremendously", "immensely", "profoundly",
    # classic AI markers
    "delve", "tapestry", "multifaceted", "myriad", "plethora",
)

_BUZZWORDS = (
    "robust", "seamless", "comprehensive", "elegant", "powerful",
    "flexible", "intuitive", "user-friendly", "streamlined", "optimized",
    "efficient", "scalable", "reliable", "secure", "modern",
    "innovative", "sophisticated", "advanced", "state-of-the-art",
    "best-in-class", "world-class", "enterprise-ready", "production-grade",
    "battle-tested", "industry-leading", "game-changing", "revolutionary",
    "transformative", "disruptive", "cutting-edge", "next-generation",
    "bleeding-edge", "groundbreaking", "paradigm-shifting",
    # verb-form buzzwords
    "synergy", "holistic", "ecosystem", "leverage", "utilize",
    "facilitate", "enable", "empower", "optimize", "accelerate",
    "amplify", "unlock", "drive", "spearhead", "champion",
    "pivot", "actionable",
    # vague qualifiers
    "easy to use", "fast", "quick", "responsive", "good performance",
    "high quality", "optimal", "minimal", "sufficient", "reasonable",
    "appropriate", "adequate",
)

_FILLER_PHRASES = (
    "it's important to note that", "it's worth mentioning that",
    "it should be noted that", "it goes without saying that",
    "needless to say", "as you may know", "as we all know",
    "in today's world", "in today's digital age",
    "in today's fast-paced environment", "in the modern era",
    "at the end of the day", "when all is said and done",
    "having said that", "that said", "that being said",
    "with that in mind", "with that being said",
    "let me explain", "let me walk you through",
    "let's dive in", "let's explore", "let's take a look at",
    "let's break this down", "here's the thing", "the thing is",
    "the fact of the matter is", "at this point in time",
    "in order to", "due to the fact that", "for the purpose of",
    "in the event that", "in light of", "with regard to",
    "in terms of", "on a daily basis", "first and foremost",
    "last but not least", "each and every", "one and only",
    "plain and simple", "pure and simple",
)

_HEDGES = (
    "of course", "naturally", "obviously", "clearly", "certainly",
    "undoubtedly", "in many ways", "to some extent", "in some cases",
    "it depends", "it varies", "generally speaking", "for the most part",
    "more or less", "kind of", "sort of", "somewhat", "relatively",
    "arguably", "potentially", "possibly", "might",
    "may or may not", "could potentially", "tends to",
    "seems to", "appears to",
)

_SYCOPHANTIC_PHRASES = (
    "great question", "excellent question", "that's a great point",
    "good thinking", "i love that idea", "what a fascinating topic",
    "happy to help", "i'd be happy to help", "i'm glad you asked",
    "thanks for asking", "absolutely!", "definitely!", "of course!",
    "sure thing", "no problem", "you're welcome", "my pleasure",
    "i appreciate you sharing", "that's an interesting perspective",
    "i understand your concern",
)

_TRANSITIONAL_FILLER = (
    "furthermore", "moreover", "additionally", "in addition",
    "nevertheless", "nonetheless", "on the other hand", "conversely",
    "in contrast", "similarly", "likewise", "consequently",
    "therefore", "thus", "hence", "accordingly", "as a result",
    "for this reason", "to that end", "with this in mind",
    "given the above", "based on the above", "as mentioned earlier",
    "as previously stated", "as noted above", "moving forward",
    "going forward",
)


@dataclass(frozen=True)
class PatternCatalog:
    """Ordered phrase catalogs, one tuple per lexical category.

    Field order is the category order used everywhere results are reported.
    """

    generic_booster: tuple[str, ...] = _GENERIC_BOOSTERS
    buzzword: tuple[str, ...] = _BUZZWORDS
    filler_phrase: tuple[str, ...] = _FILLER_PHRASES
    hedge: tuple[str, ...] = _HEDGES
    sycophantic: tuple[str, ...] = _SYCOPHANTIC_PHRASES
    transitional_filler: tuple[str, ...] = _TRANSITIONAL_FILLER

    def categories(self) -> tuple[tuple[str, tuple[str, ...]], ...]:
        return tuple((f.name, getattr(self, f.name)) for f in fields(self))


DEFAULT_CATALOG = PatternCatalog()
LEXICAL_CATEGORIES = tuple(name for name, _ in DEFAULT_CATALOG.categories())

# ---------------------------------------------------------------------------
# Structural patterns
# ---------------------------------------------------------------------------

FORMULAIC_INTRODUCTION = "formulaic-introduction"
OVER_SIGNPOSTING = "over-signposting"
TEMPLATE_SECTION_PROGRESSION = "template-section-progression"
SYMMETRIC_COVERAGE = "symmetric-coverage"

STRUCTURAL_TAGS = (
    FORMULAIC_INTRODUCTION,
    OVER_SIGNPOSTING,
    TEMPLATE_SECTION_PROGRESSION,
    SYMMETRIC_COVERAGE,
)

FORMULAIC_INTRO_RE = re.compile(
    r"^(in today's"
    r"|in this (document|section|proposal|prd|spec)"
    r"|this (document|proposal|prd|spec) (will|aims|seeks))",
    re.IGNORECASE,
)

OVER_SIGNPOSTING_PHRASES = (
    "in this section, we will",
    "as mentioned earlier",
    "let's now turn to",
    "before we proceed",
    "as discussed above",
    "we will now explore",
)

TEMPLATE_SECTIONS_RE = re.compile(
    r"overview.{0,500}?key points.{0,500}?(best practices|conclusion)",
    re.IGNORECASE | re.DOTALL,
)

SYMMETRIC_COVERAGE_RE = re.compile(
    r"on one hand|on the other hand|pros and cons|advantages and disadvantages"
    r"|\bboth\b[^.!?\n]{0,200}?\bhave (merit|value)",
    re.IGNORECASE,
)

MD_HEADING_RE = re.compile(r"^\s*#")
EM_DASH = "—"
