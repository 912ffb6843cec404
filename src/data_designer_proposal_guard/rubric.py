"""Strategic proposal rubric.

Four dimensions worth 25 points each:

1. Problem Statement - clear problem definition, urgency, strategic alignment
2. Proposed Solution - approach, actionable steps, rationale
3. Business Impact - outcomes, quantified metrics, business value
4. Implementation Plan - phases, timeline, ownership and resources

The first sub-criterion of every dimension is gated on a dedicated markdown
section: without the heading it can earn at most ``ungated_section_points``.
AI slop is deducted once from the total, never per dimension.
"""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass

from data_designer_proposal_guard.core import SlopPenalty, get_slop_penalty
from data_designer_proposal_guard.hyperparameters import DEFAULT_HYPERPARAMETERS, Hyperparameters

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Patterns
# ---------------------------------------------------------------------------

_I = re.IGNORECASE
_QUALIFIERS = r"proposed|business|problem|implementation|current|executive|expected"


def _section(alternatives: str) -> re.Pattern[str]:
    # A markdown heading whose text starts with a synonym, allowing an optional
    # number and up to two qualifiers from a closed list ("## 2. Proposed Solution").
    return re.compile(
        r"^#+[ \t]*(?:\d+[.)][ \t]*)?(?:(?:" + _QUALIFIERS + r")[ \t]+){0,2}?(?:" + alternatives + r")s?\b",
        re.IGNORECASE | re.MULTILINE,
    )


_MONTHS = (
    r"jan(?:uary)?|feb(?:ruary)?|mar(?:ch)?|apr(?:il)?|may|june?|july?|aug(?:ust)?"
    r"|sep(?:t(?:ember)?)?|oct(?:ober)?|nov(?:ember)?|dec(?:ember)?"
)
_QUANTIFIED = (
    r"(?:\$\s*\d[\d,.]*"
    r"|\d[\d,.]*\s*(?:%|million|thousand|hour|day|week|month|year|\$|dollar|user|customer|transaction|revenue))"
)

PROBLEM_SECTION_RE = _section(r"problem|challenge|issue|opportunit(?:y|ies)|context|current.?state")
PROBLEM_LANGUAGE_RE = re.compile(r"\b(problems?|challenges?|issues?|opportunit(?:y|ies)|gaps?|limitations?|constraints?|blockers?|barriers?|pain.?points?)\b", _I)
URGENCY_RE = re.compile(r"\b(urgent|critical|immediate|priority|time.sensitive|deadlines?|window|opportunity.cost)\b", _I)
URGENCY_SECTION_RE = _section(r"urgency|priority|why.now|timing|window")
QUANTIFIED_RE = re.compile(_QUANTIFIED, _I)
STRATEGIC_RE = re.compile(r"\b(strategic|mission|vision|objectives?|goals?|priority|priorities|initiatives?|pillars?)\b", _I)

SOLUTION_SECTION_RE = _section(r"solution|proposal|approach|recommendation|strategy")
SOLUTION_LANGUAGE_RE = re.compile(r"\b(solutions?|approach|proposal|strategy|plan|initiative|program|project)\b", _I)
ACTIONABLE_RE = re.compile(r"\b(implement|execute|deliver|launch|build|create|develop|establish|deploy|rollout|roll out)\b", _I)
ALTERNATIVES_RE = re.compile(r"\b(alternatives?|options?|approach|consider|evaluate|compare|trade.?offs?)\b", _I)
JUSTIFICATION_RE = re.compile(r"\b(because|reason|rationale|why|justify|basis|evidence|data.shows|research)\b", _I)

IMPACT_SECTION_RE = _section(r"impact|benefit|outcome|value|roi|return|business.case|financial.?impact")
IMPACT_LANGUAGE_RE = re.compile(r"\b(impact|benefits?|value|roi|return|outcomes?|results?|improvements?|gains?|savings)\b", _I)
FINANCIAL_RE = re.compile(r"\b(revenue|costs?|savings|profits?|margins?|efficiency|productivity|reductions?|increases?)\b", _I)
COMPETITIVE_RE = re.compile(r"\b(competitive|competitors?|market|position|advantage|differentiat\w*|leader|first.mover)\b", _I)

IMPLEMENTATION_SECTION_RE = _section(r"implementation|plan|timeline|roadmap|execution|delivery")
PHASE_RE = re.compile(r"\b(phases?|stages?|milestones?|sprints?|iterations?|waves?|releases?|v\d+)\b", _I)
DATE_RE = re.compile(r"\b(weeks?|months?|quarters?|q[1-4]|years?|fy\d+|\d{4}|" + _MONTHS + r")\b", _I)
OWNERSHIP_RE = re.compile(r"\b(owners?|leads?|responsible|accountable|teams?|department|function)\b", _I)
RESOURCE_RE = re.compile(r"\b(resources?|budgets?|costs?|investment|headcount|fte|capacity)\b", _I)

RISK_SECTION_RE = _section(r"risk|assumption|dependenc(?:y|ies)|constraint|challenge")
RISK_LANGUAGE_RE = re.compile(r"\b(risks?|assumptions?|dependenc(?:y|ies)|constraints?|blockers?|obstacles?|challenges?|unknowns?)\b", _I)
MITIGATION_RE = re.compile(r"\b(mitigat\w*|contingency|fallback|plan.b|alternatives?|backup|workaround)\b", _I)

METRICS_SECTION_RE = _section(r"success|metric|kpi|measure(?:ment)?")
METRICS_LANGUAGE_RE = re.compile(r"\b(metrics?|kpis?|measures?|indicators?|targets?|benchmarks?|baseline|track)\b", _I)
TIMEBOUND_RE = re.compile(r"\b(by|within|after|before|during|end.of|q[1-4]|fy\d+|month|quarter|year)\b", _I)

REQUIRED_SECTIONS: tuple[tuple[str, int, re.Pattern[str]], ...] = (
    ("Problem Statement", 2, _section(r"problem|challenge|issue|opportunit(?:y|ies)|context|pain.?point|current.?pain")),
    ("Proposed Solution", 2, SOLUTION_SECTION_RE),
    ("Business Impact", 2, _section(r"impact|benefit|outcome|value|roi|return|financial.?impact|gross.?profit|revenue")),
    ("Implementation Plan", 2, _section(r"implementation|plan|timeline|roadmap|execution|next.?steps")),
    ("Resources/Budget", 1, _section(r"resource|budget|cost|investment|team|pricing|price|subscription|commercials")),
    ("Risks/Assumptions", 1, RISK_SECTION_RE),
    ("Success Metrics", 1, METRICS_SECTION_RE),
)

_NO_CONTENT = "No content to validate"

# ---------------------------------------------------------------------------
# Dataclasses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Subcriterion:
    name: str
    points: int
    max_points: int

    def to_payload(self) -> dict[str, object]:
        return {"name": self.name, "points": self.points, "max_points": self.max_points}


@dataclass(frozen=True)
class DimensionScore:
    name: str
    score: int
    subcriteria: tuple[Subcriterion, ...]
    issues: tuple[str, ...] = ()
    strengths: tuple[str, ...] = ()
    max_score: int = 25

    def to_payload(self) -> dict[str, object]:
        return {
            "name": self.name,
            "score": self.score,
            "max_score": self.max_score,
            "subcriteria": [s.to_payload() for s in self.subcriteria],
            "issues": list(self.issues),
            "strengths": list(self.strengths),
        }


@dataclass(frozen=True)
class SectionCoverage:
    found: tuple[tuple[str, int], ...]
    missing: tuple[tuple[str, int], ...]

    def to_payload(self) -> dict[str, object]:
        return {
            "found": [{"name": n, "weight": w} for n, w in self.found],
            "missing": [{"name": n, "weight": w} for n, w in self.missing],
        }


@dataclass(frozen=True)
class ProposalScore:
    total_score: int
    dimensions: tuple[DimensionScore, ...]
    slop_penalty: SlopPenalty
    slop_deduction: int
    sections: SectionCoverage
    slop_issues: tuple[str, ...] = ()

    def dimension(self, name: str) -> DimensionScore:
        for d in self.dimensions:
            if d.name == name:
                return d
        raise KeyError(name)

    @property
    def issues(self) -> list[str]:
        return [issue for d in self.dimensions for issue in d.issues] + list(self.slop_issues)

    def to_payload(self) -> dict[str, object]:
        return {
            "total_score": self.total_score,
            "dimensions": [d.to_payload() for d in self.dimensions],
            "slop_detection": {
                **self.slop_penalty.to_payload(),
                "deduction": self.slop_deduction,
                "issues": list(self.slop_issues),
                "top_offenders": [o.to_payload() for o in self.slop_penalty.slop.top_offenders],
            },
            "sections": self.sections.to_payload(),
        }


# ---------------------------------------------------------------------------
# Detection
# ---------------------------------------------------------------------------


def _count(pattern: re.Pattern[str], text: str) -> int:
    return sum(1 for _ in pattern.finditer(text))


def _indicators(*checks: tuple[bool, str]) -> list[str]:
    """Labels of the checks that passed, in order, for quoting back to a reviewer."""
    return [label for passed, label in checks if passed]


def detect_problem_statement(text: str) -> dict:
    has_section = bool(PROBLEM_SECTION_RE.search(text))
    has_language = bool(PROBLEM_LANGUAGE_RE.search(text))
    urgency = _count(URGENCY_RE, text)
    quantified = _count(QUANTIFIED_RE, text)
    has_strategic = bool(STRATEGIC_RE.search(text))
    return {
        "has_problem_section": has_section,
        "has_problem_language": has_language,
        "has_urgency": urgency > 0,
        "has_urgency_section": bool(URGENCY_SECTION_RE.search(text)),
        "is_quantified": quantified > 0,
        "quantified_count": quantified,
        "has_strategic_alignment": has_strategic,
        "indicators": _indicators(
            (has_section, "Dedicated problem section"),
            (has_language, "Problem framing language"),
            (urgency > 0, "Urgency/priority established"),
            (quantified > 0, f"{quantified} quantified metrics"),
            (has_strategic, "Strategic alignment shown"),
        ),
    }


def detect_solution(text: str) -> dict:
    has_section = bool(SOLUTION_SECTION_RE.search(text))
    has_language = bool(SOLUTION_LANGUAGE_RE.search(text))
    has_actionable = bool(ACTIONABLE_RE.search(text))
    has_alternatives = bool(ALTERNATIVES_RE.search(text))
    has_justification = bool(JUSTIFICATION_RE.search(text))
    return {
        "has_solution_section": has_section,
        "has_solution_language": has_language,
        "has_actionable": has_actionable,
        "has_alternatives": has_alternatives,
        "has_justification": has_justification,
        "indicators": _indicators(
            (has_section, "Dedicated solution section"),
            (has_language, "Solution language present"),
            (has_actionable, "Actionable verbs used"),
            (has_alternatives, "Alternatives considered"),
            (has_justification, "Rationale provided"),
        ),
    }


def detect_business_impact(text: str) -> dict:
    has_section = bool(IMPACT_SECTION_RE.search(text))
    has_language = bool(IMPACT_LANGUAGE_RE.search(text))
    quantified = _count(QUANTIFIED_RE, text)
    has_financial = bool(FINANCIAL_RE.search(text))
    has_competitive = bool(COMPETITIVE_RE.search(text))
    return {
        "has_impact_section": has_section,
        "has_impact_language": has_language,
        "is_quantified": quantified > 0,
        "quantified_count": quantified,
        "has_financial_terms": has_financial,
        "has_competitive_terms": has_competitive,
        "indicators": _indicators(
            (has_section, "Dedicated impact/value section"),
            (has_language, "Impact language present"),
            (quantified > 0, f"{quantified} quantified metrics"),
            (has_financial, "Financial terms used"),
            (has_competitive, "Competitive advantage mentioned"),
        ),
    }


def detect_implementation(text: str) -> dict:
    has_section = bool(IMPLEMENTATION_SECTION_RE.search(text))
    phases = _count(PHASE_RE, text)
    dates = _count(DATE_RE, text)
    has_ownership = bool(OWNERSHIP_RE.search(text))
    has_resources = bool(RESOURCE_RE.search(text))
    return {
        "has_implementation_section": has_section,
        "has_phases": phases > 0,
        "phase_count": phases,
        "has_timeline": dates > 0,
        "date_count": dates,
        "has_ownership": has_ownership,
        "has_resources": has_resources,
        "indicators": _indicators(
            (has_section, "Dedicated implementation section"),
            (phases > 0, f"{phases} phases/milestones"),
            (dates > 0, f"{dates} timeline references"),
            (has_ownership, "Ownership defined"),
            (has_resources, "Resources identified"),
        ),
    }


def detect_risks(text: str) -> dict:
    has_section = bool(RISK_SECTION_RE.search(text))
    risks = _count(RISK_LANGUAGE_RE, text)
    mitigations = _count(MITIGATION_RE, text)
    return {
        "has_risk_section": has_section,
        "has_risks": risks > 0,
        "risk_count": risks,
        "has_mitigation": mitigations > 0,
        "mitigation_count": mitigations,
        "indicators": _indicators(
            (has_section, "Dedicated risk section"),
            (risks > 0, f"{risks} risks identified"),
            (mitigations > 0, "Mitigation strategies included"),
        ),
    }


def detect_success_metrics(text: str) -> dict:
    has_section = bool(METRICS_SECTION_RE.search(text))
    metrics = _count(METRICS_LANGUAGE_RE, text)
    quantified = _count(QUANTIFIED_RE, text)
    has_timebound = bool(TIMEBOUND_RE.search(text))
    return {
        "has_metrics_section": has_section,
        "has_metrics": metrics > 0,
        "metrics_count": metrics,
        "has_quantified": quantified > 0,
        "quantified_count": quantified,
        "has_timebound": has_timebound,
        "indicators": _indicators(
            (has_section, "Dedicated metrics section"),
            (metrics > 0, f"{metrics} metric references"),
            (quantified > 0, f"{quantified} quantified metrics"),
            (has_timebound, "Time-bound targets specified"),
        ),
    }


def detect_sections(text: str) -> SectionCoverage:
    found, missing = [], []
    for name, weight, pattern in REQUIRED_SECTIONS:
        (found if pattern.search(text) else missing).append((name, weight))
    return SectionCoverage(found=tuple(found), missing=tuple(missing))


# ---------------------------------------------------------------------------
# Scoring
# ---------------------------------------------------------------------------


class _Tally:
    """Accumulates sub-criterion points, issues, and strengths for one dimension."""

    def __init__(self, name: str, hp: Hyperparameters):
        self.name = name
        self.hp = hp
        self.subcriteria: list[Subcriterion] = []
        self.issues: list[str] = []
        self.strengths: list[str] = []

    def award(self, criterion: str, points: int, max_points: int, *, strength: str | None = None, issue: str | None = None) -> None:
        self.subcriteria.append(Subcriterion(criterion, min(points, max_points), max_points))
        if strength:
            self.strengths.append(strength)
        if issue:
            self.issues.append(issue)

    def gated(self, criterion: str, max_points: int, *, has_section: bool, has_signal: bool,
              strength: str, partial_issue: str, missing_issue: str) -> None:
        if has_section and has_signal:
            self.award(criterion, max_points, max_points, strength=strength)
        elif has_signal:
            self.award(criterion, self.hp.ungated_section_points, max_points, issue=partial_issue)
        else:
            self.award(criterion, 0, max_points, issue=missing_issue)

    def result(self) -> DimensionScore:
        score = min(self.hp.dimension_max_score, sum(s.points for s in self.subcriteria))
        return DimensionScore(
            name=self.name,
            score=max(0, score),
            subcriteria=tuple(self.subcriteria),
            issues=tuple(self.issues),
            strengths=tuple(self.strengths),
            max_score=self.hp.dimension_max_score,
        )


def score_problem_statement(text: str, hyperparameters: Hyperparameters | None = None) -> DimensionScore:
    tally = _Tally("Problem Statement", hyperparameters or DEFAULT_HYPERPARAMETERS)
    problem = detect_problem_statement(text)

    tally.gated(
        "Definition", 10,
        has_section=problem["has_problem_section"],
        has_signal=problem["has_problem_language"],
        strength="Clear problem statement with dedicated section",
        partial_issue="Problem mentioned but lacks dedicated section",
        missing_issue="Problem statement missing - define the specific challenge or opportunity",
    )

    if problem["has_urgency"] and problem["is_quantified"]:
        tally.award("Urgency", 8, 8, strength="Urgency quantified with specific metrics")
    elif problem["has_urgency"]:
        tally.award("Urgency", 4, 8, issue="Urgency mentioned but not quantified - add timeframes or costs")
    else:
        tally.award("Urgency", 0, 8, issue="Missing urgency - explain why this needs action now")

    if problem["has_strategic_alignment"]:
        tally.award("Alignment", 7, 7, strength="Problem tied to strategic objectives")
    else:
        tally.award("Alignment", 0, 7, issue="Add strategic alignment - connect to organizational goals")

    return tally.result()


def score_proposed_solution(text: str, hyperparameters: Hyperparameters | None = None) -> DimensionScore:
    tally = _Tally("Proposed Solution", hyperparameters or DEFAULT_HYPERPARAMETERS)
    solution = detect_solution(text)

    tally.gated(
        "Approach", 10,
        has_section=solution["has_solution_section"],
        has_signal=solution["has_solution_language"],
        strength="Clear solution with dedicated section",
        partial_issue="Solution mentioned but lacks dedicated section",
        missing_issue="Solution section missing or unclear",
    )

    if solution["has_actionable"]:
        tally.award("Actionable", 8, 8, strength="Solution is actionable with clear next steps")
    else:
        tally.award("Actionable", 0, 8, issue="Add action verbs - specify what will be done")

    if solution["has_justification"]:
        tally.award("Rationale", 7, 7, strength="Solution includes rationale/justification")
    else:
        tally.award("Rationale", 0, 7, issue="Add rationale - explain why this approach")

    return tally.result()


def score_business_impact(text: str, hyperparameters: Hyperparameters | None = None) -> DimensionScore:
    tally = _Tally("Business Impact", hyperparameters or DEFAULT_HYPERPARAMETERS)
    impact = detect_business_impact(text)

    tally.gated(
        "Impact", 10,
        has_section=impact["has_impact_section"],
        has_signal=impact["has_impact_language"],
        strength="Clear impact section with defined outcomes",
        partial_issue="Impact mentioned but lacks dedicated section",
        missing_issue="Impact section missing - define expected outcomes",
    )

    if impact["quantified_count"] >= 2:
        tally.award("Metrics", 10, 10, strength="Impact quantified with multiple metrics")
    elif impact["is_quantified"]:
        tally.award("Metrics", 5, 10, issue="Add more quantified metrics for impact")
    else:
        tally.award("Metrics", 0, 10, issue="Quantify impact - add specific numbers, percentages, or dollar amounts")

    if impact["has_financial_terms"] or impact["has_competitive_terms"]:
        tally.award("Value", 5, 5, strength="Business value articulated (financial/competitive)")
    else:
        tally.award("Value", 0, 5, issue="Add business value - revenue, cost, efficiency, or competitive impact")

    return tally.result()


def score_implementation_plan(text: str, hyperparameters: Hyperparameters | None = None) -> DimensionScore:
    tally = _Tally("Implementation Plan", hyperparameters or DEFAULT_HYPERPARAMETERS)
    impl = detect_implementation(text)

    if impl["has_implementation_section"] and impl["has_phases"]:
        tally.award("Phases", 10, 10, strength="Clear implementation plan with phases")
    elif impl["has_implementation_section"]:
        tally.award("Phases", 5, 10, issue="Implementation section exists but lacks clear phases")
    elif impl["has_phases"]:
        tally.award("Phases", tally.hp.ungated_section_points, 10,
                    issue="Phases mentioned but lack a dedicated implementation section")
    else:
        tally.award("Phases", 0, 10, issue="Add implementation plan - define phases and milestones")

    if impl["date_count"] >= 2:
        tally.award("Timeline", 8, 8, strength="Timeline includes specific dates/periods")
    elif impl["has_timeline"]:
        tally.award("Timeline", 4, 8, issue="Add more timeline specificity")
    else:
        tally.award("Timeline", 0, 8, issue="Add timeline - specify when activities will occur")

    if impl["has_ownership"] and impl["has_resources"]:
        tally.award("Resources", 7, 7, strength="Ownership and resources clearly defined")
    elif impl["has_ownership"] or impl["has_resources"]:
        tally.award("Resources", 3, 7, issue="Define both ownership and required resources")
    else:
        tally.award("Resources", 0, 7, issue="Add ownership and resources - who and what is needed")

    return tally.result()


_DIMENSION_SCORERS = (
    ("Problem Statement", score_problem_statement, ("Definition", 10), ("Urgency", 8), ("Alignment", 7)),
    ("Proposed Solution", score_proposed_solution, ("Approach", 10), ("Actionable", 8), ("Rationale", 7)),
    ("Business Impact", score_business_impact, ("Impact", 10), ("Metrics", 10), ("Value", 5)),
    ("Implementation Plan", score_implementation_plan, ("Phases", 10), ("Timeline", 8), ("Resources", 7)),
)


def _empty_dimension(name: str, criteria: tuple[tuple[str, int], ...], hp: Hyperparameters) -> DimensionScore:
    return DimensionScore(
        name=name,
        score=0,
        subcriteria=tuple(Subcriterion(c, 0, m) for c, m in criteria),
        issues=(_NO_CONTENT,),
        max_score=hp.dimension_max_score,
    )


def slop_deduction(penalty: int, hyperparameters: Hyperparameters | None = None) -> int:
    hp = hyperparameters or DEFAULT_HYPERPARAMETERS
    if penalty <= 0:
        return 0
    return min(hp.slop_deduction_cap, math.floor(penalty * hp.slop_deduction_factor))


def validate_proposal(text: str, hyperparameters: Hyperparameters | None = None) -> ProposalScore:
    """Score a strategic proposal against the four-dimension rubric.

    Args:
        text: Markdown or plain-text proposal.
        hyperparameters: Optional calibration overrides.

    Returns:
        A ``ProposalScore`` whose ``total_score`` is the sum of the clamped
        dimension scores less one slop deduction, bounded to 0-100.

    Raises:
        TypeError: If ``text`` is not a ``str``.
    """
    if not isinstance(text, str):
        raise TypeError(f"text must be a str, got {type(text).__name__}")
    hp = hyperparameters or DEFAULT_HYPERPARAMETERS
    slop = get_slop_penalty(text, hp)

    if not text.strip():
        dimensions = tuple(_empty_dimension(name, criteria, hp) for name, _, *criteria in _DIMENSION_SCORERS)
        return ProposalScore(
            total_score=0,
            dimensions=dimensions,
            slop_penalty=slop,
            slop_deduction=0,
            sections=detect_sections(text),
        )

    dimensions = tuple(scorer(text, hp) for _, scorer, *_ in _DIMENSION_SCORERS)
    deduction = slop_deduction(slop.penalty, hp)
    slop_issues = slop.issues[: hp.slop_issue_limit] if deduction else ()
    raw = sum(d.score for d in dimensions) - deduction
    total = max(0, min(hp.total_max_score, raw))

    logger.debug(f"Proposal scored {total}/{hp.total_max_score} (slop {slop.slop_score}, deduction {deduction})")
    return ProposalScore(
        total_score=total,
        dimensions=dimensions,
        slop_penalty=slop,
        slop_deduction=deduction,
        sections=detect_sections(text),
        slop_issues=tuple(slop_issues),
    )
