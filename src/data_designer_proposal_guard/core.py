# Slop scoring for strategic proposals.
#
# Combines lexical, structural, and stylometric detections into a bounded 0-80
# slop score with a severity tier and a ranked list of offenders, then maps that
# score onto a 0-8 point deduction for the proposal rubric.

from __future__ import annotations

from dataclasses import dataclass

from data_designer_proposal_guard.hyperparameters import DEFAULT_HYPERPARAMETERS, Hyperparameters
from data_designer_proposal_guard.lexical import DetectionResult, detect_lexical
from data_designer_proposal_guard.structural import StructuralFinding, detect_structural_patterns
from data_designer_proposal_guard.stylometric import (
    SentenceVariance,
    TypeTokenRatio,
    analyze_sentence_variance,
    analyze_type_token_ratio,
)

# ---------------------------------------------------------------------------
# Dataclasses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Offender:
    pattern: str
    category: str

    def to_payload(self) -> dict[str, object]:
        return {"pattern": self.pattern, "category": self.category}


@dataclass(frozen=True)
class SlopBreakdown:
    lexical: int
    structural: int
    stylometric: int
    lexical_patterns: int
    em_dashes: int
    structural_findings: tuple[StructuralFinding, ...]
    sentence_variance: SentenceVariance
    type_token_ratio: TypeTokenRatio

    @property
    def stylometric_issues(self) -> list[str]:
        return [m.reason for m in (self.sentence_variance, self.type_token_ratio) if m.flagged and m.reason]

    def to_payload(self, hp: Hyperparameters) -> dict[str, object]:
        return {
            "lexical": {
                "score": self.lexical,
                "max_score": hp.lexical_cap,
                "patterns": self.lexical_patterns,
                "em_dashes": self.em_dashes,
            },
            "structural": {
                "score": self.structural,
                "max_score": hp.structural_cap,
                "patterns": [f.label for f in self.structural_findings],
            },
            "stylometric": {
                "score": self.stylometric,
                "max_score": hp.stylometric_cap,
                "issues": self.stylometric_issues,
                "sentence_variance": self.sentence_variance.std_dev,
                "ttr": self.type_token_ratio.ttr,
            },
        }


@dataclass(frozen=True)
class SlopScore:
    score: int
    severity: str
    breakdown: SlopBreakdown
    top_offenders: tuple[Offender, ...]
    detection: DetectionResult
    hp: Hyperparameters

    @property
    def max_score(self) -> int:
        return self.hp.slop_max_score

    @property
    def pattern_count(self) -> int:
        """Raw count behind the penalty: lexical entries, em-dashes, and structural findings."""
        return self.detection.pattern_count + self.detection.em_dashes + len(self.breakdown.structural_findings)

    def to_payload(self) -> dict[str, object]:
        return {
            "score": self.score,
            "max_score": self.max_score,
            "severity": self.severity,
            "breakdown": self.breakdown.to_payload(self.hp),
            "top_offenders": [o.to_payload() for o in self.top_offenders],
            "pattern_count": self.pattern_count,
            "details": self.detection.to_payload(),
        }


@dataclass(frozen=True)
class SlopPenalty:
    penalty: int
    issues: tuple[str, ...]
    slop: SlopScore

    @property
    def slop_score(self) -> int:
        return self.slop.score

    @property
    def severity(self) -> str:
        return self.slop.severity

    def to_payload(self) -> dict[str, object]:
        return {
            "penalty": self.penalty,
            "issues": list(self.issues),
            "slop_score": self.slop_score,
            "severity": self.severity,
        }


# ---------------------------------------------------------------------------
# Aggregation
# ---------------------------------------------------------------------------

# Categories judged most diagnostic come first, regardless of how often they fire.
_OFFENDER_PRECEDENCE: tuple[tuple[str, str, int], ...] = (
    ("filler_phrase", "filler-phrase", 3),
    ("generic_booster", "generic-booster", 3),
    ("buzzword", "buzzword", 3),
    ("sycophantic", "sycophantic", 2),
)
_STRUCTURAL_OFFENDER_LIMIT = 2


def severity_for(score: int, hyperparameters: Hyperparameters | None = None) -> str:
    hp = hyperparameters or DEFAULT_HYPERPARAMETERS
    if score <= hp.severity_clean_max:
        return "clean"
    if score <= hp.severity_light_max:
        return "light"
    if score <= hp.severity_moderate_max:
        return "moderate"
    if score <= hp.severity_heavy_max:
        return "heavy"
    return "severe"


def _top_offenders(
    detection: DetectionResult, findings: tuple[StructuralFinding, ...], hp: Hyperparameters
) -> tuple[Offender, ...]:
    offenders = []
    for key, category, limit in _OFFENDER_PRECEDENCE:
        offenders.extend(Offender(p, category) for p in detection.get(key)[:limit])
    if detection.em_dashes > 0:
        offenders.append(Offender(f"{detection.em_dashes} em-dash(es)", "em-dash"))
    offenders.extend(Offender(f.label, "structural") for f in findings[:_STRUCTURAL_OFFENDER_LIMIT])
    return tuple(offenders[: hp.top_offender_limit])


def _require_text(text: object) -> None:
    if not isinstance(text, str):
        raise TypeError(f"text must be a str, got {type(text).__name__}")


def calculate_slop_score(text: str, hyperparameters: Hyperparameters | None = None) -> SlopScore:
    """Score ``text`` for AI slop on a 0-80 scale (higher means more slop)."""
    _require_text(text)
    hp = hyperparameters or DEFAULT_HYPERPARAMETERS

    detection = detect_lexical(text)
    findings = detect_structural_patterns(text)
    variance = analyze_sentence_variance(text, hp)
    ttr = analyze_type_token_ratio(text, hp)

    lexical_patterns = detection.pattern_count
    lexical = min(hp.lexical_cap, lexical_patterns * hp.lexical_pattern_weight + detection.em_dashes)
    structural = min(hp.structural_cap, len(findings) * hp.structural_finding_weight)
    flags = int(variance.flagged) + int(ttr.flagged)
    stylometric = min(hp.stylometric_cap, flags * hp.stylometric_flag_weight)
    score = lexical + structural + stylometric

    breakdown = SlopBreakdown(
        lexical=lexical,
        structural=structural,
        stylometric=stylometric,
        lexical_patterns=lexical_patterns,
        em_dashes=detection.em_dashes,
        structural_findings=findings,
        sentence_variance=variance,
        type_token_ratio=ttr,
    )
    return SlopScore(
        score=score,
        severity=severity_for(score, hp),
        breakdown=breakdown,
        top_offenders=_top_offenders(detection, findings, hp),
        detection=detection,
        hp=hp,
    )


# ---------------------------------------------------------------------------
# Penalty mapping
# ---------------------------------------------------------------------------

_PENALTY_ISSUES = {
    8: "Severe AI slop detected ({n} patterns): substantial rewrite needed",
    6: "Heavy AI slop detected ({n} patterns): significant editing needed",
    4: "Moderate AI slop detected ({n} patterns): editing recommended",
    2: "Light AI patterns detected ({n} patterns)",
}


def penalty_for(score: int, pattern_count: int, hyperparameters: Hyperparameters | None = None) -> int:
    """Deduction for a slop score, taking whichever of score or raw count implies the higher tier."""
    hp = hyperparameters or DEFAULT_HYPERPARAMETERS
    for min_score, min_count, penalty in hp.penalty_tiers:
        if score >= min_score or pattern_count >= min_count:
            return penalty
    return 0


def get_slop_penalty(text: str, hyperparameters: Hyperparameters | None = None) -> SlopPenalty:
    hp = hyperparameters or DEFAULT_HYPERPARAMETERS
    slop = calculate_slop_score(text, hp)
    count = slop.pattern_count
    penalty = penalty_for(slop.score, count, hp)

    issues = []
    if penalty:
        template = _PENALTY_ISSUES.get(penalty, "AI slop detected ({n} patterns)")
        issues.append(template.format(n=count))
    if slop.top_offenders:
        examples = ", ".join(f'"{o.pattern}"' for o in slop.top_offenders[: hp.penalty_example_limit])
        issues.append(f"Examples: {examples}")
    return SlopPenalty(penalty=penalty, issues=tuple(issues), slop=slop)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def analyze_text(text: str, hyperparameters: Hyperparameters | None = None) -> dict:
    """Score text for AI slop patterns.

    Args:
        text: The prose to analyze.
        hyperparameters: Optional tuning overrides. Uses calibrated defaults if omitted.

    Returns:
        Dict with keys: score (0-80), max_score, severity, breakdown,
        top_offenders, pattern_count, details, penalty, issues.
    """
    result = get_slop_penalty(text, hyperparameters)
    payload = result.slop.to_payload()
    payload["penalty"] = result.penalty
    payload["issues"] = list(result.issues)
    return payload
