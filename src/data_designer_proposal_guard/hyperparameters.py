from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Hyperparameters:
    """Calibrated thresholds, caps, and weights used by the scoring engine."""

    # Stylometry
    variance_min_sentences: int = 3
    variance_std_dev_threshold: float = 8.0
    ttr_min_words: int = 50
    ttr_window_size: int = 100
    ttr_threshold: float = 0.45

    # Slop sub-scores
    lexical_pattern_weight: int = 2
    lexical_cap: int = 40
    structural_finding_weight: int = 5
    structural_cap: int = 25
    stylometric_flag_weight: int = 5
    stylometric_cap: int = 15
    slop_max_score: int = 80

    # Severity tiers (inclusive upper bounds)
    severity_clean_max: int = 10
    severity_light_max: int = 25
    severity_moderate_max: int = 45
    severity_heavy_max: int = 65

    top_offender_limit: int = 10
    penalty_example_limit: int = 3

    # (min score, min pattern count, penalty), highest tier first
    penalty_tiers: tuple[tuple[int, int, int], ...] = (
        (40, 10, 8),
        (25, 6, 6),
        (12, 3, 4),
        (4, 1, 2),
    )

    # Rubric
    dimension_max_score: int = 25
    total_max_score: int = 100
    ungated_section_points: int = 2
    slop_deduction_factor: float = 0.6
    slop_deduction_cap: int = 5
    slop_issue_limit: int = 2


DEFAULT_HYPERPARAMETERS = Hyperparameters()
