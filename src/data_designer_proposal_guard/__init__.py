# SPDX-License-Identifier: Apache-2.0
"""Proposal Guard plugin for NeMo Data Designer.

Adds a ``proposal-score`` column type that grades strategic proposals on a
100-point, four-dimension rubric and deducts points for AI slop patterns
(buzzwords, filler, formulaic structure, uniform sentence rhythm). Pure regex
and statistics: no LLM calls, no API dependencies.

Usage::

    from data_designer_proposal_guard import ProposalScoreColumnConfig

    builder.add_column(ProposalScoreColumnConfig(
        name="proposal_score",
        target_columns=["proposal"],
        min_score=70,
    ))

The engine can also be called directly::

    from data_designer_proposal_guard import validate_proposal

    result = validate_proposal(markdown_text)
    result.total_score
"""

from data_designer_proposal_guard.config import ProposalScoreColumnConfig
from data_designer_proposal_guard.core import analyze_text, calculate_slop_score, get_slop_penalty
from data_designer_proposal_guard.hyperparameters import Hyperparameters
from data_designer_proposal_guard.patterns import DEFAULT_CATALOG, PatternCatalog
from data_designer_proposal_guard.rubric import ProposalScore, validate_proposal

__all__ = [
    "ProposalScoreColumnConfig",
    "analyze_text",
    "calculate_slop_score",
    "get_slop_penalty",
    "validate_proposal",
    "ProposalScore",
    "Hyperparameters",
    "PatternCatalog",
    "DEFAULT_CATALOG",
]
