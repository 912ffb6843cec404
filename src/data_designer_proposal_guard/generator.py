from __future__ import annotations

import logging

import pandas as pd
from data_designer.engine.column_generators.generators.base import ColumnGeneratorFullColumn

from data_designer_proposal_guard.config import ProposalScoreColumnConfig
from data_designer_proposal_guard.rubric import validate_proposal

logger = logging.getLogger(__name__)


def score_row(values, config: ProposalScoreColumnConfig) -> dict:
    """Score one row's target values and shape the output cell.

    Missing cells (``None``, ``NaN``, ``NaT``) are skipped before joining.
    """
    text = "\n\n".join(str(v) for v in values if pd.notna(v))
    result = validate_proposal(text)
    slop = result.slop_penalty
    output: dict = {
        "is_valid": result.total_score >= config.min_score,
        "total_score": result.total_score,
        "dimension_scores": {d.name: d.score for d in result.dimensions},
        "slop_score": slop.slop_score,
        "slop_severity": slop.severity,
        "slop_penalty": slop.penalty,
    }
    if config.include_issues:
        output["issues"] = result.issues
    if config.include_slop:
        output["top_offenders"] = [o.to_payload() for o in slop.slop.top_offenders]
        output["slop_breakdown"] = slop.slop.to_payload()["breakdown"]
        output["sections"] = result.sections.to_payload()
    return output


class ProposalScoreColumnGenerator(ColumnGeneratorFullColumn[ProposalScoreColumnConfig]):
    """Column generator that grades proposal text with the rubric and slop detector."""

    def generate(self, data: pd.DataFrame) -> pd.DataFrame:
        logger.info(f"\U0001f4cb Scoring column {self.config.name!r} against the proposal rubric")
        logger.info(f"   target columns: {self.config.target_columns}")
        logger.info(f"   min_score: {self.config.min_score}")

        results = [
            score_row(row.values, self.config)
            for _, row in data[self.config.target_columns].iterrows()
        ]

        data = data.copy()
        data[self.config.name] = results
        return data
