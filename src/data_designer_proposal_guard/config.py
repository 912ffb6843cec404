from __future__ import annotations

from typing import Literal

from pydantic import Field

from data_designer.config.column_configs import SingleColumnConfig


class ProposalScoreColumnConfig(SingleColumnConfig):
    """Score strategic-proposal text columns against the four-dimension rubric.

    Each row's target columns are joined and scored for problem statement,
    proposed solution, business impact, and implementation plan (25 points each),
    less a deduction for AI slop patterns.

    Attributes:
        target_columns: Columns whose text content will be joined and scored.
        min_score: Minimum rubric total (0-100) for ``is_valid=True``. Defaults to 70.
        include_issues: Include per-dimension issue strings and slop issues in output.
        include_slop: Include slop offenders, breakdown, and section coverage.
    """

    target_columns: list[str]
    min_score: int = Field(default=70, ge=0, le=100, description="Minimum rubric total for is_valid=True")
    include_issues: bool = Field(default=True, description="Include actionable issue strings in output")
    include_slop: bool = Field(default=False, description="Include slop offenders and section coverage in output")
    column_type: Literal["proposal-score"] = "proposal-score"

    @staticmethod
    def get_column_emoji() -> str:
        return "\U0001f4cb"

    @property
    def required_columns(self) -> list[str]:
        return self.target_columns

    @property
    def side_effect_columns(self) -> list[str]:
        return []
