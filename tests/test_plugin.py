import pytest
from pydantic import ValidationError

from data_designer.plugins.plugin import PluginType

from data_designer_proposal_guard.config import ProposalScoreColumnConfig
from data_designer_proposal_guard.generator import score_row
from data_designer_proposal_guard.plugin import proposal_score_plugin

PROPOSAL = """# Problem Statement
Support misses 30% of calls, a critical priority for our retention goal.

# Proposed Solution
We will deploy overflow routing because the pilot doubled answer rates.
"""


def _config(**kwargs):
    return ProposalScoreColumnConfig(name="proposal_score", target_columns=["proposal"], **kwargs)


class TestProposalScoreColumnConfig:
    def test_defaults(self):
        config = _config()
        assert config.column_type == "proposal-score"
        assert config.min_score == 70
        assert config.include_issues is True
        assert config.include_slop is False

    def test_required_columns(self):
        config = ProposalScoreColumnConfig(name="score", target_columns=["summary", "plan"])
        assert config.required_columns == ["summary", "plan"]
        assert config.side_effect_columns == []

    @pytest.mark.parametrize("min_score", [-1, 101])
    def test_min_score_is_bounded(self, min_score):
        with pytest.raises(ValidationError):
            _config(min_score=min_score)


class TestScoreRow:
    def test_output_keys(self):
        output = score_row([PROPOSAL], _config())
        assert set(output) == {
            "is_valid", "total_score", "dimension_scores", "slop_score",
            "slop_severity", "slop_penalty", "issues",
        }
        assert list(output["dimension_scores"]) == [
            "Problem Statement", "Proposed Solution", "Business Impact", "Implementation Plan",
        ]

    def test_min_score_sets_validity(self):
        total = score_row([PROPOSAL], _config())["total_score"]
        assert score_row([PROPOSAL], _config(min_score=total))["is_valid"] is True
        assert score_row([PROPOSAL], _config(min_score=total + 1))["is_valid"] is False

    def test_include_flags(self):
        output = score_row([PROPOSAL], _config(include_issues=False, include_slop=True))
        assert "issues" not in output
        assert {"top_offenders", "slop_breakdown", "sections"} <= set(output)
        assert set(output["slop_breakdown"]) == {"lexical", "structural", "stylometric"}

    def test_joins_target_columns_and_skips_missing_values(self):
        problem, solution = PROPOSAL.split("\n\n")
        joined = score_row([problem, None, solution], _config())
        assert joined == score_row([PROPOSAL], _config())

    def test_nan_cells_are_missing_values(self):
        problem, solution = PROPOSAL.split("\n\n")
        joined = score_row([problem, float("nan"), solution], _config())
        assert joined == score_row([PROPOSAL], _config())

    def test_all_nan_row_has_no_content(self):
        output = score_row([float("nan"), None], _config())
        assert output["total_score"] == 0
        assert "No content to validate" in output["issues"]
        assert not any(issue.startswith("Problem statement missing") for issue in output["issues"])

    def test_empty_row(self):
        output = score_row([None], _config())
        assert output["total_score"] == 0
        assert output["is_valid"] is False
        assert "No content to validate" in output["issues"]


class TestPlugin:
    def test_plugin_registration(self):
        assert proposal_score_plugin.plugin_type == PluginType.COLUMN_GENERATOR
        assert proposal_score_plugin.config_qualified_name.endswith("ProposalScoreColumnConfig")
        assert proposal_score_plugin.impl_qualified_name.endswith("ProposalScoreColumnGenerator")
