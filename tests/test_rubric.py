import pytest

from data_designer_proposal_guard.rubric import (
    detect_business_impact,
    detect_implementation,
    detect_problem_statement,
    detect_risks,
    detect_sections,
    detect_solution,
    detect_success_metrics,
    score_business_impact,
    score_implementation_plan,
    score_problem_statement,
    score_proposed_solution,
    slop_deduction,
    validate_proposal,
)

COMPLETE_PROPOSAL = """# Problem Statement

Our dealer support team misses 30% of inbound calls during peak hours. This gap is a critical priority because each missed call costs roughly $120 in lost service revenue, and the annual objective is to grow service retention.

# Proposed Solution

We will deploy a call routing service that sends overflow calls to a trained backup desk. We chose this approach because pilot data from two stores showed answer rates rose from 70% to 94%.

# Business Impact

Recovering half of the missed calls adds $1.4 million in yearly revenue. Answer rates above 90% also cut customer churn by 5%, which improves our market position against regional competitors.

# Implementation Plan

Phase 1 runs in January and covers vendor setup. Phase 2 starts in March with rollout to 12 stores. The operations director is the owner, and the budget is $250,000 from the service department.
"""

SLOP_PARAGRAPH = (
    "\nThis incredibly robust, seamless, cutting-edge platform will leverage synergy. "
    "It's important to note that it is truly transformative.\n"
)

DIMENSION_NAMES = ["Problem Statement", "Proposed Solution", "Business Impact", "Implementation Plan"]


class TestValidateProposal:
    def test_empty_text(self):
        result = validate_proposal("")
        assert result.total_score == 0
        assert result.slop_penalty.severity == "clean"
        assert result.slop_penalty.slop.detection.pattern_count == 0
        for dimension in result.dimensions:
            assert dimension.score == 0
            assert "No content to validate" in dimension.issues

    def test_whitespace_only_text(self):
        assert validate_proposal("  \n\t ").total_score == 0

    def test_rejects_non_string(self):
        with pytest.raises(TypeError):
            validate_proposal(None)

    def test_dimensions_and_subcriteria(self):
        result = validate_proposal("# Problem\nSome content")
        assert [d.name for d in result.dimensions] == DIMENSION_NAMES
        assert [[(s.name, s.max_points) for s in d.subcriteria] for d in result.dimensions] == [
            [("Definition", 10), ("Urgency", 8), ("Alignment", 7)],
            [("Approach", 10), ("Actionable", 8), ("Rationale", 7)],
            [("Impact", 10), ("Metrics", 10), ("Value", 5)],
            [("Phases", 10), ("Timeline", 8), ("Resources", 7)],
        ]
        assert all(d.max_score == 25 for d in result.dimensions)

    def test_complete_proposal(self):
        result = validate_proposal(COMPLETE_PROPOSAL)
        assert [d.score for d in result.dimensions] == [25, 25, 25, 25]
        assert result.total_score >= 95
        assert result.total_score == 100 - result.slop_deduction

    def test_slop_is_deducted_once_from_the_total(self):
        clean = validate_proposal(COMPLETE_PROPOSAL)
        sloppy = validate_proposal(COMPLETE_PROPOSAL + SLOP_PARAGRAPH)
        assert [d.score for d in sloppy.dimensions] == [d.score for d in clean.dimensions]
        assert sloppy.slop_penalty.penalty >= 6
        assert sloppy.slop_deduction in (3, 4)
        assert sloppy.total_score == sum(d.score for d in sloppy.dimensions) - sloppy.slop_deduction
        assert sloppy.slop_issues
        assert sloppy.total_score < clean.total_score

    def test_total_stays_in_bounds(self):
        for text in ["", "x", COMPLETE_PROPOSAL, COMPLETE_PROPOSAL + SLOP_PARAGRAPH * 5, SLOP_PARAGRAPH]:
            result = validate_proposal(text)
            assert 0 <= result.total_score <= 100
            assert all(0 <= d.score <= 25 for d in result.dimensions)

    def test_is_idempotent(self):
        assert validate_proposal(COMPLETE_PROPOSAL) == validate_proposal(COMPLETE_PROPOSAL)

    def test_dimension_lookup(self):
        result = validate_proposal(COMPLETE_PROPOSAL)
        assert result.dimension("Business Impact").score == 25
        with pytest.raises(KeyError):
            result.dimension("Risks")

    def test_payload(self):
        payload = validate_proposal(COMPLETE_PROPOSAL + SLOP_PARAGRAPH).to_payload()
        assert set(payload) == {"total_score", "dimensions", "slop_detection", "sections"}
        assert payload["slop_detection"]["deduction"] > 0
        assert payload["slop_detection"]["top_offenders"][0]["category"] == "filler-phrase"
        assert payload["dimensions"][0]["subcriteria"][0] == {"name": "Definition", "points": 10, "max_points": 10}

    def test_issues_collects_dimension_and_slop_issues(self):
        result = validate_proposal("We should fix things. It is incredibly robust.")
        assert "Problem statement missing - define the specific challenge or opportunity" in result.issues
        assert any(i.startswith("Examples:") for i in result.issues)


class TestScoreProblemStatement:
    def test_section_gates_the_definition(self):
        with_section = score_problem_statement("# Problem Statement\nWe have a problem with customer churn.")
        without_section = score_problem_statement("We have a problem with customer churn.")
        assert with_section.subcriteria[0].points == 10
        assert without_section.subcriteria[0].points == 2
        assert with_section.score > without_section.score
        assert "Problem mentioned but lacks dedicated section" in without_section.issues

    def test_awards_quantified_urgency(self):
        with_urgency = score_problem_statement("# Problem\nWithout immediate action, we risk losing 40% of revenue.")
        unquantified = score_problem_statement("# Problem\nThis is an urgent problem.")
        without_urgency = score_problem_statement("# Problem\nWe have a problem.")
        assert with_urgency.subcriteria[1].points == 8
        assert unquantified.subcriteria[1].points == 4
        assert without_urgency.subcriteria[1].points == 0

    def test_strategic_alignment(self):
        result = score_problem_statement("# Problem\nChurn blocks our growth goal.")
        assert result.subcriteria[2].points == 7
        assert "Problem tied to strategic objectives" in result.strengths


class TestScoreProposedSolution:
    def test_section_gates_the_approach(self):
        with_section = score_proposed_solution("# Proposed Solution\nWe will implement a new system.")
        without_section = score_proposed_solution("Our solution: we will implement a new system.")
        assert with_section.subcriteria[0].points == 10
        assert without_section.subcriteria[0].points == 2
        assert with_section.score > without_section.score

    def test_awards_actionable_detail(self):
        actionable = score_proposed_solution("# Solution\nWe will implement an automated workflow.")
        vague = score_proposed_solution("# Solution\nWe will fix it.")
        assert actionable.score > vague.score
        assert "Add action verbs - specify what will be done" in vague.issues

    def test_rationale(self):
        result = score_proposed_solution("# Solution\nWe picked it because support tickets doubled.")
        assert result.subcriteria[2].points == 7


class TestScoreBusinessImpact:
    def test_awards_quantified_impact(self):
        with_numbers = score_business_impact("# Business Impact\nThis will save $2 million annually and reduce costs by 40%.")
        without_numbers = score_business_impact("# Business Impact\nThis will improve things.")
        assert with_numbers.subcriteria[1].points == 10
        assert with_numbers.subcriteria[2].points == 5
        assert without_numbers.subcriteria[1].points == 0
        assert with_numbers.score > without_numbers.score

    def test_single_figure_is_partial(self):
        result = score_business_impact("# Impact\nRevenue grows 10%.")
        assert result.subcriteria[1].points == 5


class TestScoreImplementationPlan:
    def test_awards_phased_implementation(self):
        with_phases = score_implementation_plan("# Implementation Plan\n## Phase 1: Discovery\nWeek 1-2\n## Phase 2: Build\nWeek 3-6")
        without_phases = score_implementation_plan("# Implementation Plan\nWe will do it.")
        assert with_phases.subcriteria[0].points == 10
        assert with_phases.subcriteria[1].points == 8
        assert without_phases.subcriteria[0].points == 5
        assert with_phases.score > without_phases.score

    def test_phases_without_section_score_near_zero(self):
        result = score_implementation_plan("Phase 1: Research. Phase 2: Build.")
        assert result.subcriteria[0].points == 2

    def test_ownership_and_resources(self):
        both = score_implementation_plan("# Plan\nThe ops team owns it with a $50k budget.")
        one = score_implementation_plan("# Plan\nThe ops team owns it.")
        assert both.subcriteria[2].points == 7
        assert one.subcriteria[2].points == 3


class TestDetection:
    def test_problem_statement(self):
        result = detect_problem_statement("# Problem Statement\nWe lose 40% of customers in the first month.")
        assert result["has_problem_section"]
        assert result["is_quantified"]

    def test_heading_synonym_does_not_cross_lines(self):
        assert not detect_solution("# Overview\nOur solution is simple.")["has_solution_section"]

    def test_numbered_heading(self):
        assert detect_solution("## 2. Proposed Solution\nBuild it.")["has_solution_section"]

    def test_solution_language(self):
        assert detect_solution("Our approach is to implement automated testing.")["has_solution_language"]

    def test_business_impact(self):
        result = detect_business_impact("# Impact\nRevenue will increase by 25% within 6 months.")
        assert result["has_impact_section"]
        assert result["quantified_count"] == 2

    def test_implementation(self):
        result = detect_implementation("Phase 1 in Q1 2025. Phase 2 by March.")
        assert result["has_phases"]
        assert result["date_count"] == 3

    def test_risks(self):
        result = detect_risks("## Risks\nVendor delay is a risk; our fallback is the current desk.")
        assert result["has_risk_section"]
        assert result["has_mitigation"]

    def test_success_metrics(self):
        result = detect_success_metrics("# Success Metrics\nReduce errors by 50%.")
        assert result["has_metrics_section"]
        assert result["has_quantified"]
        assert result["has_timebound"]

    def test_heading_for_another_section_does_not_open_the_gate(self):
        text = "## Risks and Challenges\nVendor delay is a problem we track."
        assert not detect_problem_statement(text)["has_problem_section"]
        assert score_problem_statement(text).subcriteria[0].points == 2
        assert not detect_implementation("## Team Resource Plan\nTwo engineers.")["has_implementation_section"]

    def test_synonym_must_end_at_a_word_boundary(self):
        assert not detect_implementation("# Planet Survey\nPhase 1 in March.")["has_implementation_section"]

    def test_closed_list_qualifiers_and_plurals(self):
        assert detect_problem_statement("## Executive Problem Summary\nChurn is up.")["has_problem_section"]
        assert detect_problem_statement("## Current State\nChurn is up.")["has_problem_section"]
        assert detect_business_impact("## Expected Benefits\nFaster close.")["has_impact_section"]
        assert detect_risks("## Dependencies\nThe vendor API.")["has_risk_section"]

    def test_indicators(self):
        result = detect_problem_statement("# Problem Statement\nWe lose 40% of customers in the first month.")
        assert result["indicators"] == [
            "Dedicated problem section",
            "Problem framing language",
            "1 quantified metrics",
        ]
        risks = detect_risks("## Risks\nVendor delay is a risk; our fallback is the current desk.")
        assert risks["indicators"] == [
            "Dedicated risk section",
            "2 risks identified",
            "Mitigation strategies included",
        ]

    def test_indicators_empty_without_signals(self):
        for detect in (detect_solution, detect_business_impact, detect_implementation, detect_success_metrics):
            assert detect("")["indicators"] == []

    def test_sections(self):
        result = detect_sections("# Problem Statement\n# Proposed Solution\n# Business Impact")
        found = [name for name, _ in result.found]
        missing = [name for name, _ in result.missing]
        assert found == ["Problem Statement", "Proposed Solution", "Business Impact"]
        assert "Implementation Plan" in missing
        assert dict(result.found)["Problem Statement"] == 2


class TestSlopDeduction:
    @pytest.mark.parametrize("penalty, expected", [(0, 0), (2, 1), (4, 2), (6, 3), (8, 4)])
    def test_scaled_deduction(self, penalty, expected):
        assert slop_deduction(penalty) == expected
