from data_designer_proposal_guard.patterns import STRUCTURAL_TAGS
from data_designer_proposal_guard.structural import detect_structural_patterns


def _tags(text):
    return [f.tag for f in detect_structural_patterns(text)]


class TestDetectStructuralPatterns:
    def test_formulaic_introduction(self):
        text = "In today's fast-paced world, we need to be agile. This document will outline our approach."
        assert "formulaic-introduction" in _tags(text)

    def test_formulaic_introduction_after_title_heading(self):
        text = "# Call Routing Proposal\n\nIn this document we describe the new overflow desk."
        assert _tags(text) == ["formulaic-introduction"]

    def test_stock_phrase_later_in_document_is_not_an_introduction(self):
        text = "We ship weekly.\nIn today's market that matters."
        assert "formulaic-introduction" not in _tags(text)

    def test_over_signposting_recorded_once(self):
        text = "As mentioned earlier, we need to consider this. In this section, we will explore more."
        findings = detect_structural_patterns(text)
        signposts = [f for f in findings if f.tag == "over-signposting"]
        assert len(signposts) == 1
        assert signposts[0].label == 'over-signposting: "in this section, we will"'

    def test_template_section_progression(self):
        text = "## Overview\nText.\n## Key Points\nMore text.\n## Conclusion\nThe end."
        assert _tags(text) == ["template-section-progression"]

    def test_template_progression_needs_anchors_in_order(self):
        text = "## Conclusion\nText.\n## Key Points\nMore text.\n## Overview\nThe end."
        assert _tags(text) == []

    def test_template_progression_window_is_bounded(self):
        text = "Overview. " + "filler words here " * 40 + "Key points. Best practices."
        assert "template-section-progression" not in _tags(text)

    def test_symmetric_coverage_is_one_finding(self):
        text = "On one hand it is cheap. On the other hand it is slow. Pros and cons abound."
        assert _tags(text) == ["symmetric-coverage"]

    def test_both_have_merit_stays_within_a_sentence(self):
        assert _tags("Both vendors have merit.") == ["symmetric-coverage"]
        assert _tags("Both vendors bid. Each quote may have merit.") == []

    def test_repeated_both_on_one_line(self):
        assert _tags("both " * 5000 + "sides") == []

    def test_clean_structure(self):
        text = "## Purpose\nThis PRD defines requirements.\n\n## Requirements\n- Feature A\n- Feature B"
        assert detect_structural_patterns(text) == ()

    def test_empty_text(self):
        assert detect_structural_patterns("") == ()

    def test_all_findings_in_fixed_order(self):
        text = (
            "In this proposal we compare vendors.\n"
            "## Overview\nBackground.\n## Key Points\nDetails.\n## Conclusion\n"
            "Let's now turn to pricing. There are pros and cons."
        )
        assert tuple(_tags(text)) == STRUCTURAL_TAGS
