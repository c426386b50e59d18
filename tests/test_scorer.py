"""
Tests for per-entry heuristic scoring.
Run with: python -m pytest tests/test_scorer.py -v
"""

import pytest

from campus_assist.engine import MatchReason, MatchScorer, TermClassifier
from campus_assist.engine.scorer import coverage
from tests.conftest import make_entry


class TestCoverage:

    def test_empty_part_is_zero(self):
        assert coverage(frozenset(), frozenset({"bca"})) == 0.0

    def test_fraction(self):
        assert coverage(frozenset({"a", "b", "c", "d"}), frozenset({"a", "b", "c"})) == 0.75


class TestMatchScorer:

    def setup_method(self):
        self.classifier = TermClassifier()
        self.scorer = MatchScorer(self.classifier)

    def score(self, text, entry):
        return self.scorer.score(self.classifier.classify(text), text, entry)

    # ── Priority rules ──────────────────────────────────────

    def test_exact_question(self):
        result = self.score("What are BCA fees?", make_entry("1", "what are bca fees"))
        assert result.score == 100
        assert result.reason == MatchReason.EXACT

    def test_keyword_phrase_exact(self):
        entry = make_entry("1", "Fee details for computer applications", keywords=["bca fee structure"])
        result = self.score("BCA fee structure", entry)
        assert result.score == 98
        assert result.reason == MatchReason.KEYWORD_PHRASE_EXACT

    def test_keyword_phrase_contains_query_terms(self):
        entry = make_entry("1", "Fee details for computer applications", keywords=["bca fees per year"])
        result = self.score("bca fees", entry)
        assert result.score == 92
        assert result.reason == MatchReason.KEYWORD_PHRASE_TERMS

    def test_query_contains_keyword_phrase(self):
        entry = make_entry("1", "Accommodation charges", keywords=["hostel fees"])
        result = self.score("what is the hostel fees for girls", entry)
        assert result.score == 90
        assert result.reason == MatchReason.KEYWORD_PHRASE_TERMS

    def test_keyword_naming_other_course_is_skipped(self):
        entry = make_entry("1", "Fee structure for BBA", keywords=["fees for bba and ba"])
        result = self.score("fees for ba", entry)
        assert result.score == 0
        assert result.reason == MatchReason.NONE

    def test_keyword_phrase_cannot_bypass_semester_mismatch(self):
        entry = make_entry("sem2", "2nd semester fees", keywords=["semester fees"])
        result = self.score("3rd semester fees", entry)
        assert result.score == 0
        assert result.reason == MatchReason.CRITICAL_MISMATCH

    def test_keyword_phrase_naming_other_semester_is_skipped(self):
        entry = make_entry("1", "Fee payment schedule", keywords=["2nd semester fees"])
        result = self.score("fees for 3rd semester students", entry)
        assert result.reason != MatchReason.KEYWORD_PHRASE_TERMS
        assert result.score == 0

    def test_keyword_phrase_with_same_semester_still_matches(self):
        entry = make_entry("1", "Fee payment schedule", keywords=["3rd semester fees"])
        result = self.score("fees for 3rd semester students", entry)
        assert result.score == 90
        assert result.reason == MatchReason.KEYWORD_PHRASE_TERMS

    def test_critical_mismatch_blocks_everything_below(self):
        result = self.score("3rd semester fees", make_entry("1", "2nd semester fees"))
        assert result.score == 0
        assert result.reason == MatchReason.CRITICAL_MISMATCH

    def test_matching_critical_terms_fall_through(self):
        result = self.score("3rd semester exam fees", make_entry("1", "3rd semester fees and exam dates"))
        assert result.score == 95
        assert result.reason == MatchReason.ALL_TERMS_MATCH

    def test_all_terms_match(self):
        result = self.score("BCA fees", make_entry("1", "What are the fees for BCA?"))
        assert result.score == 95
        assert result.reason == MatchReason.ALL_TERMS_MATCH

    def test_reverse_full_match(self):
        result = self.score("hostel fees for boys and girls", make_entry("1", "Hostel fees for girls"))
        assert result.score == 92
        assert result.reason == MatchReason.REVERSE_FULL_MATCH

    def test_subject_action_full_coverage(self):
        result = self.score("bca hostel fees", make_entry("1", "Hostel rules for BCA students"))
        assert result.score == 95
        assert result.reason == MatchReason.SUBJECT_ACTION_MATCH

    def test_subject_action_partial_coverage_scales_bonus(self):
        entry = make_entry("1", "Hostel rules for BCA girls night")
        result = self.score("hostel for bca girls night warden", entry)
        assert result.score == pytest.approx(86.67)
        assert result.reason == MatchReason.SUBJECT_ACTION_MATCH

    def test_reverse_subject_action(self):
        result = self.score("hostel fees for bca mca and mba students", make_entry("1", "Hostel fees for BCA"))
        assert result.score == 85
        assert result.reason == MatchReason.REVERSE_SUBJECT_ACTION

    def test_category_term(self):
        entry = make_entry("1", "Which clubs are open to freshers", category="sports")
        result = self.score("sports clubs membership", entry)
        assert result.score == 72
        assert result.reason == MatchReason.CATEGORY_TERM

    def test_category_alone_is_not_enough(self):
        entry = make_entry("1", "Which clubs are open to freshers", category="sports")
        assert self.score("sports", entry).score == 0

    def test_unrelated_entry_scores_zero(self):
        result = self.score("BCA fees", make_entry("1", "Library timings on weekends"))
        assert result.score == 0
        assert result.reason == MatchReason.NONE
