"""
Heuristic scoring of one query against one knowledge entry.

Rules run in fixed priority order and the first nonzero score wins. The
critical-term gate sits between the keyword rules and the term-overlap
rules: once both sides name a semester/ordinal and they disagree, nothing
below it may rescue the entry.
"""

from typing import FrozenSet, Optional

from campus_assist.engine.classifier import TermClassifier
from campus_assist.engine.normalizer import normalize
from campus_assist.engine.types import KnowledgeEntry, MatchReason, ScoredCandidate, TermSet

SCORE_EXACT = 100.0
SCORE_KEYWORD_EXACT = 98.0
SCORE_KEYWORD_FORWARD = 92.0
SCORE_KEYWORD_REVERSE = 90.0
SCORE_ALL_TERMS = 95.0
SCORE_REVERSE_FULL = 92.0
SCORE_SUBJECT_ACTION = 85.0
SCORE_SUBJECT_ACTION_BONUS = 10.0
SCORE_REVERSE_SUBJECT_ACTION = 85.0
SCORE_CATEGORY_TERM = 72.0

REVERSE_FULL_ENTRY_COVERAGE = 0.8
REVERSE_FULL_QUERY_COVERAGE = 0.5
SUBJECT_ACTION_COVERAGE = 0.7
REVERSE_SUBJECT_ACTION_COVERAGE = 0.8


def coverage(part: FrozenSet[str], whole: FrozenSet[str]) -> float:
    """Fraction of ``part`` found in ``whole``; 0 for an empty ``part``."""
    if not part:
        return 0.0
    return len(part & whole) / len(part)


def _entity_conflict(query_value: Optional[str], phrase_value: Optional[str]) -> bool:
    return bool(query_value and phrase_value and query_value != phrase_value)


def _critical_conflict(query_terms: FrozenSet[str], other_terms: FrozenSet[str]) -> bool:
    return bool(query_terms and other_terms and query_terms != other_terms)


class MatchScorer:
    def __init__(self, classifier: TermClassifier):
        self.classifier = classifier

    def score(self, query: TermSet, raw_query_text: str, entry: KnowledgeEntry) -> ScoredCandidate:
        normalized_query = normalize(raw_query_text) or query.normalized_text
        candidate = self.classifier.classify(entry.question_text)

        # 1. exact question
        if normalized_query and normalized_query == candidate.normalized_text:
            return ScoredCandidate(entry, SCORE_EXACT, MatchReason.EXACT)

        # 2–3. stored keyword phrases
        keyword_score = self._keyword_score(query, normalized_query, entry, candidate)
        if keyword_score:
            return keyword_score

        # 4. critical-term gate
        if (
            query.critical_terms
            and candidate.critical_terms
            and query.critical_terms != candidate.critical_terms
        ):
            return ScoredCandidate(entry, 0.0, MatchReason.CRITICAL_MISMATCH)

        # 5. every meaningful query term appears in the question
        if len(query.meaningful_terms) >= 2 and query.meaningful_terms <= candidate.terms:
            return ScoredCandidate(entry, SCORE_ALL_TERMS, MatchReason.ALL_TERMS_MATCH)

        shared_action = bool(query.action_terms & candidate.action_terms)
        entry_covered = coverage(candidate.subject_terms, query.terms)
        query_covered = coverage(query.subject_terms, candidate.terms)

        if shared_action:
            # 6. the question is (almost) entirely inside the query
            if (
                entry_covered >= REVERSE_FULL_ENTRY_COVERAGE
                and query_covered >= REVERSE_FULL_QUERY_COVERAGE
            ):
                return ScoredCandidate(entry, SCORE_REVERSE_FULL, MatchReason.REVERSE_FULL_MATCH)

            # 7. most of what the query asks about is in the question
            if query_covered >= SUBJECT_ACTION_COVERAGE:
                span = 1.0 - SUBJECT_ACTION_COVERAGE
                bonus = SCORE_SUBJECT_ACTION_BONUS * (query_covered - SUBJECT_ACTION_COVERAGE) / span
                return ScoredCandidate(
                    entry,
                    round(SCORE_SUBJECT_ACTION + bonus, 2),
                    MatchReason.SUBJECT_ACTION_MATCH,
                )

            # 8. the query names the question's subject plus extra words
            if entry_covered >= REVERSE_SUBJECT_ACTION_COVERAGE:
                return ScoredCandidate(
                    entry, SCORE_REVERSE_SUBJECT_ACTION, MatchReason.REVERSE_SUBJECT_ACTION
                )

        # 9. last resort: category name plus one more overlapping term
        category = normalize(entry.category or "")
        if category and category in query.terms:
            others = query.meaningful_terms - {category}
            if others & candidate.terms:
                return ScoredCandidate(entry, SCORE_CATEGORY_TERM, MatchReason.CATEGORY_TERM)

        return ScoredCandidate(entry, 0.0, MatchReason.NONE)

    def _keyword_score(
        self, query: TermSet, normalized_query: str, entry: KnowledgeEntry, candidate: TermSet
    ) -> Optional[ScoredCandidate]:
        phrases = [self.classifier.classify(k) for k in entry.keywords if k]
        phrases = [p for p in phrases if p.normalized_text]

        for phrase in phrases:
            if phrase.normalized_text == normalized_query:
                return ScoredCandidate(entry, SCORE_KEYWORD_EXACT, MatchReason.KEYWORD_PHRASE_EXACT)

        # a semester/ordinal clash with the phrase or the question rules out partial phrase matches
        if _critical_conflict(query.critical_terms, candidate.critical_terms):
            return None

        best = 0.0
        for phrase in phrases:
            if (
                _entity_conflict(query.course, phrase.course)
                or _entity_conflict(query.topic, phrase.topic)
                or _critical_conflict(query.critical_terms, phrase.critical_terms)
            ):
                continue
            if query.meaningful_terms and query.meaningful_terms <= phrase.terms:
                best = max(best, SCORE_KEYWORD_FORWARD)
            elif len(phrase.terms) >= 2 and phrase.terms <= query.terms:
                best = max(best, SCORE_KEYWORD_REVERSE)

        if best:
            return ScoredCandidate(entry, best, MatchReason.KEYWORD_PHRASE_TERMS)
        return None
