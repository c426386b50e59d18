"""
Term classification: tokenizes normalized text and tags terms against the
engine dictionaries.
"""

from typing import Iterable, Optional

from campus_assist.engine.normalizer import contains_phrase, normalize
from campus_assist.engine.types import TermSet
from campus_assist.engine.vocabulary import EngineConfig


def _first_phrase(normalized_text: str, phrases: Iterable[str]) -> Optional[str]:
    for phrase in phrases:
        if contains_phrase(normalized_text, phrase):
            return phrase
    return None


class TermClassifier:
    def __init__(self, config: EngineConfig = EngineConfig()):
        self.config = config

    def tokenize(self, text: str) -> list:
        normalized = normalize(text)
        return [t for t in normalized.split(" ") if len(t) > self.config.min_term_length]

    def classify(self, text: str) -> TermSet:
        cfg = self.config
        normalized = normalize(text)
        terms = frozenset(self.tokenize(normalized))
        meaningful = terms - cfg.filler_words
        action = terms & cfg.action_words

        return TermSet(
            normalized_text=normalized,
            terms=terms,
            meaningful_terms=meaningful,
            action_terms=action,
            subject_terms=meaningful - action,
            critical_terms=terms & cfg.critical_words,
            course=_first_phrase(normalized, cfg.known_courses),
            topic=_first_phrase(normalized, cfg.known_topics),
        )

    def is_vague(self, terms: TermSet, limit: int) -> bool:
        """Only a handful of meaningful terms, all of them generic campus words."""
        meaningful = terms.meaningful_terms
        return len(meaningful) <= limit and all(
            t in self.config.single_common_words for t in meaningful
        )
