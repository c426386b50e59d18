"""
Confidence resolution: turns per-entry scores into a single outcome.
"""

from typing import Optional, Sequence

from loguru import logger

from campus_assist.engine.classifier import TermClassifier
from campus_assist.engine.scorer import MatchScorer
from campus_assist.engine.types import (
    Ambiguous,
    Confident,
    KnowledgeEntry,
    MatchOutcome,
    NoMatch,
    Query,
    TermSet,
)
from campus_assist.engine.vocabulary import EngineConfig


class ConfidenceResolver:
    def __init__(self, config: EngineConfig = EngineConfig()):
        self.config = config
        self.classifier = TermClassifier(config)
        self.scorer = MatchScorer(self.classifier)

    def guard(self, query: Query, terms: TermSet) -> Optional[NoMatch]:
        """
        Decide whether the knowledge base should be skipped entirely.

        Image-bearing queries, pure topic questions without an action word,
        and queries made only of generic campus words always escalate.
        """
        if query.has_image:
            return NoMatch("image")
        if terms.is_explanation_only:
            return NoMatch("explanation-only")
        if self.classifier.is_vague(terms, self.config.vague_skip_limit):
            return NoMatch("vague")
        return None

    def threshold_for(self, terms: TermSet) -> float:
        if self.classifier.is_vague(terms, self.config.vague_term_limit):
            return self.config.vague_confidence_threshold
        return self.config.confidence_threshold

    def resolve(self, query: Query, entries: Sequence[KnowledgeEntry]) -> MatchOutcome:
        cfg = self.config
        terms = self.classifier.classify(query.raw_text)

        skipped = self.guard(query, terms)
        if skipped is not None:
            logger.debug(f"Skipping knowledge base: {skipped.reason} ('{query.raw_text[:40]}')")
            return skipped

        snapshot = tuple(entries)
        if not snapshot:
            return NoMatch("empty-knowledge-base")

        threshold = self.threshold_for(terms)
        scored = [self.scorer.score(terms, query.raw_text, entry) for entry in snapshot]
        # sorted() is stable, so equal scores keep knowledge-base order
        matches = sorted(
            (c for c in scored if c.score >= threshold),
            key=lambda c: c.score,
            reverse=True,
        )

        if not matches:
            logger.debug(f"No entry reached {threshold} for '{query.raw_text[:40]}'")
            return NoMatch("below-threshold")

        top = matches[0].score
        cluster = [c for c in matches if c.score >= top - cfg.ambiguity_margin]

        if len(cluster) > 1 and top < cfg.ambiguity_ceiling:
            logger.debug(f"Ambiguous: {len(cluster)} entries within {cfg.ambiguity_margin} of {top}")
            return Ambiguous(tuple(cluster[: cfg.max_ambiguous_options]))

        logger.debug(f"Confident: entry={matches[0].entry.id} score={top} reason={matches[0].reason}")
        return Confident(matches[0])
