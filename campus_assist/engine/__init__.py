"""
Hybrid knowledge retrieval & escalation engine.
"""

from campus_assist.engine.classifier import TermClassifier
from campus_assist.engine.enricher import FALLBACK_MESSAGE, EscalationEnricher
from campus_assist.engine.normalizer import normalize
from campus_assist.engine.resolver import ConfidenceResolver
from campus_assist.engine.scorer import MatchScorer
from campus_assist.engine.types import (
    Ambiguous,
    Confident,
    EnrichmentDirective,
    EscalationResult,
    KnowledgeEntry,
    Link,
    MatchOutcome,
    MatchReason,
    NoMatch,
    ParsedFallback,
    Query,
    ScoredCandidate,
    TermSet,
)
from campus_assist.engine.vocabulary import EngineConfig

__all__ = [
    "Ambiguous",
    "ConfidenceResolver",
    "Confident",
    "EngineConfig",
    "EnrichmentDirective",
    "EscalationEnricher",
    "EscalationResult",
    "FALLBACK_MESSAGE",
    "KnowledgeEntry",
    "Link",
    "MatchOutcome",
    "MatchReason",
    "MatchScorer",
    "NoMatch",
    "ParsedFallback",
    "Query",
    "ScoredCandidate",
    "TermClassifier",
    "TermSet",
    "normalize",
]
