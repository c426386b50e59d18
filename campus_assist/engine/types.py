"""
Immutable records passed between the matching engine stages.
"""

from dataclasses import dataclass, field
from typing import FrozenSet, Optional, Tuple, Union


@dataclass(frozen=True)
class KnowledgeEntry:
    id: str
    question_text: str
    answer_text: str
    category: Optional[str] = None
    image_url: Optional[str] = None
    keywords: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Query:
    raw_text: str
    has_image: bool = False


@dataclass(frozen=True)
class TermSet:
    normalized_text: str
    terms: FrozenSet[str] = frozenset()
    meaningful_terms: FrozenSet[str] = frozenset()
    action_terms: FrozenSet[str] = frozenset()
    subject_terms: FrozenSet[str] = frozenset()
    critical_terms: FrozenSet[str] = frozenset()
    course: Optional[str] = None
    topic: Optional[str] = None

    @property
    def is_explanation_only(self) -> bool:
        """A pure topic: something meaningful was asked, but no action word."""
        return bool(self.meaningful_terms) and not self.action_terms


class MatchReason:
    EXACT = "exact"
    KEYWORD_PHRASE_EXACT = "keyword-phrase-exact"
    KEYWORD_PHRASE_TERMS = "keyword-phrase-terms"
    CRITICAL_MISMATCH = "critical-mismatch"
    ALL_TERMS_MATCH = "all-terms-match"
    REVERSE_FULL_MATCH = "reverse-full-match"
    SUBJECT_ACTION_MATCH = "subject-action-match"
    REVERSE_SUBJECT_ACTION = "reverse-subject-action"
    CATEGORY_TERM = "category-term"
    NONE = "none"


@dataclass(frozen=True)
class ScoredCandidate:
    entry: KnowledgeEntry
    score: float
    reason: str = MatchReason.NONE


# ── Outcomes ─────────────────────────────────────────────
@dataclass(frozen=True)
class Confident:
    candidate: ScoredCandidate
    kind: str = field(default="confident", init=False)


@dataclass(frozen=True)
class Ambiguous:
    candidates: Tuple[ScoredCandidate, ...]
    kind: str = field(default="ambiguous", init=False)


@dataclass(frozen=True)
class NoMatch:
    reason: str = "below-threshold"
    kind: str = field(default="no_match", init=False)


MatchOutcome = Union[Confident, Ambiguous, NoMatch]


# ── Escalation ───────────────────────────────────────────
@dataclass(frozen=True)
class Link:
    title: str
    url: str


@dataclass(frozen=True)
class EnrichmentDirective:
    needs_image: bool = False
    image_prompt: Optional[str] = None
    links: Tuple[Link, ...] = ()


@dataclass(frozen=True)
class ParsedFallback:
    text: str
    directive: EnrichmentDirective = EnrichmentDirective()


@dataclass(frozen=True)
class EscalationResult:
    text: str
    image_url: Optional[str] = None
    links: Tuple[Link, ...] = ()
    directive: EnrichmentDirective = EnrichmentDirective()
