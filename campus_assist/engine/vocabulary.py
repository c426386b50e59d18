"""
Static dictionaries and tunables for the matching engine.

Everything here is immutable; engine objects receive an ``EngineConfig``
at construction instead of reading module state.
"""

from dataclasses import dataclass
from typing import FrozenSet, Tuple

# ── Term dictionaries ────────────────────────────────────
FILLER_WORDS = frozenset({
    "what", "is", "are", "was", "the", "of", "for", "a", "an", "in", "to",
    "and", "or", "how", "much", "many", "show", "me", "tell", "please", "can",
    "you", "about", "explain", "give", "details", "detail", "year", "sem",
    "do", "does", "i", "my", "we", "our", "it", "its", "this", "that", "on",
    "at", "by", "with", "from", "be", "will", "which", "when", "where", "who",
    "there", "any", "get", "know", "need", "want", "all",
})

ACTION_WORDS = frozenset({
    "fee", "fees", "cost", "costs", "price", "admission", "admissions",
    "exam", "exams", "examination", "schedule", "timetable", "timing",
    "timings", "contact", "phone", "email", "address", "hostel", "placement",
    "placements", "syllabus", "eligibility", "eligible", "documents",
    "apply", "application", "registration", "register", "result", "results",
    "deadline", "dates", "date", "scholarship", "scholarships", "seats",
    "intake", "duration", "refund", "transport", "bus", "library",
    "holiday", "holidays", "calendar", "uniform", "attendance", "canteen",
    "location", "office", "hours", "procedure", "form", "forms",
})

CRITICAL_WORDS = frozenset({
    "1st", "2nd", "3rd", "4th", "5th", "6th",
    "first", "second", "third", "fourth", "fifth", "sixth",
    "i", "ii", "iii", "iv", "v", "vi",
    "semester",
})

SINGLE_COMMON_WORDS = frozenset({
    "fee", "fees", "exam", "exams", "result", "results", "admission",
    "admissions", "course", "courses", "hostel", "library", "class",
    "student", "teacher", "college", "university", "department",
})

# Ordered longest-first so the most specific phrase wins.
KNOWN_COURSES: Tuple[str, ...] = (
    "bachelor of computer applications",
    "master of computer applications",
    "bachelor of business administration",
    "master of business administration",
    "computer science",
    "commerce",
    "btech",
    "mtech",
    "bcom",
    "mcom",
    "bsc",
    "msc",
    "bca",
    "mca",
    "bba",
    "mba",
    "ba",
    "ma",
)

KNOWN_TOPICS: Tuple[str, ...] = (
    "academic calendar",
    "admission process",
    "exam schedule",
    "fee structure",
    "placement cell",
    "scholarship",
    "transport",
    "hostel",
    "library",
    "sports",
    "canteen",
)

# ── Escalation dictionaries ──────────────────────────────
IMAGE_TRIGGERS: Tuple[str, ...] = (
    "explain", "explanation", "diagram", "flow", "process", "architecture",
    "example", "show me", "draw", "image", "illustrate", "visualize",
    "how does", "how it works", "structure", "flowchart", "chart",
    "demonstrate", "depict", "represent", "layout", "design", "model",
)

NO_IMAGE_TOPICS: Tuple[str, ...] = (
    "fee", "fees", "fee structure", "phone", "contact", "address", "email",
    "timing", "timings", "hours", "date", "deadline", "cost", "price",
    "number", "location", "directions", "office", "registration number",
)

# Multi-word phrases first; stripped repeatedly from the front of a query.
IMAGE_PROMPT_LEADERS: Tuple[str, ...] = (
    "tell me about", "can you", "could you", "show me", "what is", "what are",
    "how does", "how do", "explain", "describe", "please", "draw", "what",
    "how",
)


@dataclass(frozen=True)
class EngineConfig:
    filler_words: FrozenSet[str] = FILLER_WORDS
    action_words: FrozenSet[str] = ACTION_WORDS
    critical_words: FrozenSet[str] = CRITICAL_WORDS
    single_common_words: FrozenSet[str] = SINGLE_COMMON_WORDS
    known_courses: Tuple[str, ...] = KNOWN_COURSES
    known_topics: Tuple[str, ...] = KNOWN_TOPICS
    image_triggers: Tuple[str, ...] = IMAGE_TRIGGERS
    no_image_topics: Tuple[str, ...] = NO_IMAGE_TOPICS
    image_prompt_leaders: Tuple[str, ...] = IMAGE_PROMPT_LEADERS

    min_term_length: int = 1
    confidence_threshold: float = 70.0
    vague_confidence_threshold: float = 85.0
    vague_skip_limit: int = 1
    vague_term_limit: int = 2
    ambiguity_margin: float = 10.0
    ambiguity_ceiling: float = 90.0
    max_ambiguous_options: int = 3

    @classmethod
    def from_settings(cls, settings) -> "EngineConfig":
        return cls(
            min_term_length=settings.MIN_TERM_LENGTH,
            confidence_threshold=settings.CONFIDENCE_THRESHOLD,
            vague_confidence_threshold=settings.VAGUE_CONFIDENCE_THRESHOLD,
            ambiguity_margin=settings.AMBIGUITY_MARGIN,
            ambiguity_ceiling=settings.AMBIGUITY_CEILING,
            max_ambiguous_options=settings.MAX_AMBIGUOUS_OPTIONS,
        )
