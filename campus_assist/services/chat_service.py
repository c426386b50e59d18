"""
Chat orchestration: knowledge-base match first, generative fallback second.
"""

from typing import Any, Dict, List, Optional, Sequence

from loguru import logger

from campus_assist.config import settings
from campus_assist.engine import (
    Ambiguous,
    ConfidenceResolver,
    Confident,
    EngineConfig,
    EscalationEnricher,
    KnowledgeEntry,
    MatchOutcome,
    Query,
)
from campus_assist.models.schemas import ChatRequest, ChatResponse, LinkSchema
from campus_assist.services.ai_service import OpenAIFallback
from campus_assist.services.image_service import OpenAIImageGenerator

engine_config = EngineConfig.from_settings(settings)
resolver = ConfidenceResolver(engine_config)
enricher = EscalationEnricher(
    engine_config,
    fallback=OpenAIFallback(),
    image_provider=OpenAIImageGenerator(),
    fallback_timeout=settings.FALLBACK_TIMEOUT_SECONDS,
    image_timeout=settings.IMAGE_TIMEOUT_SECONDS,
)


def format_clarification(outcome: Ambiguous) -> str:
    options = "\n".join(
        f"{i}. {c.entry.question_text}" for i, c in enumerate(outcome.candidates, start=1)
    )
    return (
        "I found multiple possible answers. Could you please clarify which one you are asking about?"
        f"\n\n{options}\n\nPlease provide more specific details."
    )


def _history(req: ChatRequest) -> List[Dict[str, Any]]:
    turns = [m.model_dump() for m in req.history]
    turns.append({"role": "user", "content": req.message, "image_url": req.image_url})
    return turns


async def answer(
    req: ChatRequest,
    entries: Sequence[KnowledgeEntry],
    engine_resolver: Optional[ConfidenceResolver] = None,
    engine_enricher: Optional[EscalationEnricher] = None,
) -> ChatResponse:
    engine_resolver = engine_resolver or resolver
    engine_enricher = engine_enricher or enricher

    query = Query(raw_text=req.message, has_image=bool(req.image_url))
    outcome: MatchOutcome = engine_resolver.resolve(query, entries)

    if isinstance(outcome, Confident):
        best = outcome.candidate
        logger.info(f"KB match [{best.reason} {best.score}] '{req.message[:40]}' -> {best.entry.id}")
        return ChatResponse(
            message=best.entry.answer_text,
            source="database",
            outcome=outcome.kind,
            image_url=best.entry.image_url,
            matched_question_id=best.entry.id,
            score=best.score,
            reason=best.reason,
        )

    if isinstance(outcome, Ambiguous):
        logger.info(f"Clarification needed for '{req.message[:40]}' ({len(outcome.candidates)} options)")
        return ChatResponse(
            message=format_clarification(outcome),
            source="database",
            outcome=outcome.kind,
        )

    logger.info(f"Escalating '{req.message[:40]}' to AI ({outcome.reason})")
    result = await engine_enricher.escalate(query, _history(req), req.language)
    return ChatResponse(
        message=result.text,
        source="ai",
        outcome=outcome.kind,
        image_url=result.image_url,
        links=[LinkSchema(title=link.title, url=link.url) for link in result.links],
        reason=outcome.reason,
    )
