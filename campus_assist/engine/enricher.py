"""
Escalation enrichment: decides whether a generative answer should carry an
illustrative diagram, and shapes whatever the fallback model sends back.

Nothing in here raises past ``escalate``; every provider failure degrades to
a plain-text answer.
"""

import asyncio
import json
from typing import Any, Dict, List, Optional, Protocol, Sequence, Tuple

from loguru import logger

from campus_assist.engine.normalizer import contains_phrase, normalize
from campus_assist.engine.types import (
    EnrichmentDirective,
    EscalationResult,
    Link,
    ParsedFallback,
    Query,
)
from campus_assist.engine.vocabulary import EngineConfig

STRUCTURED_TYPE = "text+image+links"

FALLBACK_MESSAGE = (
    "I don't have exact information for this. Could you please clarify your question?"
)

IMAGE_REQUEST_TEMPLATE = (
    "Generate an educational diagram: {prompt}. Make it clean, professional, "
    "with labeled components suitable for college students."
)


class FallbackProvider(Protocol):
    async def complete(
        self, history: Sequence[Dict[str, Any]], language: str, needs_image: bool
    ) -> Optional[str]:
        ...


class ImageProvider(Protocol):
    async def generate(self, prompt: str) -> Optional[str]:
        ...


def strip_code_fence(raw: str) -> str:
    """Remove a leading ```json / ``` fence and a trailing ``` fence."""
    text = (raw or "").strip()
    if text[:7].lower() == "```json":
        text = text[7:]
    elif text.startswith("```"):
        text = text[3:]
    if text.endswith("```"):
        text = text[:-3]
    return text.strip()


def _coerce_links(value: Any) -> Tuple[Link, ...]:
    if not isinstance(value, list):
        return ()
    links: List[Link] = []
    for item in value:
        if not isinstance(item, dict):
            continue
        url = item.get("url")
        if not isinstance(url, str) or not url.strip():
            continue
        title = item.get("title")
        links.append(Link(title=title if isinstance(title, str) and title.strip() else url, url=url))
    return tuple(links)


class EscalationEnricher:
    def __init__(
        self,
        config: EngineConfig = EngineConfig(),
        fallback: Optional[FallbackProvider] = None,
        image_provider: Optional[ImageProvider] = None,
        fallback_timeout: float = 30.0,
        image_timeout: float = 60.0,
    ):
        self.config = config
        self.fallback = fallback
        self.image_provider = image_provider
        self.fallback_timeout = fallback_timeout
        self.image_timeout = image_timeout

    # ── Directive ────────────────────────────────────────
    def needs_image(self, text: str) -> bool:
        normalized = normalize(text)
        if any(contains_phrase(normalized, t) for t in self.config.no_image_topics):
            return False
        return any(contains_phrase(normalized, t) for t in self.config.image_triggers)

    def image_topic(self, text: str) -> str:
        normalized = normalize(text)
        topic = normalized
        stripped = True
        while stripped and topic:
            stripped = False
            for leader in self.config.image_prompt_leaders:
                if topic == leader or topic.startswith(leader + " "):
                    topic = topic[len(leader):].strip()
                    stripped = True
                    break
        topic = topic.rstrip("?").strip()
        return topic or normalized

    def prepare_escalation(self, query: Query) -> EnrichmentDirective:
        if not self.needs_image(query.raw_text):
            return EnrichmentDirective()
        return EnrichmentDirective(needs_image=True, image_prompt=self.image_topic(query.raw_text))

    # ── Parsing ──────────────────────────────────────────
    def parse_fallback(self, raw: str) -> ParsedFallback:
        raw = raw or ""
        try:
            parsed = json.loads(strip_code_fence(raw))
        except (ValueError, TypeError, RecursionError):
            return ParsedFallback(text=raw)

        if not isinstance(parsed, dict) or parsed.get("type") != STRUCTURED_TYPE:
            return ParsedFallback(text=raw)

        text = parsed.get("text")
        if not isinstance(text, str) or not text.strip():
            text = raw
        prompt = parsed.get("image_prompt")
        prompt = prompt.strip() if isinstance(prompt, str) and prompt.strip() else None

        return ParsedFallback(
            text=text,
            directive=EnrichmentDirective(
                needs_image=prompt is not None,
                image_prompt=prompt,
                links=_coerce_links(parsed.get("links")),
            ),
        )

    # ── Provider calls ───────────────────────────────────
    async def _call_fallback(
        self, history: Sequence[Dict[str, Any]], language: str, needs_image: bool
    ) -> Optional[str]:
        if self.fallback is None:
            logger.warning("No fallback provider configured, using generic reply")
            return None
        try:
            return await asyncio.wait_for(
                self.fallback.complete(history, language, needs_image),
                timeout=self.fallback_timeout,
            )
        except asyncio.TimeoutError:
            logger.warning(f"Fallback provider timed out after {self.fallback_timeout}s")
        except Exception as e:
            logger.error(f"Fallback provider error: {e}")
        return None

    async def _call_image(self, prompt: str) -> Optional[str]:
        if self.image_provider is None:
            return None
        request = IMAGE_REQUEST_TEMPLATE.format(prompt=prompt)
        try:
            url = await asyncio.wait_for(
                self.image_provider.generate(request), timeout=self.image_timeout
            )
        except asyncio.TimeoutError:
            logger.warning(f"Image provider timed out after {self.image_timeout}s")
            return None
        except Exception as e:
            logger.error(f"Image generation error: {e}")
            return None
        return url or None

    async def escalate(
        self,
        query: Query,
        history: Sequence[Dict[str, Any]] = (),
        language: str = "en",
    ) -> EscalationResult:
        directive = self.prepare_escalation(query)
        if not history:
            history = [{"role": "user", "content": query.raw_text}]

        raw = await self._call_fallback(history, language, directive.needs_image)
        if not raw or not raw.strip():
            return EscalationResult(text=FALLBACK_MESSAGE)

        parsed = self.parse_fallback(raw)
        image_url = None
        if parsed.directive.needs_image and parsed.directive.image_prompt:
            logger.info(f"Generating educational image: '{parsed.directive.image_prompt[:60]}'")
            image_url = await self._call_image(parsed.directive.image_prompt)

        return EscalationResult(
            text=parsed.text,
            image_url=image_url,
            links=parsed.directive.links,
            directive=parsed.directive,
        )
