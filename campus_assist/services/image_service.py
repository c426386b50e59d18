"""
Educational diagram generation using the OpenAI images API.
"""

from typing import Optional
from loguru import logger

from campus_assist.config import settings
from campus_assist.services.ai_service import _get_client


class OpenAIImageGenerator:
    """Image provider: returns a resolvable image URL, or None."""

    async def generate(self, prompt: str) -> Optional[str]:
        ai_client = _get_client()
        if ai_client is None:
            logger.warning("OPENAI_API_KEY not set — image generation disabled")
            return None

        response = await ai_client.images.generate(
            model=settings.OPENAI_IMAGE_MODEL, prompt=prompt, n=1, size="1024x1024",
        )
        if not response.data:
            return None
        url = response.data[0].url
        if url:
            logger.info("Educational image generated successfully")
        return url
