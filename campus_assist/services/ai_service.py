"""
GPT-powered fallback answers for questions the knowledge base cannot settle.
Returns None (so the caller degrades to a generic reply) if OPENAI_API_KEY is not configured.
"""

import openai
from typing import Any, Dict, List, Optional, Sequence
from loguru import logger

from campus_assist.config import settings

client = None


# ── Key validation ────────────────────────────────────────
def _is_real_api_key(key: str) -> bool:
    """Return True only if the key looks like a genuine OpenAI API key."""
    if not key:
        return False
    # Placeholder keys contain 'your' or are too short / malformed
    if "your" in key.lower():
        return False
    if not key.startswith("sk-"):
        return False
    if len(key) < 30:
        return False
    return True


def _get_client():
    global client
    if client is None:
        if not _is_real_api_key(settings.OPENAI_API_KEY):
            return None
        client = openai.AsyncOpenAI(api_key=settings.OPENAI_API_KEY)
    return client


LANGUAGE_NAMES = {
    "en": "English",
    "ta": "Tamil",
    "hi": "Hindi",
    "te": "Telugu",
    "kn": "Kannada",
    "ml": "Malayalam",
}

SYSTEM_PROMPT = """You are an intelligent AI assistant for a college. You help students and staff with information about:
- Admissions and enrollment procedures
- Course details, syllabus, and curriculum
- Fee structures and payment information
- Exam schedules and academic calendar
- Campus facilities and resources
- Placement and career services
- Hostel and accommodation
- Events and extracurricular activities
- General college policies and guidelines

IMPORTANT INSTRUCTIONS:
1. Always respond in {language} language
2. Be helpful, friendly, and professional
3. If you don't know something specific to this college, provide general guidance and suggest contacting the relevant department
4. When analyzing images (notices, timetables, circulars), extract and explain the key information
5. Keep responses concise but informative

If the user asks to change the language, acknowledge the change and respond in the new language from then on."""

STRUCTURED_INSTRUCTION = """SPECIAL INSTRUCTION FOR THIS RESPONSE:
The user is asking for an explanation or visualization. You MUST respond with a JSON object in this exact format:
{{
  "type": "text+image+links",
  "text": "<your detailed explanation in {language}>",
  "image_prompt": "<detailed English prompt for an educational diagram that helps explain the concept: clean background, labeled components, college-level clarity>",
  "links": [
    {{"title": "<resource name>", "url": "<valid educational URL>"}},
    {{"title": "<resource name>", "url": "<valid educational URL>"}}
  ]
}}

For links: provide 2-3 trusted educational resources (official docs, Wikipedia, educational sites). Avoid ads, affiliate links, or random forums.

RESPOND ONLY WITH THE JSON OBJECT, NO OTHER TEXT."""


def build_system_prompt(language: str, needs_image: bool) -> str:
    language_name = LANGUAGE_NAMES.get(language, "English")
    prompt = SYSTEM_PROMPT.format(language=language_name)
    if needs_image:
        prompt += "\n\n" + STRUCTURED_INSTRUCTION.format(language=language_name)
    return prompt


def format_history(history: Sequence[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Turn stored chat turns into OpenAI messages; image turns become multi-part content."""
    formatted = []
    for msg in history:
        role = msg.get("role", "user")
        content = msg.get("content") or ""
        image_url = msg.get("image_url")
        if role == "user" and image_url:
            formatted.append({
                "role": "user",
                "content": [
                    {"type": "text", "text": content or "Please analyze this image."},
                    {"type": "image_url", "image_url": {"url": image_url}},
                ],
            })
        else:
            formatted.append({"role": role, "content": content})
    return formatted


class OpenAIFallback:
    """Fallback provider backed by the chat completions API."""

    async def complete(
        self,
        history: Sequence[Dict[str, Any]],
        language: str = "en",
        needs_image: bool = False,
    ) -> Optional[str]:
        ai_client = _get_client()
        if ai_client is None:
            logger.warning("OPENAI_API_KEY not set — generative fallback disabled")
            return None

        messages = [{"role": "system", "content": build_system_prompt(language, needs_image)}]
        messages += format_history(history[-20:])

        response = await ai_client.chat.completions.create(
            model=settings.OPENAI_MODEL, messages=messages, temperature=0.7, max_tokens=2048,
        )
        content = response.choices[0].message.content
        return content.strip() if content else None
