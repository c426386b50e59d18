"""
Pydantic request / response schemas for the API.
"""

from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime


# ── Chat ─────────────────────────────────────────────────
class HistoryMessage(BaseModel):
    role: str = "user"  # user / assistant
    content: str = ""
    image_url: Optional[str] = None


class LinkSchema(BaseModel):
    title: str
    url: str


class ChatRequest(BaseModel):
    message: str = ""
    image_url: Optional[str] = None
    language: str = "en"
    history: List[HistoryMessage] = []


class ChatResponse(BaseModel):
    message: str
    source: str  # database / ai
    outcome: str  # confident / ambiguous / no_match
    image_url: Optional[str] = None
    links: List[LinkSchema] = []
    matched_question_id: Optional[str] = None
    score: Optional[float] = None
    reason: Optional[str] = None


# ── Knowledge Base ───────────────────────────────────────
class KnowledgeIngestItem(BaseModel):
    question_en: str = Field(min_length=1)
    answer_en: str = Field(min_length=1)
    category: Optional[str] = "general"
    image_url: Optional[str] = None
    keywords: List[str] = []


class KnowledgeIngestRequest(BaseModel):
    entries: List[KnowledgeIngestItem] = Field(min_length=1)


class KnowledgeIngestResponse(BaseModel):
    status: str
    documents_indexed: int
    message: str


class KnowledgeQuestionResponse(BaseModel):
    id: str
    question_en: str
    answer_en: str
    category: Optional[str] = None
    image_url: Optional[str] = None
    keywords: List[str] = []
    created_at: datetime

    class Config:
        from_attributes = True
