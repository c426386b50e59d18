"""
Text chat endpoint: knowledge base answer, clarification, or AI fallback.
"""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from campus_assist.models.database import get_db
from campus_assist.models.schemas import ChatRequest, ChatResponse
from campus_assist.services import chat_service
from campus_assist.services.knowledge_service import load_snapshot

router = APIRouter(prefix="/api/chat", tags=["chat"])


@router.post("/ask", response_model=ChatResponse)
async def ask(req: ChatRequest, db: AsyncSession = Depends(get_db)):
    """
    Send a question, get an answer from the knowledge base or the AI fallback.
    A message with an image_url always goes to the AI.
    """
    if not req.message.strip() and not req.image_url:
        raise HTTPException(status_code=400, detail="Message or image is required")

    entries = await load_snapshot(db)
    return await chat_service.answer(req, entries)
