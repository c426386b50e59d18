"""
Knowledge base ingestion and listing endpoints.
"""

from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from campus_assist.models.database import get_db
from campus_assist.models.schemas import (
    KnowledgeIngestRequest,
    KnowledgeIngestResponse,
    KnowledgeQuestionResponse,
)
from campus_assist.services.auth_service import require_admin
from campus_assist.services.knowledge_service import ingest_questions, list_questions

router = APIRouter(prefix="/api/knowledge", tags=["knowledge"])


@router.post("/ingest", response_model=KnowledgeIngestResponse)
async def ingest(
    req: KnowledgeIngestRequest,
    admin: str = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    total = await ingest_questions(db, req.entries)
    return KnowledgeIngestResponse(
        status="ok",
        documents_indexed=total,
        message=f"{total} question(s) ingested successfully",
    )


@router.get("/", response_model=List[KnowledgeQuestionResponse])
async def list_all(
    admin: str = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    return await list_questions(db)
