"""
Knowledge base store: ingestion and per-request snapshots for the matcher.
"""

from typing import List, Sequence, Tuple
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from loguru import logger

from campus_assist.engine import KnowledgeEntry
from campus_assist.models.entities import KnowledgeQuestion
from campus_assist.models.schemas import KnowledgeIngestItem


def to_entry(row: KnowledgeQuestion) -> KnowledgeEntry:
    return KnowledgeEntry(
        id=row.id,
        question_text=row.question_en,
        answer_text=row.answer_en,
        category=row.category,
        image_url=row.image_url,
        keywords=tuple(k for k in (row.keywords or []) if isinstance(k, str)),
    )


async def load_snapshot(db: AsyncSession) -> Tuple[KnowledgeEntry, ...]:
    """Read every question once; the whole scoring pass uses this tuple."""
    result = await db.execute(select(KnowledgeQuestion).order_by(KnowledgeQuestion.created_at))
    return tuple(to_entry(row) for row in result.scalars().all())


async def list_questions(db: AsyncSession) -> List[KnowledgeQuestion]:
    result = await db.execute(select(KnowledgeQuestion).order_by(KnowledgeQuestion.created_at))
    return list(result.scalars().all())


async def ingest_questions(db: AsyncSession, items: Sequence[KnowledgeIngestItem]) -> int:
    """Add question/answer entries to the knowledge base."""
    rows = [
        KnowledgeQuestion(
            question_en=item.question_en.strip(),
            answer_en=item.answer_en.strip(),
            category=(item.category or "general").strip().lower(),
            image_url=item.image_url,
            keywords=[k.strip().lower() for k in item.keywords if k and k.strip()],
        )
        for item in items
    ]
    db.add_all(rows)
    await db.flush()

    logger.info(f"Ingested {len(rows)} knowledge entries")
    return len(rows)
