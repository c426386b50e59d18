"""
Admin API-key check for knowledge base management endpoints.
"""

import secrets
from typing import Optional
from fastapi import Header, HTTPException, status
from loguru import logger

from campus_assist.config import settings


async def require_admin(x_admin_key: Optional[str] = Header(default=None)) -> str:
    if not settings.ADMIN_API_KEY:
        logger.warning("ADMIN_API_KEY not set — knowledge management disabled")
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin access is not configured")
    if not x_admin_key or not secrets.compare_digest(x_admin_key, settings.ADMIN_API_KEY):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin privileges required")
    return x_admin_key
