"""
Campus Assist — FastAPI entry point.
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from loguru import logger

from campus_assist.config import settings
from campus_assist.models.database import dispose_db, init_db
from campus_assist.middleware.error_handler import global_exception_handler
from campus_assist.middleware.logging_middleware import logging_middleware

# ── Routes ───────────────────────────────────────────────
from campus_assist.routes.chat import router as chat_router
from campus_assist.routes.knowledge import router as knowledge_router


# ── Lifespan ─────────────────────────────────────────────
@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")
    await init_db()
    yield
    await dispose_db()
    logger.info("Shutting down")


# ── App ──────────────────────────────────────────────────
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="College Q&A assistant: curated knowledge base with AI fallback",
    lifespan=lifespan,
)

# ── Rate Limiter ─────────────────────────────────────────
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[f"{settings.RATE_LIMIT_PER_MINUTE}/minute"],
)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_middleware(SlowAPIMiddleware)

# ── CORS ─────────────────────────────────────────────────
origins = settings.CORS_ORIGINS.split(",") if settings.CORS_ORIGINS != "*" else ["*"]
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ── Custom Middleware ────────────────────────────────────
app.middleware("http")(global_exception_handler)
app.middleware("http")(logging_middleware)

# ── Register Routers ────────────────────────────────────
app.include_router(chat_router)
app.include_router(knowledge_router)


# ── Health Check ─────────────────────────────────────────
@app.get("/api/health", tags=["health"])
async def health():
    return {
        "status": "ok",
        "app": settings.APP_NAME,
        "version": settings.APP_VERSION,
    }


def run():
    import uvicorn
    uvicorn.run(
        "campus_assist.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level="info",
    )


# ── Run ──────────────────────────────────────────────────
if __name__ == "__main__":
    run()
