"""
Service endpoints: API info, health check and the shared rate limiter.

Эти endpoints живут вне /api/v1 и не требуют X-API-Key.
"""

import time
from datetime import UTC, datetime

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from sqlalchemy import func, select

from ..core.config import settings
from ..core.database import AsyncSessionLocal
from ..core.logging import get_logger
from ..models import Tag

logger = get_logger(__name__)

APP_VERSION = "1.0.0"
RATE_LIMIT = "100/minute"

# Группировка запросов по IP адресу клиента
limiter = Limiter(key_func=get_remote_address)

router = APIRouter()

_started_at = 0.0


def mark_started() -> None:
    global _started_at
    _started_at = time.time()


def uptime_seconds() -> int:
    return int(time.time() - _started_at) if _started_at > 0 else 0


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """Превышение лимита запросов в едином формате ErrorResponse."""
    return JSONResponse(
        status_code=429,
        content={
            "error": {
                "code": "RATE_LIMIT_EXCEEDED",
                "message": f"Слишком много запросов. Лимит: {exc.detail}",
                "details": [{"field": "rate_limit", "message": str(exc.detail)}],
            }
        },
    )


@router.get("/", tags=["root"], summary="Root endpoint", description="Информация о API")
@limiter.limit(RATE_LIMIT)
async def root(request: Request):
    return {
        "name": settings.APP_NAME,
        "version": APP_VERSION,
        "api_version": "v1",
        "docs": "/docs",
        "endpoints": {
            "posts": "/api/v1/posts",
            "tags": "/api/v1/tags",
            "tag_groups": "/api/v1/tag-groups",
        },
        "tagging": {
            "untag_on_delete": settings.TAGGING_UNTAG_ON_DELETE,
            "delete_unused_tags": settings.TAGGING_DELETE_UNUSED_TAGS,
        },
        "rate_limit": RATE_LIMIT,
    }


@router.get(
    "/health", tags=["health"], summary="Health check", description="Проверка работоспособности API"
)
@limiter.limit(RATE_LIMIT)
async def health_check(request: Request):
    """
    Проверяет подключение к БД и доступность реестра тегов.

    Пример ответа (200 OK):
    ```json
    {
        "status": "ok",
        "checks": {"database": "connected", "tags": 42, "version": "1.0.0", "uptime_seconds": 3600},
        "timestamp": "2026-10-18T12:00:00Z"
    }
    ```

    При недоступной БД - 503 и "database": "disconnected".
    """
    checks: dict = {"database": "disconnected", "tags": None}
    try:
        async with AsyncSessionLocal() as session:
            result = await session.execute(select(func.count(Tag.id)))
            checks["tags"] = result.scalar_one()
            checks["database"] = "connected"
    except Exception:
        logger.warning("Health check: database unavailable", exc_info=True)

    checks["version"] = APP_VERSION
    checks["uptime_seconds"] = uptime_seconds()
    healthy = checks["database"] == "connected"

    return JSONResponse(
        status_code=200 if healthy else 503,
        content={
            "status": "ok" if healthy else "error",
            "checks": checks,
            "timestamp": datetime.now(UTC).isoformat(),
        },
    )
