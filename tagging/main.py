"""
FastAPI application for the tagging service.

Запуск:
    uvicorn tagging.main:app --reload

API документация:
    http://localhost:8000/docs       - Swagger UI
    http://localhost:8000/redoc      - ReDoc
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import APIRouter, Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi.errors import RateLimitExceeded

from .api import posts_router, tag_groups_router, tags_router
from .api.dependencies import verify_api_key
from .api.errors import register_error_handlers
from .api.middleware import RequestLoggingMiddleware
from .api.system import APP_VERSION, limiter, mark_started, rate_limit_exceeded_handler, uptime_seconds
from .api.system import router as system_router
from .core.config import settings
from .core.logging import get_logger, setup_logging

setup_logging(
    log_level=settings.LOG_LEVEL, log_format=settings.LOG_FORMAT, sql_echo=settings.DATABASE_ECHO
)

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    mark_started()
    logger.info(
        "Application started",
        extra={
            "app_name": settings.APP_NAME,
            "version": APP_VERSION,
            "untag_on_delete": settings.TAGGING_UNTAG_ON_DELETE,
            "delete_unused_tags": settings.TAGGING_DELETE_UNUSED_TAGS,
        },
    )

    yield

    logger.info("Application stopped", extra={"uptime_seconds": uptime_seconds()})


app = FastAPI(
    lifespan=lifespan,
    title=settings.APP_NAME,
    description="""
    Сервис тегов для произвольных сущностей.

    ## Возможности

    * **Теги** - общий реестр тегов (slug, счётчик использования, suggest)
    * **Группы** - разделение пространства тегов ("topics", "regions")
    * **Переводы** - локализованные имена тегов
    * **Посты** - пример тегируемой сущности: tag / untag / retag, фильтры all / any / without

    ```
    API Layer (FastAPI) → TaggingService → Repositories (SQLAlchemy)
    ```
    """,
    version=APP_VERSION,
)

app.state.limiter = limiter
# slowapi handler имеет специфичный тип, но работает корректно
app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)  # type: ignore[arg-type]

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # В продакшене указать конкретные домены
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestLoggingMiddleware)

# Все ресурсные роутеры - под /api/v1 и с проверкой X-API-Key
api_v1_router = APIRouter(prefix="/api/v1")
api_v1_router.include_router(posts_router)
api_v1_router.include_router(tags_router)
api_v1_router.include_router(tag_groups_router)

app.include_router(api_v1_router, dependencies=[Depends(verify_api_key)])
app.include_router(system_router)

register_error_handlers(app)
