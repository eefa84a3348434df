"""
Dependencies для FastAPI endpoints.

Сервисы создаются на каждый запрос с одной и той же сессией БД,
поэтому все изменения запроса (Tagged + счётчики тегов) коммитятся
или откатываются вместе.
"""

from collections.abc import AsyncGenerator

from fastapi import Depends, HTTPException, status
from fastapi.security import APIKeyHeader
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.config import TaggingConfig, settings
from ..core.database import AsyncSessionLocal
from ..services import PostService, TagGroupService, TaggingService, TagService

# ============================================================================
# API KEY AUTHENTICATION
# ============================================================================

api_key_header = APIKeyHeader(
    name="X-API-Key",
    auto_error=False,  # Не выбрасывать ошибку автоматически, мы сами обработаем
    description="API ключ для авторизации. Передавайте в заголовке X-API-Key",
)


async def verify_api_key(api_key: str = Depends(api_key_header)) -> str:
    """
    Dependency для проверки API ключа.

    Пример запроса:
        curl -H "X-API-Key: your-secret-key" http://localhost:8000/api/v1/tags
    """
    if api_key is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="API key is missing. Add header: X-API-Key: your-key",
            headers={"WWW-Authenticate": "ApiKey"},
        )

    if api_key != settings.API_KEY:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid API key",
            headers={"WWW-Authenticate": "ApiKey"},
        )

    return api_key


# ============================================================================
# DATABASE SESSION DEPENDENCY
# ============================================================================


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency для получения сессии БД.

    commit() при успехе, rollback() при ошибке.
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


# ============================================================================
# CONFIG & SERVICE DEPENDENCIES
# ============================================================================


def get_tagging_config() -> TaggingConfig:
    """
    Конфигурация тегов из настроек приложения.

    В тестах переопределяется через app.dependency_overrides.
    """
    return TaggingConfig.from_settings(settings)


async def get_tagging_service(
    db: AsyncSession = Depends(get_db), config: TaggingConfig = Depends(get_tagging_config)
) -> TaggingService:
    return TaggingService(db, config)


async def get_tag_service(
    db: AsyncSession = Depends(get_db), config: TaggingConfig = Depends(get_tagging_config)
) -> TagService:
    return TagService(db, config)


async def get_tag_group_service(
    db: AsyncSession = Depends(get_db), config: TaggingConfig = Depends(get_tagging_config)
) -> TagGroupService:
    return TagGroupService(db, config)


async def get_post_service(
    db: AsyncSession = Depends(get_db), config: TaggingConfig = Depends(get_tagging_config)
) -> PostService:
    return PostService(db, config)
