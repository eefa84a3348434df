"""
Pydantic схемы для API.

DTOs (Data Transfer Objects) - объекты для передачи данных через HTTP,
отдельно от моделей SQLAlchemy.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

# ============================================================================
# TAG GROUP SCHEMAS
# ============================================================================


class TagGroupCreate(BaseModel):
    """
    Схема для создания группы (POST /tag-groups).

    Пример запроса:
    {
        "name": "Regions"
    }
    """

    name: str = Field(..., min_length=1, max_length=125, description="Название группы")


class TagGroupResponse(BaseModel):
    id: int
    name: str
    slug: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


# ============================================================================
# TAG SCHEMAS
# ============================================================================


class TagCreate(BaseModel):
    """
    Схема для создания тега (POST /tags).

    Пример запроса:
    {
        "name": "Web Development",
        "group": "topics",
        "suggest": true
    }

    Будет создан тег "Web Development" со slug "web-development".
    """

    name: str = Field(..., min_length=1, max_length=125, description="Название тега")
    group: str | None = Field(None, description="Группа тега (slug или название)")
    suggest: bool = Field(False, description="Предлагаемый тег (не удаляется сборщиком)")


class TagTranslationCreate(BaseModel):
    locale: str = Field(..., min_length=2, max_length=10, description="Локаль, например 'de'")
    name: str = Field(..., min_length=1, max_length=125, description="Переведённое название")


class TagTranslationResponse(BaseModel):
    locale: str
    name: str
    slug: str

    model_config = ConfigDict(from_attributes=True)


class TagResponse(BaseModel):
    """
    Схема ответа для тега.

    Пример ответа:
    {
        "id": 1,
        "name": "Travel",
        "slug": "travel",
        "count": 3,
        "suggest": false,
        "tag_group_id": null,
        "translations": [{"locale": "de", "name": "Reisen", "slug": "reisen"}]
    }
    """

    id: int
    name: str
    slug: str
    count: int
    suggest: bool
    tag_group_id: int | None = None
    translations: list[TagTranslationResponse] = []

    model_config = ConfigDict(from_attributes=True)


class TagSuggestUpdate(BaseModel):
    suggest: bool = Field(..., description="Отметить тег как предлагаемый")


class TagGroupAssign(BaseModel):
    group: str = Field(..., min_length=1, description="Группа (slug или название)")


class TagUsageResponse(BaseModel):
    """Тег, используемый сущностями типа (GET /posts/tags/existing)."""

    name: str
    slug: str
    count: int


class CountResponse(BaseModel):
    """
    Результат операций обслуживания.

    Пример:
    {
        "count": 4
    }
    """

    count: int


# ============================================================================
# POST SCHEMAS
# ============================================================================


class PostCreate(BaseModel):
    """
    Схема для создания поста (POST /posts).

    Пример запроса:
    {
        "title": "Weekend in Lisbon",
        "body": "...",
        "tag_names": ["Cooking", "Travel"]
    }
    """

    title: str = Field(..., min_length=1, max_length=300, description="Заголовок")
    body: str | None = Field(None, description="Текст поста")
    tag_names: list[str] | None = Field(None, description="Теги поста")


class PostUpdate(BaseModel):
    """
    Схема для обновления поста (PUT /posts/{id}).

    tag_names: null - не трогать теги, [] - снять все, иначе retag.
    """

    title: str | None = Field(None, min_length=1, max_length=300)
    body: str | None = None
    tag_names: list[str] | None = None


class PostResponse(BaseModel):
    id: int
    title: str
    body: str | None
    tags: list[str] = []
    created_at: datetime
    updated_at: datetime


class TagNamesRequest(BaseModel):
    """
    Схема для tag/retag (POST|PUT /posts/{id}/tags).

    Пример запроса:
    {
        "names": ["Travel", "Food"],
        "group": "topics",
        "use_sorting": true
    }
    """

    names: list[str] = Field(..., description="Названия тегов")
    group: str | None = Field(None, description="Группа для новых тегов (только tag)")
    use_sorting: bool = Field(False, description="Заполнять порядок тегов (только tag)")


# ============================================================================
# COMMON SCHEMAS
# ============================================================================


class ErrorDetail(BaseModel):
    """
    Детали ошибки для конкретного поля.

    Пример:
    {
        "field": "name",
        "message": "String should have at least 1 character"
    }
    """

    field: str = Field(..., description="Название поля с ошибкой")
    message: str = Field(..., description="Описание ошибки")


class ErrorBody(BaseModel):
    """
    Тело ошибки с кодом и деталями.

    Примеры кодов:
    - VALIDATION_ERROR: ошибка валидации полей
    - NOT_FOUND: ресурс не найден
    - ALREADY_EXISTS: ресурс уже существует
    """

    code: str = Field(..., description="Код ошибки (VALIDATION_ERROR, NOT_FOUND, etc.)")
    message: str = Field(..., description="Человекочитаемое сообщение")
    details: list[ErrorDetail] | None = Field(
        default=None, description="Список ошибок по полям (для валидации)"
    )


class ErrorResponse(BaseModel):
    """
    Единый формат ответа для всех ошибок API.

    Пример ошибки "не найдено":
    {
        "error": {
            "code": "NOT_FOUND",
            "message": "TagGroup 'regions' not found",
            "details": null
        }
    }
    """

    error: ErrorBody
