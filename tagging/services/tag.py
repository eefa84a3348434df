"""Tag registry service: creation, suggestions, translations, maintenance."""

from sqlalchemy.ext.asyncio import AsyncSession

from ..core.config import TaggingConfig
from ..core.exceptions import NotFoundError, ValidationError
from ..core.logging import get_logger
from ..models import HasTags, Tag, TagTranslation, taggable_type_of
from ..repositories import TagGroupRepository, TagRepository

logger = get_logger(__name__)


class TagService:
    """
    Сервис для работы с реестром тегов.

    Теги создаются здесь явно (админка, импорт) или неявно через
    TaggingService.tag(). Правила нормализации общие - из TaggingConfig.
    """

    def __init__(self, db: AsyncSession, config: TaggingConfig | None = None):
        self.db = db
        self.config = config or TaggingConfig.from_settings()
        self.tag_repo = TagRepository(db, tagged_model=self.config.tagged_model)
        self.group_repo = TagGroupRepository(db)

    async def create_tag(
        self, name: str, group_name: str | None = None, suggest: bool = False
    ) -> Tag:
        """
        Создать тег (или вернуть существующий с тем же slug).

        Raises:
            ValidationError: Пустое название
            NotFoundError: Группа не существует

        Бизнес-правила:
        1. Название обязательно
        2. slug = normalizer(name), уникален
        3. Отображаемое имя = display_formatter(name)
        """
        # 1. ВАЛИДАЦИЯ: Название не пустое
        if not name or not name.strip():
            raise ValidationError("Tag name cannot be empty")

        # 2. НОРМАЛИЗАЦИЯ
        slug = self.config.normalizer(name)
        if not slug:
            raise ValidationError(f"Tag name '{name}' has no usable characters")

        # 3. ГРУППА
        group = None
        if group_name:
            group = await self.group_repo.get_by_slug(self.config.normalizer(group_name))
            if group is None:
                raise NotFoundError("TagGroup", group_name)

        # 4. СОЗДАНИЕ (или существующий тег)
        tag = await self.tag_repo.get_or_create(self.config.display_formatter(name), slug, group)

        if suggest and not tag.suggest:
            tag.suggest = True
            await self.db.flush()

        return tag

    async def get_tag(self, tag_id: int) -> Tag:
        """
        Получить тег по ID.

        Raises:
            NotFoundError: Если тег не найден
        """
        tag = await self.tag_repo.get_by_id(tag_id)
        if not tag:
            raise NotFoundError("Tag", tag_id)
        return tag

    async def get_tag_by_name(self, name: str) -> Tag | None:
        """Найти тег по названию (через slug, с учётом переводов)."""
        return await self.tag_repo.get_by_slug(self.config.normalizer(name))

    async def get_all_tags(self, skip: int = 0, limit: int = 100) -> list[Tag]:
        return await self.tag_repo.get_all(skip=skip, limit=limit)

    async def search_tags(self, query: str) -> list[Tag]:
        if not query or not query.strip():
            return []
        return await self.tag_repo.search(query.strip())

    async def tags_in_group(self, group_name: str) -> list[Tag]:
        return await self.tag_repo.in_group(self.config.normalizer(group_name))

    async def tags_not_on(self, entity: HasTags) -> list[Tag]:
        """Теги реестра, которых у сущности ещё нет."""
        return await self.tag_repo.not_tagged_to(taggable_type_of(entity), entity.id)

    # Suggested tags

    async def set_suggest(self, tag_id: int, suggest: bool = True) -> Tag:
        """
        Отметить тег как предлагаемый (или снять отметку).

        Предлагаемые теги не удаляются сборщиком неиспользуемых тегов.
        """
        tag = await self.get_tag(tag_id)
        tag.suggest = suggest
        await self.db.flush()
        return tag

    async def list_suggested(self) -> list[Tag]:
        return await self.tag_repo.get_suggested()

    # Maintenance

    async def get_unused_tags(self) -> list[Tag]:
        return await self.tag_repo.get_unused()

    async def delete_unused(self) -> int:
        """Удалить теги без связей (кроме suggest). Возвращает количество."""
        return await self.tag_repo.delete_unused()

    async def recount(self) -> int:
        """Пересчитать счётчики по таблице tagged. Возвращает количество исправленных."""
        return await self.tag_repo.recount()

    # Translations

    async def add_translation(self, tag_id: int, locale: str, name: str) -> TagTranslation:
        """
        Добавить (или заменить) перевод тега для локали.

        slug перевода нормализуется тем же нормализатором,
        поэтому tag("Reisen") найдёт тег "Travel", если у него есть
        перевод "de": "Reisen".
        """
        if not name or not name.strip():
            raise ValidationError("Translation name cannot be empty")
        if not locale or not locale.strip():
            raise ValidationError("Locale cannot be empty")

        tag = await self.get_tag(tag_id)
        locale = locale.strip().lower()

        translation = next((t for t in tag.translations if t.locale == locale), None)
        if translation is None:
            translation = TagTranslation(locale=locale)
            tag.translations.append(translation)

        translation.name = self.config.display_formatter(name)
        translation.slug = self.config.normalizer(name)
        await self.db.flush()

        logger.info(
            "Tag translation saved",
            extra={"tag_id": tag.id, "locale": locale, "slug": translation.slug},
        )
        return translation

    @staticmethod
    def translated_name(tag: Tag, locale: str | None) -> str:
        """Имя тега для локали; без перевода - каноническое имя."""
        if locale:
            locale = locale.lower()
            for translation in tag.translations:
                if translation.locale == locale:
                    return translation.name
        return tag.name
