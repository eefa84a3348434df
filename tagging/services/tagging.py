"""Tagging service: tag / untag / retag entities and filter them by tags."""

from typing import Any, NamedTuple

from blinker import Signal
from sqlalchemy import Select
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.config import TaggingConfig
from ..core.exceptions import NotFoundError, ValidationError
from ..core.logging import get_logger
from ..core.signals import tag_added, tag_removed
from ..core.text import make_tag_list
from ..models import HasTags, Tag, TagGroup, Tagged, taggable_type_of
from ..repositories import TagGroupRepository, TaggedRepository, TagRepository

logger = get_logger(__name__)

TagNames = str | list[str] | tuple[str, ...] | None


class TagUsage(NamedTuple):
    """Tag in use by an entity type (row of existing_tags())."""

    name: str
    slug: str
    count: int


class TaggingService:
    """
    Сервис тегов для любых сущностей с capability HasTags.

    Все зависимости передаются явно: сессия БД, конфигурация
    (нормализатор, форматтер имён, флаги) и сигналы.

    Бизнес-правила:
    1. Теги сравниваются по slug, а не по исходной строке
    2. Повторное тегирование - no-op (ни дубликата, ни лишнего инкремента)
    3. Tag.count меняется в той же транзакции, что и строки Tagged
    4. Пустые названия в батче молча пропускаются

    Пример:
        service = TaggingService(db, TaggingConfig.from_settings())
        await service.tag(post, "Cooking, Travel")
        await service.retag(post, ["Travel", "Food"])
        names = await service.tag_names(post)  # ["Travel", "Food"]
    """

    def __init__(
        self,
        db: AsyncSession,
        config: TaggingConfig | None = None,
        *,
        added_signal: Signal = tag_added,
        removed_signal: Signal = tag_removed,
    ):
        self.db = db
        self.config = config or TaggingConfig.from_settings()
        self.added_signal = added_signal
        self.removed_signal = removed_signal
        self.tag_repo = TagRepository(db, tagged_model=self.config.tagged_model)
        self.group_repo = TagGroupRepository(db)
        self.tagged_repo = TaggedRepository(db, model=self.config.tagged_model)

    # ------------------------------------------------------------------
    # Normalization
    # ------------------------------------------------------------------

    def normalize(self, name: str) -> str:
        return self.config.normalizer(name)

    def display(self, name: str) -> str:
        return self.config.display_formatter(name)

    def _unique_slugs(self, names: TagNames) -> dict[str, str]:
        """slug -> первое встреченное имя; пустые slug отбрасываются."""
        result: dict[str, str] = {}
        for name in make_tag_list(names):
            slug = self.normalize(name)
            if slug and slug not in result:
                result[slug] = name
        return result

    def for_entity(self, entity: HasTags) -> "EntityTags":
        """Вернуть handle с операциями тегов, привязанный к сущности."""
        return EntityTags(self, entity)

    @staticmethod
    def _key(entity: HasTags) -> tuple[str, int]:
        if entity.id is None:
            raise ValidationError(f"{entity!r} must be persisted before tagging")
        return taggable_type_of(entity), entity.id

    async def _resolve_group(self, group_name: str) -> TagGroup:
        group = await self.group_repo.get_by_slug(self.normalize(group_name))
        if group is None:
            raise NotFoundError("TagGroup", group_name)
        return group

    # ------------------------------------------------------------------
    # Read accessors
    # ------------------------------------------------------------------

    async def tagged(self, entity: HasTags, group_name: str | None = None) -> list[Tagged]:
        """Join-строки сущности (по sorting, затем по порядку добавления)."""
        taggable_type, taggable_id = self._key(entity)
        group_slug = self.normalize(group_name) if group_name else None
        return await self.tagged_repo.get_for_entity(taggable_type, taggable_id, group_slug)

    async def tags(self, entity: HasTags, group_name: str | None = None) -> list[Tag]:
        return [row.tag for row in await self.tagged(entity, group_name)]

    async def tag_names(self, entity: HasTags, group_name: str | None = None) -> list[str]:
        return [tag.name for tag in await self.tags(entity, group_name)]

    async def tag_ids(self, entity: HasTags, group_name: str | None = None) -> list[int]:
        return [tag.id for tag in await self.tags(entity, group_name)]

    async def tag_slugs(self, entity: HasTags, group_name: str | None = None) -> list[str]:
        return [tag.slug for tag in await self.tags(entity, group_name)]

    async def tag_names_string(self, entity: HasTags) -> str:
        """Имена тегов через запятую: "Travel, Food"."""
        return ", ".join(await self.tag_names(entity))

    async def has_tag(self, entity: HasTags, tag: Tag) -> bool:
        taggable_type, taggable_id = self._key(entity)
        return await self.tagged_repo.exists_for(taggable_type, taggable_id, tag.id)

    # ------------------------------------------------------------------
    # Tag / untag / retag
    # ------------------------------------------------------------------

    async def tag(
        self,
        entity: HasTags,
        names: TagNames,
        group_name: str | None = None,
        use_sorting: bool = False,
    ) -> list[Tag]:
        """
        Добавить теги сущности.

        Args:
            entity: Тегируемая сущность (должна иметь id)
            names: "a, b" или ["a", "b"]
            group_name: Группа для НОВЫХ тегов (NotFoundError, если нет такой группы)
            use_sorting: Заполнять Tagged.sorting по порядку в батче

        Returns:
            Теги, которые реально были добавлены (без уже имевшихся)
        """
        taggable_type, taggable_id = self._key(entity)
        wanted = self._unique_slugs(names)
        if not wanted:
            return []

        group = await self._resolve_group(group_name) if group_name else None
        sort = await self.tagged_repo.count_for_entity(taggable_type, taggable_id) if use_sorting else None

        added = []
        for slug, name in wanted.items():
            tag = await self.tag_repo.get_or_create(self.display(name), slug, group)
            if await self._attach(entity, tag, sort):
                added.append(tag)
                if sort is not None:
                    sort += 1

        return added

    async def tag_with_ids(
        self, entity: HasTags, ids: int | list[int], use_sorting: bool = False
    ) -> list[Tag]:
        """Добавить теги по id. Несуществующие id игнорируются."""
        taggable_type, taggable_id = self._key(entity)
        if isinstance(ids, int):
            ids = [ids]

        sort = await self.tagged_repo.count_for_entity(taggable_type, taggable_id) if use_sorting else None

        added = []
        for tag in await self.tag_repo.get_by_ids(list(dict.fromkeys(ids))):
            if await self._attach(entity, tag, sort):
                added.append(tag)
                if sort is not None:
                    sort += 1
        return added

    async def _attach(self, entity: HasTags, tag: Tag, sorting: int | None) -> bool:
        taggable_type, taggable_id = self._key(entity)

        if await self.tagged_repo.exists_for(taggable_type, taggable_id, tag.id):
            return False

        row = await self.tagged_repo.add(taggable_type, taggable_id, tag, sorting=sorting)
        if row is None:
            # Связь успел создать параллельный запрос - счётчик он тоже увеличил
            return False

        await self.tag_repo.increment_count(tag.id)
        logger.debug(
            "Tag added",
            extra={"taggable_type": taggable_type, "taggable_id": taggable_id, "slug": tag.slug},
        )
        self.added_signal.send(entity, tag=tag)
        return True

    async def untag(
        self, entity: HasTags, names: TagNames = None, group_name: str | None = None
    ) -> int:
        """
        Снять теги с сущности.

        Args:
            names: None - снять все теги (с учётом group_name)
            group_name: Ограничить снятие тегами группы

        Returns:
            Количество удалённых строк Tagged
        """
        taggable_type, taggable_id = self._key(entity)
        rows = await self.tagged(entity, group_name)

        if names is None:
            tag_ids = list(dict.fromkeys(row.tag_id for row in rows))
        else:
            requested = set()
            for slug in self._unique_slugs(names):
                tag = await self.tag_repo.get_by_slug(slug)
                if tag is not None:
                    requested.add(tag.id)
            tag_ids = list(dict.fromkeys(row.tag_id for row in rows if row.tag_id in requested))

        removed = 0
        for tag_id in tag_ids:
            deleted = await self.tagged_repo.remove(taggable_type, taggable_id, tag_id)
            if not deleted:
                continue
            await self.tag_repo.decrement_count(tag_id, deleted)
            removed += deleted
            logger.debug(
                "Tag removed",
                extra={"taggable_type": taggable_type, "taggable_id": taggable_id, "tag_id": tag_id},
            )
            self.removed_signal.send(entity, tag_id=tag_id)

        if self.config.delete_unused_tags:
            await self.tag_repo.delete_unused()

        return removed

    async def retag(self, entity: HasTags, names: TagNames) -> None:
        """
        Заменить набор тегов сущности.

        Разница считается по slug: снимаются теги, которых нет в names,
        добавляются отсутствующие. Общие теги не трогаются
        (ни событий, ни изменения счётчиков).
        """
        wanted: dict[str, str] = {}
        for slug, name in self._unique_slugs(names).items():
            # Переведённый slug ("reisen") указывает на канонический ("travel")
            existing = await self.tag_repo.get_by_slug(slug)
            wanted.setdefault(existing.slug if existing else slug, name)

        current = await self.tag_slugs(entity)

        to_remove = [slug for slug in current if slug not in wanted]
        to_add = [name for slug, name in wanted.items() if slug not in current]

        if to_remove:
            await self.untag(entity, to_remove)
        if to_add:
            await self.tag(entity, to_add)

    # ------------------------------------------------------------------
    # Lifecycle hooks (вызываются слоем сохранения сущностей)
    # ------------------------------------------------------------------

    def untag_on_delete(self, entity_or_cls: Any) -> bool:
        """Per-type override (__untag_on_delete__) wins over the global config."""
        cls = entity_or_cls if isinstance(entity_or_cls, type) else type(entity_or_cls)
        return getattr(cls, "__untag_on_delete__", self.config.untag_on_delete)

    async def before_delete(self, entity: HasTags) -> None:
        """Вызывать перед удалением сущности."""
        if self.untag_on_delete(entity):
            await self.untag(entity)

    async def after_save(self, entity: HasTags, tag_names: TagNames) -> None:
        """
        Вызывать после сохранения сущности.

        - tag_names is None - теги не трогаем
        - пустое значение ("", []) - снимаем все теги
        - иначе - retag
        """
        if tag_names is None:
            return
        if tag_names:
            await self.retag(entity, tag_names)
        else:
            await self.untag(entity)

    # ------------------------------------------------------------------
    # Query filters
    # ------------------------------------------------------------------

    def _ids_with(self, entity_cls: type, slugs: list[str]) -> Select:
        return self.tagged_repo.taggable_ids_subquery(taggable_type_of(entity_cls), slugs)

    def with_all_tags(self, query: Select, entity_cls: type, names: TagNames) -> Select:
        """
        Сущности, у которых есть ВСЕ перечисленные теги.

        Один фильтр "id IN (подзапрос)" на каждый тег.
        """
        for slug in self._unique_slugs(names):
            query = query.where(entity_cls.id.in_(self._ids_with(entity_cls, [slug])))
        return query

    def with_any_tag(self, query: Select, entity_cls: type, names: TagNames) -> Select:
        """Сущности, у которых есть ХОТЯ БЫ ОДИН из тегов."""
        slugs = list(self._unique_slugs(names))
        return query.where(entity_cls.id.in_(self._ids_with(entity_cls, slugs)))

    def without_tags(self, query: Select, entity_cls: type, names: TagNames) -> Select:
        """Сущности, у которых нет НИ ОДНОГО из тегов."""
        slugs = list(self._unique_slugs(names))
        return query.where(entity_cls.id.not_in(self._ids_with(entity_cls, slugs)))

    # ------------------------------------------------------------------
    # Aggregates
    # ------------------------------------------------------------------

    async def existing_tags(self, entity_cls: type) -> list[TagUsage]:
        """Все теги, используемые сущностями этого типа (по slug)."""
        rows = await self.tagged_repo.existing_tags(taggable_type_of(entity_cls))
        return [TagUsage(*row) for row in rows]

    async def existing_tags_in_groups(self, entity_cls: type, groups: list[str]) -> list[TagUsage]:
        """То же, что existing_tags(), но только для тегов из указанных групп."""
        group_slugs = [self.normalize(group) for group in groups]
        rows = await self.tagged_repo.existing_tags(taggable_type_of(entity_cls), group_slugs)
        return [TagUsage(*row) for row in rows]


class EntityTags:
    """
    Операции тегов, привязанные к одной сущности.

    Реализация capability HasTags через делегирование в TaggingService:
        post_tags = service.for_entity(post)
        await post_tags.tag("Cooking, Travel")
        await post_tags.names()
    """

    def __init__(self, service: TaggingService, entity: HasTags):
        self.service = service
        self.entity = entity

    @property
    def taggable_type(self) -> str:
        return taggable_type_of(self.entity)

    async def tag(self, names: TagNames, group_name: str | None = None, use_sorting: bool = False):
        return await self.service.tag(self.entity, names, group_name, use_sorting)

    async def untag(self, names: TagNames = None, group_name: str | None = None) -> int:
        return await self.service.untag(self.entity, names, group_name)

    async def retag(self, names: TagNames) -> None:
        await self.service.retag(self.entity, names)

    async def names(self, group_name: str | None = None) -> list[str]:
        return await self.service.tag_names(self.entity, group_name)

    async def ids(self, group_name: str | None = None) -> list[int]:
        return await self.service.tag_ids(self.entity, group_name)

    async def slugs(self, group_name: str | None = None) -> list[str]:
        return await self.service.tag_slugs(self.entity, group_name)

    async def has(self, tag: Tag) -> bool:
        return await self.service.has_tag(self.entity, tag)
