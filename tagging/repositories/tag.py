"""Tag repository with specific queries."""

from sqlalchemy import delete, exists, func, or_, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.logging import get_logger
from ..models import Tag, TagGroup, Tagged, TagTranslation
from .base import BaseRepository

logger = get_logger(__name__)


class TagRepository(BaseRepository[Tag]):
    """
    Репозиторий для работы с тегами.

    Здесь живут:
    - поиск по slug (включая slug переводов)
    - get_or_create с обработкой гонки на уникальном slug
    - атомарные инкремент/декремент счётчика count
    - выборки "предложенных" тегов, тегов группы, неиспользуемых тегов
    """

    def __init__(self, db: AsyncSession, tagged_model: type = Tagged):
        super().__init__(Tag, db)
        self.tagged_model = tagged_model

    async def get_by_slug(self, slug: str) -> Tag | None:
        """
        Получить тег по slug.

        Если тега с таким slug нет, ищем среди переводов:
        "reisen" (de) найдёт тег "travel".

        SQL эквивалент:
            SELECT * FROM tags WHERE slug = {slug};
            -- если не найдено:
            SELECT tags.* FROM tags
            JOIN tag_translations ON tag_translations.tag_id = tags.id
            WHERE tag_translations.slug = {slug}
            LIMIT 1;
        """
        result = await self.db.execute(select(Tag).where(Tag.slug == slug))
        tag = result.scalar_one_or_none()
        if tag is not None:
            return tag

        result = await self.db.execute(
            select(Tag)
            .join(TagTranslation, TagTranslation.tag_id == Tag.id)
            .where(TagTranslation.slug == slug)
            .order_by(Tag.id)
            .limit(1)
        )
        return result.scalars().first()

    async def get_by_slugs(self, slugs: list[str]) -> list[Tag]:
        """Получить теги по списку slug (только канонические slug)."""
        if not slugs:
            return []
        result = await self.db.execute(select(Tag).where(Tag.slug.in_(slugs)))
        return list(result.scalars().all())

    async def get_by_ids(self, ids: list[int]) -> list[Tag]:
        if not ids:
            return []
        result = await self.db.execute(select(Tag).where(Tag.id.in_(ids)).order_by(Tag.id))
        return list(result.scalars().all())

    async def get_or_create(self, name: str, slug: str, group: TagGroup | None = None) -> Tag:
        """
        Получить тег по slug или создать, если не существует.

        Классическая гонка check-then-act: два запроса одновременно не находят
        тег и оба пытаются его вставить. Уникальный индекс на tags.slug
        отклоняет второй INSERT; мы откатываем SAVEPOINT и перечитываем тег,
        созданный "соседом". Остальные ошибки БД пробрасываются как есть.

        Args:
            name: Отображаемое имя (уже отформатированное)
            slug: Нормализованный slug
            group: Группа для нового тега (если тег уже есть - не меняется)
        """
        tag = await self.get_by_slug(slug)
        if tag is not None:
            return tag

        tag = Tag(
            name=name,
            slug=slug,
            count=0,
            suggest=False,
            tag_group_id=group.id if group is not None else None,
            translations=[],
        )
        try:
            async with self.db.begin_nested():
                self.db.add(tag)
                await self.db.flush()
        except IntegrityError:
            logger.info("Tag created concurrently, re-fetching", extra={"slug": slug})
            tag = await self.get_by_slug(slug)
            if tag is None:
                # Нарушено другое ограничение, не уникальность slug
                raise
            return tag

        logger.info("Tag created", extra={"tag_id": tag.id, "slug": slug})
        return tag

    async def increment_count(self, tag_id: int, amount: int = 1) -> None:
        """
        Атомарно увеличить счётчик использования тега.

        SQL эквивалент:
            UPDATE tags SET count = count + {amount} WHERE id = {tag_id};

        Выполняется в транзакции вызывающего кода вместе со вставкой Tagged,
        блокировку строки обеспечивает БД.
        """
        await self.db.execute(
            update(Tag)
            .where(Tag.id == tag_id)
            .values(count=Tag.count + amount)
            .execution_options(synchronize_session="fetch")
        )

    async def decrement_count(self, tag_id: int, amount: int = 1) -> None:
        """
        Атомарно уменьшить счётчик (не ниже нуля).

        SQL эквивалент:
            UPDATE tags SET count = count - {amount}
            WHERE id = {tag_id} AND count >= {amount};
            -- строка не обновилась: счётчик разошёлся с tagged
            UPDATE tags SET count = 0 WHERE id = {tag_id};

        Второй UPDATE логируется как warning, починить счётчики - recount().
        """
        if amount <= 0:
            return
        result = await self.db.execute(
            update(Tag)
            .where(Tag.id == tag_id, Tag.count >= amount)
            .values(count=Tag.count - amount)
            .returning(Tag.id)
            .execution_options(synchronize_session="fetch")
        )
        if result.scalar_one_or_none() is not None:
            return

        result = await self.db.execute(
            update(Tag)
            .where(Tag.id == tag_id)
            .values(count=0)
            .returning(Tag.id)
            .execution_options(synchronize_session="fetch")
        )
        if result.scalar_one_or_none() is not None:
            logger.warning(
                "Tag counter drift: clamped to zero", extra={"tag_id": tag_id, "amount": amount}
            )

    def _has_tagged(self):
        return exists().where(self.tagged_model.tag_id == Tag.id)

    async def get_unused(self) -> list[Tag]:
        """
        Теги без единой связи Tagged и без флага suggest.

        SQL эквивалент:
            SELECT * FROM tags
            WHERE suggest = false
              AND NOT EXISTS (SELECT 1 FROM tagged WHERE tagged.tag_id = tags.id);
        """
        result = await self.db.execute(
            select(Tag).where(Tag.suggest.is_(False), ~self._has_tagged()).order_by(Tag.slug)
        )
        return list(result.scalars().all())

    async def delete_unused(self) -> int:
        """
        Удалить неиспользуемые теги (suggest=True не трогаем).

        Решение и удаление - один оператор: NOT EXISTS проверяется внутри
        DELETE. Тег, получивший связь Tagged после выборки get_unused(),
        остаётся (иначе каскад удалил бы и саму связь).

        SQL эквивалент:
            DELETE FROM tags
            WHERE suggest = false
              AND NOT EXISTS (SELECT 1 FROM tagged WHERE tagged.tag_id = tags.id)
            RETURNING id;

        Returns:
            Количество удалённых тегов
        """
        result = await self.db.execute(
            delete(Tag)
            .where(Tag.suggest.is_(False), ~self._has_tagged())
            .returning(Tag.id)
            .execution_options(synchronize_session="fetch")
        )
        deleted_ids = list(result.scalars().all())
        if deleted_ids:
            logger.info("Unused tags deleted", extra={"tag_ids": deleted_ids})
        return len(deleted_ids)

    async def get_suggested(self) -> list[Tag]:
        """Теги, отмеченные как предлагаемые (suggest = true)."""
        result = await self.db.execute(
            select(Tag).where(Tag.suggest.is_(True)).order_by(Tag.slug)
        )
        return list(result.scalars().all())

    async def in_group(self, group_slug: str) -> list[Tag]:
        """
        Теги группы.

        SQL эквивалент:
            SELECT tags.* FROM tags
            JOIN tag_groups ON tag_groups.id = tags.tag_group_id
            WHERE tag_groups.slug = {group_slug};
        """
        result = await self.db.execute(
            select(Tag)
            .join(TagGroup, TagGroup.id == Tag.tag_group_id)
            .where(TagGroup.slug == group_slug)
            .order_by(Tag.slug)
        )
        return list(result.scalars().all())

    async def not_tagged_to(self, taggable_type: str, taggable_id: int) -> list[Tag]:
        """
        Теги, которых у сущности ещё нет (например, для подсказок в UI).

        SQL эквивалент:
            SELECT * FROM tags
            WHERE NOT EXISTS (
                SELECT 1 FROM tagged
                WHERE tagged.tag_id = tags.id
                  AND taggable_type = {type} AND taggable_id = {id}
            );
        """
        tagged = self.tagged_model
        result = await self.db.execute(
            select(Tag)
            .where(
                ~exists().where(
                    tagged.tag_id == Tag.id,
                    tagged.taggable_type == taggable_type,
                    tagged.taggable_id == taggable_id,
                )
            )
            .order_by(Tag.slug)
        )
        return list(result.scalars().all())

    async def search(self, term: str) -> list[Tag]:
        """Поиск тегов по имени или slug (регистронезависимый)."""
        pattern = f"%{term}%"
        result = await self.db.execute(
            select(Tag).where(or_(Tag.name.ilike(pattern), Tag.slug.ilike(pattern))).order_by(Tag.slug)
        )
        return list(result.scalars().all())

    async def recount(self) -> int:
        """
        Пересчитать count всех тегов по фактическим строкам Tagged.

        Инструмент починки на случай дрейфа счётчиков (например, после
        ручных правок в БД). Возвращает количество исправленных тегов.
        """
        tagged = self.tagged_model
        live = func.count(tagged.id)
        result = await self.db.execute(
            select(Tag.id, live)
            .outerjoin(tagged, tagged.tag_id == Tag.id)
            .group_by(Tag.id, Tag.count)
            .having(live != Tag.count)
        )
        drifted = result.all()

        for tag_id, actual in drifted:
            await self.db.execute(
                update(Tag)
                .where(Tag.id == tag_id)
                .values(count=actual)
                .execution_options(synchronize_session="fetch")
            )

        if drifted:
            logger.warning("Tag counters corrected", extra={"tag_ids": [row[0] for row in drifted]})
        return len(drifted)
