"""Tagged (join rows) repository."""

from sqlalchemy import Select, delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ..models import Tag, TagGroup, Tagged
from .base import BaseRepository


class TaggedRepository(BaseRepository[Tagged]):
    """
    Репозиторий join-строк "сущность - тег".

    Все запросы ограничены полиморфным разделом:
    WHERE taggable_type = {тип сущности}.

    Класс модели берётся из конфигурации (TaggingConfig.tagged_model),
    поэтому везде используется self.model, а не Tagged напрямую.
    """

    def __init__(self, db: AsyncSession, model: type[Tagged] = Tagged):
        super().__init__(model, db)

    def _for_entity(self, taggable_type: str, taggable_id: int) -> Select:
        return select(self.model).where(
            self.model.taggable_type == taggable_type,
            self.model.taggable_id == taggable_id,
        )

    async def get_for_entity(
        self, taggable_type: str, taggable_id: int, group_slug: str | None = None
    ) -> list[Tagged]:
        """
        Все строки Tagged сущности, по порядку sorting (затем id).

        SQL эквивалент (с группой):
            SELECT tagged.* FROM tagged
            JOIN tags ON tags.id = tagged.tag_id
            JOIN tag_groups ON tag_groups.id = tags.tag_group_id
            WHERE taggable_type = {type} AND taggable_id = {id}
              AND tag_groups.slug = {group_slug}
            ORDER BY sorting NULLS LAST, id;
        """
        query = self._for_entity(taggable_type, taggable_id)
        if group_slug is not None:
            query = (
                query.join(Tag, Tag.id == self.model.tag_id)
                .join(TagGroup, TagGroup.id == Tag.tag_group_id)
                .where(TagGroup.slug == group_slug)
            )
        query = query.order_by(self.model.sorting.asc().nulls_last(), self.model.id)

        result = await self.db.execute(query)
        return list(result.unique().scalars().all())

    async def count_for_entity(self, taggable_type: str, taggable_id: int) -> int:
        result = await self.db.execute(
            select(func.count(self.model.id)).where(
                self.model.taggable_type == taggable_type,
                self.model.taggable_id == taggable_id,
            )
        )
        return result.scalar_one()

    async def exists_for(self, taggable_type: str, taggable_id: int, tag_id: int) -> bool:
        """Есть ли у сущности строка Tagged для данного тега."""
        result = await self.db.execute(
            select(self.model.id)
            .where(
                self.model.taggable_type == taggable_type,
                self.model.taggable_id == taggable_id,
                self.model.tag_id == tag_id,
            )
            .limit(1)
        )
        return result.scalar_one_or_none() is not None

    async def add(
        self, taggable_type: str, taggable_id: int, tag: Tag, sorting: int | None = None
    ) -> Tagged | None:
        """
        Вставить строку Tagged.

        Вставка идёт в SAVEPOINT: если параллельный запрос уже связал
        сущность с этим тегом, уникальный индекс (type, id, tag_id)
        отклонит INSERT, и мы вернём None вместо ошибки.

        Returns:
            Новая строка или None, если связь уже существовала
        """
        row = self.model(
            taggable_type=taggable_type,
            taggable_id=taggable_id,
            tag_id=tag.id,
            tag_slug=tag.slug,
            sorting=sorting,
        )
        try:
            async with self.db.begin_nested():
                self.db.add(row)
                await self.db.flush()
        except IntegrityError:
            if await self.exists_for(taggable_type, taggable_id, tag.id):
                return None
            raise
        return row

    async def remove(self, taggable_type: str, taggable_id: int, tag_id: int) -> int:
        """
        Удалить строки Tagged сущности для тега.

        Returns:
            Количество удалённых строк (на него уменьшается счётчик тега)
        """
        rows = await self.db.execute(
            select(self.model.id).where(
                self.model.taggable_type == taggable_type,
                self.model.taggable_id == taggable_id,
                self.model.tag_id == tag_id,
            )
        )
        ids = list(rows.scalars().all())
        if not ids:
            return 0

        await self.db.execute(
            delete(self.model)
            .where(self.model.id.in_(ids))
            .execution_options(synchronize_session="fetch")
        )
        return len(ids)

    def taggable_ids_subquery(self, taggable_type: str, slugs: list[str]) -> Select:
        """
        Подзапрос id сущностей типа taggable_type, у которых есть любой из slugs.

        SQL эквивалент:
            SELECT taggable_id FROM tagged
            WHERE taggable_type = {type} AND tag_slug IN ({slugs});
        """
        return select(self.model.taggable_id).where(
            self.model.taggable_type == taggable_type,
            self.model.tag_slug.in_(slugs),
        )

    async def existing_tags(
        self, taggable_type: str, group_slugs: list[str] | None = None
    ) -> list[tuple[str, str, int]]:
        """
        Различные теги, используемые сущностями данного типа.

        Returns:
            Список кортежей (name, slug, count), отсортированный по slug

        SQL эквивалент:
            SELECT DISTINCT tags.name, tags.slug, tags.count
            FROM tagged
            JOIN tags ON tags.id = tagged.tag_id
            [JOIN tag_groups ON tag_groups.id = tags.tag_group_id]
            WHERE taggable_type = {type}
              [AND tag_groups.slug IN ({group_slugs})]
            ORDER BY tags.slug;
        """
        query = (
            select(Tag.name, Tag.slug, Tag.count)
            .join(self.model, self.model.tag_id == Tag.id)
            .where(self.model.taggable_type == taggable_type)
        )
        if group_slugs is not None:
            query = query.join(TagGroup, TagGroup.id == Tag.tag_group_id).where(
                TagGroup.slug.in_(group_slugs)
            )
        query = query.distinct().order_by(Tag.slug)

        result = await self.db.execute(query)
        return [(row.name, row.slug, row.count) for row in result.all()]
