"""Post service: the sample taggable entity wired to the tagging lifecycle."""

from sqlalchemy.ext.asyncio import AsyncSession

from ..core.config import TaggingConfig
from ..core.exceptions import NotFoundError, ValidationError
from ..models import Post
from ..repositories import EntityRepository
from .tagging import TaggingService, TagNames


class PostService:
    """
    Сервис постов.

    Показывает, как слой сохранения сущности вызывает хуки тегов явно:
    - after_save(post, tag_names) после создания/обновления
    - before_delete(post) перед удалением

    Никаких ORM-событий: порядок вызовов виден прямо в коде.
    """

    def __init__(self, db: AsyncSession, config: TaggingConfig | None = None):
        self.db = db
        self.post_repo = EntityRepository(Post, db)
        self.tagging = TaggingService(db, config)

    async def create_post(
        self, title: str, body: str | None = None, tag_names: TagNames = None
    ) -> Post:
        """
        Создать пост и (опционально) сразу протегировать.

        Raises:
            ValidationError: Пустой заголовок
        """
        if not title or not title.strip():
            raise ValidationError("Post title cannot be empty")

        post = await self.post_repo.create(Post(title=title.strip(), body=body))
        await self.tagging.after_save(post, tag_names)
        return post

    async def get_post(self, post_id: int) -> Post:
        post = await self.post_repo.get_by_id(post_id)
        if not post:
            raise NotFoundError("Post", post_id)
        return post

    async def update_post(
        self,
        post_id: int,
        title: str | None = None,
        body: str | None = None,
        tag_names: TagNames = None,
    ) -> Post:
        """
        Обновить пост.

        tag_names: None - теги не трогаем, [] - снять все, иначе retag.
        """
        post = await self.get_post(post_id)

        if title is not None:
            if not title.strip():
                raise ValidationError("Post title cannot be empty")
            post.title = title.strip()
        if body is not None:
            post.body = body

        await self.db.flush()
        await self.tagging.after_save(post, tag_names)
        return post

    async def delete_post(self, post_id: int) -> None:
        """Удалить пост; теги снимаются до DELETE, если включён untag_on_delete."""
        post = await self.get_post(post_id)
        await self.tagging.before_delete(post)
        await self.post_repo.remove(post)

    async def list_posts(
        self,
        all_tags: TagNames = None,
        any_tags: TagNames = None,
        without: TagNames = None,
        skip: int = 0,
        limit: int = 100,
    ) -> list[Post]:
        """
        Список постов с фильтрами по тегам (все фильтры через AND).

        Пример:
            await service.list_posts(all_tags=["python", "async"], without="draft")
        """
        query = self.post_repo.query()
        if all_tags:
            query = self.tagging.with_all_tags(query, Post, all_tags)
        if any_tags:
            query = self.tagging.with_any_tag(query, Post, any_tags)
        if without:
            query = self.tagging.without_tags(query, Post, without)
        return await self.post_repo.fetch(query, skip=skip, limit=limit)
