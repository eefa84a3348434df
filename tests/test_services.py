"""
Тесты для Service Layer (Бизнес-логика).

Проверяем:
- tag / untag / retag и счётчики Tag.count
- Сигналы tag_added / tag_removed
- Хуки жизненного цикла (before_delete / after_save)
- Фильтры with_all_tags / with_any_tag / without_tags
- Группы, переводы, предлагаемые теги, сборку неиспользуемых тегов
"""

import pytest
import pytest_asyncio
from blinker import Signal
from sqlalchemy import select

from tagging.core.config import TaggingConfig
from tagging.core.exceptions import AlreadyExistsError, NotFoundError, ValidationError
from tagging.core.signals import tag_added, tag_removed
from tagging.models import HasTags, Note, Post, Tag, Tagged, taggable_type_of
from tagging.services import EntityTags, PostService, TaggingService, TagUsage


async def count_of(db, slug: str) -> int | None:
    """tags.count прямо из БД (None, если тега нет)."""
    result = await db.execute(select(Tag.count).where(Tag.slug == slug))
    return result.scalar_one_or_none()


async def post_ids(db, query) -> list[int]:
    result = await db.execute(query)
    return [post.id for post in result.scalars().all()]


# ============================================================================
# TAG / UNTAG / RETAG
# ============================================================================


@pytest.mark.asyncio
async def test_tag_retag_scenario(test_db, make_post):
    """Test: tag "Cooking, Travel" -> retag ["Travel", "Food"]."""
    tagging = TaggingService(test_db, TaggingConfig())
    post = await make_post("post1")

    await tagging.tag(post, "Cooking, Travel")
    assert await tagging.tag_names(post) == ["Cooking", "Travel"]

    await tagging.retag(post, ["Travel", "Food"])

    assert await tagging.tag_names(post) == ["Travel", "Food"]
    assert await count_of(test_db, "cooking") == 0
    assert await count_of(test_db, "travel") == 1
    assert await count_of(test_db, "food") == 1


@pytest.mark.asyncio
async def test_tag_retag_scenario_with_gc(test_db, make_post, gc_config):
    """Test: с delete_unused_tags тег cooking удаляется после retag."""
    tagging = TaggingService(test_db, gc_config)
    post = await make_post("post1")

    await tagging.tag(post, "Cooking, Travel")
    await tagging.retag(post, ["Travel", "Food"])

    assert await tagging.tag_names(post) == ["Travel", "Food"]
    assert await count_of(test_db, "cooking") is None
    assert await count_of(test_db, "travel") == 1
    assert await count_of(test_db, "food") == 1


@pytest.mark.asyncio
async def test_tag_is_idempotent(tagging, test_db, make_post):
    """Test: повторное тегирование не создаёт дубликатов и не меняет count."""
    post = await make_post()

    added = await tagging.tag(post, "Travel")
    again = await tagging.tag(post, ["travel", " TRAVEL "])

    assert [t.slug for t in added] == ["travel"]
    assert again == []
    assert await tagging.tag_names(post) == ["Travel"]
    assert await count_of(test_db, "travel") == 1


@pytest.mark.asyncio
async def test_tag_deduplicates_batch(tagging, test_db, make_post):
    """Test: одинаковые slug в одном батче дают одну связь (имя - первое встреченное)."""
    post = await make_post()

    await tagging.tag(post, "web development, Web-Development, WEB_DEVELOPMENT")

    assert await tagging.tag_names(post) == ["Web Development"]
    assert await tagging.tag_slugs(post) == ["web-development"]
    assert await count_of(test_db, "web-development") == 1


@pytest.mark.asyncio
async def test_tag_skips_empty_names(tagging, make_post):
    """Test: пустые и "безбуквенные" названия молча пропускаются."""
    post = await make_post()

    added = await tagging.tag(post, ["", "   ", "!!!", "Food"])

    assert [t.slug for t in added] == ["food"]
    assert await tagging.tag(post, "") == []
    assert await tagging.tag(post, None) == []
    assert await tagging.tag_names(post) == ["Food"]


@pytest.mark.asyncio
async def test_tag_counter_shared_across_entities(tagging, test_db, make_post, make_note):
    """Test: count считает строки Tagged всех типов сущностей."""
    post1 = await make_post("one")
    post2 = await make_post("two")
    note = await make_note()

    await tagging.tag(post1, "Travel")
    await tagging.tag(post2, "Travel")
    await tagging.tag(note, "Travel")
    assert await count_of(test_db, "travel") == 3

    await tagging.untag(post1, "Travel")
    assert await count_of(test_db, "travel") == 2


@pytest.mark.asyncio
async def test_tag_unsaved_entity(tagging):
    """Test: сущность без id тегировать нельзя."""
    with pytest.raises(ValidationError, match="must be persisted"):
        await tagging.tag(Post(title="draft"), "Travel")


@pytest.mark.asyncio
async def test_tag_with_ids(tagging, tag_service, test_db, make_post):
    """Test: тегирование по id, неизвестные id игнорируются."""
    post = await make_post()
    travel = await tag_service.create_tag("Travel")
    food = await tag_service.create_tag("Food")

    added = await tagging.tag_with_ids(post, [food.id, travel.id, food.id, 999])

    assert {t.slug for t in added} == {"travel", "food"}
    assert set(await tagging.tag_ids(post)) == {travel.id, food.id}
    assert await tagging.tag_with_ids(post, travel.id) == []
    assert await count_of(test_db, "travel") == 1


@pytest.mark.asyncio
async def test_tag_use_sorting(tagging, test_db, make_post):
    """Test: use_sorting сохраняет порядок тегов в батче и продолжает его."""
    post = await make_post()

    await tagging.tag(post, "Zebra, Apple", use_sorting=True)
    await tagging.tag(post, "Apple, Mango", use_sorting=True)

    rows = await tagging.tagged(post)
    assert [row.sorting for row in rows] == [0, 1, 2]
    assert await tagging.tag_names(post) == ["Zebra", "Apple", "Mango"]


@pytest.mark.asyncio
async def test_untag_all(tagging, test_db, make_post):
    """Test: untag без названий снимает все теги и уменьшает счётчики."""
    post = await make_post()
    other = await make_post("other")
    await tagging.tag(post, "Cooking, Travel")
    await tagging.tag(other, "Travel")

    removed = await tagging.untag(post)

    assert removed == 2
    assert await tagging.tag_names(post) == []
    assert await count_of(test_db, "cooking") == 0
    assert await count_of(test_db, "travel") == 1
    assert await tagging.tag_names(other) == ["Travel"]


@pytest.mark.asyncio
async def test_untag_by_name(tagging, test_db, make_post):
    """Test: untag по названию (сравнение по slug), неизвестные игнорируются."""
    post = await make_post()
    await tagging.tag(post, "Cooking, Travel")

    assert await tagging.untag(post, "COOKING, Unknown") == 1
    assert await tagging.untag(post, "cooking") == 0
    assert await tagging.tag_names(post) == ["Travel"]
    assert await count_of(test_db, "cooking") == 0


@pytest.mark.asyncio
async def test_untag_with_gc_keeps_suggested_and_used(test_db, tag_service, make_post, gc_config):
    """Test: сборщик не трогает suggest-теги и теги, используемые другими."""
    tagging = TaggingService(test_db, gc_config)
    post = await make_post()
    other = await make_post("other")
    await tag_service.create_tag("Hint", suggest=True)
    await tagging.tag(post, "Hint, Travel, Cooking")
    await tagging.tag(other, "Travel")

    await tagging.untag(post)

    assert await count_of(test_db, "hint") == 0
    assert await count_of(test_db, "travel") == 1
    assert await count_of(test_db, "cooking") is None


@pytest.mark.asyncio
async def test_retag_same_set_is_noop(test_db, make_post):
    """Test: retag тем же набором не шлёт сигналов и не меняет счётчики."""
    added_signal, removed_signal = Signal(), Signal()
    tagging = TaggingService(
        test_db, TaggingConfig(), added_signal=added_signal, removed_signal=removed_signal
    )
    post = await make_post()
    await tagging.tag(post, "Cooking, Travel")

    events = []
    added_signal.connect(lambda sender, **kw: events.append(("added", kw)), weak=False)
    removed_signal.connect(lambda sender, **kw: events.append(("removed", kw)), weak=False)

    await tagging.retag(post, ["travel", "Cooking"])

    assert events == []
    assert await count_of(test_db, "cooking") == 1
    assert await count_of(test_db, "travel") == 1


@pytest.mark.asyncio
async def test_retag_empty_removes_all(tagging, make_post):
    """Test: retag пустым списком снимает все теги."""
    post = await make_post()
    await tagging.tag(post, "Cooking, Travel")

    await tagging.retag(post, [])

    assert await tagging.tag_names(post) == []


@pytest.mark.asyncio
async def test_signals_payload(tagging, make_post):
    """Test: tag_added получает тег, tag_removed - id тега; sender - сущность."""
    post = await make_post()
    received = []

    def on_added(sender, tag):
        received.append(("added", sender, tag.slug))

    def on_removed(sender, tag_id):
        received.append(("removed", sender, tag_id))

    with tag_added.connected_to(on_added), tag_removed.connected_to(on_removed):
        [travel] = await tagging.tag(post, "Travel")
        await tagging.tag(post, "Travel")
        await tagging.untag(post, "Travel")
        await tagging.untag(post, "Travel")

    assert received == [("added", post, "travel"), ("removed", post, travel.id)]


@pytest.mark.asyncio
async def test_entity_tags_handle(tagging, make_post):
    """Test: EntityTags делегирует в TaggingService."""
    post = await make_post()
    handle = tagging.for_entity(post)

    assert isinstance(handle, EntityTags)
    assert handle.taggable_type == "post"

    [travel] = await handle.tag("Travel")
    assert await handle.names() == ["Travel"]
    assert await handle.slugs() == ["travel"]
    assert await handle.ids() == [travel.id]
    assert await handle.has(travel) is True

    await handle.retag("Food")
    assert await handle.names() == ["Food"]
    assert await handle.has(travel) is False

    assert await handle.untag() == 1
    assert await handle.names() == []


@pytest.mark.asyncio
async def test_tag_names_string(tagging, make_post):
    """Test: имена через запятую."""
    post = await make_post()
    await tagging.tag(post, ["Travel", "Food"])

    assert await tagging.tag_names_string(post) == "Travel, Food"


def test_has_tags_capability():
    """Test: capability определяется по __taggable_type__ и id."""
    assert isinstance(Post(title="x"), HasTags)
    assert isinstance(Note(title="x"), HasTags)
    assert not isinstance(object(), HasTags)

    assert taggable_type_of(Post) == "post"
    assert taggable_type_of(Note(title="x")) == "note"
    with pytest.raises(TypeError):
        taggable_type_of(object())


# ============================================================================
# LIFECYCLE HOOKS
# ============================================================================


@pytest.mark.asyncio
async def test_before_delete_untags(post_service, test_db):
    """Test: удаление поста снимает его теги (untag_on_delete=True)."""
    post = await post_service.create_post("Doomed", tag_names=["Travel", "Food"])
    keeper = await post_service.create_post("Keeper", tag_names=["Travel"])

    await post_service.delete_post(post.id)

    rows = await test_db.execute(select(Tagged).where(Tagged.taggable_id == post.id))
    assert rows.scalars().all() == []
    assert await count_of(test_db, "travel") == 1
    assert await count_of(test_db, "food") == 0
    assert await post_service.tagging.tag_names(keeper) == ["Travel"]


@pytest.mark.asyncio
async def test_before_delete_disabled_keeps_rows(test_db):
    """Test: с untag_on_delete=False строки Tagged остаются."""
    service = PostService(test_db, TaggingConfig(untag_on_delete=False))
    post = await service.create_post("Orphaned", tag_names=["Travel"])

    await service.delete_post(post.id)

    rows = await test_db.execute(
        select(Tagged).where(Tagged.taggable_type == "post", Tagged.taggable_id == post.id)
    )
    assert len(rows.scalars().all()) == 1
    assert await count_of(test_db, "travel") == 1


@pytest.mark.asyncio
async def test_before_delete_per_type_override(tagging, test_db, make_note):
    """Test: Note.__untag_on_delete__ = False побеждает глобальную настройку."""
    note = await make_note()
    await tagging.tag(note, "Travel")

    assert tagging.untag_on_delete(Post) is True
    assert tagging.untag_on_delete(note) is False

    await tagging.before_delete(note)
    await test_db.delete(note)
    await test_db.flush()

    rows = await test_db.execute(select(Tagged).where(Tagged.taggable_type == "note"))
    assert len(rows.scalars().all()) == 1
    assert await count_of(test_db, "travel") == 1


@pytest.mark.asyncio
async def test_after_save_semantics(tagging, make_post):
    """Test: after_save - None не трогает теги, [] снимает все, иначе retag."""
    post = await make_post()
    await tagging.tag(post, "Travel")

    await tagging.after_save(post, None)
    assert await tagging.tag_names(post) == ["Travel"]

    await tagging.after_save(post, "Food, Travel")
    assert await tagging.tag_names(post) == ["Travel", "Food"]

    await tagging.after_save(post, [])
    assert await tagging.tag_names(post) == []


@pytest.mark.asyncio
async def test_update_post_retags(post_service):
    """Test: update_post с tag_names делает retag."""
    post = await post_service.create_post("Trip", tag_names=["Travel"])

    updated = await post_service.update_post(post.id, title="Trip 2", tag_names=["Food"])

    assert updated.title == "Trip 2"
    assert await post_service.tagging.tag_names(updated) == ["Food"]


@pytest.mark.asyncio
async def test_post_service_validation(post_service):
    """Test: пустой заголовок и несуществующий пост."""
    with pytest.raises(ValueError, match="title cannot be empty"):
        await post_service.create_post("  ")

    with pytest.raises(NotFoundError):
        await post_service.get_post(999)

    with pytest.raises(LookupError):
        await post_service.delete_post(999)


# ============================================================================
# QUERY FILTERS
# ============================================================================


@pytest_asyncio.fixture
async def tagged_entities(tagging, make_post, make_note):
    """p1: a, b; p2: b, c; p3: без тегов; note (id совпадает с p1): c."""
    p1 = await make_post("p1")
    p2 = await make_post("p2")
    p3 = await make_post("p3")
    note = await make_note()
    await tagging.tag(p1, "A, B")
    await tagging.tag(p2, "B, C")
    await tagging.tag(note, "C")
    return p1, p2, p3, note


@pytest.mark.asyncio
async def test_with_all_tags(tagging, test_db, tagged_entities):
    """Test: пересечение - только посты со ВСЕМИ тегами."""
    p1, p2, p3, _ = tagged_entities
    base = select(Post).order_by(Post.id)

    assert await post_ids(test_db, tagging.with_all_tags(base, Post, "a, b")) == [p1.id]
    assert await post_ids(test_db, tagging.with_all_tags(base, Post, ["B"])) == [p1.id, p2.id]
    assert await post_ids(test_db, tagging.with_all_tags(base, Post, "a, c")) == []
    # Пустой список не фильтрует
    assert await post_ids(test_db, tagging.with_all_tags(base, Post, [])) == [p1.id, p2.id, p3.id]


@pytest.mark.asyncio
async def test_with_any_tag(tagging, test_db, tagged_entities):
    """Test: объединение - посты хотя бы с одним тегом, только своего типа."""
    p1, p2, _, note = tagged_entities
    base = select(Post).order_by(Post.id)

    assert await post_ids(test_db, tagging.with_any_tag(base, Post, "A, C")) == [p1.id, p2.id]
    # У заметки с тем же id есть "c", но пост p1 - нет
    assert note.id == p1.id
    assert await post_ids(test_db, tagging.with_any_tag(base, Post, "c")) == [p2.id]
    assert await post_ids(test_db, tagging.with_any_tag(base, Post, [])) == []


@pytest.mark.asyncio
async def test_without_tags(tagging, test_db, tagged_entities):
    """Test: дополнение - посты без единого из тегов."""
    p1, p2, p3, _ = tagged_entities
    base = select(Post).order_by(Post.id)

    assert await post_ids(test_db, tagging.without_tags(base, Post, "a")) == [p2.id, p3.id]
    assert await post_ids(test_db, tagging.without_tags(base, Post, "a, c")) == [p3.id]
    assert await post_ids(test_db, tagging.without_tags(base, Post, [])) == [p1.id, p2.id, p3.id]


@pytest.mark.asyncio
async def test_list_posts_combined_filters(post_service, tagged_entities):
    """Test: фильтры PostService.list_posts комбинируются через AND."""
    p1, p2, p3, _ = tagged_entities

    posts = await post_service.list_posts(any_tags=["a", "c"], without="c")
    assert [p.id for p in posts] == [p1.id]

    posts = await post_service.list_posts(all_tags="b", without=["a"])
    assert [p.id for p in posts] == [p2.id]

    posts = await post_service.list_posts(skip=1, limit=1)
    assert [p.id for p in posts] == [p2.id]


@pytest.mark.asyncio
async def test_existing_tags(tagging, tagged_entities):
    """Test: различные теги, используемые постами (не заметками)."""
    usages = await tagging.existing_tags(Post)

    assert [u.slug for u in usages] == ["a", "b", "c"]
    assert all(isinstance(u, TagUsage) for u in usages)
    by_slug = {u.slug: u for u in usages}
    assert by_slug["b"].name == "B"
    assert by_slug["b"].count == 2
    # count глобальный: "c" стоит на посте и на заметке
    assert by_slug["c"].count == 2

    assert [u.slug for u in await tagging.existing_tags(Note)] == ["c"]


# ============================================================================
# GROUPS
# ============================================================================


@pytest.mark.asyncio
async def test_tag_in_group(tagging, group_service, make_post):
    """Test: новые теги получают группу, выборки по группе."""
    await group_service.create_group("Regions")
    post = await make_post()

    await tagging.tag(post, "Travel")
    await tagging.tag(post, "Lisbon", group_name="regions")

    assert await tagging.tag_names(post, group_name="Regions") == ["Lisbon"]
    assert await tagging.tag_names(post) == ["Travel", "Lisbon"]

    assert await tagging.untag(post, group_name="regions") == 1
    assert await tagging.tag_names(post) == ["Travel"]


@pytest.mark.asyncio
async def test_tag_unknown_group(tagging, make_post):
    """Test: несуществующая группа - NotFoundError, теги не добавляются."""
    post = await make_post()

    with pytest.raises(NotFoundError, match="TagGroup 'nowhere' not found"):
        await tagging.tag(post, "Lisbon", group_name="nowhere")

    assert await tagging.tag_names(post) == []


@pytest.mark.asyncio
async def test_existing_tags_in_groups(tagging, group_service, make_post):
    """Test: existing_tags_in_groups фильтрует по slug групп."""
    await group_service.create_group("Regions")
    await group_service.create_group("Topics")
    post = await make_post()
    await tagging.tag(post, "Lisbon", group_name="Regions")
    await tagging.tag(post, "Food", group_name="Topics")
    await tagging.tag(post, "Misc")

    usages = await tagging.existing_tags_in_groups(Post, ["REGIONS"])
    assert [u.slug for u in usages] == ["lisbon"]

    usages = await tagging.existing_tags_in_groups(Post, ["regions", "topics"])
    assert [u.slug for u in usages] == ["food", "lisbon"]


@pytest.mark.asyncio
async def test_group_create_validation(group_service):
    """Test: пустое название и дубликат группы."""
    with pytest.raises(ValueError, match="cannot be empty"):
        await group_service.create_group(" ")

    group = await group_service.create_group("Regions")
    assert group.slug == "regions"

    with pytest.raises(AlreadyExistsError):
        await group_service.create_group(" REGIONS ")


@pytest.mark.asyncio
async def test_group_set_remove_membership(group_service, tag_service):
    """Test: set_group / remove_group / is_in_group."""
    await group_service.create_group("Regions")
    await group_service.create_group("Topics")
    tag = await tag_service.create_tag("Lisbon")

    assert await group_service.is_in_group(tag, "regions") is False

    await group_service.set_group(tag, "Regions")
    assert await group_service.is_in_group(tag, "regions") is True
    assert await group_service.is_in_group(tag, "topics") is False

    # Тег не в "topics" - remove_group ничего не меняет
    await group_service.remove_group(tag, "topics")
    assert await group_service.is_in_group(tag, "regions") is True

    await group_service.remove_group(tag, "regions")
    assert tag.tag_group_id is None

    with pytest.raises(NotFoundError):
        await group_service.set_group(tag, "nowhere")


@pytest.mark.asyncio
async def test_list_groups(group_service):
    await group_service.create_group("Topics")
    await group_service.create_group("Regions")

    groups = await group_service.list_groups()

    assert [g.slug for g in groups] == ["regions", "topics"]
    assert (await group_service.get_group("Topics")).name == "Topics"


# ============================================================================
# TAG SERVICE (registry, translations, maintenance)
# ============================================================================


@pytest.mark.asyncio
async def test_create_tag(tag_service):
    """Test: slug нормализуется, имя форматируется, повтор возвращает тот же тег."""
    tag = await tag_service.create_tag("  web development ")

    assert tag.slug == "web-development"
    assert tag.name == "Web Development"
    assert tag.count == 0

    again = await tag_service.create_tag("Web-Development", suggest=True)
    assert again.id == tag.id
    assert again.suggest is True


@pytest.mark.asyncio
async def test_create_tag_validation(tag_service):
    """Test: пустое название, название без букв, неизвестная группа."""
    with pytest.raises(ValueError, match="cannot be empty"):
        await tag_service.create_tag("")

    with pytest.raises(ValidationError, match="no usable characters"):
        await tag_service.create_tag("!!!")

    with pytest.raises(NotFoundError):
        await tag_service.create_tag("Lisbon", group_name="nowhere")

    with pytest.raises(NotFoundError):
        await tag_service.get_tag(999)


@pytest.mark.asyncio
async def test_create_tag_race(tag_service, test_db, monkeypatch):
    """Test: гонка на уникальном slug - второй INSERT отклонён, тег перечитан."""
    existing = await tag_service.create_tag("Travel")
    repo = tag_service.tag_repo
    real_get_by_slug = repo.get_by_slug
    calls = []

    async def stale_get_by_slug(slug):
        # Первый поиск "не видит" тег, как параллельный запрос до коммита соседа
        calls.append(slug)
        if len(calls) == 1:
            return None
        return await real_get_by_slug(slug)

    monkeypatch.setattr(repo, "get_by_slug", stale_get_by_slug)

    tag = await tag_service.create_tag("travel")

    assert tag.id == existing.id
    assert calls == ["travel", "travel"]
    assert await repo.count() == 1


@pytest.mark.asyncio
async def test_translations(tagging, tag_service, make_post):
    """Test: перевод находит канонический тег при tag/retag/untag."""
    travel = await tag_service.create_tag("Travel")
    translation = await tag_service.add_translation(travel.id, "DE", "reisen")

    assert translation.locale == "de"
    assert translation.name == "Reisen"
    assert translation.slug == "reisen"
    assert tag_service.translated_name(travel, "de") == "Reisen"
    assert tag_service.translated_name(travel, "fr") == "Travel"
    assert tag_service.translated_name(travel, None) == "Travel"

    post = await make_post()
    await tagging.tag(post, "Reisen")
    assert await tagging.tag_names(post) == ["Travel"]

    await tagging.retag(post, ["reisen", "Food"])
    assert await tagging.tag_names(post) == ["Travel", "Food"]

    assert await tagging.untag(post, "Reisen") == 1
    assert await tagging.tag_names(post) == ["Food"]

    found = await tag_service.get_tag_by_name("Reisen")
    assert found.id == travel.id


@pytest.mark.asyncio
async def test_translation_replace(tag_service):
    """Test: повторный перевод для локали заменяет старый."""
    tag = await tag_service.create_tag("Travel")
    await tag_service.add_translation(tag.id, "de", "Reise")
    await tag_service.add_translation(tag.id, "de", "Reisen")

    assert [(t.locale, t.name) for t in tag.translations] == [("de", "Reisen")]

    with pytest.raises(ValidationError):
        await tag_service.add_translation(tag.id, "de", " ")


@pytest.mark.asyncio
async def test_suggested_and_maintenance(tag_service, tagging, test_db, make_post):
    """Test: suggest, неиспользуемые теги, удаление и пересчёт."""
    post = await make_post()
    hint = await tag_service.create_tag("Hint")
    await tag_service.create_tag("Orphan")
    await tagging.tag(post, "Travel")

    await tag_service.set_suggest(hint.id)
    assert [t.slug for t in await tag_service.list_suggested()] == ["hint"]
    assert [t.slug for t in await tag_service.get_unused_tags()] == ["orphan"]
    assert [t.slug for t in await tag_service.tags_not_on(post)] == ["hint", "orphan"]

    assert await tag_service.delete_unused() == 1
    assert await count_of(test_db, "orphan") is None
    assert await tag_service.recount() == 0


@pytest.mark.asyncio
async def test_search_and_group_listing(tag_service, group_service):
    await group_service.create_group("Regions")
    await tag_service.create_tag("Lisbon", group_name="regions")
    await tag_service.create_tag("Travel")

    assert [t.slug for t in await tag_service.search_tags("lis")] == ["lisbon"]
    assert await tag_service.search_tags("  ") == []
    assert [t.slug for t in await tag_service.tags_in_group("Regions")] == ["lisbon"]
    assert [t.slug for t in await tag_service.get_all_tags()] == ["lisbon", "travel"]
