"""Capability interface for entities that can carry tags."""

from typing import ClassVar, Protocol, runtime_checkable


@runtime_checkable
class HasTags(Protocol):
    """
    Сущность, которую можно тегировать.

    Никакого наследования от миксина: достаточно указать дискриминатор типа
    и иметь целочисленный id. Вся логика тегов живёт в TaggingService,
    сущность лишь описывает себя.

    Пример:
        class Post(Base):
            __tablename__ = "posts"
            __taggable_type__ = "post"
            id: Mapped[int] = mapped_column(primary_key=True)

    Опционально: __untag_on_delete__ = False переопределяет глобальную
    настройку untag_on_delete для этого типа.
    """

    __taggable_type__: ClassVar[str]
    id: int


def taggable_type_of(entity_or_cls) -> str:
    """Return the type discriminator stored in Tagged.taggable_type."""
    try:
        return entity_or_cls.__taggable_type__
    except AttributeError:
        raise TypeError(f"{entity_or_cls!r} does not declare __taggable_type__") from None
