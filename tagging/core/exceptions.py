"""Domain exceptions raised by the tagging services."""


class TaggingError(Exception):
    """Базовое исключение для ошибок сервиса тегов."""


class ValidationError(TaggingError, ValueError):
    """
    Некорректные входные данные (например, пустое название тега).

    Наследуется от ValueError, чтобы код, который ловит ValueError,
    продолжал работать.
    """


class NotFoundError(TaggingError, LookupError):
    """
    Ресурс не найден.

    Использование:
        raise NotFoundError("TagGroup", "regions")
        # Сообщение: "TagGroup 'regions' not found"
    """

    def __init__(self, resource: str, key: int | str):
        self.resource = resource
        self.key = key
        super().__init__(f"{resource} '{key}' not found")


class AlreadyExistsError(TaggingError, ValueError):
    """Ресурс с таким slug уже существует."""

    def __init__(self, resource: str, slug: str):
        self.resource = resource
        self.slug = slug
        super().__init__(f"{resource} '{slug}' already exists")
