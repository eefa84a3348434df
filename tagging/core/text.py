"""Tag name normalization helpers."""

import re
from collections.abc import Iterable

# Любая последовательность символов, не являющихся буквой или цифрой
# (подчёркивание тоже считается разделителем)
_SEPARATOR_RUN = re.compile(r"[\W_]+")

SLUG_SEPARATOR = "-"


def slugify(name: str) -> str:
    """
    Нормализовать название тега в slug.

    Правила:
    - Обрезать пробелы по краям
    - Lowercase (нижний регистр)
    - Любая серия не-буквенно-цифровых символов → один дефис
    - Убрать дефисы с краёв

    Функция идемпотентна: slugify(slugify(x)) == slugify(x).

    Примеры:
        "Python Programming" → "python-programming"
        "  Web -- Dev " → "web-dev"
        "C++" → "c"
        "Test_Tag" → "test-tag"
    """
    normalized = name.strip().lower()
    normalized = _SEPARATOR_RUN.sub(SLUG_SEPARATOR, normalized)
    return normalized.strip(SLUG_SEPARATOR)


def _capitalize_word(word: str) -> str:
    # Слова с заглавными буквами ("iPhone", "AI") оставляем как есть
    if word.islower():
        return word[0].upper() + word[1:]
    return word


def title_case(name: str) -> str:
    """
    Default display formatter: "web development" → "Web Development".

    Заглавной становится только первая буква слова (слова разделяются
    пробелами), остальное не трогаем: "rock'n'roll" → "Rock'n'roll",
    "iPhone" и "AI" не меняются.
    """
    return " ".join(_capitalize_word(word) for word in name.split())


def make_tag_list(names: str | Iterable[str] | None) -> list[str]:
    """
    Привести входные данные к списку названий тегов.

    Принимает строку через запятую ("Cooking, Travel") или итерируемое
    со строками (каждая тоже может содержать запятые).
    Пустые и состоящие из пробелов элементы молча отбрасываются.
    """
    if names is None:
        return []

    if isinstance(names, str):
        names = [names]

    result = []
    for item in names:
        for part in str(item).split(","):
            part = part.strip()
            if part:
                result.append(part)
    return result
