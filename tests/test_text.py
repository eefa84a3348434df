"""
Тесты для нормализации названий тегов.

Проверяем:
- slugify: алфавит slug, идемпотентность, граничные случаи
- title_case: отображаемое имя
- make_tag_list: разбор строки через запятую и списков
"""

import re

import pytest

from tagging.core.text import make_tag_list, slugify, title_case

SLUG_ALPHABET = re.compile(r"^[^\W_]+(-[^\W_]+)*$")


@pytest.mark.parametrize(
    "name,expected",
    [
        ("Python Programming", "python-programming"),
        ("  Web -- Dev ", "web-dev"),
        ("Test_Tag", "test-tag"),
        ("C++", "c"),
        ("already-a-slug", "already-a-slug"),
        ("Reisen", "reisen"),
        ("Čeština", "čeština"),
    ],
)
def test_slugify(name, expected):
    """Test: slugify - lowercase, дефисы вместо разделителей."""
    assert slugify(name) == expected


@pytest.mark.parametrize("name", ["Cooking", "  Web -- Dev ", "a_b c", "--x--", "Ünïcödé Tag!", "123 go"])
def test_slugify_idempotent(name):
    """Test: slugify(slugify(x)) == slugify(x)."""
    once = slugify(name)
    assert slugify(once) == once


@pytest.mark.parametrize("name", ["Hello, World!", "  a__b  ", "x/y\\z", "Tab\tSeparated"])
def test_slugify_alphabet(name):
    """Test: slug состоит из букв/цифр, разделённых одиночными дефисами."""
    assert SLUG_ALPHABET.match(slugify(name))


@pytest.mark.parametrize("name", ["", "   ", "!!!", "_-_"])
def test_slugify_empty_result(name):
    """Test: строка без букв и цифр даёт пустой slug."""
    assert slugify(name) == ""


def test_title_case():
    """Test: отображаемое имя по умолчанию - Title Case без пробелов по краям."""
    assert title_case("  web development ") == "Web Development"
    assert title_case("travel") == "Travel"


@pytest.mark.parametrize(
    "name,expected",
    [
        ("iPhone", "iPhone"),
        ("AI", "AI"),
        ("rock'n'roll", "Rock'n'roll"),
        ("web-dev", "Web-dev"),
        ("new  york", "New York"),
        ("über cafe", "Über Cafe"),
    ],
)
def test_title_case_keeps_word_internals(name, expected):
    """Test: заглавной становится только первая буква слова в нижнем регистре."""
    assert title_case(name) == expected


def test_make_tag_list_from_string():
    """Test: строка через запятую, пустые элементы отбрасываются."""
    assert make_tag_list("Cooking, Travel") == ["Cooking", "Travel"]
    assert make_tag_list(" a ,, b , ") == ["a", "b"]


def test_make_tag_list_from_list():
    """Test: список строк, каждая тоже может содержать запятые."""
    assert make_tag_list(["Travel", "Food, Wine", "  "]) == ["Travel", "Food", "Wine"]


def test_make_tag_list_empty():
    """Test: None, пустая строка и пустой список дают []."""
    assert make_tag_list(None) == []
    assert make_tag_list("") == []
    assert make_tag_list([]) == []
