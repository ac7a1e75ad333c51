import pytest

from pxml import Parser, ParserConfig


@pytest.fixture
def parser() -> Parser:
    """Парсер с настройками по умолчанию (вложенное дерево)."""
    return Parser()


@pytest.fixture
def flat_parser() -> Parser:
    """Парсер, возвращающий плоскую последовательность узлов."""
    return Parser(ParserConfig(flatten=True))
