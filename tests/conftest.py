import pytest

from analyzer import SemanticAnalyzer
from errors import SemanticError
from parser import parse


MAIN_CLASS = """
class Main {
    main() -> none {
    }
}
"""


def analyze(source, config=None):
    return SemanticAnalyzer(config).analyze(parse(source))


def with_main(source):
    """在被测类之后追加一个合法的入口类"""
    return source + MAIN_CLASS


@pytest.fixture
def check():
    return analyze


@pytest.fixture
def error_code():
    def _error_code(source, config=None):
        with pytest.raises(SemanticError) as exc_info:
            analyze(source, config)
        return exc_info.value.code.value
    return _error_code
