"""Global pytest configuration and fixtures."""

import pytest
import sys
from pathlib import Path

# Add the package to Python path for testing
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

from chunking.code_splitter import CodeSplitter
from chunking.grammars import AVAILABLE_LANGUAGES


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests")
    config.addinivalue_line("markers", "chunking: Code chunking tests")
    config.addinivalue_line("markers", "cli: Command-line tool tests")
    config.addinivalue_line("markers", "grammar(name): Test needs the named tree-sitter grammar")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        path_str = str(item.fspath)

        if "tests/unit/" in path_str:
            item.add_marker(pytest.mark.unit)
        elif "tests/integration/" in path_str:
            item.add_marker(pytest.mark.integration)

        if "test_cli" in path_str:
            item.add_marker(pytest.mark.cli)
        else:
            item.add_marker(pytest.mark.chunking)


def pytest_runtest_setup(item):
    """Skip tests whose grammar package is not installed."""
    for marker in item.iter_markers(name="grammar"):
        for name in marker.args:
            if name not in AVAILABLE_LANGUAGES:
                pytest.skip(f"tree-sitter-{name} not installed")


# Test fixtures
@pytest.fixture
def rust_splitter() -> CodeSplitter:
    """Rust splitter with the default budget."""
    return CodeSplitter('rust', 500)


@pytest.fixture
def python_splitter() -> CodeSplitter:
    """Python splitter with the default budget."""
    return CodeSplitter('python', 500)


@pytest.fixture
def javascript_splitter() -> CodeSplitter:
    """JavaScript splitter with the default budget."""
    return CodeSplitter('javascript', 500)


@pytest.fixture
def test_data_dir() -> Path:
    """Directory holding the multi-language sample files."""
    return project_root / "tests" / "test_data" / "multi_language"
