import sys
from pathlib import Path
import importlib
import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


@pytest.fixture()
def m():
    """Lazily import the main module for tests to avoid module-level import."""
    return importlib.import_module("main")


@pytest.fixture(params=[
    "abacabad",
    "aaaa",
    "x",
    "The quick brown fox jumps over the lazy dog.",
    "mississippi river\n\ttabs and  spaces",
    "Grüße, 世界! éè \U0001F600\U0001F600",
])
def sample_text(request):
    """A spread of inputs: skewed, single-symbol, unicode and whitespace."""
    return request.param


@pytest.fixture()
def text_file(tmp_path: Path):
    """Write a small UTF-8 text file and return its path."""
    path = tmp_path / "input.txt"
    path.write_text("  hello huffman world\n", encoding="utf-8")
    return path


def is_prefix_free(codes):
    """Return ``True`` when no code is a prefix of another."""
    values = list(codes.values())
    for i, a in enumerate(values):
        for j, b in enumerate(values):
            if i != j and b.startswith(a):
                return False
    return True


@pytest.fixture()
def prefix_free():
    """Provide the prefix check without importing conftest."""
    return is_prefix_free
