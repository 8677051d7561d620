# conftest.py - shared pytest fixtures
import pytest


@pytest.fixture
def write_file(tmp_path):
    """Create a file under tmp_path from raw text (no newline translation) and return its path."""

    def _write(rel: str, text: str) -> str:
        p = tmp_path / rel
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_bytes(text.encode("utf-8"))
        return str(p)

    return _write
