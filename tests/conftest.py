import textwrap
from pathlib import Path

import pytest

from compiletest import bootstrap


@pytest.fixture(scope="session", autouse=True)
def setup_compiler_registry() -> None:
    """Register built-in compilers once for the entire test session."""

    bootstrap()


@pytest.fixture
def write_suite(tmp_path: Path):
    def _write(content: str, name: str = "suite.ss") -> Path:
        path = tmp_path / name
        path.write_text(textwrap.dedent(content), encoding="utf-8")
        return path

    return _write
