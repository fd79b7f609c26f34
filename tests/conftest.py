# Shared pytest fixtures
from __future__ import annotations
import tempfile
from pathlib import Path
from typing import Callable
import pytest

from csvimport.logging.init import reset_logging


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        monkeypatch.chdir(p)
        monkeypatch.delenv("CSVIMPORT_CONFIG", raising=False)
        yield p


@pytest.fixture(autouse=True)
def _clean_logging():
    reset_logging()
    yield
    reset_logging()


@pytest.fixture()
def sample_config_yaml() -> str:
    return """delimiter: comma
quote_character: '"'
escape_character: '\\'
header_row_index: 0
data_start_row_index: 1
encoding: utf-8
skip_blank_rows: true
preview_limit: 10
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "import.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def write_csv(temp_workdir: Path) -> Callable[[str, str], Path]:
    def _write(name: str, content: str) -> Path:
        p = temp_workdir / "data" / name
        p.write_bytes(content.encode("utf-8"))
        return p
    return _write


@pytest.fixture()
def simple_csv(write_csv) -> Path:
    return write_csv("simple.csv", "a,b,c\n1,2,3\n4,5,6\n")
