"""Pytest configuration for FileLens tests."""
from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from tests.helpers import build_sample_corpus  # noqa: E402
from filelens.utils.io import write_json  # noqa: E402


@pytest.fixture
def sample_corpus() -> dict:
    return build_sample_corpus()


@pytest.fixture
def corpus_path(tmp_path: Path, sample_corpus: dict) -> Path:
    path = tmp_path / "corpus.json"
    write_json(path, sample_corpus)
    return path


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in list(os.environ):
        if name.startswith("FILELENS_"):
            monkeypatch.delenv(name, raising=False)
