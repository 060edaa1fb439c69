from __future__ import annotations

from pathlib import Path

import pytest

from folio.cli import parse_args


@pytest.fixture
def content_dir(tmp_path: Path) -> Path:
    path = tmp_path / "content"
    path.mkdir()
    return path


@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    return tmp_path / "site"


@pytest.fixture
def write_doc(content_dir: Path):
    def _write(rel: str, text: str) -> Path:
        path = content_dir / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def site_args(tmp_path: Path, content_dir: Path, output_dir: Path):
    def _args(*extra: str):
        argv = [
            "--config",
            str(tmp_path / "missing.toml"),
            "--content",
            str(content_dir),
            "--output",
            str(output_dir),
            "--site-url",
            "https://writer.example",
            *extra,
        ]
        return parse_args(argv)

    return _args
