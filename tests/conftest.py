from __future__ import annotations

from pathlib import Path
from typing import Callable, Iterable

import pytest

CONTENTS_JSON = '{"info":{"version":1,"author":"xcode"}}'


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """Bare Xcode-style project: App/Resources for catalogs, App/Sources for IB files."""
    (tmp_path / "App" / "Sources").mkdir(parents=True)
    (tmp_path / "App" / "Resources").mkdir(parents=True)
    return tmp_path


@pytest.fixture
def make_assets(project: Path) -> Callable[[str, Iterable[str]], Path]:
    def _make(catalog: str, folders: Iterable[str]) -> Path:
        catalog_dir = project / "App" / "Resources" / catalog
        catalog_dir.mkdir(parents=True, exist_ok=True)
        (catalog_dir / "Contents.json").write_text(CONTENTS_JSON, encoding="utf-8")
        for folder in folders:
            asset = catalog_dir / folder
            asset.mkdir(parents=True, exist_ok=True)
            (asset / "Contents.json").write_text(CONTENTS_JSON, encoding="utf-8")
        return catalog_dir

    return _make


@pytest.fixture
def write_ui_file(project: Path) -> Callable[[str, str], Path]:
    def _write(relative: str, content: str) -> Path:
        path = project / "App" / "Sources" / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write
