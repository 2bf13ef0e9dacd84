from __future__ import annotations

import json
import os
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from .logger import get_logger
from .rewriter import DEFAULT_UI_EXTENSIONS

log = get_logger(__name__)

CONFIG_FILENAME = "namespacer.json"
ENV_RESOURCES_DIR = "NAMESPACER_RESOURCES_DIR"
ENV_SOURCES_DIR = "NAMESPACER_SOURCES_DIR"


class ProjectLayout(BaseModel):
    # Paths are relative to the project root unless absolute.
    resources_dir: str = "App/Resources"
    sources_dir: str = "App/Sources"
    ui_extensions: List[str] = Field(default_factory=lambda: list(DEFAULT_UI_EXTENSIONS), min_length=1)

    @field_validator("ui_extensions")
    @classmethod
    def _dotted(cls, value: List[str]) -> List[str]:
        exts = []
        for ext in value:
            ext = ext.strip()
            if not ext or ext == ".":
                raise ValueError("UI file extensions must not be empty")
            exts.append(ext if ext.startswith(".") else f".{ext}")
        return exts

    @classmethod
    def load(cls, path: Path) -> "ProjectLayout":
        data = json.loads(Path(path).read_text(encoding="utf-8"))
        return cls.model_validate(data)

    def catalog_root(self, root: Path) -> Path:
        return Path(root) / self.resources_dir

    def ui_files_root(self, root: Path) -> Path:
        return Path(root) / self.sources_dir


def load_layout(root: Path, config_path: Optional[Path] = None) -> ProjectLayout:
    """
    Resolve the project layout.

    An explicit config file wins, then ``namespacer.json`` in the project
    root, then the defaults. NAMESPACER_RESOURCES_DIR and
    NAMESPACER_SOURCES_DIR override the directories from any of those.
    """
    if config_path is not None:
        log.debug(f"Loading layout from {config_path}")
        layout = ProjectLayout.load(config_path)
    elif (Path(root) / CONFIG_FILENAME).is_file():
        log.debug(f"Loading layout from {Path(root) / CONFIG_FILENAME}")
        layout = ProjectLayout.load(Path(root) / CONFIG_FILENAME)
    else:
        layout = ProjectLayout()

    overrides = {}
    env_resources = os.environ.get(ENV_RESOURCES_DIR)
    if env_resources:
        log.debug(f"Using resources directory from {ENV_RESOURCES_DIR}: {env_resources}")
        overrides["resources_dir"] = env_resources
    env_sources = os.environ.get(ENV_SOURCES_DIR)
    if env_sources:
        log.debug(f"Using sources directory from {ENV_SOURCES_DIR}: {env_sources}")
        overrides["sources_dir"] = env_sources
    if overrides:
        layout = layout.model_copy(update=overrides)
    return layout
