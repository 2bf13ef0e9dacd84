"""
Asset catalog discovery.

Asset catalogs are laid out as ``<Title>.xcassets/.../<name><suffix>/`` where
the suffix depends on the kind of catalog (``.imageset`` for images,
``.colorset`` for colors). Each matching folder is one asset; its namespaced
path is the folder path relative to the catalog, in the form Interface
Builder expects once "Provides Namespace" is enabled on the intermediate
folders.
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Dict, List, NamedTuple

from .logger import get_logger

log = get_logger(__name__)

ESCAPED_SEPARATOR = "\\/"

__all__ = [
    "AssetCatalogKind",
    "AssetRecord",
    "ESCAPED_SEPARATOR",
    "bare_name",
    "catalog_dir",
    "collect_assets",
    "find_asset_folders",
    "namespaced_path",
    "raise_walk_error",
]


class AssetCatalogKind(str, Enum):
    """The two asset catalog types a project namespaces."""

    IMAGES = "images"
    COLORS = "colors"

    @property
    def catalog_title(self) -> str:
        return _CATALOG_KINDS[self].catalog_title

    @property
    def folder_suffix(self) -> str:
        return _CATALOG_KINDS[self].folder_suffix

    @property
    def catalog_name(self) -> str:
        """Directory name of the catalog, e.g. ``Images.xcassets``."""
        return f"{self.catalog_title}.xcassets"


class _KindInfo(NamedTuple):
    catalog_title: str
    folder_suffix: str


_CATALOG_KINDS: Dict[AssetCatalogKind, _KindInfo] = {
    AssetCatalogKind.IMAGES: _KindInfo("Images", ".imageset"),
    AssetCatalogKind.COLORS: _KindInfo("Colors", ".colorset"),
}


@dataclass(frozen=True)
class AssetRecord:
    folder_path: Path
    bare_name: str
    namespaced_path: str

    @classmethod
    def from_folder(cls, folder: Path, kind: AssetCatalogKind) -> "AssetRecord":
        return cls(
            folder_path=folder,
            bare_name=bare_name(folder, kind),
            namespaced_path=namespaced_path(folder, kind),
        )


def catalog_dir(catalog_root: Path, kind: AssetCatalogKind) -> Path:
    """Catalog directory for *kind*.

    *catalog_root* is normally the folder holding the catalogs
    (``App/Resources``); a path that already is the catalog
    (``App/Resources/Images.xcassets``) is returned as is.
    """
    root = Path(catalog_root)
    if root.name == kind.catalog_name:
        return root
    return root / kind.catalog_name


def _strip_suffix(value: str, suffix: str) -> str:
    if suffix and value.endswith(suffix):
        return value[: -len(suffix)]
    return value


def bare_name(folder: Path | str, kind: AssetCatalogKind) -> str:
    """Asset name as referenced before namespacing: ``.../Search.imageset`` -> ``Search``."""
    if isinstance(folder, Path):
        name = folder.name
    else:
        name = folder.rstrip("/").rsplit("/", 1)[-1]
    return _strip_suffix(name, kind.folder_suffix)


# A slash not already escaped by a preceding backslash.
_UNESCAPED_SLASH = re.compile(r"(?<!\\)/")


def namespaced_path(folder: Path | str, kind: AssetCatalogKind) -> str:
    """Compute the namespaced identifier for an asset folder.

    ``App/Resources/Images.xcassets/Icons/Search.imageset`` becomes
    ``Icons\\/Search``. Paths without the catalog marker are used whole, so the
    function returns its own output unchanged when fed it again.
    """
    path = folder.as_posix() if isinstance(folder, Path) else folder
    marker = f"{kind.catalog_name}/"
    _, found, rest = path.partition(marker)
    relative = rest.lstrip("/") if found else path
    relative = _strip_suffix(relative.rstrip("/"), kind.folder_suffix)
    return _UNESCAPED_SLASH.sub(lambda _m: ESCAPED_SEPARATOR, relative)


def find_asset_folders(catalog: Path, kind: AssetCatalogKind) -> List[Path]:
    """Return every ``*<suffix>`` directory below *catalog*, in code-point order.

    Matching folders are leaves: their contents are never searched.
    """
    suffix = kind.folder_suffix
    found: List[Path] = []
    for dirpath, dirnames, _filenames in os.walk(catalog, onerror=raise_walk_error):
        keep = []
        for dirname in dirnames:
            if dirname.endswith(suffix):
                found.append(Path(dirpath) / dirname)
            else:
                keep.append(dirname)
        dirnames[:] = keep
    return sorted(found, key=lambda p: p.as_posix())


def raise_walk_error(error: OSError) -> None:
    """``os.walk`` error hook: unreadable directories abort the walk."""
    raise error


def collect_assets(catalog_root: Path, kind: AssetCatalogKind) -> List[AssetRecord]:
    """Build one AssetRecord per asset folder of the *kind* catalog under *catalog_root*.

    Raises FileNotFoundError when the catalog directory is missing.
    """
    catalog = catalog_dir(catalog_root, kind)
    if not catalog.exists():
        raise FileNotFoundError(f"Asset catalog not found: {catalog}")
    if not catalog.is_dir():
        raise NotADirectoryError(f"Asset catalog is not a directory: {catalog}")

    records = [AssetRecord.from_folder(folder, kind) for folder in find_asset_folders(catalog, kind)]
    log.debug(f"Collected {len(records)} {kind.value} from {catalog}")
    return records
