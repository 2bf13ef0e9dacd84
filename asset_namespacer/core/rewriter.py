from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from .catalog import AssetCatalogKind, AssetRecord, collect_assets, raise_walk_error
from .logger import get_logger

log = get_logger(__name__)

DEFAULT_UI_EXTENSIONS = (".storyboard", ".xib")

__all__ = [
    "DEFAULT_UI_EXTENSIONS",
    "RewriteReport",
    "build_substitutions",
    "find_ui_files",
    "rewrite_file",
    "rewrite_namespaces",
    "run_namespacing",
]


@dataclass
class RewriteReport:
    """Outcome of one namespacing pass."""

    kind: AssetCatalogKind
    assets: List[AssetRecord] = field(default_factory=list)
    files_scanned: int = 0
    files_modified: List[Path] = field(default_factory=list)
    collisions: Dict[str, List[str]] = field(default_factory=dict)

    @property
    def asset_count(self) -> int:
        return len(self.assets)

    @property
    def has_changes(self) -> bool:
        return bool(self.files_modified)


def _require_dir(path: Path, what: str) -> None:
    if not path.exists():
        raise FileNotFoundError(f"{what} not found: {path}")
    if not path.is_dir():
        raise NotADirectoryError(f"{what} is not a directory: {path}")


def find_ui_files(root: Path, extensions: Iterable[str] = DEFAULT_UI_EXTENSIONS) -> List[Path]:
    """Return every Interface Builder file below *root*, sorted by path.

    An unreadable directory raises instead of being skipped.
    """
    exts = tuple(extensions)
    files: List[Path] = []
    for dirpath, _dirnames, filenames in os.walk(root, onerror=raise_walk_error):
        for filename in filenames:
            path = Path(dirpath) / filename
            if filename.endswith(exts) and path.is_file():
                files.append(path)
    return sorted(files, key=lambda p: p.as_posix())


def build_substitutions(
    records: Sequence[AssetRecord],
    collisions: Optional[Dict[str, List[str]]] = None,
) -> Dict[str, str]:
    """Map each bare asset name to its namespaced path.

    Records sharing a bare name collide: the last one wins for every
    reference. Collisions are recorded in *collisions* and logged, not
    resolved.
    """
    seen: Dict[str, List[str]] = {}
    substitutions: Dict[str, str] = {}
    for record in records:
        if not record.bare_name:
            log.warning(f"Skipping asset folder without a name: {record.folder_path}")
            continue
        seen.setdefault(record.bare_name, []).append(record.namespaced_path)
        substitutions[record.bare_name] = record.namespaced_path

    for name, paths in seen.items():
        if len(paths) > 1:
            log.warning(
                f"Asset name '{name}' is used by {len(paths)} assets "
                f"({', '.join(paths)}); every reference becomes '{paths[-1]}'"
            )
            if collisions is not None:
                collisions[name] = paths
    return substitutions


def _compile(substitutions: Mapping[str, str]) -> "re.Pattern[bytes]":
    names = sorted(substitutions, key=lambda n: (-len(n), n))
    alternatives = b"|".join(re.escape(os.fsencode(name)) for name in names)
    return re.compile(b'="(' + alternatives + b')"')


def rewrite_file(path: Path, substitutions: Mapping[str, str]) -> int:
    """Replace every ``="<bareName>"`` in *path* with ``="<namespacedPath>"``.

    Works on raw bytes in a single pass, so replaced text is never matched
    again. The file is only written when something changed. Returns the
    number of replacements.
    """
    if not substitutions:
        return 0
    pattern = _compile(substitutions)
    encoded = _encode(substitutions)
    return _rewrite(Path(path), pattern, encoded)


def _encode(substitutions: Mapping[str, str]) -> Dict[bytes, bytes]:
    return {os.fsencode(name): os.fsencode(value) for name, value in substitutions.items()}


def _rewrite(path: Path, pattern: "re.Pattern[bytes]", encoded: Mapping[bytes, bytes]) -> int:
    original = path.read_bytes()
    updated, count = pattern.subn(lambda m: b'="' + encoded[m.group(1)] + b'"', original)
    if count:
        path.write_bytes(updated)
        log.debug(f"Rewrote {count} reference(s) in {path}")
    return count


def run_namespacing(
    catalog_root: Path,
    kind: AssetCatalogKind,
    ui_files_root: Path,
    *,
    ui_extensions: Iterable[str] = DEFAULT_UI_EXTENSIONS,
) -> RewriteReport:
    """Namespace every asset reference of one catalog kind.

    Any I/O error aborts the run; files rewritten before the failure stay
    rewritten.
    """
    catalog_root = Path(catalog_root)
    ui_files_root = Path(ui_files_root)
    _require_dir(ui_files_root, "UI files directory")

    report = RewriteReport(kind=kind)
    report.assets = collect_assets(catalog_root, kind)
    log.info(f"Found {report.asset_count} assets to namespace.")
    for record in report.assets:
        log.info(record.bare_name)

    substitutions = build_substitutions(report.assets, report.collisions)
    if not substitutions:
        return report

    pattern = _compile(substitutions)
    encoded = _encode(substitutions)
    for ui_file in find_ui_files(ui_files_root, ui_extensions):
        report.files_scanned += 1
        if _rewrite(ui_file, pattern, encoded):
            report.files_modified.append(ui_file)

    log.info(
        f"Namespaced {report.asset_count} {kind.value}: "
        f"{len(report.files_modified)} of {report.files_scanned} UI files changed"
    )
    return report


def rewrite_namespaces(
    catalog_root: Path,
    kind: AssetCatalogKind,
    ui_files_root: Path,
    *,
    ui_extensions: Iterable[str] = DEFAULT_UI_EXTENSIONS,
) -> int:
    """Rewrite UI files for one catalog kind and return the number of assets processed.

    *catalog_root* is the directory holding ``<Title>.xcassets`` or the
    catalog directory itself.
    """
    return run_namespacing(
        catalog_root, kind, ui_files_root, ui_extensions=ui_extensions
    ).asset_count
