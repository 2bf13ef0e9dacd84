"""Namespace asset references in Interface Builder files."""

from __future__ import annotations

import sys
from argparse import Namespace
from pathlib import Path

from pydantic import ValidationError

from ...core.catalog import AssetCatalogKind
from ...core.config import load_layout
from ...core.logger import get_logger
from ...core.rewriter import RewriteReport, run_namespacing


log = get_logger(__name__)


def run(args: Namespace, kind: AssetCatalogKind) -> RewriteReport:
    """
    Run one namespacing pass for *kind*.

    Exits with status 1 on the first I/O error or an invalid layout config.
    Only use after the asset folders of the catalog have been namespaced.
    """
    root = Path(args.root)
    config = Path(args.config) if getattr(args, "config", None) else None

    try:
        layout = load_layout(root, config)
        return run_namespacing(
            layout.catalog_root(root),
            kind,
            layout.ui_files_root(root),
            ui_extensions=layout.ui_extensions,
        )
    except ValidationError as e:
        log.error(f"Invalid layout config: {e}")
        sys.exit(1)
    except (OSError, ValueError) as e:
        log.error(f"Namespacing {kind.value} failed: {e}")
        sys.exit(1)
