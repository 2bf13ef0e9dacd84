from __future__ import annotations

import logging

_PACKAGE_LOGGER = "asset_namespacer"
_FORMAT = "%(levelname)s: %(message)s"


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def configure_logging(verbose: bool = False) -> logging.Logger:
    """Attach a single console handler to the package logger.

    Safe to call more than once; the handler is replaced rather than stacked.
    """
    root = logging.getLogger(_PACKAGE_LOGGER)
    for handler in list(root.handlers):
        if getattr(handler, "_namespacer_console", False):
            root.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(_FORMAT))
    handler._namespacer_console = True  # type: ignore[attr-defined]
    root.addHandler(handler)
    root.setLevel(logging.DEBUG if verbose else logging.INFO)
    return root
