"""Rewrite Interface Builder asset references after namespacing asset catalogs."""

__version__ = "0.1.0"
