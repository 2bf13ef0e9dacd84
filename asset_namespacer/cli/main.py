from __future__ import annotations
import argparse
from ..core.catalog import AssetCatalogKind
from ..core.logger import configure_logging
from .commands import namespace as cmd_namespace


def entrypoint():
    main()


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--root",
        type=str,
        default=".",
        help="Project root containing App/Resources and App/Sources (default: current directory)",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Layout JSON file (defaults to <root>/namespacer.json when present)",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Log every rewritten file"
    )


def main(argv=None) -> None:
    parser = argparse.ArgumentParser(
        description="Rewrite Interface Builder asset references to namespaced asset paths"
    )
    sub = parser.add_subparsers(dest="command", required=True)

    i = sub.add_parser(
        "namespace-images",
        help="Namespace image references in IB files. Use only after namespacing all Image Asset folders.",
    )
    _add_common_arguments(i)

    c = sub.add_parser(
        "namespace-colors",
        help="Namespace color references in IB files. Use only after namespacing all Color Asset folders.",
    )
    _add_common_arguments(c)

    args = parser.parse_args(argv)
    configure_logging(verbose=args.verbose)

    if args.command == "namespace-images":
        cmd_namespace.run(args, AssetCatalogKind.IMAGES)
    elif args.command == "namespace-colors":
        cmd_namespace.run(args, AssetCatalogKind.COLORS)


if __name__ == "__main__":
    main()
