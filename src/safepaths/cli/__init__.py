"""safepaths CLI — inspect, match and build against a path registry.

Entry point registered as ``safepaths`` in ``pyproject.toml``::

    [project.scripts]
    safepaths = "safepaths.cli:main"
"""

import argparse
import logging
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``safepaths`` command."""
    parser = argparse.ArgumentParser(
        prog="safepaths",
        description="safepaths — typed path templates for building and matching URLs.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log registrations and match misses to stderr",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- safepaths paths --------------------------------------------------
    paths_parser = subparsers.add_parser("paths", help="List registered path templates")
    paths_parser.add_argument("registry", help="Import string (e.g. myapp.urls:paths)")

    # -- safepaths match --------------------------------------------------
    match_parser = subparsers.add_parser("match", help="Find the template for a path")
    match_parser.add_argument("registry", help="Import string (e.g. myapp.urls:paths)")
    match_parser.add_argument("pathname", help="Concrete path, query string allowed")

    # -- safepaths build --------------------------------------------------
    build_parser = subparsers.add_parser("build", help="Build a path from a template")
    build_parser.add_argument("registry", help="Import string (e.g. myapp.urls:paths)")
    build_parser.add_argument("template", help="Registered template (e.g. /posts/:postId)")
    build_parser.add_argument(
        "--param",
        action="append",
        default=[],
        metavar="NAME=VALUE",
        help="Path parameter value (repeatable)",
    )
    build_parser.add_argument(
        "--query",
        action="append",
        default=None,
        metavar="NAME=JSON",
        help="Query parameter value, JSON or plain text (repeatable)",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    if args.command == "paths":
        from safepaths.cli._paths import run_paths

        run_paths(args)
    elif args.command == "match":
        from safepaths.cli._match import run_match

        run_match(args)
    elif args.command == "build":
        from safepaths.cli._build import run_build

        run_build(args)
