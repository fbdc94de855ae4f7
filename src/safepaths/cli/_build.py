"""``safepaths build`` — build a concrete path from a template."""

import argparse
import sys
from typing import Any

from safepaths.cli._resolve import load_or_exit
from safepaths.errors import SafePathsError
from safepaths.query import decode_value
from safepaths.registry import MISSING


def _split_pairs(pairs: list[str], option: str) -> list[tuple[str, str]]:
    result = []
    for pair in pairs:
        name, sep, value = pair.partition("=")
        if not sep or not name:
            print(f"Error: {option} expects NAME=VALUE, got {pair!r}", file=sys.stderr)
            raise SystemExit(2)
        result.append((name, value))
    return result


def run_build(args: argparse.Namespace) -> None:
    """Print the built path. ``--query`` values are JSON-decoded when possible.

    Passing ``--query`` at all (even with no values that survive) asks for
    the template's query defaults to be applied.
    """
    helpers = load_or_exit(args.registry)
    params = dict(_split_pairs(args.param, "--param"))

    search_params: Any = MISSING
    if args.query is not None:
        search_params = {
            name: decode_value(value) for name, value in _split_pairs(args.query, "--query")
        }

    try:
        path = helpers.build_path(args.template, params=params, search_params=search_params)
    except SafePathsError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    print(path)
