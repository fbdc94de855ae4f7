"""``safepaths match`` — show which template owns a path."""

import argparse
import sys

from safepaths.cli._resolve import load_or_exit
from safepaths.errors import ValidationError


def run_match(args: argparse.Namespace) -> None:
    """Print the winning template, its params and metadata.

    Exits with code 1 when no template matches or the metadata fails
    the registry's metadata schema.
    """
    helpers = load_or_exit(args.registry)
    try:
        result = helpers.match_path(args.pathname)
    except ValidationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    if result is None:
        print(f"No template matches {args.pathname!r}", file=sys.stderr)
        raise SystemExit(1)

    print(f"template: {result.template_key}")
    for name, value in result.params.items():
        print(f"  {name} = {value}")
    if result.metadata is not None:
        print(f"metadata: {result.metadata!r}")
