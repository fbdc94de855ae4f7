"""``safepaths paths`` — list registered templates.

Prints every template in match order with its parameters and query
schema.
"""

import argparse

from safepaths.cli._resolve import load_or_exit


def run_paths(args: argparse.Namespace) -> None:
    """Print a table of TEMPLATE, PARAMS and QUERY for ``args.registry``."""
    helpers = load_or_exit(args.registry)
    entries = list(helpers.registry.entries.values())
    if not entries:
        print("No path templates registered.")
        return

    rows: list[tuple[str, str, str]] = []
    for entry in entries:
        params = ", ".join(entry.param_names) or "-"
        schema = entry.search_params_schema
        query = "-" if schema is None else repr(schema)
        rows.append((entry.key, params, query))

    max_template = max(max(len(r[0]) for r in rows), 8)  # "TEMPLATE" header
    max_params = max(max(len(r[1]) for r in rows), 6)  # "PARAMS" header

    fmt = f"{{:<{max_template}}}  {{:<{max_params}}}  {{}}"
    print(fmt.format("TEMPLATE", "PARAMS", "QUERY"))
    sep_len = max_template + max_params + 4 + max(len(r[2]) for r in rows)
    print("-" * min(sep_len, 80))
    for row in rows:
        print(fmt.format(*row))
