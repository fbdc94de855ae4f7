"""Registry import resolution — resolves ``"module:attribute"`` strings.

Shared by every subcommand to locate the user's registry.
"""

import importlib
import sys

from safepaths.helpers import PathHelpers, create_path_helpers
from safepaths.registry import PathRegistry


def resolve_helpers(import_string: str) -> PathHelpers:
    """Resolve an import string to ``PathHelpers``.

    Accepts ``"module:attribute"`` format. When the attribute portion is
    omitted, defaults to ``"paths"`` (e.g. ``"myapp.urls"`` resolves to
    ``myapp.urls.paths``).

    The attribute may be a ``PathRegistry``, a ``PathHelpers``, or a
    factory function returning either. Registries are frozen.

    Raises:
        ModuleNotFoundError: If the module cannot be imported.
        AttributeError: If the attribute does not exist on the module.
        TypeError: If the resolved object is not a registry or helpers.
    """
    module_path, _, attr_name = import_string.partition(":")
    if not attr_name:
        attr_name = "paths"

    module = importlib.import_module(module_path)
    obj = getattr(module, attr_name)

    if callable(obj) and not isinstance(obj, (PathRegistry, PathHelpers)):
        try:
            obj = obj()
        except Exception as exc:
            msg = f"Factory function {import_string!r} raised an error: {exc}"
            raise TypeError(msg) from exc

    if isinstance(obj, PathHelpers):
        return obj
    if isinstance(obj, PathRegistry):
        return create_path_helpers(obj)

    msg = f"{import_string!r} resolved to {type(obj).__name__}, not a PathRegistry"
    raise TypeError(msg)


def load_or_exit(import_string: str) -> PathHelpers:
    """``resolve_helpers`` that prints the error and exits with code 1."""
    try:
        return resolve_helpers(import_string)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
