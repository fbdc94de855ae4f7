"""safepaths — typed path templates for building and matching URLs.

Register templates once, then build, match and parse against them::

    from dataclasses import dataclass

    from safepaths import PathRegistry, create_path_helpers

    @dataclass(frozen=True, slots=True)
    class PostQuery:
        page: int = 1

    paths = PathRegistry()
    paths.add("/posts/:postId", search_params=PostQuery)
    paths.add("/api(.*)")

    helpers = create_path_helpers(paths)
    helpers.build_path("/posts/:postId", params={"postId": "42"}, search_params={})
    # "/posts/42?page=1"
    helpers.match_path("/posts/42").template_key
    # "/posts/:postId"
"""

__version__ = "0.1.0"
__all__ = [
    "BuildError",
    "ConfigurationError",
    "DataclassSchema",
    "DuplicateTemplateError",
    "MatchResult",
    "PathHelpers",
    "PathProps",
    "PathRegistry",
    "PathTemplate",
    "PathsConfig",
    "RegistryEntry",
    "RegistryFrozenError",
    "SafePathsError",
    "Schema",
    "TemplateSyntaxError",
    "UnknownTemplateError",
    "ValidationError",
    "create_path_helpers",
    "parse_template",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import safepaths`` fast while providing a clean top-level API.
    """
    if name in ("PathRegistry", "RegistryEntry"):
        from safepaths import registry as _registry

        return getattr(_registry, name)

    if name in ("PathHelpers", "PathProps", "create_path_helpers"):
        from safepaths import helpers as _helpers

        return getattr(_helpers, name)

    if name == "MatchResult":
        from safepaths.routing.matcher import MatchResult

        return MatchResult

    if name in ("PathTemplate", "parse_template"):
        from safepaths.routing import template as _template

        return getattr(_template, name)

    if name in ("DataclassSchema", "Schema"):
        from safepaths import schema as _schema

        return getattr(_schema, name)

    if name == "PathsConfig":
        from safepaths.config import PathsConfig

        return PathsConfig

    if name in (
        "BuildError",
        "ConfigurationError",
        "DuplicateTemplateError",
        "RegistryFrozenError",
        "SafePathsError",
        "TemplateSyntaxError",
        "UnknownTemplateError",
        "ValidationError",
    ):
        from safepaths import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
