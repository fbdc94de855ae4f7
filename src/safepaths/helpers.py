"""Path helpers — the read-only API over a frozen registry.

Usage::

    paths = PathRegistry()
    paths.add("/posts/:postId", search_params=PostQuery)
    helpers = create_path_helpers(paths)

    helpers.build_path("/posts/:postId", params={"postId": "42"}, search_params={})
    helpers.match_path("/posts/42?page=2")
    helpers.extract_params("/posts/42", "/posts/:postId")
    helpers.parse_search_params("page=2", "/posts/:postId")

Creating the helpers freezes the registry, so all registration must be
done first.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from safepaths.query import QueryInput, parse_search_params
from safepaths.registry import MISSING, PathRegistry, RegistryEntry
from safepaths.routing.builder import build_path
from safepaths.routing.matcher import (
    CompiledPattern,
    MatchResult,
    compile_template,
    extract_params,
    match_path,
)
from safepaths.schema import Schema


@dataclass(frozen=True, slots=True)
class PathProps:
    """What a template accepts: its parameter names and query schema."""

    template_key: str
    params: tuple[str, ...]
    search_params: Schema | None


class PathHelpers:
    """Build, match, extract and parse against one frozen registry.

    Every template is compiled once, up front.
    """

    __slots__ = ("_patterns", "registry")

    def __init__(self, registry: PathRegistry) -> None:
        registry.freeze()
        self.registry = registry
        case_sensitive = registry.config.case_sensitive
        self._patterns: tuple[tuple[RegistryEntry, CompiledPattern], ...] = tuple(
            (entry, compile_template(entry.template, case_sensitive=case_sensitive))
            for entry in registry.entries.values()
        )

    def build_path(
        self,
        key: str,
        *,
        params: Mapping[str, Any] | None = None,
        search_params: Any = MISSING,
    ) -> str:
        """Build a concrete path (and query string) for template *key*."""
        return build_path(
            self.registry[key],
            params=params,
            search_params=search_params,
            base_url=self.registry.config.base_url,
        )

    def match_path(self, pathname: str) -> MatchResult | None:
        """Return the first template that accepts *pathname*, or None."""
        return match_path(self.registry, pathname, self._patterns)

    def extract_params(self, pathname: str, key: str) -> dict[str, str] | None:
        """Extract the parameters of template *key* from *pathname*."""
        return extract_params(pathname, self.registry[key].template)

    def parse_search_params(self, query: QueryInput, key: str) -> Any:
        """Decode *query* and validate it with template *key*'s schema."""
        return parse_search_params(query, self.registry[key].search_params_schema)

    def props(self, key: str) -> PathProps:
        entry = self.registry[key]
        return PathProps(
            template_key=key,
            params=entry.param_names,
            search_params=entry.search_params_schema,
        )


def create_path_helpers(registry: PathRegistry) -> PathHelpers:
    """Freeze *registry* and return its ``PathHelpers``."""
    return PathHelpers(registry)
