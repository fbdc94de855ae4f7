"""Template matching and parameter extraction.

Each template is compiled once into an anchored regular expression.
Matching walks the registry in insertion order and the first template
that accepts the path wins: there is no specificity ranking.
"""

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from safepaths.registry import PathRegistry, RegistryEntry
from safepaths.routing.template import (
    WILDCARD,
    Literal,
    Param,
    PathTemplate,
    WildcardTail,
    strip_query,
)

logger = logging.getLogger("safepaths.routing")

# A parameter binds one non-empty segment
PARAM_PATTERN = r"[^/#?]+"


@dataclass(frozen=True, slots=True)
class MatchResult:
    """Result of a successful ``match_path``.

    ``params`` are the bindings captured by the pattern that accepted
    the path, so they always agree with the match itself.
    """

    template_key: str
    metadata: Any = None
    params: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class CompiledPattern:
    """A template compiled to a regex. Created by ``compile_template``."""

    template: PathTemplate
    regex: re.Pattern[str]
    # regex group name -> parameter name
    groups: tuple[tuple[str, str], ...]

    def match(self, path: str) -> dict[str, str] | None:
        """Return the parameter bindings if *path* is accepted, else None."""
        m = self.regex.fullmatch(path)
        if m is None:
            return None
        return {name: m.group(group) for group, name in self.groups}


def compile_template(template: PathTemplate, *, case_sensitive: bool = True) -> CompiledPattern:
    """Compile *template* into a ``CompiledPattern``.

    Examples::

        "/posts/:id"  -> ^/posts/(?P<p0>[^/#?]+)/?$
        "/api(.*)"    -> ^/api.*/?$
        "/(.*)"       -> ^/.*/?$
        "/"           -> ^/?$

    A single trailing slash on the concrete path is always tolerated.
    """
    parts: list[str] = []
    groups: list[tuple[str, str]] = []

    for seg in template.segments:
        match seg:
            case Literal(text):
                parts.append("/" + re.escape(text))
            case Param(name):
                group = f"p{len(groups)}"
                groups.append((group, name))
                parts.append(f"/(?P<{group}>{PARAM_PATTERN})")
            case WildcardTail(standalone):
                parts.append("/.*" if standalone else ".*")

    pattern = "".join(parts) + "/?"
    flags = 0 if case_sensitive else re.IGNORECASE
    return CompiledPattern(
        template=template,
        regex=re.compile(pattern, flags),
        groups=tuple(groups),
    )


def find_match(
    patterns: Iterable[tuple[RegistryEntry, CompiledPattern]],
    pathname: str,
) -> tuple[RegistryEntry, dict[str, str]] | None:
    """Return the first entry whose pattern accepts *pathname*.

    An empty path (``""`` or a bare query string) never matches.
    """
    path = strip_query(pathname)
    if not path:
        return None
    for entry, pattern in patterns:
        params = pattern.match(path)
        if params is not None:
            return entry, params
    return None


def match_path(
    registry: PathRegistry,
    pathname: str,
    patterns: Iterable[tuple[RegistryEntry, CompiledPattern]] | None = None,
) -> MatchResult | None:
    """Match *pathname* against *registry* in insertion order.

    The query string is ignored. Returns ``None`` when nothing matches.

    When the registry has a metadata schema, the winning entry's metadata
    is run through it and a ``ValidationError`` propagates to the caller.

    *patterns* lets callers pass precompiled patterns; otherwise every
    template is compiled on the fly.
    """
    if patterns is None:
        case_sensitive = registry.config.case_sensitive
        patterns = (
            (entry, compile_template(entry.template, case_sensitive=case_sensitive))
            for entry in registry.entries.values()
        )

    found = find_match(patterns, pathname)
    if found is None:
        logger.debug("No path template matches %r", pathname)
        return None

    entry, params = found
    metadata = entry.metadata
    if registry.metadata_schema is not None:
        metadata = registry.metadata_schema.parse(metadata)

    return MatchResult(template_key=entry.key, metadata=metadata, params=params)


def extract_params(pathname: str, template: str | PathTemplate) -> dict[str, str] | None:
    """Extract ``:name`` values from *pathname* for *template*.

    Both strings are split on ``/`` and walked pair by pair. Returns
    ``None`` when the segment counts differ or a parameter's segment is
    empty; never raises.

    This is a textual walk, not the compiled pattern: a wildcard template
    only extracts from paths with the same number of segments as the
    template. Use ``MatchResult.params`` when the path came from
    ``match_path``.
    """
    source = template.source if isinstance(template, PathTemplate) else template
    template_parts = source.split("/")
    path_parts = strip_query(pathname).split("/")

    if len(template_parts) != len(path_parts):
        return None

    params: dict[str, str] = {}
    for template_part, path_part in zip(template_parts, path_parts, strict=True):
        if not template_part.startswith(":"):
            continue
        if not path_part:
            return None
        params[template_part[1:].removesuffix(WILDCARD)] = path_part
    return params
