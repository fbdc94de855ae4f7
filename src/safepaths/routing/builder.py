"""Path building — template + values -> concrete path and query string."""

from collections.abc import Mapping
from typing import Any
from urllib.parse import urljoin, urlsplit

from safepaths.errors import BuildError
from safepaths.query import encode_search_params
from safepaths.registry import MISSING, RegistryEntry
from safepaths.routing.template import Literal, Param
from safepaths.schema import to_mapping

DEFAULT_BASE_URL = "http://localhost"

# Only characters that would change the shape of the path are escaped.
# urljoin keeps everything else as written, so extract_params returns it unchanged.
_SEGMENT_ESCAPES = str.maketrans({
    "/": "%2F",
    "?": "%3F",
    "#": "%23",
    " ": "%20",
    "\t": "%09",
    "\n": "%0A",
    "\r": "%0D",
})


def build_path(
    entry: RegistryEntry,
    *,
    params: Mapping[str, Any] | None = None,
    search_params: Any = MISSING,
    base_url: str = DEFAULT_BASE_URL,
) -> str:
    """Build a concrete path for *entry*.

    Every parameter of the template must be supplied in *params*; values
    are substituted per segment, with only path separators and whitespace
    percent-encoded. The wildcard marker
    contributes nothing.

    *search_params* behaves as follows:

    - omitted: the bare path is returned
    - with a query schema: the value (``None`` included) is parsed by the
      schema first, so schema defaults fill in omitted keys
    - an empty result: the bare path is returned
    - otherwise every value is JSON-encoded and appended as a query string

    Raises ``BuildError`` for missing, empty, or unknown parameters and
    lets the schema's ``ValidationError`` propagate.
    """
    path = _substitute(entry, params or {})
    path = urlsplit(urljoin(base_url, path)).path or "/"

    if search_params is MISSING:
        return path

    values = search_params
    if entry.search_params_schema is not None:
        values = entry.search_params_schema.parse(values)

    mapping = to_mapping(values)
    if not mapping:
        return path
    return f"{path}?{encode_search_params(mapping)}"


def _substitute(entry: RegistryEntry, params: Mapping[str, Any]) -> str:
    template = entry.template
    unknown = set(params) - set(template.param_names)
    if unknown:
        names = ", ".join(sorted(unknown))
        msg = f"Unknown parameters for {template.source!r}: {names}"
        raise BuildError(msg)

    parts: list[str] = []
    for seg in template.segments:
        if isinstance(seg, Literal):
            parts.append(seg.text)
        elif isinstance(seg, Param):
            if seg.name not in params:
                msg = f"Missing parameter {seg.name!r} for {template.source!r}"
                raise BuildError(msg)
            value = str(params[seg.name])
            if not value:
                msg = f"Parameter {seg.name!r} for {template.source!r} must not be empty"
                raise BuildError(msg)
            parts.append(value.translate(_SEGMENT_ESCAPES))

    return "/" + "/".join(parts)
