"""Query string codec.

Values are JSON-encoded before being percent-encoded, so non-string
types survive the trip through a URL::

    {"page": 2, "q": "hello world", "tags": ["a", "b"]}
    -> page=2&q=%22hello%20world%22&tags=%5B%22a%22%2C%22b%22%5D

Decoding reverses this and falls back to the raw string for values that
are not valid JSON, so hand-written URLs (``?q=hello``) still work.
"""

import json
from collections.abc import Iterable, Iterator, Mapping
from typing import Any
from urllib.parse import parse_qsl, quote

from safepaths.schema import Schema

type QueryInput = str | bytes | Mapping[str, str] | Iterable[tuple[str, str]]


class QueryParams(Mapping[str, str]):
    """Immutable query string parameters.

    Attributes:
        _data: Parsed query string as field name -> list of values.

    ``__getitem__`` returns the last value for a key, matching how the
    codec folds repeated keys. ``get_list`` returns all values.
    """

    _data: dict[str, list[str]]

    __slots__ = ("_data",)

    def __init__(self, query: QueryInput = "") -> None:
        data: dict[str, list[str]] = {}
        for key, value in _pairs(query):
            data.setdefault(key, []).append(value)
        object.__setattr__(self, "_data", data)

    def __getitem__(self, key: str) -> str:
        return self._data[key][-1]

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        items = ", ".join(f"{k!r}: {self[k]!r}" for k in self)
        return f"QueryParams({{{items}}})"

    def get_list(self, key: str) -> list[str]:
        """Return all values for *key*."""
        return list(self._data.get(key, []))


def _pairs(query: QueryInput) -> Iterator[tuple[str, str]]:
    if isinstance(query, bytes):
        query = query.decode("latin-1")
    if isinstance(query, str):
        yield from parse_qsl(query.removeprefix("?"), keep_blank_values=True)
    elif isinstance(query, QueryParams):
        for key in query:
            for value in query.get_list(key):
                yield key, value
    elif isinstance(query, Mapping):
        yield from query.items()
    else:
        yield from query


def encode_value(value: Any) -> str:
    """JSON-encode a single query value the way ``JSON.stringify`` would."""
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def _reject_constant(name: str) -> Any:
    msg = f"{name} is not valid JSON"
    raise ValueError(msg)


def decode_value(raw: str) -> Any:
    """JSON-decode a single query value, keeping *raw* if it is not JSON.

    ``NaN`` and ``Infinity`` are not JSON and stay strings. Numbers are
    only decoded when written the way ``encode_value`` writes them, so
    ``1.50`` or ``1e3`` keep their original text.
    """
    try:
        value = json.loads(raw, parse_constant=_reject_constant)
    except ValueError:
        return raw
    if isinstance(value, int | float) and not isinstance(value, bool):
        if encode_value(value) != raw:
            return raw
    return value


def encode_search_params(values: Mapping[str, Any]) -> str:
    """Serialise *values* into a query string (without the leading ``?``).

    Spaces are encoded as ``%20``, never ``+``.
    """
    return "&".join(
        f"{quote(str(key), safe='')}={quote(encode_value(value), safe='')}"
        for key, value in values.items()
    )


def decode_search_params(query: QueryInput) -> dict[str, Any]:
    """Decode a query string, mapping or ``QueryParams`` into a dict.

    Each value is JSON-decoded where possible. When a key repeats, the
    last value wins.
    """
    return {key: decode_value(value) for key, value in _pairs(query)}


def parse_search_params(query: QueryInput, schema: Schema | None = None) -> Any:
    """Decode *query* and validate it against *schema* when one is given.

    Raises ``ValidationError`` if the decoded values do not fit *schema*.
    """
    decoded = decode_search_params(query)
    if schema is None:
        return decoded
    return schema.parse(decoded)
