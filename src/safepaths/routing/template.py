"""Path template parsing.

Turns a template string such as ``/posts/:postId/comments`` into an
immutable ``PathTemplate`` of typed segments::

    "/posts"              -> (Literal("posts"),)
    "/posts/:postId"      -> (Literal("posts"), Param("postId"))
    "/api(.*)"            -> (Literal("api"), WildcardTail())
    "/(.*)"               -> (WildcardTail(standalone=True),)
    "/"                   -> ()
"""

from dataclasses import dataclass

from safepaths.errors import TemplateSyntaxError

WILDCARD = "(.*)"
PARAM_PREFIX = ":"
RESERVED_CHARS = frozenset(". /#&?|:")
MAX_DEPTH = 5


@dataclass(frozen=True, slots=True)
class Literal:
    """A segment that must equal the path segment exactly."""

    text: str


@dataclass(frozen=True, slots=True)
class Param:
    """A named segment that binds any single non-empty path segment."""

    name: str


@dataclass(frozen=True, slots=True)
class WildcardTail:
    """Consumes the rest of the path, including nothing at all.

    ``standalone`` is True when the marker is a segment of its own
    (``/files/(.*)``) rather than glued to the previous one (``/api(.*)``).
    """

    standalone: bool = False


type Segment = Literal | Param | WildcardTail


@dataclass(frozen=True, slots=True)
class PathTemplate:
    """A parsed path template. Created by ``parse_template``."""

    source: str
    segments: tuple[Segment, ...]

    @property
    def param_names(self) -> tuple[str, ...]:
        """Parameter names in the order they appear in the template."""
        return tuple(seg.name for seg in self.segments if isinstance(seg, Param))

    @property
    def has_wildcard(self) -> bool:
        return bool(self.segments) and isinstance(self.segments[-1], WildcardTail)

    def __str__(self) -> str:
        return self.source


def parse_template(template: str, *, max_depth: int = MAX_DEPTH) -> PathTemplate:
    """Parse a template string into a ``PathTemplate``.

    Raises ``TemplateSyntaxError`` when:

    - the template does not start with ``/``
    - a segment is empty (``//`` or a trailing ``/``)
    - a literal or parameter name contains a reserved character
      (``.``, space, ``/``, ``#``, ``&``, ``?``, ``|``, ``:``)
    - a parameter name is used twice
    - the wildcard marker ``(.*)`` is not at the very end
    - the template has more than *max_depth* segments
    """
    if not template.startswith("/"):
        raise TemplateSyntaxError(template, "templates must start with '/'")
    if template == "/":
        return PathTemplate(source=template, segments=())

    pieces = template[1:].split("/")
    segments: list[Segment] = []
    seen: set[str] = set()

    for index, piece in enumerate(pieces):
        is_last = index == len(pieces) - 1

        if piece == WILDCARD:
            if not is_last:
                raise TemplateSyntaxError(template, f"{WILDCARD} must be the last segment")
            segments.append(WildcardTail(standalone=True))
            continue

        has_tail = piece.endswith(WILDCARD)
        if has_tail:
            if not is_last:
                raise TemplateSyntaxError(template, f"{WILDCARD} must be the last segment")
            piece = piece.removesuffix(WILDCARD)

        segment = _parse_piece(template, piece)
        if isinstance(segment, Param):
            if segment.name in seen:
                raise TemplateSyntaxError(
                    template, f"parameter {segment.name!r} appears more than once"
                )
            seen.add(segment.name)
        segments.append(segment)

        if has_tail:
            segments.append(WildcardTail())

    depth = sum(1 for seg in segments if not isinstance(seg, WildcardTail))
    if depth > max_depth:
        raise TemplateSyntaxError(
            template, f"{depth} segments exceeds the maximum depth of {max_depth}"
        )

    return PathTemplate(source=template, segments=tuple(segments))


def _parse_piece(template: str, piece: str) -> Literal | Param:
    """Parse one ``/``-delimited piece that is not a bare wildcard."""
    if piece.startswith(PARAM_PREFIX):
        name = piece[len(PARAM_PREFIX) :]
        _check_text(template, name, "parameter name")
        return Param(name)
    _check_text(template, piece, "segment")
    return Literal(piece)


def _check_text(template: str, text: str, what: str) -> None:
    if not text:
        raise TemplateSyntaxError(template, f"empty {what}")
    bad = sorted(RESERVED_CHARS.intersection(text))
    if bad:
        chars = " ".join(repr(c) for c in bad)
        raise TemplateSyntaxError(template, f"{what} {text!r} contains reserved {chars}")


def strip_query(pathname: str) -> str:
    """Return *pathname* up to (not including) the first ``?``."""
    return pathname.partition("?")[0]
