"""Path registry — the ordered, append-only table of path templates.

Templates are registered during setup and frozen before any matching or
building happens::

    paths = PathRegistry(metadata_schema=Access)
    paths.add("/posts/:postId", search_params=PostQuery, metadata={"roles": ["user"]})
    paths.add("/api(.*)", metadata={"roles": ["admin"]})
    paths.freeze()

Insertion order is the match precedence: register specific templates
before general ones.
"""

import logging
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Final

from safepaths.config import PathsConfig
from safepaths.errors import (
    ConfigurationError,
    DuplicateTemplateError,
    RegistryFrozenError,
    UnknownTemplateError,
)
from safepaths.routing.template import PathTemplate, parse_template
from safepaths.schema import Schema, as_schema

logger = logging.getLogger("safepaths.registry")


class _Missing:
    __slots__ = ()

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Final[Any] = _Missing()


@dataclass(frozen=True, slots=True)
class RegistryEntry:
    """One registered template. Never mutated after ``add``."""

    template: PathTemplate
    param_names: tuple[str, ...]
    search_params_schema: Schema | None = None
    metadata: Any = None

    @property
    def key(self) -> str:
        """The template string the entry is registered under."""
        return self.template.source


class PathRegistry:
    """Ordered mapping of template string -> ``RegistryEntry``.

    If *metadata_schema* is given, every ``add`` must supply metadata.
    Metadata is validated lazily, when a path matches.
    """

    __slots__ = ("_entries", "_frozen", "config", "metadata_schema")

    def __init__(
        self,
        metadata_schema: Any = None,
        *,
        config: PathsConfig | None = None,
    ) -> None:
        self.metadata_schema: Schema | None = as_schema(metadata_schema)
        self.config = config or PathsConfig()
        self._entries: dict[str, RegistryEntry] = {}
        self._frozen = False

    def add(
        self,
        template: str,
        *,
        search_params: Any = None,
        metadata: Any = MISSING,
    ) -> "PathRegistry":
        """Register *template*. Must be called before ``freeze()``.

        Returns the registry so registrations can be chained.

        Raises ``TemplateSyntaxError`` for a malformed template and
        ``DuplicateTemplateError`` for a repeat (unless the config says
        to ignore duplicates).
        """
        if self._frozen:
            msg = f"Cannot add {template!r}: the registry is frozen."
            raise RegistryFrozenError(msg)

        parsed = parse_template(template, max_depth=self.config.max_depth)

        if template in self._entries:
            if self.config.on_duplicate == "ignore":
                logger.warning("Ignoring duplicate path template %r", template)
                return self
            raise DuplicateTemplateError(template)

        if metadata is MISSING:
            if self.metadata_schema is not None:
                msg = f"Path template {template!r} needs metadata: the registry has a metadata schema."
                raise ConfigurationError(msg)
            metadata = None

        entry = RegistryEntry(
            template=parsed,
            param_names=parsed.param_names,
            search_params_schema=as_schema(search_params),
            metadata=metadata,
        )
        self._entries[template] = entry
        logger.debug("Registered %r (params=%s)", template, ", ".join(entry.param_names) or "-")
        return self

    def freeze(self) -> None:
        """Make the registry read-only. Safe to call more than once."""
        if not self._frozen:
            self._frozen = True
            logger.debug("Registry frozen with %d templates", len(self._entries))

    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def entries(self) -> Mapping[str, RegistryEntry]:
        """Read-only, insertion-ordered view of the entries."""
        return MappingProxyType(self._entries)

    def get(self, key: str) -> RegistryEntry | None:
        return self._entries.get(key)

    def __getitem__(self, key: str) -> RegistryEntry:
        try:
            return self._entries[key]
        except KeyError:
            raise UnknownTemplateError(key) from None

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        state = "frozen" if self._frozen else "open"
        return f"<PathRegistry {len(self._entries)} templates ({state})>"
