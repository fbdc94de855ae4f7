"""safepaths exception hierarchy.

Shared across the parser, registry, matcher, builder, and query codec so
every module raises and catches the same types.

"No match" is not an error: ``match_path`` and ``extract_params`` return
``None`` for paths they do not recognise.
"""


class SafePathsError(Exception):
    """Base for all safepaths-specific errors."""


class ConfigurationError(SafePathsError):
    """Raised when the registry is configured incorrectly.

    Always a programming mistake caught at startup, never a runtime
    condition worth retrying.
    """


class TemplateSyntaxError(ConfigurationError):
    """A path template violates the template grammar.

    Raised by ``parse_template`` and therefore by ``PathRegistry.add``.
    The registry is left untouched when this is raised.
    """

    def __init__(self, template: str, reason: str) -> None:
        self.template = template
        self.reason = reason
        super().__init__(f"Invalid path template {template!r}: {reason}")


class DuplicateTemplateError(ConfigurationError):
    """The template string is already registered."""

    def __init__(self, template: str) -> None:
        self.template = template
        super().__init__(f"Path template {template!r} is already registered")


class RegistryFrozenError(ConfigurationError):
    """``add`` was called after the registry was frozen."""


class UnknownTemplateError(SafePathsError, KeyError):
    """A helper was called with a template key that was never registered."""

    def __init__(self, template: str) -> None:
        self.template = template
        super().__init__(template)

    def __str__(self) -> str:
        return f"No path template registered as {self.template!r}"


class BuildError(SafePathsError, ValueError):
    """Parameters supplied to ``build_path`` do not fit the template."""


class ValidationError(SafePathsError, ValueError):
    """A value failed its schema.

    ``errors`` maps field names to lists of messages, the same shape the
    form validators produce::

        {"page": ["Expected int, got 'abc'"]}

    The empty field name ``""`` holds errors about the value as a whole.
    """

    def __init__(self, errors: dict[str, list[str]], *, schema: str = "") -> None:
        self.errors = errors
        self.schema = schema
        super().__init__(self._format())

    def _format(self) -> str:
        parts = []
        for field, messages in self.errors.items():
            label = field or "<value>"
            parts.extend(f"{label}: {message}" for message in messages)
        prefix = f"{self.schema} validation failed" if self.schema else "Validation failed"
        if not parts:
            return prefix
        return f"{prefix}: " + "; ".join(parts)
