"""Registry configuration.

PathsConfig is a frozen dataclass — immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from dataclasses import dataclass

from safepaths.errors import ConfigurationError

DUPLICATE_POLICIES = frozenset({"raise", "ignore"})


@dataclass(frozen=True, slots=True)
class PathsConfig:
    """Registry configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = PathsConfig(max_depth=8, on_duplicate="ignore")
    """

    # Templates
    max_depth: int = 5  # Maximum number of path segments in a template

    # Registration
    on_duplicate: str = "raise"  # "raise" or "ignore"

    # Matching
    case_sensitive: bool = True

    # Building: only the path component of the resolved URL is kept
    base_url: str = "http://localhost"

    def __post_init__(self) -> None:
        if self.max_depth < 1:
            msg = f"max_depth must be at least 1, got {self.max_depth}"
            raise ConfigurationError(msg)
        if self.on_duplicate not in DUPLICATE_POLICIES:
            allowed = ", ".join(sorted(DUPLICATE_POLICIES))
            msg = f"on_duplicate must be one of {allowed}, got {self.on_duplicate!r}"
            raise ConfigurationError(msg)
        if not self.base_url.startswith(("http://", "https://")):
            msg = f"base_url must be an absolute http(s) URL, got {self.base_url!r}"
            raise ConfigurationError(msg)
