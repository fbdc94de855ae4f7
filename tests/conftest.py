"""Shared registries for the safepaths tests."""

from dataclasses import dataclass, field
from typing import Literal

import pytest

from safepaths.helpers import PathHelpers, create_path_helpers
from safepaths.registry import PathRegistry


@dataclass(frozen=True, slots=True)
class Access:
    allowed_permissions: list[Literal["user", "admin"]]
    testing: str


@dataclass(frozen=True, slots=True)
class PostQuery:
    query: str | None = None


@dataclass(frozen=True, slots=True)
class CommentQuery:
    query: str = "hello world"
    optional: str = "the parsing worked"


@dataclass(frozen=True, slots=True)
class ListingQuery:
    page: int = 1
    tags: list[str] = field(default_factory=list)
    archived: bool = False


@pytest.fixture
def registry() -> PathRegistry:
    """The posts/api registry, in the order precedence depends on."""
    paths = PathRegistry(metadata_schema=Access)
    paths.add(
        "/posts/details/:postId",
        search_params=PostQuery,
        metadata={"allowed_permissions": ["admin"], "testing": "hello world"},
    )
    paths.add(
        "/posts/details/:postId/:commentId",
        search_params=CommentQuery,
        metadata={"allowed_permissions": ["user"], "testing": "hello world"},
    )
    paths.add(
        "/posts",
        search_params=ListingQuery,
        metadata={"allowed_permissions": ["user"], "testing": "hello world"},
    )
    paths.add(
        "/api(.*)",
        metadata={"allowed_permissions": ["user"], "testing": "hello world"},
    )
    return paths


@pytest.fixture
def helpers(registry: PathRegistry) -> PathHelpers:
    return create_path_helpers(registry)
