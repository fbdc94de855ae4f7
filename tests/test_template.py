"""Tests for safepaths.routing.template — template parsing."""

import pytest

from safepaths.errors import TemplateSyntaxError
from safepaths.routing.template import (
    Literal,
    Param,
    PathTemplate,
    WildcardTail,
    parse_template,
    strip_query,
)


class TestParseTemplate:
    def test_root(self) -> None:
        template = parse_template("/")
        assert template.segments == ()
        assert template.param_names == ()

    def test_static(self) -> None:
        template = parse_template("/posts")
        assert template.segments == (Literal("posts"),)

    def test_params(self) -> None:
        template = parse_template("/posts/details/:postId/:commentId")
        assert template.segments == (
            Literal("posts"),
            Literal("details"),
            Param("postId"),
            Param("commentId"),
        )
        assert template.param_names == ("postId", "commentId")

    def test_glued_wildcard(self) -> None:
        template = parse_template("/api(.*)")
        assert template.segments == (Literal("api"), WildcardTail())
        assert template.has_wildcard is True

    def test_standalone_wildcard(self) -> None:
        template = parse_template("/files/(.*)")
        assert template.segments == (Literal("files"), WildcardTail(standalone=True))

    def test_catch_all(self) -> None:
        template = parse_template("/(.*)")
        assert template.segments == (WildcardTail(standalone=True),)

    def test_param_with_wildcard(self) -> None:
        template = parse_template("/users/:id(.*)")
        assert template.segments == (Literal("users"), Param("id"), WildcardTail())
        assert template.param_names == ("id",)

    def test_no_wildcard(self) -> None:
        assert parse_template("/posts/:id").has_wildcard is False

    def test_source_kept(self) -> None:
        template = parse_template("/posts/:id")
        assert template.source == "/posts/:id"
        assert str(template) == "/posts/:id"

    def test_max_depth_allowed(self) -> None:
        template = parse_template("/a/b/c/d/e")
        assert len(template.segments) == 5

    def test_wildcard_not_counted_in_depth(self) -> None:
        template = parse_template("/a/b/c/d/e(.*)")
        assert template.has_wildcard

    def test_custom_max_depth(self) -> None:
        template = parse_template("/a/b/c/d/e/f/g", max_depth=7)
        assert len(template.segments) == 7

    def test_frozen(self) -> None:
        template = parse_template("/posts")
        with pytest.raises(AttributeError):
            template.source = "/other"  # type: ignore[misc]


class TestParseTemplateErrors:
    @pytest.mark.parametrize(
        "template",
        [
            "/posts/:post id",
            "/posts/:post.id",
            "/posts/:a|b",
            "/posts/:a&b",
            "/posts/:a#b",
            "/posts/:a?b",
            "/posts/::id",
            "/file.txt",
            "/hello world",
        ],
    )
    def test_reserved_characters(self, template: str) -> None:
        with pytest.raises(TemplateSyntaxError) as exc_info:
            parse_template(template)
        assert "reserved" in str(exc_info.value)
        assert exc_info.value.template == template

    @pytest.mark.parametrize("template", ["/posts//comments", "/posts/", "/:", "//"])
    def test_empty_segment(self, template: str) -> None:
        with pytest.raises(TemplateSyntaxError, match="empty"):
            parse_template(template)

    @pytest.mark.parametrize("template", ["", "posts", ":id", "(.*)"])
    def test_must_start_with_slash(self, template: str) -> None:
        with pytest.raises(TemplateSyntaxError, match="start with '/'"):
            parse_template(template)

    @pytest.mark.parametrize("template", ["/(.*)/posts", "/api(.*)/v1"])
    def test_wildcard_must_be_last(self, template: str) -> None:
        with pytest.raises(TemplateSyntaxError, match="last segment"):
            parse_template(template)

    def test_depth_exceeded(self) -> None:
        with pytest.raises(TemplateSyntaxError, match="maximum depth of 5"):
            parse_template("/a/b/c/d/e/f")

    def test_duplicate_param(self) -> None:
        with pytest.raises(TemplateSyntaxError, match="more than once"):
            parse_template("/users/:id/posts/:id")


class TestPathTemplate:
    def test_equality(self) -> None:
        assert parse_template("/posts/:id") == PathTemplate(
            source="/posts/:id", segments=(Literal("posts"), Param("id"))
        )


class TestStripQuery:
    def test_no_query(self) -> None:
        assert strip_query("/posts/1") == "/posts/1"

    def test_query(self) -> None:
        assert strip_query("/posts/1?page=2&q=x") == "/posts/1"

    def test_only_first_question_mark(self) -> None:
        assert strip_query("/posts?a=?b") == "/posts"
