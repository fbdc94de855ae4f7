"""Tests for safepaths.cli — CLI entrypoint and subcommands."""

from pathlib import Path

import pytest

from safepaths.cli import main
from safepaths.cli._resolve import resolve_helpers
from safepaths.helpers import PathHelpers

SAMPLE = '''
from dataclasses import dataclass

from safepaths import PathRegistry, create_path_helpers


@dataclass(frozen=True, slots=True)
class Listing:
    page: int = 1


def build():
    paths = PathRegistry()
    paths.add("/posts", search_params=Listing)
    paths.add("/posts/:postId", metadata={"owner": "blog"})
    paths.add("/api(.*)")
    return paths


paths = build()
helpers = create_path_helpers(build())
not_paths = 42
'''


@pytest.fixture
def sample_module(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> str:
    (tmp_path / "safepaths_cli_sample.py").write_text(SAMPLE)
    monkeypatch.syspath_prepend(str(tmp_path))
    return "safepaths_cli_sample"


class TestCLIHelp:
    @pytest.mark.parametrize("argv", [["--help"], ["paths", "--help"], ["match", "--help"], ["build", "--help"]])
    def test_help_exits_zero(self, argv: list[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(argv)
        assert exc_info.value.code == 0

    def test_no_command_exits_zero(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 0
        assert "safepaths" in capsys.readouterr().out

    @pytest.mark.parametrize("argv", [["paths"], ["match", "mod:paths"], ["build", "mod:paths"]])
    def test_missing_args(self, argv: list[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(argv)
        assert exc_info.value.code == 2


class TestResolve:
    def test_registry(self, sample_module: str) -> None:
        assert isinstance(resolve_helpers(f"{sample_module}:paths"), PathHelpers)

    def test_default_attribute(self, sample_module: str) -> None:
        assert isinstance(resolve_helpers(sample_module), PathHelpers)

    def test_helpers(self, sample_module: str) -> None:
        assert isinstance(resolve_helpers(f"{sample_module}:helpers"), PathHelpers)

    def test_factory(self, sample_module: str) -> None:
        helpers = resolve_helpers(f"{sample_module}:build")
        assert list(helpers.registry) == ["/posts", "/posts/:postId", "/api(.*)"]

    def test_wrong_type(self, sample_module: str) -> None:
        with pytest.raises(TypeError, match="not a PathRegistry"):
            resolve_helpers(f"{sample_module}:not_paths")

    def test_missing_module_exits(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["paths", "safepaths_no_such_module:paths"])
        assert exc_info.value.code == 1
        assert "Error:" in capsys.readouterr().err


class TestPathsCommand:
    def test_lists_templates(self, sample_module: str, capsys: pytest.CaptureFixture[str]) -> None:
        main(["paths", f"{sample_module}:paths"])
        out = capsys.readouterr().out
        lines = out.splitlines()
        assert lines[0].split() == ["TEMPLATE", "PARAMS", "QUERY"]
        assert "/posts/:postId" in out
        assert "postId" in out
        assert "DataclassSchema(Listing)" in out


class TestMatchCommand:
    def test_match(self, sample_module: str, capsys: pytest.CaptureFixture[str]) -> None:
        main(["match", f"{sample_module}:paths", "/posts/42?page=2"])
        out = capsys.readouterr().out
        assert "template: /posts/:postId" in out
        assert "postId = 42" in out
        assert "'owner': 'blog'" in out

    def test_no_match(self, sample_module: str, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["match", f"{sample_module}:paths", "/users"])
        assert exc_info.value.code == 1
        assert "No template matches" in capsys.readouterr().err


class TestBuildCommand:
    def test_build_params(self, sample_module: str, capsys: pytest.CaptureFixture[str]) -> None:
        main(["build", f"{sample_module}:paths", "/posts/:postId", "--param", "postId=7"])
        assert capsys.readouterr().out.strip() == "/posts/7"

    def test_build_query(self, sample_module: str, capsys: pytest.CaptureFixture[str]) -> None:
        main(["build", f"{sample_module}:paths", "/posts", "--query", "page=3"])
        assert capsys.readouterr().out.strip() == "/posts?page=3"

    def test_build_missing_param(
        self, sample_module: str, capsys: pytest.CaptureFixture[str]
    ) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["build", f"{sample_module}:paths", "/posts/:postId"])
        assert exc_info.value.code == 1
        assert "Missing parameter" in capsys.readouterr().err

    def test_build_bad_pair(self, sample_module: str) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["build", f"{sample_module}:paths", "/posts/:postId", "--param", "postId"])
        assert exc_info.value.code == 2
