"""Tests for the command-line interface."""

import logging
from pathlib import Path

import pytest

from blogmark import __version__
from blogmark.cli import create_argument_parser, main, render_post
from blogmark.renderers import HtmlRenderer
from blogmark.template import TemplateEngine


def write(directory: Path, name: str, text: str) -> Path:
    path = directory / name
    path.write_text(text, encoding="utf-8")
    return path


class TestArguments:
    """Argument parsing."""

    def test_render_options(self) -> None:
        args = create_argument_parser().parse_args(
            ["render", "a.md", "b.md", "-o", "out", "--newline-soft-break", "--standalone"]
        )
        assert args.command == "render"
        assert [p.name for p in args.files] == ["a.md", "b.md"]
        assert args.output == Path("out")
        assert args.newline_soft_break is True
        assert args.standalone is True

    def test_version(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0
        assert __version__ in capsys.readouterr().out

    def test_no_command(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main([]) == 1
        assert "usage:" in capsys.readouterr().out


class TestRenderPost:
    """Rendering a single post."""

    def test_body_and_slug(self) -> None:
        html, slug = render_post("---\nslug: s\n---\n# T\n", renderer=HtmlRenderer())
        assert html == "<h1>T</h1>"
        assert slug == "s"

    def test_standalone(self) -> None:
        html, _ = render_post(
            "---\ntitle: T\n---\nbody\n",
            renderer=HtmlRenderer(),
            engine=TemplateEngine.default(),
        )
        assert html.startswith("<!DOCTYPE html>")
        assert "<title>T</title>" in html
        assert "<p>body</p>" in html


class TestRenderCommand:
    """The render command."""

    def test_stdout(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        post = write(tmp_path, "post.md", "# Hi\n")
        assert main(["render", str(post)]) == 0
        assert capsys.readouterr().out == "<h1>Hi</h1>\n"

    def test_output_named_by_slug(self, tmp_path: Path) -> None:
        post = write(tmp_path, "post.md", "---\nslug: My Post\n---\ntext\n")
        out = tmp_path / "site"
        assert main(["render", str(post), "-o", str(out)]) == 0
        assert (out / "my-post.html").read_text(encoding="utf-8") == "<p>text</p>"

    def test_output_named_by_stem(self, tmp_path: Path) -> None:
        post = write(tmp_path, "first.md", "text\n")
        out = tmp_path / "site"
        assert main(["render", str(post), "-o", str(out)]) == 0
        assert (out / "first.html").exists()

    def test_soft_break_flag(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        post = write(tmp_path, "post.md", "a\nb\n")
        assert main(["render", "--newline-soft-break", str(post)]) == 0
        assert capsys.readouterr().out == "<p>a<br/>b</p>\n"

    def test_bad_post_does_not_stop_others(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        bad = write(tmp_path, "bad.md", "<div>\nraw\n</div>\n")
        unclosed = write(tmp_path, "unclosed.md", "---\ntitle: x\nno closing fence\n")
        good = write(tmp_path, "good.md", "fine\n")
        out = tmp_path / "site"
        with caplog.at_level(logging.ERROR, logger="blogmark.cli"):
            status = main(["render", str(bad), str(unclosed), str(good), "-o", str(out)])
        assert status == 1
        assert (out / "good.html").read_text(encoding="utf-8") == "<p>fine</p>"
        assert not (out / "bad.html").exists()
        assert "Unsupported feature: html block" in caplog.text
        assert "Unclosed frontmatter" in caplog.text

    def test_missing_file(self, tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.ERROR, logger="blogmark.cli"):
            assert main(["render", str(tmp_path / "nope.md")]) == 1
        assert "Cannot read" in caplog.text


class TestRedirectCommand:
    """The redirect command."""

    def test_writes_page(self, tmp_path: Path) -> None:
        target = tmp_path / "old" / "index.html"
        assert main(["redirect", "/new/", "-o", str(target), "--delay", "0"]) == 0
        page = target.read_text(encoding="utf-8")
        assert 'content="0; url=/new/"' in page

    def test_output_required(self) -> None:
        with pytest.raises(SystemExit):
            main(["redirect", "/new/"])
