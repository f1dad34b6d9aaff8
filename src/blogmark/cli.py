"""Command-line interface for blogmark.

Commands:
    render    Render Markdown posts to HTML
    redirect  Write a redirect page

Each post is handled on its own: a content error in one post is logged and
the run continues with the next, finishing with exit status 1.
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from blogmark import __version__
from blogmark.config import ParseConfig, parse_config_context
from blogmark.errors import ContentError, TemplateError
from blogmark.parser import ComponentParser
from blogmark.post import split_frontmatter
from blogmark.renderers.html import HtmlRenderer
from blogmark.template import TemplateEngine
from blogmark.utils.logger import get_logger
from blogmark.utils.text import slugify

logger = get_logger(__name__)


def create_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="blogmark",
        description="Render extended Markdown blog posts to HTML",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="Log debug output")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Only log errors")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    render_parser = subparsers.add_parser("render", help="Render Markdown posts to HTML")
    render_parser.add_argument("files", nargs="+", type=Path, help="Markdown files")
    render_parser.add_argument(
        "-o", "--output", type=Path, help="Output directory (default: stdout)"
    )
    render_parser.add_argument(
        "--newline-soft-break",
        action="store_true",
        help="Render soft line breaks as <br/>",
    )
    render_parser.add_argument(
        "--standalone",
        action="store_true",
        help="Wrap each post into a full article page",
    )

    redirect_parser = subparsers.add_parser("redirect", help="Write a redirect page")
    redirect_parser.add_argument("target", help="URL to redirect to")
    redirect_parser.add_argument("-o", "--output", type=Path, required=True, help="Output file")
    redirect_parser.add_argument("--delay", default="3", help="Seconds before redirecting")

    return parser


def render_post(
    text: str,
    *,
    renderer: HtmlRenderer,
    engine: TemplateEngine | None = None,
    source_file: str | None = None,
) -> tuple[str, str | None]:
    """Render one post.

    Returns:
        (html, slug) where slug comes from the frontmatter, if any.

    Raises:
        ContentError: The post cannot be rendered.
    """
    info, body = split_frontmatter(text, source_file=source_file)
    content = renderer.render(ComponentParser(body, source_file=source_file))
    if engine is not None:
        content = engine.render_article(info, content)
    return content, info.slug


def cmd_render(args: argparse.Namespace) -> int:
    config = ParseConfig(treat_soft_break_as_newline=args.newline_soft_break)
    renderer = HtmlRenderer()
    engine = TemplateEngine.default() if args.standalone else None
    failures = 0

    with parse_config_context(config):
        for path in args.files:
            try:
                text = path.read_text(encoding="utf-8")
                html, slug = render_post(
                    text, renderer=renderer, engine=engine, source_file=str(path)
                )
            except OSError as e:
                logger.error("Cannot read %s: %s", path, e)
                failures += 1
                continue
            except ContentError as e:
                logger.error("Skipping %s: %s", path, e)
                failures += 1
                continue

            if args.output is None:
                sys.stdout.write(html)
                sys.stdout.write("\n")
                continue

            target = args.output / f"{slugify(slug or '') or path.stem}.html"
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(html, encoding="utf-8")
            logger.info("Rendered %s -> %s", path, target)

    return 0 if failures == 0 else 1


def cmd_redirect(args: argparse.Namespace) -> int:
    engine = TemplateEngine.default()
    try:
        page = engine.render_redirect(args.target, args.delay)
    except TemplateError as e:
        logger.error("%s", e)
        return 1
    args.output.parent.mkdir(parents=True, exist_ok=True)
    args.output.write_text(page, encoding="utf-8")
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)
    elif args.quiet:
        logging.basicConfig(level=logging.ERROR)
    else:
        logging.basicConfig(level=logging.WARNING)

    try:
        if args.command == "render":
            return cmd_render(args)
        if args.command == "redirect":
            return cmd_redirect(args)
        print(f"Unknown command: {args.command}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nOperation interrupted by user", file=sys.stderr)
        return 130


if __name__ == "__main__":
    sys.exit(main())
