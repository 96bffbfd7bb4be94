#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Command-line interface for styledmark.

Renders a Markdown file (or stdin) into styled text and prints it as a
rich console preview, plain text, a table of runs, or JSON.

Examples
--------
    styledmark README.md
    styledmark README.md --format runs --size-category medium
    cat notes.md | styledmark - --format json --load-images

"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any, Optional

from rich.console import Console
from rich.table import Table

from styledmark import __version__
from styledmark.constants import (
    LINE_SEPARATOR,
    OBJECT_REPLACEMENT,
    PARAGRAPH_SEPARATOR,
    SIZE_CATEGORY_POINT_SIZES,
    TEXT_ALIGNMENTS,
)
from styledmark.exceptions import StyledMarkError
from styledmark.images.handlers import FileImageHandler
from styledmark.logging_utils import configure_logging
from styledmark.options.markdown import MarkdownParserOptions
from styledmark.options.styled_text import StyledTextRendererOptions
from styledmark.session import MarkdownSession
from styledmark.text.rich_export import to_rich_text
from styledmark.text.styled_text import Run, StyledText
from styledmark.utils.encoding import read_text_with_encoding_detection

logger = logging.getLogger(__name__)


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="styledmark",
        description="Render Markdown into styled text and preview it in the terminal.",
    )
    parser.add_argument("input", nargs="?", default="-", help="Markdown file to render, or '-' for stdin")
    parser.add_argument("--version", action="version", version=f"styledmark {__version__}")

    parser.add_argument(
        "--format",
        "-f",
        choices=["rich", "text", "runs", "json"],
        default="rich",
        help="Output format (default: rich)",
    )
    parser.add_argument(
        "--base-url",
        help="Base URL for relative links and images (default: the input file's directory)",
    )
    parser.add_argument(
        "--size-category",
        choices=list(SIZE_CATEGORY_POINT_SIZES),
        default="large",
        help="Size category fonts are resolved against (default: large)",
    )
    parser.add_argument(
        "--alignment",
        choices=list(TEXT_ALIGNMENTS),
        default="natural",
        help="Paragraph alignment (default: natural)",
    )
    parser.add_argument("--rtl", action="store_true", help="Use right-to-left writing direction")
    parser.add_argument("--line-spacing", type=float, default=0.0, help="Extra line spacing in points")

    parser.add_argument("--symbol-links", action="store_true", help="Parse ``name`` spans as symbol links")
    parser.add_argument("--no-tables", action="store_true", help="Do not parse GFM tables")

    parser.add_argument("--load-images", action="store_true", help="Resolve images before printing")
    parser.add_argument(
        "--allow-file-images",
        action="store_true",
        help="Allow loading images from file: URLs below the input file's directory",
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default="WARNING",
        help="Logging level (default: WARNING)",
    )
    parser.add_argument("--log-file", help="Also write log output to this file")
    parser.add_argument("--trace", action="store_true", help="Verbose log format with timestamps and logger names")
    return parser


def _read_input(input_arg: str) -> tuple[str, Optional[Path]]:
    if input_arg == "-":
        return read_text_with_encoding_detection(sys.stdin.buffer.read()), None
    path = Path(input_arg)
    return read_text_with_encoding_detection(path.read_bytes()), path


def _default_base_url(path: Optional[Path]) -> Optional[str]:
    if path is None:
        return None
    return path.resolve().parent.as_uri() + "/"


def plain_text(styled_text: StyledText) -> str:
    """Return the text with separators turned into newlines and images removed."""
    text = styled_text.text.replace(LINE_SEPARATOR, "\n").replace(PARAGRAPH_SEPARATOR, "\n")
    return text.replace(OBJECT_REPLACEMENT, "")


def run_to_dict(run: Run) -> dict[str, Any]:
    """Describe a run with JSON-serializable values."""
    attributes = run.attributes
    font = attributes.font
    paragraph = attributes.paragraph_style
    result: dict[str, Any] = {"text": run.text}
    if font is not None:
        result["font"] = {
            "family": font.family,
            "point_size": round(font.point_size, 2),
            "bold": font.bold,
            "italic": font.italic,
            "monospaced": font.monospaced,
        }
    if attributes.color is not None:
        result["color"] = attributes.color
    if attributes.link is not None:
        result["link"] = attributes.link
    if attributes.link_title is not None:
        result["link_title"] = attributes.link_title
    if attributes.strikethrough:
        result["strikethrough"] = True
    if paragraph is not None:
        result["paragraph"] = {
            "alignment": paragraph.alignment,
            "writing_direction": paragraph.writing_direction,
            "paragraph_spacing": paragraph.paragraph_spacing,
            "head_indent": paragraph.head_indent,
            "tail_indent": paragraph.tail_indent,
            "tab_stops": [[stop.alignment, stop.location] for stop in paragraph.tab_stops],
        }
    if attributes.image_url is not None:
        result["image"] = {"url": attributes.image_url, "loaded": attributes.image is not None}
        if attributes.image is not None:
            result["image"].update(width=attributes.image.width, height=attributes.image.height)
    return result


def _runs_table(styled_text: StyledText) -> Table:
    table = Table(title="Styled runs")
    table.add_column("Range", style="cyan", no_wrap=True)
    table.add_column("Text", style="white")
    table.add_column("Font", style="magenta")
    table.add_column("Link", style="blue")
    table.add_column("Indent", justify="right")
    for start, end, run in styled_text.ranges():
        font = run.attributes.font
        font_desc = ""
        if font is not None:
            flags = "".join(flag for flag, on in (("B", font.bold), ("I", font.italic), ("M", font.monospaced)) if on)
            font_desc = f"{font.point_size:g}pt {flags}".strip()
        paragraph = run.attributes.paragraph_style
        table.add_row(
            f"{start}-{end}",
            repr(run.text),
            font_desc,
            run.attributes.link or "",
            f"{paragraph.head_indent:g}" if paragraph else "",
        )
    return table


async def _resolve_images(session: MarkdownSession, styled_text_source: str) -> StyledText:
    result = session.render(styled_text_source)
    final = result.styled_text
    async for snapshot in session.load_images(result):
        final = snapshot.styled_text
        logger.info(f"Images: {len(snapshot.resolved)} resolved, {len(snapshot.failed)} failed")
    return final


def main(args: Optional[list[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    configure_logging(
        parsed_args.log_level,
        log_file=parsed_args.log_file,
        trace_mode=parsed_args.trace,
        use_rich=parsed_args.format == "rich",
    )

    try:
        markdown, path = _read_input(parsed_args.input)
    except OSError as e:
        print(f"Error: cannot read {parsed_args.input}: {e}", file=sys.stderr)
        return 1

    try:
        options = StyledTextRendererOptions(
            base_url=parsed_args.base_url or _default_base_url(path),
            size_category=parsed_args.size_category,
            alignment=parsed_args.alignment,
            writing_direction="rtl" if parsed_args.rtl else "ltr",
            line_spacing=parsed_args.line_spacing,
        )
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    parser_options = MarkdownParserOptions(
        parse_tables=not parsed_args.no_tables, parse_symbol_links=parsed_args.symbol_links
    )
    session = MarkdownSession(options, parser_options=parser_options)
    if parsed_args.allow_file_images:
        root = path.resolve().parent if path is not None else Path.cwd()
        session.set_image_handler("file", FileImageHandler(root=root))

    try:
        if parsed_args.load_images:
            styled_text = asyncio.run(_resolve_images(session, markdown))
        else:
            styled_text = session.render(markdown).styled_text
    except StyledMarkError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if parsed_args.format == "json":
        print(json.dumps([run_to_dict(run) for run in styled_text.runs], indent=2, ensure_ascii=False))
    elif parsed_args.format == "text":
        print(plain_text(styled_text))
    elif parsed_args.format == "runs":
        Console().print(_runs_table(styled_text))
    else:
        Console().print(to_rich_text(styled_text))
    return 0
