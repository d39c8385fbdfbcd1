"""Command-line interface for semantic-markdown."""

import argparse
import json
import sys
from pathlib import Path
from typing import Optional

from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from . import __version__
from .conversion.parser import ConfigurationError
from .core.converter import convert_html_to_markdown
from .logging_config import setup_logging
from .models.config import ConversionOptions


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for CLI."""
    parser = argparse.ArgumentParser(
        prog="semantic-markdown",
        description="Convert HTML into semantic, token-efficient Markdown",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Convert a saved page
  semantic-markdown page.html

  # Keep only the main content, with metadata as front matter
  semantic-markdown page.html --main-content --meta extended --front-matter

  # Read from stdin, shorten URLs and keep the reference map
  curl -s https://example.com | semantic-markdown - --refify-urls --url-map-out refs.json
        """,
    )

    parser.add_argument(
        "input",
        nargs="?",
        help="HTML file to convert ('-' reads stdin)",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    parser.add_argument(
        "--doctor",
        action="store_true",
        help="Run diagnostic checks",
    )

    parser.add_argument(
        "--output",
        "-o",
        type=Path,
        default=None,
        help="Write Markdown to this file (default: stdout)",
    )

    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=None,
        help="YAML file with conversion options",
    )

    # Extraction settings
    extract_group = parser.add_argument_group("extraction settings")
    extract_group.add_argument(
        "--main-content",
        action="store_true",
        help="Convert only the detected main content",
    )
    extract_group.add_argument(
        "--meta",
        choices=["basic", "extended"],
        default=None,
        help="Extract metadata from <head>",
    )
    extract_group.add_argument(
        "--domain",
        default=None,
        help="Website domain stripped from links and images",
    )
    extract_group.add_argument(
        "--base-url",
        default=None,
        help="Base URL for resolving relative links",
    )
    extract_group.add_argument(
        "--exclude-tags",
        nargs="+",
        metavar="TAG",
        help="Tag names to skip",
    )
    extract_group.add_argument(
        "--visible-only",
        action="store_true",
        help="Skip elements hidden by attributes or inline styles",
    )
    extract_group.add_argument(
        "--track-table-columns",
        action="store_true",
        help="Annotate table cells with column ids",
    )
    extract_group.add_argument(
        "--parser",
        default=None,
        help="BeautifulSoup tree builder (html.parser, lxml, html5lib)",
    )

    # Output settings
    output_group = parser.add_argument_group("output settings")
    output_group.add_argument(
        "--front-matter",
        action="store_true",
        help="Emit metadata as front matter",
    )
    output_group.add_argument(
        "--refify-urls",
        action="store_true",
        help="Replace long URLs with short reference tokens",
    )
    output_group.add_argument(
        "--url-map-out",
        type=Path,
        default=None,
        help="Write the URL reference map as JSON",
    )

    # Logging
    log_group = parser.add_argument_group("logging")
    log_group.add_argument("--verbose", "-v", action="store_true", help="Verbose output")
    log_group.add_argument("--quiet", "-q", action="store_true", help="Only log errors")
    log_group.add_argument("--log-file", default=None, help="Also write logs to this file")

    return parser


def build_options(args: argparse.Namespace) -> ConversionOptions:
    """Merge the YAML config (if any) with command-line flags."""
    options_kwargs: dict = {}
    if args.config:
        options_kwargs = ConversionOptions.from_yaml_file(args.config).model_dump(exclude_unset=True)

    if args.main_content:
        options_kwargs["extract_main_content"] = True
    if args.meta:
        options_kwargs["include_meta_data"] = args.meta
    if args.domain:
        options_kwargs["website_domain"] = args.domain
    if args.base_url:
        options_kwargs["base_url"] = args.base_url
    if args.exclude_tags:
        options_kwargs["exclude_tag_names"] = args.exclude_tags
    if args.visible_only:
        options_kwargs["exclude_invisible_elements"] = True
    if args.track_table_columns:
        options_kwargs["enable_table_column_tracking"] = True
    if args.parser:
        options_kwargs["parser_features"] = args.parser
    if args.front_matter:
        options_kwargs["emit_front_matter"] = True
    if args.refify_urls or args.url_map_out:
        options_kwargs["refify_urls"] = True

    return ConversionOptions(**options_kwargs)


def read_input(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8", errors="replace")


def run_conversion(args: argparse.Namespace, console: Console) -> int:
    """Run a conversion from parsed arguments."""
    if not args.input:
        console.print("[red]Error:[/red] an input file (or '-') is required")
        return 1

    if args.verbose:
        level = "DEBUG"
    elif args.quiet:
        level = "ERROR"
    else:
        level = "WARNING"
    setup_logging(level=level, log_file=args.log_file)

    try:
        options = build_options(args)
    except (ValidationError, OSError) as e:
        console.print(f"[red]Configuration error:[/red] {escape(str(e))}")
        return 1

    try:
        html = read_input(args.input)
    except OSError as e:
        console.print(f"[red]Error:[/red] cannot read {escape(args.input)}: {escape(str(e))}")
        return 1

    try:
        markdown = convert_html_to_markdown(html, options)
    except ConfigurationError as e:
        console.print(f"[red]Configuration error:[/red] {escape(str(e))}")
        return 1

    if args.output:
        args.output.write_text(markdown, encoding="utf-8")
        if not args.quiet:
            console.print(f"[green]Wrote[/green] {len(markdown)} characters to {args.output}")
    else:
        sys.stdout.write(markdown)

    if args.url_map_out:
        args.url_map_out.write_text(json.dumps(options.url_map or {}, indent=2), encoding="utf-8")
        if not args.quiet:
            console.print(f"[green]Wrote[/green] {len(options.url_map or {})} URL references to {args.url_map_out}")

    return 0


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)
    console = Console(stderr=True)

    if args.doctor:
        from .doctor import run_doctor

        return run_doctor()

    return run_conversion(args, console)


if __name__ == "__main__":
    sys.exit(main())
