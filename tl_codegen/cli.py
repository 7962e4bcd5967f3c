"""
Command-line interface for tl_codegen.

Loads a schema document, generates code for the requested language and
writes it to the output file only when its content changed.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any, Sequence

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from .codegen import (
    ConfigError,
    GeneratorError,
    RegistryError,
    generate_code,
    get_generator,
    get_language_info,
    list_supported_languages,
    load_config,
)
from .codegen.core.output import is_up_to_date, write_if_changed
from .logging_config import get_logger, setup_logging
from .utils import SchemaLoaderError, load_schema

logger = get_logger(__name__)

console = Console()


class CLIError(Exception):
    """Exception raised for CLI-related errors."""

    pass


def create_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="tl-codegen",
        description="Generate typed bindings from a TL schema document",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  tl-codegen schema.json -o src/td_api_json.rs
  tl-codegen schema.json --check -o src/td_api_json.rs
  tl-codegen --url https://example.org/schema.json
  tl-codegen --list-languages
        """.strip(),
    )

    input_group = parser.add_mutually_exclusive_group(required=False)
    input_group.add_argument("schema", nargs="?", help="JSON schema document")
    input_group.add_argument("--url", help="URL to fetch the schema document from")

    parser.add_argument(
        "--language", "-l", default="rust", help="Target language (default: rust)"
    )
    parser.add_argument("--output", "-o", help="Output file (default: stdout)")
    parser.add_argument("--config", help="Configuration file path (JSON)")

    style_group = parser.add_argument_group("style options")
    style_group.add_argument(
        "--spaces",
        action="store_true",
        help="Indent with spaces instead of tabs",
    )
    style_group.add_argument(
        "--field-case",
        choices=["snake", "camel", "pascal", "original"],
        help="Naming case for struct fields",
    )
    style_group.add_argument(
        "--no-comments",
        action="store_true",
        help="Don't add doc comments to generated code",
    )
    style_group.add_argument(
        "--crlf",
        action="store_true",
        help="Write the output file with CRLF line endings",
    )

    rust_group = parser.add_argument_group("Rust-specific options")
    rust_group.add_argument("--tag-field", help="serde tag field of enums (default: @type)")
    rust_group.add_argument(
        "--maximal-union",
        metavar="PATH",
        help="Enum the Object and Function enums convert to/from ('' to disable)",
    )

    run_group = parser.add_argument_group("run options")
    run_group.add_argument(
        "--check",
        action="store_true",
        help="Exit with status 1 if the output file is out of date; never write",
    )
    run_group.add_argument(
        "--verbose", "-v", action="store_true", help="Show generation metadata"
    )
    run_group.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )
    run_group.add_argument("--log-file", help="Also write the log to this file")

    info_group = parser.add_argument_group("information")
    info_group.add_argument(
        "--list-languages",
        action="store_true",
        help="List supported languages and exit",
    )
    return parser


def _build_config_overrides(args: argparse.Namespace) -> dict[str, Any]:
    """Collect configuration overrides given on the command line."""
    overrides: dict[str, Any] = {}

    if args.spaces:
        overrides["use_tabs"] = False
    if args.field_case:
        overrides["field_case"] = args.field_case
    if args.no_comments:
        overrides["add_comments"] = False
    if args.crlf:
        overrides["line_ending"] = "\r\n"
    if args.tag_field:
        overrides["tag_field"] = args.tag_field
    if args.maximal_union is not None:
        overrides["maximal_union"] = args.maximal_union

    return overrides


def _list_languages() -> int:
    """List supported languages in a table."""
    table = Table(title="Supported Languages", box=box.ROUNDED, title_style="bold cyan")
    table.add_column("Language", style="bold green", no_wrap=True)
    table.add_column("Extension", style="cyan")
    table.add_column("Generator Class", style="dim")
    table.add_column("Aliases", style="blue")

    for language in list_supported_languages():
        info = get_language_info(language)
        aliases = ", ".join(info["aliases"]) if info["aliases"] else "[dim]none[/dim]"
        table.add_row(language, info["file_extension"], info["class"], aliases)

    console.print(table)
    return 0


def _show_metadata(metadata: dict[str, Any]):
    table = Table(
        title="Generation Metadata",
        box=box.SIMPLE,
        show_header=True,
        header_style="bold cyan",
    )
    table.add_column("Property", style="bold")
    table.add_column("Value", style="green")

    for key, value in metadata.items():
        table.add_row(key.replace("_", " ").title(), str(value))

    console.print(table)


def run(args: argparse.Namespace) -> int:
    """Execute a parsed command line. Returns the exit code."""
    if args.list_languages:
        return _list_languages()

    if not (args.schema or args.url):
        raise CLIError("Input source required (schema file or --url)")

    if args.check and not args.output:
        raise CLIError("--check requires --output")

    config = load_config(
        args.language.lower(),
        custom_config=_build_config_overrides(args),
        config_file=args.config,
    )
    generator = get_generator(args.language, config)

    source, schema = load_schema(file_path=args.schema, url=args.url)
    result = generate_code(generator, schema)

    if not result.success:
        console.print(f"[red]✗ Code generation failed:[/red] {result.error_message}")
        return 1

    for warning in result.warnings:
        console.print(f"[yellow]•[/yellow] {warning}")

    if args.verbose:
        _show_metadata(result.metadata)

    line_ending = generator.config.line_ending

    if args.output:
        output_path = Path(args.output)
        if args.check:
            if is_up_to_date(output_path, result.code, line_ending):
                console.print(f"[green]✓[/green] {output_path} is up to date")
                return 0
            console.print(f"[red]✗[/red] {output_path} is out of date")
            return 1

        if write_if_changed(output_path, result.code, line_ending):
            console.print(
                f"[green]✓[/green] Generated {generator.language_name} code from "
                f"{source} saved to [cyan]{output_path}[/cyan]"
            )
        else:
            console.print(f"[green]✓[/green] {output_path} is up to date")
        return 0

    console.print(
        Panel(
            Syntax(result.code, generator.language_name, theme="monokai"),
            title=f"Generated {generator.language_name.title()} Code",
            border_style="green",
        )
    )
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point of the tl-codegen command."""
    parser = create_parser()
    args = parser.parse_args(argv)

    setup_logging(args.log_level, args.log_file)
    logger.debug("Arguments: %s", args)

    try:
        return run(args)
    except (CLIError, ConfigError, RegistryError, SchemaLoaderError) as e:
        console.print(f"[red]✗ Error:[/red] {e}")
        return 1
    except FileNotFoundError as e:
        console.print(f"[red]✗ Error:[/red] {e}")
        return 1
    except GeneratorError as e:
        # Output failures land here; nothing partial is left behind
        console.print(f"[red]✗ Error:[/red] {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
