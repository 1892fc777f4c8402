"""
Command line interface for rendering declaration syntax.
"""

import argparse
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .declarations import (
    RegistryError,
    get_generator,
    load_config,
    render_entities,
)
from .declarations.core.config import ConfigError
from .declarations.core.generator import RenderResult
from .declarations.registry import get_language_info, get_registry, list_all_language_info
from .loader import EntityLoadError, load_entities
from .logging_config import get_logger, setup_logging

logger = get_logger(__name__)

EXAMPLES = """
Examples:
  api-syntax render entities.json -l csharp -l vb
  api-syntax render entities.json -l js --plain --output syntax.txt
  api-syntax --list-languages
  api-syntax --language-info aspnet
""".strip()


class CLIError(Exception):
    """Exception raised for CLI-related errors."""

    pass


# Initialize rich console
console = Console()


def create_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="api-syntax",
        description="Render API entity metadata as declaration syntax",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=EXAMPLES,
    )

    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    # Informational commands
    info_group = parser.add_argument_group("information")
    info_group.add_argument(
        "--list-languages",
        action="store_true",
        help="List supported languages and exit",
    )
    info_group.add_argument(
        "--language-info",
        metavar="LANGUAGE",
        help="Show detailed info about a language and exit",
    )

    subparsers = parser.add_subparsers(dest="command")

    render_parser = subparsers.add_parser(
        "render",
        help="Render entities from a JSON file",
        description="Render every entity of FILE in each requested language",
    )
    render_parser.add_argument("file", help="JSON file holding one entity or a list")
    render_parser.add_argument(
        "--language",
        "-l",
        action="append",
        required=True,
        metavar="LANGUAGE",
        help="Target language (repeatable)",
    )
    render_parser.add_argument("--config", metavar="FILE", help="Configuration file path (JSON)")
    render_parser.add_argument(
        "--wrap-column", type=int, metavar="N", help="Column past which lines are wrapped"
    )
    render_parser.add_argument(
        "--plain", action="store_true", help="Print plain text without styles or panels"
    )
    render_parser.add_argument("--output", "-o", metavar="FILE", help="Output file (default: stdout)")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Entry point of the ``api-syntax`` command.

    Args:
        argv: Arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    setup_logging("DEBUG" if args.verbose else "WARNING")

    try:
        if args.list_languages:
            return _list_languages()

        if args.language_info:
            return _show_language_info(args.language_info)

        if args.command == "render":
            return _render(args)

        parser.print_help()
        return 0

    except CLIError as e:
        console.print(f"[red]✗ Error:[/red] {escape(str(e))}")
        return 1


def _list_languages() -> int:
    """List supported languages with details."""
    language_info = list_all_language_info()

    if not language_info:
        console.print("[yellow]⚠️ No syntax generators available[/yellow]")
        return 0

    table = Table(title="📋 Supported Languages", box=box.ROUNDED, title_style="bold cyan")

    table.add_column("Language", style="bold green", no_wrap=True)
    table.add_column("Style", style="cyan")
    table.add_column("Generator Class", style="dim")
    table.add_column("Aliases", style="blue")

    for key, info in sorted(language_info.items()):
        aliases = ", ".join(info["aliases"]) if info["aliases"] else "[dim]none[/dim]"
        table.add_row(f"🔧 {key}", info["style_id"], info["class"], aliases)

    console.print()
    console.print(table)
    console.print()
    console.print(
        Panel(
            "[bold]Usage:[/bold] api-syntax render [dim]entities.json[/dim] -l [cyan]LANGUAGE[/cyan]\n"
            "[bold]Info:[/bold] api-syntax --language-info [cyan]LANGUAGE[/cyan]",
            title="💡 Quick Start",
            border_style="blue",
        )
    )
    return 0


def _show_language_info(language: str) -> int:
    """Show detailed information about a specific language."""
    try:
        info = get_language_info(language)
    except RegistryError as e:
        raise CLIError(f"Language '{language}' is not supported") from e

    info_text = (
        f"[bold]Language:[/bold] {info['name']}\n"
        f"[bold]Style Id:[/bold] {info['style_id']}\n"
        f"[bold]Generator Class:[/bold] {info['class']}\n"
        f"[bold]Module:[/bold] {info['module']}"
    )
    if info["aliases"]:
        info_text += f"\n[bold]Aliases:[/bold] {', '.join(info['aliases'])}"

    console.print()
    console.print(Panel(info_text, title=f"🔧 {info['name']} Generator", border_style="green"))

    generator = get_generator(language)
    config_table = Table(
        title="⚙️  Default Configuration",
        box=box.SIMPLE,
        show_header=True,
        header_style="bold cyan",
    )
    config_table.add_column("Setting", style="bold")
    config_table.add_column("Value", style="green")

    config_table.add_row("wrap_column", str(generator.config.wrap_column))
    config_table.add_row("indent", repr(generator.config.indent))
    for key, value in sorted(generator.config.custom.items()):
        config_table.add_row(key, str(value))

    console.print()
    console.print(config_table)
    return 0


def _build_config(args: argparse.Namespace, language: str):
    """Build configuration for one language from CLI arguments."""
    overrides: Dict[str, Any] = {}
    if args.wrap_column is not None:
        if args.wrap_column <= 0:
            raise CLIError("--wrap-column must be positive")
        overrides["wrap_column"] = args.wrap_column

    try:
        return load_config(language, custom_config=overrides, config_file=args.config)
    except ConfigError as e:
        raise CLIError(str(e)) from e


def _render(args: argparse.Namespace) -> int:
    try:
        entities = load_entities(args.file)
    except EntityLoadError as e:
        raise CLIError(str(e)) from e

    registry = get_registry()
    results: Dict[str, List[RenderResult]] = {}
    for language in args.language:
        try:
            language_key = registry.resolve(language)
        except RegistryError as e:
            raise CLIError(str(e)) from e

        config = _build_config(args, language_key)
        results.update(render_entities(entities, [language_key], config))

    failures = sum(
        1 for language_results in results.values() for result in language_results if not result.success
    )

    if args.output:
        _write_output(Path(args.output), entities, results)
        console.print(f"[green]✓[/green] Syntax written to {args.output}")
    elif args.plain:
        print(_plain_report(entities, results))
    else:
        _print_report(entities, results)

    if failures:
        logger.warning("%d render(s) failed", failures)
        return 1
    return 0


def _plain_report(entities, results: Dict[str, List[RenderResult]]) -> str:
    sections = []
    for index, entity in enumerate(entities):
        for language, language_results in results.items():
            result = language_results[index]
            body = result.text if result.success else f"ERROR: {result.error_message}"
            sections.append(f"# {entity.id} [{language}]\n{body}")
    return "\n\n".join(sections)


def _write_output(path: Path, entities, results: Dict[str, List[RenderResult]]):
    try:
        path.write_text(_plain_report(entities, results) + "\n", encoding="utf-8")
    except OSError as e:
        raise CLIError(f"Failed to write {path}: {e}") from e


def _print_report(entities, results: Dict[str, List[RenderResult]]):
    for index, entity in enumerate(entities):
        for language, language_results in results.items():
            result = language_results[index]

            if not result.success:
                body = Text(result.error_message or "", style="red")
                border = "red"
            elif not result.text:
                body = Text("(no syntax)", style="dim")
                border = "dim"
            else:
                body = result.rich_text
                border = "yellow" if result.messages else "green"

            console.print(Panel(body, title=Text(f"{entity.id} [{language}]"), border_style=border))


if __name__ == "__main__":
    sys.exit(main())
