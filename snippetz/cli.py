"""
Command line interface for snippet generation.

Loads a request description, renders it through the snippet engine and
prints the result with rich formatting.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from . import __version__
from .core.config import ConfigError, GenerationOptions, get_config_manager
from .core.request import CanonicalRequest
from .engine import SnippetEngine, SnippetResult
from .logging_config import get_logger, setup_logging
from .registry import RegistryError, get_registry
from .utils import RequestLoaderError, load_request

logger = get_logger(__name__)


class CLIError(Exception):
    """Exception raised for CLI-related errors."""

    pass


# Snippets and listings go to stdout, diagnostics to stderr
console = Console()
err_console = Console(stderr=True)

# Pygments lexer per target, where the names differ
LEXERS = {
    "shell": "bash",
    "node": "javascript",
    "js": "javascript",
    "http": "http",
}


def create_parser() -> argparse.ArgumentParser:
    """Build the argument parser with its subcommands."""
    parser = argparse.ArgumentParser(
        prog="snippetz",
        description="Generate HTTP client code snippets from request descriptions",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  snippetz generate request.json -t python -c requests
  snippetz generate --stdin -t shell -c curl --redact < request.json
  snippetz all request.json
  snippetz list
        """.strip(),
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging and show generation metadata",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    generate = subparsers.add_parser(
        "generate", help="Render one snippet", description="Render one snippet"
    )
    _add_input_args(generate)
    generate.add_argument("--target", "-t", required=True, help="Target language")
    generate.add_argument("--client", "-c", required=True, help="Client library")
    generate.add_argument("--output", "-o", help="Output file (default: stdout)")
    _add_option_args(generate)
    generate.set_defaults(func=_handle_generate)

    render_all = subparsers.add_parser(
        "all",
        help="Render a snippet for every supported target/client",
        description="Render a snippet for every supported target/client",
    )
    _add_input_args(render_all)
    _add_option_args(render_all)
    render_all.set_defaults(func=_handle_all)

    list_parser = subparsers.add_parser(
        "list", help="List supported targets and clients"
    )
    list_parser.add_argument("--target", "-t", help="Only show clients of this target")
    list_parser.set_defaults(func=_handle_list)

    return parser


def _add_input_args(parser: argparse.ArgumentParser):
    input_group = parser.add_mutually_exclusive_group(required=False)
    input_group.add_argument("file", nargs="?", help="JSON request description")
    input_group.add_argument("--url", help="URL to fetch the request description from")
    input_group.add_argument(
        "--stdin", action="store_true", help="Read the request description from stdin"
    )


def _add_option_args(parser: argparse.ArgumentParser):
    group = parser.add_argument_group("generation options")
    group.add_argument("--config", metavar="FILE", help="JSON options file")
    group.add_argument("--indent", type=int, metavar="N", help="Indentation width")
    group.add_argument("--tabs", action="store_true", help="Indent with tabs")
    group.add_argument(
        "--no-comments", action="store_true", help="Don't add comments to snippets"
    )
    group.add_argument(
        "--redact", action="store_true", help="Replace credentials with placeholders"
    )
    group.add_argument(
        "--plain", action="store_true", help="Print plain text without highlighting"
    )


def _build_options(args: argparse.Namespace, target: str) -> GenerationOptions:
    """Merge target defaults, the config file and CLI flags."""
    overrides = {}
    if args.indent is not None:
        overrides["indent_size"] = args.indent
    if args.tabs:
        overrides["use_tabs"] = True
    if args.no_comments:
        overrides["include_comments"] = False
    if args.redact:
        overrides["redact_credentials"] = True

    try:
        return get_config_manager().get_options(target, overrides, args.config)
    except ConfigError as e:
        raise CLIError(str(e)) from e


def _load_input(args: argparse.Namespace) -> CanonicalRequest:
    if not (args.file or args.url or args.stdin):
        raise CLIError("Input source required (file, --url, or --stdin)")
    try:
        source, request = load_request(args.file, args.url, args.stdin)
    except (RequestLoaderError, FileNotFoundError) as e:
        raise CLIError(f"Failed to load input: {e}") from e
    logger.info("Loaded request from %s", source)
    return request


def _print_snippet(snippet: str, target: str, plain: bool):
    if plain or not console.is_terminal:
        sys.stdout.write(snippet + "\n")
        return
    console.print(Syntax(snippet, LEXERS.get(target, target), theme="monokai"))


def _print_metadata(result: SnippetResult):
    table = Table(
        title="📊 Generation Metadata",
        box=box.SIMPLE,
        show_header=True,
        header_style="bold cyan",
    )
    table.add_column("Property", style="bold")
    table.add_column("Value", style="green")
    table.add_row("Target", result.target)
    table.add_row("Client", result.client)
    for key, value in result.metadata.items():
        if key != "warnings":
            table.add_row(key.replace("_", " ").title(), str(value))
    err_console.print()
    err_console.print(table)


def _print_warnings(warnings: List[str]):
    if warnings:
        err_console.print("\n[yellow]⚠️  Warnings:[/yellow]")
        for warning in warnings:
            err_console.print(f"  [yellow]•[/yellow] {warning}")


def _handle_generate(args: argparse.Namespace, engine: SnippetEngine) -> int:
    request = _load_input(args)
    options = _build_options(args, args.target)
    result = engine.try_generate(request, args.target, args.client, options)

    if not result.success:
        err_console.print(f"[red]✗ Generation failed:[/red] {result.error_message}")
        if isinstance(result.exception, RegistryError):
            err_console.print("[dim]Use 'snippetz list' to see available clients[/dim]")
        return 1

    if args.output:
        output_path = Path(args.output)
        try:
            output_path.write_text(result.snippet + "\n", encoding="utf-8")
        except OSError as e:
            err_console.print(f"[red]✗ Failed to write to {output_path}:[/red] {e}")
            return 1
        err_console.print(
            f"[green]✓[/green] {args.target}/{args.client} snippet saved to "
            f"[cyan]{output_path}[/cyan]"
        )
    else:
        _print_snippet(result.snippet, args.target, args.plain)

    if args.verbose:
        _print_metadata(result)
    _print_warnings(result.metadata.get("warnings", []))
    return 0


def _handle_all(args: argparse.Namespace, engine: SnippetEngine) -> int:
    request = _load_input(args)
    failures = 0

    for target, client in engine.clients():
        options = _build_options(args, target)
        result = engine.try_generate(request, target, client, options)
        if not result.success:
            failures += 1
            err_console.print(f"[red]✗ {target}/{client}:[/red] {result.error_message}")
            continue

        if args.plain or not console.is_terminal:
            sys.stdout.write(f"### {target}/{client}\n{result.snippet}\n\n")
        else:
            console.print(
                Panel(
                    Syntax(result.snippet, LEXERS.get(target, target), theme="monokai"),
                    title=f"🔧 {target}/{client}",
                    title_align="left",
                    border_style="green",
                )
            )

    if failures:
        err_console.print(f"[red]✗ {failures} snippet(s) failed[/red]")
        return 1
    return 0


def _handle_list(args: argparse.Namespace, engine: SnippetEngine) -> int:
    registry = engine.registry
    targets = registry.list_targets()

    if args.target and args.target not in targets:
        err_console.print(f"[red]✗ Unsupported target '{args.target}'[/red]")
        err_console.print(f"[dim]Supported targets: {', '.join(targets)}[/dim]")
        return 1

    table = Table(
        title="📋 Supported Targets", box=box.ROUNDED, title_style="bold cyan"
    )
    table.add_column("Target", style="bold green", no_wrap=True)
    table.add_column("Client", style="cyan")
    table.add_column("Title")
    table.add_column("Implementation", style="dim")

    for target, client in registry.list():
        if args.target and target != args.target:
            continue
        info = registry.get_plugin_info(target, client)
        kind = "adapted" if info.get("adapted") else "native"
        table.add_row(target, client, info.get("title", ""), kind)

    console.print()
    console.print(table)
    console.print()
    console.print(
        Panel(
            "[bold]Usage:[/bold] snippetz generate [dim]request.json[/dim] "
            "-t [cyan]TARGET[/cyan] -c [cyan]CLIENT[/cyan]",
            title="💡 Quick Start",
            border_style="blue",
        )
    )
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run the command line interface.

    Args:
        argv: Arguments to parse (defaults to ``sys.argv[1:]``)

    Returns:
        Exit code (0 for success, 1 for errors)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.verbose or args.log_level:
        setup_logging("DEBUG" if args.verbose else args.log_level)

    if not getattr(args, "func", None):
        parser.print_help()
        return 1

    try:
        return args.func(args, SnippetEngine(get_registry()))
    except CLIError as e:
        err_console.print(f"[red]✗ Error:[/red] {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
