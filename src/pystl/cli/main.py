"""Main CLI entry point."""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

import rich_click as click
from pystl import __version__
from rich.console import Console
from rich.logging import RichHandler
from rich.syntax import Syntax

console = Console()

click.rich_click.USE_RICH_MARKUP = True
click.rich_click.STYLE_HELPTEXT_FIRST = True
click.rich_click.STYLE_COMMANDS_TABLE_HEADER = "bold magenta"
click.rich_click.SHOW_ARGUMENTS = True
click.rich_click.GROUP_ARGUMENTS_OPTIONS = True
click.rich_click.STYLE_ERRORS_SUGGESTION = "magenta italic"
click.rich_click.ERRORS_SUGGESTION = "Try running 'pystl --help' for more information."

# Cyan theme
click.rich_click.STYLE_HEADER_TEXT = "bold cyan"
click.rich_click.STYLE_OPTION = "cyan"
click.rich_click.STYLE_SWITCH = "cyan"
click.rich_click.STYLE_METAVAR = "dim white"
click.rich_click.STYLE_USAGE_COMMAND = "cyan"
click.rich_click.STYLE_USAGE = "dim"

click.rich_click.COMMAND_GROUPS = {
    "pystl": [
        {
            "name": "Commands",
            "commands": ["compile", "render"],
        }
    ]
}


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False, markup=False)],
    )


def _load_context(context: Optional[str], context_file: Optional[str]) -> Dict[str, Any]:
    """Read the render context from a JSON string or file."""
    if context and context_file:
        raise click.UsageError("Use either --context or --context-file, not both.")

    raw = context
    if context_file:
        raw = Path(context_file).read_text(encoding="utf-8")
    if not raw:
        return {}

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise click.BadParameter(f"Invalid JSON: {e}", param_hint="context")
    if not isinstance(data, dict):
        raise click.BadParameter("Context must be a JSON object", param_hint="context")
    return data


def _compile(ctx: click.Context, template: str) -> Any:
    from pystl.compiler.compiler import Compiler
    from pystl.compiler.exceptions import PySTLCompilerError

    compiler = Compiler(
        debug=ctx.obj["verbose"], strip_whitespace=ctx.obj["strip_whitespace"]
    )
    try:
        return compiler.compile_file(Path(template))
    except PySTLCompilerError as e:
        raise click.ClickException(str(e))


@click.group(
    help=f"""
[bold white on cyan] pystl [/] [bold cyan]v{__version__}[/] Compile tag-library markup to Python.

Run [bold cyan]pystl compile FILE[/] to print the generated module.
Run [bold cyan]pystl render FILE[/] to compile and run it.
"""
)
@click.version_option(__version__)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.option(
    "--strip-whitespace", is_flag=True, help="Drop whitespace-only text nodes"
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool, strip_whitespace: bool) -> None:
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["strip_whitespace"] = strip_whitespace
    _configure_logging(verbose)


@cli.command("compile")
@click.argument("template", type=click.Path(exists=True, dir_okay=False))
@click.option("--output", "-o", default=None, help="Write the module to this file")
@click.pass_context
def compile_command(ctx: click.Context, template: str, output: Optional[str]) -> None:
    """Compile a template into a Python module."""
    compiled = _compile(ctx, template)

    if output:
        Path(output).write_text(compiled.source, encoding="utf-8")
        console.print(f"✅ Wrote [cyan]{output}[/]")
    else:
        console.print(Syntax(compiled.source, "python"))


@cli.command("render")
@click.argument("template", type=click.Path(exists=True, dir_okay=False))
@click.option("--context", "context", default=None, help="Context as a JSON object")
@click.option(
    "--context-file",
    default=None,
    type=click.Path(exists=True, dir_okay=False),
    help="Read the context from a JSON file",
)
@click.pass_context
def render_command(
    ctx: click.Context,
    template: str,
    context: Optional[str],
    context_file: Optional[str],
) -> None:
    """Compile a template and print its output."""
    data = _load_context(context, context_file)
    compiled = _compile(ctx, template)
    click.echo(compiled.render(data), nl=False)


if __name__ == "__main__":
    cli()
