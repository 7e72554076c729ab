import json
import logging
from pathlib import Path
from typing import Dict, List, Optional

import typer
from rich.console import Console
from rich.table import Table

from . import __version__
from .config import load_settings
from .logbook import MessageLog
from .processor import build_processor

app = typer.Typer(help="segtext: render segmented text templates")

logger = logging.getLogger(__name__)

LEVEL_STYLES = {
    logging.DEBUG: "dim",
    logging.INFO: "dim",
    logging.WARNING: "yellow",
    logging.ERROR: "red",
}


def version_callback(value: bool):
    """Print version and exit."""
    if value:
        typer.echo(__version__)
        raise typer.Exit()


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-V",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    )
):
    """segtext: render segmented text templates"""
    pass


def _configure_logging(verbose: bool, level_name: str) -> None:
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s %(levelname)s %(message)s")
        logging.getLogger("segtext").setLevel(logging.DEBUG)
    else:
        logging.getLogger("segtext").setLevel(getattr(logging, level_name.upper(), logging.WARNING))


def parse_token_args(tokens: List[str]) -> Dict[str, str]:
    """Turn ["NAME=value", ...] into a dict. Raises typer.BadParameter on bad input."""
    values = {}
    for item in tokens:
        name, sep, value = item.partition("=")
        if not sep or not name:
            raise typer.BadParameter(f"expected NAME=VALUE, got {item!r}", param_hint="--token")
        values[name] = value
    return values


def load_token_file(path: Path) -> Dict[str, Dict[str, Optional[str]]]:
    """Read {"Segment": {"TOKEN": "value"}} from a JSON file."""
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict) or not all(isinstance(v, dict) for v in data.values()):
        raise typer.BadParameter("token file must map segment names to objects", param_hint="--tokens")
    return data


def print_log(log: MessageLog, console: Console, show_info: bool = False) -> None:
    for entry in log.entries:
        if entry.level < logging.WARNING and not show_info:
            continue
        console.print(str(entry), style=LEVEL_STYLES.get(entry.level), markup=False, highlight=False, soft_wrap=True)
    log.clear()


@app.command()
def render(
    template: Path = typer.Argument(..., help="Path to the template file"),
    segments: List[str] = typer.Argument(..., help="Segments to generate, in order"),
    token: List[str] = typer.Option([], "--token", "-t", help="Token value as NAME=VALUE, applied to every segment"),
    tokens: Optional[Path] = typer.Option(None, "--tokens", help="JSON file mapping segment names to token values"),
    output: Optional[Path] = typer.Option(None, "-o", "--output", help="Write the generated text here instead of stdout"),
    tab_size: Optional[int] = typer.Option(None, help="Initial tab size (1-9)"),
    token_start: Optional[str] = typer.Option(None, help="Token start delimiter"),
    token_end: Optional[str] = typer.Option(None, help="Token end delimiter"),
    token_escape: Optional[str] = typer.Option(None, help="Token escape string"),
    verbose: bool = typer.Option(False, help="Show informational messages and debug logging"),
):
    """Generate one or more segments of a template.

    Examples:
        segtext render class.tt Header Field Field Footer -t name=Customer
        segtext render class.tt Header Footer --tokens values.json -o out.cs
    """
    console = Console(stderr=True)
    settings = load_settings()
    _configure_logging(verbose, settings.log_level)

    token_values = parse_token_args(token)
    segment_tokens = load_token_file(tokens) if tokens else {}

    processor = build_processor(settings)

    if token_start or token_end or token_escape:
        ok = processor.set_token_delimiters(
            token_start or settings.token_start,
            token_end or settings.token_end,
            token_escape or settings.token_escape,
        )
        if not ok:
            print_log(processor.log, console, verbose)
            raise typer.Exit(1)

    if not processor.load_template_file(template):
        print_log(processor.log, console, verbose)
        console.print(f"[red]Error: unable to load {template}[/red]")
        raise typer.Exit(1)

    # loading resets the tab size
    if tab_size is not None:
        processor.set_tab_size(tab_size)

    for segment in segments:
        # -t values go to every segment that uses them
        known = processor.token_processor.known_tokens(segment)
        values = {k: v for k, v in token_values.items() if k in known}
        values.update(segment_tokens.get(segment, {}))
        processor.generate_segment(segment, values or None)

    if output:
        if processor.write_generated_text(output):
            typer.echo(f"✓ Wrote {output}", err=True)
    else:
        for line in processor.generated_text:
            typer.echo(line)

    print_log(processor.log, console, verbose)


@app.command()
def check(
    template: Path = typer.Argument(..., help="Path to the template file"),
    verbose: bool = typer.Option(False, help="Show informational messages too"),
):
    """Load a template and show its segments and any problems found."""
    console = Console()
    settings = load_settings()
    _configure_logging(verbose, settings.log_level)

    processor = build_processor(settings)
    loaded = processor.load_template_file(template)

    if loaded:
        table = Table(title=str(template))
        table.add_column("Segment")
        table.add_column("Lines", justify="right")
        table.add_column("FTI", justify="right")
        table.add_column("PAD")
        table.add_column("TAB", justify="right")
        for name, items in processor.segments.items():
            control = processor.controls[name]
            table.add_row(
                name,
                str(len(items)),
                str(control.first_time_indent) if control.first_time_indent else "",
                control.pad_segment,
                str(control.tab_size) if control.tab_size is not None else "",
            )
        console.print(table)

    print_log(processor.log, console, verbose)

    if not loaded:
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
