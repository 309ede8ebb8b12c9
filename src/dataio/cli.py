"""Command-line interface for dataio."""

from pathlib import Path
from typing import TYPE_CHECKING, Annotated

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

if TYPE_CHECKING:
    from dataio.config.settings import DataIOConfig

app = typer.Typer(
    name="dataio",
    help="Read, write and inspect data files with guaranteed handle release.",
    no_args_is_help=True,
)

console = Console()

ConfigOption = Annotated[
    Path | None,
    typer.Option(
        "--config",
        "-c",
        help="Path to configuration YAML file.",
        exists=True,
        dir_okay=False,
    ),
]

EncodingOption = Annotated[
    str | None,
    typer.Option(
        "--encoding",
        "-e",
        help="Text encoding. Defaults to handles.encoding from the config.",
    ),
]


def _setup(config: Path | None) -> "DataIOConfig":
    """Load configuration and configure logging from it."""
    from dataio.config.loader import load_config
    from dataio.utils.logging import configure_logging

    try:
        cfg = load_config(config)
    except (OSError, ValueError) as e:
        console.print(f"[red]Invalid configuration: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e

    configure_logging(cfg.logging.level, json_output=cfg.logging.json_output)
    return cfg


def _fail(e: Exception) -> typer.Exit:
    console.print(f"[red]Error: {escape(str(e))}[/red]")
    return typer.Exit(code=1)


@app.command()
def show(
    path: Annotated[Path, typer.Argument(help="File to print.")],
    encoding: EncodingOption = None,
    config: ConfigOption = None,
) -> None:
    """Print the whole content of a text file."""
    from dataio.files import DataIOError, read_text

    cfg = _setup(config)
    try:
        text = read_text(path, encoding=encoding, config=cfg.handles)
    except (DataIOError, ValueError) as e:
        raise _fail(e) from e

    console.print(text, end="", markup=False, highlight=False, soft_wrap=True)


@app.command()
def lines(
    path: Annotated[Path, typer.Argument(help="File to print line by line.")],
    number: Annotated[
        bool,
        typer.Option("--number", "-n", help="Prefix each line with its number."),
    ] = False,
    encoding: EncodingOption = None,
    config: ConfigOption = None,
) -> None:
    """Print a text file line by line, terminators stripped."""
    from dataio.files import DataIOError, HandleMode, open_handle

    cfg = _setup(config)
    try:
        with open_handle(
            path, HandleMode.READ, encoding=encoding, config=cfg.handles
        ) as handle:
            for i, line in enumerate(handle.read_lines(), start=1):
                prefix = f"{i:>6}  " if number else ""
                console.print(
                    f"{prefix}{line}", markup=False, highlight=False, soft_wrap=True
                )
    except (DataIOError, ValueError) as e:
        raise _fail(e) from e


@app.command()
def write(
    path: Annotated[Path, typer.Argument(help="File to write.")],
    text: Annotated[list[str], typer.Argument(help="Lines to write.")],
    append: Annotated[
        bool,
        typer.Option("--append", "-a", help="Append instead of replacing content."),
    ] = False,
    encoding: EncodingOption = None,
    config: ConfigOption = None,
) -> None:
    """Write each TEXT argument to PATH as a line."""
    from dataio.files import DataIOError, write_lines

    cfg = _setup(config)
    try:
        written = write_lines(
            path, text, append=append, encoding=encoding, config=cfg.handles
        )
    except (DataIOError, ValueError) as e:
        raise _fail(e) from e

    action = "Appended" if append else "Wrote"
    console.print(
        f"[green]{action} {len(text)} line(s), {written} bytes to {escape(str(path))}[/green]"
    )


@app.command()
def table(
    path: Annotated[Path, typer.Argument(help="Table file to preview.")],
    fmt: Annotated[
        str | None,
        typer.Option(
            "--format",
            "-f",
            help="Table format. Inferred from the file suffix if not given.",
        ),
    ] = None,
    rows: Annotated[
        int | None,
        typer.Option(
            "--rows",
            "-r",
            min=1,
            help="Rows to show. Defaults to tabular.preview_rows from the config.",
        ),
    ] = None,
    config: ConfigOption = None,
) -> None:
    """Load a table with pandas and preview its first rows."""
    from dataio.files import DataIOError
    from dataio.tabular import TableSource

    cfg = _setup(config)
    try:
        source = TableSource(path, fmt=fmt, config=cfg)
        df = source.load()
    except (DataIOError, ValueError, ImportError) as e:
        raise _fail(e) from e

    limit = rows or cfg.tabular.preview_rows
    shape = f"{len(df)} rows x {len(df.columns)} columns"
    preview = Table(title=f"{path.name} ({source.format.name}, {shape})")
    for col in df.columns:
        preview.add_column(str(col), style="cyan")
    for record in df.head(limit).itertuples(index=False):
        preview.add_row(*(escape(str(value)) for value in record))

    console.print(preview)
    if len(df) > limit:
        console.print(f"[dim]... {len(df) - limit} more row(s)[/dim]")


@app.command()
def formats() -> None:
    """List supported table formats."""
    from dataio.tabular import FormatRegistry

    listing = Table(title="Supported table formats")
    listing.add_column("Format", style="cyan")
    listing.add_column("Suffixes", style="green")
    listing.add_column("Binary")
    listing.add_column("Description")

    for info in FormatRegistry.infos():
        listing.add_row(
            info.name,
            ", ".join(info.suffixes),
            "yes" if info.binary else "no",
            info.description,
        )

    console.print(listing)


@app.command()
def version() -> None:
    """Show version information."""
    from dataio import __version__

    console.print(f"dataio version {__version__}")


if __name__ == "__main__":
    app()
