"""Command-line interface for FARS accident summaries and maps."""

from pathlib import Path
from typing import TYPE_CHECKING, Annotated

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

if TYPE_CHECKING:
    from fars.config.settings import FarsConfig

app = typer.Typer(
    name="fars",
    help="Summarize and map FARS fatal accident data.",
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
DataRootOption = Annotated[
    Path | None,
    typer.Option(
        "--data-root",
        "-d",
        help="Directory with accident_<year>.csv.bz2 files (overrides config).",
        file_okay=False,
    ),
]
WorkersOption = Annotated[
    int | None,
    typer.Option(
        "--workers",
        "-w",
        help="Threads used to read years (overrides config).",
        min=1,
        max=32,
    ),
]


def _load_settings(
    ctx: typer.Context, config: Path | None, data_root: Path | None
) -> "FarsConfig":
    """
    Load the config file (or defaults), apply the data root override and
    configure logging. Command-line logging options win over the config.
    """
    from fars.config.loader import load_config
    from fars.config.settings import FarsConfig
    from fars.utils.logging import configure_logging

    try:
        settings = load_config(config) if config is not None else FarsConfig()
    except Exception as e:
        console.print(f"[red]Invalid config: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e

    if data_root is not None:
        settings = settings.model_copy(
            update={"data": settings.data.model_copy(update={"data_root": data_root})}
        )

    options = ctx.obj or {}
    configure_logging(
        level=options.get("log_level") or settings.logging.level,
        json_output=options.get("json_logs") or settings.logging.json_output,
        capture_warnings=True,
    )
    return settings


@app.callback()
def main(
    ctx: typer.Context,
    log_level: Annotated[
        str | None,
        typer.Option("--log-level", help="Log level (DEBUG, INFO, WARNING, ERROR)."),
    ] = None,
    json_logs: Annotated[
        bool,
        typer.Option("--json-logs", help="Emit logs as JSON lines."),
    ] = False,
) -> None:
    """Summarize and map FARS fatal accident data."""
    ctx.obj = {"log_level": log_level, "json_logs": json_logs}


@app.command()
def summarize(
    ctx: typer.Context,
    years: Annotated[list[str], typer.Argument(help="Years to summarize, e.g. 2013 2014.")],
    config: ConfigOption = None,
    data_root: DataRootOption = None,
    workers: WorkersOption = None,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write the summary table as CSV."),
    ] = None,
) -> None:
    """Count fatal accidents per month for each year."""
    import pandas as pd

    from fars.aggregation.summary import summarize_years
    from fars.exceptions import EmptyInputError
    from fars.ingestion.filenames import to_year

    settings = _load_settings(ctx, config, data_root)

    try:
        summary = summarize_years(
            years,
            data_root=settings.data_root,
            template=settings.data.filename_template,
            max_workers=workers or settings.loading.max_workers,
        )
    except EmptyInputError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e
    except Exception as e:
        console.print(f"[red]Summary failed: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e

    table = Table(title="Fatal accidents per month")
    table.add_column("Month", style="cyan", justify="right")
    for year in summary.columns:
        table.add_column(str(year), style="green", justify="right")

    for month, row in summary.iterrows():
        cells = ["-" if pd.isna(value) else str(value) for value in row.tolist()]
        table.add_row(str(month), *cells)

    console.print(table)

    missing = [y for y in years if to_year(y) not in set(summary.columns)]
    if missing:
        console.print(f"[yellow]Not loaded: {', '.join(missing)}[/yellow]")

    if output is not None:
        output.parent.mkdir(parents=True, exist_ok=True)
        summary.to_csv(output)
        console.print(f"[green]Saved to: {output}[/green]")


@app.command()
def years(
    ctx: typer.Context,
    years: Annotated[list[str], typer.Argument(help="Years to load.")],
    config: ConfigOption = None,
    data_root: DataRootOption = None,
    workers: WorkersOption = None,
) -> None:
    """Show which yearly accident files load and how many rows they have."""
    from fars.aggregation.years import collect_years

    settings = _load_settings(ctx, config, data_root)
    results = collect_years(
        years,
        data_root=settings.data_root,
        template=settings.data.filename_template,
        max_workers=workers or settings.loading.max_workers,
    )

    table = Table(title=f"Accident files in {settings.data_root}")
    table.add_column("Year", style="cyan")
    table.add_column("File", no_wrap=True)
    table.add_column("Rows", justify="right")
    table.add_column("Status")

    for result in results:
        if result.ok:
            table.add_row(
                str(result.year), result.filename, str(result.n_rows), "[green]ok[/green]"
            )
        else:
            error = escape(str(result.error))
            table.add_row(str(result.year), result.filename, "-", f"[red]{error}[/red]")

    console.print(table)

    if not any(r.ok for r in results):
        raise typer.Exit(code=1)


@app.command(name="map")
def map_command(
    ctx: typer.Context,
    state: Annotated[int, typer.Argument(help="FARS state code (see 'fars states').")],
    year: Annotated[str, typer.Argument(help="Year of the accident file.")],
    config: ConfigOption = None,
    data_root: DataRootOption = None,
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Image path (default: <output_root>/map_<state>_<year>.png).",
        ),
    ] = None,
) -> None:
    """Draw the fatal accidents of one state and year."""
    from fars.exceptions import InvalidStateError
    from fars.ingestion.filenames import to_year
    from fars.plotting.state_map import map_state
    from fars.states import state_name

    settings = _load_settings(ctx, config, data_root)
    if output is None:
        output = settings.map_output_path(state, to_year(year) or year)

    try:
        fig = map_state(
            state,
            year,
            data_root=settings.data_root,
            template=settings.data.filename_template,
            output=output,
            figsize=(settings.plot.width, settings.plot.height),
            marker_size=settings.plot.marker_size,
            dpi=settings.plot.dpi,
        )
    except (FileNotFoundError, InvalidStateError) as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e
    except Exception as e:
        console.print(f"[red]Map failed: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e

    if fig is None:
        console.print(
            f"[yellow]No accidents to plot for {state_name(state)} {year}[/yellow]"
        )
        return

    console.print(f"[green]Saved to: {output}[/green]")


@app.command()
def states() -> None:
    """List FARS state codes."""
    from fars.states import STATE_NAMES

    table = Table(title="FARS state codes")
    table.add_column("Code", style="cyan", justify="right")
    table.add_column("State")
    for code, name in STATE_NAMES.items():
        table.add_row(str(code), name)
    console.print(table)


@app.command()
def version() -> None:
    """Show version information."""
    from fars import __version__

    console.print(f"fars version {__version__}")


if __name__ == "__main__":
    app()
