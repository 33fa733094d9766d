"""Typer CLI entrypoint for docfetch."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError
from rich import box
from rich.console import Console
from rich.table import Table

from .config import FetchConfig, load_config
from .engine import WorkerPool
from .errors import InputSourceError
from .logging_conf import configure_logging

app = typer.Typer(
    help="Fetch documents by identifier through a proxy and save each body to a file.",
    no_args_is_help=True,
    rich_markup_mode=None,
)

console = Console()

EXIT_INPUT_ERROR = 1
EXIT_CONFIG_ERROR = 2


def _load(config_path: Optional[Path], **overrides: object) -> FetchConfig:
    try:
        return load_config(config_path, **overrides)
    except (ValidationError, ValueError, FileNotFoundError) as exc:
        console.print(f"Invalid configuration: {exc}", style="red", markup=False)
        raise typer.Exit(code=EXIT_CONFIG_ERROR) from exc


def _render_config(config: FetchConfig) -> Table:
    table = Table(title="Effective configuration", box=box.SIMPLE_HEAD, show_header=False)
    table.add_column("Setting", style="cyan", no_wrap=True)
    table.add_column("Value", style="green", overflow="fold")
    for key, value in config.model_dump(mode="json").items():
        table.add_row(key, "-" if value is None else str(value))
    table.add_row("queue_capacity", str(config.queue_capacity))
    return table


@app.command("run", help="Fetch every identifier in the input file.")
def run(
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="YAML/JSON config file."),
    input_path: Optional[Path] = typer.Option(None, "--input", "-i", help="Identifier list, one per line."),
    output_dir: Optional[Path] = typer.Option(None, "--output-dir", "-o", help="Existing output directory."),
    workers: Optional[int] = typer.Option(None, "--workers", "-w", help="Number of concurrent workers."),
    queue_size: Optional[int] = typer.Option(None, "--queue-size", help="Work queue capacity."),
    proxy: Optional[str] = typer.Option(None, "--proxy", help="Forward proxy URL."),
    no_proxy: bool = typer.Option(False, "--no-proxy", help="Connect directly, without a proxy."),
    endpoint: Optional[str] = typer.Option(None, "--endpoint", help="Endpoint root the identifier is appended to."),
    timeout: Optional[float] = typer.Option(None, "--timeout", help="Per-request deadline in seconds."),
    accept_error_status: bool = typer.Option(
        False, "--accept-error-status", help="Save bodies of non-2xx responses too."
    ),
    log_dir: Optional[Path] = typer.Option(None, "--log-dir", help="Also write JSON logs here."),
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging."),
) -> None:
    if proxy and no_proxy:
        raise typer.BadParameter("--proxy and --no-proxy are mutually exclusive.")
    overrides: dict[str, object] = {
        "input_path": input_path,
        "output_dir": output_dir,
        "workers": workers,
        "queue_size": queue_size,
        "proxy": "" if no_proxy else proxy,
        "endpoint_root": endpoint,
        "timeout": timeout,
        "accept_error_status": True if accept_error_status else None,
        "log_dir": log_dir,
    }
    config = _load(config_path, **overrides)
    configure_logging(verbose=verbose, log_dir=config.log_dir)
    try:
        with WorkerPool(config) as pool:
            pool.run_file()
    except InputSourceError as exc:
        console.print(str(exc), style="red", markup=False)
        raise typer.Exit(code=EXIT_INPUT_ERROR) from exc
    console.print(
        f"Finished {config.input_path} with {config.workers} workers into {config.output_dir}.",
        style="green",
    )


@app.command("show-config", help="Print the effective configuration.")
def show_config(
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="YAML/JSON config file."),
) -> None:
    config = _load(config_path)
    console.print(_render_config(config))


def cli() -> None:
    app()


if __name__ == "__main__":  # pragma: no cover
    cli()
