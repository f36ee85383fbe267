"""
Command line interface for funcpipe.
"""

from pathlib import Path
from typing import Optional

import orjson
import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from funcpipe import __version__
from funcpipe.bench import run_benchmark
from funcpipe.config.defaults import build_config
from funcpipe.config.loaders import load_config_file, save_config_file
from funcpipe.config.types import FuncpipeConfig
from funcpipe.core.logging import configure_logging, pipeline_context
from funcpipe.core.results import ConfigurationError, Failure, safe_execute
from funcpipe.demo import power_plus_one, power_plus_one_direct, power_plus_one_handling_error

app = typer.Typer(
    name="funcpipe",
    help="Compose functions of any signature into one pipeline",
    no_args_is_help=True,
)
console = Console()


def _load_config(config_file: Optional[Path], verbose: bool) -> FuncpipeConfig:
    """Build configuration from the environment plus an optional JSON/YAML file"""
    file_config = {}
    if config_file:
        try:
            file_config = load_config_file(config_file)
        except (FileNotFoundError, ConfigurationError) as e:
            console.print(f"❌ Failed to load config file {config_file}: {e}")
            raise typer.Exit(1)

    if verbose:
        file_config.setdefault("log", {})["level"] = "DEBUG"
        file_config.setdefault("execution", {})["log_steps"] = True

    config = build_config(file_config)
    configure_logging(config["log"])
    return config


@app.command()
def demo(
    value: int = typer.Option(5, "--value", "-x", help="Input of power plus one"),
    config_file: Optional[Path] = typer.Option(None, "--config", "-c", help="Configuration file (JSON or YAML)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
):
    """
    Compute power plus one by hand and with a pipeline.

    Exits with status 1 when the pipeline reports an error.
    """
    config = _load_config(config_file, verbose)

    console.print("*** Quick & dirty ***")
    console.print(f"POWER+1: {power_plus_one_direct(value)}")
    handled = power_plus_one_handling_error(value)
    if isinstance(handled, Failure):
        console.print(f"❌ {handled.failure()}")
    else:
        console.print(f"POWER+1: {handled.unwrap()}")
    console.print("")

    console.print("*** Pipeline ***")
    with pipeline_context("power-plus-one") as ctx_logger:
        result = power_plus_one(value, config)
        ctx_logger.debug(f"Pipeline result: {result}")

    if isinstance(result, Failure):
        console.print(f"❌ {result.failure()}")
        raise typer.Exit(1)
    console.print(f"POWER+1: {result.unwrap()}")


@app.command()
def bench(
    iterations: Optional[int] = typer.Option(None, "--iterations", "-n", help="Calls per case"),
    value: Optional[int] = typer.Option(None, "--value", "-x", help="Fixed input instead of a random one"),
    config_file: Optional[Path] = typer.Option(None, "--config", "-c", help="Configuration file (JSON or YAML)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
):
    """Compare a direct call with the same composition run through a pipeline"""
    config = _load_config(config_file, verbose)
    if iterations is None:
        iterations = config["bench"]["iterations"]
    if value is None:
        value = config["bench"]["value"]

    outcome = safe_execute(run_benchmark, iterations, value)
    if isinstance(outcome, Failure):
        console.print(f"❌ {outcome.failure()}")
        raise typer.Exit(1)
    results = outcome.unwrap()

    table = Table(title=f"Benchmark ({iterations:,} iterations)")
    table.add_column("Case", style="cyan")
    table.add_column("ns/op", justify="right", style="green")
    table.add_column("Relative", justify="right")

    baseline = results[0].ns_per_op or 1.0
    for result in results:
        table.add_row(result.name, f"{result.ns_per_op:,.1f}", f"{result.ns_per_op / baseline:,.1f}x")
    console.print(table)


@app.command("config")
def show_config(
    config_file: Optional[Path] = typer.Option(None, "--config", "-c", help="Configuration file (JSON or YAML)"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write the resolved configuration here"),
):
    """Show, or save, the resolved configuration"""
    config = _load_config(config_file, verbose=False)

    if output:
        save_config_file(config, output)
        console.print(f"✅ Configuration saved to {output}")
        return

    rendered = orjson.dumps(config, option=orjson.OPT_INDENT_2, default=str).decode()
    console.print(Panel(rendered, title="⚙️ Configuration", border_style="blue"))


@app.command()
def version():
    """Show the installed version"""
    console.print(f"funcpipe {__version__}")


if __name__ == "__main__":
    app()
