"""Monte Carlo estimation of 5-card poker hand probabilities."""

import time
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from config.settings import Config, load_config
from poker.hand_evaluator import REPORTED_VALUES, classify_strings
from simulation.runner import HandSimulator
from simulation.statistics import EXPECTED_PROBABILITIES, HAND_COMBINATIONS, HandStatistics
from utils.logging import configure_logging

app = typer.Typer(
    name="cardstats",
    help="Estimate 5-card poker hand probabilities by random sampling.",
)
console = Console()


@app.command()
def simulate(
    hands: int = typer.Argument(..., help="Approximate number of hands to simulate (rounded down to a multiple of 10)"),
    workers: Optional[int] = typer.Option(None, "--workers", "-w", help="Worker processes (default: CPU count)"),
    seed: Optional[int] = typer.Option(None, "--seed", "-s", help="Random seed"),
    chunk_size: Optional[int] = typer.Option(None, "--chunk-size", help="Deck shuffles per worker task"),
    config_path: Optional[str] = typer.Option(None, "--config", "-c", help="YAML config file"),
    progress: bool = typer.Option(False, "--progress", help="Show a progress bar instead of a spinner"),
    csv_path: Optional[str] = typer.Option(None, "--csv", help="Write results to a CSV file"),
    plot: bool = typer.Option(False, "--plot", help="Save a distribution plot"),
    log_file: Optional[str] = typer.Option(None, "--log-file", help="Write log records to a file"),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Logging level (DEBUG, INFO, ...)"),
) -> None:
    """Simulate hands and print the observed category frequencies."""
    config = load_config(config_path) if config_path else Config()

    # Command-line options take precedence over the config file
    config.sampling.num_hands = hands
    if workers is not None:
        config.sampling.workers = workers
    if seed is not None:
        config.sampling.seed = seed
    if chunk_size is not None:
        config.sampling.chunk_size = chunk_size
    if progress:
        config.output.show_progress = True
    if csv_path is not None:
        config.output.csv_path = csv_path
    if log_file is not None:
        config.output.log_file = log_file
    if log_level is not None:
        config.output.log_level = log_level

    try:
        configure_logging(config.output.log_level, config.output.log_file)
        simulator = HandSimulator(config.sampling, show_progress=config.output.show_progress)
        actual = simulator.hands_for(hands)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    console.print()
    start = time.time()
    if config.output.show_progress:
        console.print(f"Simulating {actual:,} standard poker hands")
        counts = simulator.run()
    else:
        with console.status(f"Simulating {actual:,} standard poker hands", spinner="dots12"):
            counts = simulator.run()
    elapsed = time.time() - start

    stats = HandStatistics(counts=counts, elapsed=elapsed, output_dir=config.output.plots_dir)
    console.print(f"[green]Finished simulating {stats.total:,} standard poker hands[/green]")
    console.print(f"Elapsed time: {elapsed:.3f}s\n")

    if stats.total == 0:
        console.print("[yellow]No hands were dealt; request at least 10.[/yellow]")
        return

    table = Table(title="Hand Frequencies")
    table.add_column("Hand", style="cyan")
    table.add_column("Count", justify="right")
    table.add_column("Observed", style="green", justify="right")
    table.add_column("Expected", style="white", justify="right")

    # Least common first, most common last
    for value, count, percent in reversed(stats.percentages()):
        table.add_row(
            str(value),
            f"{count:,}",
            f"{percent:10.6f}%",
            f"{100.0 * EXPECTED_PROBABILITIES[value]:10.6f}%",
        )

    console.print(table)
    console.print(f"Hands per second: {stats.hands_per_second:,.0f}")

    if config.output.csv_path:
        path = stats.to_csv(config.output.csv_path)
        console.print(f"Results written to [cyan]{path}[/cyan]")
    if plot:
        path = stats.plot_distribution()
        console.print(f"Plot saved to [cyan]{path}[/cyan]")


@app.command(name="classify")
def classify_cmd(
    cards: list[str] = typer.Argument(..., help="Five cards, e.g. As Ks Qs Js Ts"),
) -> None:
    """Classify a single 5-card hand."""
    try:
        value = classify_strings(cards)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    console.print(f"{' '.join(cards)}: [bold green]{str(value)}[/bold green]")


@app.command()
def expected() -> None:
    """Show the reference probability of each hand category."""
    table = Table(title="5-Card Hand Probabilities")
    table.add_column("Hand", style="cyan")
    table.add_column("Combinations", justify="right")
    table.add_column("Probability", style="green", justify="right")

    for value in reversed(REPORTED_VALUES):
        table.add_row(
            str(value),
            f"{HAND_COMBINATIONS[value]:,}",
            f"{100.0 * EXPECTED_PROBABILITIES[value]:10.6f}%",
        )

    console.print(table)


@app.command()
def info(
    config_path: Optional[str] = typer.Option(None, "--config", "-c", help="YAML config file"),
) -> None:
    """Show the effective configuration."""
    config = load_config(config_path) if config_path else Config()

    table = Table()
    table.add_column("Category", style="cyan")
    table.add_column("Setting", style="white")
    table.add_column("Value", style="green")

    table.add_row("Sampling", "Hands", f"{config.sampling.num_hands:,}")
    table.add_row("Sampling", "Workers", str(config.sampling.workers or "auto"))
    table.add_row("Sampling", "Chunk size", f"{config.sampling.chunk_size:,}")
    table.add_row("Sampling", "Seed", str(config.sampling.seed))

    table.add_row("Output", "Plots dir", str(Path(config.output.plots_dir)))
    table.add_row("Output", "CSV", str(config.output.csv_path))
    table.add_row("Output", "Log file", str(config.output.log_file))
    table.add_row("Output", "Log level", config.output.log_level)

    console.print(table)


def main() -> None:
    """Entry point."""
    app()


if __name__ == "__main__":
    main()
