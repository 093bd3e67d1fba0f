"""Showdown Simulator CLI — Typer-based command line interface."""

import logging
from typing import List, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from showdown_sim import config

app = typer.Typer(
    name="showdown-sim",
    help="Monte Carlo Texas Hold'em showdown simulator",
    no_args_is_help=True,
)
console = Console()
err_console = Console(stderr=True)


def _setup_logging(level: str) -> None:
    if not isinstance(logging.getLevelName(level.upper()), int):
        raise ValueError(f"Unknown log level: {level}")
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def _parse_cards(cards: List[str]):
    from showdown_sim.models.card import Card

    try:
        return [Card.parse(c) for c in cards]
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)


@app.command()
def run(
    games: int = typer.Option(config.NUM_GAMES, "--games", "-g",
                              help="Number of games to simulate"),
    players: int = typer.Option(config.NUM_PLAYERS, "--players", "-p",
                                help="Players per game (2-23)"),
    workers: int = typer.Option(config.WORKERS, "--workers", "-w",
                                help="Worker processes (0 = one per CPU)"),
    batch_size: int = typer.Option(config.BATCH_SIZE, "--batch-size",
                                   help="Games per worker batch"),
    seed: Optional[int] = typer.Option(config.SEED, "--seed",
                                       help="Seed for a reproducible run"),
    table: bool = typer.Option(False, "--table", help="Show results as tables"),
    progress: bool = typer.Option(False, "--progress", help="Show a progress bar"),
    log_level: str = typer.Option(config.LOG_LEVEL, "--log-level",
                                  help="Logging level"),
):
    """Simulate showdowns and report wins and hand frequencies."""
    from rich.progress import Progress
    from showdown_sim.formatters.table import TableFormatter
    from showdown_sim.formatters.text import TextFormatter
    from showdown_sim.models.simulation import SimulationConfig
    from showdown_sim.simulation.runner import TrialRunner

    sim_config = SimulationConfig(
        num_games=games,
        num_players=players,
        workers=config.resolve_workers(workers),
        batch_size=batch_size,
        seed=seed,
    )
    try:
        _setup_logging(log_level)
        sim_config.validate()
    except ValueError as e:
        console.print(f"[red]Invalid configuration:[/red] {e}")
        raise typer.Exit(1)

    if progress:
        with Progress(console=err_console, transient=True) as bar:
            task = bar.add_task("Simulating", total=games)
            runner = TrialRunner(
                sim_config,
                on_batch_complete=lambda done: bar.update(task, completed=done),
            )
            result = runner.run()
    else:
        result = TrialRunner(sim_config).run()

    if table:
        TableFormatter(console).print_results(result)
    else:
        typer.echo(TextFormatter().format_results(result))


@app.command()
def evaluate(
    cards: List[str] = typer.Argument(..., help="5 to 7 cards, e.g. As Ks Qs Js Ts"),
    table: bool = typer.Option(False, "--table", help="Show result as a table"),
):
    """Evaluate the best five-card hand among the given cards."""
    from showdown_sim.formatters.table import TableFormatter
    from showdown_sim.formatters.text import TextFormatter
    from showdown_sim.simulation.evaluator import HandEvaluator

    parsed = _parse_cards(cards)
    if not 5 <= len(parsed) <= 7:
        console.print(f"[red]Expected 5 to 7 cards, got {len(parsed)}[/red]")
        raise typer.Exit(1)
    if len(set(parsed)) != len(parsed):
        console.print("[red]Duplicate cards given[/red]")
        raise typer.Exit(1)

    rank = HandEvaluator.evaluate(parsed)
    if table:
        TableFormatter(console).print_hand_rank(parsed, rank)
    else:
        typer.echo(TextFormatter().format_hand_rank(parsed, rank))


@app.command()
def deal(
    players: int = typer.Option(config.NUM_PLAYERS, "--players", "-p",
                                help="Players at the table (2-23)"),
    seed: Optional[int] = typer.Option(config.SEED, "--seed",
                                       help="Seed for a reproducible deal"),
):
    """Deal and show a single showdown."""
    import random
    from showdown_sim.formatters.text import TextFormatter
    from showdown_sim.simulation.engine import ShowdownSimulator

    try:
        simulator = ShowdownSimulator(players, random.Random(seed))
    except ValueError as e:
        console.print(f"[red]Invalid configuration:[/red] {e}")
        raise typer.Exit(1)

    typer.echo(TextFormatter().format_showdown(simulator.play_hand()))


if __name__ == "__main__":
    app()
