"""
Typer CLI for inspecting the mathsprint engine.

Commands:
    mathsprint questions rounding --tier 4      - Preview generated questions
    mathsprint score results.json -d 90         - Score a recorded session
    mathsprint place assessment.json            - Place a new player
    mathsprint weakness results.json            - Detect the weakest strategy
    mathsprint strategy add_make_tens           - Show a remedial lesson
    mathsprint levels --up-to 20                - Show the level curve

Results files are JSON lists of question results:
    [{"operation": "add", "operandA": 47, "operandB": 35,
      "isCorrect": true, "responseTimeMs": 1450}, ...]

Usage:
    mathsprint --help
    mathsprint questions halving --tier 9 --count 5 --seed 7
"""

from __future__ import annotations

import json
import random
import sys
from pathlib import Path
from typing import Optional

import typer
from loguru import logger
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from mathsprint.adaptive import detect_weakness, get_strategy_content
from mathsprint.config import get_settings
from mathsprint.core.errors import ConfigurationError
from mathsprint.core.models import QuestionResult
from mathsprint.drills import DrillFamily, format_number, generate_question
from mathsprint.scoring import (
    AssessmentMetrics,
    apply_mode_multiplier,
    compute_placement,
    fluency_label,
    placement_message,
    score_session,
    xp_required_to_advance,
)

app = typer.Typer(
    help="mathsprint: adaptive-practice engine for mental arithmetic",
    no_args_is_help=True,
)
console = Console()


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
):
    """Configure logging for all commands."""
    logger.remove()
    logger.add(
        sys.stderr,
        level="DEBUG" if verbose else "WARNING",
        format="<dim>{time:HH:mm:ss}</dim> | <level>{level: <8}</level> | {message}",
    )


def _load_results(path: Path) -> list[QuestionResult]:
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        console.print(f"[red]Cannot read {path}:[/red] {e}")
        raise typer.Exit(1)

    if isinstance(raw, dict):
        raw = raw.get("results", [])
    try:
        return [QuestionResult.from_dict(item) for item in raw]
    except (KeyError, TypeError, ValueError) as e:
        console.print(f"[red]Malformed question result in {path}:[/red] {e}")
        raise typer.Exit(1)


@app.command("questions")
def questions(
    family: DrillFamily = typer.Argument(..., help="Drill family"),
    tier: int = typer.Option(0, "--tier", "-t", help="Difficulty tier"),
    count: int = typer.Option(5, "--count", "-n", help="Number of questions"),
    seed: Optional[int] = typer.Option(None, "--seed", help="Seed for reproducible output"),
    show_answers: bool = typer.Option(True, "--answers/--no-answers", help="Show answers"),
):
    """
    Preview generated questions for a drill family.

    Examples:
        mathsprint questions rounding --tier 10
        mathsprint questions doubling -t 3 -n 10 --seed 42
    """
    rng = random.Random(seed)

    table = Table(title=f"{family.value.title()} - tier {tier}")
    table.add_column("ID", style="dim")
    table.add_column("Question")
    if show_answers:
        table.add_column("Answer", style="green", justify="right")

    for _ in range(max(0, count)):
        q = generate_question(family, tier, rng)
        row = [q.id, q.text]
        if show_answers:
            row.append(format_number(q.answer))
        table.add_row(*row)

    console.print(table)


@app.command("score")
def score(
    results_file: Path = typer.Argument(..., help="JSON file of question results"),
    duration: float = typer.Option(..., "--duration", "-d", help="Session length in seconds"),
    session_type: str = typer.Option("daily", "--session-type", "-s", help="Session type"),
):
    """
    Score a recorded session: fluency, XP and validity.

    Examples:
        mathsprint score session.json --duration 120
    """
    try:
        settings = get_settings()
    except ConfigurationError as e:
        console.print(f"[red]Invalid configuration:[/red] {e}")
        raise typer.Exit(1)

    results = _load_results(results_file)
    result = score_session(results, duration, settings)
    awarded = apply_mode_multiplier(result.xp, session_type, settings)

    table = Table(title="Session Score", show_header=False)
    table.add_column("Metric", style="bold")
    table.add_column("Value", justify="right")

    if result.breakdown:
        b = result.breakdown
        table.add_row("Accuracy", f"{b.accuracy:.0%}")
        table.add_row("Speed", f"{b.speed_score:.2f}")
        table.add_row("Throughput", f"{b.throughput_score:.2f}")
        table.add_row("Consistency", f"{b.consistency_score:.2f}")
    table.add_row("Fluency", f"{result.fluency:.2f} ({fluency_label(result.fluency)})")
    table.add_row("XP", str(result.xp))
    if result.bonus_applied:
        label = "Elite" if result.elite else "Excellence"
        table.add_row("Bonus", f"{label} x{result.multiplier}")
    table.add_row(f"Awarded ({session_type})", str(awarded))
    table.add_row("Valid", "[green]yes[/green]" if result.is_valid else "[yellow]no[/yellow]")

    console.print(table)


@app.command("place")
def place(
    results_file: Path = typer.Argument(..., help="JSON file of assessment answers"),
    duration: float = typer.Option(180.0, "--duration", "-d", help="Assessment length in seconds"),
):
    """
    Place a new player from a placement assessment.

    Examples:
        mathsprint place assessment.json --duration 180
    """
    results = _load_results(results_file)
    result = compute_placement(AssessmentMetrics.from_results(results, duration))

    if not result.is_valid:
        console.print("[yellow]Too few answers to place; starting at level 1.[/yellow]")

    table = Table(title="Placement", show_header=False)
    table.add_column("Metric", style="bold")
    table.add_column("Value", justify="right")
    table.add_row("Correct per minute", f"{result.cpm:.1f}")
    table.add_row("Accuracy", f"{result.accuracy:.0%}")
    table.add_row("Median time", f"{result.median_ms}ms")
    table.add_row("Competence group", str(result.competence_group))
    table.add_row("Starting level", str(result.starting_level))

    console.print(table)
    console.print(placement_message(result.competence_group))


@app.command("weakness")
def weakness(
    results_file: Path = typer.Argument(..., help="JSON file of question results"),
    taught: Optional[list[str]] = typer.Option(None, "--taught", help="Strategy ids already taught"),
):
    """
    Detect the weakest untaught strategy in a set of results.

    Examples:
        mathsprint weakness recent.json --taught add_make_tens
    """
    results = _load_results(results_file)
    pattern = detect_weakness(results, taught or ())

    if pattern is None:
        console.print("[green]No weakness found.[/green]")
        return

    console.print(Panel(
        f"[bold]{pattern.description}[/bold] ({pattern.operation.value})\n"
        f"Accuracy {pattern.accuracy:.0%} over {pattern.total_attempts} attempts, "
        f"{pattern.incorrect_count} wrong",
        title=pattern.strategy_id,
        border_style="yellow",
    ))


@app.command("strategy")
def strategy(
    strategy_id: str = typer.Argument(..., help="Strategy id"),
):
    """Show the remedial lesson for a strategy."""
    content = get_strategy_content(strategy_id)
    if content is None:
        console.print(f"[red]Unknown strategy:[/red] {strategy_id}")
        raise typer.Exit(1)

    lines = [f"[italic]{content.tagline}[/italic]", "", f"Example: [bold]{content.example.problem}[/bold]"]
    for i, step in enumerate(content.steps, 1):
        equation = f"  [cyan]{step.equation}[/cyan]" if step.equation else ""
        lines.append(f"{i}. {step.text}{equation}")
    lines += ["", f"[green]Tip:[/green] {content.tip}"]

    console.print(Panel("\n".join(lines), title=content.title, border_style="cyan"))


@app.command("levels")
def levels(
    up_to: int = typer.Option(20, "--up-to", help="Last level to show"),
):
    """Show XP needed to advance from each level."""
    table = Table(title="Level Curve")
    table.add_column("Level", justify="right")
    table.add_column("XP to next", justify="right")
    table.add_column("Cumulative", justify="right", style="dim")

    total = 0
    for level in range(1, max(1, up_to) + 1):
        required = xp_required_to_advance(level)
        total += required
        table.add_row(str(level), f"{required:,}", f"{total:,}")

    console.print(table)


def run() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    run()
