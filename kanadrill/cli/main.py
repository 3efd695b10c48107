"""
kanadrill CLI - adaptive kana drills in the terminal.

Usage:
    kanadrill drill                      # Word-building drill over all hiragana
    kanadrill drill -r a,ka -n 10        # Ten questions on the a/ka rows
    kanadrill drill --direction reverse  # Always ask reading -> kana
    kanadrill stats                      # Per-character accuracy table
    kanadrill mastered --hide-mastered   # Practice sets still to master
    kanadrill reset --yes                # Clear stored stats
"""

from __future__ import annotations

import random
import sys
import time
from pathlib import Path
from typing import Annotated, Optional

import typer
from loguru import logger
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from kanadrill.config import get_settings
from kanadrill.core.direction import Direction, get_direction_strategy
from kanadrill.core.mastery import (
    MasteryLevel,
    MasteryThresholds,
    calculate_accuracy,
    compute_mastered,
)
from kanadrill.data.kana import SCRIPTS, select_pairs
from kanadrill.study.session import QuizSession
from kanadrill.study.sets import filter_sets, mastered_count, partition_sets
from kanadrill.study.stats_store import StatsStore

# =============================================================================
# CLI Setup
# =============================================================================

app = typer.Typer(
    name="kanadrill",
    help="Adaptive kana drills: weighted selection, mastery tracking, smart reverse mode",
    add_completion=False,
    rich_markup_mode="rich",
)

console = Console()

StatsPathOption = Annotated[
    Optional[Path],
    typer.Option("--stats-path", help="Stats file (defaults to KANADRILL_STATS_PATH)"),
]


def _open_store(stats_path: Optional[Path]) -> StatsStore:
    return StatsStore.open(stats_path or get_settings().stats_path)


def _parse_rows(script: str, rows: Optional[str]) -> list[str] | None:
    if script not in SCRIPTS:
        console.print(f"[red]Unknown script: {script}. Choose hiragana or katakana.[/]")
        raise typer.Exit(1)
    if not rows:
        return None
    return [r.strip() for r in rows.split(",") if r.strip()]


# =============================================================================
# Drill Command
# =============================================================================


@app.command()
def drill(
    script: Annotated[
        str, typer.Option("--script", "-s", help="hiragana or katakana")
    ] = "hiragana",
    rows: Annotated[
        Optional[str], typer.Option("--rows", "-r", help="Comma-separated rows, e.g. a,ka,sa")
    ] = None,
    length: Annotated[
        Optional[int], typer.Option("--length", "-l", help="Characters per word")
    ] = None,
    direction: Annotated[
        Optional[str],
        typer.Option("--direction", "-d", help="smart, forward, reverse or random"),
    ] = None,
    questions: Annotated[
        int, typer.Option("--questions", "-n", help="Number of questions")
    ] = 10,
    seed: Annotated[
        Optional[int], typer.Option("--seed", help="Random seed for reproducible drills")
    ] = None,
    stats_path: StatsPathOption = None,
) -> None:
    """
    Run a word-building drill.

    Type the answer tiles in order, separated by spaces. Leave the answer
    empty to skip a question.
    """
    settings = get_settings()
    try:
        pairs = select_pairs(script, _parse_rows(script, rows))
    except KeyError as e:
        console.print(f"[red]Unknown row: {e}[/]")
        raise typer.Exit(1)

    mode = (direction or settings.direction_mode).lower()
    rng = random.Random(seed)
    store = _open_store(stats_path)

    if mode in ("forward", "reverse"):
        session = QuizSession(store, settings, direction=Direction(mode), rng=rng)
    elif mode in ("smart", "random"):
        strategy = get_direction_strategy(mode, settings.flip_streak, rng)
        session = QuizSession(store, settings, strategy=strategy, rng=rng)
    else:
        console.print(f"[red]Unknown direction mode: {mode}[/]")
        raise typer.Exit(1)

    word_length = length or settings.word_length
    console.print(
        Panel(
            f"[bold cyan]KANA DRILL[/]\n"
            f"Script: {script}  Characters: {len(pairs)}\n"
            f"Word length: {word_length}  Direction: {mode}",
            border_style="cyan",
        )
    )

    for number in range(1, questions + 1):
        question = session.next_word(pairs, word_length)
        if question.is_empty:
            console.print(
                f"[red]Select at least {word_length} characters to build a word "
                f"(have {len(pairs)}).[/]"
            )
            raise typer.Exit(1)

        asking = "reading → kana" if question.direction.is_reverse else "kana → reading"
        console.print(f"\n[bold]Q{number}[/] [dim]({asking})[/]  [bold yellow]{' '.join(question.prompt)}[/]")
        console.print(f"Tiles: {'  '.join(question.tiles)}")

        started = time.monotonic()
        raw = typer.prompt("Answer", default="", show_default=False)
        elapsed_ms = int((time.monotonic() - started) * 1000)

        result = session.submit(raw.split(), elapsed_ms)
        if result is None:
            console.print("[dim]Skipped[/]")
            continue
        if result.correct:
            console.print(f"[green]✓ Correct[/]  score {result.score}")
        else:
            console.print(f"[red]✗ Expected:[/] {' '.join(result.expected)}  score {result.score}")

    summary = session.get_session_summary()
    table = Table(title="Session Summary")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("Questions answered", str(summary["questions_answered"]))
    table.add_row("Score", str(summary["score"]))
    table.add_row("Best streak", str(summary["best_streak"]))
    table.add_row("Avg answer time", f"{summary['average_answer_ms'] / 1000:.1f}s")
    console.print(table)


# =============================================================================
# Stats Commands
# =============================================================================


@app.command()
def stats(stats_path: StatsPathOption = None) -> None:
    """Show per-character accuracy and mastery level."""
    settings = get_settings()
    store = _open_store(stats_path)
    thresholds = MasteryThresholds.from_settings(settings)
    snap = store.snapshot

    if not snap.characters:
        console.print("[yellow]No answers recorded yet. Run `kanadrill drill` first.[/]")
        return

    table = Table(title="Character Stats")
    table.add_column("Char", style="bold")
    table.add_column("Correct", justify="right")
    table.add_column("Incorrect", justify="right")
    table.add_column("Accuracy", justify="right")
    table.add_column("Level")

    for char, counts in snap.characters.items():
        accuracy = calculate_accuracy(counts.correct, counts.incorrect)
        level = MasteryLevel.from_counts(counts.correct, counts.incorrect, thresholds)
        table.add_row(
            char,
            str(counts.correct),
            str(counts.incorrect),
            f"{accuracy:.0%}",
            level.badge,
        )
    console.print(table)
    console.print(
        f"Answers: [green]{snap.correct_answers} correct[/], "
        f"[red]{snap.wrong_answers} wrong[/]  Best streak: {snap.best_streak}"
    )


@app.command()
def mastered(
    script: Annotated[
        str, typer.Option("--script", "-s", help="hiragana or katakana")
    ] = "hiragana",
    hide_mastered: Annotated[
        bool, typer.Option("--hide-mastered", help="Only list sets not yet mastered")
    ] = False,
    stats_path: StatsPathOption = None,
) -> None:
    """List mastered characters and practice sets."""
    settings = get_settings()
    if script not in SCRIPTS:
        console.print(f"[red]Unknown script: {script}[/]")
        raise typer.Exit(1)

    store = _open_store(stats_path)
    done = compute_mastered(store.counters(), MasteryThresholds.from_settings(settings))

    item_ids = list(select_pairs(script))
    sets = partition_sets(item_ids, done, settings.items_per_set)
    shown = filter_sets(sets, hide_mastered)

    chars = [c for c in item_ids if c in done]
    console.print(f"Mastered characters ({len(chars)}): {' '.join(chars) or '-'}")
    console.print(f"Mastered sets: {mastered_count(sets)}/{len(sets)}")
    for drill_set in shown:
        mark = "[green]●[/]" if drill_set.is_mastered else "[dim]○[/]"
        console.print(f"  {mark} {drill_set.name}: {' '.join(drill_set.item_ids)}")


@app.command()
def reset(
    yes: Annotated[
        bool, typer.Option("--yes", "-y", help="Skip confirmation")
    ] = False,
    stats_path: StatsPathOption = None,
) -> None:
    """Delete all stored stats."""
    store = _open_store(stats_path)
    if not yes and not typer.confirm(f"Delete all stats in {store.path}?"):
        console.print("[yellow]Cancelled[/]")
        return
    store.reset()
    console.print("[green]✓ Stats cleared[/]")


# =============================================================================
# Entry Point
# =============================================================================


def main() -> None:
    """CLI entry point."""
    logger.remove()
    logger.add(
        sys.stderr,
        level=get_settings().log_level.upper(),
        format="<dim>{time:HH:mm:ss}</dim> | <level>{level: <8}</level> | {message}",
    )

    app()


if __name__ == "__main__":
    main()
