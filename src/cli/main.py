"""Doggie Quiz CLI (Typer).

The terminal is the presentation layer: it drives `QuizEngine`, reads its
state after every operation and renders it with Rich.
"""

from __future__ import annotations

import asyncio
import webbrowser
from typing import Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from adapters.dog_api import DogApiCatalog
from adapters.score_store import JsonFileScoreStore, MemoryScoreStore
from cli.ui_components import (
    build_breeds_table,
    build_failure_panel,
    build_question_panel,
    format_feedback,
    print_banner,
)
from core.config import AppSettings
from core.domain.errors import CatalogUnavailable, ScoreStoreError
from core.domain.models import Failed, Loaded
from core.interfaces.score_store import ScoreStore
from core.logging_setup import configure_logging
from core.services.quiz_engine import QuizEngine

app = typer.Typer(no_args_is_help=True, help="Guess the dog breed from a random picture.")

_console = Console()


def _load_settings() -> AppSettings:
    """Read settings, turning invalid configuration into a clean exit."""

    try:
        return AppSettings()
    except ValidationError as exc:
        _console.print(f"[red]Invalid configuration:[/red] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc


def _score_store(settings: AppSettings, *, no_save: bool = False) -> ScoreStore:
    if no_save:
        return MemoryScoreStore()
    return JsonFileScoreStore(settings.resolved_score_path())


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logs."),
) -> None:
    settings = _load_settings()
    configure_logging("DEBUG" if verbose else settings.log_level)


async def play_session(
    engine: QuizEngine,
    *,
    console: Console,
    rounds: int | None = None,
    open_images: bool = False,
) -> int:
    """Interactive loop; returns the number of rounds that were decided."""

    await engine.load_breeds_if_needed()

    decided = 0
    while rounds is None or decided < rounds:
        state = engine.state

        if isinstance(state, Failed):
            console.print(build_failure_panel(state.message))
            choice = typer.prompt("[r]etry or [q]uit", default="r").strip().lower()
            if choice.startswith("q"):
                break
            await engine.retry()
            continue

        if not isinstance(state, Loaded):
            await engine.retry()
            continue

        question = state.question
        console.print(build_question_panel(question, score=engine.score))
        if open_images:
            webbrowser.open(question.image_url)

        count = len(question.options)
        choice = typer.prompt(f"Your answer (1-{count}, s=skip, q=quit)").strip().lower()
        if choice.startswith("q"):
            break
        if choice.startswith("s"):
            await engine.advance()
            continue
        if not choice.isdigit() or not 1 <= int(choice) <= count:
            console.print(f"[yellow]Pick a number between 1 and {count}.[/yellow]")
            continue

        result = engine.select_answer(question.options[int(choice) - 1])
        console.print(format_feedback(result, question))
        if not result.is_final:
            continue

        decided += 1
        if rounds is not None and decided >= rounds:
            break
        await engine.advance()

    return decided


@app.command()
def play(
    rounds: Optional[int] = typer.Option(None, "--rounds", "-n", min=1, help="Stop after N answered questions."),
    two_strike: bool = typer.Option(False, "--two-strike", help="Allow a second try after a wrong answer."),
    no_save: bool = typer.Option(False, "--no-save", help="Do not persist the score."),
    open_images: bool = typer.Option(False, "--open-images", help="Open each picture in the browser."),
) -> None:
    """Play the quiz in the terminal."""

    settings = _load_settings()
    store = _score_store(settings, no_save=no_save)
    attempts = 2 if two_strike else settings.attempts_per_question

    async def _run() -> QuizEngine:
        async with DogApiCatalog(settings) as catalog:
            engine = QuizEngine(
                catalog,
                store,
                option_count=settings.option_count,
                attempts_per_question=attempts,
            )
            await play_session(engine, console=_console, rounds=rounds, open_images=open_images)
            return engine

    print_banner(_console)
    engine = asyncio.run(_run())
    _console.print(f"\n[bold]Final score:[/bold] {engine.score}")


@app.command()
def breeds(
    filter_text: Optional[str] = typer.Option(None, "--filter", "-f", help="Only breeds whose name contains TEXT."),
) -> None:
    """List every breed in the catalog."""

    settings = _load_settings()

    async def _fetch():
        async with DogApiCatalog(settings) as catalog:
            return await catalog.fetch_all_breeds()

    try:
        found = asyncio.run(_fetch())
    except CatalogUnavailable as exc:
        _console.print(f"[red]Catalog unavailable:[/red] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc

    if filter_text:
        needle = filter_text.lower()
        found = [b for b in found if needle in b.display_name.lower()]
    _console.print(build_breeds_table(found))


@app.command()
def score() -> None:
    """Show the persisted score."""

    settings = _load_settings()
    _console.print(f"Score: {_score_store(settings).read()}")


@app.command(name="reset-score")
def reset_score(
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation."),
) -> None:
    """Reset the persisted score to 0."""

    settings = _load_settings()
    if not yes and not typer.confirm("Reset your score to 0?"):
        raise typer.Abort()

    try:
        _score_store(settings).write(0)
    except ScoreStoreError as exc:
        _console.print(f"[red]{escape(str(exc))}[/red]")
        raise typer.Exit(code=1) from exc
    _console.print("[green]Score reset to 0.[/green]")


def run() -> None:
    app()
