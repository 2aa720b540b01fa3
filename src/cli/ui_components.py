"""CLI UI components (Rich).

Why separate components:
- Keeps command logic apart from visual details.
- Lets several commands reuse the same tables and panels.
"""

from __future__ import annotations

from typing import Iterable

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.style import Style
from rich.table import Table
from rich.text import Text

from core.domain.models import AnswerOutcome, AnswerResult, Breed, Question


def print_banner(console: Console) -> None:
    title = Text("Doggie Quiz", style="bold cyan")
    subtitle = Text("Guess the breed • Score points • Repeat", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_question_panel(question: Question, *, score: int) -> Panel:
    """Image link plus the numbered options, in display order."""

    body = Text()
    body.append("Image: ", style="bold")
    body.append(question.image_url + "\n\n", style=Style(color="magenta", link=question.image_url))
    for idx, option in enumerate(question.options, start=1):
        body.append(f"  {idx}. ", style="bold cyan")
        body.append(option.display_name + "\n")
    body.append(f"\nScore: {score}", style="dim")
    return Panel(body, title=Text("Which breed is this?", style="bold"), border_style="cyan")


def build_failure_panel(message: str) -> Panel:
    return Panel(Text(message, style="red"), title="Oops", border_style="red")


def format_feedback(result: AnswerResult, question: Question | None = None) -> Text:
    if result.outcome is AnswerOutcome.CORRECT:
        return Text("Correct!", style="bold green")
    if result.outcome is AnswerOutcome.INCORRECT_RETRY_ALLOWED:
        return Text("Try again!", style="bold yellow")
    if result.outcome is AnswerOutcome.INCORRECT and result.correct_breed is not None:
        label = result.correct_breed.display_name
        index = question.index_of(result.correct_breed) if question is not None else None
        if index is not None:
            label = f"{index + 1}. {label}"
        return Text(f"Awwww it is: {label}", style="bold red")
    return Text("No question to answer right now.", style="dim")


def build_breeds_table(breeds: Iterable[Breed]) -> Table:
    table = Table(title="Dog Breeds")
    table.add_column("Breed", style="cyan", no_wrap=True)
    table.add_column("Catalog path", style="magenta")
    for breed in breeds:
        table.add_row(breed.display_name, breed.path_key)
    return table
