import logging
from typing import Any, Optional, Sequence

from rich.box import HEAVY, ROUNDED, SIMPLE
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from triviacli.domain.interfaces.user_interface import UserInterface
from triviacli.domain.models.trivia import (
    Category,
    CategoryQuestionCount,
    GlobalQuestionCount,
    Question,
    QuestionSummary,
)
from triviacli.utils.labels import decode_html_entities

logger = logging.getLogger(__name__)

DIFFICULTY_STYLES = {"easy": "green", "medium": "yellow", "hard": "red"}
TYPE_LABELS = {"multiple": "Multiple Choice", "boolean": "True / False"}

class ConsoleDisplay(UserInterface):
    """Concrete implementation of UserInterface using the rich library for console output."""

    def __init__(self, console: Optional[Console] = None):
        self._console = console or Console()

    @property
    def console(self) -> Console:
        """Get the Rich console instance for direct operations."""
        return self._console

    @console.setter
    def console(self, value: Console) -> None:
        self._console = value

    def display_questions(self, questions: Sequence[Question], **kwargs: Any) -> None:
        """Renders questions as a table; HTML entities are decoded for display only.

        Args:
            questions: Questions in server order.
            **kwargs: show_answers (bool, default True) toggles the answer columns.
        """
        show_answers = kwargs.get("show_answers", True)
        logger.debug(f"Displaying {len(questions)} questions (show_answers={show_answers})")

        table = Table(show_header=True, box=ROUNDED, border_style="cyan", padding=(0, 1))
        table.add_column("#", style="cyan", justify="right")
        table.add_column("Category", style="dim")
        table.add_column("Difficulty")
        table.add_column("Question", style="white")
        if show_answers:
            table.add_column("Answer", style="bold green")
            table.add_column("Other options", style="dim")

        for i, question in enumerate(questions, 1):
            style = DIFFICULTY_STYLES.get(question.difficulty, "white")
            row = [
                str(i),
                Text(decode_html_entities(question.category)),
                f"[{style}]{question.difficulty}[/{style}]",
                Text(decode_html_entities(question.question)),
            ]
            if show_answers:
                row.append(Text(decode_html_entities(question.correct_answer)))
                row.append(Text(", ".join(decode_html_entities(a) for a in question.incorrect_answers)))
            table.add_row(*row)

        self.console.print(table)

    def display_categories(self, categories: Sequence[Category], **kwargs: Any) -> None:
        table = Table(show_header=True, box=SIMPLE, border_style="cyan")
        table.add_column("ID", style="cyan", justify="right")
        table.add_column("Name")
        for category in categories:
            table.add_row(str(category.id), Text(decode_html_entities(category.name)))
        self.console.print(table)

    def display_category_count(
        self, count: CategoryQuestionCount, category_name: Optional[str] = None, **kwargs: Any
    ) -> None:
        title = decode_html_entities(category_name) if category_name else f"Category {count.category_id}"
        table = Table(title=title, show_header=True, box=SIMPLE)
        table.add_column("Total", justify="right", style="bold")
        table.add_column("Easy", justify="right", style="green")
        table.add_column("Medium", justify="right", style="yellow")
        table.add_column("Hard", justify="right", style="red")
        table.add_row(f"{count.total:,}", f"{count.easy:,}", f"{count.medium:,}", f"{count.hard:,}")
        self.console.print(table)

    def display_global_count(self, count: GlobalQuestionCount, **kwargs: Any) -> None:
        table = Table(title="Question bank", show_header=True, box=SIMPLE)
        table.add_column("Total", justify="right", style="bold")
        table.add_column("Verified", justify="right", style="green")
        table.add_column("Pending", justify="right", style="yellow")
        table.add_column("Rejected", justify="right", style="red")
        table.add_row(f"{count.total:,}", f"{count.verified:,}", f"{count.pending:,}", f"{count.rejected:,}")
        self.console.print(table)

    def display_summary(self, summary: QuestionSummary, **kwargs: Any) -> None:
        """Prints the selected-category count followed by difficulty, type and category tables."""
        header = Text(f"{summary.selected_count:,} in {summary.selected_label}", style="bold cyan")
        self.console.print(header)

        difficulty = Table(title="By difficulty", box=SIMPLE)
        difficulty.add_column("Difficulty")
        difficulty.add_column("Count", justify="right")
        for name, value in summary.by_difficulty.items():
            style = DIFFICULTY_STYLES.get(name, "white")
            difficulty.add_row(f"[{style}]{name.capitalize()}[/{style}]", str(value))

        kinds = Table(title="By type", box=SIMPLE)
        kinds.add_column("Type")
        kinds.add_column("Count", justify="right")
        for name, value in summary.by_type.items():
            kinds.add_row(TYPE_LABELS.get(name, name), str(value))

        themes = Table(title="By category", box=SIMPLE)
        themes.add_column("Category")
        themes.add_column("ID", justify="right", style="dim")
        themes.add_column("Count", justify="right")
        for bucket in sorted(summary.by_category, key=lambda b: b.size, reverse=True):
            themes.add_row(Text(bucket.name), str(bucket.category_id) if bucket.category_id else "-", str(bucket.size))

        self.console.print(difficulty)
        self.console.print(kinds)
        self.console.print(themes)

    def display_error(self, error_message: str, **kwargs: Any) -> None:
        panel = Panel(
            Text(error_message, style="white"),
            title="[bold red]Error[/bold red]",
            border_style="red",
            box=HEAVY,
            padding=(0, 1)
        )
        self.console.print(panel)

    def display_info(self, info_message: str, **kwargs: Any) -> None:
        self.console.print(f"[blue]Info:[/blue] {info_message}")

    def display_warning(self, warning_message: str, **kwargs: Any) -> None:
        logger.warning(f"Display warning: {warning_message}")
        self.console.print(f"[bold yellow]Warning:[/bold yellow] {warning_message}")
