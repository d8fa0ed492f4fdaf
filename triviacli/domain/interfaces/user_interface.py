"""Interface for presenting trivia results to the user.

Defines the contract for displaying questions, categories, counts and
status messages, allowing different UI implementations (e.g., console, GUI).
"""

import abc
from typing import Any, Optional, Sequence

from triviacli.domain.models.trivia import (
    Category,
    CategoryQuestionCount,
    GlobalQuestionCount,
    Question,
    QuestionSummary,
)


class UserInterface(abc.ABC):
    """Abstract Base Class for user interaction."""

    @abc.abstractmethod
    def display_questions(self, questions: Sequence[Question], **kwargs: Any) -> None:
        """Displays a fetched list of questions.

        Args:
            questions: Questions in the order the server returned them.
            **kwargs: Additional arguments for formatting (e.g., show_answers).
        """
        pass

    @abc.abstractmethod
    def display_categories(self, categories: Sequence[Category], **kwargs: Any) -> None:
        """Displays the category list."""
        pass

    @abc.abstractmethod
    def display_category_count(
        self, count: CategoryQuestionCount, category_name: Optional[str] = None, **kwargs: Any
    ) -> None:
        """Displays per-difficulty totals for one category."""
        pass

    @abc.abstractmethod
    def display_global_count(self, count: GlobalQuestionCount, **kwargs: Any) -> None:
        """Displays bank-wide question totals."""
        pass

    def display_summary(self, summary: QuestionSummary, **kwargs: Any) -> None:
        """Displays aggregated counts for a fetched question list.

        Optional; implementations without a summary view ignore it.
        """
        pass

    @abc.abstractmethod
    def display_error(self, error_message: str, **kwargs: Any) -> None:
        """Displays an error message to the user."""
        pass

    @abc.abstractmethod
    def display_warning(self, warning_message: str, **kwargs: Any) -> None:
        """Displays a warning message to the user."""
        pass

    @abc.abstractmethod
    def display_info(self, info_message: str, **kwargs: Any) -> None:
        """Displays an informational message to the user."""
        pass
