import io

import pytest
from rich.console import Console

from triviacli.domain.models.trivia import (
    Category,
    CategoryBucket,
    CategoryQuestionCount,
    GlobalQuestionCount,
    Question,
    QuestionSummary,
)
from triviacli.infrastructure.cli.display import ConsoleDisplay

from tests.fakes import question_payload


@pytest.fixture
def display():
    console = Console(file=io.StringIO(), width=200, record=True, color_system=None)
    return ConsoleDisplay(console=console)


def output(display):
    return display.console.export_text()


def test_display_questions_decodes_entities(display):
    payload = question_payload(1)
    payload["question"] = "Who wrote &quot;Hamlet&quot;?"
    display.display_questions([Question.from_payload(payload)])

    text = output(display)
    assert 'Who wrote "Hamlet"?' in text
    assert "Right 1" in text


def test_display_questions_can_hide_answers(display):
    display.display_questions([Question.from_payload(question_payload(1))], show_answers=False)

    text = output(display)
    assert "Question 1?" in text
    assert "Right 1" not in text


def test_display_questions_does_not_interpret_markup(display):
    payload = question_payload(1)
    payload["question"] = "Is [bold]this[/bold] literal?"
    display.display_questions([Question.from_payload(payload)])

    assert "[bold]this[/bold]" in output(display)


def test_display_categories(display):
    display.display_categories([Category(9, "General Knowledge"), Category(10, "Entertainment: Books")])

    text = output(display)
    assert "General Knowledge" in text
    assert "Entertainment: Books" in text


def test_display_counts(display):
    display.display_category_count(
        CategoryQuestionCount(category_id=9, total=300, easy=120, medium=110, hard=70),
        category_name="General Knowledge",
    )
    display.display_global_count(GlobalQuestionCount(total=5000, pending=900, verified=4000, rejected=100))

    text = output(display)
    assert "General Knowledge" in text
    assert "300" in text
    assert "4,000" in text


def test_display_summary(display):
    summary = QuestionSummary(
        total=3,
        by_difficulty={"easy": 2, "medium": 1, "hard": 0},
        by_type={"multiple": 3, "boolean": 0},
        by_category=[CategoryBucket(key="animals", name="Animals", size=3, category_id=27)],
        selected_count=3,
    )
    display.display_summary(summary)

    text = output(display)
    assert "All Categories" in text
    assert "Animals" in text


def test_display_error_and_info(display):
    display.display_error("Something broke")
    display.display_info("All good")
    display.display_warning("Careful")

    text = output(display)
    assert "Something broke" in text
    assert "Info: All good" in text
    assert "Warning: Careful" in text
