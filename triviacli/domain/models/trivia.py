"""Domain models for the trivia question bank.

Covers the response-code taxonomy shared by the token and question endpoints,
the request parameters of a question fetch, and the records returned by the
question, category and count endpoints.
"""

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Any, Dict, List, Optional, Tuple

from .common import CategoryId, QueryParams, SessionTokenValue

# Category id 0 means "any category" and is never sent to the server.
ANY_CATEGORY = CategoryId(0)


class ResponseCode(IntEnum):
    """Result code carried in the `response_code` field of every token/question payload."""
    SUCCESS = 0
    NO_RESULTS = 1
    INVALID_PARAMETER = 2
    TOKEN_NOT_FOUND = 3
    TOKEN_EMPTY = 4
    RATE_LIMIT = 5

    @classmethod
    def from_raw(cls, value: Any) -> Optional["ResponseCode"]:
        """Maps a raw payload value to a known code, or None when it is outside the taxonomy.

        Only real integers qualify; floats, strings and bools are never coerced.
        """
        if isinstance(value, bool) or not isinstance(value, int):
            return None
        try:
            return cls(value)
        except ValueError:
            return None


# Codes for which exactly one corrective action and one retry exist
RECOVERABLE_CODES = frozenset({ResponseCode.TOKEN_NOT_FOUND, ResponseCode.TOKEN_EMPTY})


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class QuestionType(str, Enum):
    MULTIPLE = "multiple"
    BOOLEAN = "boolean"


@dataclass(frozen=True)
class RequestParameters:
    """Filters for one logical question fetch."""
    amount: int = 10
    category: Optional[CategoryId] = None
    difficulty: Optional[Difficulty] = None
    type: Optional[QuestionType] = None

    def __post_init__(self) -> None:
        if isinstance(self.amount, bool) or not isinstance(self.amount, int) or self.amount <= 0:
            raise ValueError(f"amount must be a positive integer, got {self.amount!r}")
        if self.category is not None and self.category < 0:
            raise ValueError(f"category must be a positive integer, got {self.category!r}")
        # Coerce plain strings so callers can pass "easy" / "boolean"
        if self.difficulty is not None:
            object.__setattr__(self, "difficulty", Difficulty(self.difficulty))
        if self.type is not None:
            object.__setattr__(self, "type", QuestionType(self.type))

    def to_query(self, token: Optional[SessionTokenValue] = None) -> QueryParams:
        """Builds the query string map; optional filters and the token appear only when set."""
        params: QueryParams = {"amount": str(self.amount)}
        if self.category not in (None, ANY_CATEGORY):
            params["category"] = str(self.category)
        if self.difficulty is not None:
            params["difficulty"] = self.difficulty.value
        if self.type is not None:
            params["type"] = self.type.value
        if token:
            params["token"] = token
        return params


@dataclass(frozen=True)
class Question:
    """A single quiz item. The text fields are kept exactly as the server sent them."""
    category: str
    type: str
    difficulty: str
    question: str
    correct_answer: str
    incorrect_answers: Tuple[str, ...] = ()

    @classmethod
    def from_payload(cls, data: Dict[str, Any]) -> "Question":
        return cls(
            category=data["category"],
            type=data["type"],
            difficulty=data["difficulty"],
            question=data["question"],
            correct_answer=data["correct_answer"],
            incorrect_answers=tuple(data.get("incorrect_answers") or ()),
        )

    @property
    def answers(self) -> List[str]:
        """Correct answer followed by the incorrect ones, in server order."""
        return [self.correct_answer, *self.incorrect_answers]


@dataclass(frozen=True)
class Category:
    id: CategoryId
    name: str

    @classmethod
    def from_payload(cls, data: Dict[str, Any]) -> "Category":
        return cls(id=CategoryId(int(data["id"])), name=str(data["name"]))


@dataclass(frozen=True)
class CategoryQuestionCount:
    """Per-difficulty question totals for one category."""
    category_id: CategoryId
    total: int
    easy: int
    medium: int
    hard: int

    @classmethod
    def from_payload(cls, data: Dict[str, Any]) -> "CategoryQuestionCount":
        counts = data["category_question_count"]
        return cls(
            category_id=CategoryId(int(data["category_id"])),
            total=int(counts["total_question_count"]),
            easy=int(counts["total_easy_question_count"]),
            medium=int(counts["total_medium_question_count"]),
            hard=int(counts["total_hard_question_count"]),
        )


@dataclass(frozen=True)
class GlobalQuestionCount:
    """Bank-wide totals by review status."""
    total: int
    pending: int
    verified: int
    rejected: int

    @classmethod
    def from_payload(cls, data: Dict[str, Any]) -> "GlobalQuestionCount":
        overall = data["overall"]
        return cls(
            total=int(overall["total_num_of_questions"]),
            pending=int(overall["total_num_of_pending_questions"]),
            verified=int(overall["total_num_of_verified_questions"]),
            rejected=int(overall["total_num_of_rejected_questions"]),
        )


@dataclass
class QuestionSummary:
    """Aggregated view of a fetched question list, used by the console display."""
    total: int = 0
    by_difficulty: Dict[str, int] = field(default_factory=dict)
    by_type: Dict[str, int] = field(default_factory=dict)
    by_category: List["CategoryBucket"] = field(default_factory=list)
    selected_label: str = "All Categories"
    selected_count: int = 0


@dataclass
class CategoryBucket:
    """Questions sharing one normalized category label."""
    key: str
    name: str
    size: int = 0
    category_id: Optional[CategoryId] = None
