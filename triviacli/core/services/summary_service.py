"""Aggregates a fetched question list for display.

Counts questions by difficulty, by type and by category label, resolving
labels to category ids through the category list where possible.
"""

import logging
from typing import Dict, Optional, Sequence

from triviacli.domain.models.common import CategoryId
from triviacli.domain.models.trivia import (
    Category,
    CategoryBucket,
    Difficulty,
    Question,
    QuestionSummary,
    QuestionType,
)
from triviacli.utils.labels import category_name_keys, decode_html_entities, normalize_category_label

logger = logging.getLogger(__name__)

ALL_CATEGORIES_LABEL = "All Categories"


class SummaryService:
    """Builds QuestionSummary values; holds no state between calls."""

    def summarize(
        self,
        questions: Sequence[Question],
        categories: Sequence[Category] = (),
        selected_category_id: Optional[CategoryId] = None,
    ) -> QuestionSummary:
        """Summarizes questions, optionally focusing difficulty/type counts on one category.

        Args:
            questions: Questions as fetched.
            categories: Known categories used to resolve labels to ids.
            selected_category_id: Category to focus on; None or 0 means all.
        """
        lookup = self._build_lookup(categories)
        selected = self._find_category(categories, selected_category_id)

        if selected is not None:
            selected_keys = set(category_name_keys(selected.name))
            focused = [q for q in questions if normalize_category_label(q.category) in selected_keys]
            label = decode_html_entities(selected.name)
        elif selected_category_id:
            # Unknown id: nothing can match it
            focused = []
            label = "Selected Category"
        else:
            focused = list(questions)
            label = ALL_CATEGORIES_LABEL

        by_difficulty: Dict[str, int] = {d.value: 0 for d in Difficulty}
        by_type: Dict[str, int] = {t.value: 0 for t in QuestionType}
        for question in focused:
            by_difficulty[question.difficulty] = by_difficulty.get(question.difficulty, 0) + 1
            by_type[question.type] = by_type.get(question.type, 0) + 1

        buckets: Dict[str, CategoryBucket] = {}
        for question in questions:
            key = normalize_category_label(question.category or "Unknown")
            bucket = buckets.get(key)
            if bucket is None:
                category = lookup.get(key)
                bucket = CategoryBucket(
                    key=key,
                    name=decode_html_entities(question.category) or "Unknown",
                    category_id=category.id if category else None,
                )
                buckets[key] = bucket
            bucket.size += 1

        logger.debug(f"Summarized {len(questions)} questions into {len(buckets)} category buckets.")
        return QuestionSummary(
            total=len(questions),
            by_difficulty=by_difficulty,
            by_type=by_type,
            by_category=list(buckets.values()),
            selected_label=label,
            selected_count=len(focused),
        )

    @staticmethod
    def _build_lookup(categories: Sequence[Category]) -> Dict[str, Category]:
        lookup: Dict[str, Category] = {}
        for category in categories:
            for key in category_name_keys(category.name):
                lookup[key] = category
        return lookup

    @staticmethod
    def _find_category(
        categories: Sequence[Category], category_id: Optional[CategoryId]
    ) -> Optional[Category]:
        if not category_id:
            return None
        return next((c for c in categories if c.id == category_id), None)
