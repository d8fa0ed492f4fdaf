"""Reads the category list and question counts.

These endpoints have no response-code protocol and are not rate gated: they
either decode into domain models or raise NetworkError/DecodeError.
"""

import logging
from typing import Any, Callable, List, TypeVar

from triviacli.domain.exceptions import DecodeError
from triviacli.domain.models.common import CategoryId, JsonPayload
from triviacli.domain.models.trivia import Category, CategoryQuestionCount, GlobalQuestionCount
from triviacli.infrastructure.http.dispatcher import (
    CATEGORIES_PATH,
    CATEGORY_COUNT_PATH,
    GLOBAL_COUNT_PATH,
    RequestDispatcher,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class CatalogService:
    """Category and count lookups."""

    def __init__(self, dispatcher: RequestDispatcher):
        self.dispatcher = dispatcher

    async def get_categories(self) -> List[Category]:
        payload = await self.dispatcher.get_json(CATEGORIES_PATH)
        categories = _decode(payload, lambda p: [Category.from_payload(c) for c in p["trivia_categories"]])
        logger.debug(f"Loaded {len(categories)} categories.")
        return categories

    async def get_category_question_count(self, category_id: CategoryId) -> CategoryQuestionCount:
        if category_id <= 0:
            raise ValueError(f"category_id must be a positive integer, got {category_id!r}")
        payload = await self.dispatcher.get_json(CATEGORY_COUNT_PATH, {"category": str(category_id)})
        return _decode(payload, CategoryQuestionCount.from_payload)

    async def get_global_question_count(self) -> GlobalQuestionCount:
        payload = await self.dispatcher.get_json(GLOBAL_COUNT_PATH)
        return _decode(payload, GlobalQuestionCount.from_payload)


def _decode(payload: JsonPayload, parse: Callable[[JsonPayload], T]) -> T:
    try:
        return parse(payload)
    except (KeyError, TypeError, ValueError) as e:
        logger.error(f"Unexpected catalog payload: {e}")
        raise DecodeError(f"Unexpected payload shape: {e}") from e
