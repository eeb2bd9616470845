"""Sequential bulk creation with per-item failure isolation.

``run_bulk`` feeds each item to a ``create_one`` callable in input order. A
failing item is recorded and the batch moves on; nothing is retried and no
item is attempted twice. Items run one after another so that duplicates of a
unique field inside one batch resolve deterministically: the first occurrence
wins and later ones fail with a conflict.
"""

from collections.abc import Callable, Sequence
from typing import Any, Generic, TypeVar

from pydantic import BaseModel

from locals_api.core.exceptions import AppException, InvalidInputError
from locals_api.core.logging import get_logger

logger = get_logger(__name__)

S = TypeVar("S")
R = TypeVar("R")

UNEXPECTED_ITEM_ERROR = "Unexpected error while creating item"


class BulkSuccess(BaseModel, Generic[R]):
    index: int
    data: R


class BulkFailure(BaseModel):
    index: int
    identifying_field: str | None = None
    error_message: str


class BulkPartition(BaseModel, Generic[R]):
    successful: list[BulkSuccess[R]]
    failed: list[BulkFailure]


class BulkResult(BaseModel, Generic[R]):
    """Outcome of a bulk run.

    ``created + failed == total`` and the indices in ``data.successful`` and
    ``data.failed`` together cover every input position exactly once.
    """

    success: bool
    total: int
    created: int
    failed: int
    data: BulkPartition[R]


def run_bulk(
    items: Sequence[S],
    create_one: Callable[[S], R],
    identify: Callable[[S], Any] | None = None,
) -> BulkResult[R]:
    """Create every item independently and summarise the outcome.

    Args:
        items: Non-empty list of creation payloads
        create_one: Creates one item; raises on failure
        identify: Returns the field that identifies an item in failure
            reports (e.g. a product code)

    Raises:
        InvalidInputError: ``items`` is empty or not a list; raised before
            any item is processed
    """
    if not isinstance(items, list | tuple) or not items:
        raise InvalidInputError("Payload must be a non-empty array")

    successful: list[BulkSuccess[R]] = []
    failed: list[BulkFailure] = []

    for index, item in enumerate(items):
        try:
            data = create_one(item)
        except AppException as e:
            message = e.message
        except Exception:
            logger.exception("bulk_item_unexpected_error", index=index)
            message = UNEXPECTED_ITEM_ERROR
        else:
            successful.append(BulkSuccess[R](index=index, data=data))
            continue

        identifier = identify(item) if identify else None
        logger.warning(
            "bulk_item_failed",
            index=index,
            identifier=identifier,
            error=message,
        )
        failed.append(
            BulkFailure(
                index=index,
                identifying_field=None if identifier is None else str(identifier),
                error_message=message,
            )
        )

    return BulkResult[R](
        success=not failed,
        total=len(items),
        created=len(successful),
        failed=len(failed),
        data=BulkPartition[R](successful=successful, failed=failed),
    )
