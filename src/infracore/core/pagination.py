"""Pagination walker: turns repeated single-page fetches into a full collection."""

from collections.abc import Awaitable, Callable
from typing import TypeVar

import structlog

from ..api.transport import Response

logger = structlog.get_logger(__name__)

T = TypeVar("T")

ListPageFunc = Callable[[int], Awaitable[tuple[list[T], Response]]]


async def iter_pages(list_page: ListPageFunc[T]) -> list[T]:
    """
    Fetch every page and return the items in server order.

    Starts at page 1 and follows ``meta.pagination.next_page``. The walk ends
    when a response carries no pagination meta, reports no next page, returns
    an empty page, or names a next page that does not advance.

    Pages are fetched strictly one after another. The first failure (including
    task cancellation) propagates and the items collected so far are
    discarded, so callers never see a partial collection.

    Args:
        list_page: Coroutine function fetching one page by number

    Returns:
        Concatenation of all pages, without reordering or deduplication
    """
    all_items: list[T] = []
    page = 1
    page_count = 0

    while True:
        page_count += 1
        logger.debug("Fetching page", page=page, items_so_far=len(all_items))

        items, response = await list_page(page)
        all_items.extend(items)

        if not items:
            break

        meta = response.meta
        pagination = meta.pagination if meta else None
        if pagination is None or not pagination.next_page:
            break

        # Safety check: a next page that does not advance would loop forever
        if pagination.next_page <= page:
            logger.warning(
                "Pagination loop detected - next page does not advance",
                page=page,
                next_page=pagination.next_page,
                items_fetched=len(all_items),
            )
            break

        page = pagination.next_page

    logger.debug("Pagination complete", total_pages=page_count, total_items=len(all_items))
    return all_items
