"""Paginated batch driver feeding customers to a reconciler one at a time."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Iterator
from dataclasses import dataclass

from customer_hygiene.exceptions import RECOVERABLE_ERRORS
from customer_hygiene.models.base import Customer
from customer_hygiene.store.base import CustomerRepository

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 100


def iter_pages(repository: CustomerRepository, page_size: int = DEFAULT_PAGE_SIZE) -> Iterator[list[Customer]]:
    """Yield pages of customers ordered by id.

    Pages are keyed on the last id seen rather than an offset, so customers
    deleted while a page is processed never shift later pages.
    """
    after_id: int | None = None
    while True:
        page = repository.list_customers(after_id, page_size)
        if not page:
            return
        after_id = page[-1].customer_id
        is_last = len(page) < page_size
        yield page
        if is_last:
            return


@dataclass
class BatchStats:
    """Counters for one batch run."""

    processed: int = 0
    failed: int = 0
    pages: int = 0
    elapsed_seconds: float = 0.0


class BatchRunner:
    """Run a per-customer handler over every customer in the repository.

    Recoverable errors (validation, persistence, audit) raised by the
    handler are logged and counted; the run continues with the next
    customer. Any other exception propagates and aborts the run.

    Parameters
    ----------
    repository : CustomerRepository
        Source of customer pages.
    page_size : int
        Customers fetched per page.
    """

    def __init__(self, repository: CustomerRepository, page_size: int = DEFAULT_PAGE_SIZE) -> None:
        self.repository = repository
        self.page_size = page_size

    def run(self, handler: Callable[[Customer], object]) -> BatchStats:
        stats = BatchStats()
        t0 = time.perf_counter()

        for page in iter_pages(self.repository, self.page_size):
            stats.pages += 1
            for customer in page:
                try:
                    handler(customer)
                except RECOVERABLE_ERRORS as exc:
                    stats.failed += 1
                    logger.warning(
                        "Customer %s (%s) failed: %s",
                        customer.customer_id,
                        customer.email,
                        exc,
                        extra={"customer_id": customer.customer_id},
                    )
                stats.processed += 1
            logger.info("Page %d done, %d customers processed", stats.pages, stats.processed)
            # release the page before the next fetch
            page.clear()

        stats.elapsed_seconds = time.perf_counter() - t0
        logger.info(
            "Processed %d customers (%d failed) in %.1fs",
            stats.processed,
            stats.failed,
            stats.elapsed_seconds,
        )
        return stats
