"""
BulkService
===========

Batch salary updates and batch hiring, fanned out over a thread pool.

Every item runs in its own application context and unit of work, so one
failing item never rolls back the others.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import TypeVar

from flask import Flask, current_app

from spycats.services._shared.base import BaseService, ServiceContext
from spycats.services._shared.errors import BusinessRuleError, ServiceError
from spycats.services._shared.ports.breeds import BreedValidator
from spycats.services.bulk.dto import BulkResult, SalaryUpdateIn
from spycats.services.bulk.pool import PoolOutcome, run_pool
from spycats.services.cats.dto import CatCreateIn, CatSalaryUpdateIn
from spycats.services.cats.service import CatService

log = logging.getLogger(__name__)

T = TypeVar("T")

MAX_SALARY_UPDATES = 100
MAX_CAT_CREATES = 50


class BulkService(BaseService):
    """
    Bulk operations over cats.

    :param breeds: Breed catalog used for created cats.
    :param max_workers: Pool size; defaults to ``BULK_MAX_WORKERS``.
    :param app: Flask app whose context workers push; defaults to ``current_app``.
    """

    def __init__(
        self,
        *,
        breeds: BreedValidator | None = None,
        max_workers: int | None = None,
        app: Flask | None = None,
        ctx: ServiceContext | None = None,
    ) -> None:
        super().__init__(ctx=ctx)
        self.app = app or current_app._get_current_object()  # type: ignore[attr-defined]
        if max_workers is None:
            max_workers = int(self.app.config.get("BULK_MAX_WORKERS", 5))
        self.max_workers = max_workers
        self.cats = CatService(breeds=breeds, ctx=ctx)

    # --------------------------------------------------------------------- #
    # Operations
    # --------------------------------------------------------------------- #

    def bulk_update_salaries(self, updates: Sequence[SalaryUpdateIn]) -> BulkResult:
        """
        Apply up to 100 salary changes.

        :raises BusinessRuleError: ``too_many_items`` above the limit.
        """
        self._ensure_size(updates, MAX_SALARY_UPDATES)
        return self._run(
            updates,
            lambda u: self.cats.update_salary(u.cat_id, CatSalaryUpdateIn(salary=u.salary)),
            operation="salary_update",
        )

    def bulk_create_cats(self, cats: Sequence[CatCreateIn]) -> BulkResult:
        """
        Hire up to 50 cats; each is breed-checked like a single create.

        :raises BusinessRuleError: ``too_many_items`` above the limit.
        """
        self._ensure_size(cats, MAX_CAT_CREATES)
        return self._run(cats, self.cats.create_cat, operation="cat_create")

    # --------------------------------------------------------------------- #
    # Helpers
    # --------------------------------------------------------------------- #

    @staticmethod
    def _ensure_size(items: Sequence[object], limit: int) -> None:
        if len(items) > limit:
            raise BusinessRuleError(
                f"At most {limit} items per request, got {len(items)}", code="too_many_items"
            )

    def _in_app_context(self, fn: Callable[[T], object]) -> Callable[[T], object]:
        app = self.app

        def wrapper(item: T) -> object:
            with app.app_context():
                return fn(item)

        return wrapper

    def _run(self, items: Sequence[T], fn: Callable[[T], object], *, operation: str) -> BulkResult:
        if not items:
            return BulkResult()

        worker = fn if self.max_workers <= 1 else self._in_app_context(fn)
        outcome: PoolOutcome[T] = run_pool(items, worker, self.max_workers)

        errors: list[str] = []
        for index, exc in outcome.failures:
            if not isinstance(exc, ServiceError):
                log.error("bulk %s item %d failed", operation, index, exc_info=exc)
            errors.append(f"item {index}: {exc}")

        result = BulkResult(
            successful=len(outcome.succeeded),
            failed=len(outcome.failures),
            errors=errors,
        )
        log.info(
            "bulk %s finished successful=%d failed=%d",
            operation,
            result.successful,
            result.failed,
            extra={"item_count": len(items)},
        )
        return result
