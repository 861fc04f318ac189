"""Bounded worker pool that collects per-item failures."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(slots=True)
class PoolOutcome(Generic[T]):
    """
    Result of :func:`run_pool`.

    :param succeeded: Indexes of items whose worker returned normally.
    :param failures: ``(index, exception)`` pairs ordered by index.
    """

    succeeded: list[int] = field(default_factory=list)
    failures: list[tuple[int, Exception]] = field(default_factory=list)


def run_pool(
    items: Sequence[T],
    worker: Callable[[T], object],
    max_workers: int,
) -> PoolOutcome[T]:
    """
    Apply ``worker`` to every item with at most ``max_workers`` threads.

    Each item is independent: an exception raised for one item is recorded
    and never stops the others. ``max_workers <= 1`` runs inline in the
    calling thread.

    Parameters
    ----------
    items : Sequence[T]
        Work items.
    worker : Callable[[T], object]
        Per-item function; its return value is ignored.
    max_workers : int
        Upper bound on threads; the pool never exceeds ``len(items)``.

    Returns
    -------
    PoolOutcome
        Successful indexes and failures, both ordered by item index.
    """
    outcome: PoolOutcome[T] = PoolOutcome()
    if not items:
        return outcome

    def _run(index: int, item: T) -> tuple[int, Exception | None]:
        try:
            worker(item)
        except Exception as exc:  # noqa: BLE001 - recorded per item
            return index, exc
        return index, None

    workers = min(max_workers, len(items))
    if workers <= 1:
        results = [_run(i, item) for i, item in enumerate(items)]
    else:
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="bulk") as pool:
            results = list(pool.map(_run, range(len(items)), items))

    for index, error in sorted(results, key=lambda r: r[0]):
        if error is None:
            outcome.succeeded.append(index)
        else:
            outcome.failures.append((index, error))
    return outcome
