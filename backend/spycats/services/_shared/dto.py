"""Listing contracts shared by the cat and mission services."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class PaginationIn:
    """
    Requested page of a listing.

    :param sort: Public sort keys, ``-`` for descending (``["-salary", "name"]``).
    :type sort: Iterable[str] | None
    """

    page: int = 1
    limit: int = 20
    sort: Iterable[str] | None = None


@dataclass(frozen=True, slots=True)
class PageMeta:
    """``meta`` block of a list envelope; build it with :meth:`build`."""

    page: int
    limit: int
    total: int
    has_prev: bool
    has_next: bool

    @classmethod
    def build(cls, *, page: int, limit: int, total: int) -> PageMeta:
        return cls(page, limit, total, has_prev=page > 1, has_next=page * limit < total)
