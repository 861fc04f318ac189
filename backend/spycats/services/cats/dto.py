"""DTOs for CatService."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from spycats.services._shared.dto import PageMeta, PaginationIn

# --------------------------------------------------------------------------- #
# Input DTOs
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class CatCreateIn:
    """
    Input DTO for hiring a cat.

    :param name: Display name.
    :type name: str
    :param breed: Breed name, checked against the catalog.
    :type breed: str
    :param experience: Years of experience (0..50).
    :type experience: int
    :param salary: Non-negative salary.
    :type salary: float
    """

    name: str
    breed: str
    experience: int
    salary: float


@dataclass(frozen=True, slots=True)
class CatSalaryUpdateIn:
    """
    Input DTO for a salary change.

    :param salary: New non-negative salary.
    :type salary: float
    :param if_match: Optional ETag for optimistic concurrency.
    :type if_match: str | None
    """

    salary: float
    if_match: str | None = None


@dataclass(frozen=True, slots=True)
class CatListIn:
    """
    Listing parameters.

    :param pagination: Page, limit and sort tokens.
    :param filters: Equality filters (``breed``).
    """

    pagination: PaginationIn
    filters: dict[str, Any] | None = None


# --------------------------------------------------------------------------- #
# Output DTOs
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class CatOut:
    """
    Public cat representation.

    :param etag: Strong validator for salary updates.
    :type etag: str | None
    """

    id: int
    name: str
    breed: str
    experience: int
    salary: float
    created_at: datetime
    updated_at: datetime
    etag: str | None = None


@dataclass(frozen=True, slots=True)
class CatListOut:
    items: list[CatOut]
    meta: PageMeta
