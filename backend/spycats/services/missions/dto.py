"""DTOs for MissionService and TargetService."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from spycats.services._shared.dto import PageMeta, PaginationIn

# --------------------------------------------------------------------------- #
# Input DTOs
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class TargetIn:
    """
    Input DTO for a mission target.

    :param name: Target name.
    :type name: str
    :param country: Country of operation.
    :type country: str
    :param notes: Free-form field notes.
    :type notes: str
    """

    name: str
    country: str
    notes: str = ""


@dataclass(frozen=True, slots=True)
class MissionCreateIn:
    """
    Input DTO for opening a mission.

    :param targets: Between one and three targets.
    :type targets: list[TargetIn]
    :param cat_id: Optional cat to assign immediately.
    :type cat_id: int | None
    """

    targets: list[TargetIn] = field(default_factory=list)
    cat_id: int | None = None


@dataclass(frozen=True, slots=True)
class MissionListIn:
    """
    :param filters: Equality filters (``complete``, ``cat_id``).
    """

    pagination: PaginationIn
    filters: dict[str, Any] | None = None


# --------------------------------------------------------------------------- #
# Output DTOs
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class TargetOut:
    id: int
    mission_id: int
    name: str
    country: str
    notes: str
    complete: bool
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True, slots=True)
class MissionOut:
    """
    Mission with its targets, ordered by id.
    """

    id: int
    cat_id: int | None
    complete: bool
    targets: list[TargetOut]
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True, slots=True)
class MissionListOut:
    items: list[MissionOut]
    meta: PageMeta
