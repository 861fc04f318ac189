"""DTOs for BulkService."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class SalaryUpdateIn:
    """
    One salary change.

    :param cat_id: Target cat.
    :type cat_id: int
    :param salary: New non-negative salary.
    :type salary: float
    """

    cat_id: int
    salary: float


@dataclass(frozen=True, slots=True)
class BulkResult:
    """
    Aggregate outcome of a bulk operation.

    :param successful: Items applied.
    :type successful: int
    :param failed: Items rejected.
    :type failed: int
    :param errors: ``"item <index>: <reason>"`` messages ordered by index.
    :type errors: list[str]
    """

    successful: int = 0
    failed: int = 0
    errors: list[str] = field(default_factory=list)
