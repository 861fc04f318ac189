from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol


class BreedValidator(Protocol):
    """Port answering whether a breed name exists in the catalog."""

    def is_valid(self, breed_name: str) -> bool: ...


class StaticBreedValidator(BreedValidator):
    """
    In-memory validator used in tests and when validation is disabled.

    :param breeds: Accepted names (case-insensitive); ``None`` accepts anything.
    """

    def __init__(self, breeds: Iterable[str] | None = None) -> None:
        self._breeds = None if breeds is None else {b.casefold() for b in breeds}

    def is_valid(self, breed_name: str) -> bool:
        if not breed_name or not breed_name.strip():
            return False
        if self._breeds is None:
            return True
        return breed_name.strip().casefold() in self._breeds
