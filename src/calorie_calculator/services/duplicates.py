"""Duplicate detection for food entries logged on the same day."""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol

from calorie_calculator.domain.foods import DuplicateCheckResult, FoodEntry


class FoodDuplicateChecking(Protocol):
    """Interface for finding an already logged entry with the same name."""

    def check_for_duplicate(
        self, name: str, candidates: Sequence[FoodEntry]
    ) -> DuplicateCheckResult:
        """Return the first matching entry, if any."""


@dataclass(frozen=True)
class FoodDuplicateChecker(FoodDuplicateChecking):
    """Case- and whitespace-insensitive name comparison."""

    def check_for_duplicate(
        self, name: str, candidates: Sequence[FoodEntry]
    ) -> DuplicateCheckResult:
        """Return ``duplicate(first match)`` in list order, else ``unique``."""
        normalized = _normalize(name)
        if not normalized:
            return DuplicateCheckResult.unique()
        for entry in candidates:
            if _normalize(entry.name) == normalized:
                return DuplicateCheckResult.duplicate(entry)
        return DuplicateCheckResult.unique()


def _normalize(name: str) -> str:
    return name.lower().strip()
