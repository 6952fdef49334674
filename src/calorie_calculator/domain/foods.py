"""Domain models for logged food entries."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID, uuid4


@dataclass(frozen=True)
class FoodEntry:
    """A single logged food item."""

    name: str
    calories: int
    timestamp: datetime = field(default_factory=lambda: datetime.now(tz=UTC))
    image: bytes | None = None
    id: UUID = field(default_factory=uuid4)


@dataclass(frozen=True)
class ValidatedFoodInput:
    """Parsed free-text food input."""

    name: str
    calories: int
    original_input: str


@dataclass(frozen=True)
class DuplicateCheckResult:
    """Outcome of comparing a name against already logged entries."""

    existing_entry: FoodEntry | None = None

    @classmethod
    def unique(cls) -> "DuplicateCheckResult":
        return cls()

    @classmethod
    def duplicate(cls, existing_entry: FoodEntry) -> "DuplicateCheckResult":
        return cls(existing_entry=existing_entry)

    @property
    def is_duplicate(self) -> bool:
        return self.existing_entry is not None


@dataclass(frozen=True)
class PendingDuplicate:
    """Validated input waiting on an add-anyway / replace / cancel decision."""

    validated: ValidatedFoodInput
    existing_entry: FoodEntry

    @property
    def title(self) -> str:
        return "Product already added"

    @property
    def message(self) -> str:
        existing = self.existing_entry
        return (
            f'"{existing.name}" is already added today with {existing.calories} kcal.'
            "\n\n"
            f"Do you want to add it again with {self.validated.calories} kcal "
            "or replace the existing one?"
        )
