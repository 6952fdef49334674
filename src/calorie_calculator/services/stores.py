"""Store interfaces for food entries and calorie goals."""

from datetime import date, datetime
from typing import Protocol
from uuid import UUID

from calorie_calculator.domain.foods import FoodEntry
from calorie_calculator.domain.goals import CalorieGoal


class FoodStoreError(Exception):
    """Base class for food store failures."""


class ItemNotFoundError(FoodStoreError):
    def __init__(self, item_id: UUID) -> None:
        self.item_id = item_id
        super().__init__(f"Item with id {item_id} not found in database")


class StorageFullError(FoodStoreError):
    def __init__(self) -> None:
        super().__init__("Device storage is full. Please free up space.")


class DuplicateItemError(FoodStoreError):
    def __init__(self, item_id: UUID) -> None:
        self.item_id = item_id
        super().__init__(f"Item with id {item_id} already exists")


class SaveFailedError(FoodStoreError):
    def __init__(self, cause: str) -> None:
        self.cause = cause
        super().__init__(f"Failed to save item: {cause}")


class FetchFailedError(FoodStoreError):
    def __init__(self, cause: str) -> None:
        self.cause = cause
        super().__init__(f"Failed to fetch items: {cause}")


class InvalidDateRangeError(FoodStoreError):
    def __init__(self) -> None:
        super().__init__("Failed to calculate date range. Invalid date provided.")


class GoalStoreError(Exception):
    """Base class for calorie goal store failures."""


class GoalSaveFailedError(GoalStoreError):
    def __init__(self, message: str) -> None:
        super().__init__(f"Failed to save calorie goal: {message}")


class GoalFetchFailedError(GoalStoreError):
    def __init__(self, message: str) -> None:
        super().__init__(f"Failed to fetch calorie goal: {message}")


class GoalUpdateFailedError(GoalStoreError):
    def __init__(self, message: str) -> None:
        super().__init__(f"Failed to update calorie goal: {message}")


class GoalDeleteFailedError(GoalStoreError):
    def __init__(self, message: str) -> None:
        super().__init__(f"Failed to delete calorie goal: {message}")


class GoalNotFoundError(GoalStoreError):
    def __init__(self) -> None:
        super().__init__("Calorie goal not found")


class FoodStore(Protocol):
    """Day-scoped persistence interface for food entries."""

    async def fetch_items(self, day: date | datetime) -> list[FoodEntry]:
        """Return the day's entries, newest first."""

    async def create(self, entry: FoodEntry) -> None:
        """Insert a new entry."""

    async def update(self, entry: FoodEntry) -> None:
        """Overwrite the mutable fields of an existing entry."""

    async def delete(self, item_id: UUID) -> None:
        """Remove an entry by id."""


class GoalStore(Protocol):
    """Persistence interface for one calorie goal per calendar day."""

    async def fetch_goal(self, day: date | datetime) -> CalorieGoal | None:
        """Return the goal for the day, if present."""

    async def save_goal(self, goal: CalorieGoal) -> None:
        """Insert a goal."""

    async def update_goal(self, goal: CalorieGoal) -> None:
        """Overwrite target and date of an existing goal."""

    async def delete_goal(self, goal_id: UUID) -> None:
        """Remove a goal by id."""
