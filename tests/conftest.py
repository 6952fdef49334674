"""Shared test fixtures."""

import asyncio
from dataclasses import dataclass, field
from datetime import UTC, date, datetime
from uuid import UUID
from zoneinfo import ZoneInfo

import pytest

from calorie_calculator.config import Settings
from calorie_calculator.domain.days import day_bounds
from calorie_calculator.domain.foods import FoodEntry
from calorie_calculator.domain.goals import CalorieGoal
from calorie_calculator.services.calculator import CalorieCalculator
from calorie_calculator.services.duplicates import FoodDuplicateChecker
from calorie_calculator.services.food_repository import FoodRepository
from calorie_calculator.services.goal_repository import GoalRepository
from calorie_calculator.services.stores import (
    DuplicateItemError,
    FoodStore,
    GoalNotFoundError,
    GoalStore,
    InvalidDateRangeError,
    ItemNotFoundError,
)
from calorie_calculator.services.validation import FoodInputValidator

NOW = datetime(2025, 11, 24, 12, 30, tzinfo=UTC)


@dataclass
class InMemoryFoodStore(FoodStore):
    """In-memory food store for tests; writes yield to the event loop once."""

    entries: dict[UUID, FoodEntry] = field(default_factory=dict)
    failures: dict[str, Exception] = field(default_factory=dict)
    calls: list[str] = field(default_factory=list)
    timezone: ZoneInfo = field(default_factory=lambda: ZoneInfo("UTC"))

    def _record(self, operation: str) -> None:
        self.calls.append(operation)
        error = self.failures.get(operation)
        if error is not None:
            raise error

    async def fetch_items(self, day: date | datetime) -> list[FoodEntry]:
        self._record("fetch_items")
        try:
            start, end = day_bounds(day, self.timezone)
        except OverflowError as exc:
            raise InvalidDateRangeError() from exc
        matching = [
            entry for entry in self.entries.values() if start <= entry.timestamp < end
        ]
        return sorted(matching, key=lambda entry: entry.timestamp, reverse=True)

    async def create(self, entry: FoodEntry) -> None:
        self._record("create")
        await asyncio.sleep(0)
        if entry.id in self.entries:
            raise DuplicateItemError(entry.id)
        self.entries[entry.id] = entry

    async def update(self, entry: FoodEntry) -> None:
        self._record("update")
        await asyncio.sleep(0)
        if entry.id not in self.entries:
            raise ItemNotFoundError(entry.id)
        self.entries[entry.id] = entry

    async def delete(self, item_id: UUID) -> None:
        self._record("delete")
        await asyncio.sleep(0)
        if item_id not in self.entries:
            raise ItemNotFoundError(item_id)
        del self.entries[item_id]


@dataclass
class InMemoryGoalStore(GoalStore):
    """In-memory goal store for tests."""

    goals: dict[UUID, CalorieGoal] = field(default_factory=dict)
    failures: dict[str, Exception] = field(default_factory=dict)
    calls: list[str] = field(default_factory=list)
    timezone: ZoneInfo = field(default_factory=lambda: ZoneInfo("UTC"))

    def _record(self, operation: str) -> None:
        self.calls.append(operation)
        error = self.failures.get(operation)
        if error is not None:
            raise error

    async def fetch_goal(self, day: date | datetime) -> CalorieGoal | None:
        self._record("fetch_goal")
        start, end = day_bounds(day, self.timezone)
        matching = [
            goal
            for goal in self.goals.values()
            if start <= _aware(goal.date, self.timezone) < end
        ]
        if not matching:
            return None
        return max(matching, key=lambda goal: _aware(goal.date, self.timezone))

    async def save_goal(self, goal: CalorieGoal) -> None:
        self._record("save_goal")
        self.goals[goal.id] = goal

    async def update_goal(self, goal: CalorieGoal) -> None:
        self._record("update_goal")
        if goal.id not in self.goals:
            raise GoalNotFoundError()
        self.goals[goal.id] = goal

    async def delete_goal(self, goal_id: UUID) -> None:
        self._record("delete_goal")
        if goal_id not in self.goals:
            raise GoalNotFoundError()
        del self.goals[goal_id]


def _aware(moment: datetime, tz: ZoneInfo) -> datetime:
    return moment if moment.tzinfo else moment.replace(tzinfo=tz)


@dataclass
class Clock:
    """Controllable clock advancing one minute per reading."""

    current: datetime = NOW
    step_seconds: int = 60

    def __call__(self) -> datetime:
        value = self.current
        self.current = datetime.fromtimestamp(
            value.timestamp() + self.step_seconds, tz=UTC
        )
        return value


def build_calculator(
    food_store: InMemoryFoodStore | None = None,
    goal_store: InMemoryGoalStore | None = None,
    clock: Clock | None = None,
) -> CalorieCalculator:
    """Create a calculator over in-memory stores."""
    return CalorieCalculator(
        food_repository=FoodRepository(food_store or InMemoryFoodStore()),
        goal_repository=GoalRepository(goal_store or InMemoryGoalStore()),
        input_validator=FoodInputValidator(),
        duplicate_checker=FoodDuplicateChecker(),
        clock=clock or Clock(),
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
        timezone="UTC",
    )


@pytest.fixture
def food_store() -> InMemoryFoodStore:
    return InMemoryFoodStore()


@pytest.fixture
def goal_store() -> InMemoryGoalStore:
    return InMemoryGoalStore()
