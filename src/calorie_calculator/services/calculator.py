"""Calorie calculator state and user-facing operations for a single day."""

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from datetime import UTC, date, datetime
from uuid import UUID

from calorie_calculator.domain.errors import (
    FoodInputValidationError,
    FoodRepositoryError,
    GoalRepositoryError,
)
from calorie_calculator.domain.foods import (
    FoodEntry,
    PendingDuplicate,
    ValidatedFoodInput,
)
from calorie_calculator.domain.goals import CalorieGoal
from calorie_calculator.services.duplicates import FoodDuplicateChecking
from calorie_calculator.services.food_repository import FoodRepositoryProtocol
from calorie_calculator.services.goal_repository import GoalRepositoryProtocol
from calorie_calculator.services.validation import FoodInputValidating

_logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class CalorieCalculator:
    """Controller composing validation, duplicate checks and both repositories.

    Holds the entries and goal of the last loaded day and exposes derived
    totals. Mutating operations are serialized per instance; a ``load_day``
    overtaken by a newer one drops its results.
    """

    food_repository: FoodRepositoryProtocol
    goal_repository: GoalRepositoryProtocol
    input_validator: FoodInputValidating
    duplicate_checker: FoodDuplicateChecking
    clock: Callable[[], datetime] = _utc_now

    entries: list[FoodEntry] = field(default_factory=list, init=False)
    goal: CalorieGoal | None = field(default=None, init=False)
    is_loading: bool = field(default=False, init=False)
    error_message: str | None = field(default=None, init=False)
    show_error: bool = field(default=False, init=False)
    pending_duplicate: PendingDuplicate | None = field(default=None, init=False)
    day: date | datetime | None = field(default=None, init=False)
    _lock: asyncio.Lock = field(default_factory=asyncio.Lock, init=False, repr=False)
    _load_sequence: int = field(default=0, init=False, repr=False)

    @property
    def total_calories(self) -> int:
        return sum(entry.calories for entry in self.entries)

    @property
    def is_empty(self) -> bool:
        return not self.entries and not self.is_loading

    @property
    def has_goal(self) -> bool:
        return self.goal is not None

    @property
    def goal_progress(self) -> float:
        """Share of the target consumed, capped at 1.0."""
        if self.goal is None or self.goal.daily_target <= 0:
            return 0.0
        return min(self.total_calories / self.goal.daily_target, 1.0)

    @property
    def goal_progress_percent(self) -> int:
        return int(self.goal_progress * 100)

    @property
    def remaining_calories(self) -> int:
        if self.goal is None:
            return 0
        return max(self.goal.daily_target - self.total_calories, 0)

    @property
    def is_goal_exceeded(self) -> bool:
        if self.goal is None:
            return False
        return self.total_calories > self.goal.daily_target

    async def load_day(self, day: date | datetime | None = None) -> None:
        """Load entries and goal for a day, today when omitted."""
        await self._load(day if day is not None else self.clock())

    async def add_entry(self, raw_text: str) -> None:
        """Validate and log an entry, or hold it pending a duplicate decision."""
        async with self._lock:
            try:
                validated = self.input_validator.validate(raw_text)
            except FoodInputValidationError as exc:
                _logger.info("Rejected food input %r: %s", raw_text, exc)
                self._show_error(str(exc))
                return

            result = self.duplicate_checker.check_for_duplicate(
                validated.name, self.entries
            )
            if result.existing_entry is not None:
                self.pending_duplicate = PendingDuplicate(
                    validated=validated, existing_entry=result.existing_entry
                )
                return

            await self._create_and_reload(validated)

    async def add_anyway(self) -> None:
        """Log the pending input even though a matching entry exists."""
        async with self._lock:
            pending = self.pending_duplicate
            if pending is None:
                return
            if await self._create_and_reload(pending.validated):
                self.pending_duplicate = None

    async def replace_existing(self) -> None:
        """Delete the matched entry and log the pending input instead."""
        async with self._lock:
            pending = self.pending_duplicate
            if pending is None:
                return
            failure: FoodRepositoryError | None = None
            try:
                await self.food_repository.delete_food(pending.existing_entry.id)
                await self.food_repository.create_food(
                    self._new_entry(pending.validated)
                )
            except FoodRepositoryError as exc:
                failure = exc
            finally:
                self.pending_duplicate = None
            await self._reload()
            if failure is not None:
                self._handle_food_error(failure)

    def cancel_duplicate(self) -> None:
        """Drop the pending input without logging anything."""
        self.pending_duplicate = None

    async def delete_entry(self, item_id: UUID) -> None:
        """Delete an entry and reload the day."""
        async with self._lock:
            try:
                await self.food_repository.delete_food(item_id)
            except FoodRepositoryError as exc:
                self._handle_food_error(exc)
                return
            await self._reload()

    async def update_entry(self, entry: FoodEntry, reload: bool = False) -> None:
        """Persist an edited entry; the loaded list is only resynced on request."""
        async with self._lock:
            try:
                await self.food_repository.update_food(entry)
            except FoodRepositoryError as exc:
                self._handle_food_error(exc)
                return
            if reload:
                await self._reload()

    async def edit_entry(
        self, entry: FoodEntry, raw_text: str, image: bytes | None
    ) -> None:
        """Apply ``"<name> <calories>"`` text and an image from the edit form."""
        try:
            validated = self.input_validator.validate(raw_text)
        except FoodInputValidationError as exc:
            _logger.info("Rejected edit for %s %r: %s", entry.id, raw_text, exc)
            self._show_error(str(exc))
            return
        edited = replace(
            entry, name=validated.name, calories=validated.calories, image=image
        )
        await self.update_entry(edited, reload=True)

    async def set_goal(self, target: int, day: date | datetime | None = None) -> None:
        """Set or overwrite the goal for a day and refresh the goal snapshot."""
        async with self._lock:
            goal_day = day if day is not None else self._current_day()
            try:
                await self.goal_repository.save_or_update_goal(target, goal_day)
                self.goal = await self.goal_repository.fetch_goal(goal_day)
            except GoalRepositoryError as exc:
                self._handle_goal_error(exc)

    async def delete_goal(self) -> None:
        """Remove the current goal, if any."""
        async with self._lock:
            if self.goal is None:
                return
            try:
                await self.goal_repository.delete_goal(self.goal.id)
            except GoalRepositoryError as exc:
                self._handle_goal_error(exc)
                return
            self.goal = None

    def dismiss_error(self) -> None:
        self.show_error = False
        self.error_message = None

    async def _create_and_reload(self, validated: ValidatedFoodInput) -> bool:
        try:
            await self.food_repository.create_food(self._new_entry(validated))
        except FoodRepositoryError as exc:
            self._handle_food_error(exc)
            return False
        await self._reload()
        return True

    async def _reload(self) -> None:
        await self._load(self._current_day())

    async def _load(self, day: date | datetime) -> None:
        self._load_sequence += 1
        sequence = self._load_sequence
        self.day = day
        self.is_loading = True
        self.dismiss_error()

        failure: FoodRepositoryError | None = None
        try:
            entries = await self.food_repository.fetch_food_items(day)
        except FoodRepositoryError as exc:
            entries = []
            failure = exc

        # A missing goal is a normal state, so goal failures stay silent.
        try:
            goal = await self.goal_repository.fetch_goal(day)
        except Exception as exc:  # noqa: BLE001
            _logger.debug("Treating goal fetch failure as no goal: %s", exc)
            goal = None

        if sequence != self._load_sequence:
            _logger.debug("Discarding stale load for %s", day)
            return

        self.entries = entries
        self.goal = goal
        self.is_loading = False
        if failure is not None:
            self._handle_food_error(failure)

    def _current_day(self) -> date | datetime:
        return self.day if self.day is not None else self.clock()

    def _new_entry(self, validated: ValidatedFoodInput) -> FoodEntry:
        return FoodEntry(
            name=validated.name,
            calories=validated.calories,
            timestamp=self.clock(),
        )

    def _handle_food_error(self, error: FoodRepositoryError) -> None:
        _logger.warning("Food error: %s (%s)", error.user_facing_message, error)
        self._show_error(str(error))

    def _handle_goal_error(self, error: GoalRepositoryError) -> None:
        _logger.warning("Goal error: %s", error)
        self._show_error(error.user_facing_message)

    def _show_error(self, message: str) -> None:
        self.error_message = message
        self.show_error = True
