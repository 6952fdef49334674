"""Supabase store for daily calorie goals."""

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import UTC, date, datetime
from uuid import UUID
from zoneinfo import ZoneInfo

from supabase import Client

from calorie_calculator.adapters.supabase_food_store import describe_error
from calorie_calculator.domain.days import as_aware, day_bounds
from calorie_calculator.domain.goals import CalorieGoal
from calorie_calculator.services.stores import (
    GoalDeleteFailedError,
    GoalFetchFailedError,
    GoalNotFoundError,
    GoalSaveFailedError,
    GoalStore,
    GoalUpdateFailedError,
)

_logger = logging.getLogger(__name__)

_COLUMNS = "id, daily_target, goal_date"


@dataclass
class SupabaseGoalStore(GoalStore):
    """Supabase implementation for calorie goals."""

    client: Client
    timezone: ZoneInfo = field(default_factory=lambda: ZoneInfo("UTC"))
    table: str = "calorie_goals"
    _lock: asyncio.Lock = field(default_factory=asyncio.Lock, init=False, repr=False)

    async def fetch_goal(self, day: date | datetime) -> CalorieGoal | None:
        """Return the most recent goal dated within the day, if any."""
        async with self._lock:
            try:
                start, end = day_bounds(day, self.timezone)
                rows = await asyncio.to_thread(self._select_range, start, end)
                return _parse_goal(rows[0]) if rows else None
            except Exception as exc:
                _logger.warning("Calorie goal fetch failed: %s", exc)
                raise GoalFetchFailedError(describe_error(exc)) from exc

    async def save_goal(self, goal: CalorieGoal) -> None:
        """Insert a goal row."""
        async with self._lock:
            try:
                await asyncio.to_thread(self._insert, self._goal_row(goal))
            except Exception as exc:
                _logger.warning("Calorie goal insert failed: id=%s %s", goal.id, exc)
                raise GoalSaveFailedError(describe_error(exc)) from exc

    async def update_goal(self, goal: CalorieGoal) -> None:
        """Overwrite target and date for an existing goal."""
        async with self._lock:
            if not await self._exists(goal.id, GoalUpdateFailedError):
                raise GoalNotFoundError()
            row = self._goal_row(goal)
            del row["id"]
            try:
                await asyncio.to_thread(self._update, goal.id, row)
            except Exception as exc:
                _logger.warning("Calorie goal update failed: id=%s %s", goal.id, exc)
                raise GoalUpdateFailedError(describe_error(exc)) from exc

    async def delete_goal(self, goal_id: UUID) -> None:
        """Remove a goal by id."""
        async with self._lock:
            if not await self._exists(goal_id, GoalDeleteFailedError):
                raise GoalNotFoundError()
            try:
                await asyncio.to_thread(self._delete, goal_id)
            except Exception as exc:
                _logger.warning("Calorie goal delete failed: id=%s %s", goal_id, exc)
                raise GoalDeleteFailedError(describe_error(exc)) from exc

    async def _exists(
        self,
        goal_id: UUID,
        error_type: type[GoalUpdateFailedError] | type[GoalDeleteFailedError],
    ) -> bool:
        try:
            rows = await asyncio.to_thread(self._select_by_id, goal_id)
        except Exception as exc:
            _logger.warning("Calorie goal lookup failed: id=%s %s", goal_id, exc)
            raise error_type(describe_error(exc)) from exc
        return bool(rows)

    def _goal_row(self, goal: CalorieGoal) -> dict[str, object]:
        goal_date = as_aware(goal.date, self.timezone).astimezone(UTC)
        return {
            "id": str(goal.id),
            "daily_target": goal.daily_target,
            "goal_date": goal_date.isoformat(),
        }

    def _select_range(
        self, start: datetime, end: datetime
    ) -> list[dict[str, object]]:
        response = (
            self.client.table(self.table)
            .select(_COLUMNS)
            .gte("goal_date", start.astimezone(UTC).isoformat())
            .lt("goal_date", end.astimezone(UTC).isoformat())
            .order("goal_date", desc=True)
            .limit(1)
            .execute()
        )
        return response.data or []

    def _select_by_id(self, goal_id: UUID) -> list[dict[str, object]]:
        response = (
            self.client.table(self.table)
            .select("id")
            .eq("id", str(goal_id))
            .limit(1)
            .execute()
        )
        return response.data or []

    def _insert(self, row: dict[str, object]) -> None:
        response = self.client.table(self.table).insert(row).execute()
        if not response.data:
            raise RuntimeError("Failed to create calorie goal")

    def _update(self, goal_id: UUID, row: dict[str, object]) -> None:
        self.client.table(self.table).update(row).eq("id", str(goal_id)).execute()

    def _delete(self, goal_id: UUID) -> None:
        self.client.table(self.table).delete().eq("id", str(goal_id)).execute()


def _parse_goal(row: dict[str, object]) -> CalorieGoal:
    return CalorieGoal(
        id=UUID(str(row["id"])),
        daily_target=int(row.get("daily_target", 0)),
        date=datetime.fromisoformat(str(row["goal_date"])),
    )
