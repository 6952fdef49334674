"""Calorie goal repository enforcing one goal per calendar day."""

from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Protocol
from uuid import UUID, uuid4

from calorie_calculator.domain.errors import (
    GoalDeleteError,
    GoalFetchError,
    GoalSaveError,
    InvalidGoalTargetError,
)
from calorie_calculator.domain.goals import CalorieGoal
from calorie_calculator.domain.rules import GOAL_TARGET_MAXIMUM, GOAL_TARGET_MINIMUM
from calorie_calculator.services.stores import GoalStore


class GoalRepositoryProtocol(Protocol):
    """Application-facing interface for calorie goals."""

    async def fetch_goal(self, day: date | datetime) -> CalorieGoal | None:
        """Return the goal for a day, if one is set."""

    async def save_or_update_goal(self, target: int, day: date | datetime) -> None:
        """Set the day's goal, overwriting an existing one."""

    async def delete_goal(self, goal_id: UUID) -> None:
        """Delete a goal."""


@dataclass
class GoalRepository(GoalRepositoryProtocol):
    """Goal repository over a goal store."""

    store: GoalStore

    async def fetch_goal(self, day: date | datetime) -> CalorieGoal | None:
        """Return the goal for a day, if one is set."""
        try:
            return await self.store.fetch_goal(day)
        except Exception as exc:
            raise GoalFetchError(str(exc)) from exc

    async def save_or_update_goal(self, target: int, day: date | datetime) -> None:
        """Validate the target, then update the day's goal in place or create one."""
        if target < GOAL_TARGET_MINIMUM:
            raise InvalidGoalTargetError("Calorie target must be greater than 0")
        if target > GOAL_TARGET_MAXIMUM:
            raise InvalidGoalTargetError(
                f"Calorie target cannot exceed {GOAL_TARGET_MAXIMUM:,}"
            )

        goal_date = _as_datetime(day)
        try:
            existing = await self.store.fetch_goal(goal_date)
            if existing is not None:
                await self.store.update_goal(
                    CalorieGoal(id=existing.id, daily_target=target, date=goal_date)
                )
            else:
                await self.store.save_goal(
                    CalorieGoal(id=uuid4(), daily_target=target, date=goal_date)
                )
        except Exception as exc:
            raise GoalSaveError(str(exc)) from exc

    async def delete_goal(self, goal_id: UUID) -> None:
        """Delete a goal."""
        try:
            await self.store.delete_goal(goal_id)
        except Exception as exc:
            raise GoalDeleteError(str(exc)) from exc


def _as_datetime(day: date | datetime) -> datetime:
    if isinstance(day, datetime):
        return day
    return datetime.combine(day, time.min)
