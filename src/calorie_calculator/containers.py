"""Dependency container wiring for the application."""

from collections.abc import Callable
from dataclasses import dataclass

from supabase import create_client

from calorie_calculator.adapters.supabase_food_store import SupabaseFoodStore
from calorie_calculator.adapters.supabase_goal_store import SupabaseGoalStore
from calorie_calculator.app_logging import configure_logging
from calorie_calculator.config import Settings
from calorie_calculator.services.calculator import CalorieCalculator
from calorie_calculator.services.duplicates import FoodDuplicateChecker
from calorie_calculator.services.food_repository import FoodRepository
from calorie_calculator.services.goal_repository import GoalRepository
from calorie_calculator.services.validation import FoodInputValidator


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    food_store: SupabaseFoodStore
    goal_store: SupabaseGoalStore
    food_repository: FoodRepository
    goal_repository: GoalRepository
    input_validator: FoodInputValidator
    duplicate_checker: FoodDuplicateChecker
    make_calculator: Callable[[], CalorieCalculator]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    configure_logging()
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    food_store = SupabaseFoodStore(
        client=supabase_client,
        timezone=resolved_settings.zone,
        table=resolved_settings.food_entries_table,
    )
    goal_store = SupabaseGoalStore(
        client=supabase_client,
        timezone=resolved_settings.zone,
        table=resolved_settings.calorie_goals_table,
    )
    food_repository = FoodRepository(food_store)
    goal_repository = GoalRepository(goal_store)
    input_validator = FoodInputValidator()
    duplicate_checker = FoodDuplicateChecker()

    def make_calculator() -> CalorieCalculator:
        return CalorieCalculator(
            food_repository=food_repository,
            goal_repository=goal_repository,
            input_validator=input_validator,
            duplicate_checker=duplicate_checker,
        )

    return AppContainer(
        settings=resolved_settings,
        food_store=food_store,
        goal_store=goal_store,
        food_repository=food_repository,
        goal_repository=goal_repository,
        input_validator=input_validator,
        duplicate_checker=duplicate_checker,
        make_calculator=make_calculator,
    )
