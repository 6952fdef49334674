"""Validation rules shared by food input and goal entry."""

CALORIE_MINIMUM = 1
CALORIE_MAXIMUM = 10_000

NAME_MINIMUM_LENGTH = 1
NAME_MAXIMUM_LENGTH = 100

# Goals are entered through a numeric-only path and keep their own limits.
GOAL_TARGET_MINIMUM = 1
GOAL_TARGET_MAXIMUM = 10_000


def is_valid_calorie_value(calories: int) -> bool:
    """Return True when a food calorie value is within range."""
    return CALORIE_MINIMUM <= calories <= CALORIE_MAXIMUM


def is_valid_name_length(name: str) -> bool:
    """Return True when a (pre-trimmed) food name has an allowed length."""
    return NAME_MINIMUM_LENGTH <= len(name) <= NAME_MAXIMUM_LENGTH


def is_valid_goal_target(target: int) -> bool:
    """Return True when a daily calorie target is within range."""
    return GOAL_TARGET_MINIMUM <= target <= GOAL_TARGET_MAXIMUM
