"""Domain-level errors for food input, food entries and calorie goals."""

from uuid import UUID

from calorie_calculator.domain.rules import (
    CALORIE_MAXIMUM,
    CALORIE_MINIMUM,
    NAME_MAXIMUM_LENGTH,
)


class FoodInputValidationError(ValueError):
    """Base class for user-correctable food input errors."""

    message = "Invalid food input"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)


class EmptyInputError(FoodInputValidationError):
    message = "Enter food name and calories"


class InvalidFormatError(FoodInputValidationError):
    message = "Format: 'Food Name 100' (calories at the end)"


class MissingNameError(FoodInputValidationError):
    message = "Food name is required"


class MissingCaloriesError(FoodInputValidationError):
    message = "Calories are required"


class CaloriesNotNumericError(FoodInputValidationError):
    message = "Calories must be a number"


class CaloriesOutOfRangeError(FoodInputValidationError):
    def __init__(self, value: int) -> None:
        self.value = value
        super().__init__(
            f"Calories {value} out of range "
            f"({CALORIE_MINIMUM}-{CALORIE_MAXIMUM:,})"
        )


class NameTooShortError(FoodInputValidationError):
    message = "Food name is too short"


class NameTooLongError(FoodInputValidationError):
    message = f"Food name is too long (max {NAME_MAXIMUM_LENGTH} characters)"


class FoodRepositoryError(Exception):
    """Base class for food persistence errors seen by the application."""

    user_facing_message = "Something went wrong"


class FoodItemNotFoundError(FoodRepositoryError):
    user_facing_message = "Food item not found"

    def __init__(self, item_id: UUID) -> None:
        self.item_id = item_id
        super().__init__(
            "The food item you're looking for doesn't exist "
            f"(ID: {str(item_id)[:8]}...)"
        )


class DeviceStorageExhaustedError(FoodRepositoryError):
    user_facing_message = "Storage full"

    def __init__(self) -> None:
        super().__init__(
            "Your device is out of storage. "
            "Please free up space to continue tracking your meals."
        )


class DuplicateFoodEntryError(FoodRepositoryError):
    user_facing_message = "Item already exists"

    def __init__(self, item_id: UUID) -> None:
        self.item_id = item_id
        super().__init__(
            f"This food item has already been added (ID: {str(item_id)[:8]}...)"
        )


class InvalidDateError(FoodRepositoryError):
    user_facing_message = "Invalid date"

    def __init__(self) -> None:
        super().__init__(
            "Cannot process the selected date. Please try a different date."
        )


class CannotSaveFoodError(FoodRepositoryError):
    user_facing_message = "Cannot save item"

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Unable to save food item: {reason}")


class CannotLoadFoodsError(FoodRepositoryError):
    user_facing_message = "Cannot load meals"

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Unable to load your meals: {reason}")


class GoalRepositoryError(Exception):
    """Base class for calorie goal errors seen by the application."""

    prefix = "Goal error"
    user_facing_message = "Something went wrong with your calorie goal."

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"{self.prefix}: {detail}")


class GoalSaveError(GoalRepositoryError):
    prefix = "Failed to save goal"
    user_facing_message = "Unable to save calorie goal. Please try again."


class GoalFetchError(GoalRepositoryError):
    prefix = "Failed to fetch goal"
    user_facing_message = "Unable to load calorie goal. Please try again."


class GoalDeleteError(GoalRepositoryError):
    prefix = "Failed to delete goal"
    user_facing_message = "Unable to delete calorie goal. Please try again."


class InvalidGoalTargetError(GoalRepositoryError):
    prefix = "Invalid goal target"

    @property
    def user_facing_message(self) -> str:  # type: ignore[override]
        return self.detail
