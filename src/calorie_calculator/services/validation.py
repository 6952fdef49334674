"""Parsing of free-text food input such as ``"Apple 52"``."""

import re
from dataclasses import dataclass
from typing import Protocol

from calorie_calculator.domain.errors import (
    CaloriesNotNumericError,
    CaloriesOutOfRangeError,
    EmptyInputError,
    InvalidFormatError,
    NameTooLongError,
    NameTooShortError,
)
from calorie_calculator.domain.foods import ValidatedFoodInput
from calorie_calculator.domain.rules import (
    NAME_MINIMUM_LENGTH,
    is_valid_calorie_value,
    is_valid_name_length,
)

MIN_TOKENS = 2

_INTEGER_PATTERN = re.compile(r"-?[0-9]+")
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1


class FoodInputValidating(Protocol):
    """Interface for turning raw text into a validated food input."""

    def validate(self, raw_text: str) -> ValidatedFoodInput:
        """Parse input or raise ``FoodInputValidationError``."""


@dataclass(frozen=True)
class FoodInputValidator(FoodInputValidating):
    """Validator for ``<name> <calories>`` lines; calories are the last token."""

    def validate(self, raw_text: str) -> ValidatedFoodInput:
        """Parse a single line into a name and a calorie count."""
        if not raw_text.strip():
            raise EmptyInputError()

        tokens = raw_text.split()
        if len(tokens) < MIN_TOKENS:
            raise InvalidFormatError()

        calories = _parse_calories(tokens[-1])
        if not is_valid_calorie_value(calories):
            raise CaloriesOutOfRangeError(calories)

        name = " ".join(tokens[:-1])
        if not is_valid_name_length(name):
            if len(name) < NAME_MINIMUM_LENGTH:
                raise NameTooShortError()
            raise NameTooLongError()

        return ValidatedFoodInput(
            name=name,
            calories=calories,
            original_input=raw_text,
        )


def _parse_calories(token: str) -> int:
    """Parse the calorie token; values no 64-bit integer can hold are not numeric."""
    if not _INTEGER_PATTERN.fullmatch(token):
        raise CaloriesNotNumericError()
    try:
        value = int(token)
    except ValueError as exc:
        raise CaloriesNotNumericError() from exc
    if not _INT64_MIN <= value <= _INT64_MAX:
        raise CaloriesNotNumericError()
    return value
