"""Food repository translating store failures into domain errors."""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Protocol
from uuid import UUID

from calorie_calculator.domain.errors import (
    CannotLoadFoodsError,
    CannotSaveFoodError,
    DeviceStorageExhaustedError,
    DuplicateFoodEntryError,
    FoodItemNotFoundError,
    FoodRepositoryError,
    InvalidDateError,
)
from calorie_calculator.domain.foods import FoodEntry
from calorie_calculator.services.stores import (
    DuplicateItemError,
    FetchFailedError,
    FoodStore,
    FoodStoreError,
    InvalidDateRangeError,
    ItemNotFoundError,
    SaveFailedError,
    StorageFullError,
)


class FoodRepositoryProtocol(Protocol):
    """Application-facing interface for food entries."""

    async def fetch_food_items(self, day: date | datetime) -> list[FoodEntry]:
        """Return the entries logged on a day, newest first."""

    async def create_food(self, entry: FoodEntry) -> None:
        """Persist a new entry."""

    async def update_food(self, entry: FoodEntry) -> None:
        """Persist edits to an existing entry."""

    async def delete_food(self, item_id: UUID) -> None:
        """Delete an entry."""


@dataclass
class FoodRepository(FoodRepositoryProtocol):
    """Stateless pass-through over a food store with error mapping."""

    store: FoodStore

    async def fetch_food_items(self, day: date | datetime) -> list[FoodEntry]:
        """Return the entries logged on a day, newest first."""
        try:
            return await self.store.fetch_items(day)
        except FoodStoreError as exc:
            raise map_store_error(exc) from exc
        except Exception as exc:
            raise CannotLoadFoodsError(str(exc)) from exc

    async def create_food(self, entry: FoodEntry) -> None:
        """Persist a new entry."""
        try:
            await self.store.create(entry)
        except FoodStoreError as exc:
            raise map_store_error(exc) from exc
        except Exception as exc:
            raise CannotSaveFoodError(str(exc)) from exc

    async def update_food(self, entry: FoodEntry) -> None:
        """Persist edits to an existing entry."""
        try:
            await self.store.update(entry)
        except FoodStoreError as exc:
            raise map_store_error(exc) from exc
        except Exception as exc:
            raise CannotSaveFoodError(str(exc)) from exc

    async def delete_food(self, item_id: UUID) -> None:
        """Delete an entry."""
        try:
            await self.store.delete(item_id)
        except FoodStoreError as exc:
            raise map_store_error(exc) from exc
        except Exception as exc:
            raise CannotSaveFoodError(str(exc)) from exc


def map_store_error(error: FoodStoreError) -> FoodRepositoryError:  # noqa: PLR0911
    """Return the domain error matching a store error."""
    if isinstance(error, ItemNotFoundError):
        return FoodItemNotFoundError(error.item_id)
    if isinstance(error, StorageFullError):
        return DeviceStorageExhaustedError()
    if isinstance(error, DuplicateItemError):
        return DuplicateFoodEntryError(error.item_id)
    if isinstance(error, InvalidDateRangeError):
        return InvalidDateError()
    if isinstance(error, SaveFailedError):
        return CannotSaveFoodError(error.cause)
    if isinstance(error, FetchFailedError):
        return CannotLoadFoodsError(error.cause)
    return CannotSaveFoodError(str(error))
