"""Supabase store for food entries."""

import asyncio
import base64
import logging
from dataclasses import dataclass, field
from datetime import UTC, date, datetime
from uuid import UUID
from zoneinfo import ZoneInfo

from postgrest.exceptions import APIError
from supabase import Client

from calorie_calculator.domain.days import as_aware, day_bounds
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

_logger = logging.getLogger(__name__)

_COLUMNS = "id, name, calories, image_base64, logged_at"

UNIQUE_VIOLATION = "23505"
# SQLSTATE class 53: insufficient_resources, disk_full, out_of_memory.
STORAGE_EXHAUSTED_CODES = frozenset({"53000", "53100", "53200"})


@dataclass
class SupabaseFoodStore(FoodStore):
    """Supabase implementation for food entries, scoped by calendar day."""

    client: Client
    timezone: ZoneInfo = field(default_factory=lambda: ZoneInfo("UTC"))
    table: str = "food_entries"
    _lock: asyncio.Lock = field(default_factory=asyncio.Lock, init=False, repr=False)

    async def fetch_items(self, day: date | datetime) -> list[FoodEntry]:
        """Return entries logged within the day, newest first."""
        try:
            start, end = day_bounds(day, self.timezone)
        except OverflowError as exc:
            raise InvalidDateRangeError() from exc
        async with self._lock:
            try:
                rows = await asyncio.to_thread(self._select_range, start, end)
                return [_parse_entry(row) for row in rows]
            except Exception as exc:
                _logger.warning("Food entries fetch failed: %s", exc)
                raise FetchFailedError(describe_error(exc)) from exc

    async def create(self, entry: FoodEntry) -> None:
        """Insert a new entry row."""
        row = _entry_row(entry, self.timezone)
        async with self._lock:
            try:
                await asyncio.to_thread(self._insert, row)
            except Exception as exc:
                _logger.warning("Food entry insert failed: id=%s %s", entry.id, exc)
                raise map_save_error(exc, entry.id) from exc

    async def update(self, entry: FoodEntry) -> None:
        """Overwrite name, calories, image and timestamp of an existing entry."""
        row = _entry_row(entry, self.timezone)
        async with self._lock:
            if not await self._exists(entry.id):
                raise ItemNotFoundError(entry.id)
            try:
                await asyncio.to_thread(self._update, entry.id, row)
            except Exception as exc:
                _logger.warning("Food entry update failed: id=%s %s", entry.id, exc)
                raise map_save_error(exc, entry.id) from exc

    async def delete(self, item_id: UUID) -> None:
        """Remove an entry by id."""
        async with self._lock:
            if not await self._exists(item_id):
                raise ItemNotFoundError(item_id)
            try:
                await asyncio.to_thread(self._delete, item_id)
            except Exception as exc:
                _logger.warning("Food entry delete failed: id=%s %s", item_id, exc)
                raise map_save_error(exc, item_id) from exc

    async def _exists(self, item_id: UUID) -> bool:
        try:
            rows = await asyncio.to_thread(self._select_by_id, item_id)
        except Exception as exc:
            _logger.warning("Food entry lookup failed: id=%s %s", item_id, exc)
            raise FetchFailedError(describe_error(exc)) from exc
        return bool(rows)

    def _select_range(
        self, start: datetime, end: datetime
    ) -> list[dict[str, object]]:
        response = (
            self.client.table(self.table)
            .select(_COLUMNS)
            .gte("logged_at", _to_utc_iso(start))
            .lt("logged_at", _to_utc_iso(end))
            .order("logged_at", desc=True)
            .execute()
        )
        return response.data or []

    def _select_by_id(self, item_id: UUID) -> list[dict[str, object]]:
        response = (
            self.client.table(self.table)
            .select("id")
            .eq("id", str(item_id))
            .limit(1)
            .execute()
        )
        return response.data or []

    def _insert(self, row: dict[str, object]) -> None:
        response = self.client.table(self.table).insert(row).execute()
        if not response.data:
            raise RuntimeError("Failed to create food entry")

    def _update(self, item_id: UUID, row: dict[str, object]) -> None:
        payload = {key: value for key, value in row.items() if key != "id"}
        self.client.table(self.table).update(payload).eq("id", str(item_id)).execute()

    def _delete(self, item_id: UUID) -> None:
        self.client.table(self.table).delete().eq("id", str(item_id)).execute()


def map_save_error(exc: Exception, item_id: UUID) -> FoodStoreError:
    """Translate a write failure into a store error."""
    if isinstance(exc, APIError):
        if exc.code == UNIQUE_VIOLATION:
            return DuplicateItemError(item_id)
        if exc.code in STORAGE_EXHAUSTED_CODES:
            return StorageFullError()
    return SaveFailedError(describe_error(exc))


def describe_error(exc: Exception) -> str:
    """Return a short human-readable description of an engine failure."""
    if isinstance(exc, APIError) and exc.message:
        return exc.message
    return str(exc) or type(exc).__name__


def _to_utc_iso(moment: datetime) -> str:
    return moment.astimezone(UTC).isoformat()


def _entry_row(entry: FoodEntry, tz: ZoneInfo) -> dict[str, object]:
    return {
        "id": str(entry.id),
        "name": entry.name,
        "calories": entry.calories,
        "image_base64": (
            base64.b64encode(entry.image).decode("ascii")
            if entry.image is not None
            else None
        ),
        "logged_at": _to_utc_iso(as_aware(entry.timestamp, tz)),
    }


def _parse_entry(row: dict[str, object]) -> FoodEntry:
    image_raw = row.get("image_base64")
    return FoodEntry(
        id=UUID(str(row["id"])),
        name=str(row.get("name", "")),
        calories=int(row.get("calories", 0)),
        image=base64.b64decode(image_raw) if isinstance(image_raw, str) else None,
        timestamp=datetime.fromisoformat(str(row["logged_at"])),
    )
