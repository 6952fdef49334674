"""Domain models for daily calorie goals."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID, uuid4


@dataclass(frozen=True)
class CalorieGoal:
    """Daily calorie target for the calendar day containing ``date``."""

    daily_target: int
    date: datetime = field(default_factory=lambda: datetime.now(tz=UTC))
    id: UUID = field(default_factory=uuid4)
