"""Data models for holiday definitions, occurrences and snapshots."""

from datetime import date
from enum import Enum, IntEnum
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class HolidayCategory(str, Enum):
    """Category tag attached to every holiday."""

    RELIGIOUS = "religious"
    CULTURAL = "cultural"
    NATIONAL = "national"
    SEASONAL = "seasonal"
    EDUCATIONAL = "educational"
    OTHER = "other"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()


class Weekday(IntEnum):
    """Day of the week, numbered like ``date.weekday()``."""

    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4
    SATURDAY = 5
    SUNDAY = 6


def _coerce_weekday(value: Any) -> Any:
    """Accept weekday names ("thursday", "Thu") as well as numbers."""
    if isinstance(value, str) and not value.isdigit():
        key = value.strip().upper()
        for weekday in Weekday:
            if weekday.name == key or weekday.name[:3] == key:
                return weekday
    return value


class _RuleBase(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    offset_days: int = Field(
        default=0, description="Days added to the computed date (e.g. 1 for the day after)"
    )


class FixedDateRule(_RuleBase):
    """Same month and day every year, taken from the definition's reference date."""

    kind: Literal["fixed"] = "fixed"


class NthWeekdayRule(_RuleBase):
    """The nth given weekday of a month (e.g. 4th Thursday of November)."""

    kind: Literal["nth_weekday"] = "nth_weekday"
    month: int = Field(..., ge=1, le=12)
    weekday: Weekday
    n: int = Field(..., ge=1, le=5)

    @field_validator("weekday", mode="before")
    @classmethod
    def parse_weekday(cls, value: Any) -> Any:
        return _coerce_weekday(value)


class LastWeekdayRule(_RuleBase):
    """The last given weekday of a month (e.g. last Monday of May)."""

    kind: Literal["last_weekday"] = "last_weekday"
    month: int = Field(..., ge=1, le=12)
    weekday: Weekday

    @field_validator("weekday", mode="before")
    @classmethod
    def parse_weekday(cls, value: Any) -> Any:
        return _coerce_weekday(value)


class EasterRule(_RuleBase):
    """A fixed number of days from Western Easter Sunday."""

    kind: Literal["easter"] = "easter"


RecurrenceRule = Annotated[
    Union[FixedDateRule, NthWeekdayRule, LastWeekdayRule, EasterRule],
    Field(discriminator="kind"),
]


class HolidayDefinition(BaseModel):
    """Template for a holiday, before it is resolved for a concrete year.

    For recurring holidays only the month and day of ``reference_date`` matter
    (its year is arbitrary). For non-recurring holidays ``reference_date`` is the
    exact occurrence.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="Unique holiday name")
    reference_date: date = Field(..., description="Anchor month/day or exact date")
    is_recurring: bool = Field(default=True, description="Whether the holiday repeats yearly")
    category: HolidayCategory = Field(default=HolidayCategory.OTHER)
    rule: RecurrenceRule = Field(default_factory=FixedDateRule)

    # Display metadata, not used for resolution
    emoji: str = ""
    description: str = ""

    @property
    def month(self) -> int:
        return self.reference_date.month

    @property
    def day(self) -> int:
        return self.reference_date.day

    @property
    def is_floating(self) -> bool:
        """True when the date is computed by a rule rather than fixed month/day."""
        return not isinstance(self.rule, FixedDateRule)


class HolidayOccurrence(BaseModel):
    """A holiday materialized for one concrete date."""

    model_config = ConfigDict(frozen=True)

    name: str
    occurrence_date: date
    is_recurring: bool
    category: HolidayCategory
    is_floating: bool = False
    emoji: str = ""
    description: str = ""

    @classmethod
    def materialize(cls, definition: HolidayDefinition, occurrence_date: date) -> "HolidayOccurrence":
        """Create the occurrence of ``definition`` on ``occurrence_date``."""
        return cls(
            name=definition.name,
            occurrence_date=occurrence_date,
            is_recurring=definition.is_recurring,
            category=definition.category,
            is_floating=definition.is_floating,
            emoji=definition.emoji,
            description=definition.description,
        )


class HolidaySnapshot(BaseModel):
    """Immutable, date-sorted holiday occurrences around a reference year."""

    model_config = ConfigDict(frozen=True)

    reference_year: Optional[int] = None
    occurrences: tuple[HolidayOccurrence, ...] = ()

    @classmethod
    def empty(cls) -> "HolidaySnapshot":
        return cls()

    @property
    def years(self) -> tuple[int, ...]:
        """Years covered by the snapshot window."""
        if self.reference_year is None:
            return ()
        return (self.reference_year - 1, self.reference_year, self.reference_year + 1)

    def __len__(self) -> int:
        return len(self.occurrences)
