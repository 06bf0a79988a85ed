"""Age threshold with a disabled sentinel, stored in milliseconds."""

from __future__ import annotations

import re
from enum import Enum

from pydantic import BaseModel, ConfigDict

_INTEGER = re.compile(r"^[+-]?\d+$")

DISABLED = -1

# Day counts must fit a signed 64-bit integer
_LONG_MIN = -(2**63)
_LONG_MAX = 2**63 - 1


class ThresholdConfigError(ValueError):
    """Raised when a configured day count is not a 64-bit integer."""

    def __init__(self, value: str) -> None:
        self.value = value
        super().__init__(f"Maximum age must be a whole number of days, got {value!r}")


def _div_toward_zero(a: int, b: int) -> int:
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b > 0) else -q


class TimeUnit(Enum):
    """Duration units, valued in milliseconds."""

    MILLISECONDS = 1
    SECONDS = 1_000
    MINUTES = 60_000
    HOURS = 3_600_000
    DAYS = 86_400_000

    def to_millis(self, amount: int) -> int:
        return int(amount) * self.value

    def convert(self, amount: int, source: TimeUnit) -> int:
        """Convert ``amount`` expressed in ``source`` into this unit, truncating."""
        return _div_toward_zero(int(amount) * source.value, self.value)


class Threshold(BaseModel):
    """Maximum allowed commit age. Negative millis means the filter is off."""

    model_config = ConfigDict(frozen=True)

    millis: int = DISABLED

    @classmethod
    def disabled(cls) -> Threshold:
        return cls(millis=DISABLED)

    @classmethod
    def of(cls, unit: TimeUnit, amount: int | float | None) -> Threshold:
        """Threshold of ``amount`` units; ``None`` or negative disables it."""
        if amount is None or int(amount) < 0:
            return cls.disabled()
        return cls(millis=unit.to_millis(int(amount)))

    @classmethod
    def from_days(cls, text: str | None) -> Threshold:
        """Parse a human-entered day count. Blank disables the filter."""
        if text is None or not text.strip():
            return cls.disabled()
        stripped = text.strip()
        if not _INTEGER.match(stripped):
            raise ThresholdConfigError(text)
        days = int(stripped)
        if not _LONG_MIN <= days <= _LONG_MAX:
            raise ThresholdConfigError(text)
        return cls.of(TimeUnit.DAYS, days)

    @property
    def enabled(self) -> bool:
        return self.millis >= 0

    @property
    def days(self) -> str:
        """Whole days as a string, or empty if disabled."""
        if not self.enabled:
            return ""
        return str(TimeUnit.DAYS.convert(self.millis, TimeUnit.MILLISECONDS))

    def in_unit(self, unit: TimeUnit) -> int | None:
        if not self.enabled:
            return None
        return unit.convert(self.millis, TimeUnit.MILLISECONDS)
