from __future__ import annotations

import numbers
from dataclasses import dataclass
from typing import Iterable, Tuple, Union


@dataclass(frozen=True)
class RateSchedule:
    """Per-year sequence of values where the last entry persists forever.

    Used for appreciation rates and tax-free limits: ``[10, 5, 3]`` means 10
    in year 0, 5 in year 1 and 3 in every year after that.
    """

    values: Tuple[float, ...]

    def __post_init__(self) -> None:
        values = tuple(float(v) for v in self.values)
        if not values:
            raise ValueError("RateSchedule needs at least one value")
        object.__setattr__(self, "values", values)

    @classmethod
    def coerce(cls, value: Union["RateSchedule", float, Iterable[float]]) -> "RateSchedule":
        if isinstance(value, RateSchedule):
            return value
        if isinstance(value, numbers.Real):
            return cls((float(value),))
        return cls(tuple(value))

    def rate_for_year(self, year: int) -> float:
        index = min(max(int(year), 0), len(self.values) - 1)
        return self.values[index]

    def __len__(self) -> int:
        return len(self.values)
