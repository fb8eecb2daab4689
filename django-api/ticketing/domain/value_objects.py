"""Domain primitives that enforce validity at creation time."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Self

DEFAULT_MIN_PER_ORDER = 1
DEFAULT_MAX_PER_ORDER = 10


@dataclass(frozen=True)
class EventId:
    """Opaque identifier for an Event."""

    value: str

    def __post_init__(self) -> None:
        if not self.value or not self.value.strip():
            raise ValueError("EventId cannot be blank")

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=value.strip())

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class TicketTypeId:
    """Opaque identifier for a TicketType, unique within its event."""

    value: str

    def __post_init__(self) -> None:
        if not self.value or not self.value.strip():
            raise ValueError("TicketTypeId cannot be blank")

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=value.strip())

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Money:
    """Price representation with validation."""

    amount: Decimal

    def __post_init__(self) -> None:
        if self.amount < 0:
            raise ValueError("Money amount cannot be negative")

    def __str__(self) -> str:
        return f"{self.amount:.2f}"


@dataclass(frozen=True)
class Capacity:
    """Non-negative integer representing capacity."""

    value: int

    def __post_init__(self) -> None:
        if self.value < 0:
            raise ValueError("Capacity cannot be negative")


@dataclass(frozen=True)
class OrderLimits:
    """Bounds on the number of tickets in a single order."""

    minimum: int = DEFAULT_MIN_PER_ORDER
    maximum: int = DEFAULT_MAX_PER_ORDER

    def __post_init__(self) -> None:
        if self.minimum < 1 or self.maximum < 1:
            raise ValueError("Order limits must be positive")
        if self.minimum > self.maximum:
            raise ValueError("Minimum per order cannot exceed maximum per order")


@dataclass(frozen=True)
class SalesWindow:
    """Period during which a ticket type may be sold.

    Either bound may be None, meaning the window is open on that side.
    Both bounds are inclusive.
    """

    starts_at: datetime | None = None
    ends_at: datetime | None = None

    def opens_after(self, now: datetime) -> bool:
        return self.starts_at is not None and now < self.starts_at

    def closed_before(self, now: datetime) -> bool:
        return self.ends_at is not None and now > self.ends_at

    @property
    def is_inverted(self) -> bool:
        return (
            self.starts_at is not None
            and self.ends_at is not None
            and self.ends_at < self.starts_at
        )
