from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Currency:
    code: str
    name: str
    rate: Decimal  # Relative to the provider's base currency


class RateStatus(str, Enum):
    IDLE = "idle"
    FRESH = "fresh"
    STALE = "stale"


class RequestState(Generic[T]):
    """Idle / Success / Error wrapper shared by cache reads, fetches and lookups."""

    @staticmethod
    def idle() -> "Idle":
        return Idle()

    @staticmethod
    def success(data: T) -> "Success[T]":
        return Success(data)

    @staticmethod
    def error(message: str) -> "Error":
        return Error(message)

    def is_idle(self) -> bool:
        return isinstance(self, Idle)

    def is_success(self) -> bool:
        return isinstance(self, Success)

    def is_error(self) -> bool:
        return isinstance(self, Error)

    def get_success_data(self) -> T:
        if not isinstance(self, Success):
            raise ValueError(f"{type(self).__name__} state carries no data")
        return self.data

    def get_error_message(self) -> str:
        if not isinstance(self, Error):
            raise ValueError(f"{type(self).__name__} state carries no error")
        return self.message


@dataclass(frozen=True)
class Idle(RequestState):
    pass


@dataclass(frozen=True)
class Success(RequestState[T]):
    data: T


@dataclass(frozen=True)
class Error(RequestState):
    message: str
