import asyncio
from collections.abc import AsyncIterator, Callable
from typing import Generic, TypeVar

T = TypeVar("T")


class ObservableState(Generic[T]):
    """A single owned value that readers can watch for changes."""

    def __init__(self, value: T):
        self._value = value
        self._subscribers: set[asyncio.Queue] = set()

    @property
    def value(self) -> T:
        return self._value

    def set(self, value: T) -> None:
        if value == self._value:
            return
        self._value = value
        for queue in self._subscribers:
            queue.put_nowait(value)

    async def changes(self) -> AsyncIterator[T]:
        """Yield the current value, then each new one."""
        queue: asyncio.Queue = asyncio.Queue()
        self._subscribers.add(queue)
        try:
            yield self._value
            while True:
                yield await queue.get()
        finally:
            self._subscribers.discard(queue)

    async def wait_for(self, predicate: Callable[[T], bool]) -> T:
        stream = self.changes()
        try:
            async for value in stream:
                if predicate(value):
                    return value
        finally:
            await stream.aclose()
        raise RuntimeError("State stream ended")
