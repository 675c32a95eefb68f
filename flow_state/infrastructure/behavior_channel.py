"""In-memory replay-latest state channel using asyncio.Queue per subscriber."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncGenerator
from types import TracebackType
from typing import Any, Generic, TypeVar

from flow_state.domain.channel_port import ChannelPort
from flow_state.domain.errors import ChannelClosedError
from flow_state.domain.flow_states import FlowState, Initial

T = TypeVar("T")

logger = logging.getLogger(__name__)


class _ClosedSentinel:
    """Sentinel value to signal subscribers that the channel was closed."""

    def __repr__(self) -> str:
        """String representation."""
        return "CLOSED_SENTINEL"


# Singleton sentinel instance ending a subscription
CLOSED_SENTINEL = _ClosedSentinel()


class StateSubscription(Generic[T]):
    """
    A single subscriber's view of a BehaviorChannel.

    The subscription is registered with the channel as soon as it is created,
    so the state current at that moment is the first one yielded, even if
    iteration starts later. Iteration ends when the channel is closed or when
    the subscriber calls aclose().

    Example:
        async with channel.subscribe() as subscription:
            async for state in subscription:
                ...
    """

    def __init__(self, channel: BehaviorChannel[T]) -> None:
        self._channel = channel
        self._queue: asyncio.Queue[FlowState[T] | _ClosedSentinel] = asyncio.Queue()
        self._done = False

    def _deliver(self, item: FlowState[T] | _ClosedSentinel) -> None:
        self._queue.put_nowait(item)

    @property
    def pending(self) -> int:
        """Number of states delivered but not yet consumed."""
        return self._queue.qsize()

    def __aiter__(self) -> AsyncGenerator[FlowState[T], None]:
        return self._iterate()

    async def _iterate(self) -> AsyncGenerator[FlowState[T], None]:
        # Leaving ``async for`` early (break, error, GC) closes the generator
        # and detaches the subscription from the channel
        try:
            while not self._done:
                item = await self._queue.get()
                if isinstance(item, _ClosedSentinel):
                    self._done = True
                    return
                yield item
        finally:
            await self.aclose()

    async def __anext__(self) -> FlowState[T]:
        if self._done:
            raise StopAsyncIteration

        item = await self._queue.get()
        if isinstance(item, _ClosedSentinel):
            self._done = True
            self._channel._unsubscribe(self)
            raise StopAsyncIteration
        return item

    async def aclose(self) -> None:
        """Stop receiving states. Has no effect on the channel itself."""
        if not self._done:
            self._done = True
            self._channel._unsubscribe(self)

    async def __aenter__(self) -> StateSubscription[T]:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()


class BehaviorChannel(ChannelPort[T], Generic[T]):
    """
    An in-memory, asyncio-based implementation of the ChannelPort.

    Holds the latest state and gives every subscriber its own unbounded
    asyncio.Queue. Publishing is synchronous: the new state is stored and
    pushed to each subscriber queue without awaiting.
    """

    def __init__(
        self,
        seed: FlowState[T] | None = None,
        payload_type: type[Any] | None = None,
        name: str = "",
    ) -> None:
        """
        Initialize the channel.

        Args:
            seed: Initial state. Defaults to Initial().
            payload_type: Declared payload type of the channel, if any.
            name: Name used in log messages (usually the registry key).
        """
        self._value: FlowState[T] = seed if seed is not None else Initial()
        self.payload_type = payload_type
        self.name = name
        self._subscribers: list[StateSubscription[T]] = []
        self._closed = False

    @property
    def value(self) -> FlowState[T]:
        return self._value

    @property
    def is_closed(self) -> bool:
        return self._closed

    def subscriber_count(self) -> int:
        """
        Return the number of active subscriptions.

        Returns:
            Number of subscribers still receiving states.
        """
        return len(self._subscribers)

    def publish(self, state: FlowState[T]) -> None:
        if self._closed:
            raise ChannelClosedError(f"Cannot publish {state!r} to closed channel '{self.name}'")

        self._value = state
        for subscription in self._subscribers:
            subscription._deliver(state)
        logger.debug(
            f"Channel '{self.name}' published {state!r} to {len(self._subscribers)} subscriber(s)"
        )

    def subscribe(self) -> StateSubscription[T]:
        subscription: StateSubscription[T] = StateSubscription(self)
        if self._closed:
            subscription._deliver(CLOSED_SENTINEL)
            return subscription

        subscription._deliver(self._value)
        self._subscribers.append(subscription)
        logger.debug(f"Channel '{self.name}' gained a subscriber ({len(self._subscribers)} total)")
        return subscription

    def _unsubscribe(self, subscription: StateSubscription[T]) -> None:
        if subscription in self._subscribers:
            self._subscribers.remove(subscription)
            logger.debug(
                f"Channel '{self.name}' lost a subscriber ({len(self._subscribers)} remaining)"
            )

    def close(self) -> None:
        if self._closed:
            return

        self._closed = True
        # Subscribers drain already delivered states before they see the sentinel
        subscribers, self._subscribers = self._subscribers, []
        for subscription in subscribers:
            subscription._deliver(CLOSED_SENTINEL)
        logger.info(f"Closed channel '{self.name}' ({len(subscribers)} subscriber(s))")
