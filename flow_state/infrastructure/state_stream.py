"""Restartable stream of flow states for one registry key."""

from __future__ import annotations

from collections.abc import AsyncGenerator
from typing import Generic, TypeVar

from flow_state.domain.flow_states import FlowState
from flow_state.infrastructure.behavior_channel import BehaviorChannel, StateSubscription

T = TypeVar("T")


class StateStream(Generic[T]):
    """
    Subscribable sequence of states returned by FlowStateController.get_stream().

    Every ``async for`` over the stream opens a fresh subscription, so one
    stream object can be consumed any number of times, each time starting
    from the channel's state at that moment.
    """

    def __init__(self, channel: BehaviorChannel[T]) -> None:
        self._channel = channel

    @property
    def key(self) -> str:
        return self._channel.name

    @property
    def value(self) -> FlowState[T]:
        """Latest state of the underlying channel."""
        return self._channel.value

    def subscribe(self) -> StateSubscription[T]:
        """Open a subscription that can be closed explicitly with aclose()."""
        return self._channel.subscribe()

    def __aiter__(self) -> AsyncGenerator[FlowState[T], None]:
        # Subscribe now so the replayed state is the one current at this call
        return aiter(self._channel.subscribe())

    def __repr__(self) -> str:
        return f"StateStream(key={self.key!r}, value={self.value!r})"
