"""Channel port interface for flow state channels."""

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator
from typing import Generic, TypeVar

from flow_state.domain.flow_states import FlowState

T = TypeVar("T")


class ChannelPort(ABC, Generic[T]):
    """
    An abstract port for a single-key state channel.
    It holds the latest state and broadcasts every change to its subscribers.
    """

    @property
    @abstractmethod
    def value(self) -> FlowState[T]:
        """Return the latest published state."""
        raise NotImplementedError

    @property
    @abstractmethod
    def is_closed(self) -> bool:
        """Return True once the channel has been closed."""
        raise NotImplementedError

    @abstractmethod
    def publish(self, state: FlowState[T]) -> None:
        """
        Replace the current state and deliver it to every active subscriber.

        Raises:
            ChannelClosedError: If the channel is already closed.
        """
        raise NotImplementedError

    @abstractmethod
    def subscribe(self) -> AsyncIterator[FlowState[T]]:
        """
        Open a new subscription.

        The subscription yields the current state first, then every later
        state in publication order, and ends when the channel is closed.
        """
        raise NotImplementedError

    @abstractmethod
    def close(self) -> None:
        """Close the channel and end every active subscription."""
        raise NotImplementedError
