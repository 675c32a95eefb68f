"""
Flow state registry interface.
Defines how keyed state channels are read and driven.
"""

from abc import ABC, abstractmethod
from collections.abc import AsyncIterable, Awaitable, Callable
from types import TracebackType
from typing import Any, TypeVar

from flow_state.domain.flow_states import FlowState

T = TypeVar("T")

UnitOfWork = Callable[[], Awaitable[T | None]]
SuccessCallback = Callable[[T | None], Awaitable[None] | None]
ErrorCallback = Callable[[BaseException, TracebackType | None], Awaitable[None] | None]
CompleteCallback = Callable[[], Awaitable[None] | None]


class RegistryPort(ABC):
    """
    Interface for a flow state registry.
    Maps string keys to independent state channels and runs units of work
    that drive a channel through Loading to Success or Failure.
    """

    @abstractmethod
    def init_stream(self, key: str, payload_type: type[Any] | None = None) -> None:
        """
        Create the channel for a key, seeded with Initial, if it does not exist.

        Args:
            key: Channel identity.
            payload_type: Optional declared payload type of the channel.
        """
        ...

    @abstractmethod
    def get_stream(
        self, key: str, payload_type: type[T] | None = None
    ) -> AsyncIterable[FlowState[T]]:
        """
        Get a subscribable stream of states for a key.

        Args:
            key: Channel identity.
            payload_type: Optional declared payload type, checked against the channel.

        Returns:
            Async iterable replaying the current state and then every change.

        Raises:
            ChannelNotFoundError: If no channel exists for the key.
        """
        ...

    @abstractmethod
    def current_state(self, key: str, payload_type: type[T] | None = None) -> FlowState[T]:
        """
        Get a snapshot of the latest state for a key.

        Raises:
            ChannelNotFoundError: If no channel exists for the key.
        """
        ...

    @abstractmethod
    async def execute(
        self,
        key: str,
        unit_of_work: UnitOfWork[T],
        *,
        on_success: SuccessCallback[T] | None = None,
        on_error: ErrorCallback | None = None,
        on_complete: CompleteCallback | None = None,
        payload_type: type[T] | None = None,
    ) -> None:
        """
        Run a unit of work and publish its lifecycle on the key's channel.

        Args:
            key: Channel identity, created on first use.
            unit_of_work: Zero-argument coroutine function producing the payload.
            on_success: Called with the payload before Success is published.
            on_error: Called with the error and its traceback after Failure is published.
            on_complete: Always called last.
            payload_type: Optional declared payload type of the channel.
        """
        ...

    @abstractmethod
    def dispose(self) -> None:
        """Close every channel and clear the registry."""
        ...
