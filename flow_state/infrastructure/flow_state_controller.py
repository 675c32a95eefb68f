"""
Flow state controller implementation.
Owns the keyed state channels of one host component and runs units of work on them.
"""

from __future__ import annotations

import asyncio
import contextlib
import inspect
import logging
from collections.abc import AsyncIterator
from typing import Any, TypeVar

from flow_state.domain.errors import (
    ChannelNotFoundError,
    PayloadTypeMismatchError,
    RegistryDisposedError,
)
from flow_state.domain.flow_states import Failure, FlowState, Initial, Loading, Success
from flow_state.domain.registry_port import (
    CompleteCallback,
    ErrorCallback,
    RegistryPort,
    SuccessCallback,
    UnitOfWork,
)
from flow_state.domain.settings import RegistrySettings
from flow_state.infrastructure.behavior_channel import BehaviorChannel
from flow_state.infrastructure.state_stream import StateStream

T = TypeVar("T")

logger = logging.getLogger(__name__)


async def _maybe_await(result: Any) -> Any:
    if inspect.isawaitable(result):
        return await result
    return result


class FlowStateController(RegistryPort):
    """
    In-memory registry of replay-latest state channels.

    A host component holds one controller as a field and forwards to it; the
    controller is not meant to be shared between components. Channels are
    created lazily by execute() or init_stream() and live until dispose().

    Concurrency:
        Everything runs on one event loop. execute() only suspends while
        awaiting the unit of work and the callbacks; channel updates never
        span an await. Unless ``serialize_per_key`` is set, overlapping
        execute() calls on the same key are not serialised: their Loading and
        terminal states interleave and the last publication wins.

    Example:
        class ProfilePage:
            def __init__(self) -> None:
                self.flow = FlowStateController()

            async def load(self) -> None:
                await self.flow.execute("profile", fetch_profile)

            def close(self) -> None:
                self.flow.dispose()
    """

    def __init__(self, settings: RegistrySettings | None = None) -> None:
        """
        Initialize the controller.

        Args:
            settings: Registry configuration. Defaults to RegistrySettings().
        """
        self.settings = settings or RegistrySettings()
        self._channels: dict[str, BehaviorChannel[Any]] = {}
        self._locks: dict[str, asyncio.Lock] = {}
        self._disposed = False

    @property
    def is_disposed(self) -> bool:
        return self._disposed

    def get_keys(self) -> set[str]:
        """
        Returns all keys that currently have a channel.

        Returns:
            Set of keys.
        """
        return set(self._channels.keys())

    def has_stream(self, key: str) -> bool:
        return key in self._channels

    def init_stream(self, key: str, payload_type: type[Any] | None = None) -> None:
        """
        Create the channel for a key, seeded with Initial, if it doesn't exist.

        This operation is idempotent - an existing channel keeps its current
        state. A payload type declared here is recorded on the channel unless
        one was recorded before.
        """
        self._ensure_not_disposed()
        channel = self._channels.get(key)
        if channel is None:
            logger.info(f"Creating stream for key '{key}'")
            self._channels[key] = BehaviorChannel(
                seed=Initial(), payload_type=payload_type, name=key
            )
        else:
            self._check_payload_type(key, channel, payload_type)

    def get_stream(self, key: str, payload_type: type[T] | None = None) -> StateStream[T]:
        return StateStream(self._get_channel(key, payload_type))

    def current_state(self, key: str, payload_type: type[T] | None = None) -> FlowState[T]:
        return self._get_channel(key, payload_type).value

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

        The channel receives Loading before the unit of work starts, then
        Success(data) or Failure(message). on_success runs before Success is
        published; on_error runs after Failure is published; on_complete
        always runs last. Errors from the unit of work (or from on_success)
        are turned into Failure and not re-raised. Errors from on_error
        propagate to the caller.

        Args:
            key: Channel identity, created on first use.
            unit_of_work: Zero-argument coroutine function producing the payload.
            on_success: Called with the payload.
            on_error: Called with the error and its traceback.
            on_complete: Called once the execution has settled.
            payload_type: Optional declared payload type of the channel.
        """
        self.init_stream(key, payload_type)

        if not self.settings.serialize_per_key:
            await self._run(key, unit_of_work, on_success, on_error, on_complete)
            return

        lock = self._locks.setdefault(key, asyncio.Lock())
        async with lock:
            await self._run(key, unit_of_work, on_success, on_error, on_complete)

    async def _run(
        self,
        key: str,
        unit_of_work: UnitOfWork[T],
        on_success: SuccessCallback[T] | None,
        on_error: ErrorCallback | None,
        on_complete: CompleteCallback | None,
    ) -> None:
        # The registry may have been disposed while waiting on the per-key lock
        self._ensure_not_disposed()
        channel: BehaviorChannel[T] | None = self._channels.get(key)
        if channel is None:
            raise ChannelNotFoundError(key)

        try:
            channel.publish(Loading())

            result = await _maybe_await(unit_of_work())

            if on_success is not None:
                await _maybe_await(on_success(result))

            channel.publish(Success(data=result))
        except Exception as e:
            logger.warning(f"Execution for key '{key}' failed: {type(e).__name__}: {e}")
            channel.publish(Failure(message=str(e)))
            if on_error is not None:
                await _maybe_await(on_error(e, e.__traceback__))
        finally:
            if on_complete is not None:
                await _maybe_await(on_complete())

    def dispose(self) -> None:
        """
        Close every channel and clear the registry.

        Active subscriptions end after draining states already delivered to
        them. Further use of the controller raises RegistryDisposedError.
        """
        if self._disposed:
            logger.debug("FlowStateController already disposed")
            return

        for channel in self._channels.values():
            channel.close()
        logger.info(f"Disposed FlowStateController ({len(self._channels)} stream(s) closed)")
        self._channels.clear()
        self._locks.clear()
        self._disposed = True

    @contextlib.asynccontextmanager
    async def subscription(
        self, key: str, payload_type: type[T] | None = None
    ) -> AsyncIterator[AsyncIterator[FlowState[T]]]:
        """
        Subscribe to a key for the duration of an ``async with`` block.

        Example:
            async with controller.subscription("profile") as states:
                async for state in states:
                    ...
        """
        subscription = self.get_stream(key, payload_type).subscribe()
        try:
            yield subscription
        finally:
            await subscription.aclose()

    def _get_channel(self, key: str, payload_type: type[Any] | None) -> BehaviorChannel[Any]:
        self._ensure_not_disposed()
        channel = self._channels.get(key)
        if channel is None:
            raise ChannelNotFoundError(key)
        self._check_payload_type(key, channel, payload_type)
        return channel

    def _check_payload_type(
        self, key: str, channel: BehaviorChannel[Any], payload_type: type[Any] | None
    ) -> None:
        if payload_type is None:
            return
        if channel.payload_type is None:
            channel.payload_type = payload_type
            return
        if self.settings.strict_payload_types and channel.payload_type != payload_type:
            raise PayloadTypeMismatchError(key, channel.payload_type, payload_type)

    def _ensure_not_disposed(self) -> None:
        if self._disposed:
            raise RegistryDisposedError("FlowStateController has already been disposed")
