"""Pytest configuration and shared fixtures."""

import asyncio

import pytest

from flow_state.domain.settings import RegistrySettings
from flow_state.infrastructure.behavior_channel import BehaviorChannel
from flow_state.infrastructure.flow_state_controller import FlowStateController


class TaskRecorder:
    """Records callback invocations in call order."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, tuple[object, ...]]] = []

    def names(self) -> list[str]:
        return [name for name, _ in self.calls]

    async def on_success(self, data: object) -> None:
        self.calls.append(("on_success", (data,)))

    async def on_error(self, error: BaseException, trace: object) -> None:
        self.calls.append(("on_error", (error, trace)))

    async def on_complete(self) -> None:
        self.calls.append(("on_complete", ()))


@pytest.fixture
def controller() -> FlowStateController:
    """Create a controller with default settings."""
    return FlowStateController()


@pytest.fixture
def serialized_controller() -> FlowStateController:
    """Create a controller that serialises executions per key."""
    return FlowStateController(RegistrySettings(serialize_per_key=True))


@pytest.fixture
def channel() -> BehaviorChannel[str]:
    """Create a channel seeded with Initial."""
    return BehaviorChannel(name="test_channel")


@pytest.fixture
def recorder() -> TaskRecorder:
    """Create a callback recorder."""
    return TaskRecorder()


@pytest.fixture
def gate() -> asyncio.Event:
    """Event used to hold a unit of work until the test releases it."""
    return asyncio.Event()


@pytest.fixture
def test_key() -> str:
    """Return a test key."""
    return "fetch"
