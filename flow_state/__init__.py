"""Reactive registry of per-key flow states for asynchronous operations."""

from flow_state.domain import (
    ChannelClosedError,
    ChannelNotFoundError,
    Failure,
    FlowState,
    FlowStateError,
    Initial,
    Loading,
    PayloadTypeMismatchError,
    RegistryDisposedError,
    RegistrySettings,
    StateKind,
    Success,
)
from flow_state.infrastructure import FlowStateController, StateStream
from flow_state.utils import when

__all__ = [
    # Domain
    "FlowState",
    "Initial",
    "Loading",
    "Success",
    "Failure",
    "StateKind",
    "RegistrySettings",
    # Errors
    "FlowStateError",
    "ChannelNotFoundError",
    "ChannelClosedError",
    "PayloadTypeMismatchError",
    "RegistryDisposedError",
    # Infrastructure
    "FlowStateController",
    "StateStream",
    # Convenience functions
    "when",
]
