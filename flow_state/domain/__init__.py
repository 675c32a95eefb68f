"""Domain layer exports."""

from .channel_port import ChannelPort
from .errors import (
    ChannelClosedError,
    ChannelNotFoundError,
    FlowStateError,
    PayloadTypeMismatchError,
    RegistryDisposedError,
)
from .flow_states import Failure, FlowState, Initial, Loading, Success
from .registry_port import RegistryPort
from .settings import RegistrySettings
from .state_kind import StateKind

__all__ = [
    "ChannelPort",
    "RegistryPort",
    "RegistrySettings",
    "StateKind",
    "FlowState",
    "Initial",
    "Loading",
    "Success",
    "Failure",
    "FlowStateError",
    "ChannelNotFoundError",
    "ChannelClosedError",
    "PayloadTypeMismatchError",
    "RegistryDisposedError",
]
