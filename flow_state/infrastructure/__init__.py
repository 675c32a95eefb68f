"""Infrastructure layer exports."""

from .behavior_channel import BehaviorChannel, StateSubscription
from .flow_state_controller import FlowStateController
from .state_stream import StateStream

__all__ = [
    "BehaviorChannel",
    "FlowStateController",
    "StateStream",
    "StateSubscription",
]
