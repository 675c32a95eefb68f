"""Utility modules for flow states."""

from .state_matcher import when

__all__ = [
    "when",
]
