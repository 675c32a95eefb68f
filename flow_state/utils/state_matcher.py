"""Pattern dispatch over flow state variants."""

from collections.abc import Callable
from typing import TypeVar

from flow_state.domain.flow_states import Failure, FlowState, Loading, Success

T = TypeVar("T")
R = TypeVar("R")


def when(
    state: FlowState[T],
    *,
    loading: Callable[[], R],
    success: Callable[[T | None], R],
    failure: Callable[[str | None], R],
    or_else: Callable[[], R],
) -> R:
    """
    Invoke the one callback matching the variant of ``state``.

    Args:
        state: State to dispatch on.
        loading: Called for Loading.
        success: Called with the data of Success.
        failure: Called with the message of Failure.
        or_else: Called for any other variant (Initial included).

    Returns:
        Result of the invoked callback.

    Examples:
        >>> when(Success(data=3), loading=lambda: "...", success=str,
        ...      failure=lambda m: f"error: {m}", or_else=lambda: "")
        '3'
    """
    match state:
        case Loading():
            return loading()
        case Success(data=data):
            return success(data)
        case Failure(message=message):
            return failure(message)
        case _:
            return or_else()
