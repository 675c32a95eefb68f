"""Flow state discriminant enumeration."""

from enum import StrEnum, auto


class StateKind(StrEnum):
    """Discriminant of a flow state variant.

    Attributes:
        INITIAL: No operation has run on the channel yet
        LOADING: A unit of work is in progress
        SUCCESS: The unit of work completed and produced (optional) data
        FAILURE: The unit of work raised an error
    """

    INITIAL = auto()
    LOADING = auto()
    SUCCESS = auto()
    FAILURE = auto()

    def is_terminal(self) -> bool:
        """Check if this kind ends an execution.

        Returns:
            True if kind is SUCCESS or FAILURE
        """
        return self in (StateKind.SUCCESS, StateKind.FAILURE)

    def is_successful(self) -> bool:
        """Check if this kind indicates a successful execution.

        Returns:
            True only if kind is SUCCESS
        """
        return self == StateKind.SUCCESS
