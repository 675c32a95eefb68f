"""Errors raised by the flow state registry."""


class FlowStateError(Exception):
    """Base class for all flow state registry errors."""


class ChannelNotFoundError(FlowStateError, KeyError):
    """No channel exists yet for the requested key."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(
            f"Stream with key '{key}' does not exist. Please initialize the stream first."
        )

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the message
        return str(self.args[0])


class RegistryDisposedError(FlowStateError, RuntimeError):
    """The registry was used after dispose()."""


class ChannelClosedError(FlowStateError, RuntimeError):
    """A state was published to a channel that is already closed."""


class PayloadTypeMismatchError(FlowStateError, TypeError):
    """A key was used with a payload type other than the one it was declared with."""

    def __init__(self, key: str, expected: type, actual: type) -> None:
        self.key = key
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Stream with key '{key}' holds payload type {expected!r}, "
            f"but {actual!r} was requested"
        )
