"""Flow state variants describing the lifecycle of one asynchronous operation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, Generic, TypeVar

from flow_state.domain.state_kind import StateKind

T = TypeVar("T")


@dataclass(frozen=True)
class FlowState(Generic[T]):
    """Base class of the closed set of flow states.

    Concrete variants are Initial, Loading, Success and Failure. Every
    variant carries a ``kind`` discriminant so consumers can branch on it
    without type tests, or use ``match`` on the variant classes.
    """

    kind: ClassVar[StateKind]

    @property
    def is_terminal(self) -> bool:
        """True for Success and Failure."""
        return self.kind.is_terminal()

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary representation.

        Returns:
            Dictionary with the ``kind`` and the variant payload, if any
        """
        return {"kind": self.kind.value}

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


@dataclass(frozen=True, repr=False)
class Initial(FlowState[T]):
    """Channel was created but nothing has run on it yet."""

    kind: ClassVar[StateKind] = StateKind.INITIAL


@dataclass(frozen=True, repr=False)
class Loading(FlowState[T]):
    """A unit of work is in progress."""

    kind: ClassVar[StateKind] = StateKind.LOADING


@dataclass(frozen=True, repr=False)
class Success(FlowState[T]):
    """The unit of work completed.

    Attributes:
        data: Value produced by the unit of work (None is a valid outcome)
    """

    kind: ClassVar[StateKind] = StateKind.SUCCESS

    data: T | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind.value, "data": self.data}

    def __repr__(self) -> str:
        return f"Success(data={self.data!r})"


@dataclass(frozen=True, repr=False)
class Failure(FlowState[T]):
    """The unit of work raised an error.

    Attributes:
        message: Human-readable error text, if any
    """

    kind: ClassVar[StateKind] = StateKind.FAILURE

    message: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind.value, "message": self.message}

    def __repr__(self) -> str:
        return f"Failure(message={self.message!r})"
