"""Message - User-facing messages for the route finder.

Validators return these instead of raising: the caller decides when and how
to show them. Each message knows its display level.

Design Principles:
- No exceptions for expected validation failures
- Messages carry the offending data, text is computed on demand
- Streamlit is imported only when a message is displayed
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum

from skiresort_router.constants import DifficultyConfig


class MessageLevel(Enum):
    """Display level for UI messages."""

    INFO = "info"  # Blue - status
    WARNING = "warning"  # Yellow - adjust your options
    ERROR = "error"  # Red - invalid request


@dataclass(frozen=True)
class Message(ABC):
    """Abstract base class for user-facing messages."""

    @property
    @abstractmethod
    def message(self) -> str:
        """Formatted message text."""
        raise NotImplementedError

    @property
    @abstractmethod
    def level(self) -> MessageLevel:
        """Display level."""
        raise NotImplementedError

    def display(self) -> None:
        """Render this message using the appropriate Streamlit function."""
        import streamlit as st

        render_fn = {
            MessageLevel.INFO: st.info,
            MessageLevel.WARNING: st.warning,
            MessageLevel.ERROR: st.error,
        }[self.level]
        render_fn(self.message)

    def to_dict(self) -> dict[str, str]:
        """Error body for an API response."""
        return {"error": self.message, "level": self.level.value}

    def __str__(self) -> str:
        return self.message


# =============================================================================
# VALIDATION MESSAGES
# =============================================================================


@dataclass(frozen=True)
class MissingParameterMessage(Message):
    """A required route parameter is missing or empty."""

    parameter: str

    @property
    def level(self) -> MessageLevel:
        return MessageLevel.ERROR

    @property
    def message(self) -> str:
        return f"Missing required pathfinding parameter: {self.parameter}"


@dataclass(frozen=True)
class InvalidParameterMessage(Message):
    """A route parameter has the wrong type (e.g., non-numeric ID)."""

    parameter: str
    value: str

    @property
    def level(self) -> MessageLevel:
        return MessageLevel.ERROR

    @property
    def message(self) -> str:
        return f"Invalid value for {self.parameter}: {self.value!r} is not a number"


@dataclass(frozen=True)
class UnknownPointMessage(Message):
    """Start or end point is not a point of this resort."""

    point_id: int
    role: str  # "start" or "end"

    @property
    def level(self) -> MessageLevel:
        return MessageLevel.ERROR

    @property
    def message(self) -> str:
        return f"Unknown {self.role} point {self.point_id} for this resort"


@dataclass(frozen=True)
class UnknownDifficultyMessage(Message):
    """Max difficulty is not on the difficulty scale."""

    difficulty: str

    @property
    def level(self) -> MessageLevel:
        return MessageLevel.ERROR

    @property
    def message(self) -> str:
        allowed = ", ".join(DifficultyConfig.DIFFICULTIES)
        return f"Unknown max difficulty {self.difficulty!r} (expected one of: {allowed})"


@dataclass(frozen=True)
class UnknownLiftMessage(Message):
    """Avoided lifts that do not exist in this resort."""

    lift_ids: tuple[str, ...]

    @property
    def level(self) -> MessageLevel:
        return MessageLevel.ERROR

    @property
    def message(self) -> str:
        return f"Unknown lift(s) to avoid: {', '.join(self.lift_ids)}"


# =============================================================================
# RESULT MESSAGES
# =============================================================================


@dataclass(frozen=True)
class NoRouteMessage(Message):
    """Valid request, but the constraints leave no way through."""

    @property
    def level(self) -> MessageLevel:
        return MessageLevel.WARNING

    @property
    def message(self) -> str:
        return "No route found. Please adjust your options and try again."


@dataclass(frozen=True)
class TrivialRouteMessage(Message):
    """Start and end are the same point."""

    @property
    def level(self) -> MessageLevel:
        return MessageLevel.INFO

    @property
    def message(self) -> str:
        return "You are already there: start and destination are the same point."
