"""
Three-state analysis results.

Every analysis slot is Empty (never computed), Success (holding the
payload) or Error (holding a user-visible reason).
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, Optional, TypeVar

T = TypeVar("T")

NOT_COMPUTED = "not yet computed"


class ResultState(Enum):
    EMPTY = "empty"
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class AnalysisResult(Generic[T]):
    """Tagged Empty / Success / Error value."""
    state: ResultState = ResultState.EMPTY
    payload: Optional[T] = None
    reason: str = ""

    @classmethod
    def empty(cls) -> "AnalysisResult[T]":
        return cls()

    @classmethod
    def success(cls, payload: T) -> "AnalysisResult[T]":
        return cls(state=ResultState.SUCCESS, payload=payload)

    @classmethod
    def error(cls, reason: str) -> "AnalysisResult[T]":
        return cls(state=ResultState.ERROR, reason=str(reason))

    @property
    def is_empty(self) -> bool:
        return self.state is ResultState.EMPTY

    @property
    def is_success(self) -> bool:
        return self.state is ResultState.SUCCESS

    @property
    def is_error(self) -> bool:
        return self.state is ResultState.ERROR

    def unwrap(self) -> T:
        """Return the payload; raise ValueError unless Success."""
        if not self.is_success:
            raise ValueError(f"No payload in {self.state.value} result")
        return self.payload

    def render(self) -> Any:
        """External rendering: placeholder, reason string or payload."""
        if self.is_empty:
            return NOT_COMPUTED
        if self.is_error:
            return self.reason
        return self.payload

    def __repr__(self) -> str:
        if self.is_empty:
            return "Empty"
        if self.is_error:
            return f"Error({self.reason!r})"
        return f"Success({self.payload!r})"
