"""
Result type returned by fallible core operations.

The orchestrator inspects ``Result.kind`` to decide whether to continue with the
next element or location; nothing in the core relies on swallowed exceptions.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class ErrorKind(Enum):
    """Failure taxonomy of a run."""
    STALE = "stale"              # element detached from the document, skip it
    NOT_FOUND = "not_found"      # strategy matched nothing, fall through
    INTERACTION = "interaction"  # both triggers failed, record and continue
    SINK = "sink"                # row could not be written, continue
    SESSION = "session"          # location could not be opened, next location


@dataclass(frozen=True)
class Result:
    """Success or failure of a single core operation."""
    ok: bool
    value: Any = None
    reason: str = ""
    kind: Optional[ErrorKind] = None

    @classmethod
    def success(cls, value: Any = None) -> "Result":
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, kind: ErrorKind, reason: str = "", value: Any = None) -> "Result":
        return cls(ok=False, value=value, reason=reason, kind=kind)

    def __bool__(self) -> bool:
        return self.ok
