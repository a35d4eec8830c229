"""Typed per-step outcomes.

Each pipeline step reports OK, WARNING or FATAL; the driver applies one policy
to all of them: log warnings and continue, raise on fatal.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class Outcome(str, Enum):
    """Severity of a pipeline step result."""

    OK = "ok"
    WARNING = "warning"
    FATAL = "fatal"


@dataclass(frozen=True)
class StepResult:
    """Result of a single pipeline step."""

    step: str
    outcome: Outcome
    message: str = ""
    value: Any = None

    @classmethod
    def ok(cls, step: str, message: str = "", value: Any = None) -> "StepResult":
        return cls(step=step, outcome=Outcome.OK, message=message, value=value)

    @classmethod
    def warning(cls, step: str, message: str, value: Any = None) -> "StepResult":
        return cls(step=step, outcome=Outcome.WARNING, message=message, value=value)

    @classmethod
    def fatal(cls, step: str, message: str, value: Any = None) -> "StepResult":
        return cls(step=step, outcome=Outcome.FATAL, message=message, value=value)

    @property
    def is_fatal(self) -> bool:
        return self.outcome is Outcome.FATAL

    @property
    def is_warning(self) -> bool:
        return self.outcome is Outcome.WARNING
