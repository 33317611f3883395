"""Exception types raised by aerocheck.

Only DocumentUnavailableError escapes a compliance run. RuleExecutionError
is captured per rule and document by the engine, and MalformedDateError
never leaves the inspection recency rule.
"""

from __future__ import annotations


class AerocheckError(Exception):
    """Base class for all aerocheck errors."""


class RuleExecutionError(AerocheckError):
    """A rule's check raised while evaluating one document."""

    def __init__(self, rule_id: str, filename: str, cause: BaseException) -> None:
        self.rule_id = rule_id
        self.filename = filename
        self.cause = cause
        super().__init__(f"Rule {rule_id} failed on {filename}: {cause}")


class DocumentUnavailableError(AerocheckError):
    """A configured input document could not be read."""

    def __init__(self, filename: str, reason: str = "") -> None:
        self.filename = filename
        self.reason = reason
        detail = f": {reason}" if reason else ""
        super().__init__(f"Document unavailable: {filename}{detail}")


class MalformedDateError(AerocheckError, ValueError):
    """A date-shaped substring is not a real calendar date."""

    def __init__(self, text: str) -> None:
        self.text = text
        super().__init__(f"Cannot parse date: {text!r}")
