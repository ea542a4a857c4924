"""Exceptions raised by the intake core."""

from __future__ import annotations


class SessionStateError(RuntimeError):
    """An operation was called in a conversation state that does not allow it."""

    def __init__(self, operation: str, state: str) -> None:
        super().__init__(f"'{operation}' is not allowed while the session is {state}")
        self.operation = operation
        self.state = state
