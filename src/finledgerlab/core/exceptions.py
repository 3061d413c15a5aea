"""
Custom exceptions for FinLedgerLab.

This module provides the exception raised when the forecasting engine is
driven over a day range it cannot simulate.
"""

from __future__ import annotations


class PredictionRangeError(Exception):
    """
    Raised when a prediction is requested over an invalid span.

    Typical causes are a target date before the start date, or a
    continuation requested for entities whose rows do not reach the last
    simulated target.

    Attributes:
        span: Human-readable description of the requested span
        problem_ids: Names of the entities that caused the failure
    """

    def __init__(
        self,
        span: str,
        message: str,
        problem_ids: list[str] | None = None,
    ):
        self.span = span
        self.problem_ids = problem_ids or []
        super().__init__(self._fmt(message))

    def _fmt(self, msg: str) -> str:
        """Format the error message with additional context."""
        suffix = ""
        if self.problem_ids:
            preview = ", ".join(self.problem_ids[:10])
            more = (
                f" (+{len(self.problem_ids)-10} more)"
                if len(self.problem_ids) > 10
                else ""
            )
            suffix = f" | problem_ids: [{preview}]{more}"
        return f"[Span {self.span}] {msg}{suffix}"
