"""
Data models shared by the export stage.
"""

from dataclasses import dataclass
from enum import Enum


class Outcome(Enum):
    """Result of one export attempt."""
    ACCEPTED = "ACCEPTED"    # Server returned 200
    REJECTED = "REJECTED"    # Bad document or non-200 answer, never retry
    RETRYABLE = "RETRYABLE"  # Transaction not completed, retry later

    @property
    def is_final(self) -> bool:
        """True when the caller should not export the document again."""
        return self is not Outcome.RETRYABLE


@dataclass(frozen=True)
class ServiceResponse:
    """Status code and response text of one AIM Data Service transaction."""

    status_code: int
    text: str = ""

    @property
    def ok(self) -> bool:
        return self.status_code == 200
