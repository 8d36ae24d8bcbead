"""
Error classifier for determining the outcome of an export attempt.

Maps exceptions raised while exporting a document to REJECTED or RETRYABLE
so the caller knows whether a later attempt could succeed.
"""

import logging
import re

import httpx

from exporter.errors import (
    ExportError,
    InvalidDocument,
    ServerRejected,
    TransportFailure,
)
from exporter.models import Outcome

logger = logging.getLogger(__name__)

_WORD = re.compile(r"[A-Z][^A-Z]*|[^A-Z]+")


class ErrorClassifier:
    """
    Classifies exceptions into export outcomes.

    Classification Rules:
    - REJECTED: invalid document, non-200 response from the server
    - RETRYABLE: transport failures and httpx transport errors
    - Unknown exceptions default to RETRYABLE (the server may not have
      received the document)
    """

    def classify(self, exception: Exception) -> Outcome:
        """
        Classify exception into an outcome.

        Args:
            exception: The exception to classify

        Returns:
            Outcome.REJECTED or Outcome.RETRYABLE
        """
        if isinstance(exception, (InvalidDocument, ServerRejected)):
            return Outcome.REJECTED
        if isinstance(exception, TransportFailure):
            return Outcome.RETRYABLE

        if isinstance(exception, (httpx.TransportError, OSError)):
            return Outcome.RETRYABLE

        logger.debug(f"Unknown exception type {type(exception).__name__}, defaulting to RETRYABLE")
        return Outcome.RETRYABLE

    def get_error_code(self, exception: Exception) -> str:
        """
        Short code for log lines.

        ExportError subclasses carry their own code; anything else is named
        after its class, e.g. httpx.ReadTimeout -> READ_TIMEOUT and
        ValueError -> VALUE.
        """
        if isinstance(exception, ExportError):
            return exception.error_code

        words = _WORD.findall(type(exception).__name__)
        if len(words) > 1 and words[-1] in ("Error", "Exception"):
            words = words[:-1]
        return "_".join(words).upper()
