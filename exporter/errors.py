"""
Error hierarchy for the AIM export stage.

Every failure an export attempt can meet has its own type. The types only
travel inside the stage: the service converts them to an Outcome before
returning, so callers never see them (ConfigurationError excepted, which is
raised once when the stage is built).
"""

from typing import Optional


class ExportError(Exception):
    """Base exception for all export stage errors."""

    def __init__(self, message: str, error_code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__


class ConfigurationError(ExportError):
    """
    The stage configuration is unusable.

    Examples:
    - Missing or unparsable url
    - Scheme other than http/https
    - Non-positive timeout
    """

    def __init__(self, message: str):
        super().__init__(message, error_code="CONFIGURATION_ERROR")


class InvalidDocument(ExportError):
    """
    The document can never be exported.

    Examples:
    - Malformed XML
    - Unreadable file
    - Root element other than ImageAnnotation
    """

    def __init__(self, message: str, root_tag: Optional[str] = None):
        super().__init__(message, error_code="INVALID_DOCUMENT")
        self.root_tag = root_tag


class ServerRejected(ExportError):
    """The AIM Data Service answered with something other than 200."""

    def __init__(self, status_code: int, response_text: str = ""):
        super().__init__(f"Server rejected document (HTTP {status_code})", error_code="SERVER_REJECTED")
        self.status_code = status_code
        self.response_text = response_text


class TransportFailure(ExportError):
    """
    The transaction could not be completed.

    Examples:
    - DNS failure, connection refused
    - TLS handshake failure
    - Timeout while writing the request or waiting for the status line
    """

    def __init__(self, message: str):
        super().__init__(message, error_code="TRANSPORT_FAILURE")


class ResponseReadFailure(ExportError):
    """The response body could not be read. Never affects the outcome."""

    def __init__(self, message: str):
        super().__init__(message, error_code="RESPONSE_READ_FAILURE")
