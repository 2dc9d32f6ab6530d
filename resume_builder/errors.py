"""Error taxonomy shared by the intake, analysis and generation stages."""

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Category of a pipeline failure, used for routing and log records."""
    VALIDATION = "validation"
    REQUEST = "request"
    PARSE = "parse"
    UNKNOWN = "unknown"


class ResumeBuilderError(Exception):
    """Base exception for resume builder errors."""
    kind: ErrorKind = ErrorKind.UNKNOWN


class ValidationError(ResumeBuilderError):
    """Raised when a user action is rejected before any call is made.

    Never changes the pipeline stage.
    """
    kind = ErrorKind.VALIDATION


class RequestError(ResumeBuilderError):
    """Raised when an AI service call fails or answers with a non-2xx status."""
    kind = ErrorKind.REQUEST

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ParseError(ResumeBuilderError):
    """Raised when a streamed body does not yield a usable JSON object."""
    kind = ErrorKind.PARSE


class UnknownError(ResumeBuilderError):
    """Wraps any other failure, keeping its message as-is."""
    kind = ErrorKind.UNKNOWN


class ResumeParseError(ResumeBuilderError):
    """Raised when an uploaded resume file cannot be parsed."""
    kind = ErrorKind.PARSE
