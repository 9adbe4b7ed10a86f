"""Error types raised while taking a turn.

Every failure aborts the turn before any state is returned, so a caller can
always resubmit the same game state.
"""

from typing import Optional


class GuesserError(Exception):
    """Base class for turn failures."""

    kind = "internal"
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        """Public error payload (no internal detail)."""
        return {"error": self.message, "kind": self.kind}


class MissingInputError(GuesserError):
    """No game state was supplied."""

    kind = "missing_input"
    status_code = 400


class ConfigurationError(GuesserError):
    """The reasoning service credential is not configured."""

    kind = "configuration"
    status_code = 503


class UpstreamError(GuesserError):
    """The reasoning service returned a non-success response or was unreachable."""

    kind = "upstream"
    status_code = 502

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


class EmptyReplyError(UpstreamError):
    """The reasoning service answered but carried no usable text."""

    kind = "empty_reply"


class FormatError(GuesserError):
    """The reply text could not be coerced into a decision."""

    kind = "format"
    status_code = 502
