"""Error taxonomy for the rollup node.

Codec and decode errors are resolved into a ``reject`` outcome by the
dispatcher. ``TransportFailure`` is the only error that reaches the
request loop.
"""

from typing import Optional


class RollupError(Exception):
    """Base class for every error raised by the rollup package."""


class CodecError(RollupError, ValueError):
    """Raised by the pure codec functions on invalid input."""


class MalformedHex(CodecError):
    """Input text is not valid hex after prefix stripping."""


class InvalidAddressLength(CodecError):
    """Address text is not exactly 40 hex digits."""


class ValueTooLarge(CodecError):
    """Value does not fit the fixed-width target."""


class DecodeError(RollupError):
    """Payload could not be decoded into a structured command."""


class PreconditionViolation(RollupError):
    """Command is well-formed but not applicable to the current state."""


class ConfigurationError(RollupError):
    """Required process configuration is missing or invalid."""


class TransportFailure(RollupError):
    """The coordinating server was unreachable or answered with garbage."""

    def __init__(
        self,
        message: str,
        endpoint: str = "",
        attempts: int = 0,
        tag: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.endpoint = endpoint
        self.attempts = attempts
        self.tag = tag
