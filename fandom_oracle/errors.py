# fandom_oracle/errors.py
"""
Oracle error taxonomy.

Every failure surfaces to the caller as one OracleError subclass carrying a
human-readable message. The transport maps each kind to an HTTP status.
"""


class OracleError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidInput(OracleError):
    """Empty or whitespace-only query. User-correctable."""
    status_code = 400


class ConfigError(OracleError):
    """Malformed upstream configuration. Operator-fixable, not transient."""
    status_code = 500


class FetchError(OracleError):
    status_code = 502


class TransportError(FetchError):
    """Network failure talking to the upstream source."""


class UpstreamError(FetchError):
    """Upstream answered with a non-2xx status."""

    def __init__(self, status: int):
        super().__init__(f"upstream returned status {status}")
        self.status = status


class DecodeError(FetchError):
    """Upstream body could not be parsed as the expected structure."""


class SerializationError(OracleError):
    """Cached envelope could not be (de)serialized."""
    status_code = 500
