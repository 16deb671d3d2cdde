class RelayError(Exception):
    """Base class for errors that terminate a relay request."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"error": self.message}


class InvalidBody(RelayError):
    """Request body is not valid JSON or lacks a required field."""

    status_code = 400


class InvalidSignature(RelayError):
    """Webhook signature header is missing or does not match."""

    status_code = 400


class ConfigError(RelayError):
    """A required secret or key is not configured."""

    status_code = 400


class UpstreamError(RelayError):
    """The payment processor answered with an error or could not be reached."""

    status_code = 500

    def __init__(self, message: str, upstream_status: int | None = None):
        super().__init__(message)
        self.upstream_status = upstream_status


class InternalFault(RelayError):
    status_code = 500

    def __init__(self, message: str = "Internal server error"):
        super().__init__(message)


class NotFound(RelayError):
    status_code = 404
