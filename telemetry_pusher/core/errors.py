"""Startup-fatal error types.

Everything here stops the process before the first round. Failures of a
single round are reported as ``PublishResult`` values instead.
"""

__all__ = [
    "StartupError",
    "MissingConfigError",
    "InvalidConfigError",
    "PayloadFileNotFoundError",
    "InvalidJsonError",
]


class StartupError(Exception):
    """Base class for errors that prevent the send loop from starting."""


class MissingConfigError(StartupError):
    """A required configuration key is absent or blank."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Missing required configuration value: {name}")


class InvalidConfigError(StartupError):
    """A configuration key is present but unusable."""

    def __init__(self, name: str, value: str, reason: str = "") -> None:
        self.name = name
        self.value = value
        message = f"Invalid configuration value for {name}: {value!r}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)


class PayloadFileNotFoundError(StartupError):
    """The payload file could not be opened or read."""

    def __init__(self, path: str, reason: str = "") -> None:
        self.path = path
        self.reason = reason
        message = f"Payload file not found or unreadable: {path}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)


class InvalidJsonError(StartupError):
    """The payload file content is not well-formed JSON."""

    def __init__(self, path: str, detail: str) -> None:
        self.path = path
        self.detail = detail
        super().__init__(f"Payload file contains invalid JSON: {path} ({detail})")
