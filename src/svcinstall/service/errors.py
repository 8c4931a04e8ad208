"""Exceptions raised by the service core.

Every error derives from ServiceError so callers can catch the whole family.
Precondition errors are raised before any side effect and are safe to retry
once the input is fixed.
"""

from svcinstall.service.types import CommandResult


class ServiceError(Exception):
    """Base class for service install/uninstall failures."""


class ServiceExistsError(ServiceError):
    """A service file already exists at the resolved path."""

    def __init__(self, name: str, path: str) -> None:
        super().__init__(f"Service '{name}' already exists in '{path}'.")
        self.name = name
        self.path = path


class ServiceNotFoundError(ServiceError):
    """No service file exists for the service being removed."""

    def __init__(self, name: str, path: str) -> None:
        super().__init__(f"Service '{name}' does not exist in '{path}'.")
        self.name = name
        self.path = path


class MissingUserError(ServiceError):
    """A user name is required but none was given or found."""


class ForcedInitSystemError(ServiceError):
    """An init system was forced for a real installation."""


class UnsupportedInitSystemError(ServiceError):
    """The init system is unknown or has no registered backend."""

    def __init__(self, init_system: str | None = None) -> None:
        if init_system is None:
            message = "Unsupported init system."
        else:
            message = f"Unsupported init system: {init_system}"
        super().__init__(message)
        self.init_system = init_system


class CommandFailedError(ServiceError):
    """An external command exited with a non-zero status.

    Attributes:
        result: Captured result of the failing command.
        rollback_error: Description of a failed rollback, if one was attempted
            and did not complete.
    """

    def __init__(
        self,
        message: str,
        result: CommandResult,
        rollback_error: str | None = None,
    ) -> None:
        detail = f"{message} Error: \n{result.output}" if result.output else message
        super().__init__(detail)
        self.result = result
        self.rollback_error = rollback_error

    @property
    def returncode(self) -> int:
        return self.result.returncode


class InvalidServiceConfigError(ServiceError):
    """Options contain values the service file format cannot represent."""
