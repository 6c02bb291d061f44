"""
Error taxonomy for the record store, activity client and create pipeline.

Each concrete error carries a stable ``kind`` tag so handlers can log the
precise failure while collapsing it into a coarse HTTP response.
"""

from enum import Enum


class UsersBackendError(Exception):
    """Base class for all internal errors."""

    kind = "internal_error"


class StoreError(UsersBackendError):
    """Record store failure."""

    kind = "store_error"

    def __init__(self, message: str, path: str) -> None:
        super().__init__(message)
        self.path = path


class StoreWriteError(StoreError):
    kind = "write_failure"


class StoreReadError(StoreError):
    kind = "read_failure"


class StoreParseError(StoreError):
    """A stored line is not a JSON object."""

    kind = "parse_failure"

    def __init__(self, message: str, path: str, line_number: int) -> None:
        super().__init__(message, path)
        self.line_number = line_number


class FetchError(UsersBackendError):
    """Activity service failure."""

    kind = "fetch_error"

    def __init__(self, message: str, url: str) -> None:
        super().__init__(message)
        self.url = url


class ActivityNetworkError(FetchError):
    """Connection failure, timeout or non-success status."""

    kind = "network_error"

    def __init__(self, message: str, url: str, status_code: int | None = None) -> None:
        super().__init__(message, url)
        self.status_code = status_code


class MalformedActivityResponse(FetchError):
    """Response body lacks the ``activity`` field."""

    kind = "malformed_response"


class PipelineStage(str, Enum):
    """Stage that was running when a create pipeline failed."""

    PERSIST = "persist"
    ENRICH = "enrich"


class CreateUserError(UsersBackendError):
    """Create pipeline aborted at ``stage`` because of ``cause``."""

    kind = "create_failed"

    def __init__(self, stage: PipelineStage, cause: UsersBackendError) -> None:
        super().__init__(f"create pipeline failed at {stage.value}: {cause.kind}: {cause}")
        self.stage = stage
        self.cause = cause
