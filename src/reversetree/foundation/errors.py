"""Reverse tree error system.

Provides structured error handling with:
- Numeric error codes for programmatic handling
- User-friendly messages
- Recovery hints
- Context for debugging
"""


from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Numeric error codes organized by category.

    Format: XYYY where X = category, YYY = specific error

    Categories:
        5xxx - Configuration errors
        7xxx - IO errors
    """

    # 5xxx - Configuration Errors
    CONFIG_INVALID = 5002

    # 7xxx - IO Errors
    REPOSITORY_NOT_FOUND = 7003
    TRACKING_DIR_FAILED = 7004
    TRACKING_WRITE_FAILED = 7005

    @property
    def category(self) -> str:
        """Get the error category name."""
        prefix = self.value // 1000
        return {
            5: "config",
            7: "io",
        }.get(prefix, "unknown")


# Human-readable error messages
ERROR_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.CONFIG_INVALID: "Invalid configuration in '{path}': {detail}",
    ErrorCode.REPOSITORY_NOT_FOUND: "Local repository not found: {path}",
    ErrorCode.TRACKING_DIR_FAILED: "Failed to create tracking directory: {path}",
    ErrorCode.TRACKING_WRITE_FAILED: "Failed to write tracking file: {path}",
}


RECOVERY_HINTS: dict[ErrorCode, list[str]] = {
    ErrorCode.REPOSITORY_NOT_FOUND: [
        "Pass the repository with --repo",
        "Set local_repository in .reversetree/config.yaml or REVERSETREE_LOCAL_REPOSITORY",
    ],
    ErrorCode.CONFIG_INVALID: [
        "Check the YAML syntax of {path}",
        "Remove the file to fall back to built-in defaults",
    ],
    ErrorCode.TRACKING_DIR_FAILED: [
        "Check write permissions on the local repository",
        "Disable recording with REVERSETREE_RECORD_REVERSE_TREE=false",
    ],
    ErrorCode.TRACKING_WRITE_FAILED: [
        "Check free disk space and write permissions for {path}",
        "Disable recording with REVERSETREE_RECORD_REVERSE_TREE=false",
    ],
}


class ReverseTreeError(Exception):
    """Base error type for all reverse tree errors.

    Example:
        >>> err = ReverseTreeError(
        ...     code=ErrorCode.TRACKING_WRITE_FAILED,
        ...     context={"path": "/repo/g/a/1.0/.tracking/g_app_1.0"},
        ... )
        >>> print(err)
        [RT-7005] Failed to write tracking file: /repo/g/a/1.0/.tracking/g_app_1.0
    """

    def __init__(
        self,
        code: ErrorCode,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ):
        self.code = code
        self.context = context or {}
        self.cause = cause
        super().__init__(str(self))
        if cause is not None:
            self.__cause__ = cause

    @property
    def message(self) -> str:
        """Get the formatted user-friendly message."""
        template = ERROR_MESSAGES.get(self.code, "An error occurred: {detail}")
        try:
            return template.format(**self.context)
        except KeyError:
            return template

    @property
    def recovery_hints(self) -> list[str]:
        """Get recovery suggestions for this error."""
        formatted = []
        for hint in RECOVERY_HINTS.get(self.code, []):
            try:
                formatted.append(hint.format(**self.context))
            except KeyError:
                formatted.append(hint)
        return formatted

    @property
    def category(self) -> str:
        return self.code.category

    @property
    def error_id(self) -> str:
        """Get the error ID string (e.g., 'RT-7005')."""
        return f"RT-{self.code.value}"

    def __str__(self) -> str:
        return f"[{self.error_id}] {self.message}"

    def __repr__(self) -> str:
        return f"ReverseTreeError(code={self.code!r}, context={self.context!r})"

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dict for logging and JSON output."""
        return {
            "error_id": self.error_id,
            "code": self.code.value,
            "category": self.category,
            "message": self.message,
            "recovery_hints": self.recovery_hints,
            "context": {k: str(v) for k, v in self.context.items()},
        }


def io_error(code: ErrorCode, path: object, cause: Exception | None = None) -> ReverseTreeError:
    """Create a filesystem error for ``path``."""
    detail = str(cause) if cause else ""
    return ReverseTreeError(code=code, context={"path": str(path), "detail": detail}, cause=cause)


def config_error(path: object, detail: str, cause: Exception | None = None) -> ReverseTreeError:
    """Create a CONFIG_INVALID error."""
    return ReverseTreeError(
        code=ErrorCode.CONFIG_INVALID,
        context={"path": str(path), "detail": detail},
        cause=cause,
    )
