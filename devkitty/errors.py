"""Error taxonomy for DKF parsing and loading.

Every failure carries an ``ErrorKind`` plus the structured fields needed to
report it (offending token, field, icon name, expected/actual values), so
callers can branch on ``err.kind`` instead of parsing message text.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(Enum):
    STRUCTURAL = "structural"
    MISSING_FIELD = "missing_field"
    INVALID_VALUE = "invalid_value"
    UNKNOWN_PROPERTY = "unknown_property"
    MALFORMED_PATH = "malformed_path"
    INCOMPLETE_ICON = "incomplete_icon"
    COUNT_MISMATCH = "count_mismatch"
    DUPLICATE_PROPERTY = "duplicate_property"
    RETRIEVAL = "retrieval"
    USAGE = "usage"


END_OF_INPUT = "<end of input>"


class DevKittyError(Exception):
    """Base class for every error raised by devkitty."""

    kind: ErrorKind

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


# ── Parse errors ─────────────────────────────────────────────────────


class DKFParseError(DevKittyError):
    """A DKF document violated the grammar or a validation rule."""


class StructuralError(DKFParseError):
    kind = ErrorKind.STRUCTURAL

    def __init__(self, expected: str, actual: str | None, position: int = -1):
        self.expected = expected
        self.actual = END_OF_INPUT if actual is None else actual
        self.position = position
        super().__init__(
            f'DKF parse error: expected "{expected}", got "{self.actual}"'
        )


class MissingFieldError(DKFParseError):
    kind = ErrorKind.MISSING_FIELD

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"DKF meta missing required field: {field}")


class InvalidValueError(DKFParseError):
    kind = ErrorKind.INVALID_VALUE

    def __init__(
        self,
        field: str,
        value: str,
        allowed: tuple[str, ...] = (),
        icon: str = "",
    ):
        self.field = field
        self.value = value
        self.allowed = allowed
        self.icon = icon
        where = f' in icon "{icon}"' if icon else ""
        message = f'Invalid DKF {field}{where}: "{value}"'
        if allowed:
            message += f" (allowed: {', '.join(allowed)})"
        super().__init__(message)


class UnknownPropertyError(DKFParseError):
    kind = ErrorKind.UNKNOWN_PROPERTY

    def __init__(self, key: str, icon: str):
        self.key = key
        self.icon = icon
        super().__init__(f'Unknown icon property: {key} (icon "{icon}")')


class DuplicatePropertyError(DKFParseError):
    kind = ErrorKind.DUPLICATE_PROPERTY

    def __init__(self, key: str, icon: str):
        self.key = key
        self.icon = icon
        super().__init__(f'Icon "{icon}" declares {key} more than once')


class MalformedPathError(DKFParseError):
    kind = ErrorKind.MALFORMED_PATH

    def __init__(self, token: str, icon: str):
        self.token = token
        self.icon = icon
        super().__init__(
            f'SVG path must be wrapped in quotes: {token} (icon "{icon}")'
        )


class IncompleteIconError(DKFParseError):
    kind = ErrorKind.INCOMPLETE_ICON

    def __init__(self, icon: str, missing: str):
        self.icon = icon
        self.missing = missing
        if missing == "paths":
            message = f'Icon "{icon}" has no paths'
        else:
            message = f'Icon "{icon}" missing {missing}'
        super().__init__(message)


class CountMismatchError(DKFParseError):
    kind = ErrorKind.COUNT_MISMATCH

    def __init__(self, declared: int, found: int):
        self.declared = declared
        self.found = found
        super().__init__(f"iconCount mismatch: meta={declared}, found={found}")


# ── Load errors ──────────────────────────────────────────────────────


class LoadError(DevKittyError):
    """A batch load could not be carried out."""


class RetrievalError(LoadError):
    kind = ErrorKind.RETRIEVAL

    def __init__(self, source: str, reason: str = "", status_code: int | None = None):
        self.source = source
        self.reason = reason
        self.status_code = status_code
        message = f"Failed to load DKF: {source}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)


class UsageError(LoadError):
    kind = ErrorKind.USAGE
