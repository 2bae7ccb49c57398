"""Exception hierarchy for splurge-safe-copy.

Every error raised by this package derives from :class:`SplurgeSafeCopyError`
and carries:

- ``error_code``: a short, stable, kebab-case identifier
- ``message``: a human readable description
- ``details``: a dict of extra context (paths, close errors, ...)
- ``original_exception``: the lower-level exception that was mapped, if any

Mapped errors are also chained with ``raise ... from original`` so the cause
is visible through ``__cause__``.
"""

from __future__ import annotations

import codecs
from typing import Any


class SplurgeSafeCopyError(Exception):
    """Base class for all splurge-safe-copy errors."""

    def __init__(
        self,
        error_code: str = "general",
        message: str | None = None,
        details: dict[str, Any] | None = None,
        *,
        original_exception: BaseException | None = None,
    ) -> None:
        self.error_code = error_code
        self.message = message if message is not None else error_code
        self.details: dict[str, Any] = dict(details) if details else {}
        self.original_exception = original_exception
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"


class SplurgeSafeCopyOSError(SplurgeSafeCopyError):
    """Any read/write failure, including destination-creation failures."""


class SplurgeSafeCopyFileNotFoundError(SplurgeSafeCopyOSError):
    pass


class SplurgeSafeCopyPermissionError(SplurgeSafeCopyOSError):
    pass


class SplurgeSafeCopyFileExistsError(SplurgeSafeCopyOSError):
    pass


class SplurgeSafeCopyFileDecodingError(SplurgeSafeCopyOSError):
    """Source bytes could not be decoded with the configured encoding."""


class SplurgeSafeCopyFileEncodingError(SplurgeSafeCopyOSError):
    """Transformed text could not be encoded with the configured encoding."""


class SplurgeSafeCopyValueError(SplurgeSafeCopyError):
    pass


class SplurgeSafeCopyParameterError(SplurgeSafeCopyValueError):
    """Invalid configuration or argument."""


class SplurgeSafeCopyLookupError(SplurgeSafeCopyError):
    pass


class SplurgeSafeCopyRuntimeError(SplurgeSafeCopyError):
    pass


class SplurgeSafeCopyPathValidationError(SplurgeSafeCopyError):
    pass


def map_os_error(exc: BaseException, *, action: str, path: object) -> SplurgeSafeCopyError:
    """Translate a builtin I/O exception into the matching package error.

    The returned error is not raised; callers do ``raise map_os_error(...) from exc``.
    """
    details = {"path": str(path), "action": action}
    if isinstance(exc, SplurgeSafeCopyError):
        return exc
    if isinstance(exc, FileNotFoundError):
        return SplurgeSafeCopyFileNotFoundError(
            "file-not-found", f"File not found while {action}: {path}", details, original_exception=exc
        )
    if isinstance(exc, PermissionError):
        return SplurgeSafeCopyPermissionError(
            "permission-denied", f"Permission denied while {action}: {path}", details, original_exception=exc
        )
    if isinstance(exc, FileExistsError):
        return SplurgeSafeCopyFileExistsError(
            "file-exists", f"File already exists while {action}: {path}", details, original_exception=exc
        )
    if isinstance(exc, UnicodeDecodeError):
        return SplurgeSafeCopyFileDecodingError(
            "decoding", f"Unable to decode while {action}: {path}: {exc}", details, original_exception=exc
        )
    if isinstance(exc, UnicodeEncodeError):
        return SplurgeSafeCopyFileEncodingError(
            "encoding", f"Unable to encode while {action}: {path}: {exc}", details, original_exception=exc
        )
    if isinstance(exc, UnicodeError):
        return SplurgeSafeCopyFileDecodingError(
            "unicode", f"Unicode error while {action}: {path}: {exc}", details, original_exception=exc
        )
    if isinstance(exc, OSError):
        return SplurgeSafeCopyOSError("os-error", f"I/O error while {action}: {path}: {exc}", details, original_exception=exc)
    return SplurgeSafeCopyError("unexpected", f"Unexpected error while {action}: {path}: {exc}", details, original_exception=exc)


def validate_encoding(encoding: str) -> str:
    """Return the canonical codec name for ``encoding`` or raise a lookup error."""
    try:
        return codecs.lookup(encoding).name
    except LookupError as exc:
        raise SplurgeSafeCopyLookupError(
            "unknown-encoding", f"Unknown encoding: {encoding}", {"encoding": encoding}, original_exception=exc
        ) from exc
