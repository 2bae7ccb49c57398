"""Path validation performed before any file handle is opened.

PathValidator rejects obviously unsafe path strings, resolves the path and
then applies the requested existence, type and access checks. Failures map
onto the package exception hierarchy so callers can tell a missing source
(``SplurgeSafeCopyFileNotFoundError``) from an unreadable one
(``SplurgeSafeCopyPermissionError``) from a malformed path
(``SplurgeSafeCopyPathValidationError``).
"""

from __future__ import annotations

import logging
import os
import re
from collections.abc import Callable
from pathlib import Path

from .exceptions import (
    SplurgeSafeCopyFileNotFoundError,
    SplurgeSafeCopyOSError,
    SplurgeSafeCopyPathValidationError,
    SplurgeSafeCopyPermissionError,
)

logger = logging.getLogger(__name__)

PathPolicy = Callable[[str], None]


class PathValidator:
    """Static helpers for validating file paths."""

    MAX_PATH_LENGTH = 4096

    _DANGEROUS_CHARS = frozenset('<>"|?*')
    _DRIVE_RE = re.compile(r"^[A-Za-z]:")

    _pre_resolution_policies: list[PathPolicy] = []

    @classmethod
    def register_pre_resolution_policy(cls, policy: PathPolicy) -> None:
        """Register a callable run against the raw path string before resolution.

        A policy signals rejection by raising ``SplurgeSafeCopyPathValidationError``.
        """
        cls._pre_resolution_policies.append(policy)

    @classmethod
    def clear_pre_resolution_policies(cls) -> None:
        cls._pre_resolution_policies.clear()

    @classmethod
    def _check_path_string(cls, path_str: str) -> None:
        if not path_str:
            raise SplurgeSafeCopyPathValidationError("empty-path", "Path must not be empty")

        if len(path_str) > cls.MAX_PATH_LENGTH:
            raise SplurgeSafeCopyPathValidationError(
                "path-too-long",
                f"Path is longer than {cls.MAX_PATH_LENGTH} characters",
                {"length": len(path_str)},
            )

        for ch in path_str:
            if ord(ch) < 32:
                raise SplurgeSafeCopyPathValidationError(
                    "control-char", "Path contains a control character", {"path": repr(path_str)}
                )
            if ch in cls._DANGEROUS_CHARS:
                raise SplurgeSafeCopyPathValidationError(
                    "dangerous-char", f"Path contains dangerous character {ch!r}", {"path": path_str}
                )

        # A colon is only meaningful as a Windows drive specifier.
        if ":" in path_str:
            if not cls._DRIVE_RE.match(path_str) or ":" in path_str[2:]:
                raise SplurgeSafeCopyPathValidationError(
                    "invalid-colon", "Colon is only allowed in a drive specifier", {"path": path_str}
                )

    @classmethod
    def get_validated_path(
        cls,
        file_path: str | Path,
        *,
        must_exist: bool = False,
        must_be_file: bool = False,
        must_be_readable: bool = False,
        must_be_writable: bool = False,
        allow_relative: bool = True,
        base_directory: str | Path | None = None,
    ) -> Path:
        """Validate ``file_path`` and return its resolved ``Path``.

        Raises:
            SplurgeSafeCopyPathValidationError: malformed path, relative path when
                not allowed, resolution failure or escape from ``base_directory``.
            SplurgeSafeCopyFileNotFoundError: ``must_exist`` and the path is missing.
            SplurgeSafeCopyOSError: ``must_be_file`` and the path is not a regular file.
            SplurgeSafeCopyPermissionError: a requested access check failed.
        """
        path_str = str(file_path)
        cls._check_path_string(path_str)

        for policy in list(cls._pre_resolution_policies):
            policy(path_str)

        candidate = Path(path_str)
        if not allow_relative and not candidate.is_absolute():
            raise SplurgeSafeCopyPathValidationError(
                "relative-path", "Relative paths are not allowed", {"path": path_str}
            )

        try:
            resolved = candidate.resolve()
        except (OSError, RuntimeError) as exc:
            raise SplurgeSafeCopyPathValidationError(
                "resolve-failed",
                f"Unable to resolve path {path_str}: {exc}",
                {"path": path_str},
                original_exception=exc,
            ) from exc

        if base_directory is not None:
            try:
                base = Path(base_directory).resolve()
            except (OSError, RuntimeError) as exc:
                raise SplurgeSafeCopyPathValidationError(
                    "resolve-failed",
                    f"Unable to resolve base directory {base_directory}: {exc}",
                    {"path": str(base_directory)},
                    original_exception=exc,
                ) from exc
            if resolved != base and base not in resolved.parents:
                raise SplurgeSafeCopyPathValidationError(
                    "outside-base-directory",
                    f"Path {resolved} is outside base directory {base}",
                    {"path": str(resolved), "base_directory": str(base)},
                )

        if must_exist and not resolved.exists():
            raise SplurgeSafeCopyFileNotFoundError(
                "file-not-found", f"File does not exist: {resolved}", {"path": str(resolved)}
            )

        if must_be_file and resolved.exists() and not resolved.is_file():
            raise SplurgeSafeCopyOSError(
                "not-a-file", f"Path is not a regular file: {resolved}", {"path": str(resolved)}
            )

        if must_be_readable and resolved.exists() and not os.access(resolved, os.R_OK):
            raise SplurgeSafeCopyPermissionError(
                "permission-denied", f"File is not readable: {resolved}", {"path": str(resolved)}
            )

        if must_be_writable and resolved.exists() and not os.access(resolved, os.W_OK):
            raise SplurgeSafeCopyPermissionError(
                "permission-denied", f"File is not writable: {resolved}", {"path": str(resolved)}
            )

        logger.debug("validated path %s -> %s", path_str, resolved)
        return resolved

    @classmethod
    def is_same_file(cls, first: str | Path, second: str | Path) -> bool:
        """Return True when both paths resolve to the same location."""
        first_path = Path(first).resolve()
        second_path = Path(second).resolve()
        if first_path == second_path:
            return True
        try:
            return first_path.exists() and second_path.exists() and os.path.samefile(first_path, second_path)
        except OSError:
            return False
