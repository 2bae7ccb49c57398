"""Scoped, exclusively owned destination handle.

The writer opens its file on construction using one of the
``DestinationWriteMode`` policies and maps every failure onto the package
exception hierarchy. Text sinks are opened with ``newline=""`` so the bytes on
disk hold exactly the terminators the caller wrote.
"""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import IO

from .constants import DEFAULT_ENCODING
from .exceptions import SplurgeSafeCopyRuntimeError, map_os_error
from .path_validator import PathValidator

logger = logging.getLogger(__name__)


class DestinationWriteMode(Enum):
    CREATE_OR_TRUNCATE = "w"
    CREATE_OR_APPEND = "a"
    CREATE_NEW = "x"


class SafeDestinationWriter:
    """Sequential writer over one destination file.

    Args:
        file_path: Destination path; created if absent.
        file_write_mode: Truncate (default), append, or create-new.
        binary: Open a byte sink instead of a text sink.
        encoding: Encoding for text sinks.
        create_parents: Create missing parent directories first.
        prevalidated: ``file_path`` was already resolved by ``PathValidator``.

    Raises:
        SplurgeSafeCopyFileExistsError: ``CREATE_NEW`` and the file exists.
        SplurgeSafeCopyPermissionError: The destination cannot be written.
        SplurgeSafeCopyOSError: Any other failure creating the destination.
    """

    def __init__(
        self,
        file_path: str | Path,
        *,
        file_write_mode: DestinationWriteMode = DestinationWriteMode.CREATE_OR_TRUNCATE,
        binary: bool = False,
        encoding: str = DEFAULT_ENCODING,
        create_parents: bool = False,
        prevalidated: bool = False,
    ) -> None:
        self._file_path = Path(file_path) if prevalidated else PathValidator.get_validated_path(file_path)
        self._file_write_mode = file_write_mode
        self._binary = binary
        self._encoding = encoding
        self._closed = False
        self._bytes_or_chars_written = 0

        if create_parents:
            try:
                self._file_path.parent.mkdir(parents=True, exist_ok=True)
            except OSError as exc:
                raise map_os_error(exc, action="creating parent directories", path=self._file_path.parent) from exc

        self._file_obj: IO = self._open()
        logger.debug("opened destination %s (mode=%s)", self._file_path, file_write_mode.name)

    def _open(self) -> IO:
        mode = self._file_write_mode.value
        try:
            if self._binary:
                return open(self._file_path, mode + "b")
            return open(self._file_path, mode, encoding=self._encoding, newline="")
        except (OSError, UnicodeError) as exc:
            raise map_os_error(exc, action="opening destination", path=self._file_path) from exc

    @property
    def file_path(self) -> Path:
        return self._file_path

    @property
    def file_write_mode(self) -> DestinationWriteMode:
        return self._file_write_mode

    @property
    def binary(self) -> bool:
        return self._binary

    @property
    def encoding(self) -> str:
        return self._encoding

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def written(self) -> int:
        """Number of characters (text sink) or bytes (byte sink) written so far."""
        return self._bytes_or_chars_written

    def __enter__(self) -> SafeDestinationWriter:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _ensure_open(self) -> None:
        if self._closed:
            raise SplurgeSafeCopyRuntimeError(
                "writer-closed", f"Destination {self._file_path} is closed", {"path": str(self._file_path)}
            )

    def write(self, data: str | bytes) -> int:
        self._ensure_open()
        try:
            count = self._file_obj.write(data)
        except Exception as exc:
            raise map_os_error(exc, action="writing destination", path=self._file_path) from exc
        self._bytes_or_chars_written += count if count is not None else len(data)
        return count

    def flush(self) -> None:
        self._ensure_open()
        try:
            self._file_obj.flush()
        except Exception as exc:
            raise map_os_error(exc, action="flushing destination", path=self._file_path) from exc

    def close(self) -> None:
        """Flush and release the handle. Calling it again is a no-op.

        The handle is marked closed even when flushing fails, so a failed
        close is never retried against a half-released file.
        """
        if self._closed:
            return
        self._closed = True
        try:
            self._file_obj.close()
        except Exception as exc:
            raise map_os_error(exc, action="closing destination", path=self._file_path) from exc
        logger.debug("closed destination %s", self._file_path)
