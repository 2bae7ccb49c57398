"""Scoped, single-pass access to a source file.

``SafeSourceReader`` owns one open binary handle and exposes three lazy unit
streams over it:

- ``iter_bytes()``: one ``bytes`` object of length 1 per source byte
- ``iter_chars()``: one decoded character per item
- ``iter_lines()``: ``(content, terminator)`` pairs

Only one stream may be drawn from a reader; the file cursor advances
irreversibly. Text is decoded with an incremental decoder so multi-byte
sequences and ``\\r\\n`` pairs split across raw reads are reassembled.

Example:

    with SafeSourceReader("input.txt") as reader:
        for content, terminator in reader.iter_lines():
            ...
"""

from __future__ import annotations

import codecs
import logging
import re
from collections.abc import Iterator
from pathlib import Path
from typing import BinaryIO

from .constants import DEFAULT_BUFFER_SIZE, DEFAULT_ENCODING, MIN_BUFFER_SIZE
from .exceptions import (
    SplurgeSafeCopyParameterError,
    SplurgeSafeCopyRuntimeError,
    map_os_error,
    validate_encoding,
)
from .path_validator import PathValidator

logger = logging.getLogger(__name__)

_TERMINATOR_RE = re.compile(r"\r\n|\n|\r")


class SafeSourceReader:
    """Exclusively owned, sequential reader over one source file.

    Args:
        file_path: Source path. Must exist, be a regular file and be readable.
        encoding: Text encoding used by ``iter_chars`` and ``iter_lines``.
        buffer_size: Raw read size in bytes (at least ``MIN_BUFFER_SIZE``).
        prevalidated: ``file_path`` was already resolved and checked by
            ``PathValidator``; skip validation so policies run once.

    Raises:
        SplurgeSafeCopyFileNotFoundError: The source does not exist.
        SplurgeSafeCopyPermissionError: The source cannot be read.
        SplurgeSafeCopyOSError: Any other failure opening the source.
    """

    def __init__(
        self,
        file_path: str | Path,
        *,
        encoding: str = DEFAULT_ENCODING,
        buffer_size: int = DEFAULT_BUFFER_SIZE,
        prevalidated: bool = False,
    ) -> None:
        if buffer_size < MIN_BUFFER_SIZE:
            raise SplurgeSafeCopyParameterError(
                "invalid-buffer-size",
                f"buffer_size must be at least {MIN_BUFFER_SIZE}",
                {"buffer_size": buffer_size},
            )
        self._encoding = validate_encoding(encoding)
        self._buffer_size = buffer_size
        if prevalidated:
            self._file_path = Path(file_path)
        else:
            self._file_path = PathValidator.get_validated_path(
                file_path, must_exist=True, must_be_file=True, must_be_readable=True
            )
        self._consumed = False
        self._closed = False
        try:
            self._file_obj: BinaryIO = self._file_path.open("rb")
        except OSError as exc:
            raise map_os_error(exc, action="opening source", path=self._file_path) from exc
        logger.debug("opened source %s", self._file_path)

    @property
    def file_path(self) -> Path:
        return self._file_path

    @property
    def encoding(self) -> str:
        return self._encoding

    @property
    def buffer_size(self) -> int:
        return self._buffer_size

    @property
    def closed(self) -> bool:
        return self._closed

    def __enter__(self) -> SafeSourceReader:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        """Release the underlying handle. Calling it again is a no-op."""
        if self._closed:
            return
        self._closed = True
        try:
            self._file_obj.close()
        except OSError as exc:
            raise map_os_error(exc, action="closing source", path=self._file_path) from exc
        logger.debug("closed source %s", self._file_path)

    def _claim_stream(self, kind: str) -> None:
        if self._closed:
            raise SplurgeSafeCopyRuntimeError(
                "reader-closed", f"Cannot iterate {kind} from a closed reader", {"path": str(self._file_path)}
            )
        if self._consumed:
            raise SplurgeSafeCopyRuntimeError(
                "stream-consumed",
                f"Source {self._file_path} has already been consumed",
                {"path": str(self._file_path), "requested": kind},
            )
        self._consumed = True

    def _read_blocks(self) -> Iterator[bytes]:
        while True:
            try:
                raw = self._file_obj.read(self._buffer_size)
            except OSError as exc:
                raise map_os_error(exc, action="reading source", path=self._file_path) from exc
            if not raw:
                return
            yield raw

    def _read_text(self) -> Iterator[str]:
        decoder = codecs.getincrementaldecoder(self._encoding)(errors="strict")
        try:
            for raw in self._read_blocks():
                text = decoder.decode(raw)
                if text:
                    yield text
            tail = decoder.decode(b"", final=True)
        except UnicodeError as exc:
            raise map_os_error(exc, action="decoding source", path=self._file_path) from exc
        if tail:
            yield tail

    def iter_bytes(self) -> Iterator[bytes]:
        """Lazily yield the source one byte at a time."""
        self._claim_stream("bytes")
        return self._generate_bytes()

    def _generate_bytes(self) -> Iterator[bytes]:
        for raw in self._read_blocks():
            for index in range(len(raw)):
                yield raw[index : index + 1]

    def iter_chars(self) -> Iterator[str]:
        """Lazily yield the decoded source one character at a time."""
        self._claim_stream("characters")
        return self._generate_chars()

    def _generate_chars(self) -> Iterator[str]:
        for text in self._read_text():
            yield from text

    def iter_lines(self) -> Iterator[tuple[str, str]]:
        """Lazily yield ``(content, terminator)`` for each source line.

        ``terminator`` is ``"\\r\\n"``, ``"\\n"`` or ``"\\r"``; it is ``""``
        only for a final line that has no terminator. An empty source yields
        nothing.
        """
        self._claim_stream("lines")
        return self._generate_lines()

    def _generate_lines(self) -> Iterator[tuple[str, str]]:
        # Pieces of the current partial line; joined once its terminator is seen.
        pending: list[str] = []
        pending_cr = False
        for text in self._read_text():
            pos = 0
            if pending_cr:
                # The previous block ended with CR; it pairs with a leading LF.
                pending_cr = False
                if text.startswith("\n"):
                    yield "".join(pending), "\r\n"
                    pos = 1
                else:
                    yield "".join(pending), "\r"
                pending = []
            size = len(text)
            for match in _TERMINATOR_RE.finditer(text, pos):
                pending.append(text[pos : match.start()])
                terminator = match.group()
                if terminator == "\r" and match.end() == size:
                    pending_cr = True
                    pos = size
                    break
                yield "".join(pending), terminator
                pending = []
                pos = match.end()
            if pos < size:
                pending.append(text[pos:])

        if pending_cr:
            yield "".join(pending), "\r"
            return
        tail = "".join(pending)
        if tail:
            yield tail, ""
