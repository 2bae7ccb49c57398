"""Read a source file unit by unit, transform each unit, and write the result.

``TextCopyTransform.copy`` is a single linear pass:

1. validate the source (missing/unreadable sources fail before the
   destination is touched)
2. open the source, then the destination
3. stream units at the configured granularity, transform and write them,
   feeding a ``StatisticsCollector``
4. release both handles on every exit path and return ``RunStatistics``

No rollback is attempted: a failure mid-stream can leave the destination
partially written.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from .exceptions import (
    SplurgeSafeCopyError,
    SplurgeSafeCopyParameterError,
    SplurgeSafeCopyPathValidationError,
    map_os_error,
)
from .path_validator import PathValidator
from .run_statistics import RunStatistics, StatisticsCollector
from .safe_destination_writer import SafeDestinationWriter
from .safe_source_reader import SafeSourceReader
from .transform_config import Granularity, TransformConfig

logger = logging.getLogger(__name__)


class TextCopyTransform:
    """Strategy-configured copy pipeline.

    Args:
        config: Default configuration; ``copy`` may override it per call.
    """

    def __init__(self, config: TransformConfig | None = None) -> None:
        self._config = config if config is not None else TransformConfig()

    @property
    def config(self) -> TransformConfig:
        return self._config

    def copy(
        self,
        source_path: str | Path,
        dest_path: str | Path,
        config: TransformConfig | None = None,
    ) -> RunStatistics:
        """Copy ``source_path`` to ``dest_path`` applying the configured transform.

        Returns:
            The final ``RunStatistics`` for the run.

        Raises:
            SplurgeSafeCopyFileNotFoundError: The source does not exist.
            SplurgeSafeCopyPermissionError: Either file cannot be accessed.
            SplurgeSafeCopyOSError: Any other read, write or close failure.
            SplurgeSafeCopyPathValidationError: Malformed paths, or the
                destination is the source itself.
        """
        cfg = config if config is not None else self._config
        logger.debug("copy %s -> %s with %s", source_path, dest_path, cfg.as_dict())

        resolved_source = PathValidator.get_validated_path(
            source_path, must_exist=True, must_be_file=True, must_be_readable=True
        )
        resolved_dest = PathValidator.get_validated_path(dest_path)
        if PathValidator.is_same_file(resolved_source, resolved_dest):
            raise SplurgeSafeCopyPathValidationError(
                "same-file",
                f"Destination {resolved_dest} is the source file",
                {"source": str(resolved_source), "destination": str(resolved_dest)},
            )

        collector = StatisticsCollector(count_words=cfg.count_words, count_vowels=cfg.count_vowels)
        reader = SafeSourceReader(
            resolved_source, encoding=cfg.encoding, buffer_size=cfg.buffer_size, prevalidated=True
        )
        writer: SafeDestinationWriter | None = None
        pending: BaseException | None = None
        try:
            writer = SafeDestinationWriter(
                resolved_dest,
                file_write_mode=cfg.write_mode,
                binary=cfg.granularity is Granularity.BYTE,
                encoding=cfg.encoding,
                create_parents=cfg.create_parents,
                prevalidated=True,
            )
            self._pump(reader, writer, collector, cfg)
            writer.flush()
        except BaseException as exc:
            pending = exc
            raise
        finally:
            _release([writer, reader], pending)

        stats = collector.finish()
        logger.info("copied %s -> %s: %s", resolved_source, resolved_dest, stats.as_dict())
        return stats

    @staticmethod
    def _pump(
        reader: SafeSourceReader,
        writer: SafeDestinationWriter,
        collector: StatisticsCollector,
        cfg: TransformConfig,
    ) -> None:
        transform = cfg.transform
        if cfg.granularity is Granularity.BYTE:
            for unit in reader.iter_bytes():
                writer.write(transform.apply(unit))
                collector.add_byte(unit)
        elif cfg.granularity is Granularity.CHARACTER:
            for unit in reader.iter_chars():
                writer.write(transform.apply(unit))
                collector.add_char(unit)
        else:
            terminator = cfg.line_terminator
            for content, _source_terminator in reader.iter_lines():
                writer.write(transform.apply(content) + terminator)
                collector.add_line(content)


def _release(handles: list[Any], pending: BaseException | None) -> None:
    """Close every handle. Never lets a close error hide ``pending``.

    With nothing pending, the first close failure is raised once all handles
    have been closed. Otherwise close failures are logged and recorded on the
    pending error's ``details["close_errors"]``.
    """
    first_error: SplurgeSafeCopyError | None = None
    for handle in handles:
        if handle is None:
            continue
        try:
            handle.close()
        except Exception as exc:
            mapped = map_os_error(exc, action="closing", path=handle.file_path)
            if pending is None:
                if first_error is None:
                    first_error = mapped
                continue
            logger.warning("error closing %s after earlier failure: %s", handle.file_path, mapped)
            if isinstance(pending, SplurgeSafeCopyError):
                pending.details.setdefault("close_errors", []).append(str(mapped))
    if first_error is not None:
        raise first_error from first_error.original_exception


def copy_text_file(
    source_path: str | Path,
    dest_path: str | Path,
    config: TransformConfig | None = None,
    **options: Any,
) -> RunStatistics:
    """Run one copy, building the config from keyword ``options`` if none is given.

    Example:

        stats = copy_text_file("input.txt", "output.txt", transform="uppercase", count_words=True)
    """
    if config is None:
        config = TransformConfig.from_mapping(options)
    elif options:
        raise SplurgeSafeCopyParameterError(
            "conflicting-options", "Pass either config or keyword options, not both", {"options": sorted(options)}
        )
    return TextCopyTransform(config).copy(source_path, dest_path)
