"""splurge-safe-copy: a scoped, strategy-configured text copy pipeline.

Public API:

- ``TextCopyTransform`` / ``copy_text_file``: run a copy and get ``RunStatistics``
- ``TransformConfig``, ``Granularity``, ``TransformKind``: run configuration
- ``SafeSourceReader`` / ``SafeDestinationWriter``: the scoped file handles
- ``PathValidator``: path checks applied before anything is opened
- the ``SplurgeSafeCopy*Error`` hierarchy
"""

import logging

from .exceptions import (
    SplurgeSafeCopyError,
    SplurgeSafeCopyFileDecodingError,
    SplurgeSafeCopyFileEncodingError,
    SplurgeSafeCopyFileExistsError,
    SplurgeSafeCopyFileNotFoundError,
    SplurgeSafeCopyLookupError,
    SplurgeSafeCopyOSError,
    SplurgeSafeCopyParameterError,
    SplurgeSafeCopyPathValidationError,
    SplurgeSafeCopyPermissionError,
    SplurgeSafeCopyRuntimeError,
    SplurgeSafeCopyValueError,
)
from .path_validator import PathValidator
from .run_statistics import RunStatistics
from .safe_destination_writer import DestinationWriteMode, SafeDestinationWriter
from .safe_source_reader import SafeSourceReader
from .text_copy_transform import TextCopyTransform, copy_text_file
from .transform_config import Granularity, TransformConfig, TransformKind

__version__ = "2026.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "DestinationWriteMode",
    "Granularity",
    "PathValidator",
    "RunStatistics",
    "SafeDestinationWriter",
    "SafeSourceReader",
    "SplurgeSafeCopyError",
    "SplurgeSafeCopyFileDecodingError",
    "SplurgeSafeCopyFileEncodingError",
    "SplurgeSafeCopyFileExistsError",
    "SplurgeSafeCopyFileNotFoundError",
    "SplurgeSafeCopyLookupError",
    "SplurgeSafeCopyOSError",
    "SplurgeSafeCopyParameterError",
    "SplurgeSafeCopyPathValidationError",
    "SplurgeSafeCopyPermissionError",
    "SplurgeSafeCopyRuntimeError",
    "SplurgeSafeCopyValueError",
    "TextCopyTransform",
    "TransformConfig",
    "TransformKind",
    "copy_text_file",
]
