"""Immutable configuration for a copy run."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, fields
from enum import Enum
from typing import Any

from .constants import CANONICAL_NEWLINE, DEFAULT_BUFFER_SIZE, DEFAULT_ENCODING, MIN_BUFFER_SIZE, SUPPORTED_LINE_TERMINATORS
from .exceptions import SplurgeSafeCopyParameterError, validate_encoding
from .safe_destination_writer import DestinationWriteMode


class Granularity(str, Enum):
    BYTE = "byte"
    CHARACTER = "character"
    LINE = "line"


class TransformKind(str, Enum):
    IDENTITY = "identity"
    UPPERCASE = "uppercase"

    def apply(self, unit: str | bytes) -> str | bytes:
        """Apply the transform to one unit.

        ``bytes.upper`` only maps ASCII letters, which is the byte-granularity rule.
        """
        if self is TransformKind.UPPERCASE:
            return unit.upper()
        return unit


_CAMEL_CASE_ALIASES = {
    "countVowels": "count_vowels",
    "countWords": "count_words",
    "appendMode": "append_mode",
    "lineTerminator": "line_terminator",
    "bufferSize": "buffer_size",
    "createParents": "create_parents",
}


def _coerce_enum(enum_cls: type[Enum], value: Any, name: str) -> Any:
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(str(value).lower())
    except ValueError as exc:
        allowed = ", ".join(member.value for member in enum_cls)
        raise SplurgeSafeCopyParameterError(
            f"invalid-{name.replace('_', '-')}",
            f"{name} must be one of: {allowed}; got {value!r}",
            {name: value},
            original_exception=exc,
        ) from exc


@dataclass(frozen=True)
class TransformConfig:
    """Selects granularity, transform and counters for one copy run.

    Strings are accepted for ``granularity`` and ``transform`` and coerced to
    their enums. Invalid values raise ``SplurgeSafeCopyParameterError``; an
    unknown ``encoding`` raises ``SplurgeSafeCopyLookupError``.
    """

    granularity: Granularity = Granularity.CHARACTER
    transform: TransformKind = TransformKind.IDENTITY
    count_vowels: bool = False
    count_words: bool = False
    append_mode: bool = False
    encoding: str = DEFAULT_ENCODING
    line_terminator: str = CANONICAL_NEWLINE
    buffer_size: int = DEFAULT_BUFFER_SIZE
    create_parents: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "granularity", _coerce_enum(Granularity, self.granularity, "granularity"))
        object.__setattr__(self, "transform", _coerce_enum(TransformKind, self.transform, "transform"))
        object.__setattr__(self, "encoding", validate_encoding(self.encoding))

        for flag in ("count_vowels", "count_words", "append_mode", "create_parents"):
            if not isinstance(getattr(self, flag), bool):
                raise SplurgeSafeCopyParameterError(
                    "invalid-flag", f"{flag} must be a bool", {flag: getattr(self, flag)}
                )

        if self.line_terminator not in SUPPORTED_LINE_TERMINATORS:
            raise SplurgeSafeCopyParameterError(
                "invalid-line-terminator",
                f"line_terminator must be one of {SUPPORTED_LINE_TERMINATORS!r}",
                {"line_terminator": self.line_terminator},
            )

        if isinstance(self.buffer_size, bool) or not isinstance(self.buffer_size, int) or self.buffer_size < MIN_BUFFER_SIZE:
            raise SplurgeSafeCopyParameterError(
                "invalid-buffer-size",
                f"buffer_size must be an int >= {MIN_BUFFER_SIZE}",
                {"buffer_size": self.buffer_size},
            )

    @property
    def write_mode(self) -> DestinationWriteMode:
        if self.append_mode:
            return DestinationWriteMode.CREATE_OR_APPEND
        return DestinationWriteMode.CREATE_OR_TRUNCATE

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any]) -> TransformConfig:
        """Build a config from plain options, accepting camelCase keys."""
        known = {f.name for f in fields(cls)}
        kwargs: dict[str, Any] = {}
        for key, value in options.items():
            name = _CAMEL_CASE_ALIASES.get(key, key)
            if name not in known:
                raise SplurgeSafeCopyParameterError(
                    "unknown-option", f"Unknown transform option: {key}", {"option": key}
                )
            kwargs[name] = value
        return cls(**kwargs)

    def as_dict(self) -> dict[str, Any]:
        return {
            "granularity": self.granularity.value,
            "transform": self.transform.value,
            "count_vowels": self.count_vowels,
            "count_words": self.count_words,
            "append_mode": self.append_mode,
            "encoding": self.encoding,
            "line_terminator": self.line_terminator,
            "buffer_size": self.buffer_size,
            "create_parents": self.create_parents,
        }
