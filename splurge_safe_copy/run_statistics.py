"""Counters accumulated during one copy run."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field

from .constants import ASCII_VOWEL_BYTES, ASCII_WHITESPACE_BYTES, NEWLINE_BYTE, NEWLINE_CHAR, VOWELS


@dataclass
class RunStatistics:
    """Monotonic counters for a single run. Never persisted.

    ``units`` counts stream items consumed (bytes, characters or lines).
    ``characters`` equals ``units`` for byte and character granularity and
    sums line lengths (terminators excluded) for line granularity.
    """

    units: int = 0
    characters: int = 0
    lines: int = 0
    words: int = 0
    vowels: int = 0

    def as_dict(self) -> dict[str, int]:
        return asdict(self)


@dataclass
class StatisticsCollector:
    """Feeds units into a ``RunStatistics`` and tracks cross-unit state."""

    count_words: bool = False
    count_vowels: bool = False
    stats: RunStatistics = field(default_factory=RunStatistics)
    _in_whitespace: bool = field(default=True, init=False, repr=False)
    _open_line: bool = field(default=False, init=False, repr=False)

    def _scan_text(self, text: str) -> None:
        for ch in text:
            is_space = ch.isspace()
            if self.count_words and self._in_whitespace and not is_space:
                self.stats.words += 1
            self._in_whitespace = is_space
            if self.count_vowels and ch.lower() in VOWELS:
                self.stats.vowels += 1

    def add_byte(self, unit: bytes) -> None:
        self.stats.units += 1
        self.stats.characters += 1
        value = unit[0]
        is_space = value in ASCII_WHITESPACE_BYTES
        if self.count_words and self._in_whitespace and not is_space:
            self.stats.words += 1
        self._in_whitespace = is_space
        if self.count_vowels and (value | 0x20) in ASCII_VOWEL_BYTES:
            self.stats.vowels += 1
        self._track_newline(unit == NEWLINE_BYTE)

    def add_char(self, unit: str) -> None:
        self.stats.units += 1
        self.stats.characters += 1
        self._scan_text(unit)
        self._track_newline(unit == NEWLINE_CHAR)

    def add_line(self, content: str) -> None:
        self.stats.units += 1
        self.stats.characters += len(content)
        self.stats.lines += 1
        self._scan_text(content)
        self._in_whitespace = True

    def _track_newline(self, is_newline: bool) -> None:
        if is_newline:
            self.stats.lines += 1
            self._open_line = False
        else:
            self._open_line = True

    def finish(self) -> RunStatistics:
        """Close out a trailing unterminated line and return the counters."""
        if self._open_line:
            self.stats.lines += 1
            self._open_line = False
        return self.stats
