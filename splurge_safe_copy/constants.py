"""Shared defaults for splurge-safe-copy."""

# Terminator written after each line in line granularity unless configured otherwise.
CANONICAL_NEWLINE = "\n"

SUPPORTED_LINE_TERMINATORS = ("\n", "\r\n", "\r")

DEFAULT_ENCODING = "utf-8"

# Raw read size in bytes.
DEFAULT_BUFFER_SIZE = 32768
MIN_BUFFER_SIZE = 16

VOWELS = frozenset("aeiou")
ASCII_VOWEL_BYTES = frozenset(b"aeiou")
ASCII_WHITESPACE_BYTES = frozenset(b" \t\n\r\x0b\x0c")

NEWLINE_CHAR = "\n"
NEWLINE_BYTE = b"\n"
