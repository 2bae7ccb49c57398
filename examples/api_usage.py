"""Usage examples for splurge-safe-copy.

This script walks through the common workflows:

- Copying with identity and uppercase transforms at each granularity
- Collecting word and vowel statistics
- Appending instead of truncating
- Inspecting mapped exceptions and the ``original_exception`` attribute

It configures logging the way an application embedding the library would;
the library itself only attaches a ``NullHandler``.
"""

from __future__ import annotations

import logging
import tempfile
from pathlib import Path

from splurge_safe_copy import (
    Granularity,
    SplurgeSafeCopyError,
    SplurgeSafeCopyFileNotFoundError,
    TextCopyTransform,
    TransformConfig,
    TransformKind,
    copy_text_file,
)

SAMPLE = "Hello, Java I/O! This is a test file.\nSecond line\r\nthird line without newline"


def demo_granularities(tmp_dir: Path) -> None:
    print("\n== Granularity demo ==")
    src = tmp_dir / "input.txt"
    src.write_text(SAMPLE, encoding="utf-8", newline="")

    for granularity in Granularity:
        dest = tmp_dir / f"output-{granularity.value}.txt"
        stats = copy_text_file(src, dest, granularity=granularity)
        print(f"{granularity.value:>9}: {stats.as_dict()} -> {dest.read_bytes()!r}")


def demo_uppercase_with_counters(tmp_dir: Path) -> None:
    print("\n== Uppercase + counters demo ==")
    src = tmp_dir / "input.txt"
    dest = tmp_dir / "output.txt"
    config = TransformConfig(
        granularity=Granularity.CHARACTER,
        transform=TransformKind.UPPERCASE,
        count_words=True,
        count_vowels=True,
    )
    stats = TextCopyTransform(config).copy(src, dest)
    print(dest.read_text(encoding="utf-8"))
    print("words:", stats.words, "vowels:", stats.vowels, "characters:", stats.characters)


def demo_append(tmp_dir: Path) -> None:
    print("\n== Append demo ==")
    src = tmp_dir / "input.txt"
    dest = tmp_dir / "log.txt"
    for _ in range(2):
        copy_text_file(src, dest, granularity="line", append_mode=True)
    print("lines in appended file:", dest.read_text(encoding="utf-8").count("\n"))


def demo_error_inspection(tmp_dir: Path) -> None:
    print("\n== Error inspection demo ==")
    missing = tmp_dir / "does-not-exist.txt"
    dest = tmp_dir / "untouched.txt"
    try:
        copy_text_file(missing, dest)
    except SplurgeSafeCopyFileNotFoundError as err:
        print("error_code:", err.error_code)
        print("message:", err.message)
        print("details:", err.details)
        print("destination created:", dest.exists())
    except SplurgeSafeCopyError as err:
        print("Other splurge-safe-copy error:", err)


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s [%(name)s] %(message)s")
    with tempfile.TemporaryDirectory() as td:
        tmp_dir = Path(td)
        print("Working directory:", tmp_dir)
        demo_granularities(tmp_dir)
        demo_uppercase_with_counters(tmp_dir)
        demo_append(tmp_dir)
        demo_error_inspection(tmp_dir)


if __name__ == "__main__":
    main()
