"""Example: copy a file, uppercasing it, and report statistics.

The ``process_file`` function is intentionally small so it's easy to test.
"""

from __future__ import annotations

from pathlib import Path

from splurge_safe_copy import RunStatistics, TransformConfig, copy_text_file


def process_file(src: Path | str, dst: Path | str, *, granularity: str = "line") -> RunStatistics:
    """Uppercase ``src`` into ``dst`` and return the run statistics."""
    config = TransformConfig(granularity=granularity, transform="uppercase", count_words=True, count_vowels=True)
    return copy_text_file(src, dst, config)


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Uppercase copy example")
    parser.add_argument("src", help="Source text file")
    parser.add_argument("dst", help="Destination file")
    parser.add_argument("--granularity", choices=["byte", "character", "line"], default="line")
    args = parser.parse_args()
    stats = process_file(args.src, args.dst, granularity=args.granularity)
    print(f"wrote {stats.units} units to {args.dst}: {stats.as_dict()}")
