"""CLI for compiling .nox menu layouts into engine UI markup."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Iterable

from noxml import CompileError, NoxCompiler

SOURCE_SUFFIX = ".nox"
OUTPUT_SUFFIX = ".xml"


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Compile .nox layout files into engine UI markup.")
    parser.add_argument(
        "input",
        nargs="?",
        default=".",
        help="Path to a .nox file or a directory containing .nox files (defaults to the current directory).",
    )
    parser.add_argument(
        "-o",
        "--output-dir",
        default=None,
        help="Directory where compiled files should be written (defaults to beside each source).",
    )
    parser.add_argument(
        "--indent",
        default="\t",
        help="Indentation characters to use in the output (default: tab).",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log each compilation stage to stderr.",
    )
    return parser.parse_args(argv)


def collect_inputs(path: Path) -> list[Path]:
    if path.is_dir():
        files = sorted(p for p in path.glob(f"*{SOURCE_SUFFIX}") if p.is_file())
        if not files:
            raise FileNotFoundError(f"No {SOURCE_SUFFIX} files found in directory: {path}")
        return files
    if path.is_file():
        return [path]
    raise FileNotFoundError(f"Input path does not exist: {path}")


def generate(files: Iterable[Path], output_dir: Path | None, indent: str, verbose: bool = False) -> int:
    compiler = NoxCompiler({"indent": indent, "enable_logger": verbose})
    failures = 0
    for source in files:
        text = source.read_text(encoding="utf-8")
        try:
            compiled = compiler.compile(text)
        except CompileError as exc:
            print(f"{source}: {exc}", file=sys.stderr)
            failures += 1
            continue
        directory = output_dir or source.parent
        directory.mkdir(parents=True, exist_ok=True)
        destination = directory / source.with_suffix(OUTPUT_SUFFIX).name
        destination.write_text(compiled, encoding="utf-8")
        try:
            display_path = destination.relative_to(Path.cwd())
        except ValueError:
            display_path = destination
        print(f"Wrote {display_path}")
    return failures


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    files = collect_inputs(Path(args.input))
    output_dir = Path(args.output_dir) if args.output_dir else None
    failures = generate(files, output_dir, indent=args.indent, verbose=args.verbose)
    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
