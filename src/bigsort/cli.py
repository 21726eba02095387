"""
Command-line front end: generate distinct values, presence-sort them, report.

Usage:
    bigsort                          # prompts for array size and max value
    bigsort --size 20 --max 100 --seed 7
    python -m bigsort --size 10 --max 5   # exits 1: range too small

Prints the unsorted input, the sorted output, and a metrics table
(original size, presence-vector size, result size, elapsed ms).
Exit status: 0 on success, 1 on a domain error, 2 on bad arguments.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional, Sequence

import numpy as np
from rich.console import Console
from rich.logging import RichHandler
from rich.prompt import IntPrompt
from rich.table import Table

from bigsort.algorithms.presence_sort import PresenceSortEngine, SortResult
from bigsort.datasets import generate_distinct
from bigsort.errors import BigSortError


def _positive_int(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {text!r}") from None
    if value < 1:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value}")
    return value


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="bigsort",
        description="Sort random distinct integers in [1, MAX] with a presence vector.",
    )
    p.add_argument("--size", type=_positive_int, help="Array size N (prompted if omitted)")
    p.add_argument("--max", type=_positive_int, dest="max_value",
                   help="Max element value M, M >= N (prompted if omitted)")
    p.add_argument("--seed", type=int, default=None, help="Seed for reproducible input")
    p.add_argument("--strict", action="store_true",
                   help="Fail on duplicate values instead of collapsing them")
    p.add_argument("--no-arrays", action="store_true",
                   help="Print only the metrics, not the sequences")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return p


def _prompt_positive(console: Console, label: str) -> int:
    while True:
        value = IntPrompt.ask(label, console=console)
        if value >= 1:
            return value
        console.print("[prompt.invalid]Please enter a positive integer")


def _format_values(values: List[int]) -> str:
    return " ".join(map(str, values))


def render_result(console: Console, original: List[int], result: SortResult,
                  show_arrays: bool = True) -> None:
    if show_arrays:
        console.print(f"[bold]Original Array:[/bold] {_format_values(original)}")
        console.print(f"[bold]Compact Sorted Array:[/bold] {_format_values(result.values)}")

    table = Table(title="Presence sort")
    table.add_column("Metric", style="bold")
    table.add_column("Value", justify="right")
    table.add_row("Original array size", str(result.original_size))
    table.add_row("Presence vector size", str(result.presence_vector_size))
    table.add_row("Sorted array size", str(result.result_size))
    table.add_row("Time taken to sort", f"{result.elapsed_ms:.3f} ms")
    console.print(table)


def run(size: int, max_value: int, *, seed: Optional[int] = None, strict: bool = False,
        show_arrays: bool = True, console: Optional[Console] = None) -> SortResult:
    """Generate `size` distinct values from [1, max_value], sort them, and print the report."""
    console = console or Console()
    rng = np.random.default_rng(seed)
    original = generate_distinct(size, 1, max_value, rng)
    result = PresenceSortEngine(strict=strict).sort(original)
    render_result(console, original, result, show_arrays=show_arrays)
    return result


def main(argv: Optional[Sequence[str]] = None, console: Optional[Console] = None) -> int:
    args = build_parser().parse_args(argv)
    console = console or Console()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )

    size = args.size if args.size is not None else _prompt_positive(console, "Enter array size")
    max_value = (
        args.max_value
        if args.max_value is not None
        else _prompt_positive(console, "Enter max element value")
    )

    try:
        run(size, max_value, seed=args.seed, strict=args.strict,
            show_arrays=not args.no_arrays, console=console)
    except BigSortError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
