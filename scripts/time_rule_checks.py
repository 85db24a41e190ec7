#!/usr/bin/env python3
"""Quick perf benchmark for rule text checking."""

from __future__ import annotations

import argparse
import cProfile
import io
from pathlib import Path
import pstats
import statistics
import time

from tqdm import tqdm

from pricerulepy.model import Definition, Variable, VariableType, default_definition
from pricerulepy.pipeline import check_rule_text

SAMPLE_RULES: tuple[str, ...] = (
    "IF booking_hours >= 4 THEN booking_hours*10 ELSE booking_hours*8",
    "IF booking_hours > 2 AND guests <= 10 THEN booking_hours * 12 + guests * 2",
    "IF NOT city = 'Manila' OR guests > 20 THEN booking_hours * 15",
    "IF start_date >= date('2024-12-20') AND start_date <= date('2025-01-05') THEN booking_hours * 20",
    "IF start_time >= time('6:00', 'PM') THEN booking_hours * 11 ELSE booking_hours * 9",
    "IF booking_hours > 10 AND booking_hours < 5 THEN 0",
    "IF guests > (booking_hours + 2) * 3 THEN guests * 4 OR IF guests > 1 THEN guests * 3",
    "booking_hours * 10 / 0",
)


def _benchmark_definition() -> Definition:
    definition = default_definition()
    extra = (
        Variable(key="guests", label="Guests", type=VariableType.NUMBER, user_input=True),
        Variable(key="city", label="City", type=VariableType.TEXT),
        Variable(key="start_date", label="Start date", type=VariableType.DATE),
        Variable(key="start_time", label="Start time", type=VariableType.TIME),
    )
    return Definition(variables=(*definition.variables, *extra))


def _load_rules(path: Path | None) -> list[str]:
    if path is None:
        return list(SAMPLE_RULES)
    return [line.strip() for line in path.read_text(encoding="utf-8").splitlines() if line.strip()]


def _run_once(
    rules: list[str],
    definition: Definition,
    *,
    repeat: int,
    label: str,
    show_progress: bool,
) -> tuple[float, int, int]:
    start = time.perf_counter()
    checked = 0
    rejected = 0
    batch = rules * repeat
    iterator = tqdm(batch, desc=label, unit="rule") if show_progress else batch
    for text in iterator:
        result = check_rule_text(text, definition)
        checked += 1
        if result.has_errors:
            rejected += 1
    duration = time.perf_counter() - start
    return duration, checked, rejected


def main() -> int:
    parser = argparse.ArgumentParser(description="Benchmark rule text checking throughput")
    parser.add_argument(
        "--rules",
        type=Path,
        default=None,
        help="File with one rule text per line (default: built-in samples)",
    )
    parser.add_argument("--repeat", type=int, default=200, help="Times each rule is checked per run")
    parser.add_argument("--runs", type=int, default=5, help="Measured runs")
    parser.add_argument("--warmups", type=int, default=1, help="Warmup runs")
    parser.add_argument(
        "--no-progress",
        action="store_true",
        help="Disable tqdm progress bars (useful for pure timing)",
    )
    parser.add_argument(
        "--profile",
        action="store_true",
        help="Run cProfile and print top hotspots",
    )
    parser.add_argument(
        "--profile-top",
        type=int,
        default=30,
        help="Number of cProfile rows to print (default: 30)",
    )
    args = parser.parse_args()

    if args.rules is not None and not args.rules.is_file():
        raise SystemExit(f"Invalid --rules: {args.rules}")
    rules = _load_rules(args.rules)
    if not rules:
        raise SystemExit("No rule texts to check")

    definition = _benchmark_definition()
    show_progress = not args.no_progress
    repeat = max(args.repeat, 1)

    def _benchmark() -> tuple[list[float], int, int]:
        for warmup_idx in range(max(args.warmups, 0)):
            _run_once(
                rules,
                definition,
                repeat=repeat,
                label=f"warmup {warmup_idx + 1}/{max(args.warmups, 0)}",
                show_progress=show_progress,
            )

        timings: list[float] = []
        checked = 0
        rejected = 0
        for run_idx in range(max(args.runs, 1)):
            duration, checked, rejected = _run_once(
                rules,
                definition,
                repeat=repeat,
                label=f"run {run_idx + 1}/{max(args.runs, 1)}",
                show_progress=show_progress,
            )
            timings.append(duration)
        return timings, checked, rejected

    if args.profile:
        profiler = cProfile.Profile()
        profiler.enable()
        timings, checked, rejected = _benchmark()
        profiler.disable()
        stream = io.StringIO()
        stats = pstats.Stats(profiler, stream=stream)
        stats.sort_stats("tottime").print_stats(max(args.profile_top, 1))
        print("\n[cProfile top functions]")
        print(stream.getvalue())
    else:
        timings, checked, rejected = _benchmark()

    mean = statistics.mean(timings)
    print(f"Rules: {len(rules)} x {repeat}")
    print(f"Checked per run: {checked} ({rejected} rejected)")
    print(f"Runs: {len(timings)} (warmups={max(args.warmups, 0)})")
    print(f"Best:   {min(timings):.4f}s")
    print(f"Median: {statistics.median(timings):.4f}s")
    print(f"Mean:   {mean:.4f}s")
    print(f"Worst:  {max(timings):.4f}s")
    print(f"Rules/s (mean): {checked / mean:.1f}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
