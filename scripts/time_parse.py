#!/usr/bin/env python3
"""Quick perf benchmark for grammar compilation and parsing."""

from __future__ import annotations

import argparse
import cProfile
import io
import pstats
import statistics
import time

from tqdm import tqdm

from branchpy.compiler import compile_grammar
from branchpy.grammar import parse_grammar
from branchpy.lexer import tokenize
from branchpy.runtime import Interpreter

DEFAULT_GRAMMAR = (
    "{select {# {} {from {# {} {where {# {}}}}}}}"
    " {order {by {# {} {ascending} {descending}}}}"
    " {limit {#}}"
)
DEFAULT_STATEMENT = "select a, b + 1 from t where a > 2 and b < 3 order by a descending limit 10"


def _run_once(
    grammar_text: str,
    tokens: list,
    *,
    iterations: int,
    label: str,
    show_progress: bool,
) -> tuple[float, float, int]:
    start = time.perf_counter()
    table = compile_grammar(parse_grammar(grammar_text))
    compile_duration = time.perf_counter() - start

    interpreter = Interpreter(table)
    total_groups = 0
    iterator = tqdm(range(iterations), desc=label, unit="parse") if show_progress else range(iterations)
    start = time.perf_counter()
    for _ in iterator:
        total_groups += len(interpreter.run(tokens))
    parse_duration = time.perf_counter() - start
    return compile_duration, parse_duration, total_groups


def main() -> int:
    parser = argparse.ArgumentParser(description="Benchmark grammar compilation and parsing throughput")
    parser.add_argument("--grammar", default=DEFAULT_GRAMMAR, help="Grammar in bracketed notation")
    parser.add_argument("--statement", default=DEFAULT_STATEMENT, help="Input statement to parse")
    parser.add_argument("--repeat", type=int, default=50, help="Statements concatenated per input")
    parser.add_argument("--iterations", type=int, default=200, help="Parses per run")
    parser.add_argument("--runs", type=int, default=5, help="Measured runs")
    parser.add_argument("--warmups", type=int, default=1, help="Warmup runs")
    parser.add_argument(
        "--no-progress",
        action="store_true",
        help="Disable tqdm progress bars (useful for pure timing)",
    )
    parser.add_argument("--profile", action="store_true", help="Run cProfile and print top hotspots")
    parser.add_argument("--profile-top", type=int, default=30, help="Number of cProfile rows to print")
    parser.add_argument(
        "--profile-sort",
        type=str,
        default="tottime",
        help="cProfile sort key (default: tottime, common: cumulative)",
    )
    args = parser.parse_args()

    tokens = tokenize(" ".join([args.statement] * max(args.repeat, 1)))
    show_progress = not args.no_progress

    def _benchmark() -> tuple[list[float], list[float], int]:
        for warmup_idx in range(max(args.warmups, 0)):
            _run_once(
                args.grammar,
                tokens,
                iterations=args.iterations,
                label=f"warmup {warmup_idx + 1}/{max(args.warmups, 0)}",
                show_progress=show_progress,
            )

        compile_timings: list[float] = []
        parse_timings: list[float] = []
        groups = 0
        for run_idx in range(max(args.runs, 1)):
            compile_duration, parse_duration, groups = _run_once(
                args.grammar,
                tokens,
                iterations=args.iterations,
                label=f"run {run_idx + 1}/{max(args.runs, 1)}",
                show_progress=show_progress,
            )
            compile_timings.append(compile_duration)
            parse_timings.append(parse_duration)
        return compile_timings, parse_timings, groups

    if args.profile:
        profiler = cProfile.Profile()
        profiler.enable()
        compile_timings, parse_timings, groups = _benchmark()
        profiler.disable()
        stream = io.StringIO()
        stats = pstats.Stats(profiler, stream=stream)
        stats.sort_stats(args.profile_sort).print_stats(max(args.profile_top, 1))
        print("\n[cProfile top functions]")
        print(stream.getvalue())
    else:
        compile_timings, parse_timings, groups = _benchmark()

    mean = statistics.mean(parse_timings)
    print(f"Tokens per input: {len(tokens)}")
    print(f"Groups (last run): {groups}")
    print(f"Runs: {len(parse_timings)} (warmups={max(args.warmups, 0)})")
    print(f"Compile (median): {statistics.median(compile_timings) * 1000:.3f}ms")
    print(f"Parse best:   {min(parse_timings):.4f}s")
    print(f"Parse median: {statistics.median(parse_timings):.4f}s")
    print(f"Parse mean:   {mean:.4f}s")
    print(f"Parse worst:  {max(parse_timings):.4f}s")
    print(f"Tokens/s (mean): {len(tokens) * args.iterations / mean:.1f}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
