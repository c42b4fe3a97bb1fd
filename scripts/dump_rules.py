#!/usr/bin/env python
"""Print the rule table compiled from a grammar, optionally tracing one input."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
import sys

from branchpy.compiler import CompileMode, CompilerOptions, compile_grammar
from branchpy.diagnostics import BranchpyError
from branchpy.grammar import format_grammar, parse_grammar
from branchpy.lexer import Lexer, dump_tokens, tokenize
from branchpy.runtime import Interpreter


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Dump the rule table for a bracketed grammar.")
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--grammar", help="Grammar text, e.g. '{select {# {} {into {# {}}}}}'.")
    source.add_argument("--grammar-file", type=Path, help="File containing grammar text.")
    parser.add_argument("--input", help="Optional input text to run through the compiled table.")
    parser.add_argument(
        "--mode",
        choices=[mode.value for mode in CompileMode],
        default=CompileMode.PERMISSIVE.value,
        help="Sibling conflict handling (default: permissive).",
    )
    parser.add_argument("--no-chaining", action="store_true", help="Disable statement chaining.")
    parser.add_argument("--trace", action="store_true", help="Log every interpreter transition.")
    parser.add_argument("--tokens", action="store_true", help="Also dump the raw lexer output for --input.")
    args = parser.parse_args(argv)

    if args.trace:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    text = args.grammar if args.grammar is not None else args.grammar_file.read_text(encoding="utf-8")
    options = CompilerOptions(mode=CompileMode(args.mode), allow_statement_chaining=not args.no_chaining)

    try:
        spec = parse_grammar(text)
        table = compile_grammar(spec, options)
    except BranchpyError as exc:
        print(exc.diagnostic, file=sys.stderr)
        return 1

    print(format_grammar(spec))
    print(f"\n{len(table)} states, statement keywords: {sorted(map(str, table.keyword_filter.keywords))}\n")
    print(table.describe())
    for diagnostic in table.diagnostics:
        print(f"- {diagnostic}")

    if args.input is not None:
        if args.tokens:
            lexer = Lexer(args.input)
            print("\nTokens:")
            dump_tokens(lexer.lex(), lexer.diagnostics)
        try:
            archive = Interpreter(table).run(tokenize(args.input))
        except BranchpyError as exc:
            print(exc.diagnostic, file=sys.stderr)
            return 1
        print("\nArchive:")
        for idx, group in enumerate(archive):
            print(f"[{idx}] {' '.join(str(token) for token in group)}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
