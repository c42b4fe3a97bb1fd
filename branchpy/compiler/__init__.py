"""Grammar compiler: worklist construction of keyword/capture automata."""

from branchpy.compiler.keyword_filter import Halt, KeywordFilter
from branchpy.compiler.options import CompileMode, CompilerOptions, resolve_options
from branchpy.compiler.rules import (
    Accept,
    Advance,
    CaptureState,
    RuleTable,
    State,
    Transition,
    WordState,
)
from branchpy.compiler.tags import ROOT_TAG, Step, Tag
from branchpy.compiler.worklist import WorkItem, WorklistCompiler, compile_grammar

__all__ = [
    "ROOT_TAG",
    "Accept",
    "Advance",
    "CaptureState",
    "CompileMode",
    "CompilerOptions",
    "Halt",
    "KeywordFilter",
    "RuleTable",
    "State",
    "Step",
    "Tag",
    "Transition",
    "WordState",
    "WorkItem",
    "WorklistCompiler",
    "compile_grammar",
    "resolve_options",
]
