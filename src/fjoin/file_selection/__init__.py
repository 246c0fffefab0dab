"""
File selection: turn path/glob arguments and ignore rules into the ordered list
of files to concatenate, with an account of everything skipped.

No imports from `fjoin` outside this package.

Usage::

    from fjoin.file_selection import (
        FileResolver, IgnoreRuleStore, IgnoreSourceSpec, IncludeOverrideSet,
        SelectionReport, SourceKind, select_files,
    )

    store = IgnoreRuleStore.load([IgnoreSourceSpec(SourceKind.REPO, Path(".gitignore"))])
    overrides = IncludeOverrideSet.resolve(["*.log"])
    report = SelectionReport()
    files = select_files(FileResolver().resolve(["src/**/*.py"]), store, overrides, report)
"""

from fjoin.file_selection.binary import is_binary_file
from fjoin.file_selection.ignore_rules import (
    REPO_IGNORE_NAME,
    IgnoreRuleStore,
    IgnoreSourceSpec,
    PatternSource,
    SourceKind,
)
from fjoin.file_selection.overrides import IncludeOverrideSet
from fjoin.file_selection.policy import decide, select_files
from fjoin.file_selection.report import SelectionReport
from fjoin.file_selection.resolver import FileResolver, expand_glob
from fjoin.file_selection.types import Candidate, Decision, SelectionOutcome

__all__ = [
    "REPO_IGNORE_NAME",
    "Candidate",
    "Decision",
    "FileResolver",
    "IgnoreRuleStore",
    "IgnoreSourceSpec",
    "IncludeOverrideSet",
    "PatternSource",
    "SelectionOutcome",
    "SelectionReport",
    "SourceKind",
    "decide",
    "expand_glob",
    "is_binary_file",
    "select_files",
]
