"""Per-candidate include/skip decisions."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from pathlib import Path

from fjoin.file_selection.binary import is_binary_file
from fjoin.file_selection.ignore_rules import IgnoreRuleStore
from fjoin.file_selection.overrides import IncludeOverrideSet
from fjoin.file_selection.report import SelectionReport
from fjoin.file_selection.types import Candidate, Decision, SelectionOutcome

BinaryCheck = Callable[[Path], bool]


def decide(
    candidate: Candidate,
    store: IgnoreRuleStore,
    overrides: IncludeOverrideSet,
    is_binary: BinaryCheck = is_binary_file,
) -> Decision:
    """
    Decide what to do with one candidate. Checks run in this order: directory,
    binary content, ignore rules, include overrides. Only an ignored, non-overridden
    file carries an attributed pattern (which may still be `None`).
    """
    if candidate.path.is_dir():
        return Decision(SelectionOutcome.SKIPPED_DIRECTORY)
    if is_binary(candidate.path):
        return Decision(SelectionOutcome.SKIPPED_BINARY)
    if not store.is_ignored(candidate.rel_path):
        return Decision(SelectionOutcome.INCLUDED)
    if overrides.contains(candidate.path):
        return Decision(SelectionOutcome.FORCE_INCLUDED)
    return Decision(SelectionOutcome.SKIPPED_IGNORED, store.attribute_pattern(candidate.rel_path))


def select_files(
    candidates: Iterable[Candidate],
    store: IgnoreRuleStore,
    overrides: IncludeOverrideSet,
    report: SelectionReport,
    is_binary: BinaryCheck = is_binary_file,
) -> list[Candidate]:
    """Run `decide` over candidates in order, record every decision, return the accepted ones."""
    accepted: list[Candidate] = []
    for candidate in candidates:
        decision = decide(candidate, store, overrides, is_binary)
        report.record(candidate, decision)
        if decision.outcome.accepted:
            accepted.append(candidate)
    return accepted
