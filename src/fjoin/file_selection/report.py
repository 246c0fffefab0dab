"""Accumulates selection outcomes for the end-of-run summary."""

from __future__ import annotations

from dataclasses import dataclass, field

from fjoin.file_selection.types import Candidate, Decision, SelectionOutcome


@dataclass
class SelectionReport:
    """
    Per-outcome path lists, plus a ledger of how many files each ignore pattern
    skipped. Skips with no attributable pattern are counted in `unattributed`.

    `read_errors` is filled in later, by whatever reads the accepted files.
    """

    outcomes: dict[SelectionOutcome, list[str]] = field(
        default_factory=lambda: {outcome: [] for outcome in SelectionOutcome}
    )
    pattern_counts: dict[str, int] = field(default_factory=dict)
    unattributed: int = 0
    read_errors: list[tuple[str, str]] = field(default_factory=list)

    def record(self, candidate: Candidate, decision: Decision) -> None:
        self.outcomes[decision.outcome].append(candidate.rel_path)
        if decision.outcome is SelectionOutcome.SKIPPED_IGNORED:
            if decision.pattern is None:
                self.unattributed += 1
            else:
                self.pattern_counts[decision.pattern] = (
                    self.pattern_counts.get(decision.pattern, 0) + 1
                )

    def record_read_error(self, rel_path: str, message: str) -> None:
        self.read_errors.append((rel_path, message))

    def count(self, outcome: SelectionOutcome) -> int:
        return len(self.outcomes[outcome])

    @property
    def total(self) -> int:
        return sum(len(paths) for paths in self.outcomes.values())

    @property
    def included(self) -> list[str]:
        return self.outcomes[SelectionOutcome.INCLUDED]

    @property
    def force_included(self) -> list[str]:
        return self.outcomes[SelectionOutcome.FORCE_INCLUDED]

    @property
    def skipped_ignored(self) -> list[str]:
        return self.outcomes[SelectionOutcome.SKIPPED_IGNORED]

    @property
    def skipped_binary(self) -> list[str]:
        return self.outcomes[SelectionOutcome.SKIPPED_BINARY]

    @property
    def skipped_directory(self) -> list[str]:
        return self.outcomes[SelectionOutcome.SKIPPED_DIRECTORY]
