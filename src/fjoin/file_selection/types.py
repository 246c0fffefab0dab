"""Shared types for file selection."""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class SelectionOutcome(Enum):
    """What happened to a candidate file."""

    INCLUDED = "included"
    FORCE_INCLUDED = "force-included"
    SKIPPED_IGNORED = "skipped-ignored"
    SKIPPED_BINARY = "skipped-binary"
    SKIPPED_DIRECTORY = "skipped-directory"

    @property
    def accepted(self) -> bool:
        return self in (SelectionOutcome.INCLUDED, SelectionOutcome.FORCE_INCLUDED)


@dataclass(frozen=True)
class Candidate:
    """
    A path produced by expanding one user argument.

    `path` is absolute and is the deduplication key. `rel_path` is the path relative
    to the working directory, with `/` separators, and is what ignore rules match
    against and what output headers show.
    """

    path: Path
    rel_path: str

    @classmethod
    def from_path(cls, path: Path, root: Path) -> Candidate:
        absolute = path if path.is_absolute() else root / path
        absolute = Path(os.path.normpath(absolute))
        rel = os.path.relpath(absolute, root)
        return cls(path=absolute, rel_path=Path(rel).as_posix())


@dataclass(frozen=True)
class Decision:
    """Outcome for one candidate, plus the ignore pattern credited for a skip."""

    outcome: SelectionOutcome
    pattern: str | None = None
