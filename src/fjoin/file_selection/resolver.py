"""
FileResolver: expands path and glob arguments into candidate files.

Every argument is treated as a glob; a literal path is a glob that matches
itself. Results are deduplicated by absolute path and kept in first-occurrence
order; argument order is output order.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from pathlib import Path

from fjoin.file_selection.types import Candidate

# Characters that indicate a path is a glob pattern rather than a literal path.
_GLOB_CHARS = frozenset("*?[")


def is_glob(pattern: str) -> bool:
    return any(c in pattern for c in _GLOB_CHARS)


def expand_glob(pattern: str, root: Path) -> Iterable[Path]:
    """
    Expand a glob pattern relative to `root`, yielding files only.

    `**` matches any number of directories, including as the last segment.
    Hidden files and directories below the literal base are skipped unless the
    pattern itself has a segment starting with `.`. Matches within one pattern
    come back sorted so expansion is deterministic across filesystems.
    """
    # Split off the literal leading directories so we glob from there
    parts = Path(pattern).parts
    base = Path(".")
    glob_parts = parts
    for i, part in enumerate(parts):
        if is_glob(part):
            base = Path(*parts[:i]) if i > 0 else Path(".")
            glob_parts = parts[i:]
            break

    # A trailing `**` only yields directories on Python < 3.13
    if glob_parts and glob_parts[-1] == "**":
        glob_parts = (*glob_parts, "*")
    glob_part = str(Path(*glob_parts))
    allow_hidden = any(part.startswith(".") for part in glob_parts)

    if not base.is_absolute():
        base = root / base
    if not base.is_dir():
        return

    for path in sorted(base.glob(glob_part)):
        if not allow_hidden and _is_hidden_below(path, base):
            continue
        if path.is_file():
            yield path


def _is_hidden_below(path: Path, base: Path) -> bool:
    return any(part.startswith(".") for part in path.relative_to(base).parts)


class FileResolver:
    """
    Turns user arguments into an ordered, deduplicated list of `Candidate`s.

    A literal argument naming an existing directory is kept as a candidate, so
    the selection step can report it as skipped. Glob expansion never yields
    directories. Arguments that produce nothing are remembered in `unmatched`.
    """

    def __init__(self, root: Path | None = None) -> None:
        self._root: Path = root if root is not None else Path.cwd()
        self.unmatched: list[str] = []

    @property
    def root(self) -> Path:
        return self._root

    def resolve(self, arguments: Sequence[str]) -> list[Candidate]:
        seen: set[Path] = set()
        result: list[Candidate] = []
        self.unmatched = []

        for argument in arguments:
            found_any = False
            for path in self._expand(argument):
                found_any = True
                candidate = Candidate.from_path(path, self._root)
                if candidate.path not in seen:
                    seen.add(candidate.path)
                    result.append(candidate)
            if not found_any:
                self.unmatched.append(argument)

        return result

    def _expand(self, argument: str) -> Iterable[Path]:
        if is_glob(argument):
            yield from expand_glob(argument, self._root)
            return
        p = Path(argument)
        if not p.is_absolute():
            p = self._root / p
        if p.exists():
            yield p
