"""Include overrides: files that must be processed even when ignore rules match them."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from pathlib import Path

from fjoin.file_selection.resolver import expand_glob, is_glob
from fjoin.file_selection.types import Candidate


class IncludeOverrideSet:
    """A set of lexically normalized absolute file paths exempt from ignore rules."""

    def __init__(self, paths: Iterable[Path] = ()) -> None:
        self._paths: frozenset[Path] = frozenset(paths)

    @classmethod
    def resolve(cls, patterns: Sequence[str], root: Path | None = None) -> IncludeOverrideSet:
        """
        Expand each pattern against the filesystem (files only) and union the results.
        A pattern that matches nothing is fine.
        """
        root = root if root is not None else Path.cwd()
        paths: set[Path] = set()
        for pattern in patterns:
            if is_glob(pattern):
                matches: Iterable[Path] = expand_glob(pattern, root)
            else:
                literal = root / pattern
                matches = [literal] if literal.is_file() else []
            for match in matches:
                paths.add(Candidate.from_path(match, root).path)
        return cls(paths)

    def contains(self, path: Path) -> bool:
        return path in self._paths

    def __contains__(self, path: object) -> bool:
        return isinstance(path, Path) and self.contains(path)

    def __iter__(self) -> Iterator[Path]:
        return iter(sorted(self._paths))

    def __len__(self) -> int:
        return len(self._paths)
