"""Ignore-rule loading and matching using pathspec."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import NamedTuple

import pathspec

REPO_IGNORE_NAME = ".gitignore"


class SourceKind(Enum):
    REPO = "repo"
    CUSTOM = "custom"


class IgnoreSourceSpec(NamedTuple):
    """Where to load ignore patterns from, and whether the file is required."""

    kind: SourceKind
    location: Path


@dataclass(frozen=True)
class PatternSource:
    """Raw patterns from one ignore file, in file order, comments and blanks removed."""

    kind: SourceKind
    location: Path
    patterns: tuple[str, ...]


@dataclass(frozen=True)
class _CompiledPattern:
    source: PatternSource
    pattern: str
    spec: pathspec.PathSpec


def parse_ignore_lines(text: str) -> list[str]:
    """Split ignore file text into patterns, dropping blank lines and `#` comments."""
    lines = [line.strip() for line in text.splitlines()]
    return [line for line in lines if line and not line.startswith("#")]


def _read_ignore_file(path: Path) -> list[str] | None:
    """
    Read an ignore file into patterns, or `None` if it is missing, unreadable,
    or not valid UTF-8.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return None
    return parse_ignore_lines(text)


def _read_required_ignore_file(path: Path) -> list[str]:
    """Read a user-named ignore file. Any failure here is the caller's problem."""
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise FileNotFoundError(f"Ignore file not found: {path}") from e
    except IsADirectoryError as e:
        raise FileNotFoundError(f"Ignore file is a directory: {path}") from e
    except OSError as e:
        raise OSError(f"Could not read ignore file {path}: {e.strerror or e}") from e
    except UnicodeDecodeError as e:
        raise ValueError(f"Ignore file is not valid UTF-8: {path}") from e
    return parse_ignore_lines(text)


class IgnoreRuleStore:
    """
    Ignore patterns from any number of sources, combined as a union.

    Each source is compiled once into a gitignore-style `PathSpec`. A path is
    ignored if any source's spec matches it; a later source cannot re-include
    what an earlier one excluded.

    Every pattern is also kept as its own single-pattern spec, in load order, so
    that a skip can be credited to the first pattern that matches on its own.
    """

    def __init__(self, sources: Sequence[PatternSource] = ()) -> None:
        self._sources: list[PatternSource] = list(sources)
        self._specs: list[pathspec.PathSpec] = []
        self._compiled: list[_CompiledPattern] = []
        for source in self._sources:
            spec = pathspec.PathSpec.from_lines("gitignore", source.patterns)
            self._specs.append(spec)
            # Blank lines and comments are already gone, so patterns line up 1:1.
            for raw, compiled in zip(source.patterns, spec.patterns):
                self._compiled.append(
                    _CompiledPattern(source, raw, pathspec.PathSpec([compiled]))
                )

    @classmethod
    def load(cls, sources: Sequence[IgnoreSourceSpec]) -> IgnoreRuleStore:
        """
        Read and compile each source in order.

        A missing repository ignore file yields an empty source. A custom ignore
        file must exist and be readable: `FileNotFoundError`, `OSError`, or
        `ValueError` (for undecodable content) is raised otherwise.
        """
        loaded: list[PatternSource] = []
        for kind, location in sources:
            if kind is SourceKind.REPO:
                patterns = _read_ignore_file(location) or []
            else:
                patterns = _read_required_ignore_file(location)
            loaded.append(PatternSource(kind, location, tuple(patterns)))
        return cls(loaded)

    @property
    def sources(self) -> list[PatternSource]:
        return list(self._sources)

    @property
    def patterns(self) -> list[str]:
        """All patterns across all sources, in load order."""
        return [c.pattern for c in self._compiled]

    def __len__(self) -> int:
        return len(self._compiled)

    def __iter__(self) -> Iterator[str]:
        return iter(self.patterns)

    def is_ignored(self, rel_path: str) -> bool:
        """True if any source matches `rel_path`."""
        return any(spec.match_file(rel_path) for spec in self._specs)

    def attribute_pattern(self, rel_path: str) -> str | None:
        """
        Return the first pattern, across sources in load order, that matches
        `rel_path` by itself. Negation patterns never match on their own, so a
        path kept out only by pattern interplay may have no attribution.
        """
        for compiled in self._compiled:
            if compiled.spec.match_file(rel_path):
                return compiled.pattern
        return None
