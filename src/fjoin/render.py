"""
Assembles selected files into one document and writes it out.

Each file becomes a `# FILE:` header followed by a fenced code block labeled with
the file extension, then a `---` separator.
"""

from __future__ import annotations

import sys
from collections.abc import Iterable
from pathlib import Path

from fjoin.file_selection import Candidate, SelectionReport

STDOUT = "-"


def fence_label(path: Path) -> str:
    """The code fence language label: the extension without its dot, or empty."""
    return path.suffix.lstrip(".")


def render_file(rel_path: str, label: str, content: str) -> str:
    if not content.endswith("\n"):
        content += "\n"
    return f"# FILE: {rel_path}\n\n```{label}\n{content}```\n\n---\n\n"


def render_document(
    candidates: Iterable[Candidate],
    report: SelectionReport | None = None,
) -> str:
    """
    Read and render each candidate in order. A file that can't be read or decoded
    is reported on stderr, noted in `report`, and left out; the rest continue.
    """
    parts: list[str] = []
    for candidate in candidates:
        try:
            content = candidate.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            message = e.strerror if isinstance(e, OSError) and e.strerror else str(e)
            print(f"Error reading {candidate.rel_path}: {message}", file=sys.stderr)
            if report is not None:
                report.record_read_error(candidate.rel_path, message)
            continue
        parts.append(render_file(candidate.rel_path, fence_label(candidate.path), content))
    return "".join(parts)


def check_output_path(output: str, force: bool) -> None:
    """Raise `FileExistsError` if `output` exists and overwriting wasn't requested."""
    if output == STDOUT or force:
        return
    if Path(output).exists():
        raise FileExistsError(
            f"Output file '{output}' already exists. Use -f or --force to overwrite."
        )


def write_output(text: str, output: str, force: bool = False) -> None:
    """Write to stdout for `-`, otherwise to a file, creating parent directories."""
    if output == STDOUT:
        sys.stdout.write(text)
        return
    check_output_path(output, force)
    path = Path(output)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
