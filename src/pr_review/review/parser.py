# src/pr_review/review/parser.py
"""Unified diff parsing.

The parser is a line-oriented state machine. It never raises on malformed
input: unexpected lines are dropped and whatever files and hunks could be
recovered are returned.
"""
from dataclasses import dataclass, field


FILE_HEADER = "diff --git"
OLD_PATH_PREFIX = "--- a/"
NEW_PATH_PREFIX = "+++ b/"
HUNK_PREFIX = "@@"


@dataclass(frozen=True)
class Hunk:
    """One hunk of a file diff.

    ``position`` is the diff position of the header line within its file block.
    """
    header: str
    lines: tuple[str, ...]
    content: str
    position: int = 0


@dataclass(frozen=True)
class ParsedFile:
    path: str
    hunks: tuple[Hunk, ...] = ()


@dataclass
class _HunkBuffer:
    header: str
    position: int
    lines: list[str] = field(default_factory=list)

    def freeze(self) -> Hunk:
        return Hunk(
            header=self.header,
            lines=tuple(self.lines),
            content="".join(f"{line}\n" for line in self.lines),
            position=self.position,
        )


@dataclass
class _FileBuffer:
    path: str = ""
    hunks: list[Hunk] = field(default_factory=list)
    # Lines seen since the first hunk header, None before it.
    position: int | None = None


@dataclass
class _ParserState:
    files: list[ParsedFile] = field(default_factory=list)
    file: _FileBuffer | None = None
    hunk: _HunkBuffer | None = None

    def close_hunk(self) -> None:
        if self.hunk is not None and self.file is not None and self.hunk.lines:
            self.file.hunks.append(self.hunk.freeze())
        self.hunk = None

    def close_file(self) -> None:
        self.close_hunk()
        if self.file is not None:
            self.files.append(ParsedFile(path=self.file.path, hunks=tuple(self.file.hunks)))
        self.file = None


def _split_lines(text: str) -> list[str]:
    # Only "\n" ends a line.
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return lines


def parse_diff(diff_text: str) -> list[ParsedFile]:
    """Parse unified diff text into files and hunks, in order of appearance."""
    state = _ParserState()

    for line in _split_lines(diff_text or ""):
        if line.startswith(FILE_HEADER):
            state.close_file()
            state.file = _FileBuffer()
            continue

        if state.file is not None and state.file.position is not None:
            state.file.position += 1

        if line.startswith(OLD_PATH_PREFIX):
            if state.file is not None:
                state.file.path = line[len(OLD_PATH_PREFIX):]
        elif line.startswith(NEW_PATH_PREFIX):
            # Processed after the pre-image line, so renames resolve to the new name.
            if state.file is not None:
                state.file.path = line[len(NEW_PATH_PREFIX):]
        elif line.startswith(HUNK_PREFIX):
            if state.file is not None:
                state.close_hunk()
                if state.file.position is None:
                    state.file.position = 0
                state.hunk = _HunkBuffer(header=line, position=state.file.position)
        elif state.hunk is not None:
            state.hunk.lines.append(line)

    state.close_file()
    return state.files
