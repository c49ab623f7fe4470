"""Unified diff parser.

Turns ``git diff`` output (or any plain unified diff) into an ordered list of
FileChange records. Hunk bodies are consumed using the counts from their
``@@`` header, so a removed line that happens to start with ``-- `` is never
mistaken for a file header, and a change line past those counts is an
error rather than being dropped. Handles BOM, CRLF, git's C-quoted paths,
extended git headers (new, deleted, renamed, mode-only and binary files) and
the ``\\ No newline at end of file`` marker.
"""

from __future__ import annotations

import re
from typing import List, Optional, Tuple

import structlog

from carapace.git.models import Change, ChangeKind, FileChange, FileStatus, Hunk
from carapace.git.serializer import DEV_NULL

logger = structlog.get_logger(__name__)

# --- Regex patterns for diff parsing ---

_DIFF_HEADER_RE = re.compile(r"^diff --git (.+)$")
_UNQUOTED_OPERANDS_RE = re.compile(r'^(a/.+?) ("b/.*"|b/.+)$')
_HUNK_HEADER_RE = re.compile(r"^@@ -(\S*) \+(\S*) @@(.*)$")
_NEW_FILE_RE = re.compile(r"^new file mode \d+$")
_DELETED_FILE_RE = re.compile(r"^deleted file mode \d+$")
_RENAME_FROM_RE = re.compile(r"^rename from (.+)$")
_RENAME_TO_RE = re.compile(r"^rename to (.+)$")


class MalformedDiff(Exception):
    """Raised when the diff text violates unified-diff structure.

    ``line_no`` is 1-based; ``file_index`` is the index of the file being
    parsed when the error occurred, or ``None`` before the first file header.
    """

    def __init__(
        self,
        message: str,
        *,
        line_no: int,
        line: str,
        file_index: Optional[int] = None,
    ) -> None:
        super().__init__(f"line {line_no}: {message}: {line!r}")
        self.line_no = line_no
        self.line = line
        self.file_index = file_index


def _split_lines(text: str) -> List[str]:
    """Split on LF only; content may legitimately hold other separators."""
    text = text.lstrip("\ufeff")
    if not text:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line.rstrip("\r") for line in lines]


def _parse_range(raw: str) -> Tuple[int, int]:
    """Parse ``start[,count]``. A missing count means 1."""
    start, sep, count = raw.partition(",")
    if not start.isdigit() or (sep and not count.isdigit()):
        raise ValueError(raw)
    return int(start), int(count) if sep else 1


_C_ESCAPES = {
    "a": b"\a",
    "b": b"\b",
    "f": b"\f",
    "n": b"\n",
    "r": b"\r",
    "t": b"\t",
    "v": b"\v",
    "\\": b"\\",
    '"': b'"',
}


def _closing_quote(text: str) -> int:
    """Index of the quote closing the C-quoted string at the start of *text*."""
    i = 1
    while i < len(text):
        if text[i] == "\\":
            i += 2
            continue
        if text[i] == '"':
            return i
        i += 1
    return -1


def _unquote(path: str) -> str:
    """Decode git's C-style quoting (``"caf\\303\\251.py"``); bare paths pass through."""
    if len(path) < 2 or not (path.startswith('"') and path.endswith('"')):
        return path
    body = path[1:-1]
    out = bytearray()
    i = 0
    while i < len(body):
        ch = body[i]
        if ch != "\\" or i + 1 == len(body):
            out += ch.encode("utf-8")
            i += 1
            continue
        nxt = body[i + 1]
        octal = body[i + 1:i + 4]
        if len(octal) == 3 and all(c in "01234567" for c in octal):
            out.append(int(octal, 8) & 0xFF)
            i += 4
        elif nxt in _C_ESCAPES:
            out += _C_ESCAPES[nxt]
            i += 2
        else:
            out += nxt.encode("utf-8")
            i += 2
    return out.decode("utf-8", errors="replace")


def _strip_prefix(path: str, prefix: str) -> str:
    return path[len(prefix):] if path.startswith(prefix) else path


def _git_header_paths(operands: str) -> Optional[Tuple[str, str]]:
    """Old and new path from the operands of a ``diff --git`` line."""
    if operands.startswith('"'):
        end = _closing_quote(operands)
        if end < 0 or operands[end + 1:end + 2] != " ":
            return None
        old, new = operands[:end + 1], operands[end + 2:]
    else:
        m = _UNQUOTED_OPERANDS_RE.match(operands)
        if m is None:
            return None
        old, new = m.groups()
    return _strip_prefix(_unquote(old), "a/"), _strip_prefix(_unquote(new), "b/")


def _header_path(raw: str, prefix: str) -> Optional[str]:
    """Path from a ``---``/``+++`` line, or None for /dev/null."""
    if raw.startswith('"'):
        end = _closing_quote(raw)
        path = _unquote(raw[:end + 1]) if end > 0 else raw
    else:
        path = raw.split("\t", 1)[0]
    if path == DEV_NULL:
        return None
    return _strip_prefix(path, prefix)


def _is_stray_change(line: str) -> bool:
    # "-- " alone is the signature separator git format-patch appends
    return line[:1] in ("+", "-", " ") and line != "-- "


class _HunkBuilder:
    """Accumulates body lines until the header's line counts are used up."""

    def __init__(
        self,
        old_start: int,
        old_lines: int,
        new_start: int,
        new_lines: int,
        section: Optional[str],
    ) -> None:
        self.old_start = old_start
        self.old_lines = old_lines
        self.new_start = new_start
        self.new_lines = new_lines
        self.section = section
        self.changes: List[Change] = []
        self._old_left = old_lines
        self._new_left = new_lines
        self._old_no = old_start
        self._new_no = new_start

    @property
    def expects_more(self) -> bool:
        return self._old_left > 0 or self._new_left > 0

    def consume(self, line: str) -> bool:
        """Take *line* as part of the body. Returns False if it is not one."""
        if line.startswith("\\"):
            return True
        if line.startswith("+"):
            self.changes.append(Change(ChangeKind.ADD, line[1:], self._new_no))
            self._new_no += 1
            self._new_left -= 1
        elif line.startswith("-"):
            self.changes.append(Change(ChangeKind.DELETE, line[1:], self._old_no))
            self._old_no += 1
            self._old_left -= 1
        elif line.startswith(" ") or line == "":
            # An empty line is a context line whose trailing space got stripped
            self.changes.append(Change(ChangeKind.CONTEXT, line[1:], self._new_no))
            self._old_no += 1
            self._new_no += 1
            self._old_left -= 1
            self._new_left -= 1
        else:
            return False
        return True

    def build(self) -> Hunk:
        return Hunk(
            old_start=self.old_start,
            old_lines=self.old_lines,
            new_start=self.new_start,
            new_lines=self.new_lines,
            changes=tuple(self.changes),
            section=self.section,
        )


class _FileBuilder:
    def __init__(self, old_path: str, new_path: str, *, from_git_header: bool) -> None:
        self.old_path = old_path
        self.new_path = new_path
        self.from_git_header = from_git_header
        self.saw_file_header = False
        self.status: Optional[FileStatus] = None
        self.hunks: List[Hunk] = []

    def build(self) -> FileChange:
        status = self.status
        if status is None:
            status = (
                FileStatus.RENAMED
                if self.old_path != self.new_path
                else FileStatus.MODIFIED
            )
        return FileChange(
            old_path=self.old_path,
            new_path=self.new_path,
            hunks=tuple(self.hunks),
            status=status,
        )


class DiffParser:
    """Parse unified diff text into FileChange records.

    Usage::

        files = DiffParser(diff_text).parse()
    """

    def __init__(self, diff_text: str) -> None:
        self._lines = _split_lines(diff_text)

    def _is_file_header(self, idx: int) -> bool:
        return (
            self._lines[idx].startswith("--- ")
            and idx + 1 < len(self._lines)
            and self._lines[idx + 1].startswith("+++ ")
        )

    def parse(self) -> List[FileChange]:
        files: List[FileChange] = []
        current: Optional[_FileBuilder] = None
        hunk: Optional[_HunkBuilder] = None
        idx = 0
        total = len(self._lines)

        def close_hunk() -> None:
            nonlocal hunk
            if hunk is not None and current is not None:
                current.hunks.append(hunk.build())
            hunk = None

        def close_file() -> None:
            nonlocal current
            close_hunk()
            if current is not None:
                files.append(current.build())
            current = None

        while idx < total:
            raw_line = self._lines[idx]

            # --- Hunk body ---
            if hunk is not None:
                if hunk.expects_more and hunk.consume(raw_line):
                    idx += 1
                    continue
                if (
                    not hunk.expects_more
                    and _is_stray_change(raw_line)
                    and not self._is_file_header(idx)
                ):
                    raise MalformedDiff(
                        "change line beyond the counts of its hunk header",
                        line_no=idx + 1,
                        line=raw_line,
                        file_index=len(files),
                    )
                # Truncated hunk: fall through and treat the line as a header
            close_hunk()

            # --- diff --git header → new file context ---
            m = _DIFF_HEADER_RE.match(raw_line)
            paths = _git_header_paths(m.group(1)) if m else None
            if paths is not None:
                close_file()
                current = _FileBuilder(*paths, from_git_header=True)
                idx += 1
                continue

            # --- Extended git headers ---
            if current is not None and not current.saw_file_header and not current.hunks:
                if _NEW_FILE_RE.match(raw_line):
                    current.status = FileStatus.ADDED
                    idx += 1
                    continue
                if _DELETED_FILE_RE.match(raw_line):
                    current.status = FileStatus.DELETED
                    idx += 1
                    continue
                if (rm := _RENAME_FROM_RE.match(raw_line)):
                    current.old_path = _unquote(rm.group(1))
                    current.status = FileStatus.RENAMED
                    idx += 1
                    continue
                if (rt := _RENAME_TO_RE.match(raw_line)):
                    current.new_path = _unquote(rt.group(1))
                    current.status = FileStatus.RENAMED
                    idx += 1
                    continue

            # --- File headers (--- a/ and +++ b/) ---
            if self._is_file_header(idx):
                old_path = _header_path(raw_line[4:], "a/")
                new_path = _header_path(self._lines[idx + 1][4:], "b/")
                file_index = len(files) if current is not None else None
                if old_path is None and new_path is None:
                    raise MalformedDiff(
                        "both sides of file header are /dev/null",
                        line_no=idx + 1,
                        line=raw_line,
                        file_index=file_index,
                    )

                reuse = (
                    current is not None
                    and current.from_git_header
                    and not current.saw_file_header
                    and not current.hunks
                )
                if not reuse:
                    close_file()
                    current = _FileBuilder(
                        old_path or new_path or "",
                        new_path or old_path or "",
                        from_git_header=False,
                    )
                assert current is not None
                current.saw_file_header = True

                if old_path is None:
                    current.status = FileStatus.ADDED
                    current.old_path = current.new_path = new_path or ""
                elif new_path is None:
                    current.status = FileStatus.DELETED
                    current.old_path = current.new_path = old_path
                else:
                    current.old_path = old_path
                    current.new_path = new_path
                idx += 2
                continue

            # --- Hunk header ---
            if raw_line.startswith("@@"):
                file_index = len(files) if current is not None else None
                if current is None:
                    raise MalformedDiff(
                        "hunk header before any file header",
                        line_no=idx + 1,
                        line=raw_line,
                        file_index=file_index,
                    )
                hm = _HUNK_HEADER_RE.match(raw_line)
                try:
                    if hm is None:
                        raise ValueError(raw_line)
                    old_start, old_lines = _parse_range(hm.group(1))
                    new_start, new_lines = _parse_range(hm.group(2))
                except ValueError:
                    raise MalformedDiff(
                        "unparseable hunk header",
                        line_no=idx + 1,
                        line=raw_line,
                        file_index=file_index,
                    ) from None
                section = hm.group(3).strip() or None
                hunk = _HunkBuilder(old_start, old_lines, new_start, new_lines, section)
                idx += 1
                continue

            # Preamble, index/mode/similarity lines, binary markers,
            # "\ No newline" after a finished hunk: nothing to record
            idx += 1

        close_file()

        logger.debug(
            "diff_parsed",
            files=len(files),
            hunks=sum(len(f.hunks) for f in files),
        )
        return files


def parse_diff(diff_text: str) -> List[FileChange]:
    """Parse *diff_text* into an ordered list of FileChange records."""
    return DiffParser(diff_text).parse()
