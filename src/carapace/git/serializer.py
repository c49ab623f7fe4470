"""Canonical text form of parsed diffs.

Every emitted line is newline-terminated, so a file's text is exactly its
header followed by the text of each of its hunks. Token estimates are always
computed over this form.
"""

from __future__ import annotations

from typing import Iterable

from carapace.git.models import FileChange, FileStatus, Hunk

DEV_NULL = "/dev/null"


def serialize_hunk(hunk: Hunk) -> str:
    lines = [hunk.header]
    lines.extend(f"{c.marker}{c.content}" for c in hunk.changes)
    return "".join(f"{line}\n" for line in lines)


_QUOTE_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\t": "\\t",
    "\n": "\\n",
    "\r": "\\r",
}


def quote_path(path: str) -> str:
    """C-quote *path* the way git does when it holds quotes, backslashes or control characters.

    Non-ASCII text is left as UTF-8, which git accepts with ``core.quotePath=false``.
    """
    if not any(c in _QUOTE_ESCAPES or ord(c) < 0x20 or ord(c) == 0x7F for c in path):
        return path
    body = []
    for c in path:
        if c in _QUOTE_ESCAPES:
            body.append(_QUOTE_ESCAPES[c])
        elif ord(c) < 0x20 or ord(c) == 0x7F:
            body.append(f"\\{ord(c):03o}")
        else:
            body.append(c)
    return '"' + "".join(body) + '"'


def file_header(file: FileChange) -> str:
    """Return the ``---``/``+++`` pair for *file*."""
    old = DEV_NULL if file.status == FileStatus.ADDED else quote_path(f"a/{file.old_path}")
    new = DEV_NULL if file.status == FileStatus.DELETED else quote_path(f"b/{file.new_path}")
    return f"--- {old}\n+++ {new}\n"


def serialize_file(file: FileChange) -> str:
    return file_header(file) + "".join(serialize_hunk(h) for h in file.hunks)


def serialize_files(files: Iterable[FileChange]) -> str:
    return "".join(serialize_file(f) for f in files)
