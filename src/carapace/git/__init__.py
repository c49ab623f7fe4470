"""Git interface layer — adapter, diff parsing, serialization, models."""

from carapace.git.adapter import GitError, get_range_diff, get_repo_root, get_staged_diff
from carapace.git.diff_parser import DiffParser, MalformedDiff, parse_diff
from carapace.git.models import Change, ChangeKind, FileChange, FileStatus, Hunk
from carapace.git.serializer import (
    file_header,
    quote_path,
    serialize_file,
    serialize_files,
    serialize_hunk,
)

__all__ = [
    "Change",
    "ChangeKind",
    "DiffParser",
    "FileChange",
    "FileStatus",
    "GitError",
    "Hunk",
    "MalformedDiff",
    "file_header",
    "get_range_diff",
    "get_repo_root",
    "get_staged_diff",
    "parse_diff",
    "quote_path",
    "serialize_file",
    "serialize_files",
    "serialize_hunk",
]
