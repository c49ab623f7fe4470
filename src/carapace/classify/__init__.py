"""Path-based language and ecosystem classification."""

from carapace.classify.classifier import (
    Classification,
    Language,
    classify_file,
    classify_files,
)

__all__ = ["Classification", "Language", "classify_file", "classify_files"]
