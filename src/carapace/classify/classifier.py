"""File classifier.

Maps a path to a language, an optional chain (smart-contract ecosystem) and a
smart-contract flag. Only the final extension is looked at; file content is
never read. Unknown or missing extensions degrade to ``Language.UNKNOWN``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, Optional


class Language(str, Enum):
    TYPESCRIPT = "typescript"
    JAVASCRIPT = "javascript"
    PYTHON = "python"
    GO = "go"
    RUST = "rust"
    JAVA = "java"
    SOLIDITY = "solidity"
    UNKNOWN = "unknown"


_EXT_LANGUAGE_MAP: Dict[str, Language] = {
    ".ts": Language.TYPESCRIPT,
    ".tsx": Language.TYPESCRIPT,
    ".js": Language.JAVASCRIPT,
    ".jsx": Language.JAVASCRIPT,
    ".py": Language.PYTHON,
    ".go": Language.GO,
    ".rs": Language.RUST,
    ".java": Language.JAVA,
    ".sol": Language.SOLIDITY,
}

# Languages whose files are smart contracts, and the chain tag they carry
_SMART_CONTRACT_CHAINS: Dict[Language, str] = {
    Language.SOLIDITY: "solidity",
}


@dataclass(frozen=True)
class Classification:
    language: Language = Language.UNKNOWN
    chain: Optional[str] = None
    is_smart_contract: bool = False

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "language": self.language.value,
            "is_smart_contract": self.is_smart_contract,
        }
        if self.chain is not None:
            data["chain"] = self.chain
        return data


def _extension(path: str) -> str:
    """Text from the last dot of the final path segment, lower-cased (".sol" -> ".sol")."""
    name = path.replace("\\", "/").rsplit("/", 1)[-1]
    _, dot, ext = name.rpartition(".")
    return f".{ext.lower()}" if dot else ""


def classify_file(path: str) -> Classification:
    """Classify *path* by its final extension (case-insensitive)."""
    language = _EXT_LANGUAGE_MAP.get(_extension(path), Language.UNKNOWN)
    chain = _SMART_CONTRACT_CHAINS.get(language)
    return Classification(
        language=language,
        chain=chain,
        is_smart_contract=chain is not None,
    )


def classify_files(paths: Iterable[str]) -> Dict[str, Classification]:
    return {path: classify_file(path) for path in paths}
