"""Tests for extension-based file classification."""

import pytest

from carapace.classify import Classification, Language, classify_file, classify_files


class TestLanguages:
    @pytest.mark.parametrize(
        "path,language",
        [
            ("src/app.ts", Language.TYPESCRIPT),
            ("src/App.tsx", Language.TYPESCRIPT),
            ("index.js", Language.JAVASCRIPT),
            ("components/Button.jsx", Language.JAVASCRIPT),
            ("pkg/main.py", Language.PYTHON),
            ("cmd/server.go", Language.GO),
            ("src/lib.rs", Language.RUST),
            ("Main.java", Language.JAVA),
            ("contracts/Vault.sol", Language.SOLIDITY),
        ],
    )
    def test_known_extensions(self, path, language):
        assert classify_file(path).language == language

    def test_unknown_extension(self):
        c = classify_file("README.md")
        assert c == Classification(Language.UNKNOWN, None, False)

    def test_no_extension(self):
        assert classify_file("Makefile").language == Language.UNKNOWN
        assert classify_file("bin/").language == Language.UNKNOWN

    def test_empty_path(self):
        assert classify_file("").language == Language.UNKNOWN

    def test_extension_case_insensitive(self):
        assert classify_file("LEGACY.PY").language == Language.PYTHON
        assert classify_file("Token.SOL").language == Language.SOLIDITY

    def test_only_final_extension_counts(self):
        assert classify_file("types.d.ts").language == Language.TYPESCRIPT
        assert classify_file("archive.py.bak").language == Language.UNKNOWN

    def test_dotted_directory_ignored(self):
        assert classify_file("my.sol/readme").language == Language.UNKNOWN

    def test_backslash_paths(self):
        assert classify_file("src\\win\\tool.go").language == Language.GO

    def test_bare_dotfile_uses_its_extension(self):
        assert classify_file(".sol").language == Language.SOLIDITY
        assert classify_file("contracts/.SOL").is_smart_contract is True
        assert classify_file(".gitignore").language == Language.UNKNOWN

    def test_trailing_dot(self):
        assert classify_file("weird.").language == Language.UNKNOWN


class TestSmartContracts:
    def test_solidity_is_smart_contract(self):
        c = classify_file("contracts/Token.sol")
        assert c.language == Language.SOLIDITY
        assert c.chain == "solidity"
        assert c.is_smart_contract is True

    @pytest.mark.parametrize("path", ["a.ts", "b.py", "c.go", "d.rs", "e.java", "f.txt"])
    def test_other_files_are_not(self, path):
        c = classify_file(path)
        assert c.chain is None
        assert c.is_smart_contract is False


class TestClassification:
    def test_deterministic(self):
        assert classify_file("x/y/z.rs") == classify_file("x/y/z.rs")

    def test_frozen(self):
        c = classify_file("a.py")
        with pytest.raises(AttributeError):
            c.language = Language.GO  # type: ignore[misc]

    def test_to_dict_omits_missing_chain(self):
        assert classify_file("a.ts").to_dict() == {
            "language": "typescript",
            "is_smart_contract": False,
        }

    def test_to_dict_with_chain(self):
        assert classify_file("a.sol").to_dict() == {
            "language": "solidity",
            "is_smart_contract": True,
            "chain": "solidity",
        }

    def test_classify_files_keeps_order(self):
        results = classify_files(["b.sol", "a.py", "c.md"])
        assert list(results) == ["b.sol", "a.py", "c.md"]
        assert results["b.sol"].is_smart_contract
        assert results["c.md"].language == Language.UNKNOWN
