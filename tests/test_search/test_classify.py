"""Tests for the path classifiers."""

import pytest

from opencontext.search.classify import (
    detect_language,
    is_config_file,
    is_doc_file,
    is_test_file,
)
from opencontext.search.tables import SearchTables


class TestIsTestFile:
    @pytest.mark.parametrize(
        "path",
        [
            "user.test.ts",
            "user.spec.ts",
            "user_test.go",
            "test_user.py",
            "tests/user.test.ts",
            "__tests__/user.ts",
            "src/tests/helpers.py",
            "e2e/login.ts",
        ],
    )
    def test_detects_test_files(self, path):
        assert is_test_file(path) is True

    def test_returns_false_for_non_test_files(self):
        assert is_test_file("user.ts") is False
        assert is_test_file("src/user.ts") is False
        assert is_test_file("src/attestation.ts") is False

    def test_is_case_insensitive(self):
        assert is_test_file("User.TEST.ts") == is_test_file("user.test.ts")
        assert is_test_file("User.TEST.ts") is True

    def test_handles_windows_separators(self):
        assert is_test_file("src\\tests\\user.ts") is True


class TestIsConfigFile:
    def test_detects_files_with_config_in_name(self):
        assert is_config_file("webpack.config.js") is True
        assert is_config_file("vite.config.ts") is True

    def test_detects_config_directories(self):
        assert is_config_file("config/settings.js") is True
        assert is_config_file("configs/app.json") is True

    def test_detects_rc_files(self):
        assert is_config_file(".eslintrc") is True
        assert is_config_file(".npmrc") is True
        assert is_config_file(".prettierrc.json") is True

    def test_returns_false_for_non_config_files(self):
        assert is_config_file("user.ts") is False
        assert is_config_file("README.md") is False
        assert is_config_file("app.json") is False
        assert is_config_file("Cargo.toml") is False

    def test_src_directory_is_not_an_rc_file(self):
        assert is_config_file("src/user.ts") is False


class TestIsDocFile:
    def test_detects_readme_files(self):
        assert is_doc_file("README.md") is True
        assert is_doc_file("README") is True

    def test_detects_changelog_and_license(self):
        assert is_doc_file("CHANGELOG.md") is True
        assert is_doc_file("LICENSE") is True

    def test_detects_doc_directories(self):
        assert is_doc_file("docs/api.md") is True
        assert is_doc_file("docs/diagram.png") is True

    def test_returns_false_for_non_doc_files(self):
        assert is_doc_file("user.ts") is False
        assert is_doc_file("config.json") is False

    def test_is_case_insensitive(self):
        assert is_doc_file("readme.MD") is True


class TestDetectLanguage:
    def test_detects_typescript(self):
        assert detect_language("user.ts") == "typescript"
        assert detect_language("user.tsx") == "typescript"

    def test_detects_javascript(self):
        assert detect_language("user.js") == "javascript"
        assert detect_language("user.jsx") == "javascript"

    def test_detects_common_languages(self):
        assert detect_language("user.py") == "python"
        assert detect_language("user.rs") == "rust"
        assert detect_language("user.go") == "go"
        assert detect_language("User.java") == "java"

    def test_detects_c_and_cpp(self):
        assert detect_language("user.c") == "c"
        assert detect_language("user.cpp") == "cpp"
        # .h is listed by both; the first language wins
        assert detect_language("user.h") == "c"

    def test_returns_unknown_for_unknown_extensions(self):
        assert detect_language("user.xyz") == "unknown"
        assert detect_language("Makefile") == "unknown"

    def test_is_case_insensitive(self):
        assert detect_language("user.TS") == "typescript"
        assert detect_language("user.PY") == "python"

    def test_uses_full_path(self):
        assert detect_language("src/app/main.py") == "python"

    def test_uses_injected_table(self):
        tables = SearchTables(languages={"zig": [".zig"]})
        assert detect_language("alloc.zig", tables) == "zig"
        assert detect_language("alloc.py", tables) == "unknown"
