"""
Tests for the File Classifier
"""

import pytest

from leakhunter.core.finding import FileRecord
from leakhunter.scanners.classifier import (
    extension_of,
    in_dependency_dir,
    is_content_eligible,
    is_sensitive_name,
    should_skip,
)


class TestShouldSkip:
    """Tests for should_skip()."""

    def test_dependency_directory(self):
        assert should_skip("index.js", "app/node_modules/lodash/index.js")
        assert should_skip("index.js", "node_modules/lodash/index.js")

    def test_dependency_name_must_be_a_segment(self):
        assert not in_dependency_dir("src/my_node_modules_notes/index.js")
        assert not should_skip("node_modules.js", "src/node_modules.js")

    def test_windows_separators(self):
        assert should_skip("index.js", "app\\node_modules\\lodash\\index.js")

    @pytest.mark.parametrize(
        "name",
        ["package.json", "tsconfig.json", "readme.md", "license", ".gitignore", "yarn.lock"],
    )
    def test_known_non_sensitive_files(self, name):
        assert should_skip(name, f"project/{name}")

    @pytest.mark.parametrize(
        "name",
        ["tailwind.config.js", "postcss.config.ts", "user.spec.ts", "api.test.js", "types.d.ts"],
    )
    def test_wildcard_entries(self, name):
        assert should_skip(name, name)

    def test_wildcard_dot_is_literal(self):
        assert not should_skip("configxjs", "configxjs")

    def test_case_insensitive_name(self):
        assert should_skip("README.md", "README.md")

    def test_regular_source_file_not_skipped(self):
        assert not should_skip("app.py", "src/app.py")
        assert not should_skip(".env", ".env")

    def test_extra_patterns(self):
        assert should_skip("bundle.min.js", "dist/bundle.min.js", extra_patterns=["*.min.js"])
        assert not should_skip("bundle.js", "dist/bundle.js", extra_patterns=["*.min.js"])


class TestSensitiveName:
    """Tests for is_sensitive_name()."""

    @pytest.mark.parametrize(
        "name",
        [".env", ".env.production", "server.key", "cert.pem", "db_password.txt",
         "access_token.json", "database.sql", "backup.tar.gz", "mysql-dump.sql",
         "id_rsa", "credentials", "config.json", "secret.txt"],
    )
    def test_sensitive(self, name):
        assert is_sensitive_name(name)

    def test_uppercase_name(self):
        assert is_sensitive_name("ID_RSA")

    @pytest.mark.parametrize("name", ["app.py", "index.js", "styles.css", "main.go"])
    def test_not_sensitive(self, name):
        assert not is_sensitive_name(name)


class TestContentEligibility:
    """Tests for is_content_eligible()."""

    def test_supported_extension(self):
        assert is_content_eligible(FileRecord.from_text("src/app.py", ""))
        assert is_content_eligible(FileRecord.from_text("conf/settings.YAML", ""))

    def test_env_files(self):
        assert is_content_eligible(FileRecord.from_text(".env", ""))
        assert is_content_eligible(FileRecord.from_text(".env.staging", ""))
        assert is_content_eligible(FileRecord.from_text("config.env", ""))

    def test_text_content_type(self):
        record = FileRecord.from_text("NOTES", "", content_type="text/plain")
        assert is_content_eligible(record)

    def test_dockerfile(self):
        assert is_content_eligible(FileRecord.from_text("Dockerfile", ""))

    def test_binary(self):
        record = FileRecord.from_text("logo.png", "", content_type="image/png")
        assert not is_content_eligible(record)

    def test_extension_of(self):
        assert extension_of("archive.tar.gz") == ".gz"
        assert extension_of("Makefile") == ""
