"""Tests for input sanitization utilities."""

from __future__ import annotations

from refundhunter.utils import sanitize_filename, sanitize_text


class TestSanitizeFilename:
    """Test upload filename sanitization."""

    def test_strips_directories(self):
        assert sanitize_filename("../../etc/passwd") == "passwd"
        assert sanitize_filename("C:\\reports\\ledger.csv") == "ledger.csv"

    def test_strips_control_characters(self):
        assert sanitize_filename("ledger\n2024.csv") == "ledger2024.csv"

    def test_fallback_for_empty_names(self):
        assert sanitize_filename(None) == "upload"
        assert sanitize_filename("") == "upload"
        assert sanitize_filename("..") == "upload"

    def test_long_names_keep_extension(self):
        result = sanitize_filename("a" * 300 + ".csv", max_length=50)

        assert len(result) == 50
        assert result.endswith(".csv")


class TestSanitizeText:
    def test_collapses_whitespace_and_control_characters(self):
        assert sanitize_text("  Warehouse\t\x00damaged \n ") == "Warehouse damaged"

    def test_truncates(self):
        assert sanitize_text("x" * 20, max_length=5) == "xxxxx"
