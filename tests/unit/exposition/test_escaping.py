"""Tests for HELP text and label value unescaping."""

import pytest

from promtext.exposition.escaping import unescape_help, unescape_label_value


class TestUnescapeHelp:
    """Tests for unescape_help."""

    def test_plain_text_unchanged(self):
        """Test text without backslashes passes through."""
        assert unescape_help("Total requests.") == "Total requests."

    def test_empty_string(self):
        """Test empty help text."""
        assert unescape_help("") == ""

    def test_double_backslash(self):
        """Test backslash-backslash becomes one backslash."""
        assert unescape_help("a\\\\b") == "a\\b"

    def test_backslash_n(self):
        """Test backslash-n becomes a newline."""
        assert unescape_help("line1\\nline2") == "line1\nline2"

    def test_other_escape_preserved(self):
        """Test backslash followed by another character is kept literally."""
        assert unescape_help("c\\q") == "c\\q"
        assert unescape_help('say \\"hi\\"') == 'say \\"hi\\"'

    def test_trailing_backslash_preserved(self):
        """Test a lone backslash at the end is emitted."""
        assert unescape_help("ends with \\") == "ends with \\"

    def test_combined_sequences(self):
        """Test all escape kinds in one string."""
        assert unescape_help("a\\\\b\\nc\\q") == "a\\b\nc\\q"

    def test_escaped_backslash_before_n(self):
        """Test an escaped backslash does not start a newline escape."""
        assert unescape_help("\\\\n") == "\\n"


class TestUnescapeLabelValue:
    """Tests for unescape_label_value."""

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("plain", "plain"),
            ("C:\\\\DIR\\\\FILE.TXT", "C:\\DIR\\FILE.TXT"),
            ('Cannot find file:\\n\\"FILE.TXT\\"', 'Cannot find file:\n"FILE.TXT"'),
            ("tab\\there", "tab\\there"),
        ],
    )
    def test_unescape(self, raw, expected):
        """Test label value escape sequences."""
        assert unescape_label_value(raw) == expected
