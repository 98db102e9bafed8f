"""
Unit tests for text normalization.
"""

import pytest
from sechub.extractor.text import clean_text


class TestCleanText:
    def test_collapses_whitespace_runs(self):
        assert clean_text("Threat   actor\t\tgroup") == "Threat actor group"

    def test_newlines_become_single_spaces(self):
        assert clean_text("First paragraph.\n\n\n\nSecond paragraph.") == "First paragraph. Second paragraph."

    def test_trims_leading_and_trailing_whitespace(self):
        assert clean_text("  \n  padded text \t\n") == "padded text"

    def test_empty_and_blank_input(self):
        assert clean_text("") == ""
        assert clean_text("   \n\t ") == ""

    @pytest.mark.parametrize(
        "raw",
        [
            "plain",
            "  a\n\n  b   c  ",
            "line one\r\nline two\n\n\nline three",
            " non-breaking  spaces em space",
        ],
    )
    def test_idempotent(self, raw):
        once = clean_text(raw)
        assert clean_text(once) == once
