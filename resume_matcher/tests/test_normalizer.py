"""
Unit tests for resume text normalization.
"""

import unittest

from resume_matcher.core.normalizer import normalize


class TestNormalize(unittest.TestCase):
    """Test whitespace and character cleanup."""

    def test_empty_input(self):
        self.assertEqual(normalize(""), "")
        self.assertEqual(normalize(None), "")

    def test_tabs_become_single_spaces(self):
        self.assertEqual(normalize("Python\tReact"), "Python React")

    def test_crlf_line_endings(self):
        self.assertEqual(normalize("Jane Doe\r\nEngineer\r\n"), "Jane Doe\nEngineer")

    def test_wide_gaps_become_paragraph_breaks(self):
        self.assertEqual(normalize("Summary\n\n\n\nText here"), "Summary\n\nText here")
        self.assertEqual(normalize("Name      Title"), "Name\n\nTitle")

    def test_single_blank_line_is_kept(self):
        self.assertEqual(normalize("Skills\n\nPython"), "Skills\n\nPython")

    def test_strips_characters_outside_safelist(self):
        text = normalize("Skills: Python • React | C++ & C#")
        self.assertEqual(text, "Skills Python React C++ C#")

    def test_keeps_contact_punctuation(self):
        text = normalize("jane.doe@mail.com (555) 123-4567 linkedin.com/in/jane")
        self.assertEqual(text, "jane.doe@mail.com (555) 123-4567 linkedin.com/in/jane")

    def test_lines_are_trimmed(self):
        self.assertEqual(normalize(" Jane Doe \nEngineer "), "Jane Doe\nEngineer")

    def test_indented_line_break_becomes_paragraph_break(self):
        self.assertEqual(normalize("Jane Doe  \n  Engineer"), "Jane Doe\n\nEngineer")

    def test_deterministic(self):
        raw = "Senior Engineer\t\n\n\n* Python *\r\n"
        self.assertEqual(normalize(raw), normalize(raw))


if __name__ == "__main__":
    unittest.main()
