import unittest

from contextpack.outcomes import ErrorCode, FileOutcome
from contextpack.prompt_formatter import detect_language, format_combined_input, summarize_outcomes


class TestDetectLanguage(unittest.TestCase):

    def test_known_extensions(self):
        self.assertEqual(detect_language("src/app.py"), "python")
        self.assertEqual(detect_language("web/index.TSX"), "tsx")
        self.assertEqual(detect_language("C:\\proj\\config.yml"), "yaml")

    def test_unknown_extension_falls_back_to_text(self):
        self.assertEqual(detect_language("notes.txt"), "text")
        self.assertEqual(detect_language("Makefile"), "text")


class TestFormatCombinedInput(unittest.TestCase):

    def test_prompt_only(self):
        combined = format_combined_input("Explain this.", [])
        self.assertEqual(combined, "# USER PROMPT\n\nExplain this.")
        self.assertNotIn("# CONTEXT DOCUMENTS", combined)

    def test_context_documents_precede_prompt(self):
        outcomes = [
            FileOutcome.success("src/main.py", "print('hi')"),
            FileOutcome.success("README.md", "# Readme"),
        ]
        combined = format_combined_input("Review the code.", outcomes)

        expected = (
            "# CONTEXT DOCUMENTS\n"
            "\n"
            "## File: src/main.py\n```python\nprint('hi')\n```\n"
            "\n"
            "## File: README.md\n```markdown\n# Readme\n```\n"
            "\n"
            "# USER PROMPT\n\nReview the code."
        )
        self.assertEqual(combined, expected)

    def test_failed_outcomes_are_left_out(self):
        outcomes = [
            FileOutcome.failure("image.png", ErrorCode.BINARY_FILE, "Binary file detected: image.png"),
        ]
        combined = format_combined_input("Hello", outcomes)
        self.assertNotIn("image.png", combined)
        self.assertNotIn("# CONTEXT DOCUMENTS", combined)

    def test_paths_are_normalized_in_headers(self):
        combined = format_combined_input("p", [FileOutcome.success("./a/../b\\c.js", "x")])
        self.assertIn("## File: b/c.js\n```javascript\n", combined)


class TestSummarizeOutcomes(unittest.TestCase):

    def test_split_and_warn(self):
        good = FileOutcome.success("a.txt", "a")
        bad = FileOutcome.failure("b.bin", ErrorCode.BINARY_FILE, "Binary file detected: b.bin")

        with self.assertLogs("contextpack.prompt_formatter", level="WARNING") as logs:
            included, failed = summarize_outcomes([good, bad])

        self.assertEqual(included, [good])
        self.assertEqual(failed, [bad])
        self.assertEqual(len(logs.output), 1)
        self.assertIn("BINARY_FILE", logs.output[0])
        self.assertIn("b.bin", logs.output[0])


if __name__ == '__main__':
    unittest.main()
