import unittest

from contextpack.errors import (
    ConfigError,
    InputError,
    ProviderError,
    create_file_not_found_error,
    create_model_format_error,
    format_cli_error,
)


class TestErrors(unittest.TestCase):

    def test_categories(self):
        self.assertEqual(InputError("x").category, "Input")
        self.assertEqual(ConfigError("x").category, "Configuration")
        self.assertEqual(ProviderError("x").category, "API")

    def test_format_cli_error_with_suggestions(self):
        error = InputError("Something failed", ["Try this", "Or that"])
        self.assertEqual(
            format_cli_error(error),
            "[Input] Something failed\nSuggestions:\n  - Try this\n  - Or that",
        )

    def test_format_cli_error_without_suggestions(self):
        self.assertEqual(format_cli_error(ProviderError("Rate limited")), "[API] Rate limited")

    def test_model_format_missing_colon(self):
        error = create_model_format_error("gpt-4o")
        self.assertIsInstance(error, ConfigError)
        self.assertEqual(error.message, 'Invalid model format: "gpt-4o"')
        self.assertTrue(any('"provider:gpt-4o"' in s for s in error.suggestions))

    def test_model_format_missing_provider(self):
        error = create_model_format_error(":gpt-4o")
        self.assertTrue(any("Specify a provider" in s for s in error.suggestions))

    def test_model_format_missing_model_id(self):
        error = create_model_format_error("openai:")
        self.assertTrue(any("Specify a model ID" in s for s in error.suggestions))

    def test_unknown_provider(self):
        error = create_model_format_error("acme:model-1")
        self.assertEqual(error.message, 'Unknown provider "acme" in model "acme:model-1"')
        self.assertIn("openai", error.suggestions[0])

    def test_file_not_found(self):
        error = create_file_not_found_error("prompt.txt")
        self.assertIsInstance(error, InputError)
        self.assertEqual(str(error), "Input file not found: prompt.txt")
        self.assertTrue(error.suggestions)


if __name__ == '__main__':
    unittest.main()
