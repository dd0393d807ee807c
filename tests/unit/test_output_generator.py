import unittest
from unittest.mock import patch
import tempfile
from datetime import datetime
from pathlib import Path

from contextpack.llm_service import LLMResponse, ModelSpec
from contextpack.output_generator import (
    OutputGenerator,
    format_console_summary,
    format_response_markdown,
    sanitize_filename,
)


FIXED_TIME = datetime(2024, 5, 17, 9, 30, 5)


class TestOutputGenerator(unittest.TestCase):

    def setUp(self):
        self.temp_dir_context = tempfile.TemporaryDirectory()
        self.temp_dir_path = Path(self.temp_dir_context.name)
        self.ok_response = LLMResponse(
            model_spec=ModelSpec("openai", "gpt-4o-mini"),
            text="All good.",
            metadata={"provider": "openai", "model": "gpt-4o-mini"},
        )
        self.error_response = LLMResponse(
            model_spec=ModelSpec("openrouter", "meta-llama/llama-3:free"),
            error="401 Unauthorized",
        )

    def tearDown(self):
        self.temp_dir_context.cleanup()

    def test_init(self):
        og = OutputGenerator(output_dir="test_out_dir")
        self.assertEqual(og.output_dir, Path("test_out_dir"))  # OutputGenerator converts to Path

    def test_sanitize_filename(self):
        self.assertEqual(sanitize_filename("openrouter-meta-llama/llama-3:free"), "openrouter-meta-llama-llama-3-free")
        self.assertEqual(sanitize_filename("openai-gpt-4o-mini"), "openai-gpt-4o-mini")

    def test_format_response_markdown(self):
        markdown = format_response_markdown(self.ok_response, now=FIXED_TIME)

        self.assertTrue(markdown.startswith("# openai:gpt-4o-mini\n\nGenerated: 2024-05-17T09:30:05\n\n"))
        self.assertIn("## Response\n\nAll good.", markdown)
        self.assertNotIn("## Metadata", markdown)
        self.assertNotIn("## Error", markdown)

    def test_format_response_markdown_with_metadata(self):
        markdown = format_response_markdown(self.ok_response, include_metadata=True, now=FIXED_TIME)
        self.assertIn("## Metadata\n\n```json\n", markdown)
        self.assertIn('"provider": "openai"', markdown)

    def test_format_response_markdown_error_and_mock(self):
        markdown = format_response_markdown(self.error_response, now=FIXED_TIME)
        self.assertIn("## Error\n\n```\n401 Unauthorized\n```", markdown)
        self.assertNotIn("## Response", markdown)

        mock_response = LLMResponse(model_spec=ModelSpec("openai", "gpt-4o"), text="hi", is_mock=True)
        self.assertIn("mock LLM", format_response_markdown(mock_response))

    def test_create_run_directory(self):
        og = OutputGenerator(self.temp_dir_path / "reports")
        run_dir = og.create_run_directory(now=FIXED_TIME)

        self.assertEqual(run_dir, self.temp_dir_path / "reports" / "run-20240517-093005")
        self.assertTrue(run_dir.is_dir())
        # Creating the same run directory again is harmless
        self.assertEqual(og.create_run_directory(now=FIXED_TIME), run_dir)

    def test_write_responses(self):
        og = OutputGenerator(self.temp_dir_path)
        run_dir = og.create_run_directory(now=FIXED_TIME)

        output_files = og.write_responses([self.ok_response, self.error_response], run_dir, include_metadata=True)

        self.assertEqual(
            output_files,
            {
                "openai:gpt-4o-mini": str(run_dir / "openai-gpt-4o-mini.md"),
                "openrouter:meta-llama/llama-3:free": str(run_dir / "openrouter-meta-llama-llama-3-free.md"),
            },
        )
        ok_content = Path(output_files["openai:gpt-4o-mini"]).read_text(encoding="utf-8")
        self.assertIn("All good.", ok_content)
        self.assertIn("## Metadata", ok_content)
        error_content = Path(output_files["openrouter:meta-llama/llama-3:free"]).read_text(encoding="utf-8")
        self.assertIn("401 Unauthorized", error_content)

    def test_write_responses_colliding_file_names(self):
        og = OutputGenerator(self.temp_dir_path)
        run_dir = og.create_run_directory(now=FIXED_TIME)
        slash = LLMResponse(model_spec=ModelSpec("openrouter", "vendor/model"), text="slash")
        colon = LLMResponse(model_spec=ModelSpec("openrouter", "vendor:model"), text="colon")

        output_files = og.write_responses([slash, colon], run_dir)

        self.assertEqual(output_files["openrouter:vendor/model"], str(run_dir / "openrouter-vendor-model.md"))
        self.assertEqual(output_files["openrouter:vendor:model"], str(run_dir / "openrouter-vendor-model-2.md"))
        self.assertIn("slash", Path(output_files["openrouter:vendor/model"]).read_text(encoding="utf-8"))
        self.assertIn("colon", Path(output_files["openrouter:vendor:model"]).read_text(encoding="utf-8"))

    @patch("builtins.open", side_effect=IOError("Permission denied"))
    def test_write_responses_io_error(self, mock_file_open):
        og = OutputGenerator(self.temp_dir_path)
        with self.assertRaises(IOError):
            og.write_responses([self.ok_response], self.temp_dir_path)

    def test_format_console_summary(self):
        summary = format_console_summary(
            [self.ok_response, self.error_response],
            {"openai:gpt-4o-mini": "/out/openai-gpt-4o-mini.md"},
        )
        lines = summary.splitlines()

        self.assertEqual(lines[0], "Completed 1/2 model(s).")
        self.assertEqual(lines[1], "  [OK] openai:gpt-4o-mini -> /out/openai-gpt-4o-mini.md")
        self.assertEqual(lines[2], "  [ERROR] openrouter:meta-llama/llama-3:free -> (not written)")


if __name__ == '__main__':
    unittest.main()
