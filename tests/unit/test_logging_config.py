import io
import logging
import unittest

from contextpack.logging_config import setup_logging


class TestSetupLogging(unittest.TestCase):

    def tearDown(self):
        setup_logging(logging.INFO)

    def _own_handlers(self, logger):
        return [h for h in logger.handlers if getattr(h, "_contextpack_handler", False)]

    def test_repeated_setup_does_not_stack_handlers(self):
        setup_logging()
        logger = setup_logging()
        self.assertEqual(len(self._own_handlers(logger)), 1)

    def test_string_levels(self):
        self.assertEqual(setup_logging("debug").level, logging.DEBUG)
        self.assertEqual(setup_logging("WARNING").level, logging.WARNING)
        self.assertEqual(setup_logging("not-a-level").level, logging.INFO)

    def test_custom_stream(self):
        stream = io.StringIO()
        logger = setup_logging(logging.INFO, stream=stream)
        logger.info("routed")
        self.assertIn("contextpack - INFO - routed", stream.getvalue())


if __name__ == '__main__':
    unittest.main()
