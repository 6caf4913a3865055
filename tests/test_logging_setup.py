import logging
import tempfile
import unittest
from pathlib import Path

from lazyhub.logging_setup import setup_logging


class SetupLoggingTests(unittest.TestCase):
    def tearDown(self) -> None:
        setup_logging()

    def test_without_file_installs_null_handler(self) -> None:
        logger = setup_logging("debug")
        self.assertEqual(logger.level, logging.DEBUG)
        self.assertFalse(logger.propagate)
        self.assertEqual([type(h) for h in logger.handlers], [logging.NullHandler])

    def test_file_handler_writes_records(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            log_file = Path(tmp) / "logs" / "lazyhub.log"
            logger = setup_logging("INFO", log_file)
            logging.getLogger("lazyhub.search.sequencer").info("token %d issued", 3)
            logging.getLogger("lazyhub.search.sequencer").debug("hidden")
            for handler in logger.handlers:
                handler.flush()
            text = log_file.read_text(encoding="utf-8")
            setup_logging()

        self.assertIn("INFO lazyhub.search.sequencer", text)
        self.assertIn("token 3 issued", text)
        self.assertNotIn("hidden", text)

    def test_repeated_setup_replaces_handlers(self) -> None:
        setup_logging()
        logger = setup_logging()
        self.assertEqual(len(logger.handlers), 1)


if __name__ == "__main__":
    unittest.main()
