from __future__ import annotations

import io
import json
import os
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from grrs.runtime_logging import configure_runtime_logging, get_runtime_logger, parse_level


class RuntimeLoggingTests(unittest.TestCase):
    def tearDown(self) -> None:
        configure_runtime_logging(level="off")

    def test_writes_jsonl_and_filters_by_level(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "runtime.jsonl"
            logger = configure_runtime_logging(level="info", log_file=path)
            logger.debug("debug.hidden", foo="bar")
            logger.info("info.visible", foo="bar")

            lines = path.read_text(encoding="utf-8").splitlines()
            self.assertGreaterEqual(len(lines), 2)  # includes logging.configured event
            payloads = [json.loads(line) for line in lines]
            self.assertTrue(any(item["event"] == "info.visible" for item in payloads))
            self.assertFalse(any(item["event"] == "debug.hidden" for item in payloads))
            self.assertEqual(logger.counts["info"], 2)

    def test_uses_environment_variables(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "from-env.jsonl"
            with patch.dict(
                os.environ,
                {"GRRS_LOG_LEVEL": "debug", "GRRS_LOG_FILE": str(path)},
                clear=False,
            ):
                logger = configure_runtime_logging()
                logger.debug("env.debug", alpha=1)

            lines = path.read_text(encoding="utf-8").splitlines()
            payloads = [json.loads(line) for line in lines]
            self.assertTrue(any(item["event"] == "env.debug" for item in payloads))

    def test_verbose_mirrors_to_stderr(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "verbose.jsonl"
            with patch("sys.stderr", new_callable=io.StringIO) as stderr:
                logger = configure_runtime_logging(level="error", log_file=path, verbose=True)
                logger.debug("walk.ignored", path="a.log")

            self.assertEqual(logger.level, "debug")
            self.assertIn("[debug] walk.ignored path=a.log", stderr.getvalue())

    def test_off_disables_logging(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "off.jsonl"
            configure_runtime_logging(level="off", log_file=path)
            get_runtime_logger().error("never.written")

            self.assertFalse(path.exists())

    def test_parse_level_aliases(self) -> None:
        self.assertEqual(parse_level("WARN"), "warning")
        self.assertEqual(parse_level("none"), "off")
        self.assertEqual(parse_level("bogus", default="info"), "info")
        self.assertEqual(parse_level(None), "warning")


if __name__ == "__main__":
    unittest.main()
