from __future__ import annotations

import json
import logging
import sys
import unittest
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

from puzzle_api.observability import JsonFormatter


class TestJsonFormatter(unittest.TestCase):
    def test_extra_fields_and_static_fields_are_merged(self) -> None:
        formatter = JsonFormatter(static_fields={"app": "Puzzle Leagues API", "env": "test"})
        record = logging.LogRecord(
            name="puzzle_api.modules.scores.service",
            level=logging.WARNING,
            pathname=__file__,
            lineno=1,
            msg="Skipping league after failed score write.",
            args=None,
            exc_info=None,
        )
        record.league_id = "abcd1234"

        payload = json.loads(formatter.format(record))

        self.assertEqual(payload["level"], "WARNING")
        self.assertEqual(payload["logger"], "puzzle_api.modules.scores.service")
        self.assertEqual(payload["message"], "Skipping league after failed score write.")
        self.assertEqual(payload["league_id"], "abcd1234")
        self.assertEqual(payload["app"], "Puzzle Leagues API")
        self.assertEqual(payload["env"], "test")
        self.assertNotIn("lineno", payload)
        self.assertNotIn("pathname", payload)


if __name__ == "__main__":
    unittest.main()
