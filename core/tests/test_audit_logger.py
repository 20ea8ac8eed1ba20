"""Audit logger persistence and filtering."""

from __future__ import annotations

import tempfile
import unittest
from datetime import timezone
from pathlib import Path

from core.audit_logging.logic.audit_logger import AuditLogger


class TestAuditLogger(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.logger = AuditLogger(Path(self._tmp.name) / "logs" / "logs.db")

    def tearDown(self) -> None:
        self.logger.close()
        self._tmp.cleanup()

    def test_log_and_query(self) -> None:
        self.logger.log("Signature", "SignStart", reference_id="DOC-1")
        self.logger.log("Signature", "SignFailed", reference_id="DOC-1", level="ERROR", message="boom")
        self.logger.log("Signature", "SignStart", reference_id="DOC-2")

        self.assertEqual(len(self.logger.fetch_logs()), 3)
        doc1 = self.logger.query_logs(reference_id="DOC-1")
        self.assertEqual([e.event for e in doc1], ["SignFailed", "SignStart"])
        errors = self.logger.query_logs(level="ERROR")
        self.assertEqual(len(errors), 1)
        self.assertEqual(errors[0].message, "boom")
        self.assertEqual(errors[0].timestamp.tzinfo, timezone.utc)
        self.assertEqual(errors[0].as_dict()["feature"], "Signature")

    def test_clear(self) -> None:
        self.logger.log("Signature", "SignStart")
        self.logger.clear_logs()
        self.assertEqual(self.logger.fetch_logs(), [])


if __name__ == "__main__":
    unittest.main()
