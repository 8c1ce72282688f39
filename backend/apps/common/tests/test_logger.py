import logging
import unittest

from apps.common import get_logger


class AppLoggerTests(unittest.TestCase):
    def test_bind_merges_context_without_mutating_parent(self):
        parent = get_logger("apps.tests.logger", component="carts")
        child = parent.bind(layer="service")
        self.assertEqual(parent.context, {"component": "carts"})
        self.assertEqual(child.context, {"component": "carts", "layer": "service"})

    def test_message_carries_bound_and_call_context(self):
        log = get_logger("apps.tests.logger").bind(component="carts")
        with self.assertLogs("apps.tests.logger", level="INFO") as captured:
            log.info("Checkout completed", cart_id=3, charged="200.00")
        self.assertEqual(
            captured.records[0].getMessage(),
            "Checkout completed | component=carts cart_id=3 charged=200.00",
        )

    def test_exception_attaches_traceback(self):
        log = get_logger("apps.tests.logger")
        with self.assertLogs("apps.tests.logger", level="ERROR") as captured:
            try:
                raise RuntimeError("boom")
            except RuntimeError:
                log.exception("Unhandled")
        record = captured.records[0]
        self.assertEqual(record.levelno, logging.ERROR)
        self.assertIsNotNone(record.exc_info)

    def test_disabled_level_is_skipped(self):
        log = get_logger("apps.tests.logger.quiet")
        logging.getLogger("apps.tests.logger.quiet").setLevel(logging.WARNING)
        with self.assertLogs("apps.tests.logger.quiet", level="WARNING") as captured:
            log.debug("hidden")
            log.warning("shown", reason=None)
        self.assertEqual([r.getMessage() for r in captured.records], ["shown | reason=None"])


if __name__ == "__main__":
    unittest.main()
