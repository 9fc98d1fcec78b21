"""Tests for logging setup."""

import logging

import svccheck.logging_setup as ls


def _own_handlers(logger):
    """Handlers added by setup_logging, ignoring any installed by the test runner."""
    return [h for h in logger.handlers if isinstance(h, (logging.NullHandler, logging.FileHandler))]


class TestSetupLogging:
    def setup_method(self):
        # Reset the module-level flag for each test
        ls._CONFIGURED = False
        logger = logging.getLogger("svccheck")
        for handler in logger.handlers:
            handler.close()
        logger.handlers.clear()

    teardown_method = setup_method

    def test_no_file_uses_null_handler(self):
        ls.setup_logging()
        logger = logging.getLogger("svccheck")
        handlers = _own_handlers(logger)
        assert len(handlers) == 1
        assert isinstance(handlers[0], logging.NullHandler)
        assert logger.level == logging.INFO

    def test_idempotent(self, tmp_path):
        ls.setup_logging(tmp_path / "check.log")
        ls.setup_logging(tmp_path / "check.log")
        assert len(_own_handlers(logging.getLogger("svccheck"))) == 1

    def test_custom_level(self):
        ls.setup_logging(level="DEBUG")
        assert logging.getLogger("svccheck").level == logging.DEBUG

    def test_appends_with_short_levels(self, tmp_path):
        log_file = tmp_path / "logs" / "check.log"
        log_file.parent.mkdir()
        log_file.write_text("previous line\n")

        ls.setup_logging(log_file)
        logger = logging.getLogger("svccheck.test")
        logger.info("started")
        logger.warning("slow")
        logger.error("failed")
        for handler in logging.getLogger("svccheck").handlers:
            handler.flush()

        lines = log_file.read_text().splitlines()
        assert lines[0] == "previous line"
        assert "[INFO] started" in lines[1]
        assert "[WARN] slow" in lines[2]
        assert "[ERROR] failed" in lines[3]

    def test_creates_parent_dir(self, tmp_path):
        log_file = tmp_path / "nested" / "dir" / "check.log"
        ls.setup_logging(log_file)
        logging.getLogger("svccheck").info("hello")
        assert log_file.exists()
