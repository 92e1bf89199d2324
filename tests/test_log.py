"""Tests for wifihealth/utils/log.py: logging configuration and JSON formatter."""
import json
import logging
import os
from unittest.mock import patch

from wifihealth.utils.log import JsonFormatter, default_log_dir, default_log_path


class TestJsonFormatter:
    def test_basic_format(self):
        formatter = JsonFormatter()
        record = logging.LogRecord(
            name="collector", level=logging.INFO, pathname="collector.py",
            lineno=1, msg="ping %s", args=("1.1.1.1",), exc_info=None,
        )
        parsed = json.loads(formatter.format(record))
        assert parsed["level"] == "INFO"
        assert parsed["logger"] == "collector"
        assert parsed["msg"] == "ping 1.1.1.1"
        assert parsed["thread"] == "MainThread"
        assert parsed["ts"].endswith("Z")

    def test_exception_included(self):
        formatter = JsonFormatter()
        try:
            raise ValueError("bad output")
        except ValueError:
            import sys
            exc_info = sys.exc_info()
        record = logging.LogRecord(
            name="test", level=logging.ERROR, pathname="test.py",
            lineno=1, msg="failed", args=(), exc_info=exc_info,
        )
        parsed = json.loads(formatter.format(record))
        assert "ValueError" in parsed["exception"]


class TestSetupLogging:
    def test_idempotent(self):
        """setup_logging should only configure once."""
        import wifihealth.utils.log as log_module
        root = logging.getLogger()
        original = log_module._configured
        handlers = list(root.handlers)
        log_module._configured = False
        try:
            log_module.setup_logging()
            count = len(root.handlers)
            log_module.setup_logging()
            assert len(root.handlers) == count
        finally:
            log_module._configured = original
            root.handlers = handlers

    def test_log_file_created(self, tmp_path):
        import wifihealth.utils.log as log_module
        root = logging.getLogger()
        original = log_module._configured
        handlers = list(root.handlers)
        log_file = tmp_path / "logs" / "wifi-health.log"
        log_module._configured = False
        try:
            log_module.setup_logging(log_file=str(log_file))
            logging.getLogger("collector").info("hello")
            for handler in root.handlers:
                handler.flush()
            assert "hello" in log_file.read_text()
        finally:
            for handler in root.handlers:
                if handler not in handlers:
                    handler.close()
            log_module._configured = original
            root.handlers = handlers


class TestDefaultLogDir:
    def test_directory_is_created(self, tmp_path):
        fake_home = str(tmp_path / "fakehome")
        with patch("wifihealth.utils.common.get_real_user_home", return_value=fake_home):
            result = default_log_dir()
        assert os.path.isdir(result)
        assert result.endswith(os.path.join("wifi-health", "logs"))

    def test_log_path_inside_dir(self, tmp_path):
        fake_home = str(tmp_path / "fakehome")
        with patch("wifihealth.utils.common.get_real_user_home", return_value=fake_home):
            assert default_log_path().startswith(default_log_dir())
            assert default_log_path().endswith("wifi-health.log")
