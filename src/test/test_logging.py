import pytest
import logging
import json


class TestLogging:
    """Test logging functions without external dependencies"""

    def test_logger_configuration(self):
        """Test basic logger setup and configuration"""
        from src.infra.logging_config import setup_logging

        logger = setup_logging("test_logger")

        assert logger.name == "test_logger"
        assert logger.level == logging.INFO
        assert len(logger.handlers) > 0

    def test_logger_writes_json_format(self, tmp_path):
        """Test JSON log format writing"""
        log_file = tmp_path / "test.log"

        from src.infra.logging_config import setup_logging
        logger = setup_logging("test_json", log_file=str(log_file))
        logger.info("Account created", extra={"user_id": "TaroYamada"})

        with open(log_file, encoding="utf-8") as f:
            log_line = json.loads(f.readline())
        assert log_line["message"] == "Account created"
        assert log_line["user_id"] == "TaroYamada"
        assert log_line["level"] == "INFO"
        assert "timestamp" in log_line
        assert "msg" not in log_line

    def test_logger_serializes_non_json_extras(self, tmp_path):
        log_file = tmp_path / "extras.log"

        from src.infra.logging_config import setup_logging
        logger = setup_logging("test_extras", log_file=str(log_file))
        logger.info("Profile updated", extra={"fields": ("nickname",), "path": tmp_path})

        with open(log_file, encoding="utf-8") as f:
            log_line = json.loads(f.readline())
        assert log_line["fields"] == ["nickname"]
        assert log_line["path"] == str(tmp_path)

    def test_logger_different_levels(self, capsys):
        """Test different logging levels"""
        from src.infra.logging_config import setup_logging
        logger = setup_logging("test_levels", console=True)

        logger.debug("Debug message")
        logger.info("Info message")
        logger.warning("Warning message")

        captured = capsys.readouterr()
        # DEBUG should not appear at INFO level
        assert "Debug message" not in captured.out
        assert "Info message" in captured.out
        assert "Warning message" in captured.out

    def test_logger_with_exception(self, tmp_path):
        """Test exception logging with traceback"""
        log_file = tmp_path / "error.log"

        from src.infra.logging_config import setup_logging
        logger = setup_logging("test_exception", log_file=str(log_file))

        try:
            raise ValueError("corrupt users file")
        except ValueError:
            logger.error("Store failure", exc_info=True)

        with open(log_file, encoding="utf-8") as f:
            log_line = json.loads(f.readline())
        assert "exception" in log_line
        assert "corrupt users file" in log_line["exception"]

    def test_get_logger_caches_instances(self):
        from src.infra.logging_config import get_logger

        assert get_logger("test_cached") is get_logger("test_cached")


class TestAccessLog:
    """Test the access log middleware through the application"""

    @pytest.fixture
    def access_records(self):
        from src.infra.logging_config import get_logger

        records = []

        class ListHandler(logging.Handler):
            def emit(self, record):
                records.append(record)

        handler = ListHandler()
        access_logger = get_logger("api.access")
        access_logger.addHandler(handler)
        yield records
        access_logger.removeHandler(handler)

    def test_request_completion_is_logged(self, client, access_records):
        client.get("/health")

        completed = [r for r in access_records if r.getMessage() == "Request completed"]
        assert completed
        assert completed[-1].path == "/health"
        assert completed[-1].status_code == 200
        assert completed[-1].request_id

    def test_access_log_does_not_contain_credentials(self, client, access_records):
        from conftest import basic_auth

        client.post("/signup", json={"user_id": "TaroYamada", "password": "PASSwd4TY"})
        client.get("/users/TaroYamada", headers=basic_auth("TaroYamada", "PASSwd4TY"))

        assert access_records
        for record in access_records:
            dumped = json.dumps(record.__dict__, default=str)
            assert "PASSwd4TY" not in dumped
            assert "VGFyb1lhbWFkYTpQQVNTd2Q0VFk" not in dumped
