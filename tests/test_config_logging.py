"""Tests for config and logging."""

import io
import json
import logging
import sys

import pytest

from warehouse.config import BackendConfig, ListingConfig, WarehouseConfig
from warehouse.exceptions import ConfigurationError
from warehouse.logging import JsonFormatter, get_logger, setup_logging

ENV_VARS = [
    "BACKEND_URL",
    "BACKEND_TIMEOUT",
    "BACKEND_HEALTH_ENDPOINT",
    "PAGE_SIZE",
    "RECENT_LIMIT",
    "LOG_LEVEL",
    "LOG_FORMAT",
    "SEED",
]


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestBackendConfig:
    """Tests for BackendConfig."""

    def test_default_values(self) -> None:
        config = BackendConfig()

        assert config.base_url == "http://localhost:3000"
        assert config.timeout_seconds == 10.0
        assert config.health_endpoint == "/health"

    def test_url_for_joins_slashes(self) -> None:
        config = BackendConfig(base_url="http://api.local/")

        assert config.url_for("/addresses") == "http://api.local/addresses"
        assert config.url_for("streets/3") == "http://api.local/streets/3"


class TestListingConfig:
    def test_default_values(self) -> None:
        config = ListingConfig()

        assert config.page_size == 10
        assert config.recent_limit == 5


class TestWarehouseConfig:
    """Tests for WarehouseConfig."""

    def test_default_values(self) -> None:
        config = WarehouseConfig()

        assert config.backend.base_url == "http://localhost:3000"
        assert config.log_level == "INFO"
        assert config.log_format == "standard"
        assert config.seed is None

    def test_from_env_default(self, clean_env: pytest.MonkeyPatch) -> None:
        config = WarehouseConfig.from_env()

        assert config.backend.base_url == "http://localhost:3000"
        assert config.backend.timeout_seconds == 10.0
        assert config.listing.page_size == 10
        assert config.seed is None

    def test_from_env_custom(self, clean_env: pytest.MonkeyPatch) -> None:
        clean_env.setenv("BACKEND_URL", "http://backend:8080")
        clean_env.setenv("BACKEND_TIMEOUT", "2.5")
        clean_env.setenv("PAGE_SIZE", "25")
        clean_env.setenv("RECENT_LIMIT", "3")
        clean_env.setenv("LOG_LEVEL", "DEBUG")
        clean_env.setenv("LOG_FORMAT", "json")
        clean_env.setenv("SEED", "7")

        config = WarehouseConfig.from_env()

        assert config.backend.base_url == "http://backend:8080"
        assert config.backend.timeout_seconds == 2.5
        assert config.listing.page_size == 25
        assert config.listing.recent_limit == 3
        assert config.log_level == "DEBUG"
        assert config.log_format == "json"
        assert config.seed == 7

    def test_non_numeric_timeout_rejected(self, clean_env: pytest.MonkeyPatch) -> None:
        clean_env.setenv("BACKEND_TIMEOUT", "soon")

        with pytest.raises(ConfigurationError, match="BACKEND_TIMEOUT"):
            WarehouseConfig.from_env()

    def test_non_positive_page_size_rejected(self, clean_env: pytest.MonkeyPatch) -> None:
        clean_env.setenv("PAGE_SIZE", "0")

        with pytest.raises(ConfigurationError, match="PAGE_SIZE"):
            WarehouseConfig.from_env()


class TestSetupLogging:
    """Tests for setup_logging function."""

    def test_setup_logging_default(self) -> None:
        setup_logging()

        assert logging.getLogger("warehouse").level == logging.INFO

    def test_setup_logging_debug(self) -> None:
        setup_logging(level="DEBUG")

        assert logging.getLogger().level == logging.DEBUG

    def test_setup_logging_invalid_level(self) -> None:
        """Test logging with invalid level defaults to INFO."""
        setup_logging(level="INVALID")

        assert logging.getLogger().level == logging.INFO

    def test_setup_logging_json_format(self) -> None:
        setup_logging(format_type="json")

        logger = logging.getLogger()
        assert any(isinstance(h.formatter, JsonFormatter) for h in logger.handlers)

    def test_setup_logging_replaces_handlers(self) -> None:
        logger = logging.getLogger()
        logger.addHandler(logging.StreamHandler())
        logger.addHandler(logging.StreamHandler())

        setup_logging()

        assert len(logger.handlers) == 1

    def test_external_loggers_quieted(self) -> None:
        setup_logging(level="DEBUG")

        assert logging.getLogger("urllib3").level == logging.WARNING
        assert logging.getLogger("faker").level == logging.WARNING


class TestJsonFormatter:
    """Tests for JsonFormatter."""

    def _record(self, level: int = logging.INFO, msg: str = "Endereço liberado") -> logging.LogRecord:
        return logging.LogRecord(
            name="warehouse.actions",
            level=level,
            pathname="/path/to/file.py",
            lineno=42,
            msg=msg,
            args=(),
            exc_info=None,
        )

    def test_format_basic(self) -> None:
        data = json.loads(JsonFormatter().format(self._record()))

        assert data["level"] == "INFO"
        assert data["logger"] == "warehouse.actions"
        assert data["message"] == "Endereço liberado"
        assert "timestamp" in data

    def test_non_ascii_kept_readable(self) -> None:
        result = JsonFormatter().format(self._record())

        assert "Endereço" in result

    def test_format_with_exception(self) -> None:
        try:
            raise ValueError("Test error")
        except ValueError:
            exc_info = sys.exc_info()
        record = self._record(level=logging.ERROR)
        record.exc_info = exc_info

        data = json.loads(JsonFormatter().format(record))

        assert data["level"] == "ERROR"
        assert "ValueError" in data["exception"]

    def test_format_with_extra(self) -> None:
        record = self._record()
        record.extra = {"address_id": "a-1"}

        data = json.loads(JsonFormatter().format(record))

        assert data["address_id"] == "a-1"


class TestGetLogger:
    def test_get_logger(self) -> None:
        logger = get_logger("warehouse.test")

        assert isinstance(logger, logging.Logger)
        assert logger.name == "warehouse.test"

    def test_get_logger_same_instance(self) -> None:
        assert get_logger("test.same") is get_logger("test.same")


class TestWarehouseInit:
    def test_version_exported(self) -> None:
        from warehouse import __version__

        assert isinstance(__version__, str)


class TestContextFields:
    def test_entity_ids_from_extra(self) -> None:
        logger = logging.getLogger("warehouse.test.context")
        record = logger.makeRecord(
            logger.name, logging.INFO, __file__, 1, "Address released", (), None,
            extra={"address_id": "a-1", "street_id": 3},
        )

        data = json.loads(JsonFormatter().format(record))

        assert data["address_id"] == "a-1"
        assert data["street_id"] == "3"
        assert "package_id" not in data

    def test_custom_stream(self) -> None:
        buffer = io.StringIO()
        setup_logging(stream=buffer)

        logging.getLogger("warehouse.test.stream").info("Endereçamento criado")

        assert "Endereçamento criado" in buffer.getvalue()
