from __future__ import annotations

import logging
from dataclasses import dataclass

from memguard.shared.logging import (
    configure_logging,
    get_logger,
    update_logging_from_settings,
)


def test_configure_logging_sets_root_handlers(tmp_path) -> None:
    log_file = tmp_path / "memguard.log"
    configure_logging(level="DEBUG", file_path=str(log_file), environment="development")

    root = logging.getLogger()
    assert root.level == logging.DEBUG
    assert any(isinstance(handler, logging.FileHandler) for handler in root.handlers)

    logger = get_logger(__name__)
    logger.info("allocation.succeeded", iteration=1)


def test_access_log_is_quietened() -> None:
    configure_logging(level="INFO", environment="development")
    assert logging.getLogger("uvicorn.access").level == logging.WARNING


def test_production_renders_json(tmp_path) -> None:
    log_file = tmp_path / "memguard.json.log"
    configure_logging(level="INFO", file_path=str(log_file), environment="production")

    get_logger("memguard.test").info("memory.report", working_set_mb=12.5)
    for handler in logging.getLogger().handlers:
        handler.flush()

    content = log_file.read_text(encoding="utf-8")
    assert '"event": "memory.report"' in content
    assert '"working_set_mb": 12.5' in content


def test_stdlib_records_share_the_structured_stream(tmp_path) -> None:
    log_file = tmp_path / "memguard.uvicorn.log"
    configure_logging(level="INFO", file_path=str(log_file), environment="production")

    logging.getLogger("uvicorn.error").warning("Uvicorn running on http://0.0.0.0:8080")
    for handler in logging.getLogger().handlers:
        handler.flush()

    lines = log_file.read_text(encoding="utf-8").splitlines()
    assert any('"event": "Logging configured with level: INFO"' in line for line in lines)

    uvicorn_line = next(line for line in lines if "Uvicorn running" in line)
    assert '"logger": "uvicorn.error"' in uvicorn_line
    assert '"level": "warning"' in uvicorn_line
    assert "_record" not in uvicorn_line


@dataclass
class _LoggingSettings:
    level: str = "WARNING"
    file_path: str | None = None


@dataclass
class _Settings:
    logging: _LoggingSettings
    environment: str = "production"


def test_update_logging_from_settings_applies_configuration() -> None:
    settings = _Settings(logging=_LoggingSettings(level="ERROR"))

    update_logging_from_settings(settings)

    root_logger = logging.getLogger()
    assert root_logger.level == logging.ERROR
