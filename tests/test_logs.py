from __future__ import annotations

import logging

import pytest

from restaurant_ops.logs import configure_logging


@pytest.fixture
def package_logger():
    logger = logging.getLogger("restaurant_ops")
    saved = (list(logger.handlers), logger.level, logger.propagate)
    logger.handlers.clear()
    yield logger
    for handler in logger.handlers:
        handler.close()
    logger.handlers[:] = saved[0]
    logger.setLevel(saved[1])
    logger.propagate = saved[2]


def test_file_handler_is_attached_once(package_logger, tmp_path):
    log_file = tmp_path / "logs" / "debug.log"

    assert configure_logging(str(log_file), "info") is package_logger
    configure_logging(str(tmp_path / "other.log"), "info")

    assert len(package_logger.handlers) == 1
    handler = package_logger.handlers[0]
    assert isinstance(handler, logging.FileHandler)
    assert handler.baseFilename == str(log_file)
    assert package_logger.level == logging.INFO
    assert package_logger.propagate is False


def test_records_land_in_the_file(package_logger, tmp_path):
    log_file = tmp_path / "debug.log"
    configure_logging(str(log_file), "DEBUG")

    logging.getLogger("restaurant_ops.orders").info("order_created id=%s", "ord-1")
    package_logger.handlers[0].flush()

    line = log_file.read_text(encoding="utf-8").strip()
    assert line.endswith("INFO restaurant_ops.orders order_created id=ord-1")


def test_unwritable_path_falls_back_to_null_handler(package_logger, tmp_path):
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("", encoding="utf-8")

    configure_logging(str(blocker / "debug.log"))

    assert len(package_logger.handlers) == 1
    assert isinstance(package_logger.handlers[0], logging.NullHandler)
    assert package_logger.propagate is False
