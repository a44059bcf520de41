import logging

from logging_config import get_logger, setup_logging


def _collab_handlers():
    return [h for h in logging.getLogger().handlers if getattr(h, "_collab_handler", False)]


def test_setup_logging_replaces_handlers(tmp_path):
    log_file = tmp_path / "collab.log"
    setup_logging("DEBUG", str(log_file))
    setup_logging("DEBUG", str(log_file))
    assert len(_collab_handlers()) == 2
    assert logging.getLogger().level == logging.DEBUG

    get_logger("tests.logging").info("room r1 created")
    for handler in _collab_handlers():
        handler.flush()
    assert "room r1 created" in log_file.read_text(encoding="utf-8")

    setup_logging("INFO")
    assert len(_collab_handlers()) == 1
