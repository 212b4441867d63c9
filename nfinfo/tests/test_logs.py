import logging
import logging.handlers
import sys

import pytest

from nfinfo.logs import setup_logging


@pytest.fixture
def clean_root():
    root = logging.getLogger()
    level = root.level
    yield root
    for h in list(root.handlers):
        if isinstance(h, logging.handlers.RotatingFileHandler) or type(h) is logging.StreamHandler:
            root.removeHandler(h)
            h.close()
    root.setLevel(level)
    if hasattr(root, "_nfinfo_configured"):
        del root._nfinfo_configured


def test_setup_logging_once(tmp_path, clean_root):
    log_file = tmp_path / "logs" / "nfinfo.log"
    assert setup_logging("debug", log_file) == log_file
    added = len(clean_root.handlers)
    setup_logging("debug", log_file)
    assert len(clean_root.handlers) == added
    assert clean_root.level == logging.DEBUG

    logging.getLogger("nfinfo.test").warning("hello file")
    for h in clean_root.handlers:
        h.flush()
    assert "WARNING nfinfo.test: hello file" in log_file.read_text(encoding="utf-8")


def test_console_handler_writes_to_stderr(tmp_path, clean_root):
    setup_logging("info", tmp_path / "nfinfo.log")
    console = [h for h in clean_root.handlers if type(h) is logging.StreamHandler]
    assert len(console) == 1
    assert console[0].stream is sys.stderr
