from __future__ import annotations

import logging

from librarytui.log import configure_logging


def test_configure_logging_writes_to_file(tmp_path) -> None:
    path = tmp_path / "logs" / "librarytui.log"
    assert configure_logging(logging.DEBUG, path) == path
    logger = logging.getLogger("librarytui.ingest")
    logger.debug("Loaded %d record(s)", 3)
    package_logger = logging.getLogger("librarytui")
    for handler in list(package_logger.handlers):
        handler.flush()
        package_logger.removeHandler(handler)
        handler.close()
    text = path.read_text(encoding="utf-8")
    assert "DEBUG librarytui.ingest: Loaded 3 record(s)" in text
