"""
Tests for the lightweight logger.
"""
from __future__ import annotations

from image_gallery import log


def test_level_threshold(monkeypatch, capsys):
    monkeypatch.setattr(log, "LOG_LEVEL", "INFO")
    logger = log.get_logger("unit")
    logger.debug("hidden %d", 1)
    logger.info("shown %d", 2)
    err = capsys.readouterr().err
    assert "hidden" not in err
    assert " INFO unit shown 2" in err


def test_error_with_cause(monkeypatch, capsys):
    monkeypatch.setattr(log, "LOG_LEVEL", "DEBUG")
    try:
        raise ValueError("boom")
    except ValueError as exc:
        log.get_logger("unit").error("failed name=%r", "a.png", exc_info=exc)
    err = capsys.readouterr().err
    assert "ERROR unit failed name='a.png'" in err
    assert "Traceback" in err
    assert "ValueError: boom" in err


def test_log_file(monkeypatch, tmp_path, capsys):
    target = tmp_path / "gallery.log"
    monkeypatch.setattr(log, "LOG_FILE", str(target))
    monkeypatch.setattr(log, "LOG_LEVEL", "DEBUG")
    logger = log.get_logger("filelog")
    logger.warning("disk %s", "ok")
    capsys.readouterr()
    assert "WARNING filelog disk ok" in target.read_text(encoding="utf-8")
    assert log.get_log_file_path() == str(target)
