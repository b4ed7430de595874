import io
import logging

from shaderlib import logger
from shaderlib.utils import _set_log_level, env_flag, print_numbered


def test_log_level(monkeypatch):
    monkeypatch.setenv("SHADERLIB_LOG_LEVEL", "debug")
    _set_log_level()
    assert logger.level == logging.DEBUG

    monkeypatch.setenv("SHADERLIB_LOG_LEVEL", "20")
    _set_log_level()
    assert logger.level == logging.INFO

    monkeypatch.delenv("SHADERLIB_LOG_LEVEL")
    _set_log_level()
    assert logger.level == logging.WARN


def test_log_level_invalid(monkeypatch, caplog):
    monkeypatch.setenv("SHADERLIB_LOG_LEVEL", "notalevel")
    with caplog.at_level(logging.WARNING, logger="shaderlib"):
        _set_log_level()
    assert "Invalid shaderlib log level" in caplog.text


def test_env_flag(monkeypatch):
    monkeypatch.delenv("SHADERLIB_TEST_FLAG", raising=False)
    assert not env_flag("SHADERLIB_TEST_FLAG")
    assert env_flag("SHADERLIB_TEST_FLAG", "1")

    for value in ["1", "true", "yes", "on"]:
        monkeypatch.setenv("SHADERLIB_TEST_FLAG", value)
        assert env_flag("SHADERLIB_TEST_FLAG")
    for value in ["", "0", "false", "False", "no"]:
        monkeypatch.setenv("SHADERLIB_TEST_FLAG", value)
        assert not env_flag("SHADERLIB_TEST_FLAG")


def test_print_numbered():
    f = io.StringIO()
    print_numbered("a\nb", f)
    assert f.getvalue() == "    1: a\n    2: b\n"
