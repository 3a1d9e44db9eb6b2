"""Tests for the exception decorators and logging setup."""

import inspect

import pytest
from loguru import logger

from timedmeta.config.settings import LoggingConfig
from timedmeta.exceptions import ProviderException, ValidationException
from timedmeta.utils.error_handler import convert_exceptions, log_exceptions
from timedmeta.utils.logging_config import configure_logging, log_manager


@convert_exceptions({KeyError: ProviderException})
def _lookup(mapping, key):
    if key == "bad":
        raise ValidationException("bad key")
    return mapping[key]


@convert_exceptions({OSError: ProviderException})
async def _read(fail):
    if fail:
        raise FileNotFoundError("gone")
    return "ok"


def test_convert_exceptions_sync() -> None:
    assert _lookup({"a": 1}, "a") == 1
    with pytest.raises(ProviderException) as excinfo:
        _lookup({}, "missing")
    assert excinfo.value.details == {"original_exception": "KeyError"}
    assert isinstance(excinfo.value.__cause__, KeyError)


def test_pipeline_exceptions_pass_through() -> None:
    with pytest.raises(ValidationException):
        _lookup({}, "bad")


async def test_convert_exceptions_async() -> None:
    assert await _read(False) == "ok"
    with pytest.raises(ProviderException, match="gone"):
        await _read(True)


def test_decorators_keep_coroutine_functions() -> None:
    @log_exceptions()
    async def step():
        return None

    assert inspect.iscoroutinefunction(_read)
    assert inspect.iscoroutinefunction(step)
    assert not inspect.iscoroutinefunction(_lookup)


async def test_log_exceptions_reraises() -> None:
    messages = []
    sink_id = logger.add(messages.append, level="ERROR")

    @log_exceptions(custom_message="step failed", include_traceback=False)
    async def step():
        raise RuntimeError("boom")

    try:
        with pytest.raises(RuntimeError):
            await step()
    finally:
        logger.remove(sink_id)

    assert any("step failed: boom" in str(message) for message in messages)


def test_configure_logging_file_sink(tmp_path) -> None:
    log_file = tmp_path / "timedmeta.log"
    config = LoggingConfig(level="debug", enable_file_logging=True, log_file=str(log_file))

    configure_logging(config)
    try:
        assert log_manager.level == "DEBUG"
        assert log_manager.console_sink_id is not None
        assert log_manager.file_sink_id is not None
    finally:
        log_manager.disable_file()

    configure_logging(LoggingConfig())
    assert log_manager.file_sink_id is None
