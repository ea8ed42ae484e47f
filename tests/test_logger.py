import pytest
import structlog

from install_texlive import config as config_module
from install_texlive import logger as logger_module
from install_texlive.models.config import AdvancedConfig, AppConfig


@pytest.fixture
def configure_calls(monkeypatch: pytest.MonkeyPatch) -> list[dict]:
    calls: list[dict] = []
    monkeypatch.setattr(structlog, "configure", lambda **kwargs: calls.append(kwargs))
    monkeypatch.setattr(logger_module, "_configured_level", None)
    return calls


def test_repeated_loggers_configure_once(configure_calls: list[dict], monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(config_module, "get_config", lambda: AppConfig())

    logger_module.get_logger("first")
    logger_module.get_logger("second")
    logger_module.get_logger("third")

    assert len(configure_calls) == 1


def test_level_change_reconfigures(configure_calls: list[dict]) -> None:
    logger_module.configure_logging("INFO")
    logger_module.configure_logging("DEBUG")
    logger_module.configure_logging("DEBUG")

    assert len(configure_calls) == 2
    assert logger_module._configured_level == 10


def test_level_comes_from_config(configure_calls: list[dict], monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(config_module, "get_config", lambda: AppConfig(advanced=AdvancedConfig(log_level="TRACE")))

    logger_module.get_logger("trace")

    assert logger_module._configured_level == 5


def test_unknown_level_falls_back_to_info(configure_calls: list[dict]) -> None:
    logger_module.configure_logging("LOUD")

    assert logger_module._configured_level == 20
