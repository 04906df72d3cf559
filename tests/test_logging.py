import logging

from hikecast.config.settings import get_logging_config, get_settings
from hikecast.core import logging as hikecast_logging


def test_configure_logging_applies_level_without_touching_cached_config(monkeypatch):
    settings = get_settings()
    debug = settings.model_copy(update={"app": settings.app.model_copy(update={"log_level": "debug"})})
    monkeypatch.setattr(hikecast_logging, "get_settings", lambda: debug)

    try:
        hikecast_logging.configure_logging()

        assert logging.getLogger().level == logging.DEBUG
        cached = get_logging_config()
        assert cached["root"]["level"] == "INFO"
        assert cached["handlers"]["console"]["level"] == "INFO"
    finally:
        monkeypatch.undo()
        hikecast_logging.configure_logging()
