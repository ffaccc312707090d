"""
Shared pytest fixtures for metric-producer tests.

Every test starts from structlog defaults, fresh settings and an
unconfigured logging module, so ``capture_logs`` sees every emitted line.
"""

import logging

import pytest
import structlog

import metric_producer.logging as metric_logging
from metric_producer.config import reset_settings


@pytest.fixture(autouse=True)
def _clean_logging(monkeypatch):
    """Reset structlog, stdlib root logger and cached settings around a test."""
    root = logging.getLogger()
    level = root.level

    structlog.reset_defaults()
    reset_settings()
    monkeypatch.setattr(metric_logging, "_configured", False)

    yield

    structlog.reset_defaults()
    reset_settings()
    # Drop handlers installed by logging.basicConfig
    for handler in root.handlers[:]:
        if type(handler) is logging.StreamHandler:
            root.removeHandler(handler)
    root.setLevel(level)
    for name in ("metric_producer", "app.metrics"):
        logging.getLogger(name).setLevel(logging.NOTSET)


class FakeClock:
    """perf_counter stand-in returning scripted readings, then the last one."""

    def __init__(self, *readings: float):
        self._readings = list(readings)

    def __call__(self) -> float:
        if len(self._readings) > 1:
            return self._readings.pop(0)
        return self._readings[0]


@pytest.fixture
def fake_clock(monkeypatch):
    """Patch the producer clock: measurement starts at 10.0s, ends 250ms later."""
    import metric_producer.producer as producer_module

    clock = FakeClock(10.0, 10.25)
    monkeypatch.setattr(producer_module.time, "perf_counter", clock)
    return clock
