"""
Metric Producer - timed, structured metric lines for units of work.

Usage:
    from metric_producer import MetricProducer, configure_logging

    configure_logging()

    (
        MetricProducer.create("import_batch", ImportJob, "run()")
        .add_param("rows", 5000)
        .measure(job.run)
    )
"""

__version__ = "0.1.0"

from metric_producer.config import Settings, get_settings, reset_settings
from metric_producer.logging import configure_logging, get_logger
from metric_producer.params import Param, ParamKind, classify, render_value
from metric_producer.producer import (
    MetricProducer,
    create,
    create_in_debug,
    measured,
)

__all__ = [
    "MetricProducer",
    "Param",
    "ParamKind",
    "Settings",
    "__version__",
    "classify",
    "configure_logging",
    "create",
    "create_in_debug",
    "get_logger",
    "get_settings",
    "measured",
    "render_value",
    "reset_settings",
]
