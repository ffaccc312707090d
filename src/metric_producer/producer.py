"""
Metric producer - times a unit of work and emits one metric line.

Provides:
- Builder: MetricProducer.create(name).add_param(...).measure(func)
- Coroutines: await MetricProducer.create(name).measure_async(coro_func)
- Decorator: @measured("name")

Design:
- Timing starts when measure() is called, not when the producer is built
- Exactly one line is emitted per measurement, at INFO (or DEBUG for
  producers built with create_in_debug)
- A failing operation adds ``exception: true`` and the failure is re-raised
  unchanged after the line is emitted
- Default params (executionTime, class, method) follow the user params

Usage:
    result = (
        MetricProducer.create("fetch_quotes", QuoteClient, "fetch()")
        .add_param("symbols", 42)
        .add_param("source", "finra")
        .measure(client.fetch)
    )

    # Logs (INFO):
    # metric-name: "fetch_quotes", params: {symbols: 42, source: "finra",
    #     executionTime: 87, class: "app.clients.QuoteClient", method: "fetch()"}

A producer is single-use and not thread-safe; build a new one per call.
"""

import functools
import inspect
import time
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from metric_producer.config import get_settings
from metric_producer.logging import get_logger
from metric_producer.params import Param

T = TypeVar("T")
F = TypeVar("F", bound=Callable[..., Any])

PARAM_CLASS_NAME = "class"
PARAM_METHOD_NAME = "method"
PARAM_EXECUTION_TIME = "executionTime"
PARAM_EXCEPTION = "exception"


def _origin_name(origin: type | str | None) -> str | None:
    """Classes are reported by their fully qualified name."""
    if origin is None or isinstance(origin, str):
        return origin
    return f"{origin.__module__}.{origin.__qualname__}"


class MetricProducer:
    """Builder that measures one operation and logs it as a metric line."""

    def __init__(
        self,
        name: str,
        origin: type | str | None = None,
        operation: str | None = None,
        debug: bool = False,
    ):
        self.name = name
        self.origin = _origin_name(origin)
        self.operation = operation
        self.debug = debug
        self.params: list[Param] = []
        self.started_at: float | None = None

    @classmethod
    def create(
        cls,
        name: str,
        origin: type | str | None = None,
        operation: str | None = None,
    ) -> "MetricProducer":
        """Create a producer that emits at INFO level."""
        return cls(name, origin, operation, debug=False)

    @classmethod
    def create_in_debug(
        cls,
        name: str,
        origin: type | str | None = None,
        operation: str | None = None,
    ) -> "MetricProducer":
        """Create a producer that emits at DEBUG level."""
        return cls(name, origin, operation, debug=True)

    def add_param(self, name: str, value: Any) -> "MetricProducer":
        """Render ``value`` and append it to the metric params."""
        self.params.append(Param.of(name, value))
        return self

    def measure(self, operation: Callable[..., T], /, *args: Any, **kwargs: Any) -> T:
        """
        Run ``operation`` and emit the metric line.

        Args:
            operation: Callable to measure
            *args: Positional arguments passed to the operation
            **kwargs: Keyword arguments passed to the operation

        Returns:
            Whatever the operation returns

        Raises:
            Whatever the operation raises, after the line has been emitted
        """
        self.started_at = time.perf_counter()
        try:
            return operation(*args, **kwargs)
        except BaseException:
            self.add_param(PARAM_EXCEPTION, True)
            raise
        finally:
            self._emit()

    async def measure_async(
        self, operation: Callable[..., Awaitable[T]], /, *args: Any, **kwargs: Any
    ) -> T:
        """Await ``operation`` and emit the metric line (see measure)."""
        self.started_at = time.perf_counter()
        try:
            return await operation(*args, **kwargs)
        except BaseException:
            self.add_param(PARAM_EXCEPTION, True)
            raise
        finally:
            self._emit()

    @property
    def elapsed_ms(self) -> int:
        """Whole milliseconds since measurement started (0 before)."""
        if self.started_at is None:
            return 0
        return int((time.perf_counter() - self.started_at) * 1000)

    def build_message(self) -> str:
        """Format the metric line from the params collected so far."""
        params = ", ".join(str(param) for param in self.params)
        return f'metric-name: "{self.name}", params: {{{params}}}'

    def _add_default_params(self) -> None:
        self.add_param(PARAM_EXECUTION_TIME, self.elapsed_ms)
        if self.origin is not None:
            self.add_param(PARAM_CLASS_NAME, self.origin)
        if self.operation is not None:
            self.add_param(PARAM_METHOD_NAME, self.operation)

    def _emit(self) -> None:
        self._add_default_params()
        message = self.build_message()

        log = get_logger(get_settings().logger_name)
        if self.debug:
            log.debug(message)
        else:
            log.info(message)

    def __repr__(self) -> str:
        return (
            f"MetricProducer(name={self.name!r}, origin={self.origin!r}, "
            f"operation={self.operation!r}, debug={self.debug!r})"
        )


create = MetricProducer.create
create_in_debug = MetricProducer.create_in_debug


def measured(
    name: str,
    origin: type | str | None = None,
    operation: str | None = None,
    *,
    debug: bool = False,
    **params: Any,
) -> Callable[[F], F]:
    """
    Decorator that emits a metric line for every call of the function.

    Usage:
        @measured("compute_summaries", source="finra")
        def compute_summaries(records):
            return aggregate(records)

        # Each call logs:
        # metric-name: "compute_summaries", params: {source: "finra",
        #     executionTime: 12, class: "app.jobs", method: "compute_summaries"}

    Args:
        name: Metric name
        origin: Reported as ``class`` (defaults to the function's module)
        operation: Reported as ``method`` (defaults to the function's qualname)
        debug: Emit at DEBUG instead of INFO
        **params: Static params added to every line, in keyword order
    """
    factory = MetricProducer.create_in_debug if debug else MetricProducer.create

    def decorator(func: F) -> F:
        func_origin = origin if origin is not None else func.__module__
        func_operation = operation if operation is not None else func.__qualname__

        def producer() -> MetricProducer:
            metric = factory(name, func_origin, func_operation)
            for key, value in params.items():
                metric.add_param(key, value)
            return metric

        if inspect.iscoroutinefunction(func):
            @functools.wraps(func)
            async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
                return await producer().measure_async(func, *args, **kwargs)
            return async_wrapper  # type: ignore

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            return producer().measure(func, *args, **kwargs)

        return wrapper  # type: ignore

    return decorator
