"""
Prometheus metrics for the data-access layer.

A Metrics object owns its collectors and registers them into an explicit
CollectorRegistry. Nothing is registered globally; create one Metrics at
process start and pass it to every component that records measurements.
"""

import time
from contextlib import contextmanager
from typing import Iterator, Optional

from prometheus_client import (
    CollectorRegistry,
    Counter,
    Gauge,
    Histogram,
    generate_latest,
)

from ..constants import SERVICE_NAME


SUBSYSTEM_DATABASE = "database"

# 50ms doubling up to ~25s
COMMAND_DURATION_BUCKETS = tuple(0.05 * (2 ** i) for i in range(10))


class Metrics:
    """Collectors for database command and object metrics."""

    def __init__(
        self,
        registry: Optional[CollectorRegistry] = None,
        namespace: str = SERVICE_NAME,
        version: str = "",
    ):
        """
        Create and register all collectors.

        Args:
            registry: Registry to register into (a fresh one if None)
            namespace: Metric name prefix
            version: Service version reported by the service_info gauge
        """
        self.registry = registry if registry is not None else CollectorRegistry()
        self.namespace = namespace

        self.command_duration = Histogram(
            "command_duration_seconds",
            "Observation of command durations against the database.",
            ["command"],
            namespace=namespace,
            subsystem=SUBSYSTEM_DATABASE,
            buckets=COMMAND_DURATION_BUCKETS,
            registry=self.registry,
        )
        self.command_errors = Counter(
            "command_errors_total",
            "Total number of errors that occurred from DB commands.",
            ["command"],
            namespace=namespace,
            subsystem=SUBSYSTEM_DATABASE,
            registry=self.registry,
        )
        self.objects_changed = Counter(
            "objects_changed_total",
            "Total number of objects created, updated or deleted.",
            ["entity", "operation"],
            namespace=namespace,
            subsystem=SUBSYSTEM_DATABASE,
            registry=self.registry,
        )
        self.objects_retrieved = Counter(
            "objects_retrieved_total",
            "Total number of objects retrieved.",
            ["entity"],
            namespace=namespace,
            subsystem=SUBSYSTEM_DATABASE,
            registry=self.registry,
        )
        self.object_errors = Counter(
            "object_errors_total",
            "Total number of errors that occurred during interacting with objects.",
            ["entity", "operation"],
            namespace=namespace,
            subsystem=SUBSYSTEM_DATABASE,
            registry=self.registry,
        )
        self.service_info = Gauge(
            "service_info",
            "Static information about the running service.",
            ["service", "version"],
            namespace=namespace,
            registry=self.registry,
        )
        self.service_info.labels(service=namespace, version=version).set(1)

    @contextmanager
    def time_command(self, command: str) -> Iterator[None]:
        """
        Observe the duration of a database command.

        Failures are counted against the same command label and re-raised.
        """
        start = time.perf_counter()
        try:
            yield
        except BaseException:
            self.track_command_error(command)
            raise
        finally:
            self.observe_command_duration(command, time.perf_counter() - start)

    def observe_command_duration(self, command: str, seconds: float) -> None:
        self.command_duration.labels(command=command).observe(seconds)

    def track_command_error(self, command: str) -> None:
        self.command_errors.labels(command=command).inc()

    def track_objects_changed(self, amount: int, entity: str, operation: str) -> None:
        if amount > 0:
            self.objects_changed.labels(entity=entity, operation=operation).inc(amount)

    def track_objects_retrieved(self, amount: int, entity: str) -> None:
        if amount > 0:
            self.objects_retrieved.labels(entity=entity).inc(amount)

    def track_object_error(self, entity: str, operation: str) -> None:
        self.object_errors.labels(entity=entity, operation=operation).inc()

    def export(self) -> bytes:
        """Render all collectors in the Prometheus text exposition format."""
        return generate_latest(self.registry)
