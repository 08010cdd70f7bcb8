"""Process metrics: a thin, instance-scoped layer over prometheus_client.

Every application owns one ``MetricsRegistry`` (backed by its own
``CollectorRegistry``) instead of the library's global default registry, so a
test can build a fresh app and read absolute values rather than deltas.
prometheus_client guards each metric value with its own lock, so handles may
be updated from any thread without further coordination.
"""
from dataclasses import dataclass

from prometheus_client import (
    CollectorRegistry,
    Counter,
    GCCollector,
    Gauge,
    PlatformCollector,
    ProcessCollector,
    generate_latest,
)

REQUESTS_TOTAL = "app_requests_total"
ACTIVE_USERS = "app_active_users"


class DuplicateMetricError(ValueError):
    pass


def _counter_series(name):
    # prometheus_client drops a trailing _total and exposes base, _total and _created
    base = name[:-len("_total")] if name.endswith("_total") else name
    return {base, f"{base}_total", f"{base}_created"}


class CounterHandle:
    def __init__(self, counter, name, label_names, registry):
        self._counter = counter
        self._label_names = tuple(label_names)
        self._registry = registry
        self._sample_name = name if name.endswith("_total") else f"{name}_total"

    def increment(self, *label_values):
        if self._label_names:
            self._counter.labels(*label_values).inc()
        else:
            self._counter.inc()

    def value(self, *label_values):
        labels = dict(zip(self._label_names, label_values))
        value = self._registry.sample_value(self._sample_name, labels)
        return value if value is not None else 0.0


class GaugeHandle:
    def __init__(self, gauge, name, registry):
        self._gauge = gauge
        self._name = name
        self._registry = registry

    def set(self, value):
        self._gauge.set(value)

    def value(self):
        value = self._registry.sample_value(self._name)
        return value if value is not None else 0.0


class MetricsRegistry:
    """Named counters and gauges, exported in Prometheus text format."""

    def __init__(self, include_runtime_collectors=False):
        self._registry = CollectorRegistry(auto_describe=True)
        self._series = set()
        if include_runtime_collectors:
            ProcessCollector(registry=self._registry)
            PlatformCollector(registry=self._registry)
            GCCollector(registry=self._registry)

    @property
    def collector_registry(self):
        return self._registry

    def _check_free(self, name, series):
        taken = self._series & series
        if taken:
            raise DuplicateMetricError(
                f"metric {name!r} collides with registered series {sorted(taken)}"
            )

    def register_counter(self, name, documentation, label_names=()):
        series = _counter_series(name)
        self._check_free(name, series)
        counter = Counter(name, documentation, list(label_names), registry=self._registry)
        self._series |= series
        return CounterHandle(counter, name, label_names, self)

    def register_gauge(self, name, documentation):
        series = {name}
        self._check_free(name, series)
        gauge = Gauge(name, documentation, registry=self._registry)
        self._series |= series
        return GaugeHandle(gauge, name, self)

    def sample_value(self, name, labels=None):
        return self._registry.get_sample_value(name, labels=labels or {})

    def render(self) -> bytes:
        return generate_latest(self._registry)

    def export(self):
        """Yield the current exposition one line at a time.

        Each call takes a fresh snapshot, so the generator can be restarted
        simply by calling ``export()`` again.
        """
        yield from self.render().decode("utf-8").splitlines()


@dataclass(frozen=True)
class AppMetrics:
    registry: MetricsRegistry
    requests: CounterHandle
    active_users: GaugeHandle


def create_app_metrics(registry=None):
    registry = registry if registry is not None else MetricsRegistry()
    requests = registry.register_counter(
        REQUESTS_TOTAL, "Number of requests to each endpoint", ["endpoint", "status"]
    )
    active_users = registry.register_gauge(ACTIVE_USERS, "Simulated number of active users")
    return AppMetrics(registry=registry, requests=requests, active_users=active_users)
