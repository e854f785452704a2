"""Prometheus metrics for roadmap generation and the agent endpoint."""

from prometheus_client import Counter, Histogram

generation_latency_ms = Histogram(
    "roadmap_generation_latency_ms",
    "Roadmap generation latency in milliseconds",
    ["mode", "outcome"],
    buckets=[1, 10, 50, 100, 500, 1000, 2500, 5000, 10000, 30000],
)

submit_rejected_total = Counter(
    "roadmap_submit_rejected_total",
    "Total rejected session submits",
    ["reason"],
)

agent_requests_total = Counter(
    "agent_requests_total",
    "Total remote travel agent requests",
    ["status"],
)


class GenerationMetrics:
    """Interface for generation metrics; no-op by default."""

    def record_latency(self, mode: str, outcome: str, latency_ms: float) -> None:
        """Record generation latency."""
        pass

    def inc_rejected(self, reason: str) -> None:
        """Increment rejected submit counter."""
        pass


class PrometheusGenerationMetrics(GenerationMetrics):
    """Prometheus-based generation metrics implementation."""

    def record_latency(self, mode: str, outcome: str, latency_ms: float) -> None:
        generation_latency_ms.labels(mode=mode, outcome=outcome).observe(latency_ms)

    def inc_rejected(self, reason: str) -> None:
        submit_rejected_total.labels(reason=reason).inc()
