# gathering_agent/exporters/prometheus.py - Prometheus metrics exporter
"""
Exports agent metrics in Prometheus format.
Provides HTTP endpoint for Prometheus to scrape.
"""

from prometheus_client import CollectorRegistry, Counter, Histogram, generate_latest, start_http_server
from typing import Optional
import logging

from gathering_agent.gatherers.facts import FactsGatheringRequest


class PrometheusExporter:
    """
    Exports event handling metrics to Prometheus.

    Each exporter owns its own CollectorRegistry.
    """

    def __init__(self, port: int = 9090, registry: Optional[CollectorRegistry] = None):
        """
        Initialize the Prometheus exporter.

        Args:
            port: Port to expose metrics on
            registry: Collector registry (a private one if omitted)
        """
        self.port = port
        self.registry = registry or CollectorRegistry()
        self.logger = logging.getLogger(__name__)

        self.events_total = Counter(
            'gathering_agent_events_total',
            'Total number of consumed events',
            ['outcome'],
            registry=self.registry
        )

        self.fact_requests_total = Counter(
            'gathering_agent_fact_requests_total',
            'Total number of fact requests addressed to this agent',
            ['gatherer'],
            registry=self.registry
        )

        self.event_handling_seconds = Histogram(
            'gathering_agent_event_handling_seconds',
            'Time spent handling a single event',
            buckets=[0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1, 5],
            registry=self.registry
        )

    def start(self):
        """
        Start the Prometheus HTTP server.
        """
        try:
            start_http_server(self.port, registry=self.registry)
            self.logger.info(f"Prometheus metrics available at http://localhost:{self.port}/metrics")
        except Exception as e:
            self.logger.error(f"Failed to start Prometheus server: {e}")
            raise

    def record_event(self, outcome: str, duration_s: float):
        """
        Record a consumed event.

        Args:
            outcome: 'processed' or 'failed'
            duration_s: Handling time in seconds
        """
        self.events_total.labels(outcome=outcome).inc()
        self.event_handling_seconds.observe(duration_s)

    def record_request(self, request: FactsGatheringRequest):
        """
        Record the fact requests of an aggregated request.

        Args:
            request: Aggregated gathering request
        """
        for gatherer, requests in request.facts_requests_by_gatherer.items():
            self.fact_requests_total.labels(gatherer=gatherer).inc(len(requests))

    def get_metrics_text(self) -> str:
        """
        Get current metrics in Prometheus text format.

        Returns:
            Metrics as text
        """
        return generate_latest(self.registry).decode('utf-8')
