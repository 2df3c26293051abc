# tests/test_consumer.py - Tests for event consumer
"""
Unit tests for the EventConsumer class.
"""

from unittest.mock import Mock

import pytest

from gathering_agent.events.consumer import EventConsumer
from gathering_agent.events.dispatcher import EventDispatcher
from gathering_agent.exporters.prometheus import PrometheusExporter

from conftest import make_event


class TestEventConsumer:
    """Test cases for EventConsumer"""

    @pytest.mark.asyncio
    async def test_consume_acks_processed_event(self, execution_requested):
        """Test a processed event is acknowledged"""
        ack = Mock()
        consumer = EventConsumer(EventDispatcher("agent_1"))

        assert await consumer.consume(make_event(execution_requested), ack) is True
        ack.assert_called_once_with()

    @pytest.mark.asyncio
    async def test_consume_acks_failed_event(self):
        """Test a malformed event is still acknowledged"""
        ack = Mock()
        consumer = EventConsumer(EventDispatcher("agent_1"))

        assert await consumer.consume(b"garbage", ack) is False
        ack.assert_called_once_with()

    @pytest.mark.asyncio
    async def test_run_tallies_outcomes(self, execution_requested):
        """Test running over several deliveries"""
        consumer = EventConsumer(EventDispatcher("agent_9"))
        bodies = [
            make_event(execution_requested),
            b"garbage",
            make_event({}, event_type="Unknown.Event"),
            make_event({'execution_id': 'exec1'}),
        ]

        tally = await consumer.run(bodies)

        assert tally == {'processed': 2, 'failed': 2}

    @pytest.mark.asyncio
    async def test_metrics_recorded(self, execution_requested):
        """Test outcomes and fact requests are exported"""
        exporter = PrometheusExporter()
        consumer = EventConsumer(EventDispatcher("agent_1"), exporter=exporter)

        await consumer.run([make_event(execution_requested), b"garbage"])

        registry = exporter.registry
        assert registry.get_sample_value('gathering_agent_events_total', {'outcome': 'processed'}) == 1
        assert registry.get_sample_value('gathering_agent_events_total', {'outcome': 'failed'}) == 1
        assert registry.get_sample_value('gathering_agent_fact_requests_total', {'gatherer': 'disk'}) == 3
        assert registry.get_sample_value('gathering_agent_fact_requests_total', {'gatherer': 'cpu'}) == 1
        assert 'gathering_agent_event_handling_seconds' in exporter.get_metrics_text()

    @pytest.mark.asyncio
    async def test_unexpected_error_does_not_stop_consumption(self, execution_requested):
        """Test a failing callback fails its own event only"""
        ack = Mock()
        exporter = PrometheusExporter()
        dispatcher = EventDispatcher("agent_1")
        dispatcher.register_callback(Mock(side_effect=AttributeError("boom")))
        consumer = EventConsumer(dispatcher, exporter=exporter)

        assert await consumer.consume(make_event(execution_requested), ack) is False
        ack.assert_called_once_with()

        tally = await consumer.run([make_event(execution_requested), make_event(execution_requested)])

        assert tally == {'processed': 0, 'failed': 2}
        assert exporter.registry.get_sample_value('gathering_agent_events_total', {'outcome': 'failed'}) == 3

    @pytest.mark.asyncio
    async def test_deeply_nested_event_is_failed(self):
        """Test an event too deep to decode is reported as failed"""
        consumer = EventConsumer(EventDispatcher("agent_1"))

        tally = await consumer.run([b"[" * 200000, b"garbage"])

        assert tally == {'processed': 0, 'failed': 2}
