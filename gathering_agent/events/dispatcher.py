# gathering_agent/events/dispatcher.py - Event decoding and routing
"""
Event dispatcher deciding what an incoming event means for this agent.

Execution requests are broadcast to every agent: the dispatcher keeps
only the targets addressed to the local agent, aggregates their fact
requests by gatherer and hands the result to the registered callbacks.
"""

from typing import Callable, List, Optional
import inspect
import logging

from gathering_agent.errors import ConfigurationError
from gathering_agent.events.aggregator import RequestAggregator
from gathering_agent.events.contracts import (
    EXECUTION_REQUESTED_EVENT_TYPE,
    ExecutionRequested,
    decode_event_type,
    decode_payload,
)
from gathering_agent.gatherers.facts import FactsGatheringRequest


class EventDispatcher:
    """
    Routes raw events for a single agent.

    Holds no per-event state, so independent events can be handled
    concurrently.
    """

    def __init__(self, agent_id: str, aggregator: Optional[RequestAggregator] = None):
        """
        Initialize the dispatcher.

        Args:
            agent_id: Identity of the local agent, must not be empty
            aggregator: Request aggregator (a default one if omitted)

        Raises:
            ConfigurationError: If agent_id is empty
        """
        if not agent_id:
            raise ConfigurationError("missing agent_id, cannot create event dispatcher")

        self.agent_id = agent_id
        self.aggregator = aggregator or RequestAggregator()
        self.callbacks: List[Callable] = []

        self.logger = logging.getLogger(__name__)

    def register_callback(self, callback: Callable):
        """
        Register a callback receiving every aggregated request.

        Args:
            callback: Function or coroutine function taking a
                FactsGatheringRequest
        """
        self.callbacks.append(callback)

    async def handle_event(self, raw_event: bytes) -> Optional[FactsGatheringRequest]:
        """
        Decode and route a raw event.

        Args:
            raw_event: Raw event bytes as delivered by the transport

        Returns:
            The aggregated request, or None when the event needs no action

        Raises:
            MalformedEnvelopeError: The envelope could not be decoded
            MalformedPayloadError: The execution request payload is invalid
        """
        event_type = decode_event_type(raw_event)

        if event_type != EXECUTION_REQUESTED_EVENT_TYPE:
            self.logger.warning(f"Unrecognized event type {event_type}, skipping")
            return None

        event = decode_payload(raw_event, ExecutionRequested)
        self.logger.info(
            f"Execution requested event: execution_id {event.execution_id}, "
            f"group_id {event.group_id}"
        )

        targets = [
            target for target in event.domain_targets()
            if target.agent_id == self.agent_id
        ]

        if not targets:
            self.logger.info(
                f"Execution {event.execution_id} has no targets for agent "
                f"{self.agent_id}, skipping"
            )
            return None

        request = self.aggregator.aggregate(targets, event.execution_id, event.group_id)

        for callback in self.callbacks:
            result = callback(request)
            if inspect.isawaitable(result):
                await result

        return request
