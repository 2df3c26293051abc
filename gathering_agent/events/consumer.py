# gathering_agent/events/consumer.py - Event consumption
"""
Message adapter feeding raw deliveries to the dispatcher.

Every delivery is acknowledged whatever the outcome: failed events are
logged and never redelivered.
"""

from typing import Callable, Dict, Iterable, Optional
import logging
import time

from gathering_agent.errors import GatheringAgentError
from gathering_agent.events.dispatcher import EventDispatcher
from gathering_agent.exporters.prometheus import PrometheusExporter


class EventConsumer:
    """
    Consumes raw event bodies and reports their outcome.
    """

    def __init__(self, dispatcher: EventDispatcher, exporter: Optional[PrometheusExporter] = None):
        """
        Initialize the consumer.

        Args:
            dispatcher: Dispatcher handling each event
            exporter: Optional metrics exporter
        """
        self.dispatcher = dispatcher
        self.exporter = exporter
        self.logger = logging.getLogger(__name__)

    async def consume(self, body: bytes, ack: Optional[Callable] = None) -> bool:
        """
        Handle one delivery and acknowledge it.

        Args:
            body: Raw event bytes
            ack: Acknowledgement callback of the transport

        Returns:
            True if the event was processed, False if it failed
        """
        start = time.perf_counter()

        try:
            request = await self.dispatcher.handle_event(body)
        except GatheringAgentError as e:
            self.logger.error(f"Error during event processing: {e}")
            self._record('failed', start)
            return False
        except Exception as e:
            self.logger.exception(f"Unexpected error during event processing: {e}")
            self._record('failed', start)
            return False
        else:
            self.logger.debug(f"Processed event ({len(body)} bytes)")
            self._record('processed', start)
            if request is not None and self.exporter:
                self.exporter.record_request(request)
            return True
        finally:
            if ack is not None:
                ack()

    async def run(self, bodies: Iterable[bytes]) -> Dict[str, int]:
        """
        Consume a sequence of deliveries in order.

        Args:
            bodies: Raw event bodies

        Returns:
            Tally of processed and failed events
        """
        tally = {'processed': 0, 'failed': 0}

        for body in bodies:
            if await self.consume(body):
                tally['processed'] += 1
            else:
                tally['failed'] += 1

        self.logger.info(f"Consumed {sum(tally.values())} event(s): {tally}")
        return tally

    def _record(self, outcome: str, start: float):
        if self.exporter:
            self.exporter.record_event(outcome, time.perf_counter() - start)
