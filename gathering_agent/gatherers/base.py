# gathering_agent/gatherers/base.py - Gatherer capability
"""
Abstract capability every fact gatherer implements.
"""

from abc import ABC, abstractmethod

from gathering_agent.gatherers.facts import FactsGatheringRequest, FactsGathered


class Gatherer(ABC):
    """
    A backend able to collect one category of facts.

    Instances are shared: the registry hands out the same object to every
    caller, so gather() may run concurrently for several requests.
    Implementations own any synchronization they need.
    """

    @abstractmethod
    def name(self) -> str:
        """
        Human readable gatherer name.

        Not required to match the name the gatherer is registered under.
        """

    @abstractmethod
    async def gather(self, request: FactsGatheringRequest) -> FactsGathered:
        """
        Collect the facts requested in its bucket of the request.

        Args:
            request: Gathering request restricted to this gatherer

        Returns:
            Gathered facts, failed facts carrying a FactGatheringError
        """
