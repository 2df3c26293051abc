# gathering_agent/gatherers/runner.py - Gatherer invocation
"""
Runs the gatherers named in a gathering request.

Each bucket is resolved through the registry and sent to its gatherer;
gatherers run concurrently.
"""

from typing import List
import asyncio
import logging

from gathering_agent.errors import RegistryError
from gathering_agent.gatherers.base import Gatherer
from gathering_agent.gatherers.facts import (
    Fact,
    FactGatheringError,
    FactsGathered,
    FactsGatheringRequest,
)
from gathering_agent.gatherers.registry import GatherersRegistry


class GatheringRunner:
    """
    Resolves and invokes the gatherers of a FactsGatheringRequest.
    """

    def __init__(self, registry: GatherersRegistry, agent_id: str):
        """
        Initialize the runner.

        Args:
            registry: Registry used to resolve bucket names
            agent_id: Local agent id, stamped on synthesized results
        """
        self.registry = registry
        self.agent_id = agent_id
        self.logger = logging.getLogger(__name__)

    async def run(self, request: FactsGatheringRequest) -> List[FactsGathered]:
        """
        Invoke every resolvable gatherer with its own bucket.

        Buckets whose gatherer cannot be resolved yield their facts with
        the registry error attached.

        Args:
            request: Aggregated gathering request

        Returns:
            One FactsGathered per bucket, in bucket order
        """
        calls = []

        for reference in request.gatherers:
            bucket = request.for_gatherer(reference)
            try:
                gatherer = self.registry.resolve(reference)
            except RegistryError as e:
                self.logger.error(f"Cannot gather facts for {reference}: {e}")
                calls.append(self._unresolved(reference, bucket, e))
            else:
                calls.append(self._gather(reference, gatherer, bucket))

        results = await asyncio.gather(*calls)

        failed = sum(1 for gathered in results if gathered.errors)
        self.logger.info(
            f"Execution {request.execution_id}: {len(results)} gatherer(s) run, "
            f"{failed} with errors"
        )
        return list(results)

    async def _unresolved(
        self,
        reference: str,
        request: FactsGatheringRequest,
        exc: RegistryError
    ) -> FactsGathered:
        return self._failed(request, reference, exc)

    async def _gather(
        self,
        reference: str,
        gatherer: Gatherer,
        request: FactsGatheringRequest
    ) -> FactsGathered:
        try:
            gathered = await gatherer.gather(request)
            if not isinstance(gathered, FactsGathered):
                raise TypeError(f"returned {type(gathered).__name__}, expected FactsGathered")
            return gathered
        except Exception as e:
            self.logger.error(f"Gatherer {reference} failed: {e}")
            return self._failed(request, reference, e)

    def _failed(
        self,
        request: FactsGatheringRequest,
        reference: str,
        exc: Exception
    ) -> FactsGathered:
        error = FactGatheringError(type=type(exc).__name__, message=str(exc))

        return FactsGathered(
            agent_id=self.agent_id,
            execution_id=request.execution_id,
            group_id=request.group_id,
            facts_gathered=[
                Fact(name=fact_request.name, check_id=fact_request.check_id, error=error)
                for fact_request in request.facts_requests_by_gatherer.get(reference, [])
            ]
        )
