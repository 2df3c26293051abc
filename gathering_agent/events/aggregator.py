# gathering_agent/events/aggregator.py - Fact request aggregation
"""
Groups the fact requests of an execution by the gatherer producing them.
"""

from typing import Dict, Iterable, List
import logging

from gathering_agent.gatherers.facts import FactRequest, FactsGatheringRequest, GatheringTarget


class RequestAggregator:
    """
    Flattens the fact requests of a set of targets and buckets them by
    gatherer name.

    Relative order is kept inside each bucket, and identical requests are
    not merged.
    """

    def __init__(self):
        self.logger = logging.getLogger(__name__)

    def aggregate(
        self,
        targets: Iterable[GatheringTarget],
        execution_id: str,
        group_id: str
    ) -> FactsGatheringRequest:
        """
        Build the gathering request for the given targets.

        Args:
            targets: Targets already filtered to the local agent
            execution_id: Execution correlation id
            group_id: Group correlation id

        Returns:
            FactsGatheringRequest with one bucket per gatherer
        """
        requests_by_gatherer: Dict[str, List[FactRequest]] = {}

        for target in targets:
            for fact_request in target.fact_requests:
                requests_by_gatherer.setdefault(fact_request.gatherer, []).append(fact_request)

        self.logger.debug(
            f"Aggregated execution {execution_id} into "
            f"{len(requests_by_gatherer)} gatherer bucket(s)"
        )

        return FactsGatheringRequest(
            execution_id=execution_id,
            group_id=group_id,
            facts_requests_by_gatherer=requests_by_gatherer
        )
