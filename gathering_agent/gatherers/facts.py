# gathering_agent/gatherers/facts.py - Fact data model
"""
Value types exchanged between the dispatcher and the gatherers.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, List, Mapping, Optional, Tuple


@dataclass(frozen=True)
class FactRequest:
    """
    A single fact to collect, the gatherer producing it and its check.
    """
    argument: str
    check_id: str
    gatherer: str
    name: str


@dataclass(frozen=True)
class GatheringTarget:
    """
    One agent's slice of an execution request.
    """
    agent_id: str
    fact_requests: Tuple[FactRequest, ...] = ()


@dataclass(frozen=True)
class FactsGatheringRequest:
    """
    Fact requests for one execution on one agent, grouped by gatherer name.

    Buckets are frozen on construction: a read-only mapping of tuples.
    """
    execution_id: str
    group_id: str
    facts_requests_by_gatherer: Mapping[str, Tuple[FactRequest, ...]] = field(default_factory=dict)

    def __post_init__(self):
        buckets = MappingProxyType({
            gatherer: tuple(requests)
            for gatherer, requests in self.facts_requests_by_gatherer.items()
        })
        object.__setattr__(self, 'facts_requests_by_gatherer', buckets)

    def __hash__(self):
        return hash((
            self.execution_id,
            self.group_id,
            frozenset(self.facts_requests_by_gatherer.items())
        ))

    @property
    def gatherers(self) -> List[str]:
        """Names of the gatherers involved in this request"""
        return list(self.facts_requests_by_gatherer.keys())

    @property
    def total_requests(self) -> int:
        """Number of fact requests across all buckets"""
        return sum(len(requests) for requests in self.facts_requests_by_gatherer.values())

    def for_gatherer(self, gatherer: str) -> 'FactsGatheringRequest':
        """
        Restrict the request to a single gatherer bucket.

        Args:
            gatherer: Bucket key

        Returns:
            New request holding only that bucket (empty if absent)
        """
        requests = self.facts_requests_by_gatherer.get(gatherer)
        buckets = {gatherer: requests} if requests is not None else {}

        return FactsGatheringRequest(
            execution_id=self.execution_id,
            group_id=self.group_id,
            facts_requests_by_gatherer=buckets
        )


@dataclass(frozen=True)
class FactGatheringError:
    """
    Reason a single fact could not be gathered.
    """
    type: str
    message: str


@dataclass
class Fact:
    """
    A gathered fact, or the error that prevented gathering it.
    """
    name: str
    check_id: str
    value: Any = None
    error: Optional[FactGatheringError] = None

    @property
    def failed(self) -> bool:
        return self.error is not None


@dataclass
class FactsGathered:
    """
    Facts produced by one gatherer for one execution.
    """
    agent_id: str
    execution_id: str
    group_id: str
    facts_gathered: List[Fact] = field(default_factory=list)

    @property
    def errors(self) -> List[Fact]:
        """Facts that could not be gathered"""
        return [fact for fact in self.facts_gathered if fact.failed]
