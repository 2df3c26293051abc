# tests/conftest.py - Shared test helpers
"""
Fake gatherers and event builders shared by the test suite.
"""

import json
from typing import Dict, List, Optional

import pytest

from gathering_agent.events.contracts import EXECUTION_REQUESTED_EVENT_TYPE
from gathering_agent.gatherers.base import Gatherer
from gathering_agent.gatherers.facts import Fact, FactsGathered, FactsGatheringRequest


class FakeGatherer(Gatherer):
    """Gatherer echoing each fact request argument as the fact value"""

    def __init__(self, name: str = "fake", fail_with: Optional[Exception] = None):
        self._name = name
        self.fail_with = fail_with
        self.requests: List[FactsGatheringRequest] = []

    def name(self) -> str:
        return self._name

    async def gather(self, request: FactsGatheringRequest) -> FactsGathered:
        self.requests.append(request)
        if self.fail_with:
            raise self.fail_with

        return FactsGathered(
            agent_id="agent_1",
            execution_id=request.execution_id,
            group_id=request.group_id,
            facts_gathered=[
                Fact(name=fact_request.name, check_id=fact_request.check_id, value=fact_request.argument)
                for fact_requests in request.facts_requests_by_gatherer.values()
                for fact_request in fact_requests
            ]
        )


def fact_request(gatherer: str, name: str, check_id: str = "check1", argument: str = "") -> Dict:
    return {'argument': argument, 'check_id': check_id, 'gatherer': gatherer, 'name': name}


def make_event(data, event_type: str = EXECUTION_REQUESTED_EVENT_TYPE) -> bytes:
    envelope = {'specversion': '1.0', 'id': 'event-1', 'source': 'tests', 'type': event_type}
    if data is not None:
        envelope['data'] = data
    return json.dumps(envelope).encode('utf-8')


@pytest.fixture
def execution_requested():
    """Execution request addressing agent_1 twice and agent_2 once"""
    return {
        'execution_id': 'exec1',
        'group_id': 'group1',
        'targets': [
            {
                'agent_id': 'agent_1',
                'fact_requests': [fact_request('disk', 'size'), fact_request('disk', 'free')],
            },
            {
                'agent_id': 'agent_2',
                'fact_requests': [fact_request('memory', 'total')],
            },
            {
                'agent_id': 'agent_1',
                'fact_requests': [fact_request('disk', 'mount'), fact_request('cpu', 'cores')],
            },
        ],
    }
